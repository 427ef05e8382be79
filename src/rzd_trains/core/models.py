"""Data models for RZD train search."""

import json
from collections.abc import Iterable, Iterator, Sequence
from datetime import date, datetime, time, timedelta
from enum import IntEnum
from typing import Any, Generic, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    RootModel,
    computed_field,
    model_serializer,
    model_validator,
)

from ..utils.timeformat import format_upstream_date, parse_upstream_value
from .exceptions import DecodeError, InvalidDate, InvalidStationCode


class StationCode(RootModel[int]):
    """Digital designation of a station assigned by RZD."""

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_positive(self) -> "StationCode":
        if self.root <= 0:
            raise InvalidStationCode(f"Station code must be positive, got {self.root}")
        return self

    @classmethod
    def parse(cls, text: str) -> "StationCode":
        """Create a station code from its decimal representation."""
        try:
            value = int(str(text).strip())
        except ValueError as e:
            raise InvalidStationCode(f"Invalid station code: {text!r}") from e
        return cls(value)

    def __int__(self) -> int:
        return self.root

    def __str__(self) -> str:
        return str(self.root)


class TrainDate(BaseModel):
    """Date of departure or arrival of a train."""

    model_config = ConfigDict(frozen=True)

    year: int
    month: int
    day: int

    def __init__(self, year: int, month: int, day: int) -> None:
        super().__init__(year=year, month=month, day=day)

    @model_validator(mode="after")
    def _check_calendar_date(self) -> "TrainDate":
        try:
            date(self.year, self.month, self.day)
        except (ValueError, OverflowError) as e:
            raise InvalidDate(
                f"{self.year}-{self.month:02}-{self.day:02} is not a valid date: {e}"
            ) from e
        return self

    @classmethod
    def from_date(cls, value: date) -> "TrainDate":
        """Create a train date from a datetime.date or datetime.datetime."""
        if isinstance(value, datetime):
            value = value.date()
        return cls(value.year, value.month, value.day)

    @classmethod
    def parse(cls, text: str) -> "TrainDate":
        """Create a train date from the DD.MM.YYYY form used by RZD."""
        try:
            parsed = parse_upstream_value(text, "date")
        except DecodeError as e:
            raise InvalidDate(str(e)) from e
        assert isinstance(parsed, date)
        return cls.from_date(parsed)

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    @model_serializer
    def _serialize(self) -> str:
        return str(self)

    def __str__(self) -> str:
        return format_upstream_date(self.to_date())


class TrainType(IntEnum):
    """Kind of trains to search for, with the codes RZD expects."""

    TRAIN = 1  # long-distance trains
    ELECTRIC_TRAIN = 2  # suburban electric trains
    ALL_TRAINS = 3

    @property
    def code(self) -> str:
        return str(self.value)


class RouteDirection(IntEnum):
    """Direction of the requested route."""

    ONE_WAY = 0
    ROUND_TRIP = 1


def format_clock(value: time | None) -> str:
    """Format a time as HH:MM, or "-" when unknown."""
    return value.strftime("%H:%M") if value is not None else "-"


def format_duration(value: timedelta | None) -> str:
    """Format a duration as H:MM, hours may exceed 23."""
    if value is None:
        return "-"
    minutes = int(value.total_seconds()) // 60
    return f"{minutes // 60}:{minutes % 60:02}"


class SeatsInfo(BaseModel):
    """Free seats of one car class on a scheduled train."""

    model_config = ConfigDict(frozen=True)

    seats_type: str = Field(..., description="Car type, e.g. 'Купе'")
    free_seats: int | None = Field(None, description="Number of free seats")
    tariff: int | None = Field(None, description="Lowest price in roubles")
    service_class: str | None = Field(None, description="Service class code")

    def __str__(self) -> str:
        free = "?" if self.free_seats is None else str(self.free_seats)
        text = f"{self.seats_type}: {free} мест"
        if self.tariff is not None:
            text += f", от {self.tariff} р."
        return text


class Route(BaseModel):
    """One train found by a schedule search."""

    model_config = ConfigDict(frozen=True)

    train_number: str = Field(..., description="Train number, e.g. '119А'")
    brand: str | None = Field(None, description="Brand name, e.g. 'ЛАСТОЧКА'")
    carrier: str | None = Field(None, description="Carrier company")
    route_from: str | None = Field(None, description="First station of the train")
    route_from_code: StationCode | None = None
    route_to: str | None = Field(None, description="Last station of the train")
    route_to_code: StationCode | None = None
    departure_station: str = Field(..., description="Station the trip starts at")
    departure_date: TrainDate
    departure_time: time
    arrival_station: str = Field(..., description="Station the trip ends at")
    arrival_date: TrainDate | None = None
    arrival_time: time | None = None
    duration: timedelta | None = Field(None, description="Time on the way")
    stops: str | None = Field(None, description="Stops of a suburban train")
    seats: tuple[SeatsInfo, ...] = Field(
        default=(), description="Free seats, filled when seats were requested"
    )

    def __str__(self) -> str:
        header = f'Поезд № "{self.train_number}"'
        if self.brand:
            header += f" {self.brand}"
        if self.carrier:
            header += f" {self.carrier}"
        lines = [header]
        if self.route_from and self.route_to:
            lines.append(f'по маршруту "{self.route_from}" - "{self.route_to}"')
        lines.append(
            f'\tотправление от "{self.departure_station}": '
            f"{self.departure_date} {format_clock(self.departure_time)}"
        )
        arrival_date = str(self.arrival_date) if self.arrival_date else ""
        lines.append(
            f'\tприбытие в "{self.arrival_station}": '
            f"{arrival_date} {format_clock(self.arrival_time)}".rstrip()
        )
        lines.append(f"\tвремя в пути: {format_duration(self.duration)}")
        if self.stops:
            lines.append(f"\tостановки: {self.stops}")
        for seats in self.seats:
            lines.append(f"\t\t{seats}")
        return "\n".join(lines)


class CarSeats(BaseModel):
    """Group of seats of one kind in a train car."""

    model_config = ConfigDict(frozen=True)

    label: str
    free_seats: int | None = None
    tariff: int | None = None

    def __str__(self) -> str:
        free = "?" if self.free_seats is None else str(self.free_seats)
        price = "" if self.tariff is None else f" по {self.tariff} р."
        return f"{free} {self.label}{price}"


class InsuranceInfo(BaseModel):
    """Insurance offered with a ticket."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str | None = None
    price: int | None = None

    def __str__(self) -> str:
        price = "" if self.price is None else f", {self.price} р."
        url = f" ({self.url})" if self.url else ""
        return f"{self.name}{price}{url}"


class TrainCar(BaseModel):
    """Car of a train with its prices and free seats."""

    model_config = ConfigDict(frozen=True)

    number: str = Field(..., description="Car number, e.g. '01'")
    car_type: str | None = Field(None, description="Car type, e.g. 'Купе'")
    service_class: str | None = Field(None, description="Service class, e.g. '2Э'")
    services: tuple[str, ...] = ()
    tariff: int | None = Field(None, description="Ticket price in roubles")
    tariff2: int | None = Field(None, description="Upper bound of the ticket price")
    tariff_service: int | None = Field(None, description="Price of services")
    carrier: str | None = None
    insurance: InsuranceInfo | None = None
    seats: tuple[CarSeats, ...] = ()
    places: str | None = Field(None, description="Free place numbers")

    def __str__(self) -> str:
        lines = [f"Вагон {self.number}, {self.car_type or '-'}, класс {self.service_class or '-'}:"]
        if self.services:
            lines.append(f"\tуслуги: {', '.join(self.services)}")
        if self.tariff is not None:
            lines.append(f"\tтариф: {self.tariff} р.")
        if self.tariff2 is not None:
            lines.append(f"\tтариф до: {self.tariff2} р.")
        if self.tariff_service is not None:
            lines.append(f"\tсервис: {self.tariff_service} р.")
        if self.insurance is not None:
            lines.append(f"\tстраховка: {self.insurance}")
        if self.places:
            lines.append(f"\tместа: {self.places}")
        for seats in self.seats:
            lines.append(f"\t\t{seats}")
        return "\n".join(lines)


class TrainItem(BaseModel):
    """Seat availability of one train."""

    model_config = ConfigDict(frozen=True)

    train_number: str
    departure_station: str
    departure_code: StationCode | None = None
    departure_date: TrainDate | None = None
    departure_time: time | None = None
    arrival_station: str
    arrival_code: StationCode | None = None
    arrival_date: TrainDate | None = None
    arrival_time: time | None = None
    cars: tuple[TrainCar, ...] = ()

    def __str__(self) -> str:
        lines = [
            f'Поезд № "{self.train_number}"',
            f'Станция отправления: "{self.departure_station}" {self.departure_code or ""}'.rstrip(),
            f'Станция прибытия: "{self.arrival_station}" {self.arrival_code or ""}'.rstrip(),
        ]
        lines.extend(str(car) for car in self.cars)
        return "\n".join(lines)


class StationItem(BaseModel):
    """Correspondence between a station name and its code."""

    model_config = ConfigDict(frozen=True)

    code: StationCode
    name: str

    def __str__(self) -> str:
        return f"{self.code} - {self.name}"


class TripStop(BaseModel):
    """Stop of a train along its route."""

    model_config = ConfigDict(frozen=True)

    station: str
    code: StationCode | None = None
    days: int | None = Field(None, description="Days passed since departure")
    arrival_time: time | None = None
    departure_time: time | None = None
    distance: int | None = Field(None, description="Kilometres from the origin")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def stop_duration(self) -> timedelta | None:
        """Time the train stands at the station."""
        if self.arrival_time is None or self.departure_time is None:
            return None
        arrival = timedelta(hours=self.arrival_time.hour, minutes=self.arrival_time.minute)
        departure = timedelta(
            hours=self.departure_time.hour, minutes=self.departure_time.minute
        )
        if departure < arrival:
            departure += timedelta(days=1)
        return departure - arrival

    def __str__(self) -> str:
        text = f'\t"{self.station}"'
        if self.code is not None:
            text += f" {self.code}"
        if self.arrival_time is not None:
            text += f", прибытие - {format_clock(self.arrival_time)}"
        if self.departure_time is not None:
            text += f", отправление - {format_clock(self.departure_time)}"
        if self.stop_duration:
            text += f", стоянка {format_duration(self.stop_duration)}"
        if self.distance is not None:
            text += f", {self.distance} км"
        if self.days is not None:
            text += f", в пути {self.days} дн."
        return text


T = TypeVar("T", bound=BaseModel)


class ResultList(Sequence, Generic[T]):
    """Immutable ordered list of records returned by the server."""

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: tuple[T, ...] = tuple(items)

    def __getitem__(self, index: Any) -> Any:
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._items == other._items  # type: ignore[attr-defined]

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._items)!r})"

    def __str__(self) -> str:
        return "\n".join(str(item) for item in self._items)

    def to_list(self) -> list[T]:
        return list(self._items)

    def to_dicts(self) -> list[dict[str, Any]]:
        """Convert records to JSON-compatible dictionaries."""
        return [item.model_dump(mode="json") for item in self._items]

    def to_json(self, indent: int | None = None) -> str:
        """Format the records as a JSON array."""
        return json.dumps(self.to_dicts(), ensure_ascii=False, indent=indent)


class RouteList(ResultList[Route]):
    """Trains found by a schedule search."""


class TrainInfoList(ResultList[TrainItem]):
    """Seat availability of the searched train."""


class StationList(ResultList[StationItem]):
    """Stations found by a part of the name."""


class RouteDetail(ResultList[TripStop]):
    """Stops of a train in the order it passes them."""

    def __init__(self, items: Iterable[TripStop] = (), train_number: str | None = None):
        super().__init__(items)
        self.train_number = train_number

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RouteDetail):
            return NotImplemented
        return (
            self.train_number == other.train_number and self._items == other._items
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"RouteDetail({list(self._items)!r}, train_number={self.train_number!r})"

    def __str__(self) -> str:
        header = f'Остановки поезда № "{self.train_number or "?"}":'
        return "\n".join([header, *(str(stop) for stop in self._items)])

    def to_json(self, indent: int | None = None) -> str:
        data = {"train_number": self.train_number, "stops": self.to_dicts()}
        return json.dumps(data, ensure_ascii=False, indent=indent)
