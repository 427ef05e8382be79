"""Decoders turning RZD JSON replies into records.

Every decoder takes the parsed JSON tree of a reply and the query it
answers, and returns one of the outcomes below. Envelope problems end the
decoding at once; a broken record only drops that record and leaves a
warning behind.
"""

import logging
import math
from collections.abc import Callable, Iterable
from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ..utils.text import matches_word_prefix, normalize_message
from ..utils.timeformat import ValueKind, parse_upstream_value
from .exceptions import DecodeError
from .models import (
    CarSeats,
    InsuranceInfo,
    Route,
    SeatsInfo,
    StationCode,
    StationItem,
    TrainCar,
    TrainDate,
    TrainItem,
    TripStop,
)
from .queries import StationCodeSearch, TrainScheduleSearch, TrainSearch, TripStopsSearch

logger = logging.getLogger(__name__)


class EmptyOutcome(BaseModel):
    """The server recognisably found nothing."""

    model_config = ConfigDict(frozen=True)


class PartialOutcome(BaseModel):
    """At least one record was decoded."""

    model_config = ConfigDict(frozen=True)

    records: tuple[Any, ...] = Field(..., description="Records in server order")
    warnings: tuple[str, ...] = Field(default=(), description="Dropped records")
    train_number: str | None = Field(
        None, description="Train number reported along with route stops"
    )


class RejectedOutcome(BaseModel):
    """The server answered with its own error messages."""

    model_config = ConfigDict(frozen=True)

    messages: tuple[str, ...] = ()


class FatalOutcome(BaseModel):
    """The reply does not look like anything the endpoint sends."""

    model_config = ConfigDict(frozen=True)

    reason: str


DecodeOutcome = EmptyOutcome | PartialOutcome | RejectedOutcome | FatalOutcome


class _RecordSkipped(Exception):
    """A required field of a record is missing or unusable."""

    pass


def read_request_id(payload: Any) -> int | None:
    """Extract the request id from the first reply of a two-step request.

    Timetable layers answer with {"result": "RID", "RID": n}, the route
    layer with {"type": "REQUEST_ID", "rid": n}.

    Returns:
        The request id, or None if the reply carries no request id
    """
    if not isinstance(payload, dict):
        return None

    if payload.get("result") == "RID":
        value = payload.get("RID", payload.get("rid"))
    elif payload.get("type") == "REQUEST_ID":
        value = payload.get("rid")
    else:
        return None

    request_id = _to_int(value)
    if request_id is None or request_id <= 0:
        return None
    return request_id


def _to_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            value = float(text)
        except ValueError:
            return None
    if isinstance(value, float):
        # Non-finite or fractional numbers have no exact integer reading
        if not math.isfinite(value) or not value.is_integer():
            logger.debug(f"Ignoring non-integral number {value!r}")
            return None
        return int(value)
    return None


def _required_str(item: dict[str, Any], key: str) -> str:
    value = item.get(key)
    if not isinstance(value, str) or not value.strip():
        raise _RecordSkipped(f"missing {key!r}")
    return value


def _optional_str(item: dict[str, Any], key: str) -> str | None:
    value = item.get(key)
    if isinstance(value, str) and value.strip():
        return value
    return None


def _optional_int(item: dict[str, Any], key: str) -> int | None:
    return _to_int(item.get(key))


def _optional_code(item: dict[str, Any], key: str) -> StationCode | None:
    value = _optional_int(item, key)
    if value is None or value <= 0:
        return None
    return StationCode(value)


def _required_value(item: dict[str, Any], key: str, kind: ValueKind) -> Any:
    try:
        return parse_upstream_value(item.get(key), kind)
    except DecodeError as e:
        raise _RecordSkipped(f"{key!r}: {e}") from e


def _optional_value(item: dict[str, Any], key: str, kind: ValueKind) -> Any:
    value = item.get(key)
    if value is None or value == "":
        return None
    try:
        return parse_upstream_value(value, kind)
    except DecodeError as e:
        logger.debug(f"Ignoring {key!r}: {e}")
        return None


def _to_train_date(value: date | None) -> TrainDate | None:
    return TrainDate.from_date(value) if value is not None else None


def _collect_messages(values: Iterable[Any]) -> list[str]:
    """Normalize server messages, dropping blank ones."""
    messages = []
    for value in values:
        if isinstance(value, dict):
            value = value.get("message")
        if isinstance(value, str):
            message = normalize_message(value)
            if message:
                messages.append(message)
    return messages


def _as_list(value: Any) -> list[Any] | None:
    """Return a JSON list, treating a missing value as an empty one."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return None


def _decode_records(
    items: Iterable[Any],
    decode_one: Callable[[dict[str, Any]], Any],
    label: str,
) -> tuple[list[Any], list[str]]:
    """Decode records one by one, dropping the broken ones."""
    records: list[Any] = []
    warnings: list[str] = []

    for index, item in enumerate(items):
        if not isinstance(item, dict):
            reason = "not an object"
        else:
            try:
                records.append(decode_one(item))
                continue
            except _RecordSkipped as e:
                reason = str(e)
            except PydanticValidationError as e:
                reason = f"{e.error_count()} invalid field(s)"

        warning = f"{label} #{index} skipped: {reason}"
        logger.warning(warning)
        warnings.append(warning)

    return records, warnings


def _outcome(
    records: list[Any], warnings: list[str], train_number: str | None = None
) -> DecodeOutcome:
    if not records:
        logger.debug("No records survived decoding")
        return EmptyOutcome()
    return PartialOutcome(
        records=tuple(records), warnings=tuple(warnings), train_number=train_number
    )


def _rejected_or_empty(
    messages: list[str], empty_markers: Iterable[str]
) -> DecodeOutcome:
    markers = {normalize_message(marker) for marker in empty_markers}
    unexpected = [message for message in messages if message not in markers]
    if unexpected:
        logger.debug(f"Server rejected the query: {unexpected}")
        return RejectedOutcome(messages=tuple(unexpected))
    return EmptyOutcome()


def _check_timetable_result(payload: Any, name: str) -> DecodeOutcome | None:
    """Validate the common timetable envelope.

    Returns:
        An outcome ending the decoding, or None if the reply is "OK"
    """
    if not isinstance(payload, dict):
        return FatalOutcome(reason=f"{name} reply is not a JSON object")

    result = payload.get("result")
    if result == "OK":
        return None
    if result == "FAIL":
        return RejectedOutcome(messages=tuple(_collect_messages([payload.get("error")])))
    if result == "RID":
        return FatalOutcome(reason=f"{name} reply still carries a request id")
    if result is None:
        return FatalOutcome(reason=f"{name} reply has no result")
    return FatalOutcome(reason=f"{name} reply has unknown result {result!r}")


def _decode_seats_info(car: dict[str, Any]) -> SeatsInfo:
    seats_type = _optional_str(car, "typeLoc") or _required_str(car, "type")
    return SeatsInfo(
        seats_type=seats_type,
        free_seats=_optional_int(car, "freeSeats"),
        tariff=_optional_int(car, "tariff"),
        service_class=_optional_str(car, "servCls"),
    )


def _decode_route(item: dict[str, Any], with_seats: bool) -> Route:
    seats: list[SeatsInfo] = []
    if with_seats:
        cars = _as_list(item.get("cars")) or []
        seats, _ = _decode_records(cars, _decode_seats_info, "car")

    return Route(
        train_number=_required_str(item, "number"),
        brand=_optional_str(item, "brand"),
        carrier=_optional_str(item, "carrier"),
        route_from=_optional_str(item, "route0"),
        route_from_code=_optional_code(item, "routeCode0"),
        route_to=_optional_str(item, "route1"),
        route_to_code=_optional_code(item, "routeCode1"),
        departure_station=_required_str(item, "station0"),
        departure_date=TrainDate.from_date(_required_value(item, "date0", "date")),
        departure_time=_required_value(item, "time0", "time"),
        arrival_station=_required_str(item, "station1"),
        arrival_date=_to_train_date(_optional_value(item, "date1", "date")),
        arrival_time=_optional_value(item, "time1", "time"),
        duration=_optional_value(item, "timeInWay", "duration"),
        stops=_optional_str(item, "stList"),
        seats=tuple(seats),
    )


def decode_route_list(
    payload: Any, query: TrainScheduleSearch, empty_markers: Iterable[str] = ()
) -> DecodeOutcome:
    """Decode a schedule reply into Route records.

    Trains of every route group are returned in one flat list.
    """
    failed = _check_timetable_result(payload, "schedule")
    if failed is not None:
        return failed

    groups = _as_list(payload.get("tp"))
    if groups is None:
        return FatalOutcome(reason="schedule reply has a malformed 'tp'")
    if not groups:
        return EmptyOutcome()

    trains: list[Any] = []
    messages: list[str] = []
    for group in groups:
        if not isinstance(group, dict):
            return FatalOutcome(reason="schedule route group is not an object")
        items = _as_list(group.get("list"))
        if items is None:
            return FatalOutcome(reason="schedule route group has a malformed 'list'")
        trains.extend(items)
        messages.extend(_collect_messages(_as_list(group.get("msgList")) or []))

    if not trains:
        return _rejected_or_empty(messages, empty_markers)

    with_seats = query.check_seats and query.needs_request_id
    records, warnings = _decode_records(
        trains, lambda item: _decode_route(item, with_seats), "train"
    )
    return _outcome(records, warnings)


def _read_insurance(payload: dict[str, Any]) -> dict[int, InsuranceInfo]:
    offers: dict[int, InsuranceInfo] = {}
    for company in _as_list(payload.get("insuranceCompany")) or []:
        if not isinstance(company, dict):
            continue
        company_id = _optional_int(company, "id")
        name = _optional_str(company, "shortName")
        if company_id is None or name is None:
            continue
        offers[company_id] = InsuranceInfo(
            name=name,
            url=_optional_str(company, "offerUrl"),
            price=_optional_int(company, "insuranceCost"),
        )
    return offers


def _decode_car_seats(item: dict[str, Any]) -> CarSeats:
    return CarSeats(
        label=_required_str(item, "label"),
        free_seats=_optional_int(item, "free"),
        tariff=_optional_int(item, "tariff"),
    )


def _decode_train_car(
    item: dict[str, Any], insurance: dict[int, InsuranceInfo]
) -> TrainCar:
    services = []
    for service in _as_list(item.get("services")) or []:
        if isinstance(service, dict):
            description = _optional_str(service, "description")
            if description:
                services.append(description)

    seats, _ = _decode_records(
        _as_list(item.get("seats")) or [], _decode_car_seats, "seats"
    )
    insurance_id = _optional_int(item, "insuranceTypeId")

    return TrainCar(
        number=_required_str(item, "cnumber"),
        car_type=_optional_str(item, "typeLoc"),
        service_class=_optional_str(item, "clsType"),
        services=tuple(services),
        tariff=_optional_int(item, "tariff"),
        tariff2=_optional_int(item, "tariff2"),
        tariff_service=_optional_int(item, "tariffServ"),
        carrier=_optional_str(item, "carrier"),
        insurance=insurance.get(insurance_id) if insurance_id is not None else None,
        seats=tuple(seats),
        places=_optional_str(item, "places"),
    )


def decode_train_info_list(
    payload: Any, query: TrainSearch, empty_markers: Iterable[str] = ()
) -> DecodeOutcome:
    """Decode a seat availability reply into TrainItem records."""
    failed = _check_timetable_result(payload, "seat availability")
    if failed is not None:
        return failed

    entries = _as_list(payload.get("lst"))
    if entries is None:
        return FatalOutcome(reason="seat availability reply has a malformed 'lst'")
    if not entries:
        return EmptyOutcome()

    insurance = _read_insurance(payload)
    trains: list[Any] = []
    messages: list[str] = []
    for entry in entries:
        if isinstance(entry, dict) and entry.get("result", "OK") != "OK":
            messages.extend(_collect_messages([entry.get("error")]))
        else:
            trains.append(entry)

    def decode_one(item: dict[str, Any]) -> TrainItem:
        cars, _ = _decode_records(
            _as_list(item.get("cars")) or [],
            lambda car: _decode_train_car(car, insurance),
            "car",
        )
        return TrainItem(
            train_number=_required_str(item, "number"),
            departure_station=_required_str(item, "station0"),
            departure_code=_optional_code(item, "code0"),
            departure_date=_to_train_date(_optional_value(item, "date0", "date")),
            departure_time=_optional_value(item, "time0", "time"),
            arrival_station=_required_str(item, "station1"),
            arrival_code=_optional_code(item, "code1"),
            arrival_date=_to_train_date(_optional_value(item, "date1", "date")),
            arrival_time=_optional_value(item, "time1", "time"),
            cars=tuple(cars),
        )

    records, warnings = _decode_records(trains, decode_one, "train")
    if not records and messages:
        return _rejected_or_empty(messages, empty_markers)
    warnings.extend(messages)
    return _outcome(records, warnings)


def _decode_trip_stop(item: dict[str, Any]) -> TripStop:
    return TripStop(
        station=_required_str(item, "Station"),
        code=_optional_code(item, "Code"),
        days=_optional_int(item, "Days"),
        arrival_time=_optional_value(item, "ArvTime", "time"),
        departure_time=_optional_value(item, "DepTime", "time"),
        distance=_optional_int(item, "Distance"),
    )


def _error_content(value: Any) -> list[str]:
    if isinstance(value, dict):
        return _collect_messages([value.get("content")])
    return []


def decode_route_detail(
    payload: Any, query: TripStopsSearch, empty_markers: Iterable[str] = ()
) -> DecodeOutcome:
    """Decode a train route reply into TripStop records."""
    if not isinstance(payload, dict):
        return FatalOutcome(reason="route reply is not a JSON object")
    if "type" in payload:
        return FatalOutcome(
            reason=f"route reply is a request envelope of type {payload['type']!r}"
        )

    messages = _error_content(payload.get("Error"))
    if messages:
        return _rejected_or_empty(messages, empty_markers)

    response = payload.get("GtExpress_Response")
    if not isinstance(response, dict):
        return FatalOutcome(reason="route reply has no 'GtExpress_Response'")

    messages = _error_content(response.get("Error"))
    if messages:
        return _rejected_or_empty(messages, empty_markers)

    train = response.get("Train")
    train_number = None
    if isinstance(train, dict):
        train_number = _optional_str(train, "Number")

    routes = response.get("Routes")
    if routes is None:
        return EmptyOutcome()
    if not isinstance(routes, dict):
        return FatalOutcome(reason="route reply has a malformed 'Routes'")

    stops = routes.get("Stop")
    # A train with one stop is sent as an object instead of a list
    if isinstance(stops, dict):
        stops = [stops]
    stops = _as_list(stops)
    if stops is None:
        return FatalOutcome(reason="route reply has a malformed 'Stop'")

    records, warnings = _decode_records(stops, _decode_trip_stop, "stop")
    return _outcome(records, warnings, train_number or query.train_number)


def _decode_station(item: dict[str, Any]) -> StationItem:
    code = _optional_code(item, "c")
    if code is None:
        raise _RecordSkipped("missing 'c'")
    return StationItem(code=code, name=_required_str(item, "n"))


def decode_station_list(
    payload: Any, query: StationCodeSearch, empty_markers: Iterable[str] = ()
) -> DecodeOutcome:
    """Decode a station suggestion reply into StationItem records.

    The server matches only the first two letters of the query, so the
    stations whose names do not contain a word starting with the whole
    query are filtered out.
    """
    if not isinstance(payload, list):
        return FatalOutcome(reason="station reply is not a JSON array")

    records, warnings = _decode_records(payload, _decode_station, "station")
    matched = [item for item in records if matches_word_prefix(item.name, query.text)]
    logger.debug(
        f"{len(matched)} of {len(records)} stations match {query.text!r}"
    )
    return _outcome(matched, warnings)
