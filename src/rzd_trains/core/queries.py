"""Search queries and their rendering into request parameters."""

import logging
from datetime import time
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..config import RzdSettings
from ..utils.text import normalize_query
from ..utils.timeformat import format_upstream_time
from .exceptions import InvalidQuery
from .models import RouteDirection, StationCode, TrainDate, TrainType

logger = logging.getLogger(__name__)

# The server matches station names by their first two letters
MIN_STATION_QUERY_LENGTH = 2


class UpstreamRequest(BaseModel):
    """Request to one of the RZD endpoints, ready to be sent."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., description="Endpoint URL")
    params: dict[str, str] = Field(..., description="Query string parameters")
    poll_params: dict[str, str] | None = Field(
        None,
        description="Parameters of the follow-up request sent together with "
        "the request id; None for endpoints answering at once",
    )

    @property
    def needs_request_id(self) -> bool:
        return self.poll_params is not None


def _one_way() -> str:
    return str(RouteDirection.ONE_WAY.value)


class TrainScheduleSearch(BaseModel):
    """Schedule of trains between two stations on a date."""

    model_config = ConfigDict(frozen=True)

    LAYER_ID: ClassVar[int] = 5827

    origin: StationCode = Field(..., description="Departure station code")
    destination: StationCode = Field(..., description="Arrival station code")
    departure_date: TrainDate
    train_type: TrainType = TrainType.ALL_TRAINS
    check_seats: bool = Field(True, description="Ask for free seats and prices")

    def __init__(
        self,
        origin: StationCode | int,
        destination: StationCode | int,
        departure_date: TrainDate,
        train_type: TrainType = TrainType.ALL_TRAINS,
        check_seats: bool = True,
    ) -> None:
        super().__init__(
            origin=origin,
            destination=destination,
            departure_date=departure_date,
            train_type=train_type,
            check_seats=check_seats,
        )

    @model_validator(mode="after")
    def _check_stations(self) -> "TrainScheduleSearch":
        if self.origin == self.destination:
            raise InvalidQuery(
                f"Departure and arrival stations must differ, got {self.origin} twice"
            )
        logger.debug(
            f"Schedule query: {self.origin} -> {self.destination} at {self.departure_date}"
        )
        return self

    @property
    def needs_request_id(self) -> bool:
        """Suburban schedules are answered at once, others via a request id."""
        return self.train_type != TrainType.ELECTRIC_TRAIN

    def to_params(self) -> dict[str, str]:
        params = {
            "layer_id": str(self.LAYER_ID),
            "dir": _one_way(),
            "tfl": self.train_type.code,
        }
        if self.needs_request_id:
            if self.check_seats:
                params["checkSeats"] = "1"
            else:
                params["checkSeats"] = "0"
                params["withoutSeats"] = "y"
        params["code0"] = str(self.origin)
        params["dt0"] = str(self.departure_date)
        params["code1"] = str(self.destination)
        return params

    def to_request(self, settings: RzdSettings) -> UpstreamRequest:
        poll_params = {"layer_id": str(self.LAYER_ID)} if self.needs_request_id else None
        return UpstreamRequest(
            url=settings.timetable_url, params=self.to_params(), poll_params=poll_params
        )


class TrainSearch(BaseModel):
    """Seat availability of one train: cars, prices and free seats."""

    model_config = ConfigDict(frozen=True)

    LAYER_ID: ClassVar[int] = 5764

    origin: StationCode
    destination: StationCode
    departure_date: TrainDate
    departure_time: time
    train_number: str

    def __init__(
        self,
        origin: StationCode | int,
        destination: StationCode | int,
        departure_date: TrainDate,
        departure_time: time,
        train_number: str,
    ) -> None:
        super().__init__(
            origin=origin,
            destination=destination,
            departure_date=departure_date,
            departure_time=departure_time,
            train_number=train_number,
        )

    @field_validator("train_number")
    @classmethod
    def _normalize_train_number(cls, v: str) -> str:
        return v.strip().upper()

    @model_validator(mode="after")
    def _check_query(self) -> "TrainSearch":
        if not self.train_number:
            raise InvalidQuery("Train number cannot be empty")
        if self.origin == self.destination:
            raise InvalidQuery(
                f"Departure and arrival stations must differ, got {self.origin} twice"
            )
        logger.debug(f"Train query: {self.train_number} at {self.departure_date}")
        return self

    def to_params(self) -> dict[str, str]:
        return {
            "layer_id": str(self.LAYER_ID),
            "dir": _one_way(),
            "code0": str(self.origin),
            "dt0": str(self.departure_date),
            "time0": format_upstream_time(self.departure_time),
            "code1": str(self.destination),
            "tnum0": self.train_number,
        }

    def to_request(self, settings: RzdSettings) -> UpstreamRequest:
        return UpstreamRequest(
            url=settings.timetable_url,
            params=self.to_params(),
            poll_params={"layer_id": str(self.LAYER_ID)},
        )


class TripStopsSearch(BaseModel):
    """Stops of a train departing on a date."""

    model_config = ConfigDict(frozen=True)

    LAYER_ID: ClassVar[int] = 5804

    train_number: str
    departure_date: TrainDate

    def __init__(self, train_number: str, departure_date: TrainDate) -> None:
        super().__init__(train_number=train_number, departure_date=departure_date)

    @field_validator("train_number")
    @classmethod
    def _normalize_train_number(cls, v: str) -> str:
        return v.strip().upper()

    @model_validator(mode="after")
    def _check_train_number(self) -> "TripStopsSearch":
        if not self.train_number:
            raise InvalidQuery("Train number cannot be empty")
        logger.debug(f"Stops query: {self.train_number} at {self.departure_date}")
        return self

    def to_params(self) -> dict[str, str]:
        return {
            "layer_id": str(self.LAYER_ID),
            "date": str(self.departure_date),
            "train_num": self.train_number,
            "json": "y",
            "format": "array",
        }

    def to_request(self, settings: RzdSettings) -> UpstreamRequest:
        return UpstreamRequest(
            url=settings.timetable_url,
            params=self.to_params(),
            poll_params={"layer_id": str(self.LAYER_ID), "json": "y", "format": "array"},
        )


class StationCodeSearch(BaseModel):
    """Station code search by a part of the station name."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Normalized part of the station name")

    def __init__(self, text: str) -> None:
        super().__init__(text=text)

    @field_validator("text")
    @classmethod
    def _normalize_text(cls, v: str) -> str:
        return normalize_query(v)

    @model_validator(mode="after")
    def _check_length(self) -> "StationCodeSearch":
        if not self.text:
            raise InvalidQuery("Station search text cannot be empty")
        if len(self.text) < MIN_STATION_QUERY_LENGTH:
            raise InvalidQuery(
                f"Station search text must have at least "
                f"{MIN_STATION_QUERY_LENGTH} characters, got {self.text!r}"
            )
        logger.debug(f"Station query: {self.text}")
        return self

    def to_params(self, language: str = "ru") -> dict[str, str]:
        return {
            "stationNamePart": self.text,
            "lang": language,
            "compactMode": "y",
        }

    def to_request(self, settings: RzdSettings) -> UpstreamRequest:
        return UpstreamRequest(
            url=settings.suggester_url, params=self.to_params(settings.language)
        )
