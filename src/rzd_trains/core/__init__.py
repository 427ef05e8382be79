"""Core RZD search functionality."""

from .client import RzdClient
from .exceptions import (
    DecodeError,
    InvalidDate,
    InvalidQuery,
    InvalidStationCode,
    RzdTrainsError,
    ServerOverloadedError,
    TransportError,
    UnsupportedQueryError,
    UpstreamError,
    ValidationError,
)
from .models import (
    Route,
    RouteDetail,
    RouteList,
    StationCode,
    StationItem,
    StationList,
    TrainDate,
    TrainInfoList,
    TrainItem,
    TrainType,
    TripStop,
)
from .queries import StationCodeSearch, TrainScheduleSearch, TrainSearch, TripStopsSearch
from .transport import RzdTransport, Transport

__all__ = [
    "RzdClient",
    "RzdTransport",
    "Transport",
    "Route",
    "RouteDetail",
    "RouteList",
    "StationCode",
    "StationItem",
    "StationList",
    "TrainDate",
    "TrainInfoList",
    "TrainItem",
    "TrainType",
    "TripStop",
    "StationCodeSearch",
    "TrainScheduleSearch",
    "TrainSearch",
    "TripStopsSearch",
    "RzdTrainsError",
    "ValidationError",
    "InvalidDate",
    "InvalidStationCode",
    "InvalidQuery",
    "TransportError",
    "ServerOverloadedError",
    "DecodeError",
    "UpstreamError",
    "UnsupportedQueryError",
]
