"""RZD Trains Package

A Python package for searching train schedules, free seats, train routes
and station codes on the Russian Railways passenger site.
"""

__version__ = "0.1.0"

from .core.client import RzdClient
from .core.models import (
    RouteDetail,
    RouteList,
    StationCode,
    StationList,
    TrainDate,
    TrainInfoList,
    TrainType,
)
from .core.queries import (
    StationCodeSearch,
    TrainScheduleSearch,
    TrainSearch,
    TripStopsSearch,
)

__all__ = [
    "RouteDetail",
    "RouteList",
    "RzdClient",
    "StationCode",
    "StationCodeSearch",
    "StationList",
    "TrainDate",
    "TrainInfoList",
    "TrainScheduleSearch",
    "TrainSearch",
    "TrainType",
    "TripStopsSearch",
]
