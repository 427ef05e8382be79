"""Client facade for RZD searches."""

import json
import logging
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from ..config import RzdSettings, get_settings
from .decoders import (
    DecodeOutcome,
    EmptyOutcome,
    FatalOutcome,
    PartialOutcome,
    RejectedOutcome,
    decode_route_detail,
    decode_route_list,
    decode_station_list,
    decode_train_info_list,
)
from .exceptions import DecodeError, UnsupportedQueryError, UpstreamError
from .models import ResultList, RouteDetail, RouteList, StationList, TrainInfoList
from .queries import StationCodeSearch, TrainScheduleSearch, TrainSearch, TripStopsSearch
from .transport import RzdTransport, Transport

logger = logging.getLogger(__name__)

Query = TrainScheduleSearch | TrainSearch | TripStopsSearch | StationCodeSearch
Decoder = Callable[[Any, Any, Iterable[str]], DecodeOutcome]
C = TypeVar("C", bound=ResultList)

# Which result each query can produce, and how its reply is decoded
DECODERS: dict[tuple[type, type], Decoder] = {
    (TrainScheduleSearch, RouteList): decode_route_list,
    (TrainSearch, TrainInfoList): decode_train_info_list,
    (TripStopsSearch, RouteDetail): decode_route_detail,
    (StationCodeSearch, StationList): decode_station_list,
}


class RzdClient:
    """Runs searches against the RZD passenger site."""

    def __init__(
        self,
        transport: Transport | None = None,
        settings: RzdSettings | None = None,
    ):
        """Initialize the client.

        Args:
            transport: Transport to send requests with, RzdTransport by default
            settings: Settings, the process-wide ones by default
        """
        self.settings = settings or get_settings()
        self.transport = transport if transport is not None else RzdTransport(self.settings)

    def get(self, expected: type[C], query: Query) -> C | None:
        """Run a search and return its results.

        Args:
            expected: Result container type, e.g. RouteList
            query: Validated search query

        Returns:
            The result container, or None if nothing was found

        Raises:
            UnsupportedQueryError: If the query cannot produce the expected result
            TransportError: If the request fails
            UpstreamError: If the server reports an error for the query
            DecodeError: If the reply cannot be recognized
        """
        decoder = DECODERS.get((type(query), expected))
        if decoder is None:
            raise UnsupportedQueryError(
                f"{type(query).__name__} cannot produce {getattr(expected, '__name__', expected)}"
            )

        request = query.to_request(self.settings)
        logger.debug(f"Requesting {request.url} with {request.params}")
        body = self.transport.fetch(request)

        if not body or not body.strip():
            logger.warning("Server returned an empty reply")
            return None

        try:
            payload = json.loads(body)
        except ValueError as e:
            raise DecodeError(f"Reply is not valid JSON: {str(e)}") from e

        outcome = decoder(payload, query, self.settings.empty_result_messages)
        return self._unwrap(expected, outcome)

    def _unwrap(self, expected: type[C], outcome: DecodeOutcome) -> C | None:
        if isinstance(outcome, EmptyOutcome):
            logger.info("Nothing found")
            return None

        if isinstance(outcome, RejectedOutcome):
            raise UpstreamError(list(outcome.messages))

        if isinstance(outcome, FatalOutcome):
            raise DecodeError(outcome.reason)

        assert isinstance(outcome, PartialOutcome)
        if outcome.warnings:
            logger.debug(f"{len(outcome.warnings)} record(s) dropped while decoding")
        logger.info(f"{len(outcome.records)} record(s) found")

        if expected is RouteDetail:
            return RouteDetail(outcome.records, train_number=outcome.train_number)  # type: ignore[return-value]
        return expected(outcome.records)
