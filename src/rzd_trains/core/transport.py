"""HTTP transport for the RZD passenger site."""

import json
import logging
import time
from typing import Any, Protocol

import requests
from tenacity import (
    RetryCallState,
    RetryError,
    Retrying,
    retry_if_result,
    stop_after_attempt,
    wait_fixed,
)

from ..config import RzdSettings, get_settings
from .decoders import read_request_id
from .exceptions import ServerOverloadedError, TransportError
from .queries import UpstreamRequest

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Anything able to send a rendered request and return the reply body."""

    def fetch(self, request: UpstreamRequest) -> bytes: ...


def _load_json(body: bytes) -> Any:
    try:
        return json.loads(body)
    except ValueError:
        return None


def _still_pending(body: bytes) -> bool:
    return read_request_id(_load_json(body)) is not None


class RzdTransport:
    """Transport talking to pass.rzd.ru with requests.

    Most timetable layers answer in two steps: the first reply only carries
    a request id, and the data has to be asked for again with that id,
    within the same session, once the server has prepared it.
    """

    def __init__(
        self,
        settings: RzdSettings | None = None,
        session: requests.Session | None = None,
    ):
        """Initialize the transport.

        Args:
            settings: Connection settings, the process-wide ones by default
            session: Session to reuse; its cookies link the two steps
        """
        self.settings = settings or get_settings()
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "User-Agent": self.settings.user_agent,
                "Referer": self.settings.referer,
            }
        )

    def fetch(self, request: UpstreamRequest) -> bytes:
        """Send the request, following the request id handshake if needed.

        Raises:
            TransportError: If the server cannot be reached or answers
                with an HTTP error
            ServerOverloadedError: If the reply is still not ready after
                all poll attempts
        """
        body = self._get(request.url, request.params)
        if request.poll_params is None:
            return body

        request_id = read_request_id(_load_json(body))
        if request_id is None:
            logger.debug("First reply carries no request id, passing it on")
            return body

        logger.debug(f"Got request id {request_id}")
        params = {**request.poll_params, "rid": str(request_id)}
        return self._poll(request.url, params)

    def _poll(self, url: str, params: dict[str, str]) -> bytes:
        attempts = self.settings.rid_poll_attempts
        interval = self.settings.rid_poll_interval

        def log_retry(retry_state: RetryCallState) -> None:
            logger.debug(
                f"Reply not ready yet, attempt {retry_state.attempt_number} of {attempts}"
            )

        # The server never has the data ready right after handing out the id
        time.sleep(interval)
        retrying = Retrying(
            stop=stop_after_attempt(attempts),
            wait=wait_fixed(interval),
            retry=retry_if_result(_still_pending),
            before_sleep=log_retry,
        )
        try:
            return retrying(self._get, url, params)
        except RetryError as e:
            raise ServerOverloadedError(
                f"Server did not prepare the reply after {attempts} attempts"
            ) from e

    def _get(self, url: str, params: dict[str, str]) -> bytes:
        try:
            response = self.session.get(
                url, params=params, timeout=self.settings.request_timeout
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error(f"Request to {url} failed: {e}")
            raise TransportError(f"Failed to fetch {url}: {str(e)}") from e

        logger.debug(f"Fetched {response.url} ({len(response.content)} bytes)")
        return response.content

    def close(self) -> None:
        self.session.close()
