"""HTTP access to the MongoDB REST status page."""

import json
import logging
from collections.abc import Mapping

import httpx

from mongomon.errors import DecodeError, TransportError
from mongomon.models import Snapshot

logger = logging.getLogger(__name__)

STATUS_PATH = "/_status"


class StatusSource:
    """
    Fetches ``serverStatus`` snapshots from ``http://<hostname>:<port>/_status``.

    Connection failures, timeouts and error responses surface as
    ``TransportError``; an unreadable body surfaces as ``DecodeError``.
    """

    def __init__(self, hostname: str, port: str | int, client: httpx.Client | None = None) -> None:
        self.url = f"http://{hostname}:{port}{STATUS_PATH}"
        self._client = client or httpx.Client()

    def fetch(self) -> Snapshot:
        """Fetch and decode one snapshot."""
        try:
            response = self._client.get(self.url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise TransportError(str(exc) or type(exc).__name__) from exc

        try:
            document = json.loads(response.content.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise DecodeError(f"invalid status document from {self.url}: {exc}") from exc

        status = document.get("serverStatus") if isinstance(document, Mapping) else None
        if not isinstance(status, Mapping):
            raise DecodeError(f"status document from {self.url} has no serverStatus object")

        logger.debug("Fetched %d bytes from %s", len(response.content), self.url)
        return status

    def close(self) -> None:
        """Release the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> "StatusSource":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
