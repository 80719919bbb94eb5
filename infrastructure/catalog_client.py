"""HTTP client for the remote card catalog and remote image bytes.

The catalog endpoint answers a single GET with a JSON envelope of the form
``{"cards": [{"id": ..., "name": ..., "imageUrl": ...}, ...]}``. Decoding is
lenient: unknown keys are ignored and scalar values are coerced to strings.
"""

from __future__ import annotations

import threading
from typing import Any

from loguru import logger
import requests

from core.errors import DecodeError, NetworkError
from core.models import RemoteCatalogEntry
from infrastructure.settings import DEFAULT_CATALOG_URL, DEFAULT_TIMEOUT_SECONDS

_REQUIRED_KEYS = (("id", "id"), ("name", "name"), ("imageUrl", "image_url"))


def _coerce_str(value: Any, key: str) -> str:
    """Accept strings and plain scalars, reject containers and null."""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise DecodeError(f"Card field {key!r} has unsupported value: {value!r}")


def parse_catalog(payload: Any) -> list[RemoteCatalogEntry]:
    """Decode a parsed JSON `payload` into catalog entries, preserving order."""
    if not isinstance(payload, dict):
        raise DecodeError("Catalog response is not a JSON object")
    cards = payload.get("cards")
    if not isinstance(cards, list):
        raise DecodeError("Catalog response has no 'cards' list")

    entries: list[RemoteCatalogEntry] = []
    for index, card in enumerate(cards):
        if not isinstance(card, dict):
            raise DecodeError(f"Card #{index} is not a JSON object")
        values: dict[str, str] = {}
        for json_key, attr in _REQUIRED_KEYS:
            if json_key not in card:
                raise DecodeError(f"Card #{index} is missing {json_key!r}")
            values[attr] = _coerce_str(card[json_key], json_key)
        entries.append(RemoteCatalogEntry(**values))
    return entries


class RemoteCatalogClient:
    """Fetches the card catalog and remote images over HTTP."""

    def __init__(
        self,
        url: str = DEFAULT_CATALOG_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        # An injected session is shared by every calling thread
        self._session = session
        self._local = threading.local()

    @property
    def url(self) -> str:
        """Catalog endpoint this client talks to."""
        return self._url

    def get_all(self) -> list[RemoteCatalogEntry]:
        """Fetch and decode every catalog entry with a single GET.

        Raises:
            NetworkError: The request failed or returned an error status.
            DecodeError: The body is not the expected JSON envelope.
        """
        logger.info("Fetching catalog from {}", self._url)
        response = self._get(self._url)
        try:
            payload = response.json()
        except ValueError as ex:
            raise DecodeError(f"Catalog response is not valid JSON: {ex}") from ex
        entries = parse_catalog(payload)
        logger.info("Catalog returned {} entries", len(entries))
        return entries

    def fetch_image(self, url: str) -> bytes:
        """Return the raw body of `url`. Every call issues a new request."""
        logger.debug("Fetching remote image {}", url)
        return self._get(url).content

    def _thread_session(self) -> requests.Session:
        """Return the injected session, else one session per calling thread."""
        if self._session is not None:
            return self._session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._local.session = session
        return session

    def _get(self, url: str) -> requests.Response:
        try:
            response = self._thread_session().get(url, timeout=self._timeout)
            response.raise_for_status()
        except requests.RequestException as ex:
            raise NetworkError(f"GET {url} failed: {ex}") from ex
        return response
