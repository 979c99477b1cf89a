"""
Offer sources.

Each source knows one origin of offer configuration (a remote endpoint or a
local JSON file) and turns it into offers. A source either returns the
complete list or raises an `OfferSourceError` subclass; it never hands back
partial results. Tolerating failures is the aggregator's job, not the
source's.

Both sources share one decoder: a Pydantic TypeAdapter for
`list[OfferConfig]`.
"""

import asyncio
import logging
from pathlib import Path
from typing import Protocol

import httpx
from pydantic import TypeAdapter, ValidationError

from shopping_offers.domain.models import OfferConfig
from shopping_offers.domain.offers import Offer, map_configs
from shopping_offers.errors import MalformedConfig, SourceNotFound, SourceUnavailable

logger = logging.getLogger(__name__)

# Directory holding the configuration bundled with the package.
RESOURCES_DIR = Path(__file__).resolve().parent.parent / "resources"

_CONFIG_LIST = TypeAdapter(list[OfferConfig])


def decode_offer_configs(raw: str | bytes, source: str) -> list[OfferConfig]:
    try:
        return _CONFIG_LIST.validate_json(raw)
    except ValidationError as exc:
        raise MalformedConfig(f"Invalid offer configuration from {source}: {exc}", source) from exc


class OfferSource(Protocol):
    """Interface for a single origin of offer definitions."""

    @property
    def description(self) -> str: ...

    async def load_offers(self) -> list[Offer]: ...


class UrlOfferSource:
    """Fetches offer configuration with an HTTP GET.

    A shared `httpx.AsyncClient` may be injected; otherwise a short-lived
    client is opened for each load.
    """

    def __init__(
        self,
        url: str,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._client = client

    @property
    def description(self) -> str:
        return f"url:{self.url}"

    async def _get(self, client: httpx.AsyncClient) -> httpx.Response:
        if self.timeout is None:
            response = await client.get(self.url)
        else:
            response = await client.get(self.url, timeout=self.timeout)
        response.raise_for_status()
        return response

    async def load_offers(self) -> list[Offer]:
        logger.debug("Fetching offer configuration from %s", self.url)
        try:
            if self._client is not None:
                response = await self._get(self._client)
            else:
                async with httpx.AsyncClient() as client:
                    response = await self._get(client)
        except httpx.HTTPStatusError as exc:
            raise SourceUnavailable(
                f"{self.url} answered {exc.response.status_code}", self.description
            ) from exc
        except httpx.HTTPError as exc:
            raise SourceUnavailable(f"Request to {self.url} failed: {exc!r}", self.description) from exc

        configs = decode_offer_configs(response.content, self.description)
        return map_configs(configs)


class FileOfferSource:
    """Reads offer configuration from a JSON file.

    Relative paths are resolved against the bundled resources directory, so
    `FileOfferSource("offers-config.json")` reads the configuration shipped
    with the package.
    """

    def __init__(self, path: str | Path, base_dir: Path = RESOURCES_DIR) -> None:
        path = Path(path)
        self.path = path if path.is_absolute() else base_dir / path

    @property
    def description(self) -> str:
        return f"file:{self.path}"

    def _read(self) -> bytes:
        try:
            return self.path.read_bytes()
        except FileNotFoundError as exc:
            raise SourceNotFound(f"Offer configuration not found: {self.path}", self.description) from exc

    async def load_offers(self) -> list[Offer]:
        logger.debug("Reading offer configuration from %s", self.path)
        raw = await asyncio.to_thread(self._read)
        configs = decode_offer_configs(raw, self.description)
        return map_configs(configs)
