import logging
from typing import Any, Optional, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from signalboard.core.config import settings
from signalboard.core.exceptions import MalformedResponse, NetworkFailure, NotFound
from signalboard.models.detail import DescriptionDetail, PivotLevels
from signalboard.models.sector import SectorSummary
from signalboard.models.signal import SignalRecord
from signalboard.services.sources.base import SignalSource

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_SIGNALS = TypeAdapter(list[SignalRecord])
_SECTORS = TypeAdapter(list[SectorSummary])


class HttpSignalSource(SignalSource):
    """Signal source backed by the analysis REST API."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout_sec: float | None = None,
        sectors_endpoint: str | None = None,
        pivot_endpoint: str | None = None,
        description_endpoint: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (settings.API_BASE_URL if base_url is None else base_url).rstrip("/")
        self.timeout_sec = (
            settings.REQUEST_TIMEOUT_SEC if timeout_sec is None else timeout_sec
        )
        self.sectors_endpoint = (
            settings.SECTORS_ENDPOINT if sectors_endpoint is None else sectors_endpoint
        )
        self.pivot_endpoint = (
            settings.PIVOT_ENDPOINT if pivot_endpoint is None else pivot_endpoint
        )
        self.description_endpoint = (
            settings.DESCRIPTION_ENDPOINT
            if description_endpoint is None
            else description_endpoint
        )
        self._transport = transport

    async def fetch_signals(self, endpoint: str) -> list[SignalRecord]:
        payload = await self._get_json(self._url(endpoint))
        # Some producers answer with a bare object instead of a list
        if isinstance(payload, dict):
            payload = [payload]
        records = self._validate(_SIGNALS, payload, endpoint)
        logger.info("Fetched %d signal records from %s", len(records), endpoint)
        return records

    async def fetch_sectors(self) -> list[SectorSummary]:
        payload = await self._get_json(self._url(self.sectors_endpoint))
        if isinstance(payload, dict):
            payload = [payload]
        sectors = self._validate(_SECTORS, payload, self.sectors_endpoint)
        logger.info("Fetched %d sector summaries", len(sectors))
        return sectors

    async def fetch_pivots(self, symbol: str) -> PivotLevels:
        payload = await self._get_json(self._url(self.pivot_endpoint, symbol), symbol=symbol)
        return self._validate_object(PivotLevels, payload, symbol)

    async def fetch_description(self, symbol: str) -> DescriptionDetail:
        payload = await self._get_json(
            self._url(self.description_endpoint, symbol), symbol=symbol
        )
        return self._validate_object(DescriptionDetail, payload, symbol)

    def _url(self, endpoint: str, symbol: Optional[str] = None) -> str:
        url = f"{self.base_url}/{endpoint.strip('/')}"
        if symbol is not None:
            url = f"{url}/{quote(symbol, safe='')}"
        return url

    async def _get_json(self, url: str, symbol: Optional[str] = None) -> Any:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_sec, transport=self._transport
            ) as client:
                resp = await client.get(url)
        except httpx.HTTPError as exc:
            logger.warning("Request to %s failed: %s", url, exc)
            raise NetworkFailure(f"Request failed: {exc}") from exc

        if resp.status_code == 404 and symbol is not None:
            raise NotFound(symbol)
        if not resp.is_success:
            logger.warning("Request to %s returned HTTP %s", url, resp.status_code)
            raise NetworkFailure(
                f"Request failed with status {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError as exc:
            raise MalformedResponse(f"Response from {url} is not valid JSON") from exc

    def _validate(self, adapter: TypeAdapter, payload: Any, source: str) -> list:
        if not isinstance(payload, list):
            raise MalformedResponse(
                f"Expected a list from {source}, got {type(payload).__name__}"
            )
        try:
            return adapter.validate_python(payload)
        except ValidationError as exc:
            raise MalformedResponse(
                f"Unexpected payload shape from {source}: {exc.error_count()} error(s)"
            ) from exc

    def _validate_object(self, model: type[ModelT], payload: Any, symbol: str) -> ModelT:
        if not isinstance(payload, dict):
            raise MalformedResponse(
                f"Expected an object for {symbol}, got {type(payload).__name__}"
            )
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise MalformedResponse(
                f"Unexpected payload shape for {symbol}: {exc.error_count()} error(s)"
            ) from exc
