"""Async HTTP client for the remote product catalog."""

from __future__ import annotations

import json
import logging
from typing import Any

import aiohttp
from pydantic import ValidationError

from screenkit.config import ScreenConfig
from screenkit.exceptions import CatalogError, ScreenError
from screenkit.models.catalog import CatalogItem

_logger = logging.getLogger(__name__)

_PRODUCTS_ENDPOINT = "/products"


class CatalogClient:
    """Fetch a bounded list of products with a single GET.

    Usage::

        async with CatalogClient(config) as catalog:
            items = await catalog.fetch_items()

    No retry and no caching: each call is one request.
    """

    def __init__(
        self,
        config: ScreenConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config or ScreenConfig()
        self._external_session = session is not None
        self._http_session = session

    async def __aenter__(self) -> CatalogClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._config.catalog_timeout),
            )
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None

    def _require_session(self) -> aiohttp.ClientSession:
        if self._http_session is None:
            raise ScreenError("Catalog client not initialized. Use 'async with CatalogClient(...) as catalog:'")
        return self._http_session

    async def fetch_items(self, limit: int | None = None) -> list[CatalogItem]:
        """Fetch up to *limit* products (``config.catalog_limit`` by default).

        Raises
        ------
        CatalogError
            On network failure, timeout, a non-200 status, or a body
            that is not a JSON list of product records.
        """
        http = self._require_session()
        count = limit if limit is not None else self._config.catalog_limit
        url = f"{self._config.catalog_base_url.rstrip('/')}{_PRODUCTS_ENDPOINT}"

        _logger.debug("GET %s limit=%d", url, count)

        try:
            async with http.get(url, params={"limit": str(count)}) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise CatalogError(
                        f"HTTP {resp.status} from {_PRODUCTS_ENDPOINT}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=_PRODUCTS_ENDPOINT,
                    )
        except CatalogError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise CatalogError(
                f"Request to {_PRODUCTS_ENDPOINT} failed: {exc}",
                endpoint=_PRODUCTS_ENDPOINT,
            ) from exc

        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            raise CatalogError(
                f"Invalid JSON from {_PRODUCTS_ENDPOINT}: {text[:200]}",
                endpoint=_PRODUCTS_ENDPOINT,
            ) from exc

        if not isinstance(body, list):
            raise CatalogError(
                f"Expected a list of products from {_PRODUCTS_ENDPOINT}",
                endpoint=_PRODUCTS_ENDPOINT,
            )

        try:
            return [CatalogItem.model_validate(item) for item in body]
        except ValidationError as exc:
            raise CatalogError(
                f"Malformed product record from {_PRODUCTS_ENDPOINT}: {exc.error_count()} error(s)",
                endpoint=_PRODUCTS_ENDPOINT,
            ) from exc
