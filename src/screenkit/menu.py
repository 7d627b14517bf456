"""Menu screen controller: one catalog load and a sign-out action."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from screenkit.exceptions import CatalogError
from screenkit.models.catalog import CatalogItem
from screenkit.providers import Notifier, SessionProvider

_logger = logging.getLogger(__name__)


class CatalogSource(Protocol):
    async def fetch_items(self, limit: int | None = None) -> list[CatalogItem]:
        ...


class MenuController:
    """Loads the product list once and signs the user out on request."""

    def __init__(
        self,
        catalog: CatalogSource,
        session_provider: SessionProvider,
        notifier: Notifier,
        *,
        on_signed_out: Callable[[], None] | None = None,
    ) -> None:
        self._catalog = catalog
        self._session_provider = session_provider
        self._notifier = notifier
        self._on_signed_out = on_signed_out
        self._items: list[CatalogItem] = []
        self._loading = True

    @property
    def items(self) -> list[CatalogItem]:
        return list(self._items)

    @property
    def loading(self) -> bool:
        return self._loading

    async def load(self) -> list[CatalogItem]:
        self._loading = True
        try:
            self._items = await self._catalog.fetch_items()
        except CatalogError:
            _logger.debug("Catalog load failed", exc_info=True)
            self._notifier.alert("Error", "Could not load products")
        finally:
            self._loading = False
        return self.items

    async def sign_out(self) -> bool:
        """Sign out and hand control back to the login screen.

        Returns ``False`` (after alerting the user) when the session
        provider fails.
        """
        try:
            await self._session_provider.sign_out()
        except Exception:
            _logger.debug("Sign-out failed", exc_info=True)
            self._notifier.alert("Error", "Could not sign out")
            return False
        if self._on_signed_out is not None:
            self._on_signed_out()
        return True
