"""Orientation/layout engine.

Tracks the device's semantic orientation and window size from two
independent listener subscriptions and derives the content height from
them on every read.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ValidationError

from screenkit.config import ScreenConfig
from screenkit.exceptions import LockRequestError
from screenkit.models.orientation import (
    OrientationLock,
    OrientationState,
    RawOrientation,
    ViewportDimensions,
    layout_height,
    orientation_from_raw,
)
from screenkit.providers import OrientationProvider, Subscription, ViewportProvider

_logger = logging.getLogger(__name__)


def _raw_tag(event: Any) -> Any:
    """Extract the raw tag from a rotation event.

    Accepts the bare tag or ``{"orientationInfo": {"orientation": tag}}``.
    """
    if isinstance(event, Mapping):
        info = event.get("orientationInfo")
        if isinstance(info, Mapping):
            return info.get("orientation")
        return event.get("orientation")
    return event


class OrientationEngine:
    """Live mapping from device rotation/dimension events to layout.

    Usage::

        async with OrientationEngine(orientation, viewport) as engine:
            height = engine.layout_height()
            await engine.lock_landscape()

    The two subscriptions carry no ordering guarantee relative to each
    other. A read between a rotation event and the matching dimension
    event may pair the new orientation with the previous dimensions; the
    next dimension event corrects it.
    """

    def __init__(
        self,
        orientation_provider: OrientationProvider,
        viewport_provider: ViewportProvider,
        *,
        config: ScreenConfig | None = None,
        on_change: Callable[[OrientationEngine], None] | None = None,
    ) -> None:
        self._orientation_provider = orientation_provider
        self._viewport_provider = viewport_provider
        self._config = config or ScreenConfig()
        self._on_change = on_change
        self._orientation = OrientationState.PORTRAIT
        self._dimensions = ViewportDimensions(width=0.0, height=0.0)
        self._rotation_subscription: Subscription | None = None
        self._dimension_subscription: Subscription | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> OrientationEngine:
        self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.stop()
        if self._config.release_lock_on_exit:
            await self.unlock()

    def start(self) -> None:
        """Read the current window size and subscribe to both event streams."""
        if self._rotation_subscription is not None:
            return
        self._dimensions = ViewportDimensions.model_validate(self._viewport_provider.get_dimensions())
        rotation = self._orientation_provider.add_orientation_listener(self.handle_rotation)
        try:
            self._dimension_subscription = self._viewport_provider.add_dimension_listener(self.handle_dimensions)
        except Exception:
            rotation.remove()
            raise
        self._rotation_subscription = rotation
        _logger.debug("Orientation engine started (%.0fx%.0f)", self._dimensions.width, self._dimensions.height)

    def stop(self) -> None:
        """Release both subscriptions. Safe to call more than once."""
        rotation, self._rotation_subscription = self._rotation_subscription, None
        dimension, self._dimension_subscription = self._dimension_subscription, None
        try:
            if rotation is not None:
                rotation.remove()
        finally:
            if dimension is not None:
                dimension.remove()

    @property
    def is_running(self) -> bool:
        return self._rotation_subscription is not None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def orientation(self) -> OrientationState:
        return self._orientation

    @property
    def dimensions(self) -> ViewportDimensions:
        return self._dimensions

    def layout_height(self) -> float:
        """Content height for the current orientation and window size."""
        return layout_height(
            self._orientation,
            self._dimensions,
            chrome=self._config.landscape_chrome_height,
            portrait_height=self._config.portrait_content_height,
        )

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def handle_rotation(self, event: Any) -> None:
        raw = RawOrientation(_raw_tag(event))
        self._set_orientation(orientation_from_raw(raw))

    def handle_dimensions(self, event: ViewportDimensions | Mapping[str, Any]) -> None:
        try:
            self._dimensions = ViewportDimensions.model_validate(event)
        except ValidationError:
            _logger.debug("Ignoring malformed dimension event %r", event, exc_info=True)
            return
        self._notify()

    # ------------------------------------------------------------------
    # Rotation lock overrides
    # ------------------------------------------------------------------

    async def unlock(self) -> None:
        """Let the orientation follow the device sensor again."""
        await self._request_lock(OrientationLock.UNLOCK)

    async def lock_portrait(self) -> None:
        """Force portrait; local state switches before the device confirms."""
        self._set_orientation(OrientationState.PORTRAIT)
        await self._request_lock(OrientationLock.PORTRAIT)

    async def lock_landscape(self) -> None:
        """Force landscape; local state switches before the device confirms."""
        self._set_orientation(OrientationState.LANDSCAPE)
        await self._request_lock(OrientationLock.LANDSCAPE)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _request_lock(self, lock: OrientationLock) -> None:
        try:
            await self._send_lock(lock)
        except LockRequestError:
            _logger.debug("Rotation lock request %s failed", lock, exc_info=True)

    async def _send_lock(self, lock: OrientationLock) -> None:
        try:
            await self._orientation_provider.request_lock(lock)
        except Exception as exc:
            raise LockRequestError(f"Rotation lock {lock} rejected: {exc}") from exc

    def _set_orientation(self, orientation: OrientationState) -> None:
        self._orientation = orientation
        self._notify()

    def _notify(self) -> None:
        if self._on_change is None:
            return
        try:
            self._on_change(self)
        except Exception:
            _logger.debug("on_change callback failed", exc_info=True)
