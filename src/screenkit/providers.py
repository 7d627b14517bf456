"""Structural interfaces for the device capabilities screens consume.

Each protocol describes the subset of a platform API the controllers rely
on. Keeping them structural makes it easy to pass test doubles while the
production bindings live with the host application.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol

from screenkit.models.connectivity import NetworkState
from screenkit.models.location import Fix, LocationAccuracy, PermissionStatus
from screenkit.models.orientation import OrientationLock, ViewportDimensions

RotationListener = Callable[[Any], None]
DimensionListener = Callable[[Any], None]


class Subscription(Protocol):
    """Handle returned by a listener registration."""

    def remove(self) -> None:
        ...


class LocationProvider(Protocol):
    async def request_foreground_permission(self) -> PermissionStatus | str:
        ...

    async def get_current_fix(self, accuracy: LocationAccuracy) -> Fix | Mapping[str, Any]:
        ...


class ConnectivityProvider(Protocol):
    async def get_network_state(self) -> NetworkState | Mapping[str, Any]:
        ...


class OrientationProvider(Protocol):
    def add_orientation_listener(self, listener: RotationListener) -> Subscription:
        """Register *listener* for rotation events.

        Events are a :class:`RawOrientation`, its tag, or a mapping shaped
        like ``{"orientationInfo": {"orientation": <tag>}}``.
        """
        ...

    async def request_lock(self, lock: OrientationLock) -> None:
        ...


class ViewportProvider(Protocol):
    def add_dimension_listener(self, listener: DimensionListener) -> Subscription:
        ...

    def get_dimensions(self) -> ViewportDimensions | Mapping[str, Any]:
        ...


class Notifier(Protocol):
    """Blocking user-facing notice (an alert dialog)."""

    def alert(self, title: str, message: str) -> None:
        ...


class SessionProvider(Protocol):
    async def sign_out(self) -> None:
        ...


__all__ = [
    "ConnectivityProvider",
    "DimensionListener",
    "LocationProvider",
    "Notifier",
    "OrientationProvider",
    "RotationListener",
    "SessionProvider",
    "Subscription",
    "ViewportProvider",
]
