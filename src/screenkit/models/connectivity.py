"""Network reachability models."""

from __future__ import annotations

import enum

from screenkit.models._base import ScreenBaseModel


class ConnectivityState(enum.StrEnum):
    """Result of the best-effort connectivity sample."""

    UNKNOWN = "unknown"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


class NetworkState(ScreenBaseModel):
    """Network state as reported by the connectivity provider.

    ``is_internet_reachable`` is ``None`` while the platform has not
    finished probing reachability.
    """

    is_connected: bool = False
    is_internet_reachable: bool | None = None

    def to_connectivity(self) -> ConnectivityState:
        # Connected only when the link is up *and* the internet is known reachable.
        if self.is_connected and self.is_internet_reachable:
            return ConnectivityState.CONNECTED
        return ConnectivityState.DISCONNECTED
