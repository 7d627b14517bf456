"""Value models for device state, layout and catalog data."""

from screenkit.models._base import ScreenBaseModel, ScreenEnum, safe_float
from screenkit.models.catalog import CatalogItem
from screenkit.models.connectivity import ConnectivityState, NetworkState
from screenkit.models.location import (
    Fix,
    LocationAccuracy,
    LocationFailed,
    LocationLoading,
    LocationReady,
    LocationState,
    LocationStatus,
    PermissionStatus,
)
from screenkit.models.orientation import (
    OrientationLock,
    OrientationState,
    RawOrientation,
    ViewportDimensions,
    layout_height,
    orientation_from_raw,
)

__all__ = [
    "CatalogItem",
    "ConnectivityState",
    "Fix",
    "LocationAccuracy",
    "LocationFailed",
    "LocationLoading",
    "LocationReady",
    "LocationState",
    "LocationStatus",
    "NetworkState",
    "OrientationLock",
    "OrientationState",
    "PermissionStatus",
    "RawOrientation",
    "ScreenBaseModel",
    "ScreenEnum",
    "ViewportDimensions",
    "layout_height",
    "orientation_from_raw",
]
