"""screenkit - device-state acquisition and layout adaptation for mobile screens."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("screenkit")
except PackageNotFoundError:
    __version__ = "0+local"
from screenkit.catalog import CatalogClient
from screenkit.config import ScreenConfig
from screenkit.exceptions import (
    CatalogError,
    ConnectivityCheckError,
    LocationAcquisitionError,
    LocationError,
    LocationErrorKind,
    LockRequestError,
    PermissionDeniedError,
    ScreenConfigError,
    ScreenError,
)
from screenkit.layout import OrientationEngine
from screenkit.location import LocationController
from screenkit.menu import MenuController
from screenkit.models import (
    CatalogItem,
    ConnectivityState,
    Fix,
    LocationAccuracy,
    LocationFailed,
    LocationLoading,
    LocationReady,
    LocationState,
    LocationStatus,
    NetworkState,
    OrientationLock,
    OrientationState,
    PermissionStatus,
    RawOrientation,
    ViewportDimensions,
    layout_height,
    orientation_from_raw,
)
from screenkit.views import build_map_view, build_menu_view, build_video_view

__all__ = [
    "__version__",
    "CatalogClient",
    "CatalogError",
    "CatalogItem",
    "ConnectivityCheckError",
    "ConnectivityState",
    "Fix",
    "LocationAccuracy",
    "LocationAcquisitionError",
    "LocationController",
    "LocationError",
    "LocationErrorKind",
    "LocationFailed",
    "LocationLoading",
    "LocationReady",
    "LocationState",
    "LocationStatus",
    "LockRequestError",
    "MenuController",
    "NetworkState",
    "OrientationEngine",
    "OrientationLock",
    "OrientationState",
    "PermissionDeniedError",
    "PermissionStatus",
    "RawOrientation",
    "ScreenConfig",
    "ScreenConfigError",
    "ScreenError",
    "ViewportDimensions",
    "build_map_view",
    "build_menu_view",
    "build_video_view",
    "layout_height",
    "orientation_from_raw",
]
