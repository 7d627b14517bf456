"""Location permission, fix and acquisition-state models."""

from __future__ import annotations

import enum
from typing import Annotated, Any, Literal

from pydantic import Field, field_validator, model_validator

from screenkit.exceptions import LocationErrorKind
from screenkit.models._base import ScreenBaseModel, ScreenEnum, merge_nested, safe_float


class PermissionStatus(ScreenEnum):
    """Answer to a foreground location permission request.

    Anything other than ``GRANTED`` is treated as a denial.
    """

    UNKNOWN = "unknown"
    GRANTED = "granted"
    DENIED = "denied"
    UNDETERMINED = "undetermined"


class LocationAccuracy(enum.StrEnum):
    """Accuracy levels a fix can be requested with."""

    LOWEST = "lowest"
    LOW = "low"
    BALANCED = "balanced"
    HIGH = "high"
    HIGHEST = "highest"
    BEST_FOR_NAVIGATION = "best_for_navigation"


class LocationStatus(enum.StrEnum):
    LOADING = "loading"
    ERROR = "error"
    READY = "ready"


class Fix(ScreenBaseModel):
    """A single resolved coordinate pair.

    Providers commonly nest the coordinates under ``coords``
    (``{"coords": {"latitude": ..., "longitude": ...}, "timestamp": ...}``);
    both that shape and the flat one are accepted.

    Parameters
    ----------
    latitude : float
        Latitude in degrees.
    longitude : float
        Longitude in degrees.
    accuracy : float or None
        Horizontal accuracy radius in metres, when reported.
    timestamp : float or None
        Epoch timestamp of the fix, when reported.
    """

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    accuracy: float | None = None
    timestamp: float | None = None

    @model_validator(mode="before")
    @classmethod
    def _merge_coords(cls, values: Any) -> Any:
        return merge_nested(values, "coords")

    @field_validator("accuracy", "timestamp", mode="before")
    @classmethod
    def _coerce_optional_floats(cls, value: Any) -> float | None:
        return safe_float(value)


class LocationLoading(ScreenBaseModel):
    """An acquisition cycle is in flight."""

    status: Literal[LocationStatus.LOADING] = LocationStatus.LOADING


class LocationFailed(ScreenBaseModel):
    """The last acquisition cycle failed; retriable by the user."""

    status: Literal[LocationStatus.ERROR] = LocationStatus.ERROR
    message: str
    kind: LocationErrorKind = LocationErrorKind.ACQUISITION_FAILURE


class LocationReady(ScreenBaseModel):
    """A fix is available.

    ``span_lat``/``span_lon`` are display-zoom constants, not derived
    from the fix.
    """

    status: Literal[LocationStatus.READY] = LocationStatus.READY
    latitude: float
    longitude: float
    span_lat: float = 0.01
    span_lon: float = 0.01


LocationState = Annotated[
    LocationLoading | LocationFailed | LocationReady,
    Field(discriminator="status"),
]
"""Exactly one acquisition state is active at any time."""
