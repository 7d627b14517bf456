"""Orientation and viewport models, plus the derived layout height."""

from __future__ import annotations

import enum
from typing import Any

from pydantic import Field, model_validator

from screenkit.models._base import ScreenBaseModel, ScreenEnum, merge_nested


class RawOrientation(ScreenEnum):
    """Device-reported rotation tag."""

    UNKNOWN = "unknown"
    PORTRAIT_UP = "portrait-up"
    PORTRAIT_DOWN = "portrait-down"
    LANDSCAPE_LEFT = "landscape-left"
    LANDSCAPE_RIGHT = "landscape-right"


class OrientationState(enum.StrEnum):
    """Semantic orientation the layout is derived from."""

    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class OrientationLock(enum.StrEnum):
    """Requests accepted by the device rotation lock."""

    UNLOCK = "unlock"
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


_LANDSCAPE_TAGS = frozenset({RawOrientation.LANDSCAPE_LEFT, RawOrientation.LANDSCAPE_RIGHT})


def orientation_from_raw(raw: RawOrientation | str) -> OrientationState:
    """Collapse a raw rotation tag into portrait/landscape.

    Both landscape tags map to ``LANDSCAPE``; everything else, including
    ``UNKNOWN`` and unrecognised tags, maps to ``PORTRAIT``.
    """
    if RawOrientation(raw) in _LANDSCAPE_TAGS:
        return OrientationState.LANDSCAPE
    return OrientationState.PORTRAIT


class ViewportDimensions(ScreenBaseModel):
    """Window size in density-independent pixels.

    Change notifications usually carry ``{"window": {...}, "screen": {...}}``;
    the ``window`` entry is lifted when present.
    """

    width: float = Field(ge=0.0)
    height: float = Field(ge=0.0)

    @model_validator(mode="before")
    @classmethod
    def _merge_window(cls, values: Any) -> Any:
        return merge_nested(values, "window")


def layout_height(
    orientation: OrientationState,
    dimensions: ViewportDimensions,
    *,
    chrome: float = 120.0,
    portrait_height: float = 250.0,
) -> float:
    """Content height for the given orientation and viewport.

    Landscape gives the content the viewport height minus *chrome*;
    portrait uses the fixed *portrait_height*.
    """
    if orientation == OrientationState.LANDSCAPE:
        return dimensions.height - chrome
    return portrait_height
