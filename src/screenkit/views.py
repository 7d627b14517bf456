"""Render models derived from controller state.

Each builder is a pure function of its inputs; screens rebuild the view
on every state change instead of storing it.
"""

from __future__ import annotations

import enum
from collections.abc import Sequence

from screenkit.config import ScreenConfig
from screenkit.layout import OrientationEngine
from screenkit.models._base import ScreenBaseModel
from screenkit.models.catalog import CatalogItem
from screenkit.models.connectivity import ConnectivityState
from screenkit.models.location import LocationFailed, LocationReady, LocationState
from screenkit.models.orientation import OrientationState


class MapMode(enum.StrEnum):
    LOADING = "loading"
    ERROR = "error"
    MAP = "map"


class ConnectivityBanner(ScreenBaseModel):
    connected: bool
    text: str


class MapScreenView(ScreenBaseModel):
    """What the map screen shows for one location/connectivity pair."""

    mode: MapMode
    loading_text: str | None = None
    error_text: str | None = None
    retry_label: str | None = None
    banner: ConnectivityBanner | None = None
    region: LocationReady | None = None
    marker_title: str | None = None
    marker_description: str | None = None
    info_lines: tuple[str, ...] = ()
    refresh_label: str | None = None


class VideoScreenView(ScreenBaseModel):
    orientation: OrientationState
    badge_text: str
    orientation_text: str
    content_height: float
    width_text: str
    height_text: str
    video_url: str


class MenuItemCard(ScreenBaseModel):
    id: int
    title: str
    category: str
    price_text: str
    image_url: str


class MenuScreenView(ScreenBaseModel):
    loading: bool
    loading_text: str | None = None
    cards: tuple[MenuItemCard, ...] = ()


def _banner(connectivity: ConnectivityState) -> ConnectivityBanner | None:
    if connectivity is ConnectivityState.CONNECTED:
        return ConnectivityBanner(connected=True, text="Connected to the internet")
    if connectivity is ConnectivityState.DISCONNECTED:
        return ConnectivityBanner(connected=False, text="No internet connection")
    # Not sampled yet.
    return None


def build_map_view(state: LocationState, connectivity: ConnectivityState) -> MapScreenView:
    if isinstance(state, LocationReady):
        return MapScreenView(
            mode=MapMode.MAP,
            banner=_banner(connectivity),
            region=state,
            marker_title="My location",
            marker_description="You are here",
            info_lines=(
                f"Latitude: {state.latitude:.6f}",
                f"Longitude: {state.longitude:.6f}",
            ),
            refresh_label="Update location",
        )
    if isinstance(state, LocationFailed):
        return MapScreenView(
            mode=MapMode.ERROR,
            error_text=state.message or "Could not load the map",
            retry_label="Retry",
        )
    return MapScreenView(mode=MapMode.LOADING, loading_text="Getting location...")


def build_video_view(engine: OrientationEngine, config: ScreenConfig | None = None) -> VideoScreenView:
    config = config or ScreenConfig()
    orientation = engine.orientation
    dimensions = engine.dimensions
    return VideoScreenView(
        orientation=orientation,
        badge_text="Landscape" if orientation is OrientationState.LANDSCAPE else "Portrait",
        orientation_text=orientation.value.upper(),
        content_height=engine.layout_height(),
        width_text=f"{dimensions.width:.0f}px",
        height_text=f"{dimensions.height:.0f}px",
        video_url=config.video_url,
    )


def build_menu_view(loading: bool, items: Sequence[CatalogItem]) -> MenuScreenView:
    if loading:
        return MenuScreenView(loading=True, loading_text="Loading products...")
    return MenuScreenView(
        loading=False,
        cards=tuple(
            MenuItemCard(
                id=item.id,
                title=item.title,
                category=item.category,
                price_text=f"${item.price:.2f}",
                image_url=item.image_url,
            )
            for item in items
        ),
    )
