"""Screen configuration for screenkit."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Callable
from typing import Any

from screenkit.exceptions import ScreenConfigError

_ACCURACIES = frozenset({"lowest", "low", "balanced", "high", "highest", "best_for_navigation"})


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _parse_env(env_key: str, value: str, parser: Callable[[str], Any]) -> Any:
    try:
        return parser(value)
    except ValueError as exc:
        raise ScreenConfigError(f"{env_key}={value!r} is not a valid {parser.__name__}") from exc


@dataclasses.dataclass(frozen=True)
class ScreenConfig:
    """Screen configuration.

    Parameters
    ----------
    span_lat : float
        Latitude delta of the map region shown around a fix.
    span_lon : float
        Longitude delta of the map region shown around a fix.
    location_accuracy : str
        Accuracy requested from the location provider.
    landscape_chrome_height : float
        Height taken by headers and controls in landscape; the content
        gets the rest of the viewport.
    portrait_content_height : float
        Fixed content height in portrait.
    release_lock_on_exit : bool
        Request an orientation unlock when an engine's ``async with``
        block exits.
    catalog_base_url : str
        Base URL of the product catalog API.
    catalog_limit : int
        Number of products requested by default.
    catalog_timeout : float
        Total timeout in seconds for a catalog request.
    video_id : str
        Identifier of the embedded video.
    """

    span_lat: float = 0.01
    span_lon: float = 0.01
    location_accuracy: str = "high"
    landscape_chrome_height: float = 120.0
    portrait_content_height: float = 250.0
    release_lock_on_exit: bool = False
    catalog_base_url: str = "https://fakestoreapi.com"
    catalog_limit: int = 10
    catalog_timeout: float = 10.0
    video_id: str = "dQw4w9WgXcQ"

    def __post_init__(self) -> None:
        if self.location_accuracy not in _ACCURACIES:
            raise ScreenConfigError(f"Unknown location accuracy: {self.location_accuracy!r}")
        if self.catalog_limit <= 0:
            raise ScreenConfigError("catalog_limit must be positive")

    @property
    def video_url(self) -> str:
        """Embed URL for the configured video."""
        return f"https://www.youtube.com/embed/{self.video_id}"

    @classmethod
    def from_env(cls, **overrides: Any) -> ScreenConfig:
        """Create configuration from ``SCREENKIT_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        ScreenConfigError
            If a numeric variable cannot be parsed.
        """
        env = os.environ

        _ENV_CONFIG_MAP: dict[str, tuple[str, Callable[[str], Any]]] = {
            "SCREENKIT_SPAN_LAT": ("span_lat", float),
            "SCREENKIT_SPAN_LON": ("span_lon", float),
            "SCREENKIT_LOCATION_ACCURACY": ("location_accuracy", str),
            "SCREENKIT_LANDSCAPE_CHROME_HEIGHT": ("landscape_chrome_height", float),
            "SCREENKIT_PORTRAIT_CONTENT_HEIGHT": ("portrait_content_height", float),
            "SCREENKIT_CATALOG_BASE_URL": ("catalog_base_url", str),
            "SCREENKIT_CATALOG_LIMIT": ("catalog_limit", int),
            "SCREENKIT_CATALOG_TIMEOUT": ("catalog_timeout", float),
            "SCREENKIT_VIDEO_ID": ("video_id", str),
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, (field_name, parser) in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _parse_env(env_key, val, parser)

        if "release_lock_on_exit" not in overrides:
            config_kwargs["release_lock_on_exit"] = _env_bool(
                env.get("SCREENKIT_RELEASE_LOCK_ON_EXIT"),
                False,
            )

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
