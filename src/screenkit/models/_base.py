"""Base model and enum for device-provider payloads.

Every screenkit model inherits from :class:`ScreenBaseModel` which
provides:

* ``alias_generator=to_camel`` so camelCase provider keys (as emitted by
  the mobile runtime) map automatically to snake_case fields.
* Frozen instances, so a state value can be shared with renderers
  without defensive copies.

Provider-facing enums inherit from :class:`ScreenEnum` which tolerates
case and separator differences and resolves any unmapped value to the
subclass' ``UNKNOWN`` member instead of raising ``ValueError``.
"""

from __future__ import annotations

import enum
import math
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def safe_float(value: Any) -> float | None:
    """Convert *value* to float, returning ``None`` when absent or unparseable."""
    if value is None or value == "":
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result):
        return None
    return result


def merge_nested(values: Any, key: str) -> Any:
    """Lift the mapping stored under *key* into the top level of *values*."""
    if not isinstance(values, dict):
        return values
    nested = values.get(key)
    merged = dict(values)
    if isinstance(nested, dict):
        merged.update(nested)
    return merged


class ScreenEnum(enum.StrEnum):
    """Base for enums whose values come from a device provider.

    Every subclass **must** define ``UNKNOWN``.
    """

    @classmethod
    def _missing_(cls, value: object) -> ScreenEnum:
        if isinstance(value, str):
            normalized = value.strip().lower()
            for candidate in (normalized, normalized.replace("_", "-"), normalized.replace("-", "_")):
                for member in cls:
                    if member.value == candidate:
                        return member
        # noinspection PyUnresolvedReferences
        unknown: ScreenEnum = cls.UNKNOWN  # type: ignore[attr-defined]
        return unknown


class ScreenBaseModel(BaseModel):
    """Base for screenkit value models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )
