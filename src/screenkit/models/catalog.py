"""Product catalog model."""

from __future__ import annotations

from pydantic import AliasChoices, Field

from screenkit.models._base import ScreenBaseModel


class CatalogItem(ScreenBaseModel):
    """A single product record from the remote catalog."""

    id: int
    title: str
    category: str = ""
    price: float
    image_url: str = Field(default="", validation_alias=AliasChoices("image", "imageUrl", "image_url"))
