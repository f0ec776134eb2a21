from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Listing(BaseModel):
    """Short-term-rental metadata attached to a Place."""

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    url: str | None = None
    price: float | None = Field(default=None, description="Per-night amount, currency is caller convention")
    rating: float | None = None
    reviews: int | float | None = None


class Place(BaseModel):
    """
    One dataset record.

    Required fields are optional on the model so that an incomplete row is
    still representable; ``validate_place`` reports what is missing.
    """

    model_config = ConfigDict(frozen=True)

    state_name: str | None = None
    city_name: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    google_maps_url: str | None = None
    wikipedia_content: str | None = None
    unsplash_images: tuple[str, ...] | None = None
    airbnb_listings: tuple[Listing, ...] | None = None
    vector_embeddings: tuple[float, ...] | None = None

    @property
    def dimension(self) -> int | None:
        if self.vector_embeddings is None:
            return None
        return len(self.vector_embeddings)
