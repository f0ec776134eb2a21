from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from .models import Place


class SearchRequest(BaseModel):
    vector: list[float] = Field(..., min_length=1)
    k: int = Field(default=10, ge=1)


class SearchHitOut(BaseModel):
    place: Place
    score: float


class SearchResponse(BaseModel):
    results: list[SearchHitOut]


class PlacesPage(BaseModel):
    places: list[Place]
    total: int
    offset: int


class IngestRequest(BaseModel):
    rows: list[dict[str, Any]] = Field(..., min_length=1)


class MetadataResponse(BaseModel):
    count: int
    dimension: int | None
    states: list[str]
