from __future__ import annotations

import json
import math
import numbers
from collections.abc import Mapping
from typing import Any, List

from ..errors import DecodeError
from ..models import Listing, Place

COLUMNS: List[str] = [
    "state_name",
    "city_name",
    "latitude",
    "longitude",
    "google_maps_url",
    "wikipedia_content",
    "unsplash_images",
    "airbnb_listings",
    "vector_embeddings",
]

LISTING_KEYS: List[str] = ["id", "url", "price", "rating", "reviews"]

_TEXT_FIELDS = ("state_name", "city_name", "google_maps_url", "wikipedia_content")


def _is_absent(value: Any) -> bool:
    # pandas fills missing cells with NaN
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _to_native(value: Any) -> Any:
    """Unwrap numpy arrays and scalars coming from columnar sources."""
    if hasattr(value, "tolist") and not isinstance(value, (str, bytes)):
        return value.tolist()
    return value


def _to_float(value: Any, field: str, row_index: int | None) -> float:
    try:
        return float(value)
    except OverflowError:
        # Integers beyond the float range, e.g. a 400-digit JSON literal.
        raise DecodeError(f"number too large: {str(value)[:20]}...", field, row_index) from None


def _parse_float(raw: Any, field: str, row_index: int | None) -> float | None:
    if _is_absent(raw):
        return None
    if _is_number(raw):
        return _to_float(raw, field, row_index)
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            return float(text)
        except ValueError:
            raise DecodeError(f"not a number: {raw!r}", field, row_index) from None
    raise DecodeError(f"not a number: {raw!r}", field, row_index)


def _load_array(raw: Any, field: str, row_index: int | None) -> list | None:
    """
    Return the JSON array held by ``raw``.

    ``None`` means the field is absent, an empty string means an empty array.
    """
    if _is_absent(raw):
        return None
    if isinstance(raw, str):
        if not raw.strip():
            return []
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise DecodeError(f"invalid JSON ({exc.msg})", field, row_index) from None
    raw = _to_native(raw)
    if isinstance(raw, tuple):
        raw = list(raw)
    if not isinstance(raw, list):
        raise DecodeError(f"expected a JSON array, got {type(raw).__name__}", field, row_index)
    return raw


def _decode_images(raw: Any, row_index: int | None) -> tuple[str, ...] | None:
    items = _load_array(raw, "unsplash_images", row_index)
    if items is None:
        return None
    for i, item in enumerate(items):
        if not isinstance(item, str):
            raise DecodeError("expected an array of strings", f"unsplash_images[{i}]", row_index)
    return tuple(items)


def _listing_number(obj: Mapping, key: str, field: str, row_index: int | None) -> Any:
    value = _to_native(obj.get(key))
    if _is_absent(value):
        return None
    if not _is_number(value):
        raise DecodeError(f"expected a number, got {value!r}", f"{field}.{key}", row_index)
    _to_float(value, f"{field}.{key}", row_index)
    return value


def _decode_listings(raw: Any, row_index: int | None) -> tuple[Listing, ...] | None:
    items = _load_array(raw, "airbnb_listings", row_index)
    if items is None:
        return None

    listings: list[Listing] = []
    for i, obj in enumerate(items):
        field = f"airbnb_listings[{i}]"
        if not isinstance(obj, Mapping):
            raise DecodeError("expected an array of objects", field, row_index)

        listing_id = _to_native(obj.get("id"))
        if _is_absent(listing_id):
            listing_id = None
        elif isinstance(listing_id, bool) or not isinstance(listing_id, (str, int)):
            raise DecodeError(f"expected text id, got {listing_id!r}", f"{field}.id", row_index)
        else:
            listing_id = str(listing_id)

        url = obj.get("url")
        if _is_absent(url):
            url = None
        elif not isinstance(url, str):
            raise DecodeError(f"expected text url, got {url!r}", f"{field}.url", row_index)

        price = _listing_number(obj, "price", field, row_index)
        rating = _listing_number(obj, "rating", field, row_index)
        reviews = _listing_number(obj, "reviews", field, row_index)

        listings.append(Listing(
            id=listing_id,
            url=url,
            price=float(price) if price is not None else None,
            rating=float(rating) if rating is not None else None,
            reviews=reviews,
        ))
    return tuple(listings)


def _decode_vector(raw: Any, row_index: int | None) -> tuple[float, ...] | None:
    items = _load_array(raw, "vector_embeddings", row_index)
    if items is None:
        return None
    vector: list[float] = []
    for i, item in enumerate(items):
        if not _is_number(item):
            raise DecodeError("expected an array of numbers", f"vector_embeddings[{i}]", row_index)
        vector.append(_to_float(item, f"vector_embeddings[{i}]", row_index))
    return tuple(vector)


def decode_row(raw_row: Mapping[str, Any], row_index: int | None = None) -> Place:
    """
    Decode one raw row into a Place.

    JSON-bearing columns may hold JSON text (flat sources) or native
    sequences (columnar sources); both decode to the same Place. Raises
    ``DecodeError`` for malformed JSON sub-fields and unparseable coordinates.
    Missing or out-of-range values are left for the validator to report.
    """
    text: dict[str, str | None] = {}
    for field in _TEXT_FIELDS:
        value = raw_row.get(field)
        if _is_absent(value):
            text[field] = None
        elif isinstance(value, str):
            text[field] = value
        else:
            raise DecodeError(f"expected text, got {type(value).__name__}", field, row_index)

    return Place(
        state_name=text["state_name"],
        city_name=text["city_name"],
        latitude=_parse_float(raw_row.get("latitude"), "latitude", row_index),
        longitude=_parse_float(raw_row.get("longitude"), "longitude", row_index),
        google_maps_url=text["google_maps_url"],
        wikipedia_content=text["wikipedia_content"],
        unsplash_images=_decode_images(raw_row.get("unsplash_images"), row_index),
        airbnb_listings=_decode_listings(raw_row.get("airbnb_listings"), row_index),
        vector_embeddings=_decode_vector(raw_row.get("vector_embeddings"), row_index),
    )


def _dumps(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=True)


def _listing_to_dict(listing: Listing) -> dict[str, Any]:
    # Insertion order of this dict is the serialized key order.
    return {key: getattr(listing, key) for key in LISTING_KEYS}


def encode_place(place: Place) -> dict[str, str]:
    """
    Encode a Place into a flat row of strings, in ``COLUMNS`` order.

    Absent fields are omitted so that ``decode_row(encode_place(p)) == p``.
    """
    row: dict[str, str] = {}
    for field in COLUMNS:
        value = getattr(place, field)
        if value is None:
            continue
        if field in ("latitude", "longitude"):
            row[field] = repr(value)
        elif field == "airbnb_listings":
            row[field] = _dumps([_listing_to_dict(listing) for listing in value])
        elif field in ("unsplash_images", "vector_embeddings"):
            row[field] = _dumps(list(value))
        else:
            row[field] = value
    return row
