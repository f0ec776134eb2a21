from __future__ import annotations

import math
from typing import Any

from pydantic import AnyUrl, TypeAdapter, ValidationError

from ..models import Listing, Place
from .config import DEFAULT_VALIDATOR_CONFIG, ValidatorConfig
from .models import ReasonCode, Severity, ValidationIssue, ValidationResult

_URL_ADAPTER = TypeAdapter(AnyUrl)


def _is_absolute_uri(value: str) -> bool:
    """Absolute URI: parses, and has both a scheme and a host."""
    try:
        url = _URL_ADAPTER.validate_python(value)
    except ValidationError:
        return False
    return bool(url.scheme) and bool(url.host)


def _is_finite(value: float | int) -> bool:
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def _check_range(
    issues: list[ValidationIssue],
    field: str,
    value: float | None,
    low: float | None,
    high: float | None,
    required: bool,
) -> None:
    if value is None:
        if required:
            issues.append(ValidationIssue(field=field, reason=ReasonCode.missing, message="required"))
        return
    if not _is_finite(value):
        if isinstance(value, int):
            # Integers past the float range are finite but unrepresentable here.
            issues.append(ValidationIssue(field=field, reason=ReasonCode.out_of_range, message="integer too large"))
        else:
            issues.append(ValidationIssue(field=field, reason=ReasonCode.non_finite, message=f"{value!r} is not finite"))
        return
    if (low is not None and value < low) or (high is not None and value > high):
        bounds = f"[{low if low is not None else '-inf'}, {high if high is not None else 'inf'}]"
        issues.append(ValidationIssue(
            field=field,
            reason=ReasonCode.out_of_range,
            message=f"{value!r} outside {bounds}",
        ))


def _check_uri(issues: list[ValidationIssue], field: str, value: Any, required: bool) -> None:
    if value is None or value == "":
        if required:
            issues.append(ValidationIssue(field=field, reason=ReasonCode.missing, message="required"))
        else:
            issues.append(ValidationIssue(field=field, reason=ReasonCode.invalid_uri, message="empty URI"))
        return
    if not _is_absolute_uri(value):
        issues.append(ValidationIssue(
            field=field,
            reason=ReasonCode.invalid_uri,
            message=f"{value!r} is not an absolute URI",
        ))


def _check_listing(issues: list[ValidationIssue], listing: Listing, field: str) -> None:
    if not listing.id:
        issues.append(ValidationIssue(field=f"{field}.id", reason=ReasonCode.missing, message="required"))
    _check_uri(issues, f"{field}.url", listing.url, required=True)
    _check_range(issues, f"{field}.price", listing.price, 0.0, None, required=True)
    _check_range(issues, f"{field}.rating", listing.rating, 0.0, 5.0, required=False)

    reviews = listing.reviews
    _check_range(issues, f"{field}.reviews", reviews, 0, None, required=False)
    if reviews is not None and _is_finite(reviews) and reviews != int(reviews):
        issues.append(ValidationIssue(
            field=f"{field}.reviews",
            reason=ReasonCode.not_integer,
            message=f"{reviews!r} is not a whole number",
        ))


def _check_vector(
    issues: list[ValidationIssue],
    vector: tuple[float, ...] | None,
    expected_dim: int | None,
    config: ValidatorConfig,
) -> None:
    field = "vector_embeddings"
    if vector is None:
        issues.append(ValidationIssue(field=field, reason=ReasonCode.missing, message="required"))
        return
    if len(vector) < config.min_dimension:
        issues.append(ValidationIssue(
            field=field,
            reason=ReasonCode.vector_too_short,
            message=f"length {len(vector)} < {config.min_dimension}",
        ))
    if expected_dim is not None and len(vector) != expected_dim:
        issues.append(ValidationIssue(
            field=field,
            reason=ReasonCode.dimension_mismatch,
            message=f"length {len(vector)} != {expected_dim}",
        ))
    if not all(_is_finite(v) for v in vector):
        issues.append(ValidationIssue(field=field, reason=ReasonCode.non_finite, message="contains NaN or inf"))


def validate_place(
    place: Place,
    expected_dim: int | None = None,
    config: ValidatorConfig = DEFAULT_VALIDATOR_CONFIG,
) -> ValidationResult:
    """
    Check a Place against the dataset schema.

    Every rule runs independently and all violations are collected in field
    order. Nothing is raised for representable input. ``expected_dim`` pins
    the vector length, which is how a store keeps one dimensionality.
    Oversized ``wikipedia_content`` is reported as a warning only.
    """
    issues: list[ValidationIssue] = []

    for field in ("state_name", "city_name"):
        value = getattr(place, field)
        if value is None or not value.strip():
            issues.append(ValidationIssue(field=field, reason=ReasonCode.missing, message="required, non-empty"))

    _check_range(issues, "latitude", place.latitude, -90.0, 90.0, required=True)
    _check_range(issues, "longitude", place.longitude, -180.0, 180.0, required=True)
    _check_uri(issues, "google_maps_url", place.google_maps_url, required=True)

    content = place.wikipedia_content
    if content is not None and len(content) > config.text_soft_limit:
        issues.append(ValidationIssue(
            field="wikipedia_content",
            reason=ReasonCode.text_too_long,
            severity=Severity.warning,
            message=f"{len(content)} characters > {config.text_soft_limit}",
        ))

    for i, image in enumerate(place.unsplash_images or ()):
        _check_uri(issues, f"unsplash_images[{i}]", image, required=False)

    seen_ids: set[str] = set()
    for i, listing in enumerate(place.airbnb_listings or ()):
        field = f"airbnb_listings[{i}]"
        _check_listing(issues, listing, field)
        if listing.id:
            if listing.id in seen_ids:
                issues.append(ValidationIssue(
                    field=f"{field}.id",
                    reason=ReasonCode.duplicate_listing_id,
                    message=f"id {listing.id!r} repeats within this place",
                ))
            seen_ids.add(listing.id)

    _check_vector(issues, place.vector_embeddings, expected_dim, config)

    return ValidationResult(issues=tuple(issues))
