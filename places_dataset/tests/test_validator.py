from places_dataset.models import Listing, Place
from places_dataset.validation import (
    ReasonCode,
    Severity,
    ValidatorConfig,
    validate_place,
)


def _listing(**overrides) -> Listing:
    data = {"id": "l1", "url": "https://www.airbnb.com/rooms/1", "price": 55.0, "rating": 4.2, "reviews": 30}
    data.update(overrides)
    return Listing(**data)


def _place(**overrides) -> Place:
    data = {
        "state_name": "Rajasthan",
        "city_name": "Jaipur",
        "latitude": 26.9124,
        "longitude": 75.7873,
        "google_maps_url": "https://www.google.com/maps?q=26.9124,75.7873",
        "wikipedia_content": "Jaipur is the capital of Rajasthan.",
        "unsplash_images": ("https://images.unsplash.com/photo-1",),
        "airbnb_listings": (_listing(),),
        "vector_embeddings": (0.1, 0.2, 0.3),
    }
    data.update(overrides)
    return Place(**data)


def _reasons(result) -> list[tuple[str, ReasonCode]]:
    return [(i.field, i.reason) for i in result.issues]


def test_valid_place_has_no_issues():
    result = validate_place(_place())
    assert result.is_valid
    assert result.issues == ()


def test_latitude_out_of_range_is_single_error():
    result = validate_place(_place(latitude=95))
    assert len(result.errors) == 1
    error = result.errors[0]
    assert error.field == "latitude"
    assert error.reason == ReasonCode.out_of_range
    assert error.severity == Severity.error
    assert not result.is_valid


def test_coordinate_bounds_are_inclusive():
    assert validate_place(_place(latitude=-90.0, longitude=180.0)).is_valid
    assert _reasons(validate_place(_place(longitude=-180.01))) == [("longitude", ReasonCode.out_of_range)]


def test_non_finite_coordinate():
    result = validate_place(_place(latitude=float("nan")))
    assert _reasons(result) == [("latitude", ReasonCode.non_finite)]


def test_all_missing_required_fields_are_collected():
    result = validate_place(Place())
    assert _reasons(result) == [
        ("state_name", ReasonCode.missing),
        ("city_name", ReasonCode.missing),
        ("latitude", ReasonCode.missing),
        ("longitude", ReasonCode.missing),
        ("google_maps_url", ReasonCode.missing),
        ("vector_embeddings", ReasonCode.missing),
    ]


def test_blank_names_count_as_missing():
    result = validate_place(_place(state_name="   ", city_name=""))
    assert _reasons(result) == [
        ("state_name", ReasonCode.missing),
        ("city_name", ReasonCode.missing),
    ]


def test_uri_rules():
    result = validate_place(_place(
        google_maps_url="maps/jaipur",
        unsplash_images=("https://images.unsplash.com/ok", "/relative.jpg", ""),
        airbnb_listings=(_listing(url="mailto:host@example.com"),),
    ))
    assert _reasons(result) == [
        ("google_maps_url", ReasonCode.invalid_uri),
        ("unsplash_images[1]", ReasonCode.invalid_uri),
        ("unsplash_images[2]", ReasonCode.invalid_uri),
        ("airbnb_listings[0].url", ReasonCode.invalid_uri),
    ]


def test_listing_ranges():
    result = validate_place(_place(airbnb_listings=(
        _listing(id="a", price=-1.0),
        _listing(id="b", rating=5.5),
        _listing(id="c", reviews=-3),
        _listing(id="d", reviews=2.5),
        _listing(id="e", rating=None, reviews=None),
    )))
    assert _reasons(result) == [
        ("airbnb_listings[0].price", ReasonCode.out_of_range),
        ("airbnb_listings[1].rating", ReasonCode.out_of_range),
        ("airbnb_listings[2].reviews", ReasonCode.out_of_range),
        ("airbnb_listings[3].reviews", ReasonCode.not_integer),
    ]


def test_listing_requires_id_url_and_price():
    result = validate_place(_place(airbnb_listings=(Listing(),)))
    assert _reasons(result) == [
        ("airbnb_listings[0].id", ReasonCode.missing),
        ("airbnb_listings[0].url", ReasonCode.missing),
        ("airbnb_listings[0].price", ReasonCode.missing),
    ]


def test_whole_float_review_count_is_accepted():
    assert validate_place(_place(airbnb_listings=(_listing(reviews=12.0),))).is_valid


def test_duplicate_listing_ids_within_place():
    result = validate_place(_place(airbnb_listings=(_listing(id="x"), _listing(id="y"), _listing(id="x"))))
    assert _reasons(result) == [("airbnb_listings[2].id", ReasonCode.duplicate_listing_id)]


def test_duplicate_images_are_allowed():
    image = "https://images.unsplash.com/photo-1"
    assert validate_place(_place(unsplash_images=(image, image))).is_valid


def test_vector_too_short():
    result = validate_place(_place(vector_embeddings=(0.5,)))
    assert _reasons(result) == [("vector_embeddings", ReasonCode.vector_too_short)]


def test_vector_expected_dimension():
    assert validate_place(_place(), expected_dim=3).is_valid
    result = validate_place(_place(), expected_dim=768)
    assert _reasons(result) == [("vector_embeddings", ReasonCode.dimension_mismatch)]


def test_vector_non_finite():
    result = validate_place(_place(vector_embeddings=(0.1, float("inf"))))
    assert _reasons(result) == [("vector_embeddings", ReasonCode.non_finite)]


def test_long_text_is_warning_only():
    result = validate_place(_place(wikipedia_content="x" * 3001))
    assert result.is_valid
    assert result.errors == []
    assert len(result.warnings) == 1
    assert result.warnings[0].reason == ReasonCode.text_too_long
    assert result.warnings[0].severity == Severity.warning

    assert validate_place(_place(wikipedia_content="x" * 3000)).issues == ()


def test_text_threshold_is_configurable():
    config = ValidatorConfig(text_soft_limit=10)
    result = validate_place(_place(wikipedia_content="a" * 11), config=config)
    assert [w.field for w in result.warnings] == ["wikipedia_content"]


def test_errors_and_warnings_are_collected_together():
    result = validate_place(_place(latitude=100.0, wikipedia_content="x" * 5000), expected_dim=4)
    assert [i.reason for i in result.issues] == [
        ReasonCode.out_of_range,
        ReasonCode.text_too_long,
        ReasonCode.dimension_mismatch,
    ]


def test_validation_is_idempotent():
    place = _place(latitude=95, airbnb_listings=(_listing(rating=9.0),))
    assert validate_place(place) == validate_place(place)


def test_huge_integer_review_count_is_reported():
    result = validate_place(_place(airbnb_listings=(_listing(reviews=10**400),)))
    assert _reasons(result) == [("airbnb_listings[0].reviews", ReasonCode.out_of_range)]


def test_huge_finite_values():
    result = validate_place(_place(
        latitude=1e308,
        airbnb_listings=(_listing(price=1e308, rating=-1e308),),
        vector_embeddings=(1e200, 1.7976931348623157e308),
    ))
    assert _reasons(result) == [
        ("latitude", ReasonCode.out_of_range),
        ("airbnb_listings[0].rating", ReasonCode.out_of_range),
    ]
