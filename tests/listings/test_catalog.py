"""Search/filter pipeline and list operations over listings."""

import pytest

from modules.listings.catalog import (
    CATEGORIES,
    ListingError,
    category_name,
    delete_product,
    filter_products,
    find_product,
    location_options,
    new_listing,
    products_by_seller,
)


def _ids(products):
    return [p.id for p in products]


def test_no_filters_returns_everything_in_order(products) -> None:
    result = filter_products(products, "", "all", "all")
    assert result == products
    assert result is not products


def test_term_matches_title_on_seed_set(products) -> None:
    result = filter_products(products, "chair", "all", "all")
    assert [p.title for p in result] == ["Vintage Wooden Chair"]


def test_term_is_case_insensitive_and_checks_description_and_seller(products) -> None:
    assert _ids(filter_products(products, "PLASTIC")) == ["3", "4"]
    assert _ids(filter_products(products, "greentech")) == ["2"]


def test_location_and_category_are_combined(products) -> None:
    assert _ids(filter_products(products, location="delhi")) == ["1", "4"]
    assert _ids(filter_products(products, category="reusable")) == ["3", "4"]
    assert _ids(filter_products(products, location="delhi", category="reusable")) == ["4"]
    assert _ids(filter_products(products, "solar", "mumbai", "energy")) == ["5"]


def test_location_match_is_exact(products) -> None:
    assert filter_products(products, location="Delhi") == []


def test_unknown_category_yields_nothing(products) -> None:
    assert filter_products(products, category="toys") == []


def test_find_product(products) -> None:
    assert find_product(products, "3").title == "Organic Cotton Tote Bags"
    assert find_product(products, "99") is None
    assert find_product(products, None) is None
    assert find_product(products, "") is None


def test_delete_removes_exactly_one(products) -> None:
    remaining = delete_product(products, "2")
    assert _ids(remaining) == ["1", "3", "4", "5"]
    assert remaining[0] == products[0]
    assert len(products) == 5


def test_delete_unknown_id_is_noop(products) -> None:
    assert delete_product(products, "nope") == products


def test_products_by_seller(products, make_product) -> None:
    mine = make_product("10", seller_email="me@example.com")
    assert products_by_seller(products + [mine], "me@example.com") == [mine]


def test_category_name_and_locations(products) -> None:
    assert len(CATEGORIES) == 7
    assert category_name("eco-gadgets") == "Eco Gadgets"
    assert category_name("mystery") == "mystery"
    assert location_options(products) == ["bangalore", "delhi", "mumbai"]


def test_new_listing_copies_seller_and_normalizes(alice) -> None:
    product = new_listing("42", alice, title=" Lamp ", description="Brass", price="350",
                          category="furniture", location=" Pune ")
    assert product.title == "Lamp"
    assert product.price == 350
    assert product.location == "pune"
    assert product.seller == "Alice"
    assert product.seller_email == "alice@example.com"
    assert product.status == "active"
    assert product.image is None


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"title": "  "}, "Title is required"),
        ({"price": "12.5"}, "whole number"),
        ({"price": "-1"}, "negative"),
        ({"category": "toys"}, "category"),
        ({"location": ""}, "Location"),
    ],
)
def test_new_listing_rejects_bad_input(alice, overrides, message) -> None:
    fields = dict(title="Lamp", description="", price="10", category="others", location="delhi")
    fields.update(overrides)
    with pytest.raises(ListingError, match=message):
        new_listing("1", alice, **fields)
