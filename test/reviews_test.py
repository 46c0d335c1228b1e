import datetime as dt

import pytest

from storefront.catalog import find_product
from storefront.constants import seed_products
from storefront.errors import ValidationError
from storefront.reviews import add_review, build_review

TODAY = dt.date(2024, 5, 1)


def test_add_review_creates_list_and_counts(product_a):
    review = build_review(product_a, "Wanjiru", 5, "Great for long runs", today=TODAY)
    products = add_review([product_a], "A", review)
    p = products[0]
    assert p.reviews_list == [review]
    assert p.reviews == 1


def test_count_tracks_list_length(product_a):
    products = [product_a]
    for i in range(3):
        before = find_product(products, "A").reviews
        p = find_product(products, "A")
        products = add_review(products, "A", build_review(p, f"user{i}", 4, "nice", today=TODAY))
        after = find_product(products, "A")
        assert after.reviews == before + 1 == len(after.reviews_list)
    assert len({r.id for r in after.reviews_list}) == 3


def test_add_review_unknown_product_is_noop(product_a):
    review = build_review(product_a, "x", 3, "ok", today=TODAY)
    assert add_review([product_a], "missing", review) == [product_a]


def test_review_record_serializes_with_wire_names(product_a):
    review = build_review(product_a, "Otieno", 4, "Solid", today=TODAY)
    assert review.model_dump(mode="json", by_alias=True) == {
        "id": review.id,
        "userName": "Otieno",
        "rating": 4,
        "comment": "Solid",
        "date": "2024-05-01",
    }


@pytest.mark.parametrize(
    "name, rating, comment",
    [("", 5, "text"), ("me", 5, "   "), ("me", 0, "text"), ("me", 6, "text"), ("me", 4.5, "text"), ("me", True, "x")],
)
def test_build_review_validates_form(product_a, name, rating, comment):
    with pytest.raises(ValidationError):
        build_review(product_a, name, rating, comment, today=TODAY)


def test_seed_catalog_counts_match_review_lists():
    for p in seed_products():
        assert p.reviews == len(p.reviews_list) > 0


def test_first_review_on_seed_product_adds_one():
    products = seed_products()
    velocity = find_product(products, "1")
    products = add_review(products, "1", build_review(velocity, "Njeri", 5, "Fast and light", today=TODAY))
    after = find_product(products, "1")
    assert after.reviews == velocity.reviews + 1 == len(after.reviews_list)
    assert after.reviews_list[-1].id == f"r-1-{velocity.reviews + 1}"
