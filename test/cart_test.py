import pytest

from storefront.cart import (
    add_to_cart,
    clear_cart,
    compute_totals,
    item_count,
    reconcile,
    remove_from_cart,
    update_quantity,
)
from storefront.errors import ValidationError


def test_repeated_add_merges_into_one_line(product_a):
    cart = add_to_cart([], product_a, 9, 1)
    assert [(it.id, it.selected_size, it.quantity) for it in cart] == [("A", 9, 1)]

    cart = add_to_cart(cart, product_a, 9, 2)
    assert [(it.id, it.selected_size, it.quantity) for it in cart] == [("A", 9, 3)]


def test_quantities_sum_for_same_pair(product_a):
    cart = []
    for q in (1, 4, 2, 7):
        cart = add_to_cart(cart, product_a, 10, q)
    assert len(cart) == 1
    assert cart[0].quantity == 14


def test_different_size_is_a_new_line_in_insertion_order(product_a, product_b):
    cart = add_to_cart([], product_a, 9)
    cart = add_to_cart(cart, product_b, 10)
    cart = add_to_cart(cart, product_a, 10)
    assert [it.key for it in cart] == [("A", 9), ("B", 10), ("A", 10)]


def test_add_does_not_mutate_input(product_a):
    first = add_to_cart([], product_a, 9)
    second = add_to_cart(first, product_a, 9, 5)
    assert first[0].quantity == 1
    assert second[0].quantity == 6


@pytest.mark.parametrize("size", [None, 7, 12.5])
def test_add_rejects_unavailable_size(product_a, size):
    with pytest.raises(ValidationError):
        add_to_cart([], product_a, size)


def test_add_rejects_zero_quantity(product_a):
    with pytest.raises(ValidationError):
        add_to_cart([], product_a, 9, 0)


def test_remove_then_add_gives_single_fresh_line(product_a):
    cart = add_to_cart([], product_a, 9, 3)
    cart = remove_from_cart(cart, "A", 9)
    assert cart == []
    cart = add_to_cart(cart, product_a, 9, 1)
    assert len(cart) == 1
    assert cart[0].quantity == 1


def test_remove_missing_is_noop(product_a):
    cart = add_to_cart([], product_a, 9)
    assert remove_from_cart(cart, "A", 10) == cart
    assert remove_from_cart(cart, "zzz", 9) == cart


@pytest.mark.parametrize("delta", [-1, -5, -1000])
def test_update_quantity_never_below_one(product_a, delta):
    cart = add_to_cart([], product_a, 9, 2)
    cart = update_quantity(cart, "A", 9, delta)
    assert cart[0].quantity == 1


def test_update_quantity_increments(product_a):
    cart = add_to_cart([], product_a, 9, 2)
    assert update_quantity(cart, "A", 9, 3)[0].quantity == 5


def test_update_quantity_unknown_line_is_noop(product_a):
    cart = add_to_cart([], product_a, 9, 2)
    assert update_quantity(cart, "A", 8, 1) == cart


def test_totals_free_shipping_above_threshold(product_a, product_b):
    # 145 + 60 = 205
    cart = add_to_cart(add_to_cart([], product_a, 9), product_b, 10)
    totals = compute_totals(cart)
    assert totals.subtotal == 205
    assert totals.shipping == 0
    assert totals.total == 205


def test_totals_flat_fee_at_or_below_threshold(product_a, product_b):
    cart = add_to_cart([], product_b, 10)
    totals = compute_totals(cart)
    assert (totals.subtotal, totals.shipping, totals.total) == (60, 15, 75)

    # exactly 150 still pays shipping
    cheap = product_a.model_copy(update={"price": 75.0})
    totals = compute_totals(add_to_cart([], cheap, 9, 2))
    assert (totals.subtotal, totals.shipping, totals.total) == (150, 15, 165)


def test_totals_are_pure(product_a):
    cart = add_to_cart([], product_a, 9, 2)
    assert compute_totals(cart) == compute_totals(cart)
    assert cart[0].quantity == 2


def test_clear_and_count(product_a, product_b):
    cart = add_to_cart(add_to_cart([], product_a, 9, 2), product_b, 10, 3)
    assert item_count(cart) == 5
    assert clear_cart(cart) == []


@pytest.mark.parametrize("quantity, shipping, total", [(2, 0, 200), (1, 15, 115)])
def test_totals_for_hundred_dollar_pair(product_a, quantity, shipping, total):
    hundred = product_a.model_copy(update={"price": 100.0})
    totals = compute_totals(add_to_cart([], hundred, 9, quantity))
    assert totals.shipping == shipping
    assert totals.total == total


def test_reconcile_refreshes_price_from_catalog(product_a, product_b):
    cart = add_to_cart(add_to_cart([], product_a, 9, 2), product_b, 10)
    discounted = product_a.model_copy(update={"price": 100.0, "original_price": 145.0})
    cart = reconcile(cart, [discounted, product_b])
    assert [(it.id, it.price, it.quantity) for it in cart] == [("A", 100.0, 2), ("B", 60.0, 1)]
    assert cart[0].original_price == 145.0
    # 200 + 60
    assert compute_totals(cart).total == 260


def test_reconcile_drops_removed_products_and_sizes(product_a, product_b):
    cart = add_to_cart(add_to_cart(add_to_cart([], product_a, 9), product_a, 10), product_b, 11)
    smaller = product_a.model_copy(update={"sizes": [8, 9]})
    cart = reconcile(cart, [smaller])
    assert [it.key for it in cart] == [("A", 9)]


def test_reconcile_keeps_order_and_does_not_mutate(product_a, product_b):
    cart = add_to_cart(add_to_cart([], product_b, 10), product_a, 9)
    assert [it.key for it in reconcile(cart, [product_a, product_b])] == [("B", 10), ("A", 9)]
    reconcile(cart, [])
    assert len(cart) == 2
