# Filename: storefront/cart.py
# Cart transitions. Every function takes the current list of CartItem and
# returns a new list; nothing is mutated in place.

import logging
from typing import List

from decouple import config

from storefront.errors import ValidationError
from storefront.models import CartItem, CartTotals, Product

logger = logging.getLogger(__name__)

FREE_SHIPPING_THRESHOLD = config("FREE_SHIPPING_THRESHOLD", cast=float, default=150.0)
FLAT_SHIPPING_FEE = config("FLAT_SHIPPING_FEE", cast=float, default=15.0)


def _same(item: CartItem, product_id: str, size: float) -> bool:
    return item.id == product_id and item.selected_size == size


def add_to_cart(cart: List[CartItem], product: Product, size: float, quantity: int = 1) -> List[CartItem]:
    """
    Add `quantity` pairs of `product` in `size`.
    If the (product id, size) pair is already in the cart the quantities are summed,
    otherwise a new line is appended at the end.
    """
    if size is None or size not in product.sizes:
        raise ValidationError("Please select a size")
    if quantity < 1:
        raise ValidationError("Quantity must be at least 1")

    if any(_same(it, product.id, size) for it in cart):
        logger.info(f"[Cart] +{quantity} {product.id} size={size:g} (merged)")
        return [
            it.model_copy(update={"quantity": it.quantity + quantity}) if _same(it, product.id, size) else it
            for it in cart
        ]

    logger.info(f"[Cart] +{quantity} {product.id} size={size:g} (new line)")
    item = CartItem(**product.model_dump(), selected_size=size, quantity=quantity)
    return [*cart, item]


def remove_from_cart(cart: List[CartItem], product_id: str, size: float) -> List[CartItem]:
    return [it for it in cart if not _same(it, product_id, size)]


def update_quantity(cart: List[CartItem], product_id: str, size: float, delta: int) -> List[CartItem]:
    """Shift a line's quantity by `delta`, never below 1. Unknown lines are left alone."""
    return [
        it.model_copy(update={"quantity": max(1, it.quantity + delta)}) if _same(it, product_id, size) else it
        for it in cart
    ]


def reconcile(cart: List[CartItem], products: List[Product]) -> List[CartItem]:
    """
    Refresh every line from the catalog copy of its product.
    Lines whose product was removed, or whose size is no longer offered, are dropped.
    """
    by_id = {p.id: p for p in products}
    out = []
    for it in cart:
        product = by_id.get(it.id)
        if product is None or it.selected_size not in product.sizes:
            logger.info(f"[Cart] dropped {it.id} size={it.selected_size:g} (no longer in catalog)")
            continue
        out.append(CartItem(**product.model_dump(), selected_size=it.selected_size, quantity=it.quantity))
    return out


def clear_cart(cart: List[CartItem]) -> List[CartItem]:
    if cart:
        logger.info(f"[Cart] cleared {len(cart)} line(s)")
    return []


def item_count(cart: List[CartItem]) -> int:
    return sum(it.quantity for it in cart)


def compute_totals(cart: List[CartItem]) -> CartTotals:
    subtotal = round(sum(it.price * it.quantity for it in cart), 2)
    shipping = 0.0 if subtotal > FREE_SHIPPING_THRESHOLD else FLAT_SHIPPING_FEE
    return CartTotals(subtotal=subtotal, shipping=shipping, total=round(subtotal + shipping, 2))
