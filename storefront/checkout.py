# Filename: storefront/checkout.py
# Mock checkout. M-Pesa and card payments always succeed once the form is valid;
# there is no payment provider behind them.

import datetime as dt
import logging
import re
import uuid
from typing import List, Optional, Tuple

from storefront.cart import clear_cart, compute_totals
from storefront.errors import ValidationError
from storefront.models import CartItem, Order, PaymentMethod

logger = logging.getLogger(__name__)

_KE_PREFIX = re.compile(r"^(\+?254|0)")


def normalize_mpesa_phone(phone: Optional[str]) -> str:
    """'+254 712 345 678', '0712345678' and '712 345 678' all become '712345678'."""
    digits = re.sub(r"[\s-]", "", phone or "")
    digits = _KE_PREFIX.sub("", digits)
    if not re.fullmatch(r"\d{9}", digits):
        raise ValidationError("Enter a valid M-Pesa phone number")
    return digits


def checkout(cart: List[CartItem], method: PaymentMethod, phone: Optional[str] = None) -> Tuple[Order, List[CartItem]]:
    """Place the order. Returns the order and the (now empty) cart."""
    if not cart:
        raise ValidationError("Your cart is empty")

    normalized = normalize_mpesa_phone(phone) if method == PaymentMethod.MPESA else None
    order = Order(
        id=f"ord-{uuid.uuid4().hex[:10]}",
        items=list(cart),
        totals=compute_totals(cart),
        method=method,
        phone=f"+254{normalized}" if normalized else None,
        status="paid",
        created_at=dt.datetime.now(dt.timezone.utc),
    )
    logger.info(f"[Checkout] order {order.id} paid via {method.value} total={order.totals.total:.2f}")
    return order, clear_cart(cart)
