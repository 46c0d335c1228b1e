# Filename: storefront/reviews.py
# Review submission and the per-product review list.

import datetime as dt
import logging
from typing import List, Optional

from storefront.errors import ValidationError
from storefront.models import Product, Review

logger = logging.getLogger(__name__)


def build_review(product: Product, user_name: str, rating: int, comment: str, today: Optional[dt.date] = None) -> Review:
    """Validate a review form and turn it into a Review with an id unique within `product`."""
    user_name = (user_name or "").strip()
    comment = (comment or "").strip()
    if not user_name or not comment:
        raise ValidationError("Please fill in your name and a comment")
    if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
        raise ValidationError("Rating must be a whole number from 1 to 5")

    taken = {r.id for r in product.reviews_list or []}
    n = len(taken) + 1
    while f"r-{product.id}-{n}" in taken:
        n += 1
    return Review(
        id=f"r-{product.id}-{n}",
        user_name=user_name,
        rating=rating,
        comment=comment,
        date=today or dt.date.today(),
    )


def add_review(products: List[Product], product_id: str, review: Review) -> List[Product]:
    """
    Append `review` to the product's list and reset the review count to the list length.
    The review is taken as already validated. Unknown product ids are a no-op.
    """
    out = []
    for p in products:
        if p.id == product_id:
            reviews_list = [*(p.reviews_list or []), review]
            p = p.model_copy(update={"reviews_list": reviews_list, "reviews": len(reviews_list)})
            logger.info(f"[Reviews] {product_id} now has {p.reviews} review(s)")
        out.append(p)
    return out
