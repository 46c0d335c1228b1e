# Filename: storefront/catalog.py
# Catalog transitions used by the admin dashboard and the generator flow.
# Operations that name an unknown product id are no-ops, not errors.

import logging
import math
import time
from typing import Iterable, List, Optional

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from storefront.constants import BRAND, DEFAULT_PRODUCT_IMAGE, DEFAULT_SIZES
from storefront.errors import ValidationError
from storefront.models import Category, OfferSuggestion, Product

logger = logging.getLogger(__name__)

_PRODUCT_LIST = TypeAdapter(List[Product])


def find_product(products: List[Product], product_id: str) -> Optional[Product]:
    return next((p for p in products if p.id == product_id), None)


def add_product(products: List[Product], product: Product) -> List[Product]:
    """Append a complete product. The caller owns id uniqueness."""
    logger.info(f"[Catalog] added {product.id} {product.name!r}")
    return [*products, product]


def add_generated_product(products: List[Product], product: Product) -> List[Product]:
    """Products coming out of the design studio go to the front of the catalog."""
    logger.info(f"[Catalog] added generated {product.id} {product.name!r}")
    return [product, *products]


def remove_product(products: List[Product], product_id: str) -> List[Product]:
    return [p for p in products if p.id != product_id]


def update_product(products: List[Product], product: Product) -> List[Product]:
    """Replace the stored record with the same id wholesale."""
    return [product if p.id == product.id else p for p in products]


def apply_offer_suggestions(products: List[Product], suggestions: Iterable[OfferSuggestion]) -> List[Product]:
    """
    Reprice products from offer suggestions.
    - The first discount records the prior price as original_price; later ones keep it.
    - Unknown product ids are skipped.
    - A suggestion above the pre-discount price, negative, or not finite is skipped so that
      original_price never ends up below price.
    """
    by_id = {p.id: p for p in products}
    for s in suggestions:
        current = by_id.get(s.product_id)
        if current is None:
            logger.info(f"[Offers] skipped unknown product {s.product_id!r}")
            continue

        original = current.original_price if current.original_price is not None else current.price
        if not math.isfinite(s.suggested_price) or s.suggested_price < 0 or s.suggested_price > original:
            logger.warning(
                f"[Offers] skipped {s.product_id}: suggested {s.suggested_price:.2f} "
                f"outside [0, {original:.2f}]"
            )
            continue

        by_id[s.product_id] = current.model_copy(
            update={"original_price": original, "price": s.suggested_price}
        )
        logger.info(f"[Offers] {s.product_id}: {current.price:.2f} -> {s.suggested_price:.2f} ({s.reasoning})")

    return [by_id[p.id] for p in products]


def search_products(products: List[Product], term: str) -> List[Product]:
    needle = (term or "").strip().lower()
    if not needle:
        return list(products)
    return [p for p in products if needle in p.name.lower()]


def filter_by_category(products: List[Product], category: Optional[Category]) -> List[Product]:
    if category is None:
        return list(products)
    return [p for p in products if p.category == category]


def top_sellers(products: List[Product], limit: int = 4) -> List[Product]:
    """Rank by sales counter; products without one count as zero."""
    ranked = sorted(products, key=lambda p: p.sales or 0, reverse=True)
    return ranked[:limit]


def new_admin_product(
    name: str,
    price: float,
    category: Category = Category.LIFESTYLE,
    description: str = "",
    image: str = DEFAULT_PRODUCT_IMAGE,
) -> Product:
    """Product as created from the admin "Add New Sneaker" form."""
    try:
        return Product(
            id=f"p-{int(time.time() * 1000)}",
            name=(name or "").strip() or "New Product",
            brand=BRAND,
            price=price or 0,
            description=description or "",
            image=image or "",
            sizes=list(DEFAULT_SIZES),
            category=category,
            rating=0,
            reviews=0,
        )
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid product: {e.errors()[0]['msg']}") from e


def new_custom_product(name: str, prompt: str, image: str, price: float) -> Product:
    """Catalog entry for a sneaker designed in the generator studio."""
    if not (image or "").strip():
        raise ValidationError("Generate an image before adding the design to the catalog")
    try:
        return Product(
            id=f"custom-{int(time.time() * 1000)}",
            name=(name or "").strip() or "Custom Design",
            brand=BRAND,
            price=price,
            description=(prompt or "").strip(),
            image=image,
            sizes=list(DEFAULT_SIZES),
            category=Category.CUSTOM,
            rating=0,
            reviews=0,
        )
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid product: {e.errors()[0]['msg']}") from e


def import_products(products: List[Product], payload: list) -> int:
    """
    "Database import" from the admin dashboard.
    Records are validated as products and counted; nothing is merged into the catalog.
    """
    try:
        records = _PRODUCT_LIST.validate_python(payload)
    except PydanticValidationError as e:
        raise ValidationError(f"Import rejected: {e.error_count()} invalid field(s)") from e
    known = {p.id for p in products}
    overlap = sum(1 for r in records if r.id in known)
    logger.info(f"[Catalog] import acknowledged {len(records)} record(s), {overlap} already in catalog")
    return len(records)
