# Filename: storefront/main.py
# HTTP surface for the storefront. One session per process: the whole AppState
# sits on app.state.store and every route swaps in a new state computed by the
# pure functions in cart / catalog / reviews / checkout.

import asyncio
from typing import Any, List, Optional

from decouple import config
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import Field

from storefront import accounts, cart, catalog, checkout, llm_logic, reviews
from storefront.constants import DEFAULT_PRODUCT_IMAGE, seed_products
from storefront.errors import GenerationError, ValidationError
from storefront.models import (
    AppState,
    CartItem,
    CartTotals,
    Category,
    ImageSize,
    OfferSuggestion,
    Order,
    PaymentMethod,
    Product,
    Role,
    StoreModel,
    User,
)
from storefront.services.pdf import generate_receipt_pdf
from storefront.utils import logger, public_url

RECEIPTS_DIR = config("RECEIPTS_DIR", default="public")
CHECKOUT_DELAY_SECONDS = config("CHECKOUT_DELAY_SECONDS", cast=float, default=3.0)

app = FastAPI(title="Kenya-Amazon Sneakers API")
app.mount("/public", StaticFiles(directory=RECEIPTS_DIR, check_dir=False), name="public")
app.state.store = AppState(products=seed_products())


# -------------------- Payloads -------------------- #
class AdminProductPayload(StoreModel):
    name: str = ""
    price: float = 0
    category: Category = Category.LIFESTYLE
    description: str = ""
    image: str = DEFAULT_PRODUCT_IMAGE


class ReviewPayload(StoreModel):
    user_name: str = ""
    rating: int = 0
    comment: str = ""


class AddToCartPayload(StoreModel):
    product_id: str
    size: Optional[float] = None
    quantity: int = 1


class QtyPayload(StoreModel):
    delta: int


class CartView(StoreModel):
    items: List[CartItem]
    totals: CartTotals
    count: int


class CheckoutPayload(StoreModel):
    method: PaymentMethod = PaymentMethod.MPESA
    phone: Optional[str] = None


class CheckoutResult(StoreModel):
    order: Order
    receipt_url: Optional[str] = None


class LoginPayload(StoreModel):
    role: Role = Role.USER
    name: str = "Demo User"
    email: str = "demo@example.com"


class RegisterPayload(StoreModel):
    name: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""


class ImagePayload(StoreModel):
    prompt: str = ""
    size: ImageSize = ImageSize.ONE_K


class GeneratedProductPayload(StoreModel):
    name: str = ""
    prompt: str = ""
    image: str = ""
    price: float = Field(150.0, ge=0)


class AnalysisPayload(StoreModel):
    categories: List[Category] = Field(default_factory=lambda: list(Category))


class OffersPayload(StoreModel):
    theme: str = ""


class ApplyOffersPayload(StoreModel):
    suggestions: List[OfferSuggestion]


# -------------------- Helpers -------------------- #
def _state(request: Request) -> AppState:
    return request.app.state.store


def _commit(request: Request, **changes: Any) -> AppState:
    new_state = _state(request).model_copy(update=changes)
    request.app.state.store = new_state
    return new_state


def _commit_products(request: Request, products: List[Product]) -> AppState:
    """Swap in a new catalog and bring the cart lines in line with it."""
    return _commit(request, products=products, cart=cart.reconcile(_state(request).cart, products))


def _cart_view(items: List[CartItem]) -> CartView:
    return CartView(items=items, totals=cart.compute_totals(items), count=cart.item_count(items))


def _product_or_404(state: AppState, product_id: str) -> Product:
    product = catalog.find_product(state.products, product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@app.exception_handler(ValidationError)
async def _validation_error(request: Request, exc: ValidationError):
    logger.info(f"Rejected {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(GenerationError)
async def _generation_error(request: Request, exc: GenerationError):
    logger.error(f"Generation failed on {request.url.path}: {exc}")
    return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.get("/")
def root():
    return {"message": "Kenya-Amazon Sneakers API running"}


# -------------------- Catalog -------------------- #
@app.get("/api/products", response_model=List[Product])
async def list_products(request: Request, category: Optional[Category] = None, q: str = ""):
    products = catalog.filter_by_category(_state(request).products, category)
    return catalog.search_products(products, q)


@app.get("/api/products/top", response_model=List[Product])
async def top_products(request: Request, limit: int = 4):
    return catalog.top_sellers(_state(request).products, limit)


@app.get("/api/products/{product_id}", response_model=Product)
async def get_product(request: Request, product_id: str):
    return _product_or_404(_state(request), product_id)


@app.post("/api/products/{product_id}/reviews", response_model=Product, status_code=status.HTTP_201_CREATED)
async def submit_review(request: Request, product_id: str, payload: ReviewPayload):
    product = _product_or_404(_state(request), product_id)
    review = reviews.build_review(product, payload.user_name, payload.rating, payload.comment)
    state = _commit_products(request, reviews.add_review(_state(request).products, product_id, review))
    return catalog.find_product(state.products, product_id)


# -------------------- Admin -------------------- #
@app.post("/api/admin/products", response_model=Product, status_code=status.HTTP_201_CREATED)
async def admin_add_product(request: Request, payload: AdminProductPayload):
    product = catalog.new_admin_product(
        payload.name, payload.price, payload.category, payload.description, payload.image
    )
    _commit_products(request, catalog.add_product(_state(request).products, product))
    return product


@app.put("/api/admin/products/{product_id}")
async def admin_update_product(request: Request, product_id: str, product: Product):
    if product.id != product_id:
        raise ValidationError("Product id in the body does not match the URL")
    found = catalog.find_product(_state(request).products, product_id) is not None
    _commit_products(request, catalog.update_product(_state(request).products, product))
    return {"updated": found}


@app.delete("/api/admin/products/{product_id}")
async def admin_delete_product(request: Request, product_id: str):
    found = catalog.find_product(_state(request).products, product_id) is not None
    _commit_products(request, catalog.remove_product(_state(request).products, product_id))
    return {"removed": found}


@app.post("/api/admin/products/import")
async def admin_import_products(request: Request, payload: List[dict]):
    return {"acknowledged": catalog.import_products(_state(request).products, payload)}


@app.post("/api/admin/market-analysis")
async def admin_market_analysis(payload: AnalysisPayload):
    return {"analysis": llm_logic.generate_market_analysis(payload.categories)}


@app.post("/api/admin/offers", response_model=List[OfferSuggestion])
async def admin_generate_offers(request: Request, payload: OffersPayload):
    return llm_logic.generate_campaign_offers(_state(request).products, payload.theme)


@app.post("/api/admin/offers/apply", response_model=List[Product])
async def admin_apply_offers(request: Request, payload: ApplyOffersPayload):
    state = _commit_products(
        request, catalog.apply_offer_suggestions(_state(request).products, payload.suggestions)
    )
    return state.products


# -------------------- Design studio -------------------- #
@app.post("/api/generator/image")
async def generate_image(payload: ImagePayload):
    return {"image": llm_logic.generate_sneaker_image(payload.prompt, payload.size)}


@app.post("/api/generator/products", response_model=Product, status_code=status.HTTP_201_CREATED)
async def add_generated_product(request: Request, payload: GeneratedProductPayload):
    product = catalog.new_custom_product(payload.name, payload.prompt, payload.image, payload.price)
    _commit_products(request, catalog.add_generated_product(_state(request).products, product))
    return product


# -------------------- Cart -------------------- #
@app.get("/api/cart", response_model=CartView)
async def get_cart(request: Request):
    return _cart_view(_state(request).cart)


@app.post("/api/cart/items", response_model=CartView)
async def add_cart_item(request: Request, payload: AddToCartPayload):
    product = _product_or_404(_state(request), payload.product_id)
    state = _commit(request, cart=cart.add_to_cart(_state(request).cart, product, payload.size, payload.quantity))
    return _cart_view(state.cart)


@app.patch("/api/cart/items/{product_id}/{size}", response_model=CartView)
async def update_cart_item(request: Request, product_id: str, size: float, payload: QtyPayload):
    state = _commit(request, cart=cart.update_quantity(_state(request).cart, product_id, size, payload.delta))
    return _cart_view(state.cart)


@app.delete("/api/cart/items/{product_id}/{size}", response_model=CartView)
async def remove_cart_item(request: Request, product_id: str, size: float):
    state = _commit(request, cart=cart.remove_from_cart(_state(request).cart, product_id, size))
    return _cart_view(state.cart)


@app.post("/api/checkout", response_model=CheckoutResult)
async def place_order(request: Request, payload: CheckoutPayload):
    if not _state(request).cart:
        raise ValidationError("Your cart is empty")
    if payload.method == PaymentMethod.MPESA:
        checkout.normalize_mpesa_phone(payload.phone)

    # payment provider round-trip
    await asyncio.sleep(CHECKOUT_DELAY_SECONDS)

    state = _state(request)
    order, emptied = checkout.checkout(cart.reconcile(state.cart, state.products), payload.method, payload.phone)
    _commit(request, cart=emptied)

    receipt_url = None
    try:
        _, filename = generate_receipt_pdf(order, out_dir=RECEIPTS_DIR)
        receipt_url = public_url(filename)
    except OSError as e:
        logger.error(f"Receipt for {order.id} not written: {e}")
    return CheckoutResult(order=order, receipt_url=receipt_url)


# -------------------- Session -------------------- #
@app.post("/api/auth/login", response_model=User)
async def login(request: Request, payload: LoginPayload):
    user = accounts.login(payload.role, payload.name, payload.email)
    _commit(request, user=user)
    return user


@app.post("/api/auth/register", response_model=User, status_code=status.HTTP_201_CREATED)
async def register(request: Request, payload: RegisterPayload):
    user = accounts.register(payload.name, payload.email, payload.password, payload.confirm_password)
    _commit(request, user=user)
    return user


@app.post("/api/auth/logout")
async def logout(request: Request):
    _commit(request, user=None)
    return {"ok": True}


@app.get("/api/auth/me", response_model=Optional[User])
async def me(request: Request):
    return _state(request).user


if __name__ == "__main__":
    import uvicorn
    port = config("PORT", cast=int, default=8000)
    uvicorn.run(app, host="0.0.0.0", port=port)
