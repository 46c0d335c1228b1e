# Filename: storefront/constants.py
# Seed catalog and fixed storefront values.

import datetime as dt
from typing import List

from storefront.models import Category, Product, Review

BRAND = "Kenya-Amazon"
DEFAULT_SIZES = [7, 8, 9, 10, 11]
DEFAULT_PRODUCT_IMAGE = "https://picsum.photos/seed/new/800/800"

_SEED = [
    {
        "id": "1",
        "name": "Velocity Runner X1",
        "price": 145.00,
        "original_price": 180.00,
        "description": (
            "Engineered for speed, the Velocity Runner X1 features our proprietary foam technology "
            "for maximum energy return. The breathable mesh upper keeps you cool during intense runs."
        ),
        "image": "https://picsum.photos/seed/sneaker1/800/800",
        "sizes": [7, 8, 9, 10, 11, 12],
        "category": Category.RUNNING,
        "rating": 4.8,
    },
    {
        "id": "2",
        "name": "Street Legend High",
        "price": 120.00,
        "description": (
            "A modern take on a classic silhouette. The Street Legend High combines premium leather "
            "with urban aesthetics. Perfect for daily wear."
        ),
        "image": "https://picsum.photos/seed/sneaker2/800/800",
        "sizes": [6, 7, 8, 9, 10, 11],
        "category": Category.LIFESTYLE,
        "rating": 4.5,
    },
    {
        "id": "3",
        "name": "Court Master Pro",
        "price": 160.00,
        "description": (
            "Dominate the court with superior grip and ankle support. The Court Master Pro is "
            "designed for explosive movements and hard landings."
        ),
        "image": "https://picsum.photos/seed/sneaker3/800/800",
        "sizes": [8, 9, 10, 11, 12, 13, 14],
        "category": Category.BASKETBALL,
        "rating": 4.9,
    },
    {
        "id": "4",
        "name": "Urban Drift Low",
        "price": 95.00,
        "original_price": 110.00,
        "description": (
            "Minimalist design meets maximum comfort. The Urban Drift Low is your go-to shoe "
            "for exploring the city."
        ),
        "image": "https://picsum.photos/seed/sneaker4/800/800",
        "sizes": [7, 8, 9, 10, 11],
        "category": Category.LIFESTYLE,
        "rating": 4.2,
    },
    {
        "id": "5",
        "name": "Marathon Elite",
        "price": 220.00,
        "description": (
            "For the serious long-distance runner. Carbon plate technology and "
            "ultra-lightweight materials."
        ),
        "image": "https://picsum.photos/seed/sneaker5/800/800",
        "sizes": [7, 8, 9, 10, 11, 12],
        "category": Category.RUNNING,
        "rating": 5.0,
    },
    {
        "id": "6",
        "name": "Dunk King Retro",
        "price": 135.00,
        "description": (
            "Throwback vibes with modern durability. The Dunk King Retro brings 90s style "
            "to today's streets."
        ),
        "image": "https://picsum.photos/seed/sneaker6/800/800",
        "sizes": [8, 9, 10, 11, 12],
        "category": Category.BASKETBALL,
        "rating": 4.6,
    },
]


# (author, rating, comment, date) per product id
_SEED_REVIEWS = {
    "1": [
        ("Wanjiru K.", 5, "Light and springy, my 10K time dropped in two weeks.", "2024-03-02"),
        ("Daniel O.", 5, "Breathable upper, no blisters after a half marathon.", "2024-03-18"),
        ("Achieng M.", 4, "Great ride, runs slightly narrow.", "2024-04-05"),
    ],
    "2": [
        ("Brian M.", 5, "The leather feels premium and they go with everything.", "2024-02-11"),
        ("Faith N.", 4, "Stiff for the first few days, then very comfortable.", "2024-03-27"),
    ],
    "3": [
        ("Kevin W.", 5, "Ankle support is excellent, grip on indoor courts is top.", "2024-01-20"),
        ("Moses K.", 5, "Best basketball shoe I have owned.", "2024-02-28"),
        ("Sharon A.", 4, "Heavy but very stable on landings.", "2024-04-14"),
    ],
    "4": [
        ("Joy C.", 4, "Simple and comfortable for walking around town.", "2024-03-09"),
        ("Peter N.", 4, "Good value at the sale price.", "2024-04-01"),
    ],
    "5": [
        ("Eliud T.", 5, "The carbon plate makes a real difference late in the race.", "2024-02-17"),
        ("Grace J.", 5, "Expensive, but worth it for race day.", "2024-03-30"),
    ],
    "6": [
        ("Collins O.", 5, "Retro look with a modern fit, love them.", "2024-01-08"),
        ("Mercy W.", 4, "Colour is exactly as pictured.", "2024-02-22"),
    ],
}


def _seed_reviews(product_id: str) -> List[Review]:
    return [
        Review(id=f"r-{product_id}-{n}", user_name=name, rating=rating, comment=comment, date=dt.date.fromisoformat(day))
        for n, (name, rating, comment, day) in enumerate(_SEED_REVIEWS.get(product_id, []), start=1)
    ]


def seed_products() -> List[Product]:
    """Fresh copy of the demo catalog; review counts follow the seeded review lists."""
    products = []
    for p in _SEED:
        reviews_list = _seed_reviews(p["id"])
        products.append(Product(brand=BRAND, reviews=len(reviews_list), reviews_list=reviews_list, **p))
    return products
