"""Listing search, filtering and list operations. Pure functions, no Flask."""

from typing import Iterable, List, Optional

from models import Product

ALL = "all"

CATEGORIES = {
    "eco-gadgets": "Eco Gadgets",
    "reusable": "Reusable Products",
    "organic": "Organic Food",
    "clothing": "Clothing",
    "furniture": "Furniture",
    "energy": "Energy Solutions",
    "others": "Others",
}


def category_name(category: str) -> str:
    return CATEGORIES.get(category, category)


def matches_term(product: Product, term: str) -> bool:
    if not term:
        return True
    needle = term.lower()
    return (
        needle in product.title.lower()
        or needle in product.description.lower()
        or needle in product.seller.lower()
    )


def matches_location(product: Product, location: str) -> bool:
    return location == ALL or product.location == location


def matches_category(product: Product, category: str) -> bool:
    return category == ALL or product.category == category


def filter_products(products: Iterable[Product], term: str = "", location: str = ALL,
                    category: str = ALL) -> List[Product]:
    """Products matching the search term, location and category, in input order."""
    filtered = list(products)
    if term:
        filtered = [p for p in filtered if matches_term(p, term)]
    if location != ALL:
        filtered = [p for p in filtered if matches_location(p, location)]
    if category != ALL:
        filtered = [p for p in filtered if matches_category(p, category)]
    return filtered


def find_product(products: Iterable[Product], product_id: Optional[str]) -> Optional[Product]:
    if not product_id:
        return None
    return next((p for p in products if p.id == product_id), None)


def products_by_seller(products: Iterable[Product], email: str) -> List[Product]:
    return [p for p in products if p.seller_email == email]


def delete_product(products: Iterable[Product], product_id: str) -> List[Product]:
    """A new list without the listing ``product_id``; unknown ids change nothing."""
    return [p for p in products if p.id != product_id]


def location_options(products: Iterable[Product]) -> List[str]:
    return sorted({p.location for p in products if p.location})


class ListingError(ValueError):
    """A submitted listing is invalid."""


def new_listing(product_id: str, seller, title: str, description: str, price: str,
                category: str, location: str, image: Optional[str] = None) -> Product:
    """Build a listing owned by ``seller`` from raw form values."""
    title = (title or "").strip()
    if not title:
        raise ListingError("Title is required")
    try:
        amount = int((price or "").strip())
    except ValueError:
        raise ListingError("Price must be a whole number") from None
    if amount < 0:
        raise ListingError("Price cannot be negative")
    if category not in CATEGORIES:
        raise ListingError("Please choose a category")
    location = (location or "").strip().lower()
    if not location:
        raise ListingError("Location is required")
    return Product(
        id=product_id,
        title=title,
        description=(description or "").strip(),
        price=amount,
        category=category,
        location=location,
        image=image,
        seller=seller.name,
        seller_email=seller.email,
    )
