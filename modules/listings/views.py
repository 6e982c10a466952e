"""Render-ready view models for the listing pages.

Plain functions from (session user, products, filter state) to dicts that the
templates consume; nothing here touches Flask.
"""

from typing import Iterable, Optional

from models import Product, parse_timestamp
from utils import mailto_link

from .catalog import (
    ALL,
    CATEGORIES,
    category_name,
    filter_products,
    location_options,
    products_by_seller,
)

CURRENCY = "₹"
DATE_FORMAT = "%d %b %Y"


def format_price(price: int) -> str:
    return f"{CURRENCY}{price}"


def format_date(timestamp: str) -> str:
    return parse_timestamp(timestamp).strftime(DATE_FORMAT)


def count_label(count: int) -> str:
    return f"{count} product{'' if count == 1 else 's'} found"


def product_card(product: Product) -> dict:
    return {
        "id": product.id,
        "title": product.title,
        "category": category_name(product.category),
        "price": format_price(product.price),
        "seller": product.seller,
        "image": product.image,
    }


def nav_view(user) -> dict:
    """Header state: login button for guests, profile menu otherwise."""
    if user is None or not getattr(user, "is_authenticated", False):
        return {"authenticated": False}
    return {
        "authenticated": True,
        "name": user.name or "User",
        "email": user.email or "user@example.com",
    }


def browse_view(products: Iterable[Product], term: str = "", location: str = ALL,
                category: str = ALL) -> dict:
    products = list(products)
    shown = filter_products(products, term, location, category)
    return {
        "cards": [product_card(p) for p in shown],
        "count_label": count_label(len(shown)),
        "empty": not shown,
        "term": term,
        "location": location,
        "category": category,
        "categories": [{"slug": ALL, "label": "All"}]
        + [{"slug": slug, "label": label} for slug, label in CATEGORIES.items()],
        "locations": location_options(products),
    }


def detail_view(product: Optional[Product], contact_subject: str) -> dict:
    if product is None:
        return {"found": False}
    return {
        "found": True,
        "id": product.id,
        "title": product.title,
        "category": category_name(product.category),
        "price": format_price(product.price),
        "description": product.description,
        "image": product.image,
        "seller": product.seller,
        "seller_email": product.seller_email,
        "location": product.location[:1].upper() + product.location[1:],
        "contact_href": mailto_link(product.seller_email, contact_subject),
    }


def profile_view(user, products: Iterable[Product]) -> dict:
    own = products_by_seller(products, user.email)
    return {
        "name": user.name,
        "email": user.email,
        "joined": format_date(user.date_joined),
        "count": len(own),
        "empty": not own,
        "listings": [
            {
                "id": p.id,
                "title": p.title,
                "price": format_price(p.price),
                "category": category_name(p.category),
                "added": format_date(p.date_added),
            }
            for p in own
        ],
    }


def my_listings_view(user, products: Iterable[Product]) -> dict:
    own = products_by_seller(products, user.email)
    cards = []
    for p in own:
        card = product_card(p)
        status = p.status or "active"
        card["status"] = status.upper()
        card["status_class"] = status
        card["listed"] = format_date(p.date_added)
        cards.append(card)
    return {"cards": cards, "empty": not cards}
