"""Users and products persisted as JSON lists in a record store."""

import json
import logging
import threading
from typing import List, Tuple

from flask import current_app
from pydantic import TypeAdapter, ValidationError

from models import Product, User, utc_timestamp
from schemas import PRODUCT_LIST, USER_LIST, ProductRecord
from storage import RecordStore

logger = logging.getLogger(__name__)

USERS_KEY = "ecofinds_users"
PRODUCTS_KEY = "ecofinds_products"
CURRENT_USER_KEY = "ecofinds_current_user"

EXTENSION_NAME = "ecofinds.repository"

SEED_PRODUCTS = [
    {
        "id": "1",
        "title": "Vintage Wooden Chair",
        "description": "Beautiful vintage wooden chair made from reclaimed oak. Perfect condition, eco-friendly and sustainable.",
        "price": 2500,
        "category": "furniture",
        "location": "delhi",
        "image": "images/71NuVYMVZrL._AC_SL1500_.jpg",
        "seller": "EcoLover123",
        "sellerEmail": "ecolover@example.com",
    },
    {
        "id": "2",
        "title": "Solar Power Bank",
        "description": "Portable solar power bank with 20000mAh capacity. Great for outdoor activities and emergency charging.",
        "price": 1200,
        "category": "eco-gadgets",
        "location": "mumbai",
        "image": "images/a9e8d3588040a942bfa19bf0d6b45a9b.jpg",
        "seller": "GreenTech",
        "sellerEmail": "greentech@example.com",
    },
    {
        "id": "3",
        "title": "Organic Cotton Tote Bags",
        "description": "Set of 3 organic cotton tote bags. Perfect for grocery shopping and reducing plastic waste.",
        "price": 300,
        "category": "reusable",
        "location": "bangalore",
        "image": "images/tote-bags-wholesale-bagzdepot-12511551914089@2x.webp",
        "seller": "EcoFriendly",
        "sellerEmail": "ecofriendly@example.com",
    },
    {
        "id": "4",
        "title": "Bamboo Cutlery Set",
        "description": "Complete bamboo cutlery set with carrying case. Sustainable alternative to plastic utensils.",
        "price": 450,
        "category": "reusable",
        "location": "delhi",
        "image": "images/OIP.webp",
        "seller": "SustainableLiving",
        "sellerEmail": "sustainable@example.com",
    },
    {
        "id": "5",
        "title": "LED Solar Garden Lights",
        "description": "Set of 6 solar-powered LED garden lights. Weather-resistant and energy-efficient.",
        "price": 800,
        "category": "energy",
        "location": "mumbai",
        "image": "images/1707919168marketplaceImage.webp",
        "seller": "SolarSolutions",
        "sellerEmail": "solar@example.com",
    },
]


class CorruptRecordError(Exception):
    """A stored record could not be decoded."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Record '{key}' is not valid serialized data: {reason}")
        self.key = key


def seed_products() -> List[Product]:
    """Fresh copies of the sample listings, stamped with the current time."""
    stamp = utc_timestamp()
    return [
        ProductRecord.model_validate(dict(item, dateAdded=stamp, status="active")).to_product()
        for item in SEED_PRODUCTS
    ]


class MarketRepository:
    """Loads and saves the user and product lists.

    The ``add_*``/``delete_*`` helpers do a full load-mutate-save under one
    lock so concurrent requests in the same process don't drop each other's
    writes.
    """

    def __init__(self, store: RecordStore) -> None:
        self.store = store
        self.lock = threading.RLock()

    # ---- list access ----
    def _read_list(self, key: str, adapter: TypeAdapter) -> list:
        raw = self.store.get(key)
        if raw is None:
            return []
        try:
            return adapter.validate_json(raw)
        except ValidationError as exc:
            raise CorruptRecordError(key, str(exc)) from exc

    def load_users(self) -> List[User]:
        return [record.to_user() for record in self._read_list(USERS_KEY, USER_LIST)]

    def save_users(self, users: List[User]) -> None:
        self.store.set(USERS_KEY, json.dumps([u.to_dict() for u in users]))

    def load_products(self) -> List[Product]:
        return [record.to_product() for record in self._read_list(PRODUCTS_KEY, PRODUCT_LIST)]

    def save_products(self, products: List[Product]) -> None:
        self.store.set(PRODUCTS_KEY, json.dumps([p.to_dict() for p in products]))

    # ---- whole-store operations ----
    def load(self) -> Tuple[List[User], List[Product]]:
        """Read both lists, seeding the product list if it is empty."""
        with self.lock:
            users = self.load_users()
            products = self.load_products()
            if not products:
                products = seed_products()
                logger.info("No listings stored, seeded %d sample products", len(products))
                self.save(users, products)
            return users, products

    def save(self, users: List[User], products: List[Product]) -> None:
        self.save_users(users)
        self.save_products(products)

    # ---- read-modify-write helpers ----
    def add_user(self, user: User) -> None:
        with self.lock:
            users = self.load_users()
            users.append(user)
            self.save_users(users)

    def add_product(self, product: Product) -> None:
        with self.lock:
            products = self.load_products()
            products.append(product)
            self.save_products(products)

    def delete_product(self, product_id: str) -> bool:
        """Remove the listing with ``product_id``. Returns False if none matched."""
        from modules.listings.catalog import delete_product

        with self.lock:
            products = self.load_products()
            remaining = delete_product(products, product_id)
            if len(remaining) == len(products):
                return False
            self.save_products(remaining)
            return True

    def replace_products(self, products: List[Product]) -> None:
        with self.lock:
            self.save_products(products)


def current_repository() -> MarketRepository:
    """The repository bound to the running app by ``create_app``."""
    return current_app.extensions[EXTENSION_NAME]
