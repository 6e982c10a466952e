# -*- coding: utf-8 -*-
"""
seed_products.py — initialize the sample listings.

Modes:
- python seed_products.py --create    → store the sample listings only if none exist
- python seed_products.py --reset     → replace every stored listing with the sample set (existing listings are lost)
"""

import argparse

from app import create_app
from repository import current_repository, seed_products


def create_if_empty(repository):
    """Seed only when the product list is empty. Returns the number of listings stored."""
    products = repository.load_products()
    if products:
        return 0
    # load() seeds an empty product list as a side effect
    _, products = repository.load()
    return len(products)


def reset_products(repository):
    products = seed_products()
    repository.replace_products(products)
    return len(products)


def main(argv=None, app=None):
    parser = argparse.ArgumentParser(description="Seed EcoFinds sample listings")
    grp = parser.add_mutually_exclusive_group(required=True)
    grp.add_argument("--create", action="store_true", help="seed only when no listings exist")
    grp.add_argument("--reset", action="store_true", help="replace all listings with the sample set")

    args = parser.parse_args(argv)

    app = app or create_app()
    with app.app_context():
        repository = current_repository()
        if args.reset:
            print("→ Replacing listings …")
            count = reset_products(repository)
            print(f"✔ Done: {count} sample listings stored.")
        elif args.create:
            print("→ Seeding missing listings …")
            count = create_if_empty(repository)
            if count:
                print(f"✔ Done: {count} sample listings stored.")
            else:
                print("✔ Done: listings already exist, nothing changed.")


if __name__ == "__main__":
    main()
