"""Listings module package."""

from flask import Blueprint

bp = Blueprint("listings", __name__)

from . import catalog  # noqa: E402  pylint: disable=wrong-import-position
from . import routes  # noqa: E402  pylint: disable=wrong-import-position

__all__ = ["bp", "catalog", "routes"]
