"""Accounts module package."""

from flask import Blueprint

bp = Blueprint("accounts", __name__)

from . import service  # noqa: E402  pylint: disable=wrong-import-position
from . import routes  # noqa: E402  pylint: disable=wrong-import-position

__all__ = ["bp", "service", "routes"]
