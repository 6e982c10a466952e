# pages.py
"""
Page controller.

Each addressable page is one entry in PAGES. The @page(name) decorator is the
page's entry action:
- hydrate g.users / g.products from the repository (seeding if empty);
- apply the session guard;
- run the view.

Guards for pages that need a session:
- REDIRECT — send the guest to the login page (Flask-Login's unauthorized()).
- NOTICE   — render the "please log in" state in place.
"""

import logging
from dataclasses import dataclass
from functools import wraps

from flask import current_app, g, render_template
from flask_login import current_user

from repository import current_repository

logger = logging.getLogger(__name__)

ALLOW = "allow"
REDIRECT = "redirect"
NOTICE = "notice"


@dataclass(frozen=True)
class Page:
    name: str
    title: str
    requires_session: bool = False
    anonymous: str = ALLOW


PAGES = {
    p.name: p
    for p in (
        Page("login", "Login"),
        Page("index", "Browse"),
        Page("add", "Add Product", requires_session=True, anonymous=REDIRECT),
        Page("product", "Product Details"),
        Page("profile", "Profile", requires_session=True, anonymous=NOTICE),
        Page("my-products", "My Products", requires_session=True, anonymous=REDIRECT),
    )
}


def page(name: str):
    """
    Bind a view to a page of PAGES.
    Example:
        @bp.route("/add", methods=["GET", "POST"])
        @page("add")
        def add_product(): ...
    """
    entry = PAGES[name]

    def decorator(view_func):
        @wraps(view_func)
        def wrapped(*args, **kwargs):
            g.page = entry
            g.users, g.products = current_repository().load()

            if entry.requires_session and not current_user.is_authenticated:
                logger.debug("Guest hit page '%s' (%s)", entry.name, entry.anonymous)
                if entry.anonymous == REDIRECT:
                    return current_app.login_manager.unauthorized()
                return render_template("login_required.html", page=entry)

            return view_func(*args, **kwargs)

        return wrapped
    return decorator
