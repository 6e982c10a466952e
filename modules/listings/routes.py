"""HTTP routes for browsing, viewing and managing listings."""

import logging

from flask import (
    abort,
    current_app,
    flash,
    g,
    redirect,
    render_template,
    request,
    send_from_directory,
    url_for,
)
from flask_login import current_user

from pages import page
from repository import current_repository
from utils import ALLOWED_EXTENSIONS, allowed_file, handle_file_upload, is_safe_redirect, next_id

from . import bp
from .catalog import ALL, CATEGORIES, ListingError, find_product, new_listing
from .views import browse_view, detail_view, my_listings_view, profile_view

logger = logging.getLogger(__name__)


@bp.route("/")
@page("index")
def index():
    view = browse_view(
        g.products,
        term=request.args.get("q", "").strip(),
        location=request.args.get("location", ALL) or ALL,
        category=request.args.get("category", ALL) or ALL,
    )
    return render_template("index.html", view=view)


@bp.route("/add", methods=["GET", "POST"])
@page("add")
def add_product():
    if request.method == "POST":
        product_id = next_id()
        try:
            product = new_listing(
                product_id,
                current_user,
                title=request.form.get("title", ""),
                description=request.form.get("description", ""),
                price=request.form.get("price", ""),
                category=request.form.get("category", ""),
                location=request.form.get("location", ""),
            )
        except ListingError as exc:
            flash(str(exc), "error")
            return render_template("add.html", categories=CATEGORIES, form=request.form)

        photo = request.files.get("image")
        if photo and photo.filename:
            if not allowed_file(photo.filename):
                flash("Invalid file format. Allowed: " + ", ".join(sorted(ALLOWED_EXTENSIONS)), "error")
                return render_template("add.html", categories=CATEGORIES, form=request.form)
            product.image = handle_file_upload(photo, current_app.config["UPLOAD_FOLDER"],
                                               prefix=f"{product_id}_")

        current_repository().add_product(product)
        logger.info("Listing %s added by %s", product.id, product.seller_email)
        flash("Product added successfully!", "success")
        return redirect(url_for("listings.index"))

    return render_template("add.html", categories=CATEGORIES, form={})


@bp.route("/product")
@page("product")
def product_detail():
    product = find_product(g.products, request.args.get("id"))
    view = detail_view(product, current_app.config["CONTACT_SUBJECT"])
    status = 200 if view["found"] else 404
    return render_template("product.html", view=view), status


@bp.route("/profile")
@page("profile")
def profile():
    return render_template("profile.html", view=profile_view(current_user, g.products))


@bp.route("/my-products")
@page("my-products")
def my_products():
    return render_template("my_products.html", view=my_listings_view(current_user, g.products))


@bp.route("/products/<product_id>/delete", methods=["POST"])
@page("my-products")
def delete_product(product_id):
    product = find_product(g.products, product_id)
    if product is not None:
        if product.seller_email != current_user.email:
            abort(403)
        current_repository().delete_product(product_id)
        logger.info("Listing %s deleted by %s", product_id, current_user.email)
        flash("Product deleted.", "success")

    target = request.form.get("next", "")
    if is_safe_redirect(target):
        return redirect(target)
    return redirect(url_for("listings.my_products"))


@bp.route("/uploads/<path:filename>")
def uploaded_image(filename):
    return send_from_directory(current_app.config["UPLOAD_FOLDER"], filename)
