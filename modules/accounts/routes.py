"""HTTP routes for login, registration and logout."""

from flask import flash, redirect, render_template, request, url_for
from flask_login import current_user

from extensions import login_manager
from models import User
from pages import page
from utils import is_safe_redirect

from . import bp
from .service import AuthError, current_auth


@login_manager.user_loader
def load_user(user_id: str | None) -> User | None:
    """Resolve the session user for Flask-Login from the session record."""

    if not user_id:
        return None

    user = current_auth().current_user()
    if user is not None and user.id == user_id:
        return user
    return None


def _landing():
    target = request.values.get("next", "")
    if is_safe_redirect(target):
        return redirect(target)
    return redirect(url_for("listings.index"))


@bp.route("/login", methods=["GET", "POST"])
@page("login")
def login():
    if request.method == "POST":
        email = request.form.get("email", "")
        password = request.form.get("password", "")
        try:
            current_auth().login(email, password)
        except AuthError as exc:
            flash(exc.message, "error")
            return render_template("login.html", mode="login", email=email)
        return _landing()

    if current_user.is_authenticated:
        return redirect(url_for("listings.index"))
    mode = "register" if request.args.get("mode") == "register" else "login"
    return render_template("login.html", mode=mode)


@bp.route("/register", methods=["POST"])
@page("login")
def register():
    name = request.form.get("name", "").strip()
    email = request.form.get("email", "")
    try:
        current_auth().register(
            name,
            email,
            request.form.get("password", ""),
            request.form.get("confirm_password", ""),
        )
    except AuthError as exc:
        flash(exc.message, "error")
        return render_template("login.html", mode="register", name=name, email=email)
    return _landing()


@bp.route("/logout")
def logout():
    current_auth().logout()
    return redirect(url_for("listings.index"))
