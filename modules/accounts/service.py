"""Registration, login and the current session.

``register`` and ``authenticate`` are pure checks over a user list; the
``AuthService`` wraps them with persistence and the Flask-Login session.
"""

import json
import logging
from typing import Iterable, Optional

from flask import current_app
from flask_login import login_user, logout_user
from pydantic import ValidationError
from werkzeug.security import check_password_hash, generate_password_hash

from models import User
from repository import CURRENT_USER_KEY, CorruptRecordError, MarketRepository, current_repository
from schemas import UserRecord
from storage import RecordStore, SessionRecordStore
from utils import next_id

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class AuthError(Exception):
    """Base for validation failures shown to the user."""

    message = "Authentication failed"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message


class PasswordMismatch(AuthError):
    message = "Passwords do not match"


class WeakPassword(AuthError):
    def __init__(self, min_length: int = MIN_PASSWORD_LENGTH) -> None:
        super().__init__(f"Password must be at least {min_length} characters long")


class EmailTaken(AuthError):
    message = "User with this email already exists"


class InvalidCredentials(AuthError):
    message = "Invalid email or password"


def register(users: Iterable[User], name: str, email: str, password: str,
             confirm_password: str, min_length: int = MIN_PASSWORD_LENGTH) -> User:
    """Validate a registration and build the new user (not yet stored)."""
    if password != confirm_password:
        raise PasswordMismatch()
    if len(password) < min_length:
        raise WeakPassword(min_length)
    # exact match, same as login
    if any(u.email == email for u in users):
        raise EmailTaken()
    return User(id=next_id(), name=name, email=email, password=generate_password_hash(password))


def authenticate(users: Iterable[User], email: str, password: str) -> User:
    for user in users:
        if user.email == email and check_password_hash(user.password, password):
            return user
    raise InvalidCredentials()


class AuthService:
    """Auth operations bound to a repository and a per-browser session store."""

    def __init__(self, repository: MarketRepository, session_store: RecordStore,
                 min_password_length: int = MIN_PASSWORD_LENGTH) -> None:
        self.repository = repository
        self.session_store = session_store
        self.min_password_length = min_password_length

    def register(self, name: str, email: str, password: str, confirm_password: str) -> User:
        logger.info("Registration attempt for email: %s", email)
        with self.repository.lock:
            try:
                user = register(self.repository.load_users(), name, email, password,
                                confirm_password, self.min_password_length)
            except AuthError as exc:
                logger.warning("Registration failed for %s: %s", email, exc.message)
                raise
            self.repository.add_user(user)
        logger.info("User created with id %s for email %s", user.id, email)
        self._start_session(user)
        return user

    def login(self, email: str, password: str) -> User:
        logger.info("Login attempt for email: %s", email)
        try:
            user = authenticate(self.repository.load_users(), email, password)
        except InvalidCredentials:
            logger.warning("Login failed for email: %s", email)
            raise
        self._start_session(user)
        return user

    def logout(self) -> None:
        logout_user()
        self.session_store.delete(CURRENT_USER_KEY)

    def current_user(self) -> Optional[User]:
        """The session user, decoded from the session record."""
        raw = self.session_store.get(CURRENT_USER_KEY)
        if raw is None:
            return None
        try:
            return UserRecord.model_validate_json(raw).to_user()
        except ValidationError as exc:
            raise CorruptRecordError(CURRENT_USER_KEY, str(exc)) from exc

    def _start_session(self, user: User) -> None:
        self.session_store.set(CURRENT_USER_KEY, json.dumps(user.public_dict()))
        login_user(user)


def current_auth() -> AuthService:
    """An ``AuthService`` for the current request."""
    return AuthService(current_repository(), SessionRecordStore(),
                       current_app.config.get("MIN_PASSWORD_LENGTH", MIN_PASSWORD_LENGTH))
