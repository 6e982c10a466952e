"""Shared models: the record table and the User/Product records stored in it."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from flask_login import UserMixin

from extensions import db


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a trailing Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class Record(db.Model):
    """One named, serialized value of the key-value store."""

    __tablename__ = "records"

    key = db.Column(db.String(100), primary_key=True)
    value = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<Record {self.key}>"


@dataclass
class User(UserMixin):
    """A registered account. ``email`` is the unique key."""

    id: str
    name: str
    email: str
    password: str = ""
    date_joined: str = field(default_factory=utc_timestamp)

    def get_id(self) -> str:
        return self.id

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "password": self.password,
            "dateJoined": self.date_joined,
        }

    def public_dict(self) -> dict:
        """Same as ``to_dict`` without the password, for the session record."""
        data = self.to_dict()
        del data["password"]
        return data

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<User {self.email}>"


@dataclass
class Product:
    """A listing. Seller name/email are copied from the owner at creation."""

    id: str
    title: str
    description: str
    price: int
    category: str
    location: str
    seller: str
    seller_email: str
    image: Optional[str] = None
    date_added: str = field(default_factory=utc_timestamp)
    status: str = "active"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "price": self.price,
            "category": self.category,
            "location": self.location,
            "image": self.image,
            "seller": self.seller,
            "sellerEmail": self.seller_email,
            "dateAdded": self.date_added,
            "status": self.status,
        }
