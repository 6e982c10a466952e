"""Stored record layouts (the JSON written under each record key).

Validation is strict: a stored value with a wrong type or a missing field
fails the whole read instead of being coerced.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from models import Product, User


class RecordBase(BaseModel):
    model_config = ConfigDict(strict=True, populate_by_name=True)


class UserRecord(RecordBase):
    id: str
    name: str
    email: str
    # the session record is stored without it
    password: str = ""
    date_joined: str = Field(alias="dateJoined")

    def to_user(self) -> User:
        return User(**self.model_dump())


class ProductRecord(RecordBase):
    id: str
    title: str
    description: str = ""
    price: int = Field(ge=0)
    category: str
    location: str
    image: Optional[str] = None
    seller: str
    seller_email: str = Field(alias="sellerEmail")
    date_added: str = Field(alias="dateAdded")
    status: str = "active"

    def to_product(self) -> Product:
        return Product(**self.model_dump())


USER_LIST = TypeAdapter(List[UserRecord])
PRODUCT_LIST = TypeAdapter(List[ProductRecord])
