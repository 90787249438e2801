"""Storefront records as read from and written to the remote store."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_DISPLAY_NAME = "User"


class Product(BaseModel):
    """Catalog item available for purchase. Immutable snapshot from the store."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra='ignore')

    name: Optional[str] = Field(default=None, alias="productName")
    price: float = Field(default=0.0, alias="productPrice")
    description: str = Field(default="", alias="productDescription")
    image: str = Field(default="")

    @field_validator("price", "description", "image", mode="before")
    @classmethod
    def _null_as_default(cls, value, info):
        # Explicit nulls read as the field default
        if value is None:
            return cls.model_fields[info.field_name].default
        return value


class CartItem(BaseModel):
    """Line in the user's cart. ``id`` stays empty until the store assigns one."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra='ignore')

    id: str = Field(default="")
    product_name: str = Field(default="", alias="productName")
    product_price: float = Field(default=0.0, alias="productPrice")
    image: str = Field(default="")
    quantity: int = Field(default=1, ge=1)

    @classmethod
    def from_product(cls, product: Product, quantity: int = 1) -> "CartItem":
        return cls(
            product_name=product.name or "",
            product_price=product.price or 0.0,
            image=product.image or "",
            quantity=quantity,
        )

    def to_record(self) -> dict:
        """Store representation; the id is the record key, not a field."""
        return self.model_dump(by_alias=True, exclude={"id"})


class WishlistItem(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra='ignore')

    product_name: str = Field(default="", alias="productName")
    product_price: float = Field(default=0.0, alias="productPrice")
    image: str = Field(default="")

    @classmethod
    def from_product(cls, product: Product) -> "WishlistItem":
        return cls(
            product_name=product.name or "",
            product_price=product.price or 0.0,
            image=product.image or "",
        )

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True)


class User(BaseModel):
    """Read-only projection of the authenticated account's profile."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra='ignore')

    uid: str
    first_name: Optional[str] = Field(default=None, alias="firstName")
    image: Optional[str] = Field(default=None)

    @property
    def display_name(self) -> str:
        return self.first_name or DEFAULT_DISPLAY_NAME


class AuthIdentity(BaseModel):
    """Identity cached locally by the external identity provider after sign-in."""
    model_config = ConfigDict(frozen=True)

    uid: str
    email: Optional[str] = None
