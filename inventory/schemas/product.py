from pydantic import BaseModel, Field, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Literal, Optional

MAX_PRICE = 99_999_999.99  # NUMERIC(10, 2)

ActiveFilter = Literal["true", "false", "all"]


class ProductBase(BaseModel):
    """Base schema for Product with the user-settable attributes."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255, description="Product name")
    description: Optional[str] = Field(None, description="Free-text description")
    price: float = Field(
        ...,
        ge=0,
        le=MAX_PRICE,
        allow_inf_nan=False,
        description="Unit price (must be non-negative)",
    )
    category: str = Field(..., min_length=1, max_length=255, description="Product category")
    stock: int = Field(0, ge=0, description="Available stock (must be non-negative)")
    active: bool = Field(True, description="Whether the product is visible in default listings")

    @field_validator("price")
    @classmethod
    def round_price(cls, value: float) -> float:
        return round(value, 2)


class ProductCreate(ProductBase):
    """Schema for creating a new product."""
    pass


class ProductUpdate(ProductBase):
    """
    Schema for updating an existing product.

    Updates are full replacements: omitted optional fields fall back to
    their defaults rather than keeping the stored value.
    """
    pass


class ProductResponse(BaseModel):
    """Schema for product response including all fields."""
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: int
    name: str
    description: Optional[str] = None
    price: float
    category: str
    stock: int
    active: bool
    created_at: datetime
    updated_at: datetime


class Pagination(BaseModel):
    """Pagination metadata returned alongside a product page."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total: int
    page: int
    limit: int
    total_pages: int


class ProductListResponse(BaseModel):
    """Schema for paginated product list response."""
    products: list[ProductResponse]
    pagination: Pagination
