from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator
from pydantic_core import PydanticCustomError

# Prices travel as JSON numbers, not as the string pydantic emits for Decimal.
Price = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class ProductIn(BaseModel):
    """
    Body accepted by create and update.

    ``name`` and ``price`` default to None and are validated even when absent,
    so a request missing both reports both fields instead of stopping at the
    first one. ``id`` is accepted here only so create can reject it.
    """

    id: Optional[int] = None
    name: Optional[str] = Field(default=None, validate_default=True, max_length=255)
    price: Optional[Decimal] = Field(default=None, validate_default=True)
    description: Optional[str] = Field(default=None, max_length=1000)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: Optional[str]) -> str:
        if value is None or not value.strip():
            raise PydanticCustomError("name_required", "Product name is required")
        return value

    @field_validator("price")
    @classmethod
    def _price_present_and_non_negative(cls, value: Optional[Decimal]) -> Decimal:
        if value is None:
            raise PydanticCustomError("price_required", "Product price is required")
        if value < 0:
            raise PydanticCustomError(
                "price_negative",
                "Product price must be greater than or equal to 0",
            )
        return value


class ProductRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: Price
    description: Optional[str] = None
