from decimal import Decimal

import pytest
from pydantic import ValidationError

from product_api.models import Product
from product_api.schemas import ProductIn, ProductRead


def _messages(exc: ValidationError) -> dict[str, str]:
    return {str(e["loc"][-1]): e["msg"] for e in exc.errors()}


def test_valid_input():
    p = ProductIn.model_validate({"name": "Mouse", "price": 29.99})
    assert p.name == "Mouse"
    assert p.price == Decimal("29.99")
    assert p.id is None
    assert p.description is None


def test_zero_price_is_valid():
    assert ProductIn(name="Freebie", price=0).price == 0


def test_missing_price_reported_only_as_required():
    with pytest.raises(ValidationError) as exc_info:
        ProductIn.model_validate({"name": "Mouse"})
    assert _messages(exc_info.value) == {"price": "Product price is required"}


def test_null_fields_reported_as_required():
    with pytest.raises(ValidationError) as exc_info:
        ProductIn.model_validate({"name": None, "price": None})
    assert _messages(exc_info.value) == {
        "name": "Product name is required",
        "price": "Product price is required",
    }


def test_negative_price_message():
    with pytest.raises(ValidationError) as exc_info:
        ProductIn.model_validate({"name": "Mouse", "price": -0.01})
    assert _messages(exc_info.value) == {"price": "Product price must be greater than or equal to 0"}


def test_read_serializes_price_as_number():
    product = Product(id=7, name="Mouse", price=Decimal("29.99"), description=None)
    dumped = ProductRead.model_validate(product).model_dump(mode="json")
    assert dumped == {"id": 7, "name": "Mouse", "price": 29.99, "description": None}
