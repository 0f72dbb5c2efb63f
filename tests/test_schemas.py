import pytest
from pydantic import ValidationError

from fallback import fallback_categories, fallback_orders, fallback_products
from schemas import Category, Order, Product, Settings


def product(**extra):
    data = {"name": "Kajal", "description": "Kohl", "price": 199, "category": "Makeup",
            "brand": "Lakme", "image": "https://example.com/kajal.png"}
    data.update(extra)
    return Product(**data)


def test_fallback_documents_match_schemas():
    for doc in fallback_products():
        Product.model_validate(doc)
    for doc in fallback_categories():
        Category.model_validate(doc)
    for doc in fallback_orders():
        Order.model_validate(doc)


def test_stock_count_drives_in_stock():
    assert product(stockCount=0).in_stock is False
    assert product(stockCount=5).in_stock is True
    assert product(inStock=False).in_stock is False


def test_conflicting_stock_flags():
    with pytest.raises(ValidationError, match="inStock must match stockCount"):
        product(stockCount=0, inStock=True)


def test_camel_case_dump():
    dumped = product(originalPrice=250, discount=20, stockCount=3).model_dump(by_alias=True)
    assert dumped["originalPrice"] == 250
    assert dumped["inStock"] is True
    assert "original_price" not in dumped


def test_order_status_enum():
    doc = fallback_orders()[0]
    doc["status"] = "lost"
    with pytest.raises(ValidationError):
        Order.model_validate(doc)


def test_settings_defaults():
    settings = Settings().model_dump(by_alias=True)
    assert settings["payment"]["razorpay"]["enabled"] is True
    assert settings["shipping"]["expressShipping"]["rate"] == 199
    assert settings["security"]["requireStrongPassword"] is True
