"""Pytest configuration and fixtures for the order cleaner tests."""

import sys

import pandas as pd
import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def reset_logger():
    """CliRunner swaps sys.stderr; drop any sink bound to it after each test."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")


@pytest.fixture
def raw_orders() -> pd.DataFrame:
    """
    Six raw rows:
      1, 2 -> same customer/product, 2 is the duplicate
      3    -> no customer name
      4    -> clean row
      5    -> malformed quantity
      6    -> unknown product and status
    """
    return pd.DataFrame(
        {
            "order_id": ["1", "2", "3", "4", "5", "6"],
            "customer_name": ["john smith", "JOHN SMITH", None, "mary  o'neil", "ann lee", "bob ray"],
            "email": ["a@x.com", "a@x.com", "c@x.com", "M@x.com", "ann@x.com", "bob@x.com"],
            "product_name": [
                "iPhone 13 Pro",
                "Apple iPhone 14",
                "MacBook Air",
                "google pixel 7",
                "Samsung Galaxy S21",
                "unknown gadget",
            ],
            "quantity": ["two", "3", "1", "5", "abc", "1"],
            "price": ["999.0", "1099.0", "1299.0", "599.0", "799.0", "10.0"],
            "country": ["united states", "UNITED STATES", "canada", "ireland", "south korea", "france"],
            "order_status": ["Delivered", "delivered", "Pending", "shipped out", "refund requested", "lost"],
        },
        dtype="string",
    )


@pytest.fixture
def raw_orders_csv(tmp_path, raw_orders):
    path = tmp_path / "orders_raw.csv"
    raw_orders.to_csv(path, index=False)
    return path
