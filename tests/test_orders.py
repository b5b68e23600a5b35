"""Tests for frame-level order normalization (before deduplication)."""

import pandas as pd
import pytest

from core.normalize import MalformedQuantityError, normalize_order_rows


class TestNormalizeOrderRows:
    def test_skip_policy(self, raw_orders):
        df, meta = normalize_order_rows(raw_orders)

        assert list(df["order_id"]) == ["1", "2", "4", "6"]
        assert meta["validation_errors"] == []
        assert meta["rows_in"] == 6
        assert meta["dropped_missing_name"] == 1
        assert meta["dropped_malformed"] == 1

        first = df.iloc[0]
        assert first["customer_name_normalized"] == "John Smith"
        assert first["product_name"] == "iPhone 13 Pro"
        assert first["product_name_normalized"] == "iPhone 14"
        assert first["quantity_normalized"] == 2
        assert first["country_normalized"] == "United States"
        assert first["order_status_normalized"] == "Delivered"
        assert first["email"] == "a@x.com"
        assert first["price"] == "999.0"

    def test_record_errors(self, raw_orders):
        _, meta = normalize_order_rows(raw_orders)
        assert meta["record_errors"] == [
            {
                "row": 4,
                "order_id": "5",
                "kind": "malformed_quantity",
                "column": "quantity",
                "value": "abc",
                "message": "Quantity 'abc' is not an integer",
            }
        ]

    def test_flag_policy_keeps_row(self, raw_orders):
        df, meta = normalize_order_rows(raw_orders, on_error="flag")

        assert list(df["order_id"]) == ["1", "2", "4", "5", "6"]
        assert meta["dropped_malformed"] == 0
        assert len(meta["record_errors"]) == 1

        flagged = df[df["order_id"] == "5"].iloc[0]
        assert pd.isna(flagged["quantity_normalized"])
        assert flagged["quality_flag"] == "malformed_quantity"
        assert df["quality_flag"].isna().sum() == 4

    def test_raise_policy(self, raw_orders):
        with pytest.raises(MalformedQuantityError) as exc:
            normalize_order_rows(raw_orders, on_error="raise")
        assert exc.value.order_id == "5"

    def test_unknown_policy(self, raw_orders):
        with pytest.raises(ValueError):
            normalize_order_rows(raw_orders, on_error="ignore")

    def test_input_not_mutated(self, raw_orders):
        before = raw_orders.copy()
        normalize_order_rows(raw_orders)
        pd.testing.assert_frame_equal(raw_orders, before)

    def test_blank_name_is_missing(self):
        raw = pd.DataFrame(
            {
                "order_id": ["1", "2"],
                "customer_name": ["   ", "ann"],
                "email": ["a@x.com", "b@x.com"],
                "product_name": ["iphone", "iphone"],
                "quantity": ["1", "1"],
                "price": ["1", "1"],
                "country": [None, "peru"],
                "order_status": ["pending", "pending"],
            }
        )
        df, meta = normalize_order_rows(raw)
        assert list(df["order_id"]) == ["2"]
        assert meta["dropped_missing_name"] == 1

    def test_null_country_stays_null(self):
        raw = pd.DataFrame(
            {
                "order_id": [1],
                "customer_name": ["ann"],
                "email": ["a@x.com"],
                "product_name": ["iphone"],
                "quantity": ["1"],
                "price": [1.0],
                "country": [None],
                "order_status": ["pending"],
            }
        )
        df, _ = normalize_order_rows(raw)
        assert pd.isna(df.iloc[0]["country_normalized"])


class TestColumnHandling:
    def test_header_aliases(self):
        raw = pd.DataFrame(
            {
                " Order ID ": ["7"],
                "Customer Name": ["lee park"],
                "E-mail": ["lee@x.com"],
                "Product": ["apple watch se"],
                "Qty": ["two"],
                "Unit Price": ["249"],
                "Country": ["south korea"],
                "Status": ["Shipped"],
            }
        )
        df, meta = normalize_order_rows(raw)
        assert meta["validation_errors"] == []
        row = df.iloc[0]
        assert row["order_id"] == "7"
        assert row["customer_name_normalized"] == "Lee Park"
        assert row["product_name_normalized"] == "Apple Watch"
        assert row["quantity_normalized"] == 2
        assert row["price"] == "249"
        assert row["country_normalized"] == "South Korea"
        assert row["order_status_normalized"] == "Shipped"

    def test_canonical_column_wins_over_alias(self):
        raw = pd.DataFrame(
            {
                "order_id": ["1"],
                "customer_name": ["real name"],
                "name": ["alias name"],
                "email": ["a@x.com"],
                "product_name": ["iphone"],
                "quantity": ["1"],
                "price": ["1"],
                "country": ["chile"],
                "order_status": ["pending"],
            }
        )
        df, _ = normalize_order_rows(raw)
        assert df.iloc[0]["customer_name_normalized"] == "Real Name"

    def test_headers_that_collide_after_lowering(self):
        raw = pd.DataFrame(
            {
                "order_id": ["1"],
                "customer_name": ["ann lee"],
                "Email": ["first@x.com"],
                "email": ["second@x.com"],
                "product_name": ["iphone"],
                "quantity": ["1"],
                "price": ["1"],
                "country": ["chile"],
                "order_status": ["pending"],
            }
        )
        df, meta = normalize_order_rows(raw)
        assert meta["validation_errors"] == [
            "[orders] Duplicate column after normalizing headers: email"
        ]
        assert list(df["email"]) == ["first@x.com"]
        assert df.iloc[0]["customer_name_normalized"] == "Ann Lee"

    def test_missing_columns_reported(self):
        raw = pd.DataFrame({"order_id": ["1"], "email": ["a@x.com"]})
        df, meta = normalize_order_rows(raw)
        assert "[orders] Missing required column: customer_name" in meta["validation_errors"]
        assert "[orders] Missing required column: quantity" in meta["validation_errors"]
        assert df.empty

    def test_none_input(self):
        df, meta = normalize_order_rows(None)
        assert df.empty
        assert meta["validation_errors"]
