"""Order cleaner page.

Upload a raw orders CSV, pick the error policy and dedup key, preview the
cleaned table and download it.
"""

from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd
import streamlit as st

from core.normalize import DEDUP_KEY_CHOICES, MalformedQuantityError, clean_orders_frame
from core.tables import record_errors_frame, to_csv_bytes

ON_ERROR_LABELS = {
    "skip": "Drop rows with a bad quantity",
    "flag": "Keep them and flag them",
    "raise": "Stop at the first bad quantity",
}


def summary_metrics(meta: Dict[str, Any]) -> List[tuple[str, int]]:
    """(label, value) pairs shown above the cleaned table."""
    return [
        ("Rows in", int(meta.get("rows_in", 0))),
        ("Missing name", int(meta.get("dropped_missing_name", 0))),
        ("Bad quantity", len(meta.get("record_errors", []))),
        ("Duplicates", int(meta.get("duplicates_removed", 0))),
        ("Rows out", int(meta.get("rows_out", 0))),
    ]


def render_clean_orders_ui(key_prefix: str = "co") -> None:
    st.header("Order cleaner")

    uploaded = st.file_uploader("Raw orders CSV", type=["csv"], key=f"{key_prefix}_upload")

    c1, c2 = st.columns(2)
    on_error = c1.radio(
        "Bad quantities",
        list(ON_ERROR_LABELS.keys()),
        format_func=ON_ERROR_LABELS.get,
        key=f"{key_prefix}_on_error",
    )
    dedup_key = c2.radio(
        "Duplicate key",
        list(DEDUP_KEY_CHOICES),
        format_func=lambda k: "email + cleaned product" if k == "normalized" else "email + raw product",
        key=f"{key_prefix}_dedup_key",
    )

    if uploaded is None:
        st.caption("Upload a CSV with order_id, customer_name, email, product_name, quantity, price, country, order_status.")
        return

    raw = pd.read_csv(uploaded, dtype="string")

    try:
        cleaned, meta = clean_orders_frame(raw, on_error=on_error, dedup_key=dedup_key)
    except MalformedQuantityError as e:
        st.error(str(e))
        return

    for msg in meta["validation_errors"]:
        st.warning(msg)

    cols = st.columns(5)
    for col, (label, value) in zip(cols, summary_metrics(meta)):
        col.metric(label, value)

    st.dataframe(cleaned, use_container_width=True)

    if meta["record_errors"]:
        with st.expander(f"Row errors ({len(meta['record_errors'])})"):
            st.dataframe(record_errors_frame(meta["record_errors"]), use_container_width=True)

    st.download_button(
        "Download cleaned CSV",
        data=to_csv_bytes(cleaned),
        file_name="orders_clean.csv",
        mime="text/csv",
        key=f"{key_prefix}_download",
    )


__all__ = ["render_clean_orders_ui", "summary_metrics"]
