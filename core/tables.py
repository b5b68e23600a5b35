"""Tabular file I/O for the order cleaner.

Format is picked from the file extension: `.parquet` or CSV (anything else).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Union

import pandas as pd
from loguru import logger

PathLike = Union[str, Path]


def _is_parquet(path: PathLike) -> bool:
    return Path(path).suffix.lower() in (".parquet", ".pq")


def read_orders_table(path: PathLike) -> pd.DataFrame:
    """
    Read raw orders.

    CSV cells are kept as text so free-text quantities ("007", "two") reach
    the normalizers untouched; empty cells become missing values.
    """
    path = Path(path)
    if _is_parquet(path):
        df = pd.read_parquet(path)
    else:
        df = pd.read_csv(path, dtype="string")
    logger.info(f"Read {len(df)} row(s) from {path}")
    return df


def write_table(df: pd.DataFrame, path: PathLike) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if _is_parquet(path):
        df.to_parquet(path, index=False)
    else:
        df.to_csv(path, index=False)
    logger.info(f"Wrote {len(df)} row(s) to {path}")


def record_errors_frame(record_errors: List[Dict[str, Any]]) -> pd.DataFrame:
    cols = ["row", "order_id", "kind", "column", "value", "message"]
    return pd.DataFrame(record_errors, columns=cols)


def to_csv_bytes(df: pd.DataFrame) -> bytes:
    return df.to_csv(index=False).encode("utf-8")
