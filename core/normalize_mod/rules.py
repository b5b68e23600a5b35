from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

import pandas as pd
from loguru import logger

OTHER = "Other"


@dataclass(frozen=True)
class CategoryRule:
    pattern: str
    category: str


Rules = Tuple[CategoryRule, ...]


def _rules(pairs: Iterable[Tuple[str, str]]) -> Rules:
    return tuple(CategoryRule(p.lower(), c) for p, c in pairs)


# -------------------------------
# Default rule tables (order matters: first match wins)
# -------------------------------
ORDER_STATUS_RULES: Rules = _rules([
    ("deliver", "Delivered"),
    ("pend", "Pending"),
    ("ship", "Shipped"),
    ("return", "Returned"),
    ("refund", "Refunded"),
])

PRODUCT_NAME_RULES: Rules = _rules([
    ("apple watch", "Apple Watch"),
    ("google pixel", "Google Pixel"),
    ("samsung galaxy", "Samsung Galaxy S22"),
    ("iphone", "iPhone 14"),
    ("macbook", "Macbook Pro"),
])


def categories(rules: Rules) -> frozenset:
    """Closed set of values a rule table can produce (always includes Other)."""
    return frozenset([r.category for r in rules] + [OTHER])


def match_category(value: Optional[str], rules: Rules) -> str:
    """Case-insensitive substring match; first rule that matches wins."""
    if value is None or pd.isna(value):
        return OTHER
    text = str(value).lower()
    for rule in rules:
        if rule.pattern in text:
            return rule.category
    return OTHER


def load_rules(path: Union[str, Path]) -> Rules:
    """
    Load a rule table from a CSV with a `pattern,category` header.

    Row order is preserved (it is the match priority). Blank rows are skipped.
    """
    df = pd.read_csv(path, dtype="string", keep_default_na=False, skip_blank_lines=True)
    df.columns = [str(c).strip().lower() for c in df.columns]

    missing = {"pattern", "category"} - set(df.columns)
    if missing:
        raise ValueError(f"Rule file {path} is missing column(s): {', '.join(sorted(missing))}")

    df["pattern"] = df["pattern"].str.strip()
    df["category"] = df["category"].str.strip()
    df = df[(df["pattern"].str.len() > 0) & (df["category"].str.len() > 0)]
    if df.empty:
        raise ValueError(f"Rule file {path} contains no rules")

    rules = _rules(zip(df["pattern"], df["category"]))
    logger.debug(f"Loaded {len(rules)} rules from {path}")
    return rules
