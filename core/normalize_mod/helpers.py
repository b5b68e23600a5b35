from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping

import pandas as pd


# -------------------------------
# Helpers
# -------------------------------
def _clean_cols(df: pd.DataFrame) -> pd.DataFrame:
    out = df.copy()
    out.columns = [str(c).strip() for c in out.columns]
    return out


def _lower_cols(df: pd.DataFrame) -> pd.DataFrame:
    out = df.copy()
    out.columns = [str(c).strip().lower() for c in out.columns]
    return out


def _rename_aliases(df: pd.DataFrame, aliases: Mapping[str, str]) -> pd.DataFrame:
    """Rename known header variants; a canonical column already present wins."""
    rename_map = {
        c: aliases[c]
        for c in df.columns
        if c in aliases and aliases[c] != c and aliases[c] not in df.columns
    }
    # two aliases for the same target: keep the first one seen
    seen: Dict[str, str] = {}
    for src, dst in rename_map.items():
        seen.setdefault(dst, src)
    return df.rename(columns={src: dst for dst, src in seen.items()})


def _none_if_na(value: Any) -> Any:
    return None if value is None or pd.isna(value) else value


@dataclass(frozen=True)
class ColumnRule:
    name: str
    required: bool = True


def _require_cols(df: pd.DataFrame, rules: List[ColumnRule], table: str) -> List[str]:
    errs: List[str] = []
    cols = set(df.columns)
    for r in rules:
        if r.required and r.name not in cols:
            errs.append(f"[{table}] Missing required column: {r.name}")
    return errs


def _duplicate_cols(df: pd.DataFrame) -> List[str]:
    """Column names that occur more than once, in first-seen order."""
    dupes = df.columns[df.columns.duplicated()]
    return list(dict.fromkeys(str(c) for c in dupes))
