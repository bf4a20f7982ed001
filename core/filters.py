from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Literal, Mapping, Optional

import pandas as pd

from core.schemas import CATEGORICAL_FIELDS, YEAR_FIELD

MatchStrategy = Literal["exact", "substring"]

DIMENSIONS = (YEAR_FIELD,) + CATEGORICAL_FIELDS

# end_year compares on its text form; every other dimension is a
# case-insensitive substring match.
MATCH_RULES: Dict[str, MatchStrategy] = {
    YEAR_FIELD: "exact",
    **{dimension: "substring" for dimension in CATEGORICAL_FIELDS},
}

_ALIASES = {"endYear": YEAR_FIELD}


@dataclass(frozen=True)
class DashboardFilters:
    end_year: str = ""
    topic: str = ""
    region: str = ""
    country: str = ""
    pestle: str = ""
    source: str = ""
    sector: str = ""

    def active(self) -> Dict[str, str]:
        """Dimensions with a non-empty criterion, in rule-table order."""
        return {d: getattr(self, d) for d in DIMENSIONS if getattr(self, d)}


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def _dimension(name: str) -> str:
    dimension = _ALIASES.get(name, name)
    if dimension not in MATCH_RULES:
        raise ValueError(f"Unknown filter dimension: {name!r}")
    return dimension


def normalize_filters(raw: Optional[Mapping[str, Any]]) -> DashboardFilters:
    values: Dict[str, str] = {}
    for key, value in (raw or {}).items():
        dimension = _ALIASES.get(key, key)
        if dimension in MATCH_RULES:
            values[dimension] = _as_text(value)
    return DashboardFilters(**values)


def set_filter(filters: DashboardFilters, dimension: str, value: Any) -> DashboardFilters:
    return replace(filters, **{_dimension(dimension): _as_text(value)})


def _year_text(value: Any) -> Optional[str]:
    if value is None or pd.isna(value):
        return None
    try:
        return str(int(value))
    except (TypeError, ValueError):
        return None


def _match(df: pd.DataFrame, dimension: str, value: str) -> pd.Series:
    if dimension not in df.columns:
        return pd.Series(False, index=df.index)
    column = df[dimension]
    if MATCH_RULES[dimension] == "exact":
        return column.map(_year_text) == value
    text = column.map(lambda v: v if isinstance(v, str) else "")
    return text.str.lower().str.contains(value.lower(), regex=False)


def apply_filters(df: pd.DataFrame, filters: DashboardFilters) -> pd.DataFrame:
    """Rows matching every active criterion, in their original order.

    Missing values never satisfy a non-empty criterion.
    """
    active = filters.active()
    if df.empty or not active:
        return df.copy()
    mask = pd.Series(True, index=df.index)
    for dimension, value in active.items():
        mask &= _match(df, dimension, value).astype(bool)
    return df[mask]
