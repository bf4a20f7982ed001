from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd
import requests

from core.config import DATA_URL, HTTP_TIMEOUT
from core.errors import FetchError, MalformedRecordError
from core.filters import DIMENSIONS, DashboardFilters, apply_filters, normalize_filters
from core.schemas import CATEGORICAL_FIELDS, NUMERIC_FIELDS, RECORD_FIELDS, YEAR_FIELD, Record, parse_record

logger = logging.getLogger(__name__)

FilterOptions = Dict[str, List[Any]]


@dataclass(frozen=True, eq=False)
class RecordStore:
    """The loaded dataset. Replaced wholesale on every load, never edited."""

    frame: pd.DataFrame
    dropped: int = 0
    source: str = ""

    def __len__(self) -> int:
        return len(self.frame)

    @property
    def empty(self) -> bool:
        return self.frame.empty


def as_int(value: object) -> Optional[int]:
    if value is None or pd.isna(value):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def as_float(value: object) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def records_to_frame(records: Iterable[Record]) -> pd.DataFrame:
    df = pd.DataFrame([r.model_dump() for r in records], columns=list(RECORD_FIELDS))
    df[YEAR_FIELD] = pd.to_numeric(df[YEAR_FIELD], errors="coerce").astype("Int64")
    for col in NUMERIC_FIELDS:
        df[col] = pd.to_numeric(df[col], errors="coerce").astype("float64")
    for col in CATEGORICAL_FIELDS:
        df[col] = df[col].astype(object)
    return df


def empty_store(source: str = "") -> RecordStore:
    return RecordStore(frame=records_to_frame([]), source=source)


def build_store(payload: Iterable[Any], source: str = "") -> RecordStore:
    """Validate raw records into a store, skipping the malformed ones."""
    records: List[Record] = []
    dropped = 0
    for position, raw in enumerate(payload):
        try:
            records.append(parse_record(raw, position))
        except MalformedRecordError as exc:
            dropped += 1
            logger.warning("Skipping record: %s", exc)
    return RecordStore(frame=records_to_frame(records), dropped=dropped, source=source)


def fetch_records(url: str = DATA_URL, *, timeout: float = HTTP_TIMEOUT) -> List[Any]:
    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException as exc:
        raise FetchError(url, str(exc)) from exc
    if not response.ok:
        raise FetchError(url, "network response was not ok", status_code=response.status_code)
    try:
        payload = response.json()
    except ValueError as exc:
        raise FetchError(url, "response is not valid JSON") from exc
    if not isinstance(payload, list):
        raise FetchError(url, f"expected a JSON array, got {type(payload).__name__}")
    return payload


@lru_cache(maxsize=4)
def load_store(url: str = DATA_URL) -> RecordStore:
    """Fetch and validate the dataset once per URL.

    Failures raise FetchError and are therefore never cached; call
    `load_store.cache_clear()` to force a fresh fetch.
    """
    payload = fetch_records(url)
    store = build_store(payload, source=url)
    logger.info("Loaded %d records from %s, skipped %d malformed", len(store), url, store.dropped)
    return store


def derive_options(df: pd.DataFrame) -> FilterOptions:
    """Sorted distinct non-empty values per dimension across the whole store."""
    options: FilterOptions = {}
    for dimension in DIMENSIONS:
        if dimension not in df.columns:
            options[dimension] = []
            continue
        values = df[dimension].dropna()
        if dimension == YEAR_FIELD:
            options[dimension] = sorted({int(v) for v in values})
        else:
            options[dimension] = sorted({str(v) for v in values if str(v)})
    return options


def prepare_context(filters: dict | DashboardFilters, store: RecordStore) -> Dict[str, object]:
    filt = filters if isinstance(filters, DashboardFilters) else normalize_filters(filters)
    return {
        "filters": filt,
        "records": store.frame,
        "filtered_records": apply_filters(store.frame, filt),
        "dq_removed_rows": store.dropped,
    }
