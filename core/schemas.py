from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from core.errors import MalformedRecordError

YEAR_FIELD = "end_year"
CATEGORICAL_FIELDS = ("topic", "region", "country", "pestle", "source", "sector")
NUMERIC_FIELDS = ("intensity", "relevance", "likelihood")
RECORD_FIELDS = (YEAR_FIELD,) + CATEGORICAL_FIELDS + NUMERIC_FIELDS


class Record(BaseModel):
    """One dataset row.

    Every field must be present in the payload, but any of them may be blank:
    blank categoricals become "" and blank numbers become None.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", str_strip_whitespace=True)

    end_year: Optional[int]
    topic: str
    region: str
    country: str
    pestle: str
    source: str
    sector: str
    intensity: Optional[float]
    relevance: Optional[float]
    likelihood: Optional[float]

    @field_validator(YEAR_FIELD, *NUMERIC_FIELDS, mode="before")
    @classmethod
    def _blank_number(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("expected a number, got a boolean")
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator(*CATEGORICAL_FIELDS, mode="before")
    @classmethod
    def _blank_text(cls, value: Any) -> Any:
        return "" if value is None else value


def parse_record(raw: Any, position: int) -> Record:
    if not isinstance(raw, dict):
        raise MalformedRecordError(position, raw, f"expected an object, got {type(raw).__name__}")
    try:
        return Record.model_validate(raw)
    except ValidationError as exc:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
        raise MalformedRecordError(position, raw, f"invalid fields: {', '.join(fields)}") from exc
