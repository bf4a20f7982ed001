"""Shared fixtures: raw payloads and loaded stores."""

from typing import Any, Dict, List

import pytest

from core.data import RecordStore, build_store


def make_record(**overrides: Any) -> Dict[str, Any]:
    record = {
        "end_year": 2020,
        "topic": "energy",
        "region": "Asia",
        "country": "China",
        "pestle": "P",
        "source": "S1",
        "sector": "Tech",
        "intensity": 5,
        "relevance": 3,
        "likelihood": 40,
    }
    record.update(overrides)
    return record


@pytest.fixture
def scenario_payload() -> List[Dict[str, Any]]:
    """The two-record dataset used throughout the filter examples."""
    return [
        make_record(),
        make_record(
            end_year=2021,
            region="Europe",
            country="France",
            source="S2",
            intensity=7,
            relevance=4,
            likelihood=60,
        ),
    ]


@pytest.fixture
def scenario_store(scenario_payload: List[Dict[str, Any]]) -> RecordStore:
    return build_store(scenario_payload, source="test")


@pytest.fixture
def mixed_payload() -> List[Dict[str, Any]]:
    """A larger payload with repeated groups and blank values."""
    return [
        make_record(end_year=2020, topic="oil", region="Asia", country="India", source="Reuters", likelihood=2),
        make_record(end_year=2022, topic="gas", region="Europe", country="France", source="EIA", likelihood=3),
        make_record(end_year="", topic="Oil price", region="Asia", country="India", source="Reuters", likelihood=4),
        make_record(end_year=2020, topic="energy", region="", country="", source="EIA", intensity="", likelihood=""),
        make_record(end_year=2025, topic="market", region="Northern America", country="United States of America", source="OPEC", likelihood=1),
        make_record(end_year=2020, topic="oil", region="Asia", country="China", source="Reuters", pestle="Economic"),
    ]


@pytest.fixture
def mixed_store(mixed_payload: List[Dict[str, Any]]) -> RecordStore:
    return build_store(mixed_payload, source="test")
