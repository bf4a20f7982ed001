"""Core (UI-agnostic) dashboard logic.

This package contains:
- record schema and validation (JSON -> pydantic -> pandas)
- data loading and filter option derivation
- the filter engine
- chart aggregators (JSON-serializable ChartDatum payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
- explicit dashboard state with pure update functions
"""
