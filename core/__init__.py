"""Core (UI-agnostic) dashboard logic.

This package contains:
- embedded SQLite access (query -> pandas)
- the event weighting table
- report SQL and page loaders (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
