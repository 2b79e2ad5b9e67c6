"""Core (UI-agnostic) SIGAMI dashboard logic.

This package contains:
- row normalization (loose spreadsheet rows -> canonical requests)
- filter state and drill-down handling
- aggregations and page compute functions (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
