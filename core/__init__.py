"""Core (UI-agnostic) order dashboard logic.

This package contains:
- sheet grid parsing (rows -> pandas)
- date parsing shared by filtering and sorting
- filters, sort engine and category statistics
- the view-state controller that recomputes derived state
- the Google Sheets client, settings store and operator login
- chart helpers (Altair -> Vega-Lite spec dict)
"""
