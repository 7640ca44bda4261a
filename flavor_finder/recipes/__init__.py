"""
Recipe catalog and search engine.

Responsibilities:
- Load the static recipe catalog and validate it at the data boundary.
- Narrow the catalog from a free-text query and a filter state.
- Track which recipes the current session has saved.
- Hold the browse controller that re-runs the search after every change.
"""
