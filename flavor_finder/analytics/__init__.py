"""
In-process analytics for the recipe browser.

Responsibilities:
- Record search and save events as they happen.
- Aggregate them into usage summaries for the analytics endpoint.
"""
