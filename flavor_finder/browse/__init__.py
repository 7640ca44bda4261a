"""
Per-session browsing state.

Responsibilities:
- Restore the query, filter state and saved recipes from the HTTP session.
- Wire one saved-recipe tracker and one filter controller per request.
- Write the state back to the session after every change.
"""
