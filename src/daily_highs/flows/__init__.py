"""
Prefect flows.

Flows:
- fetch: Fetch and normalize daily highs from the configured provider
- build: Render the records into a printable static page

Usage (local):
    python -m daily_highs.flows.fetch
    daily-highs refresh   # fetch + build

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    daily-highs refresh
"""
