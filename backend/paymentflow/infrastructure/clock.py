"""UTC Clock — the only place the service reads the wall-clock date.

Invariants:
    - Returns the current calendar day in UTC (time-of-day discarded)
    - Routes receive it via Depends(get_today); tests override the dependency

Design Decisions:
    - FastAPI dependency over a module-level "now": the pure pipeline takes `today`
      as an argument and stays deterministic under test
"""

from datetime import date, datetime, timezone


def get_today() -> date:
    """FastAPI dependency — today's UTC date."""
    return datetime.now(timezone.utc).date()
