"""Utility helper functions."""

from app.utils.helpers import as_utc, get_summary, host, today_str, total_pages, utc_now

__all__ = [
    "as_utc",
    "get_summary",
    "host",
    "today_str",
    "total_pages",
    "utc_now",
]
