"""Test helper utilities for concert store tests."""

from .store_helpers import DB_INIT_SCRIPT, FIXTURES_DIR, count_rows, find_by_title

__all__ = ["DB_INIT_SCRIPT", "FIXTURES_DIR", "count_rows", "find_by_title"]
