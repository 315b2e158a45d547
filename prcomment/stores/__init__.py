"""Persistence helpers owned by prcomment callers."""

from .result_store import ResultStore, StoredResult

__all__ = ["ResultStore", "StoredResult"]
