"""Cleanup for markdown returned by the completion endpoint."""

from __future__ import annotations

import re

_OPENING_FENCE = re.compile(r"^```\w*\n")
_CLOSING_FENCE = re.compile(r"\n```$")


def clean_completion(text: str) -> str:
    """Trim whitespace and unwrap a single surrounding code fence."""
    cleaned = text.strip()
    cleaned = _OPENING_FENCE.sub("", cleaned, count=1)
    cleaned = _CLOSING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


__all__ = ["clean_completion"]
