"""Ticket identifier extraction from branch names."""

from __future__ import annotations

import re

from .constants import NO_TICKET

TICKET_PATTERN = re.compile(r"[A-Z]+-\d+")


def extract_ticket(branch_name: str) -> str:
    """Return the first ``PROJECT-123`` style token in ``branch_name``.

    Only uppercase project keys match, so ``feature/abc-12`` yields the
    sentinel rather than ``ABC-12``. Branches without a match return
    ``NO_TICKET``.
    """
    match = TICKET_PATTERN.search(branch_name)
    return match.group(0) if match else NO_TICKET


__all__ = ["TICKET_PATTERN", "extract_ticket"]
