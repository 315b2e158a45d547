"""Diff and commit history collection between two refs."""

from __future__ import annotations

from ..errors import NoDifferences
from ..logging import get_logger
from ..models import BranchPair, HistorySnapshot
from .repository import Repository


class HistoryCollector:
    """Collects what a feature branch changed and which commits it added."""

    def __init__(self) -> None:
        self.logger = get_logger("history")

    def collect(self, repo: Repository, pair: BranchPair) -> HistorySnapshot:
        # Three-dot: content changed since the merge base.
        diff_text = repo.diff(f"{pair.base}...{pair.current}")
        if not diff_text.strip():
            raise NoDifferences(pair.base, pair.current)

        # Two-dot: commits reachable from current but not from base.
        commits = repo.log(f"{pair.base}..{pair.current}")
        messages = tuple(commit.message for commit in commits)
        self.logger.debug(
            "Collected %d diff bytes and %d commits", len(diff_text), len(messages)
        )
        return HistorySnapshot(diff_text=diff_text, commit_messages=messages)


__all__ = ["HistoryCollector"]
