"""Core data models shared across prcomment components."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class BranchPair:
    """Feature branch and the remote base branch it is compared against."""

    current: str
    base: str


@dataclass(frozen=True)
class CommitInfo:
    """Single entry emitted by ``git log``."""

    sha: str
    message: str


@dataclass(frozen=True)
class HistorySnapshot:
    """Merge-base diff and the commits added on the feature branch."""

    diff_text: str
    commit_messages: Tuple[str, ...]

    def joined_messages(self) -> str:
        return "\n".join(self.commit_messages)


@dataclass(frozen=True)
class BranchInfo:
    """Preview of the values a run would substitute for branch placeholders."""

    current_branch: str
    target_branch: str
    jira_ticket: str


@dataclass
class GenerationResult:
    """Outcome of a full generate run."""

    prompt: str
    description: str
    branch: BranchPair
