"""Current/base branch resolution."""

from __future__ import annotations

from ..errors import NotAGitRepository, OnBaseBranch
from ..logging import get_logger
from ..models import BranchPair
from .repository import Repository

BASE_BRANCH_NAMES = ("master", "main")


def choose_base(has_local_master: bool) -> str:
    """Return the remote-tracking base branch for the naming convention in use."""
    return "origin/master" if has_local_master else "origin/main"


class BranchResolver:
    """Determines the feature branch and the base branch to compare it with."""

    def __init__(self) -> None:
        self.logger = get_logger("branches")

    def resolve(self, repo: Repository) -> BranchPair:
        if not repo.is_valid_repository():
            raise NotAGitRepository(str(getattr(repo, "path", repo)))

        current = repo.current_branch()
        if current in BASE_BRANCH_NAMES:
            raise OnBaseBranch(current)

        # Only the local ref is probed; a missing origin/<base> fails at diff time.
        base = choose_base(repo.ref_exists("master"))
        self.logger.debug("Resolved branches current=%s base=%s", current, base)
        return BranchPair(current=current, base=base)


__all__ = ["BASE_BRANCH_NAMES", "BranchResolver", "choose_base"]
