"""Git collaborators for branch resolution and history collection."""

from .branches import BranchResolver, choose_base
from .history import HistoryCollector
from .repository import GitRepository, Repository

__all__ = ["BranchResolver", "GitRepository", "HistoryCollector", "Repository", "choose_base"]
