"""Error kinds raised by the prcomment pipeline."""

from __future__ import annotations


class PRCommentError(RuntimeError):
    """Base class for every failure surfaced to the caller."""


class NotAGitRepository(PRCommentError):
    """Raised when the target directory is not inside a git work tree."""

    def __init__(self, path: str) -> None:
        super().__init__(f"{path} is not a git repository")
        self.path = path


class OnBaseBranch(PRCommentError):
    """Raised when the checked-out branch is the base branch itself."""

    def __init__(self, branch: str) -> None:
        super().__init__(
            f"Currently on {branch} branch. Please switch to your feature branch."
        )
        self.branch = branch


class NoDifferences(PRCommentError):
    """Raised when the merge-base diff between the branches is empty."""

    def __init__(self, base: str, current: str) -> None:
        super().__init__(f"No differences found between {base} and {current}")
        self.base = base
        self.current = current


class MissingApiKey(PRCommentError):
    """Raised when no completion API key is configured."""

    def __init__(self) -> None:
        super().__init__(
            "API key is not set. Configure llm.api_key in .prcomment.yml "
            "or export PRCOMMENT_API_KEY."
        )


class MissingTemplate(PRCommentError):
    """Raised when the PR template is unset or empty."""

    def __init__(self) -> None:
        super().__init__(
            "PR template is not set. Configure template or template_file in .prcomment.yml."
        )


class GitCommandError(PRCommentError):
    """Raised when a git subprocess exits with a failure."""

    def __init__(self, args: list[str], returncode: int, stderr: str = "") -> None:
        detail = stderr.strip() or f"exit code {returncode}"
        super().__init__(f"`{' '.join(args)}` failed: {detail}")
        self.command = args
        self.returncode = returncode
        self.stderr = stderr


class CompletionError(PRCommentError):
    """Raised when the completion endpoint fails or returns nothing usable."""


__all__ = [
    "CompletionError",
    "GitCommandError",
    "MissingApiKey",
    "MissingTemplate",
    "NoDifferences",
    "NotAGitRepository",
    "OnBaseBranch",
    "PRCommentError",
]
