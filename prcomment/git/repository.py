"""Read-only git binding used by the pipeline."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Iterable, List, Protocol, Sequence

from ..errors import GitCommandError
from ..logging import get_logger
from ..models import CommitInfo

_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_LOG_FORMAT = "--format=%H%x1f%s%x1e"


class Repository(Protocol):
    """Capabilities the pipeline needs from a repository handle."""

    def is_valid_repository(self) -> bool: ...

    def current_branch(self) -> str: ...

    def ref_exists(self, name: str) -> bool: ...

    def diff(self, revision_range: str) -> str: ...

    def log(self, revision_range: str) -> Sequence[CommitInfo]: ...


class GitRepository:
    """Runs git subcommands against a working directory.

    Every call is a blocking subprocess. The repository is never written to.
    """

    def __init__(self, path: str | Path, runner: Callable[..., str] | None = None) -> None:
        self.path = Path(path).expanduser().resolve()
        self._runner = runner or self._default_runner
        self.logger = get_logger("git")

    def is_valid_repository(self) -> bool:
        if not self.path.is_dir():
            return False
        try:
            output = self._runner(["git", "rev-parse", "--is-inside-work-tree"], cwd=self.path)
        except (subprocess.CalledProcessError, FileNotFoundError):
            return False
        return output.strip() == "true"

    def current_branch(self) -> str:
        return self._run(["git", "rev-parse", "--abbrev-ref", "HEAD"]).strip()

    def ref_exists(self, name: str) -> bool:
        # Exit status is the signal; --quiet keeps stdout empty on failure.
        try:
            self._runner(["git", "rev-parse", "--verify", "--quiet", name], cwd=self.path)
        except subprocess.CalledProcessError:
            return False
        return True

    def diff(self, revision_range: str) -> str:
        return self._run(["git", "diff", revision_range])

    def log(self, revision_range: str) -> List[CommitInfo]:
        output = self._run(["git", "log", _LOG_FORMAT, revision_range])
        return _parse_log(output)

    # ------------------------------------------------------------------
    # Internals

    def _run(self, args: List[str]) -> str:
        self.logger.debug("Running %s", " ".join(args))
        try:
            return self._runner(args, cwd=self.path)
        except subprocess.CalledProcessError as exc:
            raise GitCommandError(args, exc.returncode, exc.stderr or "") from exc
        except FileNotFoundError as exc:  # pragma: no cover - environment dependent
            raise GitCommandError(args, 127, "git executable not found") from exc

    @staticmethod
    def _default_runner(args: Iterable[str], *, cwd: Path) -> str:
        # Diffs carry file contents in whatever encoding the files use.
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            check=True,
            encoding="utf-8",
            errors="replace",
            capture_output=True,
        )
        return completed.stdout


def _parse_log(output: str) -> List[CommitInfo]:
    commits: List[CommitInfo] = []
    for record in output.split(_RECORD_SEP):
        record = record.strip("\n")
        if not record:
            continue
        sha, _, message = record.partition(_FIELD_SEP)
        commits.append(CommitInfo(sha=sha.strip(), message=message))
    return commits


__all__ = ["GitRepository", "Repository"]
