"""Persistent store for the most recently generated description."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
import json
from pathlib import Path
from typing import Dict, Optional

_STORE_VERSION = 1
DEFAULT_STORE_PATH = Path(".prcomment") / "last_result.json"


@dataclass(frozen=True)
class StoredResult:
    """Last description produced for a repository."""

    branch: str
    description: str
    generated_at: str


class ResultStore:
    """Keeps the last generated description on disk, owned by the caller."""

    def __init__(self, path: Path | None) -> None:
        self._path = path
        self._entry: Optional[Dict[str, object]] = None
        self._dirty = False
        if self._path is not None:
            self._load(self._path)

    @classmethod
    def for_repo(cls, repo_path: Path, path: Path | None = None) -> "ResultStore":
        return cls(path or Path(repo_path) / DEFAULT_STORE_PATH)

    def latest(self) -> Optional[StoredResult]:
        if not self._entry:
            return None
        branch = self._entry.get("branch")
        description = self._entry.get("description")
        generated_at = self._entry.get("generated_at")
        if (
            not isinstance(branch, str)
            or not isinstance(description, str)
            or not isinstance(generated_at, str)
        ):
            return None
        return StoredResult(branch=branch, description=description, generated_at=generated_at)

    def record(self, branch: str, description: str) -> None:
        self._entry = {
            "branch": branch,
            "description": description,
            "generated_at": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
        }
        self._dirty = True

    def persist(self) -> None:
        if not self._dirty or self._path is None or self._entry is None:
            return
        payload = {"version": _STORE_VERSION, "entry": self._entry}
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8"
        )
        self._dirty = False

    # ------------------------------------------------------------------
    # Internal helpers

    def _load(self, path: Path) -> None:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            # Missing or unreadable file means no previous result.
            return
        if not isinstance(data, dict) or data.get("version") != _STORE_VERSION:
            return
        entry = data.get("entry")
        if isinstance(entry, dict):
            self._entry = entry


__all__ = ["DEFAULT_STORE_PATH", "ResultStore", "StoredResult"]
