from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.fake_repo import FakeRepository


@pytest.fixture
def feature_repo() -> FakeRepository:
    """Repository on ``FOO-9-add-x`` with two commits ahead of ``origin/main``."""
    return FakeRepository(
        branch="FOO-9-add-x",
        refs=("main",),
        diffs={"origin/main...FOO-9-add-x": "diff --git a/x.py b/x.py\n+x = 1\n"},
        logs={"origin/main..FOO-9-add-x": ["add x", "fix typo"]},
    )


@pytest.fixture
def repo_dir(tmp_path: Path) -> Path:
    """Empty directory standing in for a repository root."""
    root = tmp_path / "repo"
    root.mkdir()
    return root
