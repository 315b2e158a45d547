"""Tests for prcomment.orchestrator."""

from __future__ import annotations

from pathlib import Path

import pytest

from prcomment.config import PRCommentConfig
from prcomment.errors import (
    CompletionError,
    MissingApiKey,
    MissingTemplate,
    NoDifferences,
    NotAGitRepository,
    OnBaseBranch,
)
from prcomment.git.history import HistoryCollector
from prcomment.orchestrator import Orchestrator
from prcomment.prompting.constants import SYSTEM_PROMPT
from prcomment.prompting.template import TemplateRenderer
from prcomment.stores import ResultStore
from tests._fixtures.fake_repo import FakeRepository

E2E_TEMPLATE = "Branch: {currentBranch}\nTicket: {jiraTicket}\nCommits:\n{commitMessages}"


class RecordingCollector(HistoryCollector):
    def __init__(self) -> None:
        super().__init__()
        self.calls = 0

    def collect(self, repo, pair):  # type: ignore[no-untyped-def]
        self.calls += 1
        return super().collect(repo, pair)


class RecordingRenderer(TemplateRenderer):
    def __init__(self) -> None:
        self.calls = 0

    def render(self, template, context):  # type: ignore[no-untyped-def]
        self.calls += 1
        return super().render(template, context)


class RecordingLLMRunner:
    """Runner double that captures prompts for assertions."""

    def __init__(self, response: str = "```markdown\n## Summary\n- Adds x\n```", api_key: str | None = "sk-test") -> None:
        self.api_key = api_key
        self.model = "fake-model"
        self.response = response
        self.calls: list[dict[str, object]] = []

    def run(self, prompt: str, *, system: str | None = None) -> str:
        self.calls.append({"prompt": prompt, "system": system})
        return self.response


def _orchestrator(repo: FakeRepository, **kwargs) -> Orchestrator:  # type: ignore[no-untyped-def]
    return Orchestrator(repository_factory=lambda path: repo, **kwargs)


def _config_with(template: str | None) -> PRCommentConfig:
    return PRCommentConfig(root=Path("/repo"), template=template)


def test_build_prompt_end_to_end(feature_repo: FakeRepository) -> None:
    prompt = _orchestrator(feature_repo).build_prompt("/repo", E2E_TEMPLATE)

    assert prompt == "Branch: FOO-9-add-x\nTicket: FOO-9\nCommits:\nadd x\nfix typo"
    assert feature_repo.call_names() == [
        "is_valid_repository",
        "current_branch",
        "ref_exists",
        "diff",
        "log",
    ]


def test_build_prompt_short_circuits_when_resolution_fails() -> None:
    repo = FakeRepository(branch="main")
    collector = RecordingCollector()
    renderer = RecordingRenderer()
    orchestrator = _orchestrator(repo, history_collector=collector, renderer=renderer)

    with pytest.raises(OnBaseBranch):
        orchestrator.build_prompt("/repo", E2E_TEMPLATE)

    assert collector.calls == 0
    assert renderer.calls == 0
    assert "diff" not in repo.call_names()
    assert "log" not in repo.call_names()


def test_build_prompt_propagates_not_a_repository() -> None:
    repo = FakeRepository(valid=False)

    with pytest.raises(NotAGitRepository):
        _orchestrator(repo).build_prompt("/repo", E2E_TEMPLATE)


def test_build_prompt_does_not_render_without_differences() -> None:
    repo = FakeRepository(branch="topic")
    renderer = RecordingRenderer()

    with pytest.raises(NoDifferences):
        _orchestrator(repo, renderer=renderer).build_prompt("/repo", E2E_TEMPLATE)

    assert renderer.calls == 0


def test_build_prompt_requires_template(feature_repo: FakeRepository) -> None:
    with pytest.raises(MissingTemplate):
        _orchestrator(feature_repo).build_prompt("/repo", "")


def test_branch_info_skips_history(feature_repo: FakeRepository) -> None:
    info = _orchestrator(feature_repo).branch_info("/repo")

    assert info.current_branch == "FOO-9-add-x"
    assert info.target_branch == "origin/main"
    assert info.jira_ticket == "FOO-9"
    assert "diff" not in feature_repo.call_names()


def test_generate_sends_prompt_and_cleans_response(feature_repo: FakeRepository) -> None:
    runner = RecordingLLMRunner()
    orchestrator = _orchestrator(
        feature_repo,
        llm_runner=runner,
        config_loader=lambda path: _config_with(E2E_TEMPLATE),
    )

    result = orchestrator.generate("/repo")

    assert result.description == "## Summary\n- Adds x"
    assert result.prompt == "Branch: FOO-9-add-x\nTicket: FOO-9\nCommits:\nadd x\nfix typo"
    assert result.branch.base == "origin/main"
    assert runner.calls == [{"prompt": result.prompt, "system": SYSTEM_PROMPT}]


def test_generate_records_result_in_store(feature_repo: FakeRepository, tmp_path: Path) -> None:
    store = ResultStore(tmp_path / "last.json")
    orchestrator = _orchestrator(
        feature_repo,
        llm_runner=RecordingLLMRunner(),
        config_loader=lambda path: _config_with(E2E_TEMPLATE),
    )

    orchestrator.generate("/repo", store=store)

    latest = ResultStore(tmp_path / "last.json").latest()
    assert latest is not None
    assert latest.branch == "FOO-9-add-x"
    assert latest.description == "## Summary\n- Adds x"


def test_generate_requires_api_key(feature_repo: FakeRepository) -> None:
    runner = RecordingLLMRunner(api_key=None)
    orchestrator = _orchestrator(
        feature_repo,
        llm_runner=runner,
        config_loader=lambda path: _config_with(E2E_TEMPLATE),
    )

    with pytest.raises(MissingApiKey):
        orchestrator.generate("/repo")

    assert not runner.calls


def test_generate_requires_template(feature_repo: FakeRepository) -> None:
    runner = RecordingLLMRunner()
    orchestrator = _orchestrator(
        feature_repo,
        llm_runner=runner,
        config_loader=lambda path: _config_with(None),
    )

    with pytest.raises(MissingTemplate):
        orchestrator.generate("/repo")

    assert not runner.calls


def test_generate_checks_git_before_configuration() -> None:
    repo = FakeRepository(branch="master", refs=("master",))
    loaded: list[Path] = []

    def loader(path: Path) -> PRCommentConfig:
        loaded.append(path)
        return _config_with(E2E_TEMPLATE)

    with pytest.raises(OnBaseBranch):
        _orchestrator(repo, llm_runner=RecordingLLMRunner(), config_loader=loader).generate("/repo")

    assert not loaded


def test_generate_rejects_blank_completion(feature_repo: FakeRepository, tmp_path: Path) -> None:
    store = ResultStore(tmp_path / "last.json")
    orchestrator = _orchestrator(
        feature_repo,
        llm_runner=RecordingLLMRunner(response="  \n\n "),
        config_loader=lambda path: _config_with(E2E_TEMPLATE),
    )

    with pytest.raises(CompletionError):
        orchestrator.generate("/repo", store=store)

    assert store.latest() is None


def test_generate_builds_runner_from_config(feature_repo: FakeRepository, monkeypatch) -> None:
    captured = {}

    def fake_post_json(request):
        captured["model"] = request.model
        captured["authorization"] = request.headers.get("Authorization")
        captured["url"] = request.url
        captured["temperature"] = request.body.get("temperature")
        return {"choices": [{"message": {"content": "body"}}]}

    monkeypatch.setattr("prcomment.llm.runner.post_json", fake_post_json)
    config = _config_with(E2E_TEMPLATE)
    config.llm.model = "gpt-4o"
    config.llm.api_key = "sk-config"
    config.llm.base_url = "https://llm.internal/v1/"
    config.llm.temperature = 0.1

    result = _orchestrator(feature_repo, config_loader=lambda path: config).generate("/repo")

    assert result.description == "body"
    assert captured == {
        "model": "gpt-4o",
        "authorization": "Bearer sk-config",
        "url": "https://llm.internal/v1/chat/completions",
        "temperature": 0.1,
    }
