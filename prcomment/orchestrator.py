"""Pipeline orchestration for prompt building and description generation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, Tuple

from .config import PRCommentConfig, load_config
from .errors import CompletionError, MissingApiKey
from .git.branches import BranchResolver
from .git.history import HistoryCollector
from .git.repository import GitRepository, Repository
from .llm.runner import LLMRunner
from .logging import get_logger
from .models import BranchInfo, BranchPair, GenerationResult
from .postproc.fences import clean_completion
from .prompting.constants import SYSTEM_PROMPT
from .prompting.template import TemplateRenderer, build_context
from .prompting.ticket import extract_ticket
from .stores import ResultStore


class Orchestrator:
    """Coordinates resolve -> collect -> extract -> render, plus the completion call.

    ``build_prompt`` is the pure string pipeline. ``generate`` adds the
    configuration lookup, the completion request and response cleanup on top
    of it. Neither keeps state between calls.
    """

    def __init__(
        self,
        repository_factory: Callable[[Path], Repository] | None = None,
        branch_resolver: BranchResolver | None = None,
        history_collector: HistoryCollector | None = None,
        renderer: TemplateRenderer | None = None,
        ticket_extractor: Callable[[str], str] | None = None,
        llm_runner: LLMRunner | None = None,
        config_loader: Callable[[Path], PRCommentConfig] | None = None,
    ) -> None:
        self.repository_factory = repository_factory or GitRepository
        self.branch_resolver = branch_resolver or BranchResolver()
        self.history_collector = history_collector or HistoryCollector()
        self.renderer = renderer or TemplateRenderer()
        self.ticket_extractor = ticket_extractor or extract_ticket
        self.config_loader = config_loader or load_config
        self.logger = get_logger("orchestrator")
        self._llm_runner = llm_runner

    def build_prompt(self, path: str | Path, template: str | None) -> str:
        """Render ``template`` with the branch metadata of the repository at ``path``."""
        repo_path = Path(path).expanduser().resolve()
        self.logger.info("Building prompt for %s", repo_path)
        _, context = self._collect_context(repo_path)
        prompt = self.renderer.render(template, context)
        self.logger.debug("Rendered prompt of %d characters", len(prompt))
        return prompt

    def branch_info(self, path: str | Path) -> BranchInfo:
        """Return the branch values a run would substitute, without touching the diff."""
        repo_path = Path(path).expanduser().resolve()
        repo = self.repository_factory(repo_path)
        pair = self.branch_resolver.resolve(repo)
        return BranchInfo(
            current_branch=pair.current,
            target_branch=pair.base,
            jira_ticket=self.ticket_extractor(pair.current),
        )

    def generate(
        self,
        path: str | Path,
        *,
        store: ResultStore | None = None,
    ) -> GenerationResult:
        """Build the prompt from configuration and ask the completion endpoint for a description."""
        repo_path = Path(path).expanduser().resolve()
        self.logger.info("Starting generate run for %s", repo_path)
        pair, context = self._collect_context(repo_path)

        config = self.config_loader(repo_path)
        runner = self._resolve_llm_runner(config)
        if not getattr(runner, "api_key", None):
            raise MissingApiKey()

        prompt = self.renderer.render(config.resolve_template(), context)
        self.logger.info("Requesting description from %s", getattr(runner, "model", "LLM"))
        try:
            raw = runner.run(prompt, system=SYSTEM_PROMPT)
        except CompletionError as exc:
            self._log_exception("Completion request failed", exc)
            raise

        description = clean_completion(raw)
        if not description:
            raise CompletionError("Completion endpoint returned an empty description")

        if store is not None:
            store.record(pair.current, description)
            store.persist()
            self.logger.debug("Recorded description for %s", pair.current)

        self.logger.info("Generated description for %s", pair.current)
        return GenerationResult(prompt=prompt, description=description, branch=pair)

    # ------------------------------------------------------------------
    # Internals

    def _collect_context(self, repo_path: Path) -> Tuple[BranchPair, Dict[str, str]]:
        repo = self.repository_factory(repo_path)
        pair = self.branch_resolver.resolve(repo)
        snapshot = self.history_collector.collect(repo, pair)
        ticket = self.ticket_extractor(pair.current)
        self.logger.debug("Ticket for %s: %s", pair.current, ticket)
        return pair, build_context(pair, snapshot, ticket)

    def _resolve_llm_runner(self, config: PRCommentConfig) -> LLMRunner:
        if self._llm_runner is not None:
            return self._llm_runner

        llm_cfg = config.llm
        kwargs: Dict[str, object] = {}
        if llm_cfg.base_url:
            kwargs["base_url"] = llm_cfg.base_url
        if llm_cfg.temperature is not None:
            kwargs["temperature"] = llm_cfg.temperature
        if llm_cfg.max_tokens is not None:
            kwargs["max_tokens"] = llm_cfg.max_tokens
        if llm_cfg.api_key:
            kwargs["api_key"] = llm_cfg.api_key
        if llm_cfg.request_timeout is not None:
            kwargs["request_timeout"] = llm_cfg.request_timeout
        return LLMRunner(llm_cfg.model, **kwargs)  # type: ignore[arg-type]

    def _log_exception(self, message: str, exc: Exception) -> None:
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.exception("%s: %s", message, exc)
        else:
            self.logger.error("%s: %s", message, exc)


__all__ = ["Orchestrator"]
