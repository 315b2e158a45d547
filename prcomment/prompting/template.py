"""Placeholder substitution for user PR templates."""

from __future__ import annotations

from typing import Mapping

from ..errors import MissingTemplate
from ..models import BranchPair, HistorySnapshot
from .constants import PLACEHOLDER_KEYS


def build_context(
    pair: BranchPair, snapshot: HistorySnapshot, ticket: str
) -> dict[str, str]:
    """Assemble the placeholder values for one run."""
    return {
        "currentBranch": pair.current,
        "targetBranch": pair.base,
        "jiraTicket": ticket,
        "commitMessages": snapshot.joined_messages(),
        "diff": snapshot.diff_text,
    }


def render_template(template: str | None, context: Mapping[str, str]) -> str:
    """Substitute the first ``{key}`` token of each known placeholder.

    Repeated tokens after the first stay literal, as do placeholders outside
    ``PLACEHOLDER_KEYS``. Keys missing from ``context`` are left untouched.
    Only an unset or empty template is rejected; a whitespace-only one
    renders as itself.
    """
    if not template:
        raise MissingTemplate()

    rendered = template
    for key in PLACEHOLDER_KEYS:
        if key not in context:
            continue
        rendered = rendered.replace("{" + key + "}", context[key], 1)
    return rendered


class TemplateRenderer:
    """Thin object wrapper so the orchestrator can swap renderers in tests."""

    def render(self, template: str | None, context: Mapping[str, str]) -> str:
        return render_template(template, context)


__all__ = ["TemplateRenderer", "build_context", "render_template"]
