"""Shared constants for prompt rendering and completion requests."""

from __future__ import annotations

NO_TICKET = "No Jira ticket found"

# Substitution order matches the order values are written into the template.
PLACEHOLDER_KEYS: tuple[str, ...] = (
    "currentBranch",
    "targetBranch",
    "jiraTicket",
    "commitMessages",
    "diff",
)

SYSTEM_PROMPT = (
    "You are a helpful assistant for generating pull request comments. "
    "Follow the template structure exactly as provided. "
    "If a Jira ticket is provided, include relevant information from the ticket number "
    "in the description. Only output the markdown content without any additional text "
    "or formatting."
)


__all__ = ["NO_TICKET", "PLACEHOLDER_KEYS", "SYSTEM_PROMPT"]
