"""Prompt assembly: ticket extraction and template rendering."""

from .constants import NO_TICKET, PLACEHOLDER_KEYS, SYSTEM_PROMPT
from .template import TemplateRenderer, build_context, render_template
from .ticket import extract_ticket

__all__ = [
    "NO_TICKET",
    "PLACEHOLDER_KEYS",
    "SYSTEM_PROMPT",
    "TemplateRenderer",
    "build_context",
    "extract_ticket",
    "render_template",
]
