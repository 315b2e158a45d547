"""Post-processing of generated descriptions."""

from .fences import clean_completion

__all__ = ["clean_completion"]
