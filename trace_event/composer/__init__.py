"""Composer module."""

from .composer import compose_event, normalize_category, resolve_defaults

__all__ = ["compose_event", "normalize_category", "resolve_defaults"]
