"""CLI command implementations."""

from __future__ import annotations

from .render import load_sources, render


__all__ = ["load_sources", "render"]
