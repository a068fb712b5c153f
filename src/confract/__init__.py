"""Confract - turn pasted text into structured, deduplicated documents."""

__version__ = "1.0.0"

from .engine import Engine  # noqa: E402

__all__ = ["Engine", "__version__"]
