"""Structured error types for shape building and addressing."""

from __future__ import annotations

from collections.abc import Sequence


class RaggedError(Exception):
    """Base class for structured ragged-jax errors."""


class InvalidShapeError(RaggedError):
    """Dimension spec rejected before any allocation."""

    def __init__(self, message: str, sizes: Sequence[object] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.sizes = tuple(sizes)

    def __str__(self) -> str:
        if not self.sizes:
            return self.message
        return f"{self.message}; sizes={list(self.sizes)}"


class ShapeMismatchError(RaggedError):
    """Structure and request disagree about shape (degenerate branch, bad path)."""
