"""Exception classes for yara-highlight.

Scanning never raises for document content; these cover programming errors
and the presentation layer.
"""

from __future__ import annotations


class HighlightError(Exception):
    """Base exception for all yara-highlight errors."""


class SpanOrderError(HighlightError):
    """Spans handed to the emitter are out of order or overlap.

    Raised when the ascending, non-overlapping contract the renderer relies
    on would be broken.
    """

    def __init__(self, message: str, index: int | None = None) -> None:
        self.index = index
        if index is not None:
            message = f"span #{index}: {message}"
        super().__init__(message)


class ThemeNotFoundError(HighlightError):
    """No theme file with the requested name exists in any config location."""

    def __init__(self, theme: str, available: list[str]) -> None:
        self.theme = theme
        self.available = available
        listing = ", ".join(available) or "none"
        super().__init__(f"Unknown theme {theme!r}. Available themes: {listing}")
