"""Editor-facing wrapper that keeps the latest published span list.

The host attaches a :class:`YaraHighlighter` to a document and forwards
:class:`ViewUpdate` events. Each relevant event triggers a full re-scan and a
wholesale replacement of the published spans.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .scanner import YaraScanner
from .tokens import Span

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewUpdate:
    """A change notification from the host view."""

    text: str
    """Full document text after the change."""

    doc_changed: bool = False
    viewport_changed: bool = False

    viewport: tuple[int, int] | None = None
    """Visible ``(from, to)`` offsets. Informational; scans always cover the full text."""


class YaraHighlighter:
    """Holds the span list for one document and refreshes it on demand."""

    def __init__(self, text: str, scanner: YaraScanner | None = None) -> None:
        self._scanner = scanner or YaraScanner()
        self._spans: tuple[Span, ...] = self._scanner.scan(text)
        self._scans = 1

    @property
    def spans(self) -> tuple[Span, ...]:
        """The most recently published spans."""
        return self._spans

    @property
    def scan_count(self) -> int:
        """Number of scans run since the highlighter was attached."""
        return self._scans

    def update(self, update: ViewUpdate) -> bool:
        """Re-scan if the document or the visible region changed.

        Returns:
            True if the spans were recomputed.
        """
        if not (update.doc_changed or update.viewport_changed):
            return False
        spans = self._scanner.scan(update.text)
        # Single assignment so readers see either the old or the new tuple
        self._spans = spans
        self._scans += 1
        logger.debug(
            "rescanned (doc_changed=%s, viewport_changed=%s): %d spans",
            update.doc_changed,
            update.viewport_changed,
            len(spans),
        )
        return True
