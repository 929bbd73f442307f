"""Full-text scanning pipeline: patterns, then resolver, then emitter."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .emitter import emit
from .patterns import PATTERN_CATALOGUE, PatternDefinition, find_candidates
from .resolver import resolve_detailed
from .tokens import Candidate, Span

logger = logging.getLogger(__name__)


class YaraScanner:
    """Annotate YARA rule text with highlight spans.

    Pipeline:
        1. Run every pattern in the catalogue over the whole text
        2. Pool the candidates
        3. Resolve overlaps by start offset, then priority
        4. Emit the winners as an immutable tuple of :class:`Span`

    Every call starts from scratch; nothing is carried between scans, so one
    instance can be shared freely.
    """

    def __init__(self, catalogue: Iterable[PatternDefinition] = PATTERN_CATALOGUE) -> None:
        self._catalogue = tuple(catalogue)

    @property
    def catalogue(self) -> tuple[PatternDefinition, ...]:
        return self._catalogue

    def candidates(self, text: str) -> list[Candidate]:
        """Pooled, unresolved candidates for *text*."""
        return find_candidates(text, self._catalogue)

    def scan(self, text: str) -> tuple[Span, ...]:
        """Return the ascending, non-overlapping spans for *text*.

        Never raises for string input; malformed source just yields fewer spans.

        Raises:
            TypeError: If *text* is not a ``str``.
        """
        if not isinstance(text, str):
            raise TypeError(f"scan() expects str, got {type(text).__name__}")
        if not text:
            return ()

        pooled = self.candidates(text)
        resolution = resolve_detailed(pooled)
        spans = emit(resolution.accepted)

        logger.debug(
            "scanned %d chars: %d candidates, %d spans, %d rejected",
            len(text),
            len(pooled),
            len(spans),
            len(resolution.rejected),
        )
        return spans


_default_scanner = YaraScanner()


def scan(text: str) -> tuple[Span, ...]:
    """Scan *text* with the built-in pattern catalogue."""
    return _default_scanner.scan(text)
