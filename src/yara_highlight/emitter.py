"""Conversion of resolved candidates into the read-only span list."""

from __future__ import annotations

from collections.abc import Iterable

from .errors import SpanOrderError
from .tokens import Candidate, Span


def emit(accepted: Iterable[Candidate]) -> tuple[Span, ...]:
    """Turn resolver output into renderer-facing spans.

    The renderer requires strictly ascending, non-overlapping input. Resolver
    output always satisfies that; anything else is rejected here rather than
    passed through.

    Raises:
        SpanOrderError: If a range is empty or starts before the previous one ends.
    """
    spans: list[Span] = []
    previous_end = 0
    for index, candidate in enumerate(accepted):
        if candidate.start >= candidate.end:
            raise SpanOrderError(
                f"empty range [{candidate.start}, {candidate.end})", index=index
            )
        if spans and candidate.start < previous_end:
            raise SpanOrderError(
                f"starts at {candidate.start} before previous span ends at {previous_end}",
                index=index,
            )
        spans.append(Span(candidate.start, candidate.end, candidate.category))
        previous_end = candidate.end
    return tuple(spans)
