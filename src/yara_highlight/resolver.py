"""Overlap resolution for pooled pattern candidates.

Candidates are ordered by start offset and then by priority, and accepted
first-come: a candidate survives only if it does not overlap anything already
accepted. Losers are dropped whole, never trimmed.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .tokens import Candidate


def overlaps(a: Candidate, b: Candidate) -> bool:
    """Two half-open ranges overlap when each starts before the other ends."""
    return a.start < b.end and a.end > b.start


def _sort_key(candidate: Candidate) -> tuple[int, int]:
    return (candidate.start, candidate.priority)


@dataclass
class Resolution:
    """Outcome of a resolver pass."""

    accepted: list[Candidate] = field(default_factory=list)
    """Winning candidates, ascending by start and pairwise disjoint."""

    rejected: list[Candidate] = field(default_factory=list)
    """Candidates that lost an overlap, in the order they were considered."""


def resolve_detailed(candidates: Iterable[Candidate]) -> Resolution:
    """Resolve overlaps and report both winners and losers.

    ``sorted`` is stable, so candidates sharing start and priority keep the
    order in which the patterns produced them.

    Accepted candidates are disjoint and sorted by start, which makes their
    ends ascending as well. A new candidate (whose start is at least that of
    every accepted one) therefore overlaps some accepted candidate exactly
    when it starts before the end of the last one accepted. This is the same
    outcome as testing it against every accepted candidate.
    """
    resolution = Resolution()
    last_end = None
    for candidate in sorted(candidates, key=_sort_key):
        if candidate.start >= candidate.end:
            # Zero-length matches never reach the output
            continue
        if last_end is not None and candidate.start < last_end:
            resolution.rejected.append(candidate)
            continue
        resolution.accepted.append(candidate)
        last_end = candidate.end
    return resolution


def resolve(candidates: Iterable[Candidate]) -> list[Candidate]:
    """Reduce *candidates* to an ascending, non-overlapping list of winners."""
    return resolve_detailed(candidates).accepted
