"""Tests for overlap resolution."""

from hypothesis import given, settings
from hypothesis import strategies as st

from yara_highlight.resolver import overlaps, resolve, resolve_detailed
from yara_highlight.tokens import Candidate, Category

KW = Category.KEYWORD
COMMENT = Category.COMMENT
STRING = Category.STRING


def _ranges(candidates):
    return [(c.start, c.end, c.category) for c in candidates]


def _resolve_all_pairs(candidates):
    """Reference resolver that checks every accepted candidate."""
    accepted = []
    for current in sorted(candidates, key=lambda c: (c.start, c.priority)):
        if current.start >= current.end:
            continue
        if not any(overlaps(current, added) for added in accepted):
            accepted.append(current)
    return accepted


class TestResolve:
    def test_empty(self):
        assert resolve([]) == []

    def test_lower_priority_number_wins_regardless_of_end(self):
        result = resolve([Candidate(0, 2, KW, 8), Candidate(0, 10, COMMENT, 1)])
        assert _ranges(result) == [(0, 10, COMMENT)]

        result = resolve([Candidate(0, 10, KW, 8), Candidate(0, 2, COMMENT, 1)])
        assert _ranges(result) == [(0, 2, COMMENT)]

    def test_earlier_start_claims_region(self):
        result = resolve([Candidate(2, 4, COMMENT, 1), Candidate(0, 5, KW, 8)])
        assert _ranges(result) == [(0, 5, KW)]

    def test_loser_dropped_whole(self):
        result = resolve([Candidate(0, 4, STRING, 2), Candidate(3, 9, KW, 8)])
        assert _ranges(result) == [(0, 4, STRING)]

    def test_adjacent_ranges_both_kept(self):
        result = resolve([Candidate(2, 4, KW, 8), Candidate(0, 2, STRING, 2)])
        assert _ranges(result) == [(0, 2, STRING), (2, 4, KW)]

    def test_identical_ranges(self):
        result = resolve([Candidate(0, 4, KW, 8), Candidate(0, 4, KW, 3)])
        assert [c.priority for c in result] == [3]

    def test_equal_key_keeps_input_order(self):
        result = resolve([Candidate(0, 3, STRING, 5), Candidate(0, 4, KW, 5)])
        assert _ranges(result) == [(0, 3, STRING)]

    def test_zero_length_candidates_ignored(self):
        result = resolve([Candidate(1, 1, COMMENT, 1), Candidate(0, 3, KW, 8)])
        assert _ranges(result) == [(0, 3, KW)]

    def test_rejected_are_reported(self):
        resolution = resolve_detailed(
            [Candidate(0, 5, COMMENT, 1), Candidate(1, 2, KW, 8), Candidate(5, 6, KW, 8)]
        )
        assert _ranges(resolution.accepted) == [(0, 5, COMMENT), (5, 6, KW)]
        assert _ranges(resolution.rejected) == [(1, 2, KW)]


class TestOverlaps:
    def test_touching_ranges_do_not_overlap(self):
        assert not overlaps(Candidate(0, 2, KW, 8), Candidate(2, 3, KW, 8))

    def test_containment_overlaps(self):
        assert overlaps(Candidate(0, 10, KW, 8), Candidate(3, 4, KW, 8))
        assert overlaps(Candidate(3, 4, KW, 8), Candidate(0, 10, KW, 8))


_candidates = st.lists(
    st.builds(
        lambda start, length, priority, category: Candidate(
            start, start + length, category, priority
        ),
        st.integers(min_value=0, max_value=60),
        st.integers(min_value=0, max_value=15),
        st.integers(min_value=1, max_value=8),
        st.sampled_from(list(Category)),
    ),
    max_size=40,
)


class TestResolverProperties:
    @given(_candidates)
    @settings(max_examples=200)
    def test_matches_all_pairs_reference(self, candidates):
        """Comparing against the last accepted end gives the all-pairs result."""
        assert resolve(candidates) == _resolve_all_pairs(candidates)

    @given(_candidates)
    @settings(max_examples=200)
    def test_accepted_are_sorted_and_disjoint(self, candidates):
        accepted = resolve(candidates)
        for left, right in zip(accepted, accepted[1:]):
            assert left.end <= right.start

    @given(_candidates)
    @settings(max_examples=100)
    def test_every_candidate_accounted_for(self, candidates):
        resolution = resolve_detailed(candidates)
        non_empty = [c for c in candidates if c.start < c.end]
        assert len(resolution.accepted) + len(resolution.rejected) == len(non_empty)
