"""Highlight categories, match candidates and resolved spans."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Category(Enum):
    """Closed set of highlight classes a span can carry."""

    KEYWORD = "keyword"
    STRING = "string"
    COMMENT = "comment"
    NUMBER = "number"
    META = "meta"
    VARIABLE = "variable"
    RULE_NAME = "rule_name"
    OPERATOR = "operator"
    ATOM = "atom"


@dataclass(slots=True)
class Candidate:
    """A provisional match proposed by one pattern, before conflict resolution."""

    start: int
    end: int
    """Exclusive end offset."""

    category: Category

    priority: int
    """Tie-break rank among overlapping candidates. Lower wins."""


@dataclass(frozen=True, slots=True)
class Span:
    """A resolved, categorized character range handed to the renderer."""

    start: int
    end: int
    category: Category

    def text_in(self, text: str) -> str:
        """Return the slice of *text* this span covers."""
        return text[self.start : self.end]

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end, "category": self.category.value}
