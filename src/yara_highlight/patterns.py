"""Pattern catalogue for YARA rule source.

Each pattern scans the full text on its own and yields ``(start, end)``
offsets. Patterns never look at each other's results and never skip regions
another pattern already claimed; overlaps are settled afterwards by
:mod:`yara_highlight.resolver` using the priority carried on each definition.

Every pattern is linear in the size of the input. The constructs that can
run unterminated (block comments, strings) and the hex-byte detector are
scanned by hand; the remaining regexes cannot backtrack more than once over
a single token.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass

from .tokens import Candidate, Category

Matcher = Callable[[str], Iterable[tuple[int, int]]]

KEYWORDS: tuple[str, ...] = (
    # Control flow and logic
    "all",
    "and",
    "any",
    "at",
    "for",
    "in",
    "not",
    "of",
    "or",
    "them",
    # String modifiers
    "ascii",
    "base64",
    "base64wide",
    "fullword",
    "nocase",
    "wide",
    "xor",
    # Built-in predicates and values
    "contains",
    "endswith",
    "entrypoint",
    "filesize",
    "icontains",
    "iendswith",
    "istartswith",
    "matches",
    "startswith",
    # Sized integer readers, little and big endian
    "int8",
    "int16",
    "int32",
    "int8be",
    "int16be",
    "int32be",
    "uint8",
    "uint16",
    "uint32",
    "uint8be",
    "uint16be",
    "uint32be",
    # Sections and declarations
    "condition",
    "global",
    "import",
    "include",
    "meta",
    "private",
    "rule",
    "strings",
)

BOOLEAN_ATOMS: tuple[str, ...] = ("true", "false")

SECTION_LABELS: tuple[str, ...] = ("meta", "strings", "condition")
"""Section headers whose trailing colon belongs to the header, not to an operator."""

# Priorities: lower wins when two candidates start at the same offset.
PRIORITY_COMMENT = 1
PRIORITY_STRING = 2
PRIORITY_RULE = 3
PRIORITY_VARIABLE = 3
PRIORITY_META = 4
PRIORITY_NUMBER = 5
PRIORITY_ATOM = 6
PRIORITY_OPERATOR = 7
PRIORITY_KEYWORD = 8

# re.ASCII keeps \w, \d, \s and \b to ASCII, the identifier alphabet of YARA.
_LINE_COMMENT_RE = re.compile(r"//[^\r\n]*")
_STRING_STOP_RE = re.compile(r'["\\\r\n]')
_RULE_DECLARATION_RE = re.compile(r"\b(rule)(\s+)([A-Za-z_]\w{0,127})\s*\{", re.ASCII)
_VARIABLE_RE = re.compile(r"\$\w*", re.ASCII)
# Lines may also end in a bare \r, which MULTILINE "^" does not see.
_META_RE = re.compile(r"(?:^|(?<=\r))#[^\r\n]*", re.MULTILINE)
_HEX_NUMBER_RE = re.compile(r"\b0x[0-9A-Fa-f]+\b", re.ASCII)
_DECIMAL_RE = re.compile(r"\b(?:\.\d+|\d+(?:\.\d*)?)\b", re.ASCII)
_HEX_RUN_RE = re.compile(r"[0-9A-Fa-f?]+")
_ATOM_RE = re.compile(r"\b(?:" + "|".join(BOOLEAN_ATOMS) + r")\b", re.ASCII)
_OPERATOR_RE = re.compile(r"[-+/*=<>:]+")
_KEYWORD_RE = re.compile(
    r"\b(?:" + "|".join(sorted(KEYWORDS, key=len, reverse=True)) + r")\b",
    re.ASCII,
)


def _is_word_char(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch == "_")


def _blocks_hex_run(ch: str) -> bool:
    """Characters that may not touch a hex-byte sequence on either side."""
    return ch == "." or _is_word_char(ch)


def _regex_matcher(pattern: re.Pattern, group: int = 0) -> Matcher:
    """Build a matcher yielding the span of *group* for every match of *pattern*."""

    def matcher(text: str) -> Iterator[tuple[int, int]]:
        for match in pattern.finditer(text):
            yield match.span(group)

    return matcher


# ---------------------------------------------------------------------------
# Hand-written scanners
# ---------------------------------------------------------------------------


def block_comments(text: str) -> Iterator[tuple[int, int]]:
    """``/* ... */`` up to the nearest terminator, or to end of text."""
    pos = text.find("/*")
    while pos != -1:
        close = text.find("*/", pos + 2)
        end = len(text) if close == -1 else close + 2
        yield pos, end
        pos = text.find("/*", end)


def line_comments(text: str) -> Iterator[tuple[int, int]]:
    for match in _LINE_COMMENT_RE.finditer(text):
        yield match.span()


def strings(text: str) -> Iterator[tuple[int, int]]:
    """Double-quoted literals with backslash escapes.

    A literal missing its closing quote ends at the end of its line (the
    newline itself is not included) or at the end of the text.
    """
    n = len(text)
    pos = text.find('"')
    while pos != -1:
        i = pos + 1
        while True:
            stop = _STRING_STOP_RE.search(text, i)
            if stop is None:
                end = n
                break
            i = stop.start()
            ch = text[i]
            if ch == '"':
                end = i + 1
                break
            if ch == "\\":
                if i + 1 < n and text[i + 1] not in "\r\n":
                    i += 2
                    continue
                # Dangling backslash at end of line or text
                end = i + 1
                break
            end = i
            break
        yield pos, end
        pos = text.find('"', end)


def hex_byte_sequences(text: str) -> Iterator[tuple[int, int]]:
    """Even-length runs of hex digits and ``?`` wildcards, e.g. ``4D 5A ?? 90``.

    A sequence is made of 2-character groups and may neither be preceded nor
    followed by a word character or ``.``. The longest qualifying sequence
    wins at each start. Inside a run only the run start and positions right
    after a ``?`` can open a sequence, and only the run end or a ``?`` can
    close one.
    """
    n = len(text)
    for run in _HEX_RUN_RE.finditer(text):
        run_start, run_end = run.span()
        if run_end - run_start < 2:
            continue

        head_ok = run_start == 0 or not _blocks_hex_run(text[run_start - 1])
        tail_ok = run_end == n or not _blocks_hex_run(text[run_end])

        # Rightmost "?" for each index parity; a sequence starting at pos can
        # only close on a "?" with the same parity as pos.
        last_wildcard = [-1, -1]
        q = text.rfind("?", run_start, run_end)
        while q != -1 and -1 in last_wildcard:
            if last_wildcard[q % 2] == -1:
                last_wildcard[q % 2] = q
            q = text.rfind("?", run_start, q)

        pos = run_start
        while pos < run_end - 1:
            opens = head_ok if pos == run_start else text[pos - 1] == "?"
            if opens:
                if tail_ok and (run_end - pos) % 2 == 0:
                    end = run_end
                else:
                    end = last_wildcard[pos % 2]
                if end > pos:
                    yield pos, end
                    pos = end
                    continue
            pos += 1


def numbers(text: str) -> Iterator[tuple[int, int]]:
    """Hex literals (``0x1F``), decimals (``10``, ``3.14``) and hex-byte sequences.

    The three forms are pooled into one stream with at most one match per
    start offset, keeping the longest, so number candidates never tie with
    each other in the resolver.
    """
    longest: dict[int, int] = {}
    for sub_matcher in (
        _regex_matcher(_HEX_NUMBER_RE),
        _regex_matcher(_DECIMAL_RE),
        hex_byte_sequences,
    ):
        for start, end in sub_matcher(text):
            if end > longest.get(start, start):
                longest[start] = end
    for start in sorted(longest):
        yield start, longest[start]


def operators(text: str) -> Iterator[tuple[int, int]]:
    """Maximal runs of operator characters.

    A lone colon directly after a section label (``condition:``) terminates
    the section header and is left unstyled.
    """
    for match in _OPERATOR_RE.finditer(text):
        start, end = match.span()
        if end - start == 1 and text[start] == ":" and _follows_section_label(text, start):
            continue
        yield start, end


def _follows_section_label(text: str, pos: int) -> bool:
    for label in SECTION_LABELS:
        label_start = pos - len(label)
        if label_start < 0 or not text.startswith(label, label_start):
            continue
        if label_start == 0 or not _is_word_char(text[label_start - 1]):
            return True
    return False


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PatternDefinition:
    """One independent scan over the input, tagged with its category and priority."""

    name: str
    category: Category
    priority: int
    matcher: Matcher

    def candidates(self, text: str) -> Iterator[Candidate]:
        """Yield a :class:`Candidate` per match, dropping zero-length matches."""
        for start, end in self.matcher(text):
            if start < end:
                yield Candidate(start, end, self.category, self.priority)


PATTERN_CATALOGUE: tuple[PatternDefinition, ...] = (
    PatternDefinition("block_comment", Category.COMMENT, PRIORITY_COMMENT, block_comments),
    PatternDefinition("line_comment", Category.COMMENT, PRIORITY_COMMENT, line_comments),
    PatternDefinition("string", Category.STRING, PRIORITY_STRING, strings),
    # The rule declaration is one construct highlighted as two spans.
    PatternDefinition(
        "rule_keyword",
        Category.KEYWORD,
        PRIORITY_RULE,
        _regex_matcher(_RULE_DECLARATION_RE, 1),
    ),
    PatternDefinition(
        "rule_name",
        Category.RULE_NAME,
        PRIORITY_RULE,
        _regex_matcher(_RULE_DECLARATION_RE, 3),
    ),
    PatternDefinition(
        "variable", Category.VARIABLE, PRIORITY_VARIABLE, _regex_matcher(_VARIABLE_RE)
    ),
    PatternDefinition("meta", Category.META, PRIORITY_META, _regex_matcher(_META_RE)),
    PatternDefinition("number", Category.NUMBER, PRIORITY_NUMBER, numbers),
    PatternDefinition("atom", Category.ATOM, PRIORITY_ATOM, _regex_matcher(_ATOM_RE)),
    PatternDefinition("operator", Category.OPERATOR, PRIORITY_OPERATOR, operators),
    PatternDefinition("keyword", Category.KEYWORD, PRIORITY_KEYWORD, _regex_matcher(_KEYWORD_RE)),
)


def find_candidates(
    text: str,
    catalogue: Iterable[PatternDefinition] = PATTERN_CATALOGUE,
) -> list[Candidate]:
    """Run every pattern over *text* and pool the candidates, unsorted."""
    pooled: list[Candidate] = []
    for definition in catalogue:
        pooled.extend(definition.candidates(text))
    return pooled


def get_matches(
    text: str,
    catalogue: Iterable[PatternDefinition] = PATTERN_CATALOGUE,
) -> dict[str, list[str]]:
    """Get the raw matches of each pattern run in isolation.

    Useful for debugging why a region did or did not get a span.

    Returns:
        Dict mapping pattern names to lists of matched substrings. Patterns
        without matches are omitted.
    """
    matches: dict[str, list[str]] = {}
    for definition in catalogue:
        found = [text[c.start : c.end] for c in definition.candidates(text)]
        if found:
            matches[definition.name] = found
    return matches
