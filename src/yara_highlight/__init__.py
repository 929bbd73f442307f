"""yara-highlight: lexical annotator for YARA rule source."""

from .emitter import emit
from .errors import HighlightError, SpanOrderError, ThemeNotFoundError
from .highlighter import ViewUpdate, YaraHighlighter
from .patterns import KEYWORDS, PATTERN_CATALOGUE, PatternDefinition, find_candidates, get_matches
from .resolver import Resolution, resolve, resolve_detailed
from .scanner import YaraScanner, scan
from .tokens import Candidate, Category, Span

__all__ = [
    "scan",
    "YaraScanner",
    "YaraHighlighter",
    "ViewUpdate",
    "Category",
    "Candidate",
    "Span",
    "PatternDefinition",
    "PATTERN_CATALOGUE",
    "KEYWORDS",
    "find_candidates",
    "get_matches",
    "resolve",
    "resolve_detailed",
    "Resolution",
    "emit",
    "HighlightError",
    "SpanOrderError",
    "ThemeNotFoundError",
    "ThemeConfig",
    "Style",
    "get_renderer",
    "list_renderers",
    "register_renderer",
]

_PRESENTATION_NAMES = {
    "ThemeConfig",
    "Style",
    "get_renderer",
    "list_renderers",
    "register_renderer",
}


def __getattr__(name: str):
    # Presentation layer is loaded on first use; the scan path stays import-light
    if name in _PRESENTATION_NAMES:
        import sys

        from .config import Style, ThemeConfig
        from .renderers import get_renderer, list_renderers, register_renderer

        mod = sys.modules[__name__]
        for n, v in {
            "ThemeConfig": ThemeConfig,
            "Style": Style,
            "get_renderer": get_renderer,
            "list_renderers": list_renderers,
            "register_renderer": register_renderer,
        }.items():
            setattr(mod, n, v)
        return getattr(mod, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
