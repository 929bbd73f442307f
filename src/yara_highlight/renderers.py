"""Output formats for highlighted YARA source.

Three formats:

* **html** — wraps each span in ``<span class="...">`` using the theme's CSS
  classes; can also produce the matching stylesheet.
* **ansi** — 24-bit SGR escape sequences for terminals.
* **json** — machine-readable span list with the covered text.
"""

from __future__ import annotations

import html
import json
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from .config import Style
from .tokens import Category, Span

# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_REGISTRY: dict[str, type[Renderer]] = {}


def register_renderer(cls: type[Renderer]) -> type[Renderer]:
    """Register a renderer class under its format name. Can be used as a decorator."""
    _REGISTRY[cls.format_name()] = cls
    return cls


def get_renderer(name: str) -> type[Renderer]:
    """Look up a renderer by format name.

    Raises:
        ValueError: If the format is not registered.
    """
    if name not in _REGISTRY:
        available = ", ".join(sorted(_REGISTRY.keys()))
        raise ValueError(f"Unknown output format {name!r}. Available formats: {available}")
    return _REGISTRY[name]


def list_renderers() -> list[str]:
    """Return sorted list of registered format names."""
    return sorted(_REGISTRY.keys())


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class Renderer(Protocol):
    """Paints spans over the source text."""

    def render(self, text: str, spans: Sequence[Span]) -> str: ...

    @staticmethod
    def format_name() -> str: ...


def _segments(text: str, spans: Sequence[Span]):
    """Yield ``(chunk, category_or_None)`` pieces covering all of *text* in order."""
    pos = 0
    for span in spans:
        if span.start > pos:
            yield text[pos : span.start], None
        yield text[span.start : span.end], span.category
        pos = span.end
    if pos < len(text):
        yield text[pos:], None


# ---------------------------------------------------------------------------
# HTML
# ---------------------------------------------------------------------------


@register_renderer
class HtmlRenderer:
    """Escape the source and wrap spans in classed ``<span>`` elements."""

    def __init__(self, styles: dict[Category, Style]) -> None:
        self._styles = styles

    @staticmethod
    def format_name() -> str:
        return "html"

    def render(self, text: str, spans: Sequence[Span]) -> str:
        parts: list[str] = ['<pre class="cm-yara"><code>']
        for chunk, category in _segments(text, spans):
            escaped = html.escape(chunk, quote=False)
            if category is None:
                parts.append(escaped)
            else:
                css_class = html.escape(self._styles[category].css_class)
                parts.append(f'<span class="{css_class}">{escaped}</span>')
        parts.append("</code></pre>")
        return "".join(parts)

    def stylesheet(self) -> str:
        """CSS rules for every category, one rule per line."""
        rules = []
        for category in Category:
            style = self._styles[category]
            decls = []
            if style.color:
                decls.append(f"color: {style.color};")
            if style.bold:
                decls.append("font-weight: bold;")
            if style.italic:
                decls.append("font-style: italic;")
            rules.append(f".{style.css_class} {{ {' '.join(decls)} }}")
        return "\n".join(rules) + "\n"


# ---------------------------------------------------------------------------
# ANSI
# ---------------------------------------------------------------------------

_RESET = "\x1b[0m"


def _sgr(style: Style) -> str:
    codes: list[str] = []
    if style.bold:
        codes.append("1")
    if style.italic:
        codes.append("3")
    if style.color and len(style.color) == 7 and style.color.startswith("#"):
        try:
            r, g, b = (int(style.color[i : i + 2], 16) for i in (1, 3, 5))
        except ValueError:
            pass
        else:
            codes.append(f"38;2;{r};{g};{b}")
    if not codes:
        return ""
    return f"\x1b[{';'.join(codes)}m"


@register_renderer
class AnsiRenderer:
    """Color spans with 24-bit terminal escape sequences."""

    def __init__(self, styles: dict[Category, Style]) -> None:
        self._codes = {category: _sgr(style) for category, style in styles.items()}

    @staticmethod
    def format_name() -> str:
        return "ansi"

    def render(self, text: str, spans: Sequence[Span]) -> str:
        parts: list[str] = []
        for chunk, category in _segments(text, spans):
            code = self._codes.get(category, "") if category is not None else ""
            if code:
                # Reset before newlines so colors never bleed into the gutter
                parts.append(code + chunk.replace("\n", _RESET + "\n" + code) + _RESET)
            else:
                parts.append(chunk)
        return "".join(parts)


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------


@register_renderer
class JsonRenderer:
    """Serialize spans with their text; styles are not needed."""

    def __init__(self, styles: dict[Category, Style] | None = None) -> None:
        self._styles = styles

    @staticmethod
    def format_name() -> str:
        return "json"

    def render(self, text: str, spans: Sequence[Span]) -> str:
        payload = [{**span.to_dict(), "text": span.text_in(text)} for span in spans]
        return json.dumps(payload, indent=2, ensure_ascii=False)
