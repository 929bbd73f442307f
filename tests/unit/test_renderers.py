"""Tests for output formats."""

import json
import re

import pytest

from yara_highlight.config import DEFAULT_STYLES
from yara_highlight.renderers import (
    AnsiRenderer,
    HtmlRenderer,
    JsonRenderer,
    Renderer,
    get_renderer,
    list_renderers,
)
from yara_highlight.scanner import scan

_SGR_RE = re.compile(r"\x1b\[[0-9;]*m")

SOURCE = "rule a { condition: $x < 2 } // end\n"


class TestRegistry:
    def test_builtin_formats(self):
        assert list_renderers() == ["ansi", "html", "json"]
        assert get_renderer("html") is HtmlRenderer

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Available formats: ansi, html, json"):
            get_renderer("pdf")

    def test_protocol(self):
        assert isinstance(HtmlRenderer(DEFAULT_STYLES), Renderer)


class TestHtmlRenderer:
    def test_wraps_and_escapes(self):
        text = "a < b"
        output = HtmlRenderer(DEFAULT_STYLES).render(text, scan(text))
        assert output == (
            '<pre class="cm-yara"><code>a <span class="cm-operator">&lt;</span> b</code></pre>'
        )

    def test_unstyled_text_preserved(self):
        output = HtmlRenderer(DEFAULT_STYLES).render("{ }", ())
        assert output == '<pre class="cm-yara"><code>{ }</code></pre>'

    def test_stylesheet(self):
        css = HtmlRenderer(DEFAULT_STYLES).stylesheet()
        assert ".cm-keyword { color: #0033b3; font-weight: bold; }" in css
        assert ".cm-comment { color: #8c8c8c; font-style: italic; }" in css
        assert len(css.splitlines()) == len(DEFAULT_STYLES)


class TestAnsiRenderer:
    def test_stripping_codes_restores_text(self):
        output = AnsiRenderer(DEFAULT_STYLES).render(SOURCE, scan(SOURCE))
        assert _SGR_RE.sub("", output) == SOURCE

    def test_bold_keyword(self):
        output = AnsiRenderer(DEFAULT_STYLES).render("true", scan("true"))
        assert output == "\x1b[38;2;176;90;0mtrue\x1b[0m"
        output = AnsiRenderer(DEFAULT_STYLES).render("and", scan("and"))
        assert output.startswith("\x1b[1;38;2;0;51;179m")

    def test_multiline_span_resets_each_line(self):
        text = "/* a\nb */"
        output = AnsiRenderer(DEFAULT_STYLES).render(text, scan(text))
        assert "\x1b[0m\n" in output


class TestJsonRenderer:
    def test_payload(self):
        payload = json.loads(JsonRenderer().render(SOURCE, scan(SOURCE)))
        assert payload[0] == {"start": 0, "end": 4, "category": "keyword", "text": "rule"}
        assert payload[-1]["category"] == "comment"
        assert payload[-1]["text"] == "// end"
