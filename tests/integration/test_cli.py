"""Integration tests for the yara-highlight command line."""

import io
import json

import pytest

from yara_highlight.cli import main

RULE = 'rule demo {\n    strings:\n        $s = "MZ"\n    condition:\n        $s\n}\n'


@pytest.fixture
def rule_file(tmp_path, isolated_config):
    path = tmp_path / "demo.yar"
    path.write_text(RULE, encoding="utf-8")
    return path


class TestCli:
    def test_json_output(self, rule_file, capsys):
        assert main([str(rule_file), "--format", "json"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert [(p["category"], p["text"]) for p in payload] == [
            ("keyword", "rule"),
            ("rule_name", "demo"),
            ("keyword", "strings"),
            ("variable", "$s"),
            ("operator", "="),
            ("string", '"MZ"'),
            ("keyword", "condition"),
            ("variable", "$s"),
        ]

    def test_html_with_css(self, rule_file, capsys):
        assert main([str(rule_file), "-f", "html", "--css", "--theme", "dark"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("<style>\n")
        assert ".cm-keyword { color: #569cd6; font-weight: bold; }" in out
        assert '<span class="cm-def">demo</span>' in out

    def test_ansi_is_default(self, rule_file, capsys):
        assert main([str(rule_file)]) == 0
        assert "\x1b[" in capsys.readouterr().out

    def test_reads_stdin(self, isolated_config, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("true"))
        assert main(["-", "--format", "json"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload == [{"start": 0, "end": 4, "category": "atom", "text": "true"}]

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "absent.yar")]) == 1
        assert "cannot read" in capsys.readouterr().err

    def test_unknown_theme(self, rule_file, capsys):
        assert main([str(rule_file), "--theme", "no-such-theme"]) == 1
        assert "Unknown theme" in capsys.readouterr().err

    def test_bad_format_is_usage_error(self, rule_file):
        with pytest.raises(SystemExit) as excinfo:
            main([str(rule_file), "--format", "pdf"])
        assert excinfo.value.code == 2
