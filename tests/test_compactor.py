"""
Tests for the compactor and the web minifiers.
"""

import logging

import pytest

from codetools.core.compactor import (
    Compactor,
    collapse_c_style,
    collapse_whitespace,
    compact,
    strip_blank_lines,
)
from codetools.core.minifiers import get_minifier, minify_json


class TestCStyle:
    def test_strips_comments_and_newlines(self):
        text = "int a = 1; // first\nint b = 2; /* second */\n"
        assert compact(text, "java") == "int a = 1; int b = 2;"

    def test_block_comment_becomes_space(self):
        assert collapse_c_style("a/*x*/b") == "a b"

    def test_comment_markers_inside_strings_survive(self):
        text = 'String url = "http://example.com"; // link'
        assert compact(text, "kotlin") == 'String url = "http://example.com";'

    def test_line_comment_ends_at_carriage_return(self):
        text = "int a = 1; // one\rint b = 2;\rint c = 3;"
        assert compact(text, "c") == "int a = 1; int b = 2; int c = 3;"
        assert compact("a; // x\r\nb;", "java") == "a; b;"

    def test_whitespace_inside_strings_survives(self):
        assert compact('s = "a   b";\n', "c") == 's = "a   b";'

    def test_unknown_language_uses_c_style(self):
        assert compact("a  = 1; // x\n b = 2;") == "a = 1; b = 2;"
        assert compact("a\n\nb", "unknown") == "a b"

    def test_aliases_are_normalized(self):
        assert compact("x = 1;  // y", "kt") == "x = 1;"

    def test_idempotent(self):
        once = compact("fun main() {\n  // hi\n  println(1)\n}\n", "kotlin")
        assert compact(once, "kotlin") == once


class TestWeb:
    def test_json_minified(self):
        assert compact('{\n  "a": 1,\n  "b": [1, 2]\n}', "json") == '{"a":1,"b":[1,2]}'

    def test_json_keeps_unicode(self):
        assert minify_json('{"name": "café"}') == '{"name":"café"}'

    def test_invalid_json_falls_back_to_c_style(self):
        assert compact("{ a: 1, // c\n b: 2 }", "json") == "{ a: 1, b: 2 }"

    def test_javascript_minified(self):
        text = "function f() {\n  // comment\n  return 1;\n}\n"
        result = compact(text, "javascript")
        assert "\n" not in result
        assert "comment" not in result
        assert "return 1" in result

    def test_css_minified(self):
        result = compact("body {\n  color: red;\n}\n", "css")
        assert "\n" not in result
        assert "color:red" in result

    def test_minifier_failure_falls_back(self, caplog):
        def broken(text):
            raise RuntimeError("boom")

        compactor = Compactor(minifier_lookup=lambda language: broken)
        with caplog.at_level(logging.WARNING):
            assert compactor.compact("a = 1; // x", "javascript") == "a = 1;"
        assert "Minification error" in caplog.text

    def test_empty_minifier_output_falls_back(self):
        compactor = Compactor(minifier_lookup=lambda language: lambda text: "  ")
        assert compactor.compact("a  b", "css") == "a b"

    def test_minifier_lookup(self):
        assert get_minifier("typescript") is get_minifier("javascript")
        assert get_minifier("python") is None
        assert get_minifier(None) is None


class TestOtherFamilies:
    def test_indentation_languages_keep_lines(self):
        text = "def f():\n\n    return 1   \n\n"
        assert compact(text, "python") == "def f():\n    return 1"

    def test_other_languages_collapse_whitespace(self):
        assert compact("puts 1\n\n   puts 2\n", "ruby") == "puts 1 puts 2"

    def test_unregistered_language_collapses_whitespace(self):
        assert compact("a\n  b", "brainfuck") == "a b"

    def test_helpers(self):
        assert collapse_whitespace(" a \n\t b ") == "a b"
        assert strip_blank_lines("a  \n\n  b\n") == "a\n  b"


class TestEndToEnd:
    def test_compact_then_reformat_javascript(self):
        from codetools.core.reformatter import reformat

        compacted = compact("function f(){return 1;}", "javascript")
        assert compacted == "function f(){return 1;}"
        assert reformat(compacted) == "function f() {\n    return 1;\n}"

    def test_c_style_fallback_keeps_single_line(self):
        compactor = Compactor(minifier_lookup=lambda language: None)
        assert compactor.compact("function f(){return 1;}", "javascript") == "function f(){return 1;}"


class TestFailureHandling:
    def test_empty_text_returned_unchanged(self):
        assert compact("", "java") == ""

    def test_handler_failure_returns_original(self, caplog, monkeypatch):
        compactor = Compactor()

        def explode(text, language):
            raise ValueError("bad input")

        monkeypatch.setitem(compactor._handlers, next(iter(compactor._handlers)), explode)
        with caplog.at_level(logging.ERROR):
            assert compactor.compact("x = 1;", "javascript") == "x = 1;"
        assert "Compaction failed" in caplog.text

    @pytest.mark.parametrize("language", ["java", "python", "ruby", "json", None])
    def test_never_raises_on_odd_input(self, language):
        assert isinstance(compact('"unterminated /* {', language), str)
