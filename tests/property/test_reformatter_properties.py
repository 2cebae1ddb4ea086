"""
Property-based tests for the structural reformatter.

Covers idempotence on its own output, literal preservation and the
indentation floor.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from codetools.core.reformatter import INDENT_UNIT, reformat

code_chars = st.sampled_from(list("abx1=(),.+ \n{}[];"))
identifier = st.from_regex(r"[a-z][a-z0-9_]{0,6}", fullmatch=True)
# String contents deliberately full of structural characters
literal_body = st.text(alphabet=st.sampled_from(list("{}[];ab ")), max_size=12)


@st.composite
def brace_text(draw):
    """Generate brace/semicolon text, optionally with closed string literals."""
    parts = []
    for _ in range(draw(st.integers(min_value=0, max_value=12))):
        if draw(st.booleans()):
            parts.append(draw(st.text(alphabet=code_chars, min_size=1, max_size=10)))
        else:
            delimiter = draw(st.sampled_from(['"', "'", "`"]))
            parts.append(f"{delimiter}{draw(literal_body)}{delimiter}")
    return "".join(parts)


@given(text=brace_text())
@settings(max_examples=200)
def test_reformat_is_idempotent(text):
    once = reformat(text)
    assert reformat(once) == once


@given(name=identifier, body=literal_body, delimiter=st.sampled_from(['"', "'", "`"]))
@settings(max_examples=100)
def test_string_literal_stays_on_one_line(name, body, delimiter):
    literal = f"{delimiter}{body}{delimiter}"
    output = reformat(f"{name} = {literal};")
    assert output == f"{name} = {literal};"


@given(text=brace_text())
@settings(max_examples=100)
def test_literals_survive_verbatim(text):
    output = reformat(text)
    for delimiter in ('"', "'", "`"):
        assert output.count(delimiter) == text.count(delimiter)


@given(closers=st.text(alphabet=st.sampled_from(list("}]")), min_size=1, max_size=20))
@settings(max_examples=50)
def test_excess_closers_never_indent_negatively(closers):
    output = reformat(closers)
    lines = output.split("\n")
    assert len(lines) == len(closers)
    assert all(not line.startswith(" ") for line in lines)


@given(text=brace_text())
@settings(max_examples=100)
def test_indentation_is_whole_units(text):
    for line in reformat(text).split("\n"):
        indent = len(line) - len(line.lstrip(" "))
        assert indent % len(INDENT_UNIT) == 0
