"""
Structural Reformatter - Re-indents compacted brace/semicolon source text.

A best-effort layout pass, not a parser: newlines and indentation are
re-inserted around structural characters ({, }, [, ], ;) found outside
string, template and comment regions. Literal content is never split.
"""

import logging
from dataclasses import dataclass, field

from codetools.core.scanner import LINE_BREAKS, LiteralScanner, Region

logger = logging.getLogger(__name__)

INDENT_UNIT = "    "
OPENERS = frozenset("{[")
CLOSERS = frozenset("}]")
STATEMENT_END = ";"
# Punctuation that stays on the line of a preceding closing token: "};", "},", "})"
TRAILING_PUNCTUATION = frozenset(";,)")


@dataclass
class IndentState:
    """Current indentation depth; never negative."""

    level: int = 0

    def indent(self) -> None:
        self.level += 1

    def dedent(self) -> None:
        self.level = max(0, self.level - 1)


def _attach_opener(content: str, ch: str, spaced: bool) -> str:
    """Join an opening token to the pending line: ``f() {``, ``f({``, ``items[``."""
    if content.endswith("("):
        return content + ch
    if ch == "[" and not spaced:
        return content + ch
    return f"{content} {ch}"


@dataclass
class _LayoutWriter:
    """Per-call line buffer and emitted lines."""

    indent_unit: str
    indent: IndentState = field(default_factory=IndentState)
    lines: list[str] = field(default_factory=list)
    buffer: list[str] = field(default_factory=list)
    after_closer: bool = False

    def pending(self) -> str:
        return "".join(self.buffer).strip()

    def emit(self, content: str) -> None:
        self.lines.append(self.indent_unit * self.indent.level + content)

    def append(self, ch: str) -> None:
        if self.after_closer and not ch.isspace():
            if ch in TRAILING_PUNCTUATION and not self.pending():
                self.lines[-1] += ch
                return
            self.after_closer = False
        self.buffer.append(ch)

    def append_literal(self, ch: str) -> None:
        self.after_closer = False
        self.buffer.append(ch)

    def flush(self) -> None:
        content = self.pending()
        self.buffer.clear()
        if content:
            self.emit(content)
            self.after_closer = False

    def open_block(self, ch: str) -> None:
        raw = "".join(self.buffer)
        content = raw.strip()
        self.buffer.clear()
        if content:
            spaced = raw[-1].isspace()
            self.emit(_attach_opener(content, ch, spaced))
        else:
            self.emit(ch)
        self.indent.indent()
        self.after_closer = False

    def close_block(self, ch: str) -> None:
        self.flush()
        self.indent.dedent()
        self.emit(ch)
        self.after_closer = True

    def end_statement(self) -> None:
        if self.after_closer and not self.pending():
            self.lines[-1] += STATEMENT_END
            self.buffer.clear()
            return
        self.buffer.append(STATEMENT_END)
        self.flush()

    def result(self) -> str:
        self.flush()
        return "\n".join(self.lines).strip("\n")


class StructuralReformatter:
    """
    Re-inserts line breaks and indentation into compacted source text.

    Layout rules (outside literals):
    - ``{`` / ``[`` close the pending line (``"function f() {"``) or stand on
      their own line when nothing is pending, then indent one level.
    - ``}`` / ``]`` flush the pending line, dedent (floored at 0) and stand on
      their own line. A directly following ``;``, ``,`` or ``)`` stays on it.
    - ``;`` ends the pending line.
    - A newline ends the pending line, so existing line breaks survive and
      line comments never swallow the following code.

    Indentation-significant languages are not targeted; they produce
    low-quality but non-crashing output.
    """

    def __init__(self, indent_unit: str = INDENT_UNIT):
        self._indent_unit = indent_unit

    def reformat(self, text: str) -> str:
        """
        Reformat ``text`` in a single left-to-right pass.

        Args:
            text: Compacted or poorly laid out source text

        Returns:
            Re-indented text without leading or trailing blank lines
        """
        if not text:
            return ""

        writer = _LayoutWriter(indent_unit=self._indent_unit)
        for ch, region in LiteralScanner(text, track_comments=True):
            if region is not Region.CODE:
                writer.append_literal(ch)
            elif ch in OPENERS:
                writer.open_block(ch)
            elif ch in CLOSERS:
                writer.close_block(ch)
            elif ch == STATEMENT_END:
                writer.end_statement()
            elif ch in LINE_BREAKS:
                writer.flush()
            else:
                writer.append(ch)

        output = writer.result()
        logger.debug(
            f"Reformatted {len(text)} chars into {output.count(chr(10)) + 1} lines "
            f"(final indent level {writer.indent.level})"
        )
        return output


_default_reformatter = StructuralReformatter()


def reformat(text: str) -> str:
    """Reformat ``text`` with the default 4-space indentation."""
    return _default_reformatter.reformat(text)
