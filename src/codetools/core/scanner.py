"""
Literal-Context Scanner - Classifies characters of raw source text.

Walks the text one character at a time and reports whether each character
belongs to ordinary code, a string/template literal or (optionally) a comment.
Callers use the classification to leave literal content untouched while they
rewrite the surrounding code.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator

STRING_DELIMITERS = frozenset("\"'`")
TEMPLATE_DELIMITER = "`"
ESCAPE_CHAR = "\\"
LINE_BREAKS = frozenset("\r\n")


class Region(Enum):
    """Kind of text region a scanned character belongs to."""

    CODE = "code"
    STRING = "string"
    COMMENT = "comment"


@dataclass
class ScanCursor:
    """
    Mutable scanner state.

    Attributes:
        position: Index of the next character to scan
        in_string: True while a string or template literal is open
        string_delimiter: Delimiter that opened the current string
        in_template: Template-literal toggle (see LiteralScanner)
        escape_next: True when the previous character was an unescaped backslash
        in_line_comment: True inside a // comment (comment tracking only)
        in_block_comment: True inside a /* */ comment (comment tracking only)
        block_comment_start: Index of the '/' that opened the block comment
    """

    position: int = 0
    in_string: bool = False
    string_delimiter: str | None = None
    in_template: bool = False
    escape_next: bool = False
    in_line_comment: bool = False
    in_block_comment: bool = False
    block_comment_start: int = -1

    @property
    def in_comment(self) -> bool:
        return self.in_line_comment or self.in_block_comment

    @property
    def in_literal(self) -> bool:
        return self.in_string or self.in_comment


class LiteralScanner:
    """
    Character cursor that tracks string, template and comment context.

    Rules:
    - An unescaped ", ' or ` outside a string opens a string keyed by that
      delimiter; the same unescaped delimiter closes it.
    - Inside a string a backslash escapes the next character. Both belong to
      the literal and the escaped character never closes the string.
    - Opening a backtick string sets ``in_template``; every unescaped backtick
      seen while any string is open toggles it. Closing a string clears it.
    - With ``track_comments`` enabled, ``//`` (up to, not including, the
      next CR or LF) and ``/* ... */`` outside strings are reported as
      comments.

    Unterminated strings and block comments run to the end of input. The
    scanner never raises.

    Example:
        >>> [region.value for _, region in LiteralScanner('a"{"')]
        ['code', 'string', 'string', 'string']
    """

    def __init__(self, text: str, track_comments: bool = False):
        """
        Initialize the scanner.

        Args:
            text: Source text to scan
            track_comments: Whether // and /* */ comments are reported as
                opaque regions
        """
        self._text = text
        self._track_comments = track_comments
        self.cursor = ScanCursor()

    def __iter__(self) -> Iterator[tuple[str, Region]]:
        """Yield ``(char, region)`` for every character of the text."""
        text = self._text
        cursor = self.cursor
        length = len(text)
        while cursor.position < length:
            ch = text[cursor.position]
            next_ch = text[cursor.position + 1] if cursor.position + 1 < length else ""
            region = self._advance(ch, next_ch)
            yield ch, region
            cursor.position += 1

    def _advance(self, ch: str, next_ch: str) -> Region:
        cursor = self.cursor

        if cursor.in_string:
            return self._advance_string(ch)

        if cursor.in_line_comment:
            if ch in LINE_BREAKS:
                cursor.in_line_comment = False
                return Region.CODE
            return Region.COMMENT

        if cursor.in_block_comment:
            if (
                ch == "/"
                and self._text[cursor.position - 1] == "*"
                and cursor.position - cursor.block_comment_start >= 3
            ):
                cursor.in_block_comment = False
                cursor.block_comment_start = -1
            return Region.COMMENT

        if self._track_comments and ch == "/":
            if next_ch == "/":
                cursor.in_line_comment = True
                return Region.COMMENT
            if next_ch == "*":
                cursor.in_block_comment = True
                cursor.block_comment_start = cursor.position
                return Region.COMMENT

        if ch in STRING_DELIMITERS:
            cursor.in_string = True
            cursor.string_delimiter = ch
            cursor.in_template = ch == TEMPLATE_DELIMITER
            return Region.STRING

        return Region.CODE

    def _advance_string(self, ch: str) -> Region:
        cursor = self.cursor

        if cursor.escape_next:
            cursor.escape_next = False
            return Region.STRING

        if ch == ESCAPE_CHAR:
            cursor.escape_next = True
            return Region.STRING

        if ch == TEMPLATE_DELIMITER:
            cursor.in_template = not cursor.in_template

        if ch == cursor.string_delimiter:
            cursor.in_string = False
            cursor.string_delimiter = None
            cursor.in_template = False

        return Region.STRING


def scan(text: str, track_comments: bool = False) -> Iterator[tuple[str, Region]]:
    """Shortcut for iterating a fresh LiteralScanner over ``text``."""
    return iter(LiteralScanner(text, track_comments=track_comments))
