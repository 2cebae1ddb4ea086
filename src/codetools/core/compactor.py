"""
Compactor - Strips insignificant whitespace and comments from source text.

Dispatches on the LanguageFamily of the (optional) language tag:

- WEB: delegate to a dedicated minifier, falling back to the C-style path
- C_STYLE / UNKNOWN: strip comments, collapse whitespace to single spaces
- INDENTATION: keep line structure, drop trailing whitespace and blank lines
- OTHER: collapse all whitespace to single spaces

Comment stripping runs through the literal-context scanner, so comment-like
text inside string literals survives and quote characters inside comments do
not open strings. A stripped comment counts as whitespace.
"""

import logging
from typing import Callable

from codetools.core.languages import (
    LanguageFamily,
    LanguageRegistry,
    get_default_registry,
)
from codetools.core.minifiers import Minifier, get_minifier
from codetools.core.scanner import LiteralScanner, Region

logger = logging.getLogger(__name__)


def collapse_c_style(text: str) -> str:
    """
    Strip // and /* */ comments outside literals and collapse whitespace.

    Line breaks and whitespace runs outside literals become one space; string
    and template contents are kept verbatim.

    Args:
        text: C-family source text

    Returns:
        Single-line text with comments removed, trimmed at both ends
    """
    out: list[str] = []
    pending_space = False

    for ch, region in LiteralScanner(text, track_comments=True):
        if region is Region.COMMENT or (region is Region.CODE and ch.isspace()):
            pending_space = True
            continue
        if pending_space and out:
            out.append(" ")
        pending_space = False
        out.append(ch)

    return "".join(out).strip()


def collapse_whitespace(text: str) -> str:
    """Collapse every whitespace run, line breaks included, to one space."""
    return " ".join(text.split())


def strip_blank_lines(text: str) -> str:
    """Drop trailing whitespace and blank lines while keeping indentation."""
    lines = (line.rstrip() for line in text.splitlines())
    return "\n".join(line for line in lines if line)


class Compactor:
    """
    Compacts source text with one handler per language family.

    ``compact`` never raises: a failing handler is logged and the original
    text is returned.
    """

    def __init__(
        self,
        registry: LanguageRegistry | None = None,
        minifier_lookup: Callable[[str | None], Minifier | None] = get_minifier,
    ):
        """
        Initialize the compactor.

        Args:
            registry: Language registry used for normalization and families
            minifier_lookup: Returns the minifier for a canonical tag, or None
        """
        self._registry = registry or get_default_registry()
        self._minifier_lookup = minifier_lookup
        self._handlers: dict[LanguageFamily, Callable[[str, str], str]] = {
            LanguageFamily.WEB: self._compact_web,
            LanguageFamily.C_STYLE: self._compact_c_style,
            LanguageFamily.UNKNOWN: self._compact_c_style,
            LanguageFamily.INDENTATION: self._compact_indentation,
            LanguageFamily.OTHER: self._compact_other,
        }

    def compact(self, text: str, language: str | None = None) -> str:
        """
        Compact ``text`` according to the family of ``language``.

        Args:
            text: Source text
            language: Raw or canonical language identifier; None when unknown

        Returns:
            Compacted text, or ``text`` unchanged if compaction failed
        """
        if not text:
            return text

        canonical = self._registry.normalize(language)
        family = self._registry.family_of(canonical)
        handler = self._handlers[family]

        try:
            compacted = handler(text, canonical)
        except Exception as e:
            logger.error(f"Compaction failed for language={canonical}: {e}", exc_info=True)
            return text

        reduction = 100 - (len(compacted) * 100 / len(text))
        logger.debug(
            f"Compacted {canonical} ({family.value}): {len(text)} -> {len(compacted)} chars "
            f"({reduction:.1f}% reduction)"
        )
        return compacted

    def _compact_web(self, text: str, language: str) -> str:
        minifier = self._minifier_lookup(language)
        if minifier is not None:
            try:
                minified = minifier(text)
                if minified and minified.strip():
                    return minified
                logger.warning(f"Minifier for {language} returned empty output, using fallback")
            except Exception as e:
                logger.warning(f"Minification error for {language}: {e}")
        return self._compact_c_style(text, language)

    def _compact_c_style(self, text: str, language: str) -> str:
        return collapse_c_style(text)

    def _compact_indentation(self, text: str, language: str) -> str:
        return strip_blank_lines(text)

    def _compact_other(self, text: str, language: str) -> str:
        return collapse_whitespace(text)


_default_compactor = Compactor()


def compact(text: str, language: str | None = None) -> str:
    """Compact ``text`` with the default compactor."""
    return _default_compactor.compact(text, language)
