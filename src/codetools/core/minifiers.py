"""
Minifiers for web languages.

Thin adapters over dedicated minification libraries. Each minifier takes the
source text and returns the minified text, raising on input it cannot handle;
the compactor catches the failure and falls back to its generic path.
"""

import json
from typing import Callable

import rcssmin
import rjsmin

Minifier = Callable[[str], str]


def minify_json(text: str) -> str:
    """Re-serialize JSON without insignificant whitespace."""
    return json.dumps(json.loads(text), separators=(",", ":"), ensure_ascii=False)


def minify_javascript(text: str) -> str:
    """Minify JavaScript (and type-annotated TypeScript) with rjsmin."""
    return rjsmin.jsmin(text)


def minify_css(text: str) -> str:
    """Minify CSS with rcssmin."""
    return rcssmin.cssmin(text)


MINIFIERS: dict[str, Minifier] = {
    "javascript": minify_javascript,
    "typescript": minify_javascript,
    "json": minify_json,
    "css": minify_css,
}


def get_minifier(language: str | None) -> Minifier | None:
    """Get the minifier for a canonical language tag, if one exists."""
    if not language:
        return None
    return MINIFIERS.get(language)
