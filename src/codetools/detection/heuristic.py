"""
Heuristic lexical language classifier.

Scores each language by the weighted fingerprints (keywords, idioms, library
calls) found in a snippet. Scores are relevance points on a 0-100 scale and
may exceed 100 for very characteristic snippets.
"""

import logging
import re
from dataclasses import dataclass

from codetools.core.languages import UNKNOWN_LANGUAGE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HeuristicResult:
    """Top language of the classifier with its relevance points."""

    language: str
    relevance: int


@dataclass(frozen=True)
class Fingerprint:
    pattern: re.Pattern
    weight: int


def _fp(pattern: str, weight: int, flags: int = re.MULTILINE) -> Fingerprint:
    return Fingerprint(re.compile(pattern, flags), weight)


# Table order breaks relevance ties
FINGERPRINTS: dict[str, list[Fingerprint]] = {
    "python": [
        _fp(r"^\s*def\s+\w+\s*\(.*\)\s*(->\s*[\w\[\], .]+)?\s*:", 30),
        _fp(r"^\s*class\s+\w+(\(.*\))?\s*:", 25),
        _fp(r"^\s*from\s+[\w.]+\s+import\s+", 25),
        _fp(r"^\s*import\s+[A-Za-z_][\w.]*\s*$", 15),
        _fp(r"if\s+__name__\s*==\s*['\"]__main__['\"]\s*:", 40),
        _fp(r"^\s*(elif|except|finally|with)\b.*:\s*$", 20),
        _fp(r"\bself\.\w+", 10),
        _fp(r"\bprint\s*\(", 5),
        _fp(r"^\s*@\w+(\.\w+)*(\(.*\))?\s*$", 5),
        _fp(r"\b(None|True|False)\b", 5),
    ],
    "javascript": [
        _fp(r"\bfunction\s*\w*\s*\([^)]*\)\s*\{", 20),
        _fp(r"^\s*(const|let|var)\s+\w+\s*=", 15),
        _fp(r"\bconsole\.(log|warn|error)\s*\(", 25),
        _fp(r"=>\s*[{(]?", 10),
        _fp(r"\b(module\.exports|require\s*\()", 25),
        _fp(r"^\s*import\s+.+\s+from\s+['\"].+['\"]", 20),
        _fp(r"\bexport\s+(default|const|function|class)\b", 15),
        _fp(r"\b(document|window)\.\w+", 20),
        _fp(r"===|!==", 10),
    ],
    "typescript": [
        _fp(r"^\s*(export\s+)?interface\s+\w+\s*\{", 45),
        _fp(r"^\s*(export\s+)?type\s+\w+\s*=", 40),
        _fp(r"\b(const|let|var)\s+\w+\s*:\s*(string|number|boolean|any)\b", 50),
        _fp(r"\)\s*:\s*(string|number|boolean|void|Promise<)", 40),
        _fp(r"\b(public|private|readonly)\s+\w+\s*:", 25),
    ],
    "java": [
        _fp(r"\bpublic\s+(final\s+)?class\s+\w+", 30),
        _fp(r"\bpublic\s+static\s+void\s+main\s*\(\s*String", 40),
        _fp(r"\bSystem\.out\.print(ln)?\s*\(", 35),
        _fp(r"^\s*import\s+java\.", 40),
        _fp(r"^\s*package\s+[\w.]+;", 25),
        _fp(r"@Override\b", 20),
        _fp(r"\b(private|protected|public)\s+(static\s+)?(final\s+)?[A-Z]\w*(<.*>)?\s+\w+\s*[;=(]", 15),
    ],
    "kotlin": [
        _fp(r"^\s*fun\s+\w+\s*\(", 35),
        _fp(r"^\s*(val|var)\s+\w+(\s*:\s*\w+)?\s*=", 15),
        _fp(r"\bprintln\s*\(", 10),
        _fp(r"^\s*(data|sealed|open)\s+class\s+\w+", 35),
        _fp(r"\bcompanion\s+object\b", 40),
        _fp(r"^\s*import\s+kotlin(x)?\.", 40),
        _fp(r"\bwhen\s*\([^)]*\)\s*\{", 20),
    ],
    "go": [
        _fp(r"^\s*package\s+\w+\s*$", 25),
        _fp(r"^\s*func\s+(\(\w+\s+\*?\w+\)\s*)?\w+\s*\(", 30),
        _fp(r"\bfmt\.(Print|Printf|Println|Sprintf|Errorf)\s*\(", 35),
        _fp(r"^\s*import\s*\(", 20),
        _fp(r":=", 15),
        _fp(r"\bif\s+err\s*!=\s*nil\b", 40),
    ],
    "rust": [
        _fp(r"^\s*(pub\s+)?fn\s+\w+\s*(<.*>)?\s*\(", 30),
        _fp(r"\blet\s+mut\s+\w+", 35),
        _fp(r"\bprintln!\s*\(", 40),
        _fp(r"^\s*use\s+(std|crate)::", 35),
        _fp(r"\bimpl(<.*>)?\s+\w+", 25),
        _fp(r"&(mut\s+)?self\b", 20),
    ],
    "c": [
        _fp(r"^\s*#\s*include\s*<(stdio|stdlib|string|unistd)\.h>", 40),
        _fp(r"\bprintf\s*\(", 15),
        _fp(r"\bint\s+main\s*\(", 20),
        _fp(r"\b(malloc|free|sizeof)\s*\(", 20),
        _fp(r"\bstruct\s+\w+\s*\{", 10),
    ],
    "cpp": [
        _fp(r"^\s*#\s*include\s*<(iostream|vector|string|map|memory)>", 45),
        _fp(r"\busing\s+namespace\s+std\s*;", 45),
        _fp(r"\bstd::\w+", 30),
        _fp(r"\b(cout|cin)\s*(<<|>>)", 30),
        _fp(r"\btemplate\s*<", 25),
        _fp(r"\bint\s+main\s*\(", 10),
    ],
    "csharp": [
        _fp(r"^\s*using\s+System(\.[\w.]+)?\s*;", 45),
        _fp(r"\bConsole\.Write(Line)?\s*\(", 40),
        _fp(r"^\s*namespace\s+[\w.]+", 20),
        _fp(r"\bpublic\s+(static\s+)?(async\s+)?(void|Task|string|int)\s+\w+\s*\(", 15),
        _fp(r"\{\s*get;\s*(set;)?\s*\}", 40),
    ],
    "php": [
        _fp(r"<\?php", 60),
        _fp(r"\$\w+\s*=", 20),
        _fp(r"\becho\s+", 15),
        _fp(r"->\w+\s*\(", 10),
        _fp(r"\bfunction\s+\w+\s*\(\s*\$", 30),
    ],
    "ruby": [
        _fp(r"^\s*def\s+\w+[?!]?(\(.*\))?\s*$", 25),
        _fp(r"^\s*end\s*$", 20),
        _fp(r"\bputs\s+", 25),
        _fp(r"^\s*require\s+['\"]", 20),
        _fp(r"\bdo\s*\|\w+(,\s*\w+)*\|", 35),
        _fp(r"^\s*(module|class)\s+[A-Z]\w*(\s*<\s*[A-Z]\w*)?\s*$", 15),
    ],
    "bash": [
        _fp(r"^#!\s*/(usr/)?bin/(env\s+)?(ba|z)?sh\b", 60),
        _fp(r"^\s*(if|while)\s+\[\[?\s", 30),
        _fp(r"^\s*(fi|done|esac)\s*$", 30),
        _fp(r"\becho\s+[\"$]", 10),
        _fp(r"\$\{?\w+\}?", 5),
        _fp(r"^\s*export\s+[A-Z_]+=", 25),
    ],
    "css": [
        _fp(r"^\s*[.#]?[\w-]+(\s*[,>+~]\s*[.#]?[\w-]+)*\s*\{[^}]*:[^}]*;", 30),
        _fp(r"\b(color|margin|padding|display|font-size|background)\s*:", 20),
        _fp(r"@media\s", 35),
        _fp(r"\b\d+(px|em|rem|vh|vw)\b", 10),
    ],
    "html": [
        _fp(r"<!DOCTYPE\s+html>", 60, re.IGNORECASE),
        _fp(r"<(html|head|body|div|span|p|a)(\s[^>]*)?>", 30, re.IGNORECASE),
        _fp(r"</\w+>", 10),
    ],
    "json": [
        _fp(r"\A\s*[\[{]\s*\"[^\"]+\"\s*:", 40),
        _fp(r"\"[^\"]+\"\s*:\s*(\"|\d|true|false|null|\{|\[)", 15),
    ],
    "sql": [
        _fp(r"\bSELECT\b.+\bFROM\b", 40, re.IGNORECASE | re.DOTALL),
        _fp(r"\b(INSERT\s+INTO|UPDATE\s+\w+\s+SET|DELETE\s+FROM)\b", 40, re.IGNORECASE),
        _fp(r"\bCREATE\s+TABLE\b", 45, re.IGNORECASE),
        _fp(r"\b(WHERE|JOIN|GROUP\s+BY|ORDER\s+BY)\b", 10, re.IGNORECASE),
    ],
}


class HeuristicClassifier:
    """
    Fingerprint-based classifier returning the top language and its relevance.

    Each fingerprint counts once per snippet. The language with the highest
    relevance wins; ties go to the language listed first.
    """

    def __init__(self, fingerprints: dict[str, list[Fingerprint]] | None = None):
        self._fingerprints = fingerprints if fingerprints is not None else FINGERPRINTS

    def score(self, text: str) -> dict[str, int]:
        """Get the relevance of every language for ``text``."""
        return {
            language: sum(fp.weight for fp in prints if fp.pattern.search(text))
            for language, prints in self._fingerprints.items()
        }

    def classify(self, text: str) -> HeuristicResult:
        """
        Classify ``text``.

        Returns:
            Top language and relevance; ``unknown`` with relevance 0 when no
            fingerprint matched
        """
        best_language = UNKNOWN_LANGUAGE
        best_relevance = 0
        for language, relevance in self.score(text).items():
            if relevance > best_relevance:
                best_language, best_relevance = language, relevance

        logger.debug(f"Heuristic classification: {best_language} (relevance={best_relevance})")
        return HeuristicResult(language=best_language, relevance=best_relevance)
