"""
Statistical language model backed by Pygments lexer analysis.

Every Pygments lexer ships an ``analyse_text`` scorer returning a value in
[0, 1]. The model runs all of them over a snippet and ranks the lexers by
score, which yields a ranked list of (language id, confidence) guesses.
"""

import logging
from dataclasses import dataclass
from threading import Lock

from pygments.lexers import find_lexer_class, get_all_lexers

logger = logging.getLogger(__name__)

# Lexers that accept any text and would always produce a guess
_IGNORED_LANGUAGE_IDS = frozenset({"text", "output"})


@dataclass(frozen=True)
class ModelResult:
    """One ranked guess of the model."""

    language_id: str
    confidence: float


class PygmentsModel:
    """
    Ranks Pygments lexers by their ``analyse_text`` score.

    Building the lexer table imports every lexer module, so it is done once,
    lazily, behind a status flag. After initialization the model is read-only
    and safe to share between concurrent requests. If initialization fails
    the model reports itself unavailable instead of raising.
    """

    def __init__(self, max_results: int = 5, min_confidence: float = 0.05):
        """
        Initialize the model (the lexer table is built on first use).

        Args:
            max_results: Maximum number of ranked guesses returned
            min_confidence: Scores below this value are discarded
        """
        self._max_results = max_results
        self._min_confidence = min_confidence
        self._lexers: list[tuple[str, type]] = []
        self._init_lock = Lock()
        self._initialized = False
        self._init_error: Exception | None = None

    def initialize(self) -> None:
        """Build the lexer table once. Thread-safe with double-checked locking."""
        if self._initialized:
            return

        with self._init_lock:
            if self._initialized:
                return

            try:
                lexers: list[tuple[str, type]] = []
                for name, aliases, _filenames, _mimetypes in get_all_lexers():
                    language_id = aliases[0] if aliases else name.lower()
                    if language_id in _IGNORED_LANGUAGE_IDS:
                        continue
                    lexer_class = find_lexer_class(name)
                    if lexer_class is not None:
                        lexers.append((language_id, lexer_class))
                self._lexers = lexers
                logger.info(f"Pygments language model initialized with {len(lexers)} lexers")
            except Exception as e:
                logger.error(f"Failed to initialize Pygments language model: {e}")
                self._init_error = e
                self._lexers = []
            # Prevent repeated initialization attempts
            self._initialized = True

    def is_available(self) -> bool:
        """Check whether the model initialized successfully."""
        self.initialize()
        return self._init_error is None and bool(self._lexers)

    def run_model(self, text: str) -> list[ModelResult]:
        """
        Rank languages for ``text``.

        Args:
            text: Source snippet

        Returns:
            Guesses sorted by confidence descending; empty if nothing scored
        """
        self.initialize()

        results: list[ModelResult] = []
        for language_id, lexer_class in self._lexers:
            score = lexer_class.analyse_text(text)
            if score and score >= self._min_confidence:
                results.append(ModelResult(language_id=language_id, confidence=min(1.0, float(score))))

        results.sort(key=lambda r: r.confidence, reverse=True)
        return results[: self._max_results]


# Process-wide model instance, initialized on first use
_default_model = PygmentsModel()


def get_default_model() -> PygmentsModel:
    """Get the shared Pygments language model."""
    return _default_model
