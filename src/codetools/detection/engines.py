"""
Classifier engines.

Each engine adapts one classifier to a common async interface and normalizes
its output into a DetectionCandidate with a confidence in [0, 1].
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Callable

from codetools.core.languages import UNKNOWN_LANGUAGE, normalize_language
from codetools.detection.heuristic import HeuristicClassifier
from codetools.detection.models import DetectionCandidate, clamp_confidence
from codetools.detection.pygments_model import PygmentsModel, get_default_model

logger = logging.getLogger(__name__)


class ClassifierEngine(ABC):
    """Abstract interface for a language classifier engine."""

    engine_id: str

    def is_available(self) -> bool:
        """Whether the engine can classify right now."""
        return True

    @abstractmethod
    async def classify(self, text: str) -> DetectionCandidate | None:
        """
        Classify ``text``.

        Returns:
            The engine's candidate, or None if it has no opinion
        """
        pass


class StatisticalEngine(ClassifierEngine):
    """
    Engine over a statistical model producing ranked (language, confidence) guesses.

    Only the top-ranked guess is used. Lexer scores are uncalibrated hints
    (Pygments' Python lexer answers 1.0 for any text containing ``import ``)
    and are scaled by ``weight`` before merging.
    With the default weight a heuristic relevance above 50 outranks any guess.
    """

    CONFIDENCE_WEIGHT = 0.5

    def __init__(
        self,
        model: PygmentsModel | None = None,
        engine_id: str = "pygments",
        weight: float = CONFIDENCE_WEIGHT,
    ):
        self._model = model or get_default_model()
        self.engine_id = engine_id
        self._weight = weight

    def is_available(self) -> bool:
        return self._model.is_available()

    async def classify(self, text: str) -> DetectionCandidate | None:
        # Lexer analysis is CPU-bound
        guesses = await asyncio.to_thread(self._model.run_model, text)
        if not guesses:
            return None

        top = guesses[0]
        language = normalize_language(top.language_id)
        if language == UNKNOWN_LANGUAGE:
            return None

        return DetectionCandidate(
            engine=self.engine_id,
            language=language,
            confidence=clamp_confidence(top.confidence * self._weight),
        )


class HeuristicEngine(ClassifierEngine):
    """Engine over the heuristic classifier (relevance on a 0-100 scale)."""

    RELEVANCE_SCALE = 100

    def __init__(self, classifier: HeuristicClassifier | None = None, engine_id: str = "heuristic"):
        self._classifier = classifier or HeuristicClassifier()
        self.engine_id = engine_id

    async def classify(self, text: str) -> DetectionCandidate | None:
        result = self._classifier.classify(text)
        if result.relevance <= 0:
            return None

        language = normalize_language(result.language)
        if language == UNKNOWN_LANGUAGE:
            return None

        return DetectionCandidate(
            engine=self.engine_id,
            language=language,
            confidence=clamp_confidence(result.relevance / self.RELEVANCE_SCALE),
        )


ENGINE_FACTORIES: dict[str, Callable[[], ClassifierEngine]] = {
    "pygments": StatisticalEngine,
    "heuristic": HeuristicEngine,
}


def create_engines(names: list[str]) -> list[ClassifierEngine]:
    """
    Create engines by name, keeping the given order.

    Raises:
        ValueError: If a name is not a known engine
    """
    engines: list[ClassifierEngine] = []
    for name in names:
        factory = ENGINE_FACTORIES.get(name.strip().lower())
        if factory is None:
            raise ValueError(
                f"Unknown detection engine: {name!r}. "
                f"Available engines: {', '.join(ENGINE_FACTORIES)}"
            )
        engines.append(factory())
    return engines
