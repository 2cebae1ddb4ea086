"""
Detection aggregator.

Runs every available classifier engine over a snippet and merges their
candidates into one ranked decision.
"""

import asyncio
import logging
from typing import Sequence

from codetools.detection.engines import ClassifierEngine
from codetools.detection.models import DetectionCandidate, DetectionResult

logger = logging.getLogger(__name__)


class LanguageDetector:
    """
    Merges candidates from several engines into a DetectionResult.

    Engines run in the given order. An unavailable engine is skipped and a
    failing engine contributes nothing; neither is retried. Candidates are
    ranked by confidence with a stable sort, so engine order breaks ties.
    """

    def __init__(self, engines: Sequence[ClassifierEngine], min_chars: int = 3):
        self._engines = list(engines)
        self._min_chars = min_chars

    @property
    def engines(self) -> list[ClassifierEngine]:
        return list(self._engines)

    async def warm_up(self) -> None:
        """Run every engine's availability check (lazy model builds) in a worker thread."""
        for engine in self._engines:
            try:
                available = await asyncio.to_thread(engine.is_available)
            except Exception as e:
                logger.warning(f"Detection engine {engine.engine_id} failed to initialize: {e}")
                continue
            logger.debug(f"Detection engine {engine.engine_id} available={available}")

    async def detect(self, text: str) -> DetectionResult | None:
        """
        Detect the language of ``text``.

        Returns:
            The merged result, or None for too-short input or when no engine
            produced a candidate
        """
        if not text or len(text.strip()) < self._min_chars:
            return None

        candidates: list[DetectionCandidate] = []
        for engine in self._engines:
            try:
                if not engine.is_available():
                    logger.debug(f"Detection engine {engine.engine_id} unavailable, skipping")
                    continue
                candidate = await engine.classify(text)
            except Exception as e:
                logger.warning(f"Detection engine {engine.engine_id} failed: {e}")
                continue
            if candidate is not None:
                candidates.append(candidate)

        if not candidates:
            return None

        ranked = sorted(candidates, key=lambda c: c.confidence, reverse=True)
        return DetectionResult(best=ranked[0].language, candidates=tuple(ranked))

    async def get_best_language(self, text: str) -> str | None:
        """Get only the best language of ``text``, or None."""
        result = await self.detect(text)
        return result.best if result else None
