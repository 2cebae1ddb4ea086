"""Data models for language detection."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DetectionCandidate:
    """One engine's proposed language with a normalized confidence in [0, 1]."""

    engine: str
    language: str
    confidence: float

    def to_dict(self) -> dict:
        return {
            "engine": self.engine,
            "language": self.language,
            "confidence": self.confidence,
        }

    def __repr__(self) -> str:
        return (
            f"DetectionCandidate(engine='{self.engine}', language='{self.language}', "
            f"confidence={self.confidence:.2f})"
        )


@dataclass(frozen=True)
class DetectionResult:
    """
    Merged detection decision.

    Attributes:
        best: Language of the highest-confidence candidate
        candidates: All candidates, sorted by confidence descending (never empty)
    """

    best: str
    candidates: tuple[DetectionCandidate, ...]

    @property
    def possible(self) -> list[str]:
        """Candidate languages in ranking order."""
        return [candidate.language for candidate in self.candidates]


def clamp_confidence(value: float) -> float:
    """Clamp a raw confidence into [0, 1]."""
    return max(0.0, min(1.0, float(value)))
