"""
Detection Layer - Multi-engine language identification.
"""

from codetools.detection.aggregator import LanguageDetector
from codetools.detection.engines import (
    ENGINE_FACTORIES,
    ClassifierEngine,
    HeuristicEngine,
    StatisticalEngine,
    create_engines,
)
from codetools.detection.heuristic import HeuristicClassifier, HeuristicResult
from codetools.detection.models import DetectionCandidate, DetectionResult
from codetools.detection.pygments_model import ModelResult, PygmentsModel, get_default_model

__all__ = [
    "LanguageDetector",
    "ClassifierEngine",
    "StatisticalEngine",
    "HeuristicEngine",
    "ENGINE_FACTORIES",
    "create_engines",
    "HeuristicClassifier",
    "HeuristicResult",
    "PygmentsModel",
    "ModelResult",
    "get_default_model",
    "DetectionCandidate",
    "DetectionResult",
]
