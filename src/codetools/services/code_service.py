"""
Code tools pipelines shared by the HTTP server and the CLI.

Each pipeline detects the language of the input first and then applies the
language-specific operation.
"""

import logging
from dataclasses import dataclass

from codetools.core.compactor import Compactor
from codetools.core.languages import UNKNOWN_LANGUAGE
from codetools.core.reformatter import StructuralReformatter
from codetools.detection.aggregator import LanguageDetector
from codetools.detection.models import DetectionCandidate
from codetools.services.formatter import CodeFormatter

logger = logging.getLogger(__name__)

FORMAT_SUCCESS_MESSAGE = "Code formatted successfully."
FORMAT_UNSUPPORTED_MESSAGE = "Language unsupported for robust formatting, returning original text."


@dataclass
class DetectOutcome:
    language: str
    possible: list[str]
    engines: list[DetectionCandidate]


@dataclass
class CompactOutcome:
    language: str
    original_length: int
    compacted_length: int
    compacted_text: str


@dataclass
class FormatOutcome:
    language: str
    original_length: int
    formatted_length: int
    formatted_text: str
    success: bool = True
    message: str = FORMAT_SUCCESS_MESSAGE


class CodeToolsService:
    """
    Orchestrates detection, compaction, reformatting and formatting.

    Holds no per-request state; one instance serves concurrent requests.
    """

    def __init__(
        self,
        detector: LanguageDetector,
        compactor: Compactor,
        reformatter: StructuralReformatter,
        formatter: CodeFormatter,
    ):
        self._detector = detector
        self._compactor = compactor
        self._reformatter = reformatter
        self._formatter = formatter

    async def detect(self, text: str) -> DetectOutcome:
        result = await self._detector.detect(text)
        if result is None:
            return DetectOutcome(language=UNKNOWN_LANGUAGE, possible=[], engines=[])
        return DetectOutcome(
            language=result.best,
            possible=result.possible,
            engines=list(result.candidates),
        )

    async def compact(self, text: str, language: str | None = None) -> CompactOutcome:
        """
        Compact ``text``.

        Args:
            text: Source text
            language: Language override; detected when None
        """
        if language is None:
            language = await self._detector.get_best_language(text)
        compacted = self._compactor.compact(text, language)
        return CompactOutcome(
            language=language or UNKNOWN_LANGUAGE,
            original_length=len(text),
            compacted_length=len(compacted),
            compacted_text=compacted,
        )

    async def uncompact(self, text: str) -> FormatOutcome:
        """Re-indent compacted ``text``, then format it for its detected language."""
        language = await self._detector.get_best_language(text)
        reformatted = self._reformatter.reformat(text)
        formatted = await self._formatter.format_code(reformatted, language)
        return FormatOutcome(
            language=language or UNKNOWN_LANGUAGE,
            original_length=len(text),
            formatted_length=len(formatted),
            formatted_text=formatted,
        )

    async def format(self, text: str) -> FormatOutcome:
        """Format ``text`` for its detected language; ``success`` is whether it changed."""
        language = await self._detector.get_best_language(text)
        formatted = await self._formatter.format_code(text, language)
        was_formatted = formatted != text
        return FormatOutcome(
            language=language or UNKNOWN_LANGUAGE,
            original_length=len(text),
            formatted_length=len(formatted),
            formatted_text=formatted,
            success=was_formatted,
            message=FORMAT_SUCCESS_MESSAGE if was_formatted else FORMAT_UNSUPPORTED_MESSAGE,
        )

    async def aclose(self) -> None:
        await self._formatter.aclose()
