"""
Core Layer - Literal scanning, reformatting, compaction, languages and configuration.
"""

from codetools.core.compactor import Compactor, compact
from codetools.core.config import (
    AuthConfig,
    CodeToolsConfig,
    DetectionConfig,
    FormatterConfig,
    LimitsConfig,
    LoggingConfig,
    ServerConfig,
    configure_logging,
    load_config,
)
from codetools.core.languages import (
    UNKNOWN_LANGUAGE,
    LanguageFamily,
    LanguageRegistry,
    get_default_registry,
    language_family,
    normalize_language,
)
from codetools.core.reformatter import IndentState, StructuralReformatter, reformat
from codetools.core.scanner import LiteralScanner, Region, ScanCursor, scan

__all__ = [
    # Config
    "CodeToolsConfig",
    "ServerConfig",
    "LimitsConfig",
    "DetectionConfig",
    "FormatterConfig",
    "AuthConfig",
    "LoggingConfig",
    "load_config",
    "configure_logging",
    # Languages
    "UNKNOWN_LANGUAGE",
    "LanguageFamily",
    "LanguageRegistry",
    "get_default_registry",
    "language_family",
    "normalize_language",
    # Scanner
    "LiteralScanner",
    "Region",
    "ScanCursor",
    "scan",
    # Reformatter
    "IndentState",
    "StructuralReformatter",
    "reformat",
    # Compactor
    "Compactor",
    "compact",
]
