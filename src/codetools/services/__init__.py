"""
Service Layer - Formatter, code tools pipelines and ServicesContainer.
"""

from codetools.services.code_service import (
    CodeToolsService,
    CompactOutcome,
    DetectOutcome,
    FormatOutcome,
)
from codetools.services.container import ServicesContainer, create_services
from codetools.services.formatter import (
    PARSER_MAP,
    CodeFormatter,
    FormatterBackend,
    HttpFormatterBackend,
    JsonFormatterBackend,
    create_formatter,
    get_parser,
)

__all__ = [
    # Container and factory
    "ServicesContainer",
    "create_services",
    # Pipelines
    "CodeToolsService",
    "DetectOutcome",
    "CompactOutcome",
    "FormatOutcome",
    # Formatter
    "PARSER_MAP",
    "get_parser",
    "CodeFormatter",
    "FormatterBackend",
    "JsonFormatterBackend",
    "HttpFormatterBackend",
    "create_formatter",
]
