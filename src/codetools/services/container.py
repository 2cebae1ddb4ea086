"""
Centralized services container module for CodeTools.

Provides a shared container for the services used by both the CLI and the
HTTP entry points.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from codetools.core.compactor import Compactor
from codetools.core.config import CodeToolsConfig, load_config
from codetools.core.reformatter import StructuralReformatter
from codetools.detection import LanguageDetector, create_engines
from codetools.services.code_service import CodeToolsService
from codetools.services.formatter import CodeFormatter, create_formatter


@dataclass
class ServicesContainer:
    """
    Container holding all shared service instances.

    Attributes:
        config: Application configuration
        detector: Multi-engine language detector
        compactor: Family-dispatching compactor
        reformatter: Structural reformatter
        formatter: Formatter service with its backends
        code_service: Pipelines combining the above
    """

    config: CodeToolsConfig
    detector: LanguageDetector
    compactor: Compactor
    reformatter: StructuralReformatter
    formatter: CodeFormatter
    code_service: CodeToolsService


def create_services(
    config_path: Optional[Path | str] = None,
    config: Optional[CodeToolsConfig] = None,
) -> ServicesContainer:
    """
    Create and initialize all services.

    Args:
        config_path: Optional path to configuration file. Ignored when
                    ``config`` is given.
        config: Ready configuration to use instead of loading one.

    Returns:
        ServicesContainer with all initialized services.

    Raises:
        ValueError: If the configuration names an unknown detection engine.
    """
    if config is None:
        config = load_config(config_path)

    detector = LanguageDetector(
        engines=create_engines(config.detection.engines),
        min_chars=config.limits.min_detect_chars,
    )
    compactor = Compactor()
    reformatter = StructuralReformatter()
    formatter = create_formatter(
        api_url=config.formatter.api_url,
        api_key=config.formatter.api_key,
        endpoint=config.formatter.endpoint,
        timeout=config.formatter.timeout,
    )

    return ServicesContainer(
        config=config,
        detector=detector,
        compactor=compactor,
        reformatter=reformatter,
        formatter=formatter,
        code_service=CodeToolsService(detector, compactor, reformatter, formatter),
    )
