"""
Configuration module for CodeTools.

Supports loading from YAML/JSON files with environment variable overrides.
Default values are loaded from defaults.yaml for maintainability.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

# Path to the default configuration file
_DEFAULTS_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"

# Cache for default values
_defaults_cache: dict[str, Any] | None = None


def _load_defaults() -> dict[str, Any]:
    """Load default configuration values from defaults.yaml."""
    global _defaults_cache

    if _defaults_cache is not None:
        return _defaults_cache

    if not _DEFAULTS_CONFIG_PATH.exists():
        logger.warning(f"Defaults config not found: {_DEFAULTS_CONFIG_PATH}")
        _defaults_cache = {}
        return _defaults_cache

    try:
        content = _DEFAULTS_CONFIG_PATH.read_text(encoding="utf-8")
        _defaults_cache = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse defaults config: {e}")
        _defaults_cache = {}

    return _defaults_cache


def _get_default(section: str, key: str, fallback: Any = None) -> Any:
    """Get a default value from the defaults config."""
    defaults = _load_defaults()
    section_defaults = defaults.get(section) or {}
    return section_defaults.get(key, fallback)


@dataclass
class ServerConfig:
    """Configuration for the HTTP server."""

    host: str = field(default_factory=lambda: _get_default("server", "host", "0.0.0.0"))
    port: int = field(default_factory=lambda: _get_default("server", "port", 3000))


@dataclass
class LimitsConfig:
    """Request size limits."""

    max_detect_chars: int = field(
        default_factory=lambda: _get_default("limits", "max_detect_chars", 20000)
    )
    max_body_bytes: int = field(
        default_factory=lambda: _get_default("limits", "max_body_bytes", 5 * 1024 * 1024)
    )
    min_detect_chars: int = field(
        default_factory=lambda: _get_default("limits", "min_detect_chars", 3)
    )


@dataclass
class DetectionConfig:
    """Configuration for the language detection engines."""

    engines: list[str] = field(
        default_factory=lambda: list(
            _get_default("detection", "engines", ["pygments", "heuristic"])
        )
    )


@dataclass
class FormatterConfig:
    """Configuration for the remote formatter backend."""

    api_url: str = field(default_factory=lambda: _get_default("formatter", "api_url", ""))
    api_key: str = field(default_factory=lambda: _get_default("formatter", "api_key", ""))
    endpoint: str = field(default_factory=lambda: _get_default("formatter", "endpoint", "/format"))
    timeout: float = field(default_factory=lambda: _get_default("formatter", "timeout", 10.0))


@dataclass
class AuthConfig:
    """Configuration for gateway request signatures."""

    internal_key: str = field(default_factory=lambda: _get_default("auth", "internal_key", ""))
    max_skew_ms: int = field(default_factory=lambda: _get_default("auth", "max_skew_ms", 60000))


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = field(default_factory=lambda: _get_default("logging", "level", "INFO"))
    format: str = field(
        default_factory=lambda: _get_default(
            "logging", "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    )


@dataclass
class CodeToolsConfig:
    """Main configuration class for CodeTools."""

    server: ServerConfig = field(default_factory=ServerConfig)
    limits: LimitsConfig = field(default_factory=LimitsConfig)
    detection: DetectionConfig = field(default_factory=DetectionConfig)
    formatter: FormatterConfig = field(default_factory=FormatterConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, path: Path | str) -> "CodeToolsConfig":
        """
        Load configuration from a YAML or JSON file.

        Args:
            path: Path to the configuration file (.yaml, .yml, or .json)

        Returns:
            CodeToolsConfig instance with loaded values

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ValueError: If the file format is unsupported
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        content = path.read_text(encoding="utf-8")

        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content) or {}
        elif path.suffix == ".json":
            data = json.loads(content) if content.strip() else {}
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "CodeToolsConfig":
        """Create CodeToolsConfig from a dictionary."""
        config = cls()

        if "server" in data:
            config.server = ServerConfig(**data["server"])
        if "limits" in data:
            config.limits = LimitsConfig(**data["limits"])
        if "detection" in data:
            config.detection = DetectionConfig(**data["detection"])
        if "formatter" in data:
            config.formatter = FormatterConfig(**data["formatter"])
        if "auth" in data:
            config.auth = AuthConfig(**data["auth"])
        if "logging" in data:
            config.logging = LoggingConfig(**data["logging"])

        return config

    def apply_env_overrides(self) -> "CodeToolsConfig":
        """
        Apply environment variable overrides to the configuration.

        Environment variables follow the pattern: CODETOOLS_<SECTION>_<KEY>
        Examples:
            - CODETOOLS_SERVER_PORT
            - CODETOOLS_DETECTION_ENGINES (comma-separated)
            - CODETOOLS_FORMATTER_API_URL
            - CODETOOLS_AUTH_INTERNAL_KEY
            - CODETOOLS_LOGGING_LEVEL

        Returns:
            Self with environment overrides applied
        """
        env_mappings = {
            # Server config
            "CODETOOLS_SERVER_HOST": ("server", "host", str),
            "CODETOOLS_SERVER_PORT": ("server", "port", int),
            # Limits config
            "CODETOOLS_LIMITS_MAX_DETECT_CHARS": ("limits", "max_detect_chars", int),
            "CODETOOLS_LIMITS_MAX_BODY_BYTES": ("limits", "max_body_bytes", int),
            "CODETOOLS_LIMITS_MIN_DETECT_CHARS": ("limits", "min_detect_chars", int),
            # Detection config
            "CODETOOLS_DETECTION_ENGINES": ("detection", "engines", _parse_list),
            # Formatter config
            "CODETOOLS_FORMATTER_API_URL": ("formatter", "api_url", str),
            "CODETOOLS_FORMATTER_API_KEY": ("formatter", "api_key", str),
            "CODETOOLS_FORMATTER_ENDPOINT": ("formatter", "endpoint", str),
            "CODETOOLS_FORMATTER_TIMEOUT": ("formatter", "timeout", float),
            # Auth config
            "CODETOOLS_AUTH_INTERNAL_KEY": ("auth", "internal_key", str),
            "CODETOOLS_AUTH_MAX_SKEW_MS": ("auth", "max_skew_ms", int),
            # Logging config
            "CODETOOLS_LOGGING_LEVEL": ("logging", "level", str),
        }

        for env_var, (section, key, converter) in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                section_obj = getattr(self, section)
                setattr(section_obj, key, converter(value))

        # The gateway shares its secret under this name
        legacy_key = os.environ.get("INTERNAL_API_KEY")
        if legacy_key and not self.auth.internal_key:
            self.auth.internal_key = legacy_key

        return self

    def to_dict(self) -> dict:
        """Convert configuration to a dictionary."""
        return asdict(self)

    def to_dict_safe(self) -> dict:
        """
        Convert configuration to a dictionary with secrets redacted.

        Empty secrets stay empty so that "not configured" remains visible.
        """
        data = self.to_dict()
        if data["formatter"]["api_key"]:
            data["formatter"]["api_key"] = "[REDACTED]"
        if data["auth"]["internal_key"]:
            data["auth"]["internal_key"] = "[REDACTED]"
        return data

    def to_yaml(self) -> str:
        """Serialize configuration to YAML string."""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)

    def to_json(self) -> str:
        """Serialize configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    def save(self, path: Path | str) -> None:
        """
        Save configuration to a file.

        Args:
            path: Path to save the configuration (.yaml, .yml, or .json)

        Raises:
            ValueError: If the file format is unsupported
        """
        path = Path(path)

        if path.suffix in (".yaml", ".yml"):
            content = self.to_yaml()
        elif path.suffix == ".json":
            content = self.to_json()
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def _parse_list(value: str) -> list[str]:
    """Parse a comma-separated string to a list of non-empty items."""
    return [item.strip() for item in value.split(",") if item.strip()]


def load_config(config_path: Optional[Path | str] = None, apply_env: bool = True) -> CodeToolsConfig:
    """
    Load configuration with optional environment variable overrides.

    Args:
        config_path: Optional path to config file. If None, uses defaults.
        apply_env: Whether to apply environment variable overrides.

    Returns:
        CodeToolsConfig instance
    """
    if config_path:
        config = CodeToolsConfig.from_file(config_path)
    else:
        config = CodeToolsConfig()

    if apply_env:
        config.apply_env_overrides()

    return config


def configure_logging(config: LoggingConfig) -> None:
    """Apply the logging level and format to the root logger."""
    level = logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        logger.warning(f"Unknown log level {config.level!r}, using INFO")
        level = logging.INFO
    logging.basicConfig(level=level, format=config.format)
