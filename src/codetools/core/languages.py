"""
Language registry for normalizing raw language identifiers.

Maps the many raw identifiers produced by classifiers and users (``js``,
``kt``, Pygments lexer names...) to one canonical lowercase tag and assigns
every canonical tag a LanguageFamily that drives compaction.
"""

import logging
from enum import Enum
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

# Default path to the languages configuration file
_DEFAULT_LANGUAGES_CONFIG = Path(__file__).parent / "languages.yaml"

UNKNOWN_LANGUAGE = "unknown"


class LanguageFamily(Enum):
    """Language families with a dedicated compaction strategy."""

    WEB = "web"
    C_STYLE = "c_style"
    INDENTATION = "indentation"
    OTHER = "other"
    UNKNOWN = "unknown"


class LanguageRegistry:
    """
    Registry of canonical language tags, their aliases and families.

    Example:
        >>> registry = LanguageRegistry()
        >>> registry.normalize("JS")
        'javascript'
        >>> registry.family_of("kt")
        <LanguageFamily.C_STYLE: 'c_style'>
    """

    def __init__(self, load_defaults: bool = True):
        """
        Initialize the language registry.

        Args:
            load_defaults: If True, load default mappings from languages.yaml.
        """
        self._alias_to_language: dict[str, str] = {}
        self._language_to_family: dict[str, LanguageFamily] = {}

        if load_defaults:
            self._load_from_yaml(_DEFAULT_LANGUAGES_CONFIG)

    @classmethod
    def from_yaml(cls, config_path: Path | str) -> "LanguageRegistry":
        """
        Create a LanguageRegistry from a YAML configuration file.

        Raises:
            ValueError: If the config file format is invalid
        """
        registry = cls(load_defaults=False)
        registry._load_from_yaml(Path(config_path))
        return registry

    def _load_from_yaml(self, config_path: Path) -> None:
        """
        Load language mappings from a YAML file.

        Expected format:
            language_name:
              family: c_style
              aliases: [alias1, alias2]
        """
        if not config_path.exists():
            logger.warning(f"Languages config not found: {config_path}, using empty registry")
            return

        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            logger.error(f"Failed to parse languages config: {e}")
            raise ValueError(f"Invalid YAML in languages config: {e}") from e

        if data is None:
            return
        if not isinstance(data, dict):
            raise ValueError(f"Invalid languages config format: expected dict, got {type(data)}")

        for language, entry in data.items():
            if not isinstance(entry, dict):
                logger.warning(f"Invalid entry for {language}: expected dict, got {type(entry)}")
                continue
            try:
                family = LanguageFamily(entry.get("family", LanguageFamily.OTHER.value))
            except ValueError:
                logger.warning(f"Unknown family for {language}: {entry.get('family')!r}")
                family = LanguageFamily.OTHER
            aliases = entry.get("aliases") or []
            self.register(str(language), family, [str(alias) for alias in aliases])

    def register(
        self,
        language: str,
        family: LanguageFamily,
        aliases: list[str] | None = None,
    ) -> "LanguageRegistry":
        """
        Register a canonical language tag with its family and aliases.

        Returns:
            Self for method chaining
        """
        canonical = language.strip().lower()
        self._language_to_family[canonical] = family
        self._alias_to_language[canonical] = canonical
        for alias in aliases or []:
            self._alias_to_language[alias.strip().lower()] = canonical
        return self

    def normalize(self, raw: str | None) -> str:
        """
        Normalize a raw identifier to its canonical tag.

        Unregistered identifiers are returned lowercased and stripped;
        empty identifiers become ``unknown``.
        """
        if not raw:
            return UNKNOWN_LANGUAGE
        key = raw.strip().lower()
        if not key:
            return UNKNOWN_LANGUAGE
        return self._alias_to_language.get(key, key)

    def family_of(self, raw: str | None) -> LanguageFamily:
        """Get the compaction family for a raw or canonical identifier."""
        language = self.normalize(raw)
        if language == UNKNOWN_LANGUAGE:
            return LanguageFamily.UNKNOWN
        return self._language_to_family.get(language, LanguageFamily.OTHER)

    def get_aliases(self, language: str) -> set[str]:
        """Get all raw identifiers that normalize to ``language``."""
        canonical = self.normalize(language)
        return {
            alias
            for alias, target in self._alias_to_language.items()
            if target == canonical and alias != canonical
        }

    def get_all_languages(self) -> set[str]:
        """Get all registered canonical tags."""
        return set(self._language_to_family.keys())

    def is_supported(self, raw: str | None) -> bool:
        return self.normalize(raw) in self._language_to_family


# Global default registry instance
_default_registry = LanguageRegistry()


def get_default_registry() -> LanguageRegistry:
    """Get the global default language registry."""
    return _default_registry


def normalize_language(raw: str | None) -> str:
    """Normalize ``raw`` with the default registry."""
    return _default_registry.normalize(raw)


def language_family(raw: str | None) -> LanguageFamily:
    """Get the family of ``raw`` from the default registry."""
    return _default_registry.family_of(raw)
