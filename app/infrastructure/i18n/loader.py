"""Message catalog loading.

Defines the contract for loading message catalogs and the YAML-based loader.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict

import yaml

import structlog
from infrastructure.i18n.models import TranslationCatalog

logger = structlog.get_logger()


class TranslationLoader(ABC):
    """Abstract base for message catalog loaders."""

    @abstractmethod
    def load(self, locale: str) -> TranslationCatalog:
        """Load the catalog of a specific locale.

        Raises:
            FileNotFoundError: If no catalog exists for the locale.
            ValueError: If a catalog file is malformed.
        """

    @abstractmethod
    def load_all(self) -> Dict[str, TranslationCatalog]:
        """Load the catalogs of every locale the loader knows about."""


class YAMLTranslationLoader(TranslationLoader):
    """Loader for YAML message files named `<domain>.<locale>.yml`.

    Attributes:
        translations_dir: Directory containing the YAML files.
        cache: Loaded catalogs by locale code.
    """

    def __init__(self, translations_dir: Path, use_cache: bool = True):
        self.translations_dir = Path(translations_dir)
        self.use_cache = use_cache
        self.cache: Dict[str, TranslationCatalog] = {}

        if not self.translations_dir.exists():
            raise ValueError(
                f"Translations directory not found: {self.translations_dir}"
            )

    def load(self, locale: str) -> TranslationCatalog:
        """Load and merge every `*.<locale>.yml` file into one catalog.

        Args:
            locale: Locale code to load.

        Returns:
            TranslationCatalog with loaded messages.

        Raises:
            FileNotFoundError: If no YAML files exist for the locale.
            ValueError: If YAML parsing fails.
        """
        if self.use_cache and locale in self.cache:
            return self.cache[locale]

        catalog = TranslationCatalog(locale=locale)
        yaml_files = sorted(self.translations_dir.glob(f"*.{locale}.yml"))

        if not yaml_files:
            raise FileNotFoundError(
                f"No translation files found for locale {locale} in {self.translations_dir}"
            )

        for yaml_file in yaml_files:
            try:
                with open(yaml_file, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                logger.error("yaml_parse_error", file=str(yaml_file), error=str(e))
                raise ValueError(f"Failed to parse {yaml_file}: {e}") from e

            if not isinstance(data, dict):
                logger.warning(
                    "invalid_yaml_format", file=str(yaml_file), expected="dict"
                )
                continue

            catalog.merge(
                {
                    namespace: messages
                    for namespace, messages in data.items()
                    if isinstance(messages, dict)
                }
            )

        logger.info(
            "loaded_translations",
            locale=locale,
            file_count=len(yaml_files),
            namespace_count=len(catalog.messages),
        )

        if self.use_cache:
            self.cache[locale] = catalog

        return catalog

    def load_all(self) -> Dict[str, TranslationCatalog]:
        """Load every locale found in the directory.

        Locales are detected from the last dotted part of each file stem
        (e.g., "messages.ur.yml" -> "ur").

        Raises:
            ValueError: If the directory holds no translation files.
        """
        locales_found = set()
        for yaml_file in self.translations_dir.glob("*.yml"):
            parts = yaml_file.stem.split(".")
            if len(parts) >= 2:
                locales_found.add(parts[-1])

        if not locales_found:
            raise ValueError(f"No translation files found in {self.translations_dir}")

        return {locale: self.load(locale) for locale in sorted(locales_found)}

    def clear_cache(self) -> None:
        self.cache.clear()
