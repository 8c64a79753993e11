"""Localized message lookup with variable interpolation."""

import re
from typing import Any, Dict, Optional, Union

from infrastructure.logging import get_module_logger
from infrastructure.i18n.loader import TranslationLoader
from infrastructure.i18n.models import TranslationCatalog, TranslationKey

logger = get_module_logger()

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}|\{(\w+)\}")


class Translator:
    """Looks up localized messages and interpolates variables.

    Attributes:
        loader: TranslationLoader for loading catalogs.
        catalogs: Loaded catalogs by locale code.
        fallback_locale: Locale used when a key is missing.
    """

    def __init__(self, loader: TranslationLoader, fallback_locale: str = "en"):
        self.loader = loader
        self.fallback_locale = fallback_locale
        self.catalogs: Dict[str, TranslationCatalog] = {}

    def load_all(self) -> None:
        self.catalogs = self.loader.load_all()
        logger.info("loaded_all_translations", locale_count=len(self.catalogs))

    def translate_message(
        self,
        key: Union[TranslationKey, str],
        locale: str,
        variables: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Retrieve and interpolate a localized message.

        Supports both {{variable}} and {variable} placeholders. Falls back to
        fallback_locale when the key is missing in the requested locale.

        Args:
            key: TranslationKey or dotted key string (e.g., "forms.required").
            locale: Locale code to translate to.
            variables: Optional dict of variables for interpolation.

        Returns:
            Translated and interpolated message string.

        Raises:
            KeyError: If key not found in requested locale or fallback locale.
            ValueError: If a placeholder has no matching variable.
        """
        if isinstance(key, str):
            key = TranslationKey.from_string(key)

        catalog = self.catalogs.get(locale)
        message = catalog.get_message(key) if catalog else None

        if not message and locale != self.fallback_locale:
            fallback_catalog = self.catalogs.get(self.fallback_locale)
            message = fallback_catalog.get_message(key) if fallback_catalog else None
            if message:
                logger.debug(
                    "used_fallback_translation",
                    key=str(key),
                    requested_locale=locale,
                    fallback_locale=self.fallback_locale,
                )

        if not message:
            logger.error(
                "translation_not_found",
                key=str(key),
                locale=locale,
                fallback_locale=self.fallback_locale,
            )
            raise KeyError(
                f"Translation not found for key {key} in {locale} or fallback {self.fallback_locale}"
            )

        return self._interpolate(message, variables or {})

    def has_message(self, key: TranslationKey, locale: str) -> bool:
        catalog = self.catalogs.get(locale)
        return catalog.has_message(key) if catalog else False

    def get_available_locales(self) -> list:
        return list(self.catalogs.keys())

    def _interpolate(self, message: str, variables: Dict[str, Any]) -> str:
        def replace(match: re.Match) -> str:
            name = match.group(1) or match.group(2)
            if name not in variables:
                logger.error(
                    "missing_interpolation_variable",
                    variable=name,
                    available_variables=list(variables.keys()),
                )
                raise ValueError(f"Missing interpolation variable: {name}")
            return str(variables[name])

        return _PLACEHOLDER.sub(replace, message)
