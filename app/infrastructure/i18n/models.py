"""Locale and message catalog models for the i18n system.

Defines the built-in content locales, the locale registry entries and the
message catalog structures used for localized API messages.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class Locale(str, Enum):
    """Built-in content locales.

    Codes are bare primary language subtags (e.g., "en", "ur").
    """

    EN = "en"
    UR = "ur"
    AR = "ar"
    FA = "fa"

    @classmethod
    def from_string(cls, locale_str: str) -> "Locale":
        """Convert string to Locale enum.

        Args:
            locale_str: Locale code, case and surrounding whitespace ignored.

        Returns:
            Matching Locale enum value.

        Raises:
            ValueError: If locale string is not a built-in locale.
        """
        try:
            return cls(locale_str.strip().lower())
        except ValueError as e:
            raise ValueError(f"Unsupported locale: {locale_str}") from e

    @property
    def display_name(self) -> str:
        return LOCALE_NAMES[self]

    @property
    def is_rtl(self) -> bool:
        """Whether the locale is written right-to-left."""
        return self in (Locale.UR, Locale.AR, Locale.FA)


LOCALE_NAMES = {
    Locale.EN: "English",
    Locale.UR: "Urdu",
    Locale.AR: "Arabic",
    Locale.FA: "Persian",
}


@dataclass
class LocaleDefinition:
    """Entry in the locale registry.

    Attributes:
        code: Locale code (e.g., "ur").
        name: Human readable name (e.g., "Urdu").
        is_default: Whether this is the default locale. Exactly one registry
            entry carries this flag once the registry is bootstrapped.
    """

    code: str
    name: str
    is_default: bool = False


@dataclass(frozen=True)
class TranslationKey:
    """Key of a localized message (e.g., "forms.required").

    Attributes:
        namespace: Top-level namespace (e.g., "forms", "content").
        message_key: Specific message identifier (e.g., "required").
    """

    namespace: str
    message_key: str

    def __str__(self) -> str:
        return f"{self.namespace}.{self.message_key}"

    @classmethod
    def from_string(cls, key_string: str) -> "TranslationKey":
        """Create TranslationKey from dot-separated string.

        Raises:
            ValueError: If key_string does not contain a dot.
        """
        parts = key_string.split(".", 1)
        if len(parts) != 2:
            raise ValueError(
                f"Translation key must be in format 'namespace.key': {key_string}"
            )
        return cls(namespace=parts[0], message_key=parts[1])


@dataclass
class TranslationCatalog:
    """Messages of a single locale, organized by namespace.

    Attributes:
        locale: Locale code this catalog is for.
        messages: Nested dict structure {namespace: {key: message_string}}.
    """

    locale: str
    messages: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    def get_message(self, key: TranslationKey) -> Optional[str]:
        return self.messages.get(key.namespace, {}).get(key.message_key)

    def has_message(self, key: TranslationKey) -> bool:
        return key.message_key in self.messages.get(key.namespace, {})

    def merge(self, data: Dict[str, Any]) -> None:
        """Merge a {namespace: {key: message}} mapping into the catalog.

        Later entries override earlier ones.
        """
        for namespace, messages in data.items():
            self.messages.setdefault(namespace, {}).update(messages)
