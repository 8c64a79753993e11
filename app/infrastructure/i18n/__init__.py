"""i18n system - locale negotiation, locale registry and localized messages.

Main components:
- models: Locale, LocaleDefinition, TranslationKey, TranslationCatalog
- negotiator: LocaleNegotiator for picking the content locale of a request
- registry: LocaleRegistry and the idempotent bootstrap_locales()
- loader: TranslationLoader and YAMLTranslationLoader
- translator: Translator service with message interpolation
"""

from infrastructure.i18n.loader import TranslationLoader, YAMLTranslationLoader
from infrastructure.i18n.models import (
    Locale,
    LocaleDefinition,
    TranslationCatalog,
    TranslationKey,
)
from infrastructure.i18n.negotiator import LocaleNegotiator
from infrastructure.i18n.registry import (
    BootstrapSummary,
    LocaleRegistry,
    bootstrap_locales,
    default_definitions,
)
from infrastructure.i18n.translator import Translator

__all__ = [
    "Locale",
    "LocaleDefinition",
    "TranslationKey",
    "TranslationCatalog",
    "TranslationLoader",
    "YAMLTranslationLoader",
    "Translator",
    "LocaleNegotiator",
    "LocaleRegistry",
    "BootstrapSummary",
    "bootstrap_locales",
    "default_definitions",
]
