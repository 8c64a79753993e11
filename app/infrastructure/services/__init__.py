"""
Dependency injection services.

Provides type aliases and provider functions for FastAPI dependency injection.
"""

from infrastructure.services.dependencies import (
    SettingsDep,
    DocumentStoreDep,
    FileStoreDep,
    LocaleRegistryDep,
    LocaleNegotiatorDep,
    TranslatorDep,
    DocumentResolverDep,
    MutationCoordinatorDep,
    MailerDep,
    PdfRendererDep,
)
from infrastructure.services.providers import (
    get_settings,
    get_document_store,
    get_localization_service,
    get_file_store,
    get_locale_registry,
    get_locale_negotiator,
    get_translator,
    get_document_resolver,
    get_mutation_coordinator,
    get_mailer,
    get_pdf_renderer,
)

__all__ = [
    "SettingsDep",
    "DocumentStoreDep",
    "FileStoreDep",
    "LocaleRegistryDep",
    "LocaleNegotiatorDep",
    "TranslatorDep",
    "DocumentResolverDep",
    "MutationCoordinatorDep",
    "MailerDep",
    "PdfRendererDep",
    "get_settings",
    "get_document_store",
    "get_localization_service",
    "get_file_store",
    "get_locale_registry",
    "get_locale_negotiator",
    "get_translator",
    "get_document_resolver",
    "get_mutation_coordinator",
    "get_mailer",
    "get_pdf_renderer",
]
