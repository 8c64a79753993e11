"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core services. Routes
should depend on the Annotated aliases in `infrastructure.services.dependencies`
so tests can swap implementations through `app.dependency_overrides`.
"""

from functools import lru_cache
from typing import Optional

from infrastructure.configuration import Settings
from infrastructure.i18n import (
    LocaleNegotiator,
    LocaleRegistry,
    Translator,
    bootstrap_locales,
    default_definitions,
)
from infrastructure.i18n.factory import create_translator
from infrastructure.notifications import Mailer, PdfRenderer, SmtpMailer
from infrastructure.persistence import (
    DocumentStore,
    FileStore,
    InMemoryDocumentStore,
    InMemoryFileStore,
    InMemoryLocalizationService,
    LocalizationService,
)
from modules.content.mutations import MutationCoordinator
from modules.content.resolver import DocumentResolver


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    Application code should use the DI type alias for testability:
        from infrastructure.services import SettingsDep
        @router.get("/config")
        def get_config(settings: SettingsDep):
            ...

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_document_store() -> DocumentStore:
    """Get the document store.

    The in-memory store backs the application unless a platform store is
    wired in by overriding this provider.
    """
    return InMemoryDocumentStore()


@lru_cache
def get_localization_service() -> Optional[LocalizationService]:
    store = get_document_store()
    if isinstance(store, InMemoryDocumentStore):
        return InMemoryLocalizationService(store)
    return None


@lru_cache
def get_file_store() -> FileStore:
    return InMemoryFileStore()


@lru_cache
def get_locale_registry() -> LocaleRegistry:
    """Get the locale registry, bootstrapped from settings.content."""
    content = get_settings().content
    registry = LocaleRegistry()
    bootstrap_locales(registry, default_definitions(content.locales, content.default_locale))
    return registry


@lru_cache
def get_locale_negotiator() -> LocaleNegotiator:
    registry = get_locale_registry()
    return LocaleNegotiator(
        supported_locales=registry.codes,
        default_locale=registry.default.code,
    )


@lru_cache
def get_translator() -> Translator:
    """Get the message translator with all catalogs in app/locales loaded."""
    return create_translator(fallback_locale=get_settings().content.default_locale)


@lru_cache
def get_document_resolver() -> DocumentResolver:
    settings = get_settings()
    return DocumentResolver(
        store=get_document_store(),
        default_locale=get_locale_registry().default.code,
        published_only=settings.content.CONTENT_PUBLISHED_ONLY,
    )


@lru_cache
def get_mutation_coordinator() -> MutationCoordinator:
    registry = get_locale_registry()
    return MutationCoordinator(
        store=get_document_store(),
        localization_service=get_localization_service(),
        locales=registry.codes,
        default_locale=registry.default.code,
    )


@lru_cache
def get_mailer() -> Optional[Mailer]:
    """Get the SMTP mailer, or None when SMTP_ENABLED is false."""
    smtp = get_settings().smtp
    if not smtp.SMTP_ENABLED:
        return None
    return SmtpMailer(smtp)


def get_pdf_renderer() -> Optional[PdfRenderer]:
    """Get the HTML to PDF renderer.

    No rendering engine ships with the application; deployments provide one
    by overriding this provider. Without it, submission PDFs are skipped.
    """
    return None
