"""
Type aliases for FastAPI dependency injection.
"""

from typing import Annotated, Optional

from fastapi import Depends

from infrastructure.configuration import Settings
from infrastructure.i18n import LocaleNegotiator, LocaleRegistry, Translator
from infrastructure.notifications import Mailer, PdfRenderer
from infrastructure.persistence import DocumentStore, FileStore
from infrastructure.services.providers import (
    get_document_resolver,
    get_document_store,
    get_file_store,
    get_locale_negotiator,
    get_locale_registry,
    get_mailer,
    get_mutation_coordinator,
    get_pdf_renderer,
    get_settings,
    get_translator,
)
from modules.content.mutations import MutationCoordinator
from modules.content.resolver import DocumentResolver

SettingsDep = Annotated[Settings, Depends(get_settings)]

DocumentStoreDep = Annotated[DocumentStore, Depends(get_document_store)]
FileStoreDep = Annotated[FileStore, Depends(get_file_store)]

LocaleRegistryDep = Annotated[LocaleRegistry, Depends(get_locale_registry)]
LocaleNegotiatorDep = Annotated[LocaleNegotiator, Depends(get_locale_negotiator)]
TranslatorDep = Annotated[Translator, Depends(get_translator)]

DocumentResolverDep = Annotated[DocumentResolver, Depends(get_document_resolver)]
MutationCoordinatorDep = Annotated[
    MutationCoordinator, Depends(get_mutation_coordinator)
]

# Optional collaborators: None when not configured
MailerDep = Annotated[Optional[Mailer], Depends(get_mailer)]
PdfRendererDep = Annotated[Optional[PdfRenderer], Depends(get_pdf_renderer)]

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
]
