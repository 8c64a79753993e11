from typing import Annotated

from fastapi import Depends

from infrastructure.services import (
    DocumentResolverDep,
    DocumentStoreDep,
    FileStoreDep,
    MailerDep,
    PdfRendererDep,
    SettingsDep,
    TranslatorDep,
)
from modules.forms.service import FormService


def get_form_service(
    store: DocumentStoreDep,
    resolver: DocumentResolverDep,
    file_store: FileStoreDep,
    translator: TranslatorDep,
    settings: SettingsDep,
    mailer: MailerDep,
    pdf_renderer: PdfRendererDep,
) -> FormService:
    """Build the form service from the request's collaborators."""
    return FormService(
        store=store,
        resolver=resolver,
        file_store=file_store,
        translator=translator,
        settings=settings,
        mailer=mailer,
        pdf_renderer=pdf_renderer,
    )


FormServiceDep = Annotated[FormService, Depends(get_form_service)]
