"""Outbound notifications: email messages, mailers and PDF rendering."""

from infrastructure.notifications.contracts import Mailer, PdfRenderer
from infrastructure.notifications.models import Attachment, EmailMessage
from infrastructure.notifications.smtp import SmtpMailer

__all__ = [
    "Attachment",
    "EmailMessage",
    "Mailer",
    "PdfRenderer",
    "SmtpMailer",
]
