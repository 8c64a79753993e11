"""SMTP mailer.

Blocking smtplib calls run in a worker thread so the event loop keeps
serving requests while a message is delivered.
"""

import asyncio
import smtplib
import socket
import ssl
from email.message import EmailMessage as MimeMessage
from email.utils import make_msgid

import structlog

from infrastructure.configuration import SmtpSettings
from infrastructure.notifications.contracts import Mailer
from infrastructure.notifications.models import EmailMessage
from infrastructure.operations import OperationResult

logger = structlog.get_logger().bind(component="notifications.smtp")


class SmtpMailer(Mailer):
    """Mailer delivering through an SMTP server configured by SmtpSettings."""

    def __init__(self, settings: SmtpSettings):
        self.settings = settings

    def build_message(self, message: EmailMessage) -> MimeMessage:
        """Build the MIME message: text + HTML alternatives, then attachments."""
        mime = MimeMessage()
        mime["From"] = self.settings.EMAIL_FROM
        mime["To"] = ", ".join(message.to)
        mime["Subject"] = message.subject
        mime["Message-ID"] = make_msgid()
        reply_to = (
            message.reply_to or self.settings.EMAIL_REPLY_TO or self.settings.EMAIL_FROM
        )
        if reply_to:
            mime["Reply-To"] = reply_to

        mime.set_content(message.text_body or "This message requires an HTML capable client.")
        mime.add_alternative(message.html_body, subtype="html")

        for attachment in message.attachments:
            maintype, _, subtype = attachment.content_type.partition("/")
            mime.add_attachment(
                attachment.content,
                maintype=maintype,
                subtype=subtype or "octet-stream",
                filename=attachment.filename,
            )
        return mime

    def _ssl_context(self) -> ssl.SSLContext:
        context = ssl.create_default_context()
        if not self.settings.SMTP_TLS_REJECT_UNAUTHORIZED:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
        return context

    def _deliver(self, mime: MimeMessage) -> None:
        s = self.settings
        if s.SMTP_SECURE:
            client = smtplib.SMTP_SSL(
                s.SMTP_HOST,
                s.SMTP_PORT,
                timeout=s.SMTP_TIMEOUT_SECONDS,
                context=self._ssl_context(),
            )
        else:
            client = smtplib.SMTP(s.SMTP_HOST, s.SMTP_PORT, timeout=s.SMTP_TIMEOUT_SECONDS)

        with client:
            if not s.SMTP_SECURE and client.has_extn("starttls"):
                client.starttls(context=self._ssl_context())
            if s.SMTP_USERNAME and s.SMTP_PASSWORD:
                client.login(s.SMTP_USERNAME, s.SMTP_PASSWORD)
            client.send_message(mime)

    async def send(self, message: EmailMessage) -> OperationResult:
        mime = self.build_message(message)
        log = logger.bind(
            recipients=len(message.to),
            subject=message.subject,
            smtp_host=self.settings.SMTP_HOST,
        )
        try:
            await asyncio.to_thread(self._deliver, mime)
        except (smtplib.SMTPServerDisconnected, smtplib.SMTPConnectError, socket.timeout, ConnectionError) as e:
            log.warning("email_send_failed", error=str(e), retryable=True)
            return OperationResult.transient_error(str(e), error_code="SMTP_UNAVAILABLE")
        except (smtplib.SMTPException, OSError) as e:
            log.error("email_send_failed", error=str(e), retryable=False)
            return OperationResult.permanent_error(str(e), error_code="SMTP_REJECTED")

        log.info("email_sent", message_id=mime["Message-ID"])
        return OperationResult.success(data=mime["Message-ID"], message="Email sent")
