"""SMTP email integration settings."""

from typing import Optional

from infrastructure.configuration.base import IntegrationSettings


class SmtpSettings(IntegrationSettings):
    """SMTP server configuration for notification emails.

    Environment Variables:
        SMTP_ENABLED: Send emails at all (default: true)
        SMTP_HOST: SMTP server host (default: localhost)
        SMTP_PORT: SMTP server port (default: 587)
        SMTP_SECURE: Use implicit TLS instead of STARTTLS (default: false)
        SMTP_USERNAME: SMTP username, optional
        SMTP_PASSWORD: SMTP password, optional
        SMTP_TLS_REJECT_UNAUTHORIZED: Verify the server certificate (default: true)
        SMTP_TIMEOUT_SECONDS: Socket timeout (default: 30)
        EMAIL_FROM: Sender address (default: noreply@example.com)
        EMAIL_REPLY_TO: Reply-To address, optional

    Example:
        ```python
        from infrastructure.services import get_settings

        smtp = get_settings().smtp
        sender = smtp.EMAIL_FROM
        ```
    """

    SMTP_ENABLED: bool = True
    SMTP_HOST: str = "localhost"
    SMTP_PORT: int = 587
    SMTP_SECURE: bool = False
    SMTP_USERNAME: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    SMTP_TLS_REJECT_UNAUTHORIZED: bool = True
    SMTP_TIMEOUT_SECONDS: float = 30.0
    EMAIL_FROM: str = "noreply@example.com"
    EMAIL_REPLY_TO: Optional[str] = None
