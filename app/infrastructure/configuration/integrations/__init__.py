"""Integration settings __init__ - exports all integration settings."""

from infrastructure.configuration.integrations.smtp import SmtpSettings

__all__ = [
    "SmtpSettings",
]
