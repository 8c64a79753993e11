"""Infrastructure configuration module - public API.

Exports:
    settings: Singleton Settings instance
    Settings: Main settings class (for testing/overrides)
    ContentSettings, FormsSettings, SmtpSettings, ServerSettings: sections

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()
    if settings.content.CONTENT_PUBLISHED_ONLY:
        ...
    ```
"""

from infrastructure.configuration.settings import Settings, settings
from infrastructure.configuration.features import ContentSettings, FormsSettings
from infrastructure.configuration.integrations import SmtpSettings
from infrastructure.configuration.infrastructure import ServerSettings

__all__ = [
    "Settings",
    "settings",
    "ContentSettings",
    "FormsSettings",
    "SmtpSettings",
    "ServerSettings",
]
