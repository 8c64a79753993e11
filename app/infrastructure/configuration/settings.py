"""Application configuration settings - main aggregator."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from infrastructure.configuration.integrations import SmtpSettings
from infrastructure.configuration.features import ContentSettings, FormsSettings
from infrastructure.configuration.infrastructure import ServerSettings


class Settings(BaseSettings):
    """Application configuration settings - main aggregator.

    Aggregates all domain-specific settings into a single configuration object:

    - **Integrations**: SMTP
    - **Features**: content locales and publication policy, forms
    - **Infrastructure**: server URLs and CORS

    Environment Variables:
        PREFIX: Environment prefix, empty in production
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        PROJECT_NAME: Service name attached to every log entry
        GIT_SHA: Git commit SHA for deployment tracking

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        default_locale = settings.content.default_locale
        smtp_host = settings.smtp.SMTP_HOST
        ```
    """

    PREFIX: str = ""
    PROJECT_NAME: str = "localized-content-api"
    LOG_LEVEL: str = "INFO"
    GIT_SHA: str = "Unknown"

    smtp: SmtpSettings

    content: ContentSettings
    forms: FormsSettings

    server: ServerSettings

    @property
    def is_production(self) -> bool:
        """True if PREFIX is empty (production)."""
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            "smtp": SmtpSettings,
            "content": ContentSettings,
            "forms": FormsSettings,
            "server": ServerSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()
