"""Content feature settings: locales and publication policy."""

from typing import List

from pydantic import model_validator

from infrastructure.configuration.base import FeatureSettings


class ContentSettings(FeatureSettings):
    """Configuration for localized content resolution.

    Environment Variables:
        CONTENT_LOCALES: Comma-separated supported locale codes
            (default: en,ur,ar,fa)
        CONTENT_DEFAULT_LOCALE: Default locale, must be supported (default: en)
        CONTENT_PUBLISHED_ONLY: Treat unpublished records as absent when
            resolving documents (default: false)
        EVENTS_PAGE_SIZE: Default page size of collection listings (default: 25)
        EVENTS_MAX_PAGE_SIZE: Upper bound for requested page sizes (default: 100)
        CONTENT_SEED_DATA: Load the admission form and demo content at startup
            (default: false)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        locales = settings.content.locales  # ["en", "ur", "ar", "fa"]
        ```
    """

    CONTENT_LOCALES: str = "en,ur,ar,fa"
    CONTENT_DEFAULT_LOCALE: str = "en"
    CONTENT_PUBLISHED_ONLY: bool = False
    EVENTS_PAGE_SIZE: int = 25
    EVENTS_MAX_PAGE_SIZE: int = 100
    CONTENT_SEED_DATA: bool = False

    @property
    def locales(self) -> List[str]:
        """Supported locale codes, in configured order."""
        codes = []
        for code in self.CONTENT_LOCALES.split(","):
            code = code.strip().lower()
            if code and code not in codes:
                codes.append(code)
        return codes

    @property
    def default_locale(self) -> str:
        return self.CONTENT_DEFAULT_LOCALE.strip().lower()

    @model_validator(mode="after")
    def validate_default_locale(self) -> "ContentSettings":
        if self.default_locale not in self.locales:
            raise ValueError(
                f"CONTENT_DEFAULT_LOCALE '{self.CONTENT_DEFAULT_LOCALE}' must be one "
                f"of CONTENT_LOCALES ({self.CONTENT_LOCALES})"
            )
        return self
