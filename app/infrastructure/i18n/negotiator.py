"""Locale negotiation for content requests.

Determines the content locale of a request from an explicit parameter and the
HTTP Accept-Language header, degrading to the default locale.
"""

from typing import Iterable, List, Optional, Tuple

import structlog

logger = structlog.get_logger().bind(component="i18n.negotiator")


class LocaleNegotiator:
    """Negotiates the content locale of a request.

    Resolution order:
    1. Explicit request parameter (if supported)
    2. Accept-Language header, highest weight first
    3. Default locale

    Negotiation never fails; unsupported or malformed input silently falls
    through to the next source.
    """

    def __init__(self, supported_locales: Iterable[str], default_locale: str):
        """Initialize locale negotiator.

        Args:
            supported_locales: Locale codes content is available in.
            default_locale: Fallback locale, must be one of supported_locales.
        """
        self.supported_locales = tuple(code.lower() for code in supported_locales)
        self.default_locale = default_locale.lower()
        if self.default_locale not in self.supported_locales:
            raise ValueError(
                f"Default locale {default_locale} is not a supported locale"
            )
        self.log = logger.bind(default_locale=self.default_locale)

    def is_supported(self, locale: Optional[str]) -> bool:
        return bool(locale) and locale in self.supported_locales

    def normalize(self, locale: Optional[str]) -> str:
        """Normalize an explicit locale value, or return the default.

        Args:
            locale: Raw locale parameter (e.g., " UR ").

        Returns:
            The lowercased, trimmed locale if supported, the default otherwise.
        """
        candidate = self._clean(locale)
        if candidate and self.is_supported(candidate):
            return candidate
        return self.default_locale

    def negotiate(
        self,
        explicit_param: Optional[str] = None,
        preference_header: Optional[str] = None,
    ) -> str:
        """Negotiate the content locale of a request.

        Args:
            explicit_param: Value of an explicit locale parameter, if any.
            preference_header: Accept-Language header value, if any.

        Returns:
            A supported locale code.
        """
        candidate = self._clean(explicit_param)
        if candidate:
            if self.is_supported(candidate):
                return candidate
            self.log.debug("unsupported_explicit_locale", requested=candidate)

        for language, _ in self.parse_preferences(preference_header):
            if self.is_supported(language):
                self.log.debug("resolved_from_header", locale=language)
                return language

        return self.default_locale

    @staticmethod
    def parse_preferences(header: Optional[str]) -> List[Tuple[str, float]]:
        """Parse an Accept-Language header into (language, weight) pairs.

        "ur-PK,ar;q=0.9,en;q=0.8" -> [("ur", 1.0), ("ar", 0.9), ("en", 0.8)]

        Entries keep only their primary subtag. Missing or malformed weights
        count as 1.0. The result is stable-sorted by weight, descending.
        """
        if not header:
            return []

        preferences = []
        for part in header.split(","):
            pieces = part.split(";")
            language = pieces[0].strip().split("-")[0].lower()
            if not language:
                continue

            quality = 1.0
            for param in pieces[1:]:
                name, _, value = param.strip().partition("=")
                if name.strip().lower() == "q":
                    try:
                        quality = float(value)
                    except ValueError:
                        quality = 1.0

            preferences.append((language, quality))

        return sorted(preferences, key=lambda item: item[1], reverse=True)

    @staticmethod
    def _clean(value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return str(value).strip().lower() or None
