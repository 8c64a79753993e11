"""Locale registry and idempotent locale bootstrap.

The registry is the set of locales content can be authored in. Bootstrapping
brings it in line with the configured locales and keeps exactly one default.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from infrastructure.logging import get_module_logger
from infrastructure.i18n.models import LOCALE_NAMES, Locale, LocaleDefinition

logger = get_module_logger()


class LocaleRegistry:
    """In-process registry of content locales, keyed by code."""

    def __init__(self, locales: Optional[Iterable[LocaleDefinition]] = None):
        self._locales: Dict[str, LocaleDefinition] = {}
        for definition in locales or []:
            self._locales[definition.code] = definition

    def list(self) -> List[LocaleDefinition]:
        return list(self._locales.values())

    def get(self, code: str) -> Optional[LocaleDefinition]:
        return self._locales.get(code)

    def add(self, definition: LocaleDefinition) -> LocaleDefinition:
        self._locales[definition.code] = definition
        return definition

    @property
    def codes(self) -> List[str]:
        return list(self._locales.keys())

    @property
    def default(self) -> Optional[LocaleDefinition]:
        return next((loc for loc in self._locales.values() if loc.is_default), None)

    def set_default(self, code: str) -> None:
        """Mark `code` as the only default locale.

        Raises:
            KeyError: If the locale is not registered.
        """
        if code not in self._locales:
            raise KeyError(f"Locale not registered: {code}")
        for definition in self._locales.values():
            definition.is_default = definition.code == code


@dataclass
class BootstrapSummary:
    created: List[str] = field(default_factory=list)
    existing: List[str] = field(default_factory=list)
    default_changed: bool = False
    default_locale: Optional[str] = None


def default_definitions(codes: Iterable[str], default_code: str) -> List[LocaleDefinition]:
    """Build locale definitions for configured codes.

    Built-in locales get their display name, other codes use the code itself.
    """
    definitions = []
    for code in codes:
        try:
            name = LOCALE_NAMES[Locale.from_string(code)]
        except ValueError:
            name = code
        definitions.append(
            LocaleDefinition(code=code, name=name, is_default=code == default_code)
        )
    return definitions


def bootstrap_locales(
    registry: LocaleRegistry, definitions: Iterable[LocaleDefinition]
) -> BootstrapSummary:
    """Ensure every definition is registered and exactly one default exists.

    Running the bootstrap repeatedly with the same definitions is a no-op.

    Args:
        registry: Registry to bootstrap.
        definitions: Locales that must exist. The first definition flagged
            `is_default` becomes the default.

    Returns:
        BootstrapSummary describing what changed.
    """
    definitions = list(definitions)
    summary = BootstrapSummary()

    for definition in definitions:
        if registry.get(definition.code) is None:
            registry.add(
                LocaleDefinition(code=definition.code, name=definition.name)
            )
            summary.created.append(definition.code)
            logger.info("locale_created", code=definition.code, name=definition.name)
        else:
            summary.existing.append(definition.code)

    if not registry.codes:
        logger.warning("no_locales_to_bootstrap")
        return summary

    wanted = next((d.code for d in definitions if d.is_default), None)
    current_defaults = [loc.code for loc in registry.list() if loc.is_default]

    if wanted is None:
        # Keep the registry valid even without a configured default.
        wanted = current_defaults[0] if current_defaults else registry.codes[0]

    if current_defaults != [wanted]:
        registry.set_default(wanted)
        summary.default_changed = True
        logger.info(
            "default_locale_set", code=wanted, previous_defaults=current_defaults
        )

    summary.default_locale = wanted
    logger.info(
        "locales_bootstrapped",
        created=summary.created,
        existing=summary.existing,
        default_locale=wanted,
    )
    return summary
