"""Factory functions for creating i18n components."""

from pathlib import Path
from typing import Optional

import structlog
from infrastructure.i18n.loader import YAMLTranslationLoader
from infrastructure.i18n.translator import Translator

logger = structlog.get_logger()


def create_translator(
    translations_dir: Optional[Path] = None,
    fallback_locale: str = "en",
    use_cache: bool = True,
) -> Translator:
    """Create a Translator with every catalog preloaded.

    Args:
        translations_dir: Path to YAML message files (default: app/locales).
        fallback_locale: Locale used when a message is missing.
        use_cache: Whether the loader caches parsed YAML.

    Returns:
        Translator: Configured translator instance.

    Raises:
        ValueError: If translations_dir does not exist.
    """
    if translations_dir is None:
        # This file is at .../app/infrastructure/i18n/factory.py
        translations_dir = Path(__file__).resolve().parents[2] / "locales"

    loader = YAMLTranslationLoader(translations_dir=translations_dir, use_cache=use_cache)
    translator = Translator(loader=loader, fallback_locale=fallback_locale)
    translator.load_all()
    logger.info(
        "translator_created",
        translations_dir=str(translations_dir),
        locales=translator.get_available_locales(),
    )
    return translator
