from contextlib import asynccontextmanager
from dataclasses import asdict
from typing import AsyncIterator, TYPE_CHECKING

from fastapi import FastAPI
from structlog.stdlib import BoundLogger

from infrastructure.logging.setup import configure_logging
from infrastructure.services import (
    get_document_store,
    get_locale_registry,
    get_mailer,
    get_settings,
    get_translator,
)
from modules.seed.service import seed_content

if TYPE_CHECKING:
    from infrastructure.configuration import Settings


def _get_logger(settings: "Settings") -> BoundLogger:
    return configure_logging(
        log_level=settings.LOG_LEVEL, is_production=settings.is_production
    )


def _list_configs(settings: "Settings", logger: BoundLogger) -> None:
    config_settings: dict[str, list[object]] = {"settings": []}

    for key, value in settings.model_dump().items():
        if isinstance(value, dict):
            config_settings[key] = list(value.keys())
        else:
            config_settings["settings"].append({key: value})

    logger.info("configuration_initialized", base_settings=config_settings["settings"])
    for key, value in config_settings.items():
        if key != "settings":
            logger.info("configuration_loaded", config_setting=key, keys=value)


def _initialize_locales(app: FastAPI, logger: BoundLogger) -> None:
    registry = get_locale_registry()
    app.state.locale_registry = registry
    logger.info(
        "locales_ready",
        locales=registry.codes,
        default_locale=registry.default.code if registry.default else None,
    )

    translator = get_translator()
    app.state.translator = translator
    missing = sorted(set(registry.codes) - set(translator.get_available_locales()))
    if missing:
        logger.warning("message_catalogs_missing", locales=missing)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    logger = _get_logger(settings)

    app.state.settings = settings
    app.state.logger = logger

    logger.info("application_startup")
    _list_configs(settings, logger)

    _initialize_locales(app, logger)
    store = get_document_store()
    app.state.document_store = store

    if settings.content.CONTENT_SEED_DATA:
        summary = await seed_content(store, settings)
        logger.info("seed_data_loaded", **asdict(summary))

    if get_mailer() is None:
        logger.info("email_notifications_disabled", reason="smtp_disabled")

    yield

    logger.info("application_shutdown")
