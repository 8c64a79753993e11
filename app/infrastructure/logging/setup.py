"""Structlog configuration and logger setup.

Usage:
    from infrastructure.logging import configure_logging, get_module_logger

    configure_logging()

    logger = get_module_logger()
    logger.info("document_resolved", collection="events", locale="ur")
"""

import inspect
import logging
import sys
from typing import List, Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.typing import Processor

from infrastructure.configuration import Settings, settings
from infrastructure.logging.formatters import (
    add_service_info,
    mask_sensitive_data,
    truncate_large_values,
)

SILENT = logging.CRITICAL + 1


def _is_test_environment() -> bool:
    return "pytest" in sys.modules


def build_processors(app_settings: Settings, json_output: bool) -> List[Processor]:
    """Processor chain for the service, ending in a JSON or console renderer."""
    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )
    return [
        # Correlation id, request path and locale bound by the middleware
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        add_service_info(
            app_settings.PROJECT_NAME, app_settings.GIT_SHA, app_settings.PREFIX
        ),
        mask_sensitive_data(additional_patterns=frozenset({"submitter_ip"})),
        truncate_large_values(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structured logging.

    Production emits JSON lines, other environments render to the console.
    Under pytest every entry is dropped.

    Args:
        log_level: Override for settings.LOG_LEVEL.
        is_production: Override for settings.is_production.

    Returns:
        Configured logger instance
    """
    if _is_test_environment():
        processors: List[Processor] = [
            structlog.stdlib.add_log_level,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ]
        level = SILENT
    else:
        json_output = settings.is_production if is_production is None else is_production
        processors = build_processors(settings, json_output)
        level = getattr(logging, (log_level or settings.LOG_LEVEL).upper(), logging.INFO)

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", level=level, force=level == SILENT)
    logging.root.setLevel(level)

    return structlog.stdlib.get_logger()


# Module-level logger (auto-configured on import)
logger: BoundLogger = configure_logging()


def _caller_module() -> Optional[str]:
    """Name of the module that called the public helper calling this."""
    frame = inspect.currentframe()
    for _ in range(2):
        frame = frame.f_back if frame is not None else None
    module = inspect.getmodule(frame) if frame is not None else None
    return module.__name__ if module else None


def get_logger(name: Optional[str] = None) -> BoundLogger:
    """Get a logger bound to `name`, or to the calling module's name."""
    return logger.bind(logger_name=name or _caller_module() or "unknown")


def get_module_logger() -> BoundLogger:
    """Get a logger for the calling module with component context.

    Example:
        # In modules/content/resolver.py
        logger = get_module_logger()
        # context: {"component": "resolver", "module_path": "modules.content.resolver"}
    """
    module_name = _caller_module()
    if module_name is None:
        return logger.bind(component="unknown")
    return logger.bind(component=module_name.rsplit(".", 1)[-1], module_path=module_name)
