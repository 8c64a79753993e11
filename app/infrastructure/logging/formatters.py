"""Structlog processors applied to every log entry.

Usage:
    from infrastructure.logging.formatters import mask_sensitive_data
"""

from typing import Any, Mapping

EventDict = dict[str, Any]


def add_service_info(service: str, version: str = "unknown", environment: str = ""):
    """Create a processor that stamps entries with the deployed service.

    `environment` is the settings PREFIX; an empty prefix is production.
    """
    stamp = {
        "service": service,
        "version": version,
        "environment": environment.strip("-_") or "production",
    }

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        for key, value in stamp.items():
            event_dict.setdefault(key, value)
        return event_dict

    return processor


# Key fragments whose values never reach the logs
SENSITIVE_PATTERNS = frozenset(
    {
        "password",
        "smtp_pass",
        "secret",
        "token",
        "authorization",
        "bearer",
        "cookie",
        "cnic",
    }
)


def _mask(value: Any, patterns: frozenset[str], mask_value: str) -> Any:
    if not isinstance(value, Mapping):
        return value
    return {
        key: (
            mask_value
            if inner is not None and any(p in str(key).lower() for p in patterns)
            else _mask(inner, patterns, mask_value)
        )
        for key, inner in value.items()
    }


def mask_sensitive_data(
    mask_value: str = "***REDACTED***",
    additional_patterns: frozenset[str] | None = None,
):
    """Create a processor that masks values of sensitive keys.

    Keys are matched case-insensitively against SENSITIVE_PATTERNS plus
    `additional_patterns`, in nested mappings too, so submission payloads
    logged as a whole keep identity numbers out of the logs.

    Example:
        mask_sensitive_data(additional_patterns=frozenset({"submitter_ip"}))
    """
    patterns = SENSITIVE_PATTERNS | (additional_patterns or frozenset())

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        return _mask(event_dict, patterns, mask_value)

    return processor


def truncate_large_values(max_length: int = 500):
    """Create a processor that shortens long strings and summarizes bytes.

    Rendered HTML can be large; only the head is kept. File contents and
    PDFs are replaced by their length.
    """

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        for key, value in event_dict.items():
            if isinstance(value, (bytes, bytearray)):
                event_dict[key] = f"<{len(value)} bytes>"
            elif isinstance(value, str) and len(value) > max_length:
                event_dict[key] = f"{value[:max_length]}...[{len(value)} chars]"
        return event_dict

    return processor
