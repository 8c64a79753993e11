"""Feature settings __init__ - exports all feature settings."""

from infrastructure.configuration.features.content import ContentSettings
from infrastructure.configuration.features.forms import FormsSettings

__all__ = [
    "ContentSettings",
    "FormsSettings",
]
