"""
ambientlog.core - errors, settings and protocols shared by every layer.
"""

from ambientlog.core.errors import (
    AmbientLogError,
    ConfigError,
    ErrorCategory,
    ErrorContext,
    InvalidArgumentError,
    InvalidConfigError,
    ValidationError,
)
from ambientlog.core.protocols import Enricher, PropertyFactory, StackStorage
from ambientlog.core.settings import LogContextSettings, get_settings

__all__ = [
    "AmbientLogError",
    "ConfigError",
    "ErrorCategory",
    "ErrorContext",
    "InvalidArgumentError",
    "InvalidConfigError",
    "ValidationError",
    "Enricher",
    "PropertyFactory",
    "StackStorage",
    "LogContextSettings",
    "get_settings",
]
