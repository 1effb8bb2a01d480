"""
Structured error types for ambientlog.

Every error raised by the package derives from AmbientLogError and carries a
category plus an optional ErrorContext, so callers that log failures get the
same structured fields no matter which layer raised.

Manifesto:
    - **Fail at the call site:** invalid input is rejected before any state
      is touched, so a failed push never leaves a half-applied batch behind
    - **Typed hierarchy:** InvalidArgumentError for bad push input,
      InvalidConfigError for bad logging configuration
    - **Total operations stay total:** suspend, reset, snapshot and lock
      release never raise; double release is a no-op, not an error

Architecture:
    ::

        ┌───────────────────────────────────────────────────────┐
        │                   AmbientLogError                     │
        │             (category, context, cause)                │
        ├───────────────────────────────────────────────────────┤
        │                                                       │
        │  ValidationError              ConfigError             │
        │  (VALIDATION)                 (CONFIG)                │
        │       │                            │                  │
        │  InvalidArgumentError         InvalidConfigError      │
        │  (also a ValueError)          (also a ValueError)     │
        └───────────────────────────────────────────────────────┘

Examples:
    >>> error = InvalidArgumentError("enricher must not be None", argument="enricher")
    >>> error.category
    <ErrorCategory.VALIDATION: 'VALIDATION'>
    >>> error.context.argument
    'enricher'

Tags:
    error-handling, exception-hierarchy, error-context, ambientlog
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    VALIDATION = "VALIDATION"  # Absent or malformed arguments
    CONFIG = "CONFIG"  # Missing or invalid settings
    INTERNAL = "INTERNAL"  # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Attributes:
        argument: Name of the offending argument, if any
        value: Repr of the offending value (kept short)
        stack: Name of the context stack involved (``log_context`` etc.)
        metadata: Additional key-value pairs
    """

    argument: str | None = None
    value: str | None = None
    stack: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["argument", "value", "stack"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class AmbientLogError(Exception):
    """
    Base exception for all ambientlog errors.

    Subclasses set ``default_category``; instances carry a message, the
    category, an ErrorContext and an optional chained cause.

    Examples:
        >>> error = AmbientLogError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(stack="log_context").context.stack
        'log_context'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> AmbientLogError:
        """
        Add context to this error (fluent API).

        Usage:
            raise InvalidArgumentError("bad name").with_context(stack="log_context")
        """
        for key, value in kwargs.items():
            if key != "metadata" and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(AmbientLogError):
    """Input failed validation."""

    default_category = ErrorCategory.VALIDATION


class InvalidArgumentError(ValidationError, ValueError):
    """
    An absent or invalid argument was passed to a push operation.

    Raised before any mutation happens, so the stack is left exactly as it
    was. Subclasses ValueError so plain ``except ValueError`` callers still
    catch it.
    """

    def __init__(
        self,
        message: str,
        *,
        argument: str | None = None,
        value: Any = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        if argument is not None:
            self.context.argument = argument
        if value is not None:
            self.context.value = repr(value)[:200]


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(AmbientLogError):
    """Configuration error."""

    default_category = ErrorCategory.CONFIG


class InvalidConfigError(ConfigError, ValueError):
    """Configuration value is invalid."""

    def __init__(self, message: str, *, setting: str | None = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.setting = setting
        if setting:
            self.context.metadata["setting"] = setting


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "AmbientLogError",
    "ValidationError",
    "InvalidArgumentError",
    "ConfigError",
    "InvalidConfigError",
]
