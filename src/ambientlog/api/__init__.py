"""ambientlog.api - web framework integration."""

from ambientlog.api.middleware import LogContextMiddleware

__all__ = ["LogContextMiddleware"]
