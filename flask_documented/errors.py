"""Exception types raised while documenting handlers and publishing the OpenAPI document."""


class FlaskDocumentedError(Exception):
    pass


class InvalidArgument(FlaskDocumentedError, ValueError):
    """Raised when a documented handler or route description is built from missing or bad input."""


class IntegrationError(FlaskDocumentedError, RuntimeError):
    """Raised at start-up when the host app cannot enumerate its own routes."""


class DuplicateOperationError(FlaskDocumentedError, ValueError):
    """Raised when two documented routes share a path and method under the strict policy."""


__all__ = [
    "FlaskDocumentedError",
    "InvalidArgument",
    "IntegrationError",
    "DuplicateOperationError",
]
