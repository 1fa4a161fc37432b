"""Attach OpenAPI operation descriptions to Flask view functions and serve the OpenAPI document.

    from flask_documented import api_document, documented, route, serve_openapi

    app.add_url_rule('/ping', view_func=documented(route(summary='Ping').response(200, 'pong'), ping))
    serve_openapi(app, api_document('Ping API'))
"""
from .decorators.documented import AsyncDocumentedHandler, DocumentedHandler, describe, documented  # noqa: F401
from .errors import (  # noqa: F401
    DuplicateOperationError,
    FlaskDocumentedError,
    IntegrationError,
    InvalidArgument,
)
from .openapi_builder import aggregate, api_document, published_document, serve_openapi  # noqa: F401
from .openapi_parts.registrations import RouteRegistration, list_registrations  # noqa: F401
from .openapi_parts.route import Parameter, Route, route  # noqa: F401
from .openapi_parts.schemas import SchemaRegistry, prop, schema  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    "DocumentedHandler",
    "AsyncDocumentedHandler",
    "documented",
    "describe",
    "aggregate",
    "api_document",
    "serve_openapi",
    "published_document",
    "RouteRegistration",
    "list_registrations",
    "Route",
    "Parameter",
    "route",
    "SchemaRegistry",
    "schema",
    "prop",
    "FlaskDocumentedError",
    "InvalidArgument",
    "IntegrationError",
    "DuplicateOperationError",
]
