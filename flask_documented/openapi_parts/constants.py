"""Centralized constants for building and publishing OpenAPI documents."""
from typing import Tuple

OPENAPI_VERSION = "3.0.3"

# Methods that can carry an Operation Object on an OpenAPI Path Item.
OPERATION_METHODS: Tuple[str, ...] = (
    "GET",
    "PUT",
    "POST",
    "DELETE",
    "OPTIONS",
    "HEAD",
    "PATCH",
    "TRACE",
)

PARAMETER_LOCATIONS: Tuple[str, ...] = ("query", "path", "header", "cookie")

JSON_MIMETYPE = "application/json"
YAML_MIMETYPE = "application/x-yaml"

COMPONENT_SCHEMA_REF = "#/components/schemas/{name}"

# Key under app.extensions holding the published document.
EXTENSION_KEY = "flask_documented"

REDOC_HTML = (
    "<!DOCTYPE html><html><head><title>{title}</title>"
    "<link rel=\"stylesheet\" href=\"https://cdn.jsdelivr.net/npm/redoc@next/bundles/redoc.standalone.css\" />"
    "</head><body><redoc spec-url='{spec_url}'></redoc>"
    "<script src='https://cdn.jsdelivr.net/npm/redoc@next/bundles/redoc.standalone.js'></script>"
    "</body></html>"
)

__all__ = [
    "OPENAPI_VERSION",
    "OPERATION_METHODS",
    "PARAMETER_LOCATIONS",
    "JSON_MIMETYPE",
    "YAML_MIMETYPE",
    "COMPONENT_SCHEMA_REF",
    "EXTENSION_KEY",
    "REDOC_HTML",
]
