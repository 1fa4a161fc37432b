"""Assemble and publish the OpenAPI document for a Flask app.

Scope (purposefully narrow):
- read documented handlers off the app's URL map
- write their operations into a caller-supplied root document
- serve that document as JSON (plus YAML and a Redoc page) on fixed paths

Call `serve_openapi` once, after every application route is registered. The
URL map is read exactly once, at call time; routes added later are not
documented (and Flask rejects new routes once it has served a request).
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

import yaml
from flask import Response, current_app
from markupsafe import escape

from .config.openapi import normalize_policy, resolve_settings
from .errors import DuplicateOperationError, InvalidArgument
from .openapi_parts.constants import (
    EXTENSION_KEY,
    JSON_MIMETYPE,
    OPENAPI_VERSION,
    REDOC_HTML,
    YAML_MIMETYPE,
)
from .openapi_parts.helpers import merge_component_schemas, openapi_path, operation_dict
from .openapi_parts.registrations import RouteRegistration, list_registrations
from .openapi_parts.schemas import SchemaRegistry

__all__ = ["api_document", "aggregate", "serve_openapi", "published_document"]

_log = logging.getLogger(__name__)


def api_document(
    title: str,
    version: str = "0.1.0",
    description: Optional[str] = None,
    tags: Optional[Iterable[Dict[str, Any]]] = None,
    servers: Optional[Iterable[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    """Base root document: `openapi`, `info`, empty `paths` and optional tags/servers."""
    info: Dict[str, Any] = {"title": title, "version": version}
    if description:
        info["description"] = description
    doc: Dict[str, Any] = {"openapi": OPENAPI_VERSION, "info": info, "paths": {}}
    if servers:
        doc["servers"] = [dict(s) for s in servers]
    if tags:
        doc["tags"] = [dict(t) for t in tags]
    return doc


def aggregate(
    document: Dict[str, Any],
    registrations: Iterable[RouteRegistration],
    schemas: Optional[SchemaRegistry] = None,
    on_duplicate: str = "overwrite",
    logger: Optional[logging.Logger] = None,
) -> Dict[str, Any]:
    """Write every documented registration's operation into `document`.

    Keys are (OpenAPI path, lower-case method). Undocumented registrations
    are skipped. When two registrations share a key the later one wins,
    unless `on_duplicate="error"`, which raises DuplicateOperationError.
    Mutates and returns `document`.
    """
    policy = normalize_policy(on_duplicate)
    log = logger or _log
    if schemas is None:
        schemas = SchemaRegistry()
    paths = document.setdefault("paths", {})
    seen: Dict[tuple, str] = {}

    for reg in registrations:
        if reg.operation is None:
            log.debug("Skipping undocumented route %s %s (%s)", reg.method, reg.path, reg.endpoint)
            continue
        path = openapi_path(reg.path)
        method = reg.method.lower()
        key = (path, method)
        if key in seen:
            if policy == "error":
                raise DuplicateOperationError(
                    f"{reg.method} {path} documented twice (endpoints {seen[key]!r} and {reg.endpoint!r})"
                )
            log.warning(
                "%s %s documented twice; %r replaces %r", reg.method, path, reg.endpoint, seen[key]
            )
        seen[key] = reg.endpoint
        paths.setdefault(path, {})[method] = operation_dict(reg.operation, schemas=schemas)

    merge_component_schemas(document, schemas.schemas)
    return document


def _docs_view(title: str, spec_url: str):
    page = REDOC_HTML.format(title=escape(title), spec_url=escape(spec_url))

    def docs_index():
        return Response(page, status=200, mimetype="text/html")
    return docs_index


def _static_view(body: str, mimetype: str):
    def view():
        return Response(body, status=200, mimetype=mimetype)
    return view


def serve_openapi(
    app,
    document: Dict[str, Any],
    path: Optional[str] = None,
    yaml_path: Optional[str] = None,
    docs_path: Optional[str] = None,
    on_duplicate: Optional[str] = None,
):
    """Aggregate `app`'s documented routes into `document` and publish it.

    Registers `GET path` (JSON) and, unless disabled with an empty string,
    `GET yaml_path` and `GET docs_path`. Unset arguments come from
    app.config / environment (see config.openapi). Returns `app`.
    """
    if document is None:
        raise InvalidArgument("document is required")
    settings = resolve_settings(
        app.config, json_path=path, yaml_path=yaml_path, docs_path=docs_path, on_duplicate=on_duplicate
    )

    registrations: List[RouteRegistration] = list_registrations(app)
    aggregate(document, registrations, on_duplicate=settings["on_duplicate"], logger=app.logger)

    # serialize once; the document is read-only from here on
    json_body = app.json.dumps(document)
    app.extensions[EXTENSION_KEY] = document

    app.add_url_rule(
        settings["json_path"], endpoint="openapi_spec", view_func=_static_view(json_body, JSON_MIMETYPE), methods=["GET"]
    )
    if settings["yaml_path"]:
        yaml_body = yaml.safe_dump(document, sort_keys=False, allow_unicode=True)
        app.add_url_rule(
            settings["yaml_path"], endpoint="openapi_spec_yaml", view_func=_static_view(yaml_body, YAML_MIMETYPE),
            methods=["GET"],
        )
    if settings["docs_path"]:
        title = document.get("info", {}).get("title") or "API Docs"
        app.add_url_rule(
            settings["docs_path"], endpoint="openapi_docs", view_func=_docs_view(title, settings["json_path"]),
            methods=["GET"],
        )

    count = sum(len(ops) for ops in document.get("paths", {}).values())
    app.logger.info(
        "Published OpenAPI document with %d operations across %d paths at %s",
        count, len(document.get("paths", {})), settings["json_path"],
    )
    return app


def published_document(app=None) -> Optional[Dict[str, Any]]:
    """Document previously published by serve_openapi on `app` (or current_app)."""
    target = app if app is not None else current_app
    return target.extensions.get(EXTENSION_KEY)
