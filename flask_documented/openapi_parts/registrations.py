"""Read the Flask URL map as a flat list of (path, method, handler) registrations."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional

from flask_documented.decorators.documented import DocumentedHandler
from flask_documented.errors import IntegrationError
from .constants import OPERATION_METHODS


@dataclass(frozen=True)
class RouteRegistration:
    path: str
    method: str
    endpoint: str
    handler: Optional[Callable[..., Any]]
    operation: Any = None

    @property
    def documented(self) -> bool:
        return self.operation is not None


def registration_for(path: str, method: str, endpoint: str, handler) -> RouteRegistration:
    operation = handler.operation if isinstance(handler, DocumentedHandler) else None
    return RouteRegistration(path, method.upper(), endpoint, handler, operation)


def _explicit_methods(rule) -> list:
    """Methods of `rule` that carry an operation.

    Werkzeug adds HEAD to every GET rule without recording that it did, so an
    explicit `methods=['GET', 'HEAD']` cannot be told apart from a plain GET
    rule: HEAD is reported only for rules that do not also serve GET. OPTIONS is
    reported only when the caller listed it (Flask then turns off
    `provide_automatic_options`).
    """
    methods = set(rule.methods or ())
    # Flask adds OPTIONS, Werkzeug adds HEAD next to GET
    if getattr(rule, 'provide_automatic_options', False):
        methods.discard('OPTIONS')
    if 'GET' in methods:
        methods.discard('HEAD')
    return [m for m in OPERATION_METHODS if m in methods]


def iter_registrations(app) -> Iterator[RouteRegistration]:
    """Yield one registration per (rule, method), in rule registration order.

    Raises IntegrationError when `app` does not expose a URL map and view
    function table to enumerate.
    """
    url_map = getattr(app, 'url_map', None)
    view_functions = getattr(app, 'view_functions', None)
    if url_map is None or view_functions is None or not hasattr(url_map, 'iter_rules'):
        raise IntegrationError(
            f'{type(app).__name__} does not expose url_map/view_functions; '
            'routes cannot be enumerated to build the OpenAPI document'
        )
    for rule in url_map.iter_rules():
        handler = view_functions.get(rule.endpoint)
        for method in _explicit_methods(rule):
            yield registration_for(rule.rule, method, rule.endpoint, handler)


def list_registrations(app) -> list:
    return list(iter_registrations(app))


__all__ = ['RouteRegistration', 'registration_for', 'iter_registrations', 'list_registrations']
