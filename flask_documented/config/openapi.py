from __future__ import annotations
import os
from typing import Any, Dict, Optional

from flask_documented.errors import InvalidArgument

DEFAULT_JSON_PATH = '/openapi.json'
DEFAULT_YAML_PATH = '/openapi.yaml'
DEFAULT_DOCS_PATH = '/docs'
DEFAULT_ON_DUPLICATE = 'overwrite'
DUPLICATE_POLICIES = ('overwrite', 'error')

_DEFAULTS = {
    'OPENAPI_JSON_PATH': DEFAULT_JSON_PATH,
    'OPENAPI_YAML_PATH': DEFAULT_YAML_PATH,
    'OPENAPI_DOCS_PATH': DEFAULT_DOCS_PATH,
    'OPENAPI_ON_DUPLICATE': DEFAULT_ON_DUPLICATE,
}


def _lookup(app_config, key: str) -> str:
    if key in app_config:
        return app_config[key]
    return os.getenv(key, _DEFAULTS[key])


def normalize_policy(policy: Optional[str]) -> str:
    value = (policy or DEFAULT_ON_DUPLICATE).strip().lower()
    if value not in DUPLICATE_POLICIES:
        raise InvalidArgument(f'on_duplicate must be one of {", ".join(DUPLICATE_POLICIES)}, got {policy!r}')
    return value


def resolve_settings(app_config, **overrides: Any) -> Dict[str, str]:
    """Merge publisher settings: explicit overrides, then app.config, then env, then defaults.

    An empty string for the YAML or docs path disables that endpoint.
    """
    settings = {
        'json_path': _lookup(app_config, 'OPENAPI_JSON_PATH'),
        'yaml_path': _lookup(app_config, 'OPENAPI_YAML_PATH'),
        'docs_path': _lookup(app_config, 'OPENAPI_DOCS_PATH'),
        'on_duplicate': _lookup(app_config, 'OPENAPI_ON_DUPLICATE'),
    }
    for name, value in overrides.items():
        if value is not None:
            settings[name] = value
    if not settings['json_path']:
        raise InvalidArgument('OPENAPI_JSON_PATH must not be empty')
    settings['on_duplicate'] = normalize_policy(settings['on_duplicate'])
    return settings


__all__ = [
    'DEFAULT_JSON_PATH',
    'DEFAULT_YAML_PATH',
    'DEFAULT_DOCS_PATH',
    'DEFAULT_ON_DUPLICATE',
    'DUPLICATE_POLICIES',
    'normalize_policy',
    'resolve_settings',
]
