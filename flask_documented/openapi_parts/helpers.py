"""Helper functions for the OpenAPI publisher.

These are deliberately tiny: path conversion and turning an operation
description into a plain dict that can be written into the document.
"""
import copy
import re
from typing import Any, Dict, Optional

# Werkzeug rule placeholder: <name> or <converter:name> or <converter(args):name>
_RULE_PARAM = re.compile(r"<(?:[^<>:]+:)?([^<>:]+)>")


def openapi_path(rule: str) -> str:
    """Convert a Werkzeug rule string into an OpenAPI path template.

    `/pets/<int:pet_id>` becomes `/pets/{pet_id}`.
    """
    return _RULE_PARAM.sub(lambda m: "{" + m.group(1).strip() + "}", rule)


def operation_dict(operation: Any, schemas=None) -> Dict[str, Any]:
    """Return a detached dict for `operation`.

    Builder objects expose `to_dict(schemas)`; mappings are deep-copied so the
    published document never aliases caller-owned data.
    """
    to_dict = getattr(operation, "to_dict", None)
    if callable(to_dict):
        return to_dict(schemas=schemas)
    return copy.deepcopy(dict(operation))


def merge_component_schemas(document: Dict[str, Any], schemas: Optional[Dict[str, Any]]) -> None:
    if not schemas:
        return
    components = document.setdefault("components", {})
    target = components.setdefault("schemas", {})
    for name, schema in schemas.items():
        target.setdefault(name, copy.deepcopy(schema))


__all__ = ["openapi_path", "operation_dict", "merge_component_schemas"]
