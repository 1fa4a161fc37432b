"""Derive OpenAPI schemas from Python types.

Object schemas for dataclasses are collected once per name so operations can
point at them with `$ref` and the publisher can drop them into
`components.schemas`:

    @schema(description='A pet for sale')
    @dataclass
    class Pet:
        name: str = prop(required=True)
        status: PetStatus = PetStatus.AVAILABLE

    registry = SchemaRegistry()
    registry.schema_for(Pet)   # {'$ref': '#/components/schemas/Pet'}
    registry.schemas['Pet']    # {'type': 'object', 'properties': {...}, ...}

With `inline=True` every dataclass is expanded in place instead.
"""
from __future__ import annotations
import collections.abc
import copy
import dataclasses
import datetime
import enum
import types
import typing
from typing import Any, Dict, List, Mapping, Optional

from .constants import COMPONENT_SCHEMA_REF

_META_KEY = 'openapi'

_PRIMITIVES: Dict[Any, Dict[str, Any]] = {
    str: {'type': 'string'},
    int: {'type': 'integer', 'format': 'int64'},
    float: {'type': 'number'},
    bool: {'type': 'boolean'},
    bytes: {'type': 'string', 'format': 'byte'},
    datetime.datetime: {'type': 'string', 'format': 'date-time'},
    datetime.date: {'type': 'string', 'format': 'date'},
}

_ARRAY_ORIGINS = (list, set, frozenset, tuple, collections.abc.Sequence, collections.abc.Set,
                  collections.abc.Iterable, collections.abc.Collection)
_MAPPING_ORIGINS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)
_UNION_TYPES = tuple(t for t in (typing.Union, getattr(types, 'UnionType', None)) if t is not None)


def schema(description: Optional[str] = None, name: Optional[str] = None):
    """Class decorator attaching a schema description and optional component name."""
    def outer(cls):
        cls.__openapi__ = {'description': description, 'name': name}
        return cls
    return outer


def prop(*, required: bool = False, description: Optional[str] = None, **kwargs):
    """dataclasses.field() carrying OpenAPI property metadata."""
    metadata = dict(kwargs.pop('metadata', None) or {})
    metadata[_META_KEY] = {'required': required, 'description': description}
    return dataclasses.field(metadata=metadata, **kwargs)


def to_jsonable(value: Any) -> Any:
    """Convert an example value (dataclasses, enums, dates) to JSON-safe data."""
    if isinstance(value, enum.Enum):
        return to_jsonable(value.value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Mapping):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value.isoformat()
    return value


def _class_meta(cls) -> Dict[str, Any]:
    return getattr(cls, '__openapi__', None) or {}


def _enum_schema(cls) -> Dict[str, Any]:
    values = [to_jsonable(m.value) for m in cls]
    if values and all(isinstance(v, bool) for v in values):
        out: Dict[str, Any] = {'type': 'boolean'}
    elif values and all(isinstance(v, int) and not isinstance(v, bool) for v in values):
        out = {'type': 'integer'}
    elif values and all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in values):
        out = {'type': 'number'}
    else:
        out = {'type': 'string'}
    description = _class_meta(cls).get('description')
    if description:
        out['description'] = description
    out['enum'] = values
    return out


class SchemaRegistry:
    def __init__(self, inline: bool = False):
        self.inline = inline
        self.schemas: Dict[str, Dict[str, Any]] = {}
        self._resolving: List[type] = []

    def __len__(self):
        return len(self.schemas)

    def __contains__(self, name):
        return name in self.schemas

    def schema_for(self, tp: Any, example: Any = None) -> Dict[str, Any]:
        if isinstance(tp, Mapping):
            out = copy.deepcopy(dict(tp))
            if example is not None and 'example' not in out:
                out['example'] = to_jsonable(example)
            return out
        if dataclasses.is_dataclass(tp) and isinstance(tp, type):
            return self._object(tp, example)
        out = self._resolve(tp)
        if example is not None:
            out['example'] = to_jsonable(example)
        return out

    def _resolve(self, tp: Any) -> Dict[str, Any]:
        if tp is None or tp is type(None):
            return {'nullable': True}
        if tp is Any:
            return {}
        if tp in _PRIMITIVES:
            return dict(_PRIMITIVES[tp])
        if isinstance(tp, type) and issubclass(tp, enum.Enum):
            return _enum_schema(tp)
        if dataclasses.is_dataclass(tp) and isinstance(tp, type):
            return self._object(tp)

        origin = typing.get_origin(tp)
        args = typing.get_args(tp)
        if origin in _UNION_TYPES:
            members = [a for a in args if a is not type(None)]
            nullable = len(members) != len(args)
            if len(members) == 1:
                out = self.schema_for(members[0])
            else:
                out = {'oneOf': [self.schema_for(a) for a in members]}
            if nullable:
                if '$ref' in out:
                    # siblings of $ref are ignored in 3.0
                    out = {'allOf': [out]}
                out['nullable'] = True
            return out
        if origin in _ARRAY_ORIGINS or tp in (list, set, frozenset, tuple):
            item = args[0] if args and args[0] is not Ellipsis else Any
            out = {'type': 'array', 'items': self.schema_for(item)}
            if origin in (set, frozenset, collections.abc.Set) or tp in (set, frozenset):
                out['uniqueItems'] = True
            return out
        if origin in _MAPPING_ORIGINS or tp is dict:
            out = {'type': 'object'}
            if len(args) == 2:
                out['additionalProperties'] = self.schema_for(args[1])
            return out
        return {'type': 'object'}

    def _object(self, cls: type, example: Any = None) -> Dict[str, Any]:
        meta = _class_meta(cls)
        name = meta.get('name') or cls.__name__
        if self.inline:
            if cls in self._resolving:
                return {'type': 'object'}
            out = self._object_body(cls)
            if example is not None:
                out['example'] = to_jsonable(example)
            return out
        if name not in self.schemas:
            # placeholder first so self-referencing fields resolve to a $ref
            self.schemas[name] = {'type': 'object'}
            self.schemas[name] = self._object_body(cls)
        if example is not None and 'example' not in self.schemas[name]:
            self.schemas[name]['example'] = to_jsonable(example)
        return {'$ref': COMPONENT_SCHEMA_REF.format(name=name)}

    def _object_body(self, cls: type) -> Dict[str, Any]:
        self._resolving.append(cls)
        try:
            hints = typing.get_type_hints(cls)
            out: Dict[str, Any] = {'type': 'object'}
            description = _class_meta(cls).get('description')
            if description:
                out['description'] = description
            properties: Dict[str, Any] = {}
            required: List[str] = []
            for f in dataclasses.fields(cls):
                field_meta = f.metadata.get(_META_KEY, {})
                prop_schema = self.schema_for(hints.get(f.name, f.type))
                if field_meta.get('description'):
                    if '$ref' in prop_schema:
                        prop_schema = {'allOf': [prop_schema]}
                    prop_schema['description'] = field_meta['description']
                properties[f.name] = prop_schema
                if field_meta.get('required'):
                    required.append(f.name)
            out['properties'] = properties
            if required:
                out['required'] = required
            return out
        finally:
            self._resolving.pop()


__all__ = ['SchemaRegistry', 'schema', 'prop', 'to_jsonable']
