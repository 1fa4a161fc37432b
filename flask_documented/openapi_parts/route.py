"""Chainable builder for OpenAPI Operation objects.

    op = (
        route(summary='Finds Pets by status', tags=['pet'])
        .param('status', 'query', schema=PetStatus, required=True)
        .response(200, 'Successful operation', schema=List[Pet])
        .response(400, 'Invalid status value')
    )

`to_dict()` renders the operation; the publisher passes its SchemaRegistry
so dataclass schemas end up under `components.schemas`.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from flask_documented.errors import InvalidArgument
from .constants import JSON_MIMETYPE, PARAMETER_LOCATIONS
from .schemas import SchemaRegistry, to_jsonable


@dataclass
class Parameter:
    name: str
    location: str = 'query'
    schema: Any = str
    required: Optional[bool] = None
    description: Optional[str] = None
    allow_empty_value: Optional[bool] = None
    example: Any = None

    def __post_init__(self):
        if not self.name:
            raise InvalidArgument('parameter name is required')
        if self.location not in PARAMETER_LOCATIONS:
            raise InvalidArgument(f'parameter location must be one of {", ".join(PARAMETER_LOCATIONS)}, got {self.location!r}')
        if self.location == 'path':
            self.required = True
        if self.schema is None:
            self.schema = str

    def to_dict(self, schemas: SchemaRegistry) -> Dict[str, Any]:
        out: Dict[str, Any] = {'name': self.name, 'in': self.location}
        if self.description is not None:
            out['description'] = self.description
        if self.required is not None:
            out['required'] = self.required
        if self.allow_empty_value is not None:
            out['allowEmptyValue'] = self.allow_empty_value
        out['schema'] = schemas.schema_for(self.schema)
        if self.example is not None:
            out['example'] = to_jsonable(self.example)
        return out


@dataclass
class _ContentEntry:
    schema: Any = None
    example: Any = None

    def to_dict(self, schemas: SchemaRegistry) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.schema is not None:
            out['schema'] = schemas.schema_for(self.schema, self.example)
        elif self.example is not None:
            out['example'] = to_jsonable(self.example)
        return out


@dataclass
class _Body:
    description: Optional[str] = None
    required: Optional[bool] = None
    content: Dict[str, _ContentEntry] = field(default_factory=dict)

    def add(self, mime: str, schema: Any, example: Any):
        if schema is not None or example is not None:
            self.content[mime] = _ContentEntry(schema, example)

    def render_content(self, schemas: SchemaRegistry) -> Dict[str, Any]:
        return {mime: entry.to_dict(schemas) for mime, entry in self.content.items()}


class Route:
    def __init__(self, summary: Optional[str] = None, description: Optional[str] = None,
                 operation_id: Optional[str] = None, tags: Optional[List[str]] = None,
                 deprecated: Optional[bool] = None):
        self._summary = summary
        self._description = description
        self._operation_id = operation_id
        self._tags: List[str] = list(tags or [])
        self._deprecated = deprecated
        self._parameters: List[Parameter] = []
        self._request: Optional[_Body] = None
        self._responses: Dict[str, _Body] = {}
        self._extensions: Dict[str, Any] = {}

    def summary(self, text: str) -> 'Route':
        self._summary = text
        return self

    def description(self, text: str) -> 'Route':
        self._description = text
        return self

    def operation_id(self, value: str) -> 'Route':
        self._operation_id = value
        return self

    def tag(self, *names: str) -> 'Route':
        for name in names:
            if name not in self._tags:
                self._tags.append(name)
        return self

    def deprecated(self, flag: bool = True) -> 'Route':
        self._deprecated = flag
        return self

    def param(self, name, location: str = 'query', schema: Any = str, required: Optional[bool] = None,
              description: Optional[str] = None, allow_empty_value: Optional[bool] = None,
              example: Any = None) -> 'Route':
        if isinstance(name, Parameter):
            parameter = name
        else:
            parameter = Parameter(name, location, schema, required, description, allow_empty_value, example)
        # OpenAPI identifies a parameter by (name, in)
        self._parameters = [p for p in self._parameters
                            if (p.name, p.location) != (parameter.name, parameter.location)]
        self._parameters.append(parameter)
        return self

    def request_body(self, schema: Any = None, description: Optional[str] = None, mime: str = JSON_MIMETYPE,
                     example: Any = None, required: Optional[bool] = None) -> 'Route':
        if self._request is None:
            self._request = _Body()
        if description is not None:
            self._request.description = description
        if required is not None:
            self._request.required = required
        self._request.add(mime, schema, example)
        return self

    def response(self, status, description: str, schema: Any = None, mime: str = JSON_MIMETYPE,
                 example: Any = None) -> 'Route':
        if not description:
            raise InvalidArgument(f'response {status} needs a description')
        key = str(status)
        body = self._responses.setdefault(key, _Body())
        body.description = description
        body.add(mime, schema, example)
        return self

    def extension(self, name: str, value: Any) -> 'Route':
        if not name.startswith('x-'):
            raise InvalidArgument(f'extension names must start with x-, got {name!r}')
        self._extensions[name] = value
        return self

    def to_dict(self, schemas: Optional[SchemaRegistry] = None) -> Dict[str, Any]:
        if schemas is None:
            schemas = SchemaRegistry(inline=True)
        out: Dict[str, Any] = {}
        if self._tags:
            out['tags'] = list(self._tags)
        if self._summary is not None:
            out['summary'] = self._summary
        if self._description is not None:
            out['description'] = self._description
        if self._operation_id is not None:
            out['operationId'] = self._operation_id
        if self._parameters:
            out['parameters'] = [p.to_dict(schemas) for p in self._parameters]
        if self._request is not None:
            request: Dict[str, Any] = {}
            if self._request.description is not None:
                request['description'] = self._request.description
            request['content'] = self._request.render_content(schemas)
            if self._request.required is not None:
                request['required'] = self._request.required
            out['requestBody'] = request
        responses: Dict[str, Any] = {}
        for status, body in self._responses.items():
            rendered: Dict[str, Any] = {'description': body.description}
            if body.content:
                rendered['content'] = body.render_content(schemas)
            responses[status] = rendered
        out['responses'] = responses
        if self._deprecated is not None:
            out['deprecated'] = self._deprecated
        out.update(to_jsonable(self._extensions))
        return out

    def __repr__(self):
        return f'<Route summary={self._summary!r} params={len(self._parameters)} responses={list(self._responses)}>'


def route(summary: Optional[str] = None, description: Optional[str] = None, operation_id: Optional[str] = None,
          tags: Optional[List[str]] = None, deprecated: Optional[bool] = None) -> Route:
    return Route(summary=summary, description=description, operation_id=operation_id,
                 tags=tags, deprecated=deprecated)


__all__ = ['Route', 'Parameter', 'route']
