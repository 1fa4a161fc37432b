"""Pair a Flask view function with the OpenAPI operation that describes it.

Usage:

    op = route(summary='Add a new pet').request_body(Pet)
    app.add_url_rule('/pet', view_func=documented(op, add_pet), methods=['POST'])

or, as a decorator:

@app.post('/pet')
@describe(op)
def add_pet():
    ...

The wrapped object is still a plain view function as far as Flask is
concerned; serve_openapi reads `operation` off it later.
"""
import inspect
from functools import update_wrapper
from typing import Any, Callable

from flask_documented.errors import InvalidArgument

_FROZEN = frozenset({'operation', 'handler', '_operation', '_handler'})


class DocumentedHandler:
    def __new__(cls, operation: Any = None, handler: Callable[..., Any] = None):
        if cls is DocumentedHandler and inspect.iscoroutinefunction(handler):
            cls = AsyncDocumentedHandler
        return object.__new__(cls)

    def __init__(self, operation: Any, handler: Callable[..., Any]):
        if operation is None:
            raise InvalidArgument('operation is required')
        if handler is None:
            raise InvalidArgument('handler is required')
        if not callable(handler):
            raise InvalidArgument(f'handler must be callable, got {type(handler).__name__}')
        # copy __name__/__doc__/__module__ so Flask derives the same endpoint name
        update_wrapper(self, handler)
        # set after update_wrapper, which copies the wrapped object's __dict__ wholesale
        object.__setattr__(self, '_operation', operation)
        object.__setattr__(self, '_handler', handler)

    def __setattr__(self, name, value):
        if name in _FROZEN:
            raise AttributeError(f'{name} is read-only on a documented handler')
        object.__setattr__(self, name, value)

    def __delattr__(self, name):
        if name in _FROZEN:
            raise AttributeError(f'{name} is read-only on a documented handler')
        object.__delattr__(self, name)

    def __call__(self, *args, **kwargs):
        return self._handler(*args, **kwargs)

    @property
    def operation(self) -> Any:
        return self._operation

    @property
    def handler(self) -> Callable[..., Any]:
        return self._handler

    def __repr__(self):
        name = getattr(self._handler, '__qualname__', None) or repr(self._handler)
        return f'<DocumentedHandler {name}>'


class AsyncDocumentedHandler(DocumentedHandler):
    """Documented handler around an `async def` view.

    Flask runs a view through asgiref only when `inspect.iscoroutinefunction`
    says so, so the wrapper has to read as a coroutine function too.
    """

    def __init__(self, operation: Any, handler: Callable[..., Any]):
        super().__init__(operation, handler)
        if hasattr(inspect, 'markcoroutinefunction'):
            inspect.markcoroutinefunction(self)
        else:
            # before 3.12 only function-like objects (__code__ etc.) are recognised
            for name in ('__code__', '__defaults__', '__kwdefaults__'):
                object.__setattr__(self, name, getattr(handler, name, None))

    async def __call__(self, *args, **kwargs):
        return await self._handler(*args, **kwargs)


def documented(operation: Any, handler: Callable[..., Any]) -> DocumentedHandler:
    return DocumentedHandler(operation, handler)


def describe(operation: Any):
    if operation is None:
        raise InvalidArgument('operation is required')

    def outer(fn):
        return DocumentedHandler(operation, fn)
    return outer


__all__ = ['DocumentedHandler', 'AsyncDocumentedHandler', 'documented', 'describe']
