"""Lenses: pure get/replace access to one field of an object.

The analysis engine only depends on the :class:`Lens` protocol. The two
implementations here cover the common cases (attributes of dataclasses,
pydantic models and named tuples, and keys of mappings); anything else can
be addressed by a caller-supplied object with ``get`` and ``with_replaced``.
"""

import copy
import dataclasses
from typing import Any, Protocol, Tuple, runtime_checkable

from pydantic import BaseModel, ValidationError


@runtime_checkable
class Lens(Protocol):
    """Read and functionally update a single field of an object."""

    def get(self, obj: Any) -> Any:
        ...

    def with_replaced(self, obj: Any, value: Any) -> Any:
        ...


def _replace_attribute(obj: Any, name: str, value: Any) -> Any:
    """Rebuild obj with one attribute changed, running its validation."""
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.replace(obj, **{name: value})
    if isinstance(obj, BaseModel):
        # Rebuild through the constructor so validators see the new value
        fields = dict(obj)
        fields[name] = value
        try:
            return type(obj)(**fields)
        except ValidationError as e:
            # Surface the exception a validator raised, not pydantic's wrapper
            errors = e.errors()
            original = errors[0].get('ctx', {}).get('error') if len(errors) == 1 else None
            if isinstance(original, BaseException):
                raise original from e
            raise
    if isinstance(obj, tuple) and hasattr(obj, '_replace'):
        return obj._replace(**{name: value})
    new_obj = copy.copy(obj)
    setattr(new_obj, name, value)
    return new_obj


class AttributeLens:
    """Lens on a (possibly nested) attribute given as a dotted path."""

    def __init__(self, path: str):
        if not path:
            raise ValueError("attribute path must be non-empty")
        self.path = path
        self._parts: Tuple[str, ...] = tuple(path.split('.'))

    def get(self, obj: Any) -> Any:
        for part in self._parts:
            obj = getattr(obj, part)
        return obj

    def with_replaced(self, obj: Any, value: Any) -> Any:
        return self._replace(obj, self._parts, value)

    def _replace(self, obj: Any, parts: Tuple[str, ...], value: Any) -> Any:
        head, rest = parts[0], parts[1:]
        if rest:
            value = self._replace(getattr(obj, head), rest, value)
        return _replace_attribute(obj, head, value)

    def __repr__(self) -> str:
        return f"AttributeLens({self.path!r})"


class KeyLens:
    """Lens on a key of a mapping; the update returns a shallow dict copy."""

    def __init__(self, key: Any):
        self.key = key

    def get(self, obj: Any) -> Any:
        return obj[self.key]

    def with_replaced(self, obj: Any, value: Any) -> Any:
        new_obj = dict(obj)
        new_obj[self.key] = value
        return new_obj

    def __repr__(self) -> str:
        return f"KeyLens({self.key!r})"
