"""
Model metadata introspection.

Wraps the reflection APIs of the supported model layers behind one object:
SQLAlchemy mappers (relationships, column types, ``Mapped[...]``
annotations) and pydantic ``model_fields``.
"""
from __future__ import annotations

import collections.abc
import inspect as pyinspect
import sys
import types
import typing
from dataclasses import dataclass
from typing import Any, Optional, get_args, get_origin

from pydantic import BaseModel
from sqlalchemy import ARRAY, JSON, PickleType
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import Mapped
from sqlalchemy.orm.interfaces import MANYTOMANY, MANYTOONE, ONETOMANY
from sqlalchemy.types import TypeDecorator

from model_matchers.utils.settings import get_setting

COLLECTION_MACROS = frozenset({"has_many", "has_and_belongs_to_many"})

_SERIALIZING_TYPES = (ARRAY, JSON, PickleType)


@dataclass(frozen=True)
class Association:
    name: str
    macro: str
    collection_class: Optional[Any] = None

    @property
    def is_collection(self) -> bool:
        return self.macro in COLLECTION_MACROS

    def empty_collection(self):
        """Return a fresh empty container of the configured collection class."""
        if self.collection_class is None:
            return []
        return self.collection_class()


def _macro_for(relationship) -> str:
    direction = relationship.direction
    if direction is MANYTOMANY:
        return "has_and_belongs_to_many"
    if direction is ONETOMANY:
        return "has_many" if relationship.uselist else "has_one"
    if direction is MANYTOONE:
        return "belongs_to"
    return "has_many" if relationship.uselist else "has_one"


def _unwrap_optional(hint: Any) -> Any:
    origin = get_origin(hint)
    if origin is typing.Union or origin is types.UnionType:
        args = [arg for arg in get_args(hint) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return hint


def _container_class(hint: Any) -> Optional[type]:
    """Map a type hint to ``list``, ``dict`` or ``set`` when it names a container."""
    hint = _unwrap_optional(hint)
    origin = get_origin(hint) or hint
    if not isinstance(origin, type) or issubclass(origin, (str, bytes, bytearray)):
        return None
    if issubclass(origin, collections.abc.Mapping):
        return dict
    if issubclass(origin, collections.abc.Set):
        return set
    if issubclass(origin, collections.abc.Sequence):
        return list
    return None


def _resolve_annotation(model: type, attribute: str) -> Any:
    """Return the evaluated annotation for ``attribute`` from the class hierarchy."""
    for klass in model.__mro__:
        try:
            raw = pyinspect.get_annotations(klass).get(attribute)
        except NameError:
            continue
        if raw is None:
            continue
        if not isinstance(raw, str):
            return raw

        def _holder():  # pragma: no cover - annotation carrier only
            pass

        _holder.__annotations__ = {attribute: raw}
        module = sys.modules.get(klass.__module__)
        globalns = dict(vars(module)) if module is not None else {}
        try:
            return typing.get_type_hints(_holder, globalns=globalns, localns=dict(vars(klass)))[attribute]
        except (NameError, TypeError, SyntaxError):
            return None
    return None


class ModelReflector:
    """Read association, serialization and password metadata from a model class."""

    def __init__(self, model: type):
        self.model = model
        self._mapper = sa_inspect(model, raiseerr=False)

    @property
    def kind(self) -> Optional[str]:
        if self._mapper is not None:
            return "sqlalchemy"
        if isinstance(self.model, type) and issubclass(self.model, BaseModel):
            return "pydantic"
        return None

    def reflect_on_association(self, attribute: str) -> Optional[Association]:
        if self._mapper is None:
            return None
        relationships = self._mapper.relationships
        if attribute not in relationships:
            return None
        relationship = relationships[attribute]
        return Association(
            name=attribute,
            macro=_macro_for(relationship),
            collection_class=relationship.collection_class,
        )

    def serialization_class(self, attribute: str) -> Optional[type]:
        kind = self.kind
        if kind == "sqlalchemy":
            return self._column_serialization_class(attribute)
        if kind == "pydantic":
            field = self.model.model_fields.get(attribute)
            if field is None:
                return None
            return _container_class(field.annotation)
        return None

    def _column_serialization_class(self, attribute: str) -> Optional[type]:
        column = self._mapper.columns.get(attribute)
        if column is None:
            return None
        column_type = column.type
        if isinstance(column_type, TypeDecorator) and not isinstance(column_type, _SERIALIZING_TYPES):
            column_type = column_type.impl
        if not isinstance(column_type, _SERIALIZING_TYPES):
            return None
        hint = _resolve_annotation(self.model, attribute)
        if get_origin(hint) is Mapped:
            hint = get_args(hint)[0]
        container = _container_class(hint) if hint is not None else None
        if container is None and isinstance(column_type, ARRAY):
            return list
        return container

    def has_attribute(self, name: str) -> bool:
        if self.kind == "pydantic" and name in self.model.model_fields:
            return True
        return hasattr(self.model, name)

    def has_secure_password(self) -> bool:
        """Return True when the model exposes a writable password plus a digest attribute."""
        descriptor = pyinspect.getattr_static(self.model, get_setting("password_attribute"), None)
        if descriptor is None or getattr(descriptor, "fset", None) is None:
            return False
        return any(self.has_attribute(name) for name in get_setting("password_digest_attributes"))
