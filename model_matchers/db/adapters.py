"""
Validation adapters.

An adapter bridges a record to the validation pipeline of its model layer:
it assigns values and reports the error messages recorded for an attribute.
SQLAlchemy models validate through ``@validates`` hooks, on assignment and
again over the current value; pydantic models validate on assignment
(``validate_assignment``) and through ``model_validate``.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, Optional, Set, Tuple

from pydantic import BaseModel, ValidationError
from sqlalchemy import inspect as sa_inspect

from model_matchers.errors import UnsupportedModelError
from model_matchers.utils.settings import default_message, get_setting

logger = logging.getLogger(__name__)

_WRAPPED_EXCEPTION_TYPES = {"value_error", "assertion_error"}


class ValidationAdapter:
    """Base adapter; subclasses implement assignment and error collection."""

    name = "base"
    supports_context = False

    def assign(self, record: Any, attribute: str, value: Any) -> List[str]:
        """Assign ``value`` and return messages raised by the assignment itself."""
        setattr(record, attribute, value)
        return []

    def errors_for(self, record: Any, attribute: str, context: Optional[str] = None) -> List[str]:
        """Return the validation messages recorded for ``attribute``."""
        return []


class SQLAlchemyAdapter(ValidationAdapter):
    name = "sqlalchemy"

    def assign(self, record: Any, attribute: str, value: Any) -> List[str]:
        try:
            setattr(record, attribute, value)
        except (ValueError, TypeError, AssertionError) as exc:
            logger.debug("assignment_rejected: model=%s attribute=%s error=%s", type(record).__name__, attribute, exc)
            return [str(exc)]
        return []

    def errors_for(self, record: Any, attribute: str, context: Optional[str] = None) -> List[str]:
        """Re-run the attribute's ``@validates`` hook against its current value.

        Collection validators only fire per appended item, so replacing a
        collection with an empty one is checked here with the whole collection.
        """
        validator = sa_inspect(type(record)).validators.get(attribute)
        if validator is None:
            return []
        method, options = validator
        args = [record, attribute, getattr(record, attribute)]
        if options.get("include_removes"):
            args.append(False)
        try:
            method(*args)
        except (ValueError, TypeError, AssertionError) as exc:
            logger.debug("validation_failed: model=%s attribute=%s error=%s", type(record).__name__, attribute, exc)
            return [str(exc)]
        return []


def _field_keys(model: type, attribute: str) -> Set[str]:
    """Names pydantic may report an attribute's errors under."""
    keys = {attribute}
    field = model.model_fields.get(attribute)
    if field is not None:
        if field.alias:
            keys.add(field.alias)
        if isinstance(field.validation_alias, str):
            keys.add(field.validation_alias)
    return keys


def _input_key(name: str, field) -> str:
    if isinstance(field.validation_alias, str):
        return field.validation_alias
    return field.alias or name


def _pydantic_messages(exc: ValidationError, keys: Set[str]) -> List[str]:
    none_is_blank = get_setting("none_is_blank")
    messages: List[str] = []
    for error in exc.errors():
        loc = error.get("loc") or ()
        if not loc or loc[0] not in keys:
            continue
        error_type = error.get("type", "")
        if none_is_blank and error.get("input") is None and error_type.endswith("_type"):
            messages.append(default_message("blank"))
        elif error_type in _WRAPPED_EXCEPTION_TYPES and "error" in (error.get("ctx") or {}):
            messages.append(str(error["ctx"]["error"]))
        else:
            messages.append(error["msg"])
    return messages


class PydanticAdapter(ValidationAdapter):
    name = "pydantic"
    supports_context = True

    def assign(self, record: Any, attribute: str, value: Any) -> List[str]:
        try:
            setattr(record, attribute, value)
        except ValidationError as exc:
            return _pydantic_messages(exc, _field_keys(type(record), attribute))
        return []

    def errors_for(self, record: Any, attribute: str, context: Optional[str] = None) -> List[str]:
        model = type(record)
        data = {}
        for name, field in model.model_fields.items():
            data[_input_key(name, field)] = getattr(record, name)
        if record.model_extra:
            data.update(record.model_extra)
        try:
            model.model_validate(data, context={"on": context})
        except ValidationError as exc:
            return _pydantic_messages(exc, _field_keys(model, attribute))
        return []


def _is_sqlalchemy_instance(record: Any) -> bool:
    return not isinstance(record, type) and sa_inspect(record, raiseerr=False) is not None


def _is_pydantic_instance(record: Any) -> bool:
    return isinstance(record, BaseModel)


Predicate = Callable[[Any], bool]

_DEFAULT_ADAPTERS: Tuple[Tuple[Predicate, ValidationAdapter], ...] = (
    (_is_sqlalchemy_instance, SQLAlchemyAdapter()),
    (_is_pydantic_instance, PydanticAdapter()),
)
_custom_adapters: List[Tuple[Predicate, ValidationAdapter]] = []


def register_adapter(adapter: ValidationAdapter, predicate: Predicate) -> None:
    """Register an adapter for records matching ``predicate``; checked before the defaults."""
    _custom_adapters.insert(0, (predicate, adapter))


def clear_custom_adapters() -> None:
    """Drop adapters added through register_adapter (useful for tests)."""
    _custom_adapters.clear()


def _registered() -> Iterable[Tuple[Predicate, ValidationAdapter]]:
    yield from _custom_adapters
    yield from _DEFAULT_ADAPTERS


def adapter_for(record: Any) -> ValidationAdapter:
    for predicate, adapter in _registered():
        if predicate(record):
            return adapter
    raise UnsupportedModelError(record)
