"""Exceptions raised by the matchers."""
from __future__ import annotations

import re
from typing import Any

from model_matchers.utils.settings import get_setting


def humanize_model_name(model: type) -> str:
    """Return ``"power user"`` for a class named ``PowerUser``."""
    words = re.sub(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])", " ", model.__name__)
    return words.replace("_", " ").lower()


class MatcherError(Exception):
    """Base exception for matcher errors."""


class UnsupportedModelError(MatcherError, TypeError):
    """Raised when no validation adapter handles a record."""

    def __init__(self, record: Any):
        self.record = record
        super().__init__(
            f"{type(record).__name__} is neither a SQLAlchemy mapped instance nor a pydantic model; "
            "register a ValidationAdapter for it with register_adapter()."
        )


class CouldNotSetAttributeError(MatcherError):
    """Raised when an attribute reads back differently from what was assigned."""

    def __init__(self, model: type, attribute: str, expected_value: Any, actual_value: Any):
        self.model = model
        self.attribute = attribute
        self.expected_value = expected_value
        self.actual_value = actual_value
        super().__init__(
            f"Expected {model.__name__} to be able to set {attribute} to {expected_value!r}, "
            f"but got {actual_value!r} instead."
        )


class CouldNotSetPasswordError(MatcherError):
    """Raised when a secure password setter refuses the blank value."""

    def __init__(self, model: type, message: str):
        self.model = model
        super().__init__(message)

    @classmethod
    def create(cls, model: type) -> "CouldNotSetPasswordError":
        attribute = get_setting("password_attribute")
        name = humanize_model_name(model)
        message = (
            f"The validation failed because your {model.__name__} model declares a secure "
            f"password, and `validate_presence_of` was called on a {name} which has "
            f"`{attribute}` already set to a value. Please use a {name} with an empty "
            f"`{attribute}` instead."
        )
        return cls(model, message)
