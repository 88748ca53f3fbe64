"""
Fluent assertions for model validation behaviour.

Exposes the presence matcher, the blank value helper and the errors the
matchers raise.
"""

from .assertions import should, should_not
from .db.adapters import ValidationAdapter, adapter_for, register_adapter
from .db.blank_value import BlankValue
from .errors import (
    CouldNotSetAttributeError,
    CouldNotSetPasswordError,
    MatcherError,
    UnsupportedModelError,
)
from .matchers import (
    AllowValueMatcher,
    ValidatePresenceOfMatcher,
    allow_value,
    validate_presence_of,
)
from .utils.logging_setup import configure_logging

__all__ = [
    # matchers
    "validate_presence_of",
    "ValidatePresenceOfMatcher",
    "allow_value",
    "AllowValueMatcher",
    "BlankValue",
    # assertions
    "should",
    "should_not",
    # adapters
    "ValidationAdapter",
    "adapter_for",
    "register_adapter",
    # errors
    "MatcherError",
    "CouldNotSetAttributeError",
    "CouldNotSetPasswordError",
    "UnsupportedModelError",
    "configure_logging",
]
