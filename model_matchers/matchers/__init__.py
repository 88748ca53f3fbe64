"""Validation matchers."""

from .allow_value import AllowValueMatcher, allow_value
from .validation_matcher import ValidationMatcher
from .validate_presence_of import ValidatePresenceOfMatcher, validate_presence_of

__all__ = [
    "AllowValueMatcher",
    "allow_value",
    "ValidationMatcher",
    "ValidatePresenceOfMatcher",
    "validate_presence_of",
]
