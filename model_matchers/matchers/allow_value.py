"""Matcher asserting that an attribute accepts a given value."""
from __future__ import annotations

import logging
import re
from typing import Any, List, Optional, Pattern, Union

from model_matchers.db.adapters import adapter_for
from model_matchers.errors import CouldNotSetAttributeError

logger = logging.getLogger(__name__)

ExpectedMessage = Union[str, Pattern[str], None]


def message_matches(expected: ExpectedMessage, actual: str) -> bool:
    if isinstance(expected, re.Pattern):
        return expected.search(actual) is not None
    return expected == actual


def describe_message(expected: ExpectedMessage) -> str:
    if isinstance(expected, re.Pattern):
        return f"/{expected.pattern}/"
    return repr(expected)


def allow_value(value: Any) -> "AllowValueMatcher":
    return AllowValueMatcher(value)


class AllowValueMatcher:
    """Assign a value to an attribute and inspect the resulting validation errors.

    The subject keeps the assigned value after matching.
    """

    def __init__(self, value: Any):
        self.value = value
        self.attribute: Optional[str] = None
        self.expected_message: ExpectedMessage = None
        self.context: Optional[str] = None
        self.errors: List[str] = []
        self.subject: Any = None

    def for_(self, attribute: str) -> "AllowValueMatcher":
        self.attribute = attribute
        return self

    def with_message(self, message: ExpectedMessage) -> "AllowValueMatcher":
        self.expected_message = message
        return self

    def on(self, context: Optional[str]) -> "AllowValueMatcher":
        self.context = context
        return self

    def matches(self, subject: Any) -> bool:
        if self.attribute is None:
            raise ValueError("allow_value requires an attribute; call for_(attribute) first")
        self.subject = subject
        adapter = adapter_for(subject)
        if self.context is not None and not adapter.supports_context:
            logger.warning(
                "validation_context_ignored: adapter=%s context=%s", adapter.name, self.context
            )

        logger.debug("assigning_value: model=%s attribute=%s value=%r", type(subject).__name__, self.attribute, self.value)
        self.errors = adapter.assign(subject, self.attribute, self.value)
        if not self.errors:
            actual = getattr(subject, self.attribute)
            if actual != self.value:
                raise CouldNotSetAttributeError(type(subject), self.attribute, self.value, actual)
            self.errors = adapter.errors_for(subject, self.attribute, self.context)

        allowed = not self._errors_match()
        logger.debug("allow_value_result: attribute=%s errors=%s allowed=%s", self.attribute, self.errors, allowed)
        return allowed

    def does_not_match(self, subject: Any) -> bool:
        return not self.matches(subject)

    def _errors_match(self) -> bool:
        if self.expected_message is None:
            return bool(self.errors)
        return any(message_matches(self.expected_message, error) for error in self.errors)

    def _errors_description(self) -> str:
        if not self.errors:
            return "no errors"
        return "errors: " + ", ".join(repr(error) for error in self.errors)

    def _expectation(self) -> str:
        if self.expected_message is None:
            return "errors"
        return f"errors to include {describe_message(self.expected_message)}"

    @property
    def failure_message(self) -> str:
        return (
            f"Did not expect {self._expectation()} when {self.attribute} is set to {self.value!r}, "
            f"got {self._errors_description()}"
        )

    @property
    def failure_message_when_negated(self) -> str:
        return (
            f"Expected {self._expectation()} when {self.attribute} is set to {self.value!r}, "
            f"got {self._errors_description()}"
        )

    @property
    def description(self) -> str:
        return f"allow {self.attribute} to be set to {self.value!r}"
