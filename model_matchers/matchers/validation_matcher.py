"""Shared behaviour for validation matchers."""
from __future__ import annotations

from typing import Any, Optional

from model_matchers.matchers.allow_value import AllowValueMatcher, ExpectedMessage


class ValidationMatcher:
    """Base class holding the attribute, context and last failure messages."""

    def __init__(self, attribute: str):
        self.attribute = attribute
        self.context: Optional[str] = None
        self.subject: Any = None
        self._failure_message: Optional[str] = None
        self._failure_message_when_negated: Optional[str] = None

    def on(self, context: str) -> "ValidationMatcher":
        self.context = context
        return self

    def matches(self, subject: Any) -> bool:
        self.subject = subject
        self._failure_message = None
        self._failure_message_when_negated = None
        return False

    def does_not_match(self, subject: Any) -> bool:
        return not self.matches(subject)

    @property
    def model(self) -> type:
        return type(self.subject)

    @property
    def failure_message(self) -> Optional[str]:
        return self._failure_message

    @property
    def failure_message_when_negated(self) -> Optional[str]:
        return self._failure_message_when_negated

    def _allow_value_matcher(self, value: Any, message: ExpectedMessage) -> AllowValueMatcher:
        return AllowValueMatcher(value).for_(self.attribute).with_message(message).on(self.context)

    def allows_value_of(self, value: Any, message: ExpectedMessage = None) -> bool:
        matcher = self._allow_value_matcher(value, message)
        allowed = matcher.matches(self.subject)
        self._failure_message = matcher.failure_message
        self._failure_message_when_negated = matcher.failure_message_when_negated
        return allowed

    def disallows_value_of(self, value: Any, message: ExpectedMessage = None) -> bool:
        matcher = self._allow_value_matcher(value, message)
        disallowed = not matcher.matches(self.subject)
        self._failure_message = matcher.failure_message_when_negated
        self._failure_message_when_negated = matcher.failure_message
        return disallowed
