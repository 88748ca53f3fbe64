"""
The ``validate_presence_of`` matcher.

Tests that setting an attribute to its blank value makes a record invalid::

    class Robot(Base):
        __tablename__ = "robots"
        id: Mapped[int] = mapped_column(primary_key=True)
        arms: Mapped[str | None]

        @validates("arms")
        def _require_arms(self, key, value):
            if not value:
                raise ValueError("can't be blank")
            return value

    def test_robot_requires_arms():
        should(Robot(), validate_presence_of("arms"))

Qualifiers:

* ``on(context)`` when the validation only applies in a given context
  (pydantic validators read it from ``info.context["on"]``).
* ``with_message(message)`` when the validation uses a custom message; a
  compiled regex is searched instead of compared.

Caveat: when the model declares a secure password (a writable ``password``
property backed by a digest attribute) and the subject already has a
password, the setter refuses the blank value and the matcher raises
``CouldNotSetPasswordError``; use a subject whose password is empty.
"""
from __future__ import annotations

import logging
from typing import Any

from model_matchers.db.blank_value import BlankValue
from model_matchers.db.reflection import ModelReflector
from model_matchers.errors import CouldNotSetAttributeError, CouldNotSetPasswordError
from model_matchers.matchers.allow_value import ExpectedMessage
from model_matchers.matchers.validation_matcher import ValidationMatcher
from model_matchers.utils.blank import is_blank
from model_matchers.utils.settings import default_message, get_setting

logger = logging.getLogger(__name__)


def validate_presence_of(attribute: str) -> "ValidatePresenceOfMatcher":
    return ValidatePresenceOfMatcher(attribute)


class ValidatePresenceOfMatcher(ValidationMatcher):
    def __init__(self, attribute: str):
        super().__init__(attribute)
        self.expected_message: ExpectedMessage = None

    def with_message(self, message: ExpectedMessage) -> "ValidatePresenceOfMatcher":
        if message:
            self.expected_message = message
        return self

    def matches(self, subject: Any) -> bool:
        super().matches(subject)
        if self.expected_message is None:
            self.expected_message = default_message("blank")

        if self._secure_password_being_validated():
            result = self._disallows_and_double_checks_value_of(self.blank_value, self.expected_message)
        else:
            result = self._disallows_original_or_typecast_value(self.blank_value, self.expected_message)
        logger.debug("presence_match: model=%s attribute=%s matched=%s", self.model.__name__, self.attribute, result)
        return result

    @property
    def description(self) -> str:
        return f"require {self.attribute} to be set"

    @property
    def blank_value(self):
        return BlankValue(self.subject, self.attribute, self._reflector).value

    @property
    def _reflector(self) -> ModelReflector:
        return ModelReflector(self.model)

    def _secure_password_being_validated(self) -> bool:
        return (
            self.attribute == get_setting("password_attribute")
            and self._reflector.has_secure_password()
        )

    def _disallows_and_double_checks_value_of(self, value: Any, message: ExpectedMessage) -> bool:
        try:
            return self.disallows_value_of(value, message)
        except CouldNotSetAttributeError as exc:
            raise CouldNotSetPasswordError.create(self.model) from exc

    def _disallows_original_or_typecast_value(self, value: Any, message: ExpectedMessage) -> bool:
        try:
            return self.disallows_value_of(value, message)
        except CouldNotSetAttributeError as exc:
            logger.debug(
                "blank_value_typecast: attribute=%s expected=%r actual=%r",
                self.attribute, exc.expected_value, exc.actual_value,
            )
            self._failure_message = str(exc)
            self._failure_message_when_negated = str(exc)
            return is_blank(exc.actual_value)
