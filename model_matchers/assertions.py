"""pytest-facing assertion helpers for matchers."""
from typing import Any


def should(subject: Any, matcher) -> None:
    """Fail with the matcher's failure message unless it matches ``subject``."""
    if not matcher.matches(subject):
        raise AssertionError(matcher.failure_message or f"Expected {type(subject).__name__} to {matcher.description}")


def should_not(subject: Any, matcher) -> None:
    """Fail with the matcher's negated failure message when it matches ``subject``."""
    if not matcher.does_not_match(subject):
        raise AssertionError(
            matcher.failure_message_when_negated
            or f"Did not expect {type(subject).__name__} to {matcher.description}"
        )
