import pytest

from model_matchers.errors import (
    CouldNotSetPasswordError,
    MatcherError,
    humanize_model_name,
)
from model_matchers.utils.settings import refresh_settings_cache


class PowerUser:
    pass


@pytest.mark.parametrize(
    "name,expected",
    [("User", "user"), ("PowerUser", "power user"), ("HTTPClient", "http client"), ("admin_user", "admin user")],
)
def test_humanize_model_name(name, expected):
    assert humanize_model_name(type(name, (), {})) == expected


def test_could_not_set_password_error_uses_humanized_name():
    error = CouldNotSetPasswordError.create(PowerUser)

    assert isinstance(error, MatcherError)
    assert error.model is PowerUser
    assert "your PowerUser model declares a secure password" in str(error)
    assert "Please use a power user with an empty `password` instead." in str(error)


def test_could_not_set_password_error_uses_configured_attribute(monkeypatch):
    monkeypatch.setenv("MODEL_MATCHERS_PASSWORD_ATTRIBUTE", "passphrase")
    refresh_settings_cache()

    assert "already set to a value" in str(CouldNotSetPasswordError.create(PowerUser))
    assert "`passphrase`" in str(CouldNotSetPasswordError.create(PowerUser))
