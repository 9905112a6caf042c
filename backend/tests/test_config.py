import inspect

import pytest
from pydantic import ValidationError

from bible_tracker.api.routes.auth import login, register
from bible_tracker.core.config import Settings


def test_secret_key_is_required(monkeypatch):
    monkeypatch.delenv("SECRET_KEY", raising=False)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


@pytest.mark.parametrize("secret", ["", "   "])
def test_blank_secret_key_is_rejected(secret):
    with pytest.raises(ValidationError):
        Settings(SECRET_KEY=secret, _env_file=None)


def test_secret_key_from_environment(monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "from-env")
    monkeypatch.setenv("PRODUCTION", "true")

    settings = Settings(_env_file=None)

    assert settings.SECRET_KEY == "from-env"
    assert settings.PRODUCTION is True
    assert settings.SESSION_MAX_AGE_SECONDS == 86400
    assert settings.REMEMBER_ME_MAX_AGE_SECONDS == 2592000


def test_cors_origins_parsed_from_comma_separated_string():
    settings = Settings(SECRET_KEY="x", CORS_ORIGINS="http://a.test, http://b.test,", _env_file=None)

    assert settings.get_cors_origins() == ["http://a.test", "http://b.test"]


def test_password_handlers_run_in_threadpool():
    # bcrypt must not run on the event loop
    assert not inspect.iscoroutinefunction(register)
    assert not inspect.iscoroutinefunction(login)
