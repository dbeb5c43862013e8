import pytest
from pydantic import ValidationError

from arbiter.config import Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ARBITER_LOG_LEVEL", raising=False)
    settings = Settings(_env_file=None)
    assert settings.log_level == "INFO"
    assert settings.max_perft_depth == 5
    assert settings.cors_allow_origins == ["*"]


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ARBITER_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("ARBITER_MAX_PERFT_DEPTH", "3")
    monkeypatch.setenv("ARBITER_CORS_ALLOW_ORIGINS", '["http://localhost:3000"]')

    settings = Settings(_env_file=None)
    assert settings.log_level == "DEBUG"
    assert settings.max_perft_depth == 3
    assert settings.cors_allow_origins == ["http://localhost:3000"]


def test_perft_depth_is_bounded(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ARBITER_MAX_PERFT_DEPTH", "20")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
