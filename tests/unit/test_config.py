import logging

import pytest
from pydantic import ValidationError

from staffdesk import logging_config
from staffdesk.config import Settings


def test_settings_defaults() -> None:
    settings = Settings(app_env="test")
    assert settings.default_actor == "System"
    assert settings.vacancy_min_note_length == 10
    assert settings.company_page_size == 20


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VACANCY_PAGE_SIZE", "5")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test ,")
    settings = Settings(app_env="test")
    assert settings.vacancy_page_size == 5
    assert settings.cors_origin_list == ["http://a.test", "http://b.test"]


def test_settings_reject_bad_values() -> None:
    with pytest.raises(ValidationError):
        Settings(app_env="qa")
    with pytest.raises(ValidationError):
        Settings(app_env="test", vacancy_min_note_length=0)


def test_configure_logging_runs_once_and_quiets_access_logs(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(logging_config, "_LOG_CONFIGURED", False)
    logging_config.configure_logging("debug")
    assert logging_config._LOG_CONFIGURED is True
    assert logging.getLogger("uvicorn.access").level == logging.WARNING
