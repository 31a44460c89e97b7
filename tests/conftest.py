import pytest

ENV_VARS = (
    "TOKEN",
    "RESPONSE_FORMAT",
    "MAX_UPLOAD_SIZE",
    "LOG_LEVEL",
    "MAIL_HOST",
    "MAIL_PORT",
    "MAIL_MAIL",
    "MAIL_PASS",
    "MAIL_FROM",
    "MAIL_TO",
    "MAIL_SSL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test from an environment without service variables."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def smtp_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MAIL_HOST", "smtp.example.com")
    monkeypatch.setenv("MAIL_PORT", "587")
    monkeypatch.setenv("MAIL_MAIL", "backup@example.com")
    monkeypatch.setenv("MAIL_PASS", "secret")
    monkeypatch.setenv("MAIL_FROM", "backup@example.com")
    monkeypatch.setenv("MAIL_TO", "archive@example.com")
