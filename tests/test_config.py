import pytest

from attendance_reminder.config import load_settings, parse_reminder_time

ENV_VARS = [
    "EMAILJS_PUBLIC_KEY",
    "EMAILJS_PRIVATE_KEY",
    "EMAILJS_SERVICE_ID",
    "EMAILJS_TEMPLATE_ID",
    "EMAILJS_TIMEOUT",
    "PORT",
    "PUBLIC_BASE_URL",
    "REPL_SLUG",
    "REPL_OWNER",
    "REMINDER_TIME",
    "REMINDER_TIMEZONE",
    "REMINDER_WEEKDAYS",
    "EMPLOYEE_ROSTER_PATH",
    "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    # setenv first so values loaded from .env files are removed on teardown
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return str(tmp_path / ".env")


def test_defaults(clean_env):
    settings = load_settings(clean_env)

    assert settings.port == 3000
    assert settings.public_base_url == "http://localhost:3000"
    assert (settings.reminder_hour, settings.reminder_minute) == (20, 0)
    assert settings.reminder_timezone == "America/New_York"
    assert settings.reminder_weekdays == frozenset(range(7))
    assert settings.emailjs_configured is False


def test_env_file_values(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "EMAILJS_PUBLIC_KEY=pk_live\nPORT=8080\nREMINDER_TIME=07:30\nREMINDER_WEEKDAYS=mon,fri\n",
        encoding="utf-8",
    )

    settings = load_settings(str(env_file))

    assert settings.emailjs_configured is True
    assert settings.port == 8080
    assert settings.public_base_url == "http://localhost:8080"
    assert (settings.reminder_hour, settings.reminder_minute) == (7, 30)
    assert settings.reminder_weekdays == frozenset({0, 4})


def test_replit_base_url(clean_env, monkeypatch):
    monkeypatch.setenv("REPL_SLUG", "attendance")
    monkeypatch.setenv("REPL_OWNER", "acme")
    assert load_settings(clean_env).public_base_url == "https://attendance.acme.repl.co"


def test_explicit_base_url_wins(clean_env, monkeypatch):
    monkeypatch.setenv("REPL_SLUG", "attendance")
    monkeypatch.setenv("PUBLIC_BASE_URL", "https://reminders.example.com/")
    assert load_settings(clean_env).public_base_url == "https://reminders.example.com"


@pytest.mark.parametrize("value", ["8pm", "24:00", "20:61"])
def test_bad_reminder_time(value):
    with pytest.raises(RuntimeError):
        parse_reminder_time(value)


def test_bad_weekdays_fail_loading(clean_env, monkeypatch):
    monkeypatch.setenv("REMINDER_WEEKDAYS", "someday")
    with pytest.raises(RuntimeError):
        load_settings(clean_env)


@pytest.mark.parametrize("value", ["Mars/Olympus", ""])
def test_bad_timezone_fails_loading(clean_env, monkeypatch, value):
    monkeypatch.setenv("REMINDER_TIMEZONE", value)
    with pytest.raises(RuntimeError, match="REMINDER_TIMEZONE"):
        load_settings(clean_env)
