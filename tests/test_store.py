import pytest

from attendance_reminder.errors import ValidationError
from attendance_reminder.store import NotificationSettingsStore


def test_default_settings_are_disabled():
    store = NotificationSettingsStore()
    assert store.get_settings().to_dict() == {
        "email": None,
        "enabled": False,
        "lastSent": None,
    }


@pytest.mark.parametrize("email", [None, "", "no-at-sign", 42])
def test_setup_rejects_invalid_email_and_keeps_settings(email):
    store = NotificationSettingsStore()
    store.setup("manager@example.com")
    store.mark_sent("2026-10-18T00:00:00+00:00")

    with pytest.raises(ValidationError, match="Valid email is required"):
        store.setup(email)

    current = store.get_settings()
    assert current.email == "manager@example.com"
    assert current.last_sent == "2026-10-18T00:00:00+00:00"


def test_setup_replaces_record_and_resets_last_sent():
    store = NotificationSettingsStore()
    store.setup("first@example.com", "sms")
    store.mark_sent("2026-10-18T00:00:00+00:00")

    settings = store.setup("second@example.com")

    assert settings is store.get_settings()
    assert settings.email == "second@example.com"
    assert settings.method == "email"
    assert settings.enabled is True
    assert settings.last_sent is None
