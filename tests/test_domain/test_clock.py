"""
Tests for the server-local clock
"""
from datetime import date, timedelta

from app.config import Settings, get_settings
from app.utils.clock import local_now, local_today


def test_timezone_unset_by_default(server_clock):
    assert Settings().TIMEZONE is None


def test_today_is_server_date(server_clock):
    assert local_today() == date.today()
    assert local_now().tzinfo is not None


def test_timezone_override(monkeypatch):
    monkeypatch.setenv("TIMEZONE", "Pacific/Kiritimati")
    get_settings.cache_clear()
    try:
        assert local_now().utcoffset() == timedelta(hours=14)
    finally:
        get_settings.cache_clear()
