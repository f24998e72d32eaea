"""
Server-local clock. "Today" is the server's calendar day unless
Settings.TIMEZONE names an explicit zone.
"""
from datetime import date, datetime
from zoneinfo import ZoneInfo

from app.config import get_settings


def local_now() -> datetime:
    zone = get_settings().TIMEZONE
    if zone:
        return datetime.now(ZoneInfo(zone))
    return datetime.now().astimezone()


def local_today() -> date:
    return local_now().date()
