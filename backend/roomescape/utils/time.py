from datetime import date, datetime

from ..config import get_settings


def now_local() -> datetime:
    """Current wall-clock time in the configured zone, as a naive datetime."""
    return datetime.now(get_settings().zone).replace(tzinfo=None)


def today_local() -> date:
    return now_local().date()
