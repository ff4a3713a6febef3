import re
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional, Union

NO_DATA = "Brak danych"
INVALID_DATE = "Nieprawidłowa data"

Timestamp = Union[str, datetime, None]

_FRACTION = re.compile(r"\.(\d+)")


def parse_timestamp(value: Timestamp) -> Optional[datetime]:
    """ISO string or datetime -> datetime; None for empty values. Raises ValueError on garbage."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).replace("Z", "+00:00")
    # fromisoformat before 3.11 only takes 3 or 6 fractional digits
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    return datetime.fromisoformat(text)


def as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def format_class_datetime(value: Timestamp) -> str:
    """dd.MM.yyyy, HH:mm"""
    if not value:
        return NO_DATA
    try:
        return parse_timestamp(value).strftime("%d.%m.%Y, %H:%M")
    except ValueError:
        return INVALID_DATE


def _local_date(value: Timestamp) -> date:
    return parse_timestamp(value).date()


def is_class_today(value: Timestamp, today: Optional[date] = None) -> bool:
    if not value:
        return False
    try:
        return _local_date(value) == (today or date.today())
    except ValueError:
        return False


def days_until_label(value: Timestamp, today: Optional[date] = None) -> str:
    """Polish countdown: 'dziś', 'jutro', 'za N dni'; empty for past or invalid dates"""
    if not value:
        return ""
    try:
        days = (_local_date(value) - (today or date.today())).days
    except ValueError:
        return ""
    if days == 0:
        return "dziś"
    if days == 1:
        return "jutro"
    if days < 0:
        return ""
    return f"za {days} dni"


def format_with_countdown(value: Timestamp, today: Optional[date] = None) -> Dict[str, Any]:
    return {
        "date_time": format_class_datetime(value),
        "countdown": days_until_label(value, today),
        "is_today": is_class_today(value, today),
    }
