"""Pure date and summary calculations used by the mobile endpoints."""

from calendar import monthrange
from datetime import date, timedelta


def calculate_age(birthday: date | None, today: date | None = None) -> int | None:
    """Return age in whole years, counting a birthday only once it has passed."""
    if birthday is None:
        return None

    today = today or date.today()
    age = today.year - birthday.year
    if (today.month, today.day) < (birthday.month, birthday.day):
        age -= 1
    return age


def parse_hhmm(value: str) -> int:
    """Convert an "HH:MM" string to minutes since midnight."""
    hours, minutes = value.split(":", 1)
    return int(hours) * 60 + int(minutes)


def duration_minutes(start_time: str, end_time: str) -> int:
    """Minutes between two "HH:MM" times on the same day."""
    return parse_hhmm(end_time) - parse_hhmm(start_time)


def percentage(part: int, total: int) -> float:
    """part / total * 100, rounded to 2 decimals; 0.0 when total is 0."""
    if total == 0:
        return 0.0
    return round(part / total * 100, 2)


def week_range(today: date) -> tuple[date, date]:
    """Monday through Sunday of the week containing today."""
    start = today - timedelta(days=today.weekday())
    return start, start + timedelta(days=6)


def month_range(today: date) -> tuple[date, date]:
    """First through last day of the month containing today."""
    last_day = monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)
