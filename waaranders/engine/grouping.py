"""Month grouping and date labels for the Waaranders calendar.

Activities are shown in month buckets with a localized heading per month
and a weekday label per item.
"""

import os
from datetime import date, datetime
from operator import attrgetter
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union
from babel.dates import format_date
from dotenv import load_dotenv

from waaranders.models.constants import DEFAULT_DISPLAY_LOCALE

load_dotenv()

DISPLAY_LOCALE = os.getenv("DISPLAY_LOCALE", DEFAULT_DISPLAY_LOCALE)

MONTH_TITLE_PATTERN = "LLLL y"
WEEKDAY_PATTERN = "EEEE"
DAY_MONTH_PATTERN = "d MMM"

DateLike = Union[date, str]


class MonthGroup:
    """Items sharing one calendar month."""

    def __init__(self, month_key: str, title: str):
        self.month_key = month_key
        self.title = title
        self.items: List[Any] = []


def as_date(value: DateLike) -> date:
    """Accept a date, a datetime or ISO 'YYYY-MM-DD' text."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def year_month(value: DateLike) -> Tuple[int, int]:
    d = as_date(value)
    return d.year, d.month


def month_key(value: DateLike) -> str:
    year, month = year_month(value)
    return f"{year:04d}-{month:02d}"


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def format_month_title(value: DateLike, locale: Optional[str] = None) -> str:
    """Long month name plus year, first letter upper-cased ('Maart 2025')."""
    return _capitalize(format_date(as_date(value), MONTH_TITLE_PATTERN, locale=locale or DISPLAY_LOCALE))


def format_day_label(value: DateLike, locale: Optional[str] = None) -> str:
    """Capitalized weekday followed by day and abbreviated month ('Zaterdag 15 mrt.')."""
    d = as_date(value)
    use_locale = locale or DISPLAY_LOCALE
    weekday = _capitalize(format_date(d, WEEKDAY_PATTERN, locale=use_locale))
    day_month = format_date(d, DAY_MONTH_PATTERN, locale=use_locale)
    return f"{weekday} {day_month}"


def format_short_date(value: Optional[DateLike]) -> str:
    """'DD/MM' label for todo cards; empty for a missing date."""
    if value is None:
        return ""
    d = as_date(value)
    return f"{d.day:02d}/{d.month:02d}"


def group_by_month(
    items: Iterable[Any],
    key: Optional[Callable[[Any], DateLike]] = None,
    locale: Optional[str] = None,
) -> List[MonthGroup]:
    """Partition items into calendar-month buckets.

    Items are re-sorted by date (stable), then scanned once. Groups appear in
    the order their month is first seen, which after the sort is calendar
    order. Every item must have a date; callers filter out dateless ones.

    Args:
        items: Records to group
        key: Returns the date of an item (defaults to its primary_date)
        locale: Locale for the month titles (defaults to DISPLAY_LOCALE)

    Returns:
        List of MonthGroup, chronological, none of them empty
    """
    date_of = key or attrgetter("primary_date")
    ordered = sorted(items, key=lambda item: as_date(date_of(item)))

    groups: List[MonthGroup] = []
    by_key: Dict[str, MonthGroup] = {}
    for item in ordered:
        item_date = date_of(item)
        group_key = month_key(item_date)
        group = by_key.get(group_key)
        if group is None:
            group = MonthGroup(group_key, format_month_title(item_date, locale=locale))
            by_key[group_key] = group
            groups.append(group)
        group.items.append(item)
    return groups
