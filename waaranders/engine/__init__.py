"""Ordering and grouping engine for Waaranders."""

from waaranders.engine.ordering import order_items, OrderableItem, SecondaryMode
from waaranders.engine.grouping import (
    group_by_month,
    MonthGroup,
    format_day_label,
    format_month_title,
    format_short_date,
)

__all__ = [
    "order_items",
    "OrderableItem",
    "SecondaryMode",
    "group_by_month",
    "MonthGroup",
    "format_day_label",
    "format_month_title",
    "format_short_date",
]
