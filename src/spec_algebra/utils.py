"""Calendar arithmetic and value casting for the dict form."""

from __future__ import annotations

import calendar
import datetime
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

D = TypeVar("D", datetime.date, datetime.datetime)


def add_months(moment: D, months: int) -> D:
    """
    Shift *moment* by a whole number of calendar months.

    The day of month is clamped to the length of the target month, so
    ``2024-03-31`` minus one month is ``2024-02-29``. Time of day and
    ``tzinfo`` are preserved.
    """
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


def _to_date(value: Any) -> datetime.date:
    if isinstance(value, datetime.date):
        return value
    return datetime.date.fromisoformat(str(value))


def _to_datetime(value: Any) -> datetime.datetime:
    if not isinstance(value, datetime.datetime):
        value = datetime.datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if value.tzinfo is not None:
        value = value.astimezone(datetime.timezone.utc)
    return value


_CASTS: dict[str, Callable[[Any], Any]] = {
    "str": str,
    "string": str,
    "int": int,
    "integer": int,
    "float": float,
    "bool": _to_bool,
    "boolean": _to_bool,
    "date": _to_date,
    "datetime": _to_datetime,
}


def cast_value(value: Any, value_type: str | None = None) -> Any:
    """
    Cast a ``val`` read from the dict form to the named ``value_type``.

    Lists are cast item by item. Unknown type names and values that do
    not parse are returned unchanged.
    """
    if value_type is None:
        return value
    if isinstance(value, list):
        return [cast_value(item, value_type) for item in value]
    cast = _CASTS.get(value_type.lower())
    if cast is None:
        return value
    try:
        return cast(value)
    except (TypeError, ValueError):
        return value
