# dateinput/dates.py
import datetime
import json
import re
from collections.abc import Iterable
from typing import Any, List, Optional, Union

from .errors import ValidationError

DateLike = Union[datetime.date, datetime.datetime, str]

# Canonical serialization format; the display format is a client-side concern.
CANONICAL_DATE_FORMAT = "%Y-%m-%d"
_CANONICAL_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

NULL_TOKEN = "null"


def date_ymd(value: Optional[DateLike], arg_name: str = "value") -> Optional[str]:
    """
    Normalize a single date to ``YYYY-MM-DD``.

    :param value: A ``date``/``datetime`` or a canonical string. ``None`` passes through.
    :param arg_name: Parameter name reported in a ``ValidationError``.
    :return: The canonical string, or ``None``.
    """
    if value is None:
        return None
    # datetime is a subclass of date, keep only the calendar day.
    if isinstance(value, datetime.datetime):
        value = value.date()
    if isinstance(value, datetime.date):
        return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
    if isinstance(value, str):
        text = value.strip()
        if not _CANONICAL_RE.match(text):
            raise ValidationError(
                arg_name, value, "malformed_date",
                f"'{arg_name}' must be a date or a string in yyyy-mm-dd format, got {value!r}",
            )
        try:
            parsed = datetime.datetime.strptime(text, CANONICAL_DATE_FORMAT).date()
        except ValueError:
            raise ValidationError(
                arg_name, value, "malformed_date",
                f"'{arg_name}' is not a valid calendar date: {value!r}",
            ) from None
        return date_ymd(parsed, arg_name)
    raise ValidationError(
        arg_name, value, "unsupported_type",
        f"'{arg_name}' must be a date or a yyyy-mm-dd string, not {type(value).__name__}",
    )


def dates_ymd(values: Any, arg_name: str = "datesdisabled") -> Optional[List[str]]:
    """
    Normalize a date or a collection of dates.

    A scalar is treated as a one-element list. ``None`` and empty collections
    both become ``None`` so they serialize to ``null``.
    """
    if values is None:
        return None
    if isinstance(values, (str, datetime.date)):
        values = [values]
    elif not isinstance(values, Iterable):
        raise ValidationError(
            arg_name, values, "unsupported_type",
            f"'{arg_name}' must be a date or a list of dates, not {type(values).__name__}",
        )
    normalized = [date_ymd(v, arg_name) for v in values]
    return normalized or None


def to_json_array(values: Any) -> str:
    """
    Serialize a list for a ``data-*`` attribute.

    ``None`` and empty lists give the literal ``null`` so the datepicker script
    can tell "no restriction" apart from an empty restriction list.
    """
    if values is None:
        return NULL_TOKEN
    if isinstance(values, (str, int, datetime.date)):
        values = [values]
    values = list(values)
    if not values:
        return NULL_TOKEN
    return json.dumps(values, separators=(",", ":"))
