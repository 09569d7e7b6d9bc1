"""Mini README: Day keys, timestamps and day partitioning.

Days are keyed as ``DD/MM/YYYY`` and record timestamps are stored as
``DD/MM/YYYY hh:mm AM/PM``, so the day a record belongs to is the date part
of its timestamp.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, List, Protocol, TypeVar

DAY_FORMAT = "%d/%m/%Y"
TIMESTAMP_FORMAT = "%d/%m/%Y %I:%M %p"


class _Timestamped(Protocol):
    timestamp: str


RecordT = TypeVar("RecordT", bound=_Timestamped)


def day_key(moment: date | datetime) -> str:
    """Return the ``DD/MM/YYYY`` key for a date or datetime."""

    return moment.strftime(DAY_FORMAT)


def format_timestamp(moment: datetime) -> str:
    """Render a creation time in the register's timestamp format."""

    return moment.strftime(TIMESTAMP_FORMAT)


def parse_day(value: str) -> date:
    """Validate a ``DD/MM/YYYY`` key and return the matching date."""

    try:
        return datetime.strptime(value.strip(), DAY_FORMAT).date()
    except (ValueError, AttributeError) as error:
        raise ValueError(f"Days must be formatted DD/MM/YYYY, got {value!r}") from error


def day_of_timestamp(timestamp: str) -> str:
    """Return the day key of a stored ``DD/MM/YYYY hh:mm AM/PM`` timestamp."""

    return timestamp.strip().split(" ", 1)[0]


def records_for_day(records: Iterable[RecordT], day: str) -> List[RecordT]:
    """Keep the records whose timestamp falls on ``day``."""

    return [record for record in records if day_of_timestamp(record.timestamp) == day]
