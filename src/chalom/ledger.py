"""Time accounting for changelog entries.

Consecutive item times bound intervals. Each interval is credited to the
label of the item that starts it, and every label's minutes are rounded
to a quarter hour the way time is billed: anything under 15 minutes
counts as 15, and a remainder over 8 minutes rounds up to the next
quarter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

from chalom.models import Entry, Item

logger = logging.getLogger(__name__)

QUARTER = 15
ROUND_UP_AFTER = 8
SEPARATOR = "-" * 53
TOTAL_LABEL = "[Total]"


def quantize(minutes: int) -> float:
    """Convert minutes to billed hours, floored to a quarter hour."""
    correction = 0
    if minutes < QUARTER or minutes % QUARTER > ROUND_UP_AFTER:
        correction = QUARTER
    return ((minutes + correction) // QUARTER) / 4


def format_row(label: str, minutes: int) -> str:
    return f"{label}: {quantize(minutes):.2f}h ({minutes}m)"


@dataclass
class TimeLedger:
    """Minutes per label for one entry, in the order labels were credited."""

    header: str
    minutes: dict[str, int] = field(default_factory=dict)
    total: int = 0
    bounded: bool = False

    def credit(self, label: str, minutes: int) -> None:
        self.minutes[label] = self.minutes.get(label, 0) + minutes
        self.total += minutes

    def render(self) -> list[str]:
        """Report lines: header, blank, rows and total, blank.

        Rows and total are shown once the entry has an interval, even one
        that counted for nothing.
        """
        lines = [self.header, ""]
        if self.bounded:
            lines.extend(format_row(label, m) for label, m in self.minutes.items())
            lines.append(SEPARATOR)
            lines.append(format_row(TOTAL_LABEL, self.total))
        lines.append("")
        return lines


def item_timestamp(date: str, item: Item) -> datetime | None:
    """Combine an entry date and an item time, or None if they don't form a datetime."""
    try:
        return datetime.strptime(f"{date} {item.time}", "%Y-%m-%d %H:%M")
    except ValueError:
        logger.debug("Skipping item with unusable time %r on %s", item.time, date)
        return None


def item_label(item: Item) -> str:
    return item.head_label.lstrip()


def sum_entry(entry: Entry) -> TimeLedger:
    """Compute the time ledger of one entry.

    Items are walked from the latest back to the earliest; the gap between
    an item and the one after it is credited to the earlier item's label.
    An interval with an unusable endpoint counts for nothing.
    """
    ledger = TimeLedger(header=entry.header)
    items = list(entry.items)
    if len(items) < 2:
        return ledger

    ledger.bounded = True
    last_time = item_timestamp(entry.date, items[-1])
    for item in reversed(items[:-1]):
        start = item_timestamp(entry.date, item)
        if start is None:
            continue
        if last_time is not None:
            diff = last_time - start
            ledger.credit(item_label(item), int(diff.total_seconds() // 60))
        last_time = start
    return ledger


def time_report(entries: Iterable[Entry]) -> list[str]:
    """Render the ledgers of ``entries`` in the order given."""
    lines: list[str] = []
    for entry in entries:
        lines.extend(sum_entry(entry).render())
    return lines
