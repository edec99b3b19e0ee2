"""In-memory model of a changelog: blocks, items, entries, documents.

Entries and items are stored ascending by key and always written
descending, so the newest day and the newest item come first in the file.
"""

from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, Iterator, TypeVar

from chalom.lines import (
    EntryStart,
    ItemStart,
    classify_entry_line,
    classify_item_line,
    continuation_key,
    format_entry_header,
    format_item_line,
)

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")


class SortedMap(Generic[K, V]):
    """Mapping kept in ascending key order.

    Iterating gives the values ascending; ``reversed()`` gives them
    descending without re-sorting.
    """

    def __init__(self) -> None:
        self._keys: list[K] = []
        self._values: dict[K, V] = {}

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __getitem__(self, key: K) -> V:
        return self._values[key]

    def __iter__(self) -> Iterator[V]:
        return (self._values[k] for k in self._keys)

    def __reversed__(self) -> Iterator[V]:
        return (self._values[k] for k in reversed(self._keys))

    def keys(self) -> list[K]:
        """Return the keys, ascending."""
        return list(self._keys)

    def setdefault(self, key: K, value: V) -> V:
        """Insert ``value`` under ``key`` unless the key is already present."""
        if key not in self._values:
            bisect.insort(self._keys, key)
            self._values[key] = value
        return self._values[key]


class LineWriter:
    """Line sink that never emits two blank lines in a row."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def write_line(self, line: str = "") -> None:
        if not line and self.lines and not self.lines[-1]:
            return
        self.lines.append(line)

    def getvalue(self) -> str:
        return "".join(line + "\n" for line in self.lines)


@dataclass
class Block:
    """Ordered line buffer that collapses runs of blank lines."""

    lines: list[str] = field(default_factory=list)

    def append(self, line: str) -> None:
        if not line and (not self.lines or not self.lines[-1]):
            return
        self.lines.append(line)

    def write(self, out: LineWriter) -> None:
        for line in self.lines:
            out.write_line(line)
        # Multi-line sections are closed by a separator.
        if len(self.lines) > 1 and self.lines[-1]:
            out.write_line()


@dataclass
class Item(Block):
    """A timestamped note: its head line plus any continuation lines."""

    time: str = ""
    head_label: str = ""
    head_line: str = ""

    @classmethod
    def from_head(cls, head: ItemStart) -> Item:
        item = cls(time=head.time, head_label=head.label, head_line=head.line)
        item.append(head.line)
        return item


class Entry:
    """One day of the changelog, keyed by its ``YYYY-MM-DD`` date."""

    def __init__(self, date: str, header: str) -> None:
        self.date = date
        self.header = header
        self.preamble = Block()
        self.items: SortedMap[str, Item] = SortedMap()

    def parse(self, line: str) -> None:
        """Route one line into this entry.

        A new item time creates an item; a repeated time merges into the
        existing item. Any other line continues the item chosen by
        ``continuation_key``, or the preamble while there are no items.
        """
        kind = classify_item_line(line)
        if isinstance(kind, ItemStart):
            if kind.time in self.items:
                self.items[kind.time].append(line)
            else:
                self.items.setdefault(kind.time, Item.from_head(kind))
        elif self.items:
            self.items[continuation_key(self.items.keys())].append(line)
        else:
            self.preamble.append(line)

    def write(self, out: LineWriter) -> None:
        out.write_line(self.header)
        out.write_line()
        self.preamble.write(out)
        if self.items:
            for item in reversed(self.items):
                item.write(out)
            out.write_line()


class Document:
    """A whole changelog: a preamble followed by dated entries."""

    def __init__(self) -> None:
        self.preamble = Block()
        self.entries: SortedMap[str, Entry] = SortedMap()

    def parse(self, line: str) -> None:
        """Route one line into the document.

        Entry headers open a new entry (a header for a date already seen
        is dropped). Everything else goes to the entry chosen by
        ``continuation_key``, or the preamble before the first entry.
        """
        kind = classify_entry_line(line)
        if isinstance(kind, EntryStart):
            self.entries.setdefault(kind.date, Entry(kind.date, kind.line))
        elif self.entries:
            self.entries[continuation_key(self.entries.keys())].parse(line)
        else:
            self.preamble.append(line)

    def write(self, out: LineWriter) -> None:
        self.preamble.write(out)
        if self.entries:
            for entry in reversed(self.entries):
                entry.write(out)
            out.write_line()

    def add_item(self, text: str, now: datetime | None = None) -> Entry:
        """Log ``text`` as an item at the current local time.

        Returns today's entry, created if missing. An add within the same
        minute as an existing item merges into it.
        """
        now = now or datetime.now()
        date = now.strftime("%Y-%m-%d")
        entry = self.entries.setdefault(date, Entry(date, format_entry_header(date)))
        entry.parse(format_item_line(now.strftime("%H:%M"), text))
        logger.debug("Added item at %s %s", date, now.strftime("%H:%M"))
        return entry
