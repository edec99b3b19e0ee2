"""Line classification and line formats for changelog files.

A changelog line is one of three things: the start of a dated entry
(``# 2024-01-01 ...``), the start of a timestamped item
(``*<TAB>*(09:30)* text``), or plain text. The classifiers return a tagged
result so callers branch on the type instead of on regex matches.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence, TypeVar, Union

ENTRY_PATTERN = re.compile(r"^# (?P<date>\d{4}-\d{2}-\d{2}).*$")
ITEM_PATTERN = re.compile(r"^\*\s\*\((?P<time>\d{2}:\d{2})\)\*(?P<text>.*)$")

ENTRY_FORMAT = "# {date} " + "#" * 60
ITEM_FORMAT = "*\t*({time})* {text}"

K = TypeVar("K")


@dataclass(frozen=True)
class EntryStart:
    """An entry header line, keyed by its ``YYYY-MM-DD`` date."""

    date: str
    line: str


@dataclass(frozen=True)
class ItemStart:
    """An item head line, keyed by its ``HH:MM`` time."""

    time: str
    label: str
    line: str


@dataclass(frozen=True)
class Plain:
    text: str


LineKind = Union[EntryStart, ItemStart, Plain]


def classify_entry_line(line: str) -> EntryStart | Plain:
    """Classify a line against the entry-start pattern."""
    match = ENTRY_PATTERN.match(line)
    if match is None:
        return Plain(line)
    date = match.group("date")
    return EntryStart(date=date if date is not None else line, line=line)


def classify_item_line(line: str) -> ItemStart | Plain:
    """Classify a line against the item-start pattern.

    The label is the raw text after ``)*``, leading space included.
    """
    match = ITEM_PATTERN.match(line)
    if match is None:
        return Plain(line)
    time = match.group("time")
    text = match.group("text")
    return ItemStart(
        time=time if time is not None else line,
        label=text if text is not None else line,
        line=line,
    )


def format_entry_header(date: str) -> str:
    return ENTRY_FORMAT.format(date=date)


def format_item_line(time: str, text: str) -> str:
    return ITEM_FORMAT.format(time=time, text=text)


def continuation_key(keys: Sequence[K]) -> K:
    """Pick the key that receives lines which start nothing new.

    ``keys`` is ascending. The earliest key is chosen: files are written
    latest-first, so while reading top to bottom the earliest key seen so
    far is the section being read.
    """
    return keys[0]
