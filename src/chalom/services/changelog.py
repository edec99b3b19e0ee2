"""Changelog service: add items to a changelog file and report its time."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from chalom.ledger import time_report
from chalom.models import Entry
from chalom.parser import load_document, save_document

logger = logging.getLogger(__name__)


def log_item(path: Path, text: str, now: datetime | None = None) -> Entry:
    """Add a timestamped item to today's entry and rewrite the file.

    Returns the entry the item went into.
    """
    doc = load_document(path)
    entry = doc.add_item(text, now=now)
    save_document(path, doc)
    logger.info("Logged %r to %s", text, path)
    return entry


def report(path: Path) -> list[str]:
    """Time report lines for every entry in the file, latest day first."""
    doc = load_document(path)
    return time_report(reversed(doc.entries))
