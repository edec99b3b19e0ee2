"""Changelog reader and writer.

Never fails on odd input: text that matches neither an entry header nor
an item line ends up as preamble or continuation text, and a missing
file reads as an empty document.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from chalom.models import Document, LineWriter

logger = logging.getLogger(__name__)

NEWLINE = re.compile(r"\r\n|\r|\n")


def parse_lines(lines: Iterable[str]) -> Document:
    """Build a document from lines read top to bottom."""
    doc = Document()
    last_line = ""
    for line in lines:
        # Runs of blank lines count as one
        if not line and not last_line:
            continue
        doc.parse(line)
        last_line = line
    return doc


def split_lines(text: str) -> list[str]:
    """Split on CR, LF and CRLF only; other separators stay inside the line."""
    lines = NEWLINE.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def parse_text(text: str) -> Document:
    return parse_lines(split_lines(text))


def load_document(path: Path) -> Document:
    """Parse a changelog file.

    A missing file gives an empty document. A byte-order mark at the
    start of the file is ignored.
    """
    if not path.exists():
        logger.debug("%s does not exist, starting an empty changelog", path)
        return Document()

    text = path.read_text(encoding="utf-8-sig")
    doc = parse_text(text)
    logger.debug("Loaded %s: %d entries", path, len(doc.entries))
    return doc


def render_document(doc: Document) -> str:
    """Serialize a document, newest entry first."""
    out = LineWriter()
    doc.write(out)
    return out.getvalue()


def save_document(path: Path, doc: Document) -> None:
    text = render_document(doc)
    path.write_text(text, encoding="utf-8", newline="\n")
    logger.debug("Saved %s (%d lines)", path, text.count("\n"))
