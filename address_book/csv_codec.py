"""Comma-separated persistence for the address book.

The file is a fixed header line followed by one contact per line::

    姓名,性别,电话,班级,备注
    Alice,F,111,C1,

Plain values are written as-is. Values holding a comma or a double quote are
double-quoted so they survive a round trip; files without such values stay
byte-identical to the unquoted format. Line breaks are never allowed inside a
value, so every physical line is exactly one record. A line whose quotes do
not parse is read as plain comma-separated text, which keeps values such as
``"hi`` intact.
"""
from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .errors import EmptyStore, InvalidValue, IoUnavailable
from .models import HEADER, Contact

logger = logging.getLogger(__name__)

DELIMITER = ","
FIELD_COUNT = len(HEADER)


@dataclass(frozen=True)
class ParseWarning:
    """A line skipped while decoding because it did not hold five fields."""

    line_number: int
    raw: str

    def __str__(self):
        return f"line {self.line_number}: {self.raw}"


def encode(contacts: Iterable[Contact]) -> str:
    rows = [c.as_row() for c in contacts]
    if not rows:
        raise EmptyStore("Address book is empty, nothing to save.")
    for row in rows:
        for value in row:
            if "\n" in value or "\r" in value:
                raise InvalidValue(value)
    buf = io.StringIO()
    buf.write(DELIMITER.join(HEADER) + "\n")
    writer = csv.writer(buf, delimiter=DELIMITER, lineterminator="\n",
                        quoting=csv.QUOTE_MINIMAL)
    writer.writerows(rows)
    return buf.getvalue()


def split_line(line: str) -> List[str]:
    try:
        return next(csv.reader([line], delimiter=DELIMITER, strict=True), [])
    except csv.Error:
        return line.split(DELIMITER)


def decode(text: str) -> Tuple[List[Contact], List[ParseWarning]]:
    # header is skipped without looking at it
    _, _, body = text.partition("\n")
    lines = body.split("\n")
    if lines[-1] == "":
        lines.pop()

    contacts: List[Contact] = []
    warnings: List[ParseWarning] = []
    for line_number, line in enumerate(lines, 2):
        line = line.rstrip("\r")
        row = split_line(line)
        if len(row) != FIELD_COUNT:
            warnings.append(ParseWarning(line_number, line))
            logger.warning("Skipping malformed line %d: %r", line_number, line)
            continue
        contacts.append(Contact.from_row(row))

    return contacts, warnings


# ────────────────────────────────────────────────────────────────────────────
# Files
# ────────────────────────────────────────────────────────────────────────────
def normalize_filename(filename: str) -> str:
    """Append ``.csv`` unless the text after the last dot is exactly ``csv``.

    A name without any dot is compared as a whole, so ``csv`` stays ``csv``.
    """
    if filename.rsplit(".", 1)[-1] != "csv":
        return filename + ".csv"
    return filename


def _resolve(filename: str, base_dir: Optional[Path]) -> Path:
    path = Path(filename).expanduser()
    if base_dir is not None and not path.is_absolute():
        path = Path(base_dir) / path
    return path


def save(contacts: Iterable[Contact], filename: str, *,
         encoding: str = "utf-8", base_dir: Optional[Path] = None) -> Path:
    contacts = list(contacts)
    text = encode(contacts)
    path = _resolve(normalize_filename(filename), base_dir)
    try:
        data = text.encode(encoding)
    except UnicodeEncodeError as e:
        raise IoUnavailable(path, f"cannot encode {e.object[e.start:e.end]!r} as {encoding}")
    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        logger.warning("Save to %s failed: %s", path, e)
        raise IoUnavailable(path, e.strerror or str(e))
    logger.info("Saved %d contacts to %s", len(contacts), path)
    return path


def load(filename: str, *, encoding: str = "utf-8",
         base_dir: Optional[Path] = None) -> Tuple[List[Contact], List[ParseWarning]]:
    path = _resolve(filename, base_dir)
    try:
        with open(path, "r", encoding=encoding, newline="") as f:
            text = f.read()
    except OSError as e:
        logger.warning("Load from %s failed: %s", path, e)
        raise IoUnavailable(path, e.strerror or str(e))
    except UnicodeDecodeError as e:
        logger.warning("Load from %s failed: %s", path, e)
        raise IoUnavailable(path, f"not {encoding} text")
    contacts, warnings = decode(text)
    logger.info("Loaded %d contacts from %s (%d skipped)", len(contacts), path, len(warnings))
    return contacts, warnings
