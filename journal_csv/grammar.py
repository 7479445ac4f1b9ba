"""
Field grammar for the journal CSV format.

Encoding side:
- formula guard: free text starting with = + - @ gets a leading apostrophe
- quoting: empty values and values holding , " CR or LF are wrapped in quotes,
  embedded quotes are doubled

Decoding side:
- records are split on LF outside quotes, so quoted multi-line text survives
- each record is scanned character by character (never split on commas)
"""

from __future__ import annotations

import re
from datetime import datetime, timezone, tzinfo
from typing import Iterable, List

from .rules import (
    COLUMNS,
    DELIMITER,
    FORMULA_TRIGGERS,
    GUARD,
    MONTH_ABBREVIATIONS,
    QUOTE,
    RECORD_TERMINATOR,
)


class RowSyntaxError(ValueError):
    """A single record is structurally broken or holds an unusable value."""


# --- Encoding ---

def guard_formula(value: str) -> str:
    if value.startswith(FORMULA_TRIGGERS):
        return GUARD + value
    return value


def needs_quoting(value: str) -> bool:
    # Empty fields are quoted too so every row keeps its full column count.
    if value == "":
        return True
    return any(ch in value for ch in (DELIMITER, QUOTE, "\r", "\n"))


def quote_field(value: str) -> str:
    if not needs_quoting(value):
        return value
    return QUOTE + value.replace(QUOTE, QUOTE + QUOTE) + QUOTE


def encode_field(value: str) -> str:
    """Encode one free-text value: guard first, then quote."""
    return quote_field(guard_formula(value))


def encode_record(fields: Iterable[str]) -> str:
    return DELIMITER.join(fields) + RECORD_TERMINATOR


# --- Decoding ---

def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def split_records(text: str) -> List[str]:
    """
    Split normalized text into records.

    A record only ends at a LF seen outside quotes. An unterminated quote
    swallows the rest of the text into the last record, which decode_row
    then rejects.
    """
    records: List[str] = []
    current: List[str] = []
    in_quotes = False

    for ch in text:
        if ch == QUOTE:
            in_quotes = not in_quotes
        elif ch == "\n" and not in_quotes:
            records.append("".join(current))
            current = []
            continue
        current.append(ch)

    if current:
        records.append("".join(current))
    return records


def decode_row(record: str) -> List[str]:
    fields: List[str] = []
    field: List[str] = []
    in_quotes = False
    i = 0
    n = len(record)

    while i < n:
        ch = record[i]
        if ch == QUOTE:
            if in_quotes and i + 1 < n and record[i + 1] == QUOTE:
                field.append(QUOTE)
                i += 2
                continue
            in_quotes = not in_quotes
        elif ch == DELIMITER and not in_quotes:
            fields.append("".join(field))
            field = []
        else:
            field.append(ch)
        i += 1

    if in_quotes:
        raise RowSyntaxError("unterminated quoted field")

    fields.append("".join(field))
    if len(fields) != len(COLUMNS):
        raise RowSyntaxError(f"expected {len(COLUMNS)} fields, got {len(fields)}")
    return fields


def strip_guard(value: str) -> str:
    # A leading apostrophe is always read as the formula guard. Text that
    # really started with one loses it.
    if value.startswith(GUARD):
        return value[len(GUARD):]
    return value


# --- Timestamps ---

_TIMESTAMP = re.compile(
    r"(?P<month>[A-Z][a-z]{2}) (?P<day>[0-9]{1,2}), (?P<year>[0-9]{4}) "
    r"at (?P<hour>[0-9]{1,2}):(?P<minute>[0-9]{2}) (?P<meridiem>AM|PM)"
)


def format_timestamp(moment: datetime, tz: tzinfo = timezone.utc) -> str:
    """
    Render a timestamp as e.g. "Dec 1, 2024 at 10:30 AM".

    The month names come from a fixed table so the output does not depend on
    the process locale. Aware timestamps are converted to `tz`; naive ones are
    taken as wall time in `tz` already.
    """
    local = moment.astimezone(tz) if moment.tzinfo is not None else moment
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    month = MONTH_ABBREVIATIONS[local.month - 1]
    return f"{month} {local.day}, {local.year} at {hour}:{local.minute:02d} {meridiem}"


def parse_timestamp(text: str, tz: tzinfo = timezone.utc) -> datetime:
    match = _TIMESTAMP.fullmatch(text)
    if match is None:
        raise RowSyntaxError(f"unrecognized date {text!r}")

    month_name = match.group("month")
    if month_name not in MONTH_ABBREVIATIONS:
        raise RowSyntaxError(f"unknown month {month_name!r}")

    hour = int(match.group("hour"))
    if not 1 <= hour <= 12:
        raise RowSyntaxError(f"hour out of range in {text!r}")
    hour = hour % 12
    if match.group("meridiem") == "PM":
        hour += 12

    try:
        return datetime(
            int(match.group("year")),
            MONTH_ABBREVIATIONS.index(month_name) + 1,
            int(match.group("day")),
            hour,
            int(match.group("minute")),
            tzinfo=tz,
        )
    except ValueError as exc:
        raise RowSyntaxError(str(exc)) from exc
