"""
Decoder for the journal CSV format.

Responsibilities:
- strict UTF-8 validation
- line ending normalization (CRLF / CR / LF)
- exact header check
- per-row structural parsing and field validation

Import is all-or-nothing: the first bad row aborts with its 1-based index.
"""

from __future__ import annotations

import logging
import re
from datetime import timezone, tzinfo
from typing import List, Optional, Union

from charset_normalizer import from_bytes

from .errors import InvalidHeader, InvalidRow, ParseFailure
from .grammar import (
    RowSyntaxError,
    decode_row,
    normalize_newlines,
    parse_timestamp,
    split_records,
    strip_guard,
)
from .models import JournalEntry
from .rules import HEADER
from .vocabulary import (
    AdministrationMethod,
    TreatmentType,
    classify_music_url,
    normalize_music_url,
)

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"-?[0-9]+")


def _guess_encoding(raw: bytes) -> Optional[str]:
    match = from_bytes(raw).best()
    if match is None:
        return None
    return match.encoding


def decode_text(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        reason = f"file is not valid UTF-8 (invalid byte at offset {exc.start})"
        guessed = _guess_encoding(raw)
        if guessed:
            reason += f"; it looks like {guessed}"
        raise ParseFailure(reason) from exc


def _parse_int(value: str, column: str) -> int:
    if not _INTEGER.fullmatch(value):
        raise RowSyntaxError(f"{column} is not an integer: {value!r}")
    try:
        return int(value)
    except ValueError as exc:
        # more digits than the interpreter will convert
        raise RowSyntaxError(f"{column} is too large: {len(value)} digits") from exc


def parse_entry(fields: List[str], tz: tzinfo = timezone.utc) -> JournalEntry:
    date, treatment, administration, intention, before, after, reflections, link = fields

    timestamp = parse_timestamp(date, tz)

    treatment_type = TreatmentType.from_display_name(treatment)
    if treatment_type is None:
        raise RowSyntaxError(f"unknown treatment type {treatment!r}")

    method = AdministrationMethod.from_display_name(administration)
    if method is None:
        raise RowSyntaxError(f"unknown administration method {administration!r}")

    mood_before = _parse_int(before, "Mood Before")
    mood_after = _parse_int(after, "Mood After")

    url = normalize_music_url(strip_guard(link))

    return JournalEntry(
        session_timestamp=timestamp,
        treatment_type=treatment_type,
        administration=method,
        intention=strip_guard(intention),
        mood_before=mood_before,
        mood_after=mood_after,
        reflections=strip_guard(reflections),
        music_link_url=url,
        music_link_provider=classify_music_url(url) if url else None,
    )


class CSVImportService:
    """Restore journal entries from the interchange CSV format."""

    def __init__(self, tz: tzinfo = timezone.utc) -> None:
        self.tz = tz

    def decode(self, data: Union[bytes, str]) -> List[JournalEntry]:
        text = decode_text(data) if isinstance(data, bytes) else data
        records = [r for r in split_records(normalize_newlines(text)) if r]

        if not records:
            return []
        if records[0] != HEADER:
            logger.debug("Header mismatch: %r", records[0][:len(HEADER) + 20])
            raise InvalidHeader()

        entries: List[JournalEntry] = []
        for index, record in enumerate(records[1:], start=1):
            try:
                fields = decode_row(record)
                entries.append(parse_entry(fields, self.tz))
            except RowSyntaxError as exc:
                logger.debug("Rejecting row %d: %s", index, exc)
                raise InvalidRow(index) from exc

        logger.info("Decoded %d journal entries", len(entries))
        return entries
