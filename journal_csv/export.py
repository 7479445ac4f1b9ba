from __future__ import annotations

import base64
import hashlib
import logging
from datetime import datetime, timezone, tzinfo
from typing import Any, BinaryIO, Dict, Iterable, List, Optional, Tuple

from .grammar import encode_field, encode_record, format_timestamp, quote_field
from .models import JournalEntry
from .rules import HEADER, RECORD_TERMINATOR, TARGET_ENCODING
from .vocabulary import TreatmentType

logger = logging.getLogger(__name__)


def _comparable(moment: datetime, tz: tzinfo) -> datetime:
    # Naive timestamps are wall time in the export timezone.
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz)
    return moment


def filter_entries(
    entries: Iterable[JournalEntry],
    date_range: Optional[Tuple[datetime, datetime]] = None,
    treatment_type: Optional[TreatmentType] = None,
    tz: tzinfo = timezone.utc,
) -> List[JournalEntry]:
    """Keep entries inside the (inclusive) date range and of the given treatment type."""
    kept = []
    for entry in entries:
        if date_range is not None:
            start, end = (_comparable(bound, tz) for bound in date_range)
            when = _comparable(entry.session_timestamp, tz)
            if not start <= when <= end:
                continue
        if treatment_type is not None and entry.treatment_type != treatment_type:
            continue
        kept.append(entry)
    return kept


def encode_entry(entry: JournalEntry, tz: tzinfo = timezone.utc) -> str:
    fields = [
        quote_field(format_timestamp(entry.session_timestamp, tz)),
        quote_field(entry.treatment_type.display_name),
        quote_field(entry.administration.display_name),
        encode_field(entry.intention),
        str(entry.mood_before),
        str(entry.mood_after),
        encode_field(entry.reflections),
        encode_field(entry.music_link_url or ""),
    ]
    return encode_record(fields)


class CSVExportService:
    """Serialize journal entries to the interchange CSV format."""

    def __init__(self, tz: tzinfo = timezone.utc, filename: str = "Journal-Export") -> None:
        self.tz = tz
        self.filename = filename

    def encode(
        self,
        entries: Iterable[JournalEntry],
        date_range: Optional[Tuple[datetime, datetime]] = None,
        treatment_type: Optional[TreatmentType] = None,
    ) -> bytes:
        return self.encode_text(entries, date_range, treatment_type).encode(TARGET_ENCODING)

    def encode_text(
        self,
        entries: Iterable[JournalEntry],
        date_range: Optional[Tuple[datetime, datetime]] = None,
        treatment_type: Optional[TreatmentType] = None,
    ) -> str:
        entries = list(entries)
        kept = filter_entries(entries, date_range, treatment_type, self.tz)
        logger.debug("Exporting %d of %d entries", len(kept), len(entries))
        return self.render(kept)

    def render(self, entries: Iterable[JournalEntry]) -> str:
        """Header plus one record per entry, unfiltered, in the given order."""
        parts = [HEADER + RECORD_TERMINATOR]
        parts.extend(encode_entry(entry, self.tz) for entry in entries)
        return "".join(parts)

    def write(
        self,
        entries: Iterable[JournalEntry],
        sink: BinaryIO,
        date_range: Optional[Tuple[datetime, datetime]] = None,
        treatment_type: Optional[TreatmentType] = None,
    ) -> int:
        """Write the encoded CSV to `sink` and return the number of bytes written."""
        data = self.encode(entries, date_range, treatment_type)
        sink.write(data)
        return len(data)

    def export_filename(self) -> str:
        return f"{self.filename}.csv"


def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def export_csv_envelope(
    service: CSVExportService,
    entries: List[JournalEntry],
    date_range: Optional[Tuple[datetime, datetime]] = None,
    treatment_type: Optional[TreatmentType] = None,
) -> Dict[str, Any]:
    """
    Encode entries and wrap the bytes in the API's response envelope.
    """
    kept = filter_entries(entries, date_range, treatment_type, service.tz)
    data = service.render(kept).encode(TARGET_ENCODING)

    return {
        "csv": {
            "sha256": _sha256_hex(data),
            "encoding": TARGET_ENCODING,
            "filename": service.export_filename(),
            "content_b64": base64.b64encode(data).decode("ascii"),
        },
        "summary": {
            "rows": len(kept),
            "filtered_out": len(entries) - len(kept),
        },
    }
