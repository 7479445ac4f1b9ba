from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from .vocabulary import AdministrationMethod, MusicLinkProvider, TreatmentType


class JournalEntry(BaseModel):
    session_timestamp: datetime
    treatment_type: TreatmentType = TreatmentType.psilocybin
    administration: AdministrationMethod = AdministrationMethod.oral
    intention: str = ""
    mood_before: int = 5
    mood_after: int = 5
    reflections: str = ""
    music_link_url: Optional[str] = None
    # Derived from the URL on import; never written to the CSV.
    music_link_provider: Optional[MusicLinkProvider] = None


class DateRange(BaseModel):
    start: datetime
    end: datetime

    def as_tuple(self) -> Tuple[datetime, datetime]:
        return self.start, self.end


class ExportRequest(BaseModel):
    entries: List[JournalEntry] = Field(default_factory=list)
    date_range: Optional[DateRange] = None
    treatment_type: Optional[TreatmentType] = None


class ExportedCsv(BaseModel):
    sha256: str
    encoding: str = Field(default="utf-8")
    filename: str
    content_b64: str


class ExportSummary(BaseModel):
    rows: int = 0
    filtered_out: int = 0


class ExportResponse(BaseModel):
    csv: ExportedCsv
    summary: ExportSummary


class ImportSummary(BaseModel):
    rows: int = 0


class ImportResponse(BaseModel):
    entries: List[JournalEntry] = Field(default_factory=list)
    summary: ImportSummary


class ImportErrorDetail(BaseModel):
    error: str
    row: Optional[int] = None
    message: str


class HealthResponse(BaseModel):
    ok: bool = True
