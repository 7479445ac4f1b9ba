from .errors import CSVImportError, InvalidHeader, InvalidRow, ParseFailure
from .export import CSVExportService
from .importer import CSVImportService
from .models import JournalEntry
from .staging import JournalStore, PendingImport
from .vocabulary import AdministrationMethod, MusicLinkProvider, TreatmentType

__all__ = [
    "AdministrationMethod",
    "CSVExportService",
    "CSVImportError",
    "CSVImportService",
    "InvalidHeader",
    "InvalidRow",
    "JournalEntry",
    "JournalStore",
    "MusicLinkProvider",
    "ParseFailure",
    "PendingImport",
    "TreatmentType",
]
