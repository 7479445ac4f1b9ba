from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Union

from .importer import CSVImportService
from .models import JournalEntry

logger = logging.getLogger(__name__)


class JournalStore(Protocol):
    def create(self, entry: JournalEntry) -> None:
        ...


class PendingImport:
    """
    Decoded entries waiting for the user to confirm them.

    Nothing reaches the store until confirm() is called; a failed decode
    leaves the previous pending list untouched.
    """

    def __init__(self, importer: Optional[CSVImportService] = None) -> None:
        self.importer = importer or CSVImportService()
        self.entries: List[JournalEntry] = []

    @property
    def needs_confirmation(self) -> bool:
        return bool(self.entries)

    def stage(self, data: Union[bytes, str]) -> List[JournalEntry]:
        entries = self.importer.decode(data)
        self.entries = entries
        logger.info("Staged %d entries for import", len(entries))
        return entries

    def discard(self) -> None:
        self.entries = []

    def confirm(self, store: JournalStore) -> List[str]:
        """
        Hand every staged entry to the store and clear the pending list.

        A store failure on one entry does not stop the others; the returned
        list holds one message per entry that could not be saved.
        """
        failures: List[str] = []
        for entry in self.entries:
            try:
                store.create(entry)
            except Exception as e:
                logger.error(f"Failed to import entry from {entry.session_timestamp}: {e}")
                failures.append(f"Failed to import session: {e}")
        self.entries = []
        return failures
