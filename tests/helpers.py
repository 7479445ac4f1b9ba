from datetime import datetime, timezone

from journal_csv.models import JournalEntry
from journal_csv.rules import HEADER
from journal_csv.vocabulary import AdministrationMethod, TreatmentType


def utc(year, month, day, hour=0, minute=0):
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


def make_entry(**overrides):
    fields = {
        "session_timestamp": utc(2024, 12, 1, 10, 30),
        "treatment_type": TreatmentType.psilocybin,
        "administration": AdministrationMethod.oral,
        "intention": "Grounding",
        "mood_before": 4,
        "mood_after": 7,
        "reflections": "Deep breath",
        "music_link_url": None,
    }
    fields.update(overrides)
    return JournalEntry(**fields)


def csv_with_rows(*rows):
    return HEADER + "\n" + "\n".join(rows)
