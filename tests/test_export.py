import base64
import hashlib
import io

from journal_csv.export import CSVExportService, export_csv_envelope, filter_entries
from journal_csv.rules import HEADER
from journal_csv.vocabulary import AdministrationMethod, TreatmentType

from helpers import make_entry, utc


def lines_of(data: bytes):
    return data.decode("utf-8").split("\n")


def test_exports_expected_columns_and_data(entry):
    data = CSVExportService().encode([entry])
    lines = lines_of(data)

    assert lines[0] == HEADER
    assert lines[1] == (
        '"Dec 1, 2024 at 10:30 AM",Psilocybin,Oral,Grounding,4,7,'
        "Deep breath,https://open.spotify.com/playlist/abc123"
    )
    assert lines[2] == ""


def test_empty_export_is_header_only():
    assert CSVExportService().encode([]) == (HEADER + "\n").encode("utf-8")


def test_output_has_no_bom(entry):
    assert CSVExportService().encode([entry]).startswith(b"Date,")


def test_empty_fields_are_quoted():
    data = CSVExportService().encode([make_entry(intention="", reflections="")])
    assert lines_of(data)[1].endswith(',"",4,7,"",""')


def test_moods_are_bare_integers():
    data = CSVExportService().encode([make_entry(mood_before=-3, mood_after=15)])
    assert ",-3,15," in lines_of(data)[1]


def test_display_names_are_used():
    entry = make_entry(treatment_type=TreatmentType.lsd, administration=AdministrationMethod.intramuscular)
    row = lines_of(CSVExportService().encode([entry]))[1]
    assert ",LSD,Intramuscular," in row


def test_escapes_quotes_commas_newlines():
    entry = make_entry(intention='Hello, "World"', reflections="Line1\nLine2")
    csv = CSVExportService().encode([entry]).decode("utf-8")
    assert '"Hello, ""World"""' in csv
    assert '"Line1\nLine2"' in csv


def test_guards_against_formula_injection():
    entry = make_entry(intention='=HYPERLINK("evil")', reflections="@bad")
    csv = CSVExportService().encode([entry]).decode("utf-8")
    assert "'=HYPERLINK" in csv
    assert "'@bad" in csv


def test_guards_plus_and_minus():
    csv = CSVExportService().encode([make_entry(intention="+cmd", reflections="-2-2")]).decode("utf-8")
    assert ",'+cmd," in csv
    assert ",'-2-2," in csv


def test_filters_by_date_range():
    in_range = make_entry(session_timestamp=utc(2024, 12, 1), intention="inside")
    out_of_range = make_entry(session_timestamp=utc(2024, 10, 1), intention="outside")

    data = CSVExportService().encode(
        [in_range, out_of_range],
        date_range=(utc(2024, 11, 1), utc(2024, 12, 31)),
    )
    lines = [line for line in lines_of(data) if line]
    assert len(lines) == 2
    assert "inside" in lines[1]


def test_date_range_is_inclusive():
    start = make_entry(session_timestamp=utc(2024, 11, 1), intention="start")
    end = make_entry(session_timestamp=utc(2024, 12, 31), intention="end")

    kept = filter_entries([start, end], (utc(2024, 11, 1), utc(2024, 12, 31)))
    assert [e.intention for e in kept] == ["start", "end"]


def test_filters_by_treatment_type():
    match = make_entry(treatment_type=TreatmentType.psilocybin)
    non_match = make_entry(treatment_type=TreatmentType.ketamine)

    csv = CSVExportService().encode([match, non_match], treatment_type=TreatmentType.psilocybin).decode("utf-8")
    lines = [line for line in csv.split("\n") if line]
    assert len(lines) == 2
    assert "Psilocybin" in lines[1]
    assert "Ketamine" not in csv


def test_filters_combine():
    entries = [
        make_entry(session_timestamp=utc(2024, 12, 1), treatment_type=TreatmentType.lsd),
        make_entry(session_timestamp=utc(2024, 12, 2), treatment_type=TreatmentType.mdma),
        make_entry(session_timestamp=utc(2023, 1, 1), treatment_type=TreatmentType.lsd),
    ]
    kept = filter_entries(entries, (utc(2024, 1, 1), utc(2024, 12, 31)), TreatmentType.lsd)
    assert len(kept) == 1
    assert kept[0].session_timestamp == utc(2024, 12, 1)


def test_keeps_input_order():
    entries = [
        make_entry(session_timestamp=utc(2024, 12, 3), intention="third"),
        make_entry(session_timestamp=utc(2024, 12, 1), intention="first"),
    ]
    lines = lines_of(CSVExportService().encode(entries))
    assert "third" in lines[1]
    assert "first" in lines[2]


def test_write_to_sink(entry):
    sink = io.BytesIO()
    service = CSVExportService()
    written = service.write([entry], sink)
    assert sink.getvalue() == service.encode([entry])
    assert written == len(sink.getvalue())


def test_export_filename():
    assert CSVExportService(filename="Afterflow-Export").export_filename() == "Afterflow-Export.csv"


def test_exports_one_thousand_entries():
    entries = [
        make_entry(session_timestamp=utc(2024, 12, 1, i // 60 % 24, i % 60), intention=f"Intention {i}")
        for i in range(1000)
    ]
    data = CSVExportService().encode(entries)
    lines = [line for line in lines_of(data) if line]
    assert len(lines) == 1001


def test_envelope_counts_filtered_rows():
    entries = [
        make_entry(treatment_type=TreatmentType.lsd, intention="keep"),
        make_entry(treatment_type=TreatmentType.mdma, intention="drop"),
    ]
    service = CSVExportService()
    envelope = export_csv_envelope(service, entries, treatment_type=TreatmentType.lsd)

    assert envelope["summary"] == {"rows": 1, "filtered_out": 1}
    data = base64.b64decode(envelope["csv"]["content_b64"])
    assert data == service.encode(entries, treatment_type=TreatmentType.lsd)
    assert envelope["csv"]["sha256"] == hashlib.sha256(data).hexdigest()
