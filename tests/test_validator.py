"""Tests for fingering dataset validation and extraction."""

import logging

import pytest

from chord_fingering import (
    FingeringRecord,
    extract_fingering_records,
    format_report,
    validate_fingering_dataset,
)
from chord_fingering.caged import caged_fingerings
from chord_fingering.fingers import build_fingering
from chord_fingering.validator import coerce_record, detect_issues, is_valid_fingering

TS_SOURCE = """
export const CHORDS: ChordFingering[] = [
  {
    id: 'C-major-open',
    frets: [0, 1, 0, 2, 3, null],
    fingers: [null, 1, null, 2, 3, null],
    baseFret: 1,
    barres: [],
  },
  { frets: [1, 1, 2, 3, 3, 1], fingers: [1, 1, 2, 3, 4, 1], baseFret: 1, isDefault: true },
  {
    id: "C-bad",
    frets: [0, 8, 0, 2, 3, null],
    fingers: [null, 5, null, 2, 3, null],
    baseFret: 1,
  },
];
"""


def record(frets, fingers, base_fret, record_id="test"):
    return FingeringRecord(id=record_id, frets=tuple(frets), fingers=tuple(fingers), base_fret=base_fret)


def issue_types(rec):
    return [issue.issue_type for issue in detect_issues(rec)]


class TestDetectIssues:
    def test_open_c_is_clean(self):
        assert issue_types(record([0, 1, 0, 2, 3, None], [None, 1, None, 2, 3, None], 1)) == []

    def test_three_distinct_fingers_on_five_strings(self):
        rec = record([3, 5, 5, 5, 3, None], [1, 3, 3, 3, 2, None], 3)
        assert issue_types(rec) == []

    def test_four_distinct_fingers_allowed(self):
        rec = record([3, 5, 5, 5, 3, 6], [1, 3, 3, 3, 2, 4], 3)
        assert "too_many_fingers" not in issue_types(rec)

    def test_five_distinct_fingers(self):
        rec = record([1, 2, 3, 4, 5, None], [1, 2, 3, 4, 5, None], 1)
        assert issue_types(rec) == ["too_many_fingers", "fret_range_exceeded", "invalid_finger_value"]

    def test_fret_outside_window(self):
        rec = record([0, 8, 0, 2, 3, None], [None, 1, None, 2, 3, None], 1)
        issues = detect_issues(rec)
        assert [issue.issue_type for issue in issues] == ["fret_range_exceeded"]
        assert issues[0].details == (
            "Frets span 7 frets (min: 2, max: 8, baseFret: 1). Frets outside range: [8]"
        )

    def test_fret_below_base(self):
        rec = record([3, 5, 5, 5, 3, None], [1, 3, 3, 3, 2, None], 4)
        assert issue_types(rec) == ["fret_range_exceeded"]

    def test_invalid_finger_value(self):
        rec = record([0, 1, 0, 2, 3, None], [None, 5, None, 2, 3, None], 1)
        issues = detect_issues(rec)
        assert [issue.issue_type for issue in issues] == ["invalid_finger_value"]
        assert issues[0].details == "Invalid finger values: [5] (valid: 1-4 or null)"

    def test_zero_finger_is_invalid(self):
        rec = record([0, 1, 0, 2, 3, None], [0, 1, None, 2, 3, None], 1)
        assert issue_types(rec) == ["invalid_finger_value"]

    def test_issue_carries_record(self):
        rec = record([0, 8, 0, 2, 3, None], [None, 1, None, 2, 3, None], 1, record_id="C-bad")
        issue = detect_issues(rec)[0]
        assert issue.record_id == "C-bad"
        assert issue.frets == rec.frets
        assert issue.base_fret == 1


class TestEngineFingerings:
    def test_caged_forms_are_valid(self):
        for root in range(12):
            for fingering in caged_fingerings(root, "maj"):
                assert is_valid_fingering(fingering)

    def test_built_fingering_is_valid(self):
        assert is_valid_fingering(build_fingering("x", (3, 3, 4, 5, 5, 3)))


class TestValidateDataset:
    def test_grouped_by_type(self):
        report = validate_fingering_dataset(
            [
                record([0, 1, 0, 2, 3, None], [None, 1, None, 2, 3, None], 1, "ok"),
                record([0, 8, 0, 2, 3, None], [None, 1, None, 2, 3, None], 1, "range"),
                record([0, 1, 0, 2, 3, None], [None, 5, None, 2, 3, None], 1, "finger"),
            ]
        )
        assert report.total_records == 3
        assert report.count("fret_range_exceeded") == 1
        assert report.count("invalid_finger_value") == 1
        assert report.count("too_many_fingers") == 0
        assert report.total == 2
        assert not report.is_clean

    def test_accepts_mappings_and_fingerings(self):
        report = validate_fingering_dataset(
            [
                {"id": "json", "frets": [0, 1, 0, 2, 3, None], "fingers": [None, 1, None, 2, 3, None], "baseFret": 1},
                {"frets": (3, 5, 5, 5, 3, None), "fingers": (1, 3, 3, 3, 2, None), "base_fret": 3},
                build_fingering("engine", (1, 1, 2, 3, 3, 1)),
            ]
        )
        assert report.total_records == 3
        assert report.skipped == 0
        assert report.is_clean

    @pytest.mark.parametrize(
        "item",
        [
            None,
            42,
            "C",
            {"frets": [0, 1, 0, 2, 3, None], "fingers": [None, 1, None, 2, 3, None]},
            {"frets": "x32010", "fingers": [None, 1, None, 2, 3, None], "baseFret": 1},
            {"frets": [0, 1, "a"], "fingers": [None], "baseFret": 1},
            {"frets": [0, 1, 0, 2, 3, None], "fingers": [None, 1, None, 2, 3, None], "baseFret": "1"},
        ],
    )
    def test_malformed_records_skipped(self, item, caplog):
        with caplog.at_level(logging.WARNING, logger="chord_fingering.validator"):
            report = validate_fingering_dataset([item], source="chords.json")
        assert report.skipped == 1
        assert report.total_records == 0
        assert "Skipping malformed fingering record #0" in caplog.text

    def test_empty_dataset(self):
        report = validate_fingering_dataset([])
        assert report.total_records == 0
        assert report.is_clean

    def test_missing_id_is_unknown(self):
        rec = coerce_record({"frets": [0], "fingers": [None], "baseFret": 1})
        assert rec.id == "unknown"


class TestExtractFingeringRecords:
    def test_typescript_source(self):
        records = extract_fingering_records(TS_SOURCE, "chords.ts")
        assert [rec.id for rec in records] == ["C-major-open", "unknown", "C-bad"]
        assert records[0].frets == (0, 1, 0, 2, 3, None)
        assert records[0].fingers == (None, 1, None, 2, 3, None)
        assert records[1].fingers == (1, 1, 2, 3, 4, 1)
        assert all(rec.base_fret == 1 for rec in records)
        assert all(rec.source == "chords.ts" for rec in records)

    def test_json_source(self):
        text = '[{"id": "G-open", "frets": [3, 0, 0, 0, 2, 3], "fingers": [3, null, null, null, 1, 2], "baseFret": 1}]'
        (rec,) = extract_fingering_records(text)
        assert rec.id == "G-open"
        assert rec.fingers == (3, None, None, None, 1, 2)

    def test_python_source(self):
        text = "{'id': 'A-barre', 'frets': (5, 5, 6, 7, 7, 5), 'fingers': (None, None, 2, 3, 4, None), 'base_fret': 5}"
        (rec,) = extract_fingering_records(text)
        assert rec.id == "A-barre"
        assert rec.frets == (5, 5, 6, 7, 7, 5)
        assert rec.base_fret == 5

    def test_no_matches(self):
        assert extract_fingering_records("const x = { name: 'C' };") == []

    def test_extracted_dataset_report(self):
        report = validate_fingering_dataset(extract_fingering_records(TS_SOURCE, "chords.ts"))
        assert report.total_records == 3
        assert report.count("fret_range_exceeded") == 1
        assert report.count("invalid_finger_value") == 1
        assert report.issues["fret_range_exceeded"][0].record_id == "C-bad"


class TestFormatReport:
    def test_clean_report(self):
        text = format_report(validate_fingering_dataset([]))
        assert "Total fingerings analyzed: 0" in text
        assert text.count("No issues found.") == 3
        assert text.endswith("Total Issues: 0")

    def test_report_with_issues(self):
        report = validate_fingering_dataset(extract_fingering_records(TS_SOURCE, "chords.ts"))
        text = format_report(report)
        assert "Total fingerings analyzed: 3" in text
        assert "[chords.ts] C-bad" in text
        assert "Invalid finger values: [5] (valid: 1-4 or null)" in text
        assert "Fret Range Exceeded: 1" in text
        assert "Too Many Fingers: 0" in text
        assert text.endswith("Total Issues: 2")

    def test_skipped_count_shown(self):
        text = format_report(validate_fingering_dataset([None]))
        assert "Malformed records skipped: 1" in text
