"""Fingering validator.

Checks fingering records against the physical constraints of a fretting hand:

- too_many_fingers: more than four distinct finger values
- fret_range_exceeded: a pressed fret outside ``[base_fret, base_fret + 3]``
- invalid_finger_value: a finger value other than 1-4 or null

Records can be engine :class:`Fingering` objects, :class:`FingeringRecord`
objects, or plain mappings (e.g., loaded from JSON). Records can also be
scraped from source text with :func:`extract_fingering_records`.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from chord_fingering.fingers import MAX_FINGERS
from chord_fingering.models import Fingering

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

IssueType = Literal["too_many_fingers", "fret_range_exceeded", "invalid_finger_value"]

ISSUE_TYPES: tuple[IssueType, ...] = ("too_many_fingers", "fret_range_exceeded", "invalid_finger_value")

ISSUE_TITLES: dict[IssueType, str] = {
    "too_many_fingers": "Too Many Fingers (5+ distinct fingers)",
    "fret_range_exceeded": "Fret Range Exceeded (4+ frets span)",
    "invalid_finger_value": "Invalid Finger Values",
}

# Frets reachable from the base fret without shifting the hand
WINDOW_FRETS = 4

# Matches fingering objects in TypeScript, JSON or Python source, e.g.
# { id: 'C-open', frets: [0, 1, 0, 2, 3, null], fingers: [...], baseFret: 1 }
FINGERING_RE = re.compile(
    r"\{\s*(?:[\"']?id[\"']?\s*[:=]\s*[\"'`]([^\"'`]+)[\"'`],?\s*)?"
    r"[^{}]*?[\"']?frets[\"']?\s*[:=]\s*[\[(]([^\])]+)[\])]"
    r"[^{}]*?[\"']?fingers[\"']?\s*[:=]\s*[\[(]([^\])]+)[\])]"
    r"[^{}]*?[\"']?base_?[fF]ret[\"']?\s*[:=]\s*(\d+)",
    re.DOTALL,
)

_NULL_TOKENS = frozenset({"", "null", "None", "undefined"})


@dataclass(frozen=True)
class FingeringRecord:
    """A fingering as stored in a dataset.

    Parameters
    ----------
    id : str
        Record identifier ("unknown" when the source has none).
    frets : tuple[int | None, ...]
        Fret per string (None = muted, 0 = open).
    fingers : tuple[int | None, ...]
        Finger per string (None = open, muted or barred).
    base_fret : int
        First fret of the diagram window.
    source : str
        Where the record came from (file name, provider, ...).
    """

    id: str
    frets: tuple[int | None, ...]
    fingers: tuple[int | None, ...]
    base_fret: int
    source: str = ""

    @classmethod
    def from_fingering(cls, fingering: Fingering, source: str = "") -> FingeringRecord:
        """Build a record from an engine fingering."""
        return cls(
            id=fingering.id,
            frets=fingering.layout_key,
            fingers=fingering.fingers,
            base_fret=fingering.base_fret,
            source=source,
        )


@dataclass(frozen=True)
class ValidationIssue:
    """One problem found in one record."""

    record_id: str
    issue_type: IssueType
    details: str
    source: str = ""
    frets: tuple[int | None, ...] = ()
    fingers: tuple[int | None, ...] = ()
    base_fret: int = 1


@dataclass(frozen=True)
class ValidationReport:
    """Issues found in a dataset, grouped by issue type.

    Parameters
    ----------
    issues : dict[IssueType, list[ValidationIssue]]
        Issues per type, in record order.
    total_records : int
        Records checked (excluding skipped ones).
    skipped : int
        Malformed records that could not be checked.
    """

    issues: dict[IssueType, list[ValidationIssue]] = field(
        default_factory=lambda: {issue_type: [] for issue_type in ISSUE_TYPES}
    )
    total_records: int = 0
    skipped: int = 0

    def count(self, issue_type: IssueType) -> int:
        """Number of issues of one type."""
        return len(self.issues.get(issue_type, []))

    @property
    def total(self) -> int:
        """Number of issues of every type."""
        return sum(len(found) for found in self.issues.values())

    @property
    def is_clean(self) -> bool:
        return self.total == 0


def _format_values(values: Sequence[int | None]) -> str:
    return ", ".join("null" if value is None else str(value) for value in values)


def detect_issues(record: FingeringRecord) -> list[ValidationIssue]:
    """Check one record against the three fingering constraints.

    Parameters
    ----------
    record : FingeringRecord
        The record to check.

    Returns
    -------
    list[ValidationIssue]
        Issues in ``ISSUE_TYPES`` order; empty for a playable fingering.

    Examples
    --------
    >>> record = FingeringRecord("C", (0, 8, 0, 2, 3, None), (None, 1, None, 2, 3, None), 1)
    >>> [issue.issue_type for issue in detect_issues(record)]
    ['fret_range_exceeded']
    """
    issues: list[ValidationIssue] = []

    def report(issue_type: IssueType, details: str) -> None:
        issues.append(
            ValidationIssue(
                record_id=record.id,
                issue_type=issue_type,
                details=details,
                source=record.source,
                frets=record.frets,
                fingers=record.fingers,
                base_fret=record.base_fret,
            )
        )

    distinct = {finger for finger in record.fingers if finger is not None}
    if len(distinct) > MAX_FINGERS:
        report(
            "too_many_fingers",
            f"{len(distinct)} distinct fingers used (fingers: [{_format_values(record.fingers)}])",
        )

    pressed = [fret for fret in record.frets if fret is not None and fret > 0]
    if pressed:
        low, high = min(pressed), max(pressed)
        top = record.base_fret + WINDOW_FRETS - 1
        outside = [fret for fret in pressed if not record.base_fret <= fret <= top]
        if outside:
            report(
                "fret_range_exceeded",
                f"Frets span {high - low + 1} frets (min: {low}, max: {high}, "
                f"baseFret: {record.base_fret}). Frets outside range: [{_format_values(outside)}]",
            )

    invalid = [finger for finger in record.fingers if finger is not None and not 1 <= finger <= MAX_FINGERS]
    if invalid:
        report(
            "invalid_finger_value",
            f"Invalid finger values: [{_format_values(invalid)}] (valid: 1-{MAX_FINGERS} or null)",
        )

    return issues


def check_fingering(fingering: Fingering) -> list[ValidationIssue]:
    """Issues of an engine fingering (empty when it is playable)."""
    return detect_issues(FingeringRecord.from_fingering(fingering))


def is_valid_fingering(fingering: Fingering) -> bool:
    """Whether an engine fingering satisfies every constraint."""
    return not check_fingering(fingering)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _coerce_values(values: object) -> tuple[int | None, ...] | None:
    if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
        return None
    if not all(value is None or _is_int(value) for value in values):
        return None
    return tuple(values)


def coerce_record(item: object, source: str = "") -> FingeringRecord | None:
    """Turn a fingering, record or mapping into a :class:`FingeringRecord`.

    Mappings may spell the base fret ``base_fret`` or ``baseFret``; a missing
    id becomes "unknown".

    Returns
    -------
    FingeringRecord | None
        The record, or None if ``item`` is malformed.
    """
    if isinstance(item, FingeringRecord):
        return item
    if isinstance(item, Fingering):
        return FingeringRecord.from_fingering(item, source)
    if not isinstance(item, Mapping):
        return None

    frets = _coerce_values(item.get("frets"))
    fingers = _coerce_values(item.get("fingers"))
    base_fret = item.get("base_fret", item.get("baseFret"))
    if frets is None or fingers is None or not _is_int(base_fret):
        return None

    return FingeringRecord(
        id=str(item.get("id") or "unknown"),
        frets=frets,
        fingers=fingers,
        base_fret=base_fret,
        source=str(item.get("source", source)),
    )


def validate_fingering_dataset(records: Iterable[object], source: str = "") -> ValidationReport:
    """Check every record of a dataset.

    Parameters
    ----------
    records : Iterable[object]
        Fingerings, records or mappings. Malformed entries are skipped and
        counted, never raised on.
    source : str
        Source label for entries that carry none.

    Returns
    -------
    ValidationReport
        Issues grouped by type.

    Examples
    --------
    >>> report = validate_fingering_dataset([
    ...     {"id": "C", "frets": [0, 1, 0, 2, 3, None], "fingers": [None, 1, None, 2, 3, None], "baseFret": 1},
    ...     {"id": "bad", "fingers": [1]},
    ... ])
    >>> report.total_records, report.skipped, report.total
    (1, 1, 0)
    """
    grouped: dict[IssueType, list[ValidationIssue]] = {issue_type: [] for issue_type in ISSUE_TYPES}
    total = 0
    skipped = 0

    for index, item in enumerate(records):
        record = coerce_record(item, source)
        if record is None:
            logger.warning("Skipping malformed fingering record #%d from %r", index, source or "<input>")
            skipped += 1
            continue
        total += 1
        for issue in detect_issues(record):
            grouped[issue.issue_type].append(issue)

    return ValidationReport(issues=grouped, total_records=total, skipped=skipped)


def _parse_values(text: str) -> tuple[int | None, ...]:
    values: list[int | None] = []
    for token in (raw.strip() for raw in text.split(",")):
        if token in _NULL_TOKENS:
            values.append(None)
            continue
        try:
            values.append(int(token))
        except ValueError:
            values.append(None)
    return tuple(values)


def extract_fingering_records(text: str, source: str = "") -> list[FingeringRecord]:
    """Scrape fingering objects out of source text.

    Finds ``frets``, ``fingers`` and ``baseFret`` (or ``base_fret``) fields
    inside one brace-delimited object, optionally preceded by an ``id``.
    Unparseable array entries become None.

    Parameters
    ----------
    text : str
        TypeScript, JSON or Python source.
    source : str
        Source label stored on each record.

    Returns
    -------
    list[FingeringRecord]
        Records in order of appearance.

    Examples
    --------
    >>> text = "{ id: 'C-open', frets: [0, 1, 0, 2, 3, null], fingers: [null, 1, null, 2, 3, null], baseFret: 1 }"
    >>> record = extract_fingering_records(text, "chords.ts")[0]
    >>> record.id, record.frets, record.base_fret
    ('C-open', (0, 1, 0, 2, 3, None), 1)
    """
    return [
        FingeringRecord(
            id=match.group(1) or "unknown",
            frets=_parse_values(match.group(2)),
            fingers=_parse_values(match.group(3)),
            base_fret=int(match.group(4)),
            source=source,
        )
        for match in FINGERING_RE.finditer(text)
    ]


def format_report(report: ValidationReport) -> str:
    """Render a report as plain text, one section per issue type plus a summary."""
    lines = [
        f"Total fingerings analyzed: {report.total_records}",
    ]
    if report.skipped:
        lines.append(f"Malformed records skipped: {report.skipped}")
    lines += [f"Total issues found: {report.total}", ""]

    for issue_type in ISSUE_TYPES:
        lines += [f"--- {ISSUE_TITLES[issue_type]} ---", ""]
        found = report.issues.get(issue_type, [])
        if not found:
            lines += ["No issues found.", ""]
            continue
        for issue in found:
            prefix = f"[{issue.source}] " if issue.source else ""
            lines.append(f"{prefix}{issue.record_id}")
            lines.append(f"  {issue.details}")
            if issue_type == "invalid_finger_value":
                lines.append(f"  fingers: [{_format_values(issue.fingers)}]")
            else:
                lines.append(f"  frets: [{_format_values(issue.frets)}]")
                lines.append(f"  baseFret: {issue.base_fret}")
            lines.append("")

    lines += ["SUMMARY"]
    lines += [f"{ISSUE_TITLES[issue_type].split(' (')[0]}: {report.count(issue_type)}" for issue_type in ISSUE_TYPES]
    lines.append(f"Total Issues: {report.total}")
    return "\n".join(lines)
