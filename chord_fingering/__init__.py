"""Guitar chord fingering engine.

This library turns chord symbols into playable six-string fingerings for a
standard-tuned guitar: a voicing search over the four highest strings, movable
CAGED forms, barre and finger assignment, difficulty classification,
transposition and a validator for fingering datasets.

Examples
--------
>>> from chord_fingering import parse_chord_symbol, generate_fingerings

>>> # Parse a chord symbol
>>> symbol = parse_chord_symbol("Cm7-5")
>>> symbol.root, symbol.quality
(0, 'hdim7')

>>> # Ranked fingerings, default first
>>> fingerings = generate_fingerings(parse_chord_symbol("C"))
>>> fingerings[0].id, fingerings[0].frets
('C-C-open', (0, 1, 0, 2, 3, None))

>>> # Transposition
>>> from chord_fingering import transpose_chord_symbol
>>> transpose_chord_symbol("Am7", 3)
'Cm7'
"""

from chord_fingering.aggregator import generate_fingering, generate_fingerings, generate_fingerings_for
from chord_fingering.caged import caged_fingerings
from chord_fingering.difficulty import classify_difficulty
from chord_fingering.fingers import assign_fingers
from chord_fingering.models import ChordSymbol, Difficulty, FingerLayout, Fingering
from chord_fingering.parser import (
    ParseError,
    UnrecognizedQuality,
    UnrecognizedRoot,
    is_chord_symbol,
    parse_chord_symbol,
)
from chord_fingering.search import search_voicings, slash_voicings
from chord_fingering.transpose import transpose_chord_symbol, transpose_fingering, transpose_note
from chord_fingering.validator import (
    FingeringRecord,
    ValidationIssue,
    ValidationReport,
    extract_fingering_records,
    format_report,
    validate_fingering_dataset,
)

__all__ = [
    "ChordSymbol",
    "Difficulty",
    "FingerLayout",
    "Fingering",
    "FingeringRecord",
    "ParseError",
    "UnrecognizedQuality",
    "UnrecognizedRoot",
    "ValidationIssue",
    "ValidationReport",
    "assign_fingers",
    "caged_fingerings",
    "classify_difficulty",
    "extract_fingering_records",
    "format_report",
    "generate_fingering",
    "generate_fingerings",
    "generate_fingerings_for",
    "is_chord_symbol",
    "parse_chord_symbol",
    "search_voicings",
    "slash_voicings",
    "transpose_chord_symbol",
    "transpose_fingering",
    "transpose_note",
    "validate_fingering_dataset",
]
