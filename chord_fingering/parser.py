"""Chord symbol parser.

Parses lead-sheet chord symbols (e.g., "Cm7-5", "G/B", "F#dim7") into
:class:`~chord_fingering.models.ChordSymbol` records. Root, quality and
slash bass are read by pychord; quality tokens pychord does not ship are
registered with its :class:`~pychord.QualityManager` on import.
"""

from __future__ import annotations

import re

from pychord import Chord as PyChord
from pychord import QualityManager
from pychord.utils import note_to_val

from chord_fingering.models import ChordSymbol
from chord_fingering.pitch_class import normalize_accidentals
from chord_fingering.qualities import QUALITY_INTERVALS, SUFFIX_TO_QUALITY

# Semitones above the root to pychord interval names
INTERVAL_NAMES: dict[int, str] = {
    0: "1",
    2: "2",
    3: "b3",
    4: "3",
    5: "4",
    6: "b5",
    7: "5",
    8: "#5",
    9: "6",
    10: "b7",
    11: "7",
    14: "9",
    15: "#9",
}

# A slash followed by a digit, which pychord reads as an inversion
INVERSION_RE = re.compile(r"/\d")


class ParseError(ValueError):
    """Raised when a chord symbol cannot be parsed.

    Parameters
    ----------
    text : str
        The text that failed to parse.
    message : str
        Human-readable description.
    """

    def __init__(self, text: str, message: str) -> None:
        super().__init__(message)
        self.text = text


class UnrecognizedRoot(ParseError):
    """The root (or slash bass) is not a note name."""


class UnrecognizedQuality(ParseError):
    """The suffix after the root is not a known quality token."""


def register_qualities() -> None:
    """Register every suffix token pychord does not already know.

    Tokens pychord ships keep pychord's definition. Tokens containing a
    slash ("6/9") are left out because pychord splits on it.
    """
    manager = QualityManager()
    known = manager.get_qualities()
    for suffix, quality in SUFFIX_TO_QUALITY.items():
        if suffix in known or "/" in suffix:
            continue
        manager.set_quality(suffix, tuple(INTERVAL_NAMES[i] for i in QUALITY_INTERVALS[quality]))


register_qualities()


def _read(body: str, original: str) -> PyChord:
    """Parse ``body`` with pychord, translating its errors."""
    try:
        return PyChord(body)
    except ValueError as exc:
        # pychord raises "Unknown quality: ..." or "Invalid note ..."
        if str(exc).startswith("Unknown quality"):
            msg = f"Unrecognized chord quality in '{original}': {exc}"
            raise UnrecognizedQuality(original, msg) from exc
        msg = f"Unrecognized root in chord symbol: '{original}'"
        raise UnrecognizedRoot(original, msg) from exc


def parse_chord_symbol(text: str) -> ChordSymbol:
    """Parse a chord symbol string.

    Parameters
    ----------
    text : str
        Chord symbol (e.g., "Cm7-5", "G/B", "B♭maj7", "C6/9").

    Returns
    -------
    ChordSymbol
        The parsed symbol. An empty suffix is a major triad.

    Raises
    ------
    UnrecognizedRoot
        If the root or bass is not a note name.
    UnrecognizedQuality
        If the suffix is not a known quality token.

    Examples
    --------
    >>> parse_chord_symbol("Cm7-5")
    ChordSymbol(root=0, quality='hdim7', bass=None, suffix='m7-5')
    >>> parse_chord_symbol("G/B").bass
    11
    >>> parse_chord_symbol("Db").root
    1
    """
    original = text
    body = normalize_accidentals(text.strip())
    if not body:
        msg = "Empty chord symbol"
        raise UnrecognizedRoot(original, msg)

    six_nine = "6/9" in body
    if six_nine:
        body = body.replace("6/9", "69", 1)
    if INVERSION_RE.search(body):
        msg = f"Invalid bass note in slash chord: '{original}'"
        raise UnrecognizedRoot(original, msg)

    try:
        chord = _read(body, original)
        suffix = chord.quality.quality
    except UnrecognizedQuality:
        head = body.split("/", 1)[0]
        if head[1:2] != "b" or head[1:] not in SUFFIX_TO_QUALITY:
            raise
        # "Cblk" is C with a "blk" suffix, not C flat with "lk"
        chord = _read(head[0] + body[len(head) :], original)
        suffix = head[1:]

    if six_nine:
        suffix = suffix.replace("69", "6/9")
    if suffix not in SUFFIX_TO_QUALITY:
        msg = f"Unrecognized chord quality '{suffix}' in '{original}'"
        raise UnrecognizedQuality(original, msg)

    return ChordSymbol(
        root=note_to_val(chord.root),
        quality=SUFFIX_TO_QUALITY[suffix],
        bass=note_to_val(chord.on) if chord.on else None,
        suffix=suffix,
    )


def is_chord_symbol(text: str) -> bool:
    """Check whether ``text`` parses as a chord symbol.

    Examples
    --------
    >>> is_chord_symbol("F#dim7")
    True
    >>> is_chord_symbol("Hello")
    False
    """
    try:
        parse_chord_symbol(text)
    except ParseError:
        return False
    return True
