"""Pitch class operations for the guitar fretboard.

This module provides pitch class (0-11) lookups for note names, open
strings and fretted positions, and the required pitch classes of a chord
quality on a given root.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from chord_fingering.qualities import QUALITY_INTERVALS

# Note name to pitch class (0-11, where C=0)
NOTE_TO_PC: dict[str, int] = {
    "C": 0,
    "C#": 1,
    "Db": 1,
    "D": 2,
    "D#": 3,
    "Eb": 3,
    "E": 4,
    "Fb": 4,
    "E#": 5,
    "F": 5,
    "F#": 6,
    "Gb": 6,
    "G": 7,
    "G#": 8,
    "Ab": 8,
    "A": 9,
    "A#": 10,
    "Bb": 10,
    "B": 11,
    "Cb": 11,
    "B#": 0,
}

# Pitch class to sharp note name (sharps are the canonical spelling)
PC_TO_NOTE: tuple[str, ...] = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")

# Open string pitch classes, first (high e) to sixth (low E) string
OPEN_STRINGS: tuple[int, ...] = (4, 11, 7, 2, 9, 4)

# Unicode accidentals accepted in note names
_ACCIDENTAL_ALIASES: dict[str, str] = {"♯": "#", "♭": "b"}


def normalize_accidentals(text: str) -> str:
    """Replace unicode sharp/flat signs with ``#``/``b``.

    Examples
    --------
    >>> normalize_accidentals("F♯m")
    'F#m'
    """
    for alias, ascii_sign in _ACCIDENTAL_ALIASES.items():
        text = text.replace(alias, ascii_sign)
    return text


def note_to_pc(note: str) -> int:
    """Convert a note name to pitch class (0-11).

    Parameters
    ----------
    note : str
        Note name (e.g., "C", "F#", "Bb", "E♭").

    Returns
    -------
    int
        Pitch class (0-11, where C=0).

    Raises
    ------
    ValueError
        If the note name is not recognized.

    Examples
    --------
    >>> note_to_pc("F#")
    6
    >>> note_to_pc("B♭")
    10
    """
    normalized = normalize_accidentals(note)
    if normalized in NOTE_TO_PC:
        return NOTE_TO_PC[normalized]
    msg = f"Unknown note: {note}"
    raise ValueError(msg)


def pc_to_note(pc: int) -> str:
    """Spell a pitch class with the sharp-preferred name.

    Examples
    --------
    >>> pc_to_note(10)
    'A#'
    >>> pc_to_note(-1)
    'B'
    """
    return PC_TO_NOTE[pc % 12]


def open_string_pitch(string_index: int) -> int:
    """Pitch class of an open string (index 0 = first string)."""
    return OPEN_STRINGS[string_index]


def note_at(string_index: int, fret: int) -> int:
    """Pitch class sounded by ``string_index`` stopped at ``fret``.

    Examples
    --------
    >>> note_at(5, 3)  # sixth string, third fret
    7
    >>> note_at(0, 0)
    4
    """
    return (OPEN_STRINGS[string_index] + fret) % 12


def fretboard_grid(max_fret: int) -> NDArray[np.int64]:
    """Pitch class of every (string, fret) position up to ``max_fret``.

    Columns past fret 12 repeat the open-position columns an octave higher,
    so a window above the twelfth fret finds its octave-shifted matches.

    Parameters
    ----------
    max_fret : int
        Highest fret to include.

    Returns
    -------
    NDArray[np.int64]
        Array of shape ``(6, max_fret + 1)``.

    Examples
    --------
    >>> grid = fretboard_grid(12)
    >>> grid.shape
    (6, 13)
    >>> int(grid[1, 1])  # B string, first fret
    0
    """
    opens = np.array(OPEN_STRINGS, dtype=np.int64)
    frets = np.arange(max_fret + 1, dtype=np.int64)
    return (opens[:, None] + frets[None, :]) % 12


def quality_intervals(quality: str) -> tuple[int, ...]:
    """Interval table of a quality, compound intervals kept verbatim.

    Raises
    ------
    ValueError
        If the quality is not recognized.

    Examples
    --------
    >>> quality_intervals("9")
    (0, 4, 7, 10, 14)
    """
    if quality in QUALITY_INTERVALS:
        return QUALITY_INTERVALS[quality]
    msg = f"Unknown quality: {quality}"
    raise ValueError(msg)


def ordered_pitch_classes(root: int, quality: str) -> tuple[int, ...]:
    """Required pitch classes in interval order, duplicates removed.

    Examples
    --------
    >>> ordered_pitch_classes(9, "min7")
    (9, 0, 4, 7)
    """
    pcs = ((root + interval) % 12 for interval in quality_intervals(quality))
    return tuple(dict.fromkeys(pcs))


def required_pitch_classes(root: int, quality: str) -> frozenset[int]:
    """Pitch classes a voicing must sound to spell the chord.

    Parameters
    ----------
    root : int
        Root pitch class.
    quality : str
        Quality identifier.

    Returns
    -------
    frozenset[int]
        Set of pitch classes (0-11).

    Examples
    --------
    >>> sorted(required_pitch_classes(0, "hdim7"))
    [0, 3, 6, 10]
    >>> sorted(required_pitch_classes(0, "add9"))
    [0, 2, 4, 7]
    """
    return frozenset(ordered_pitch_classes(root, quality))
