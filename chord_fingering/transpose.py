"""Transposition of chord symbols and fingerings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chord_fingering.caged import shift_frets
from chord_fingering.fingers import build_fingering
from chord_fingering.parser import parse_chord_symbol
from chord_fingering.pitch_class import note_to_pc, pc_to_note
from chord_fingering.qualities import QUALITY_TO_SUFFIX

if TYPE_CHECKING:
    from chord_fingering.models import Fingering

# Highest fret on the neck
MAX_FRET = 24


def transpose_note(note: str, semitones: int) -> str:
    """Transpose a note name, spelling the result with sharps.

    Examples
    --------
    >>> transpose_note("A", 3)
    'C'
    >>> transpose_note("Db", -2)
    'B'
    """
    return pc_to_note(note_to_pc(note) + semitones)


def _render(root: int, suffix: str, bass: int | None) -> str:
    result = f"{pc_to_note(root)}{suffix}"
    if bass is not None:
        result = f"{result}/{pc_to_note(bass)}"
    return result


def transpose_chord_symbol(text: str, semitones: int) -> str:
    """Transpose a chord symbol by a number of semitones.

    The root and slash bass move; the quality suffix is kept exactly as
    written unless the new text would read as a different chord (a natural
    root followed by "b5" reads as a flat root), in which case the
    quality's preferred suffix is written instead. Results use sharp
    spelling.

    Parameters
    ----------
    text : str
        Chord symbol (e.g., "Am7", "D/F#").
    semitones : int
        Semitones to transpose (positive = up).

    Returns
    -------
    str
        Transposed symbol. Whole-octave shifts return ``text`` unchanged.

    Raises
    ------
    ParseError
        If ``text`` is not a chord symbol.

    Examples
    --------
    >>> transpose_chord_symbol("Am7", 3)
    'Cm7'
    >>> transpose_chord_symbol("D/F#", 2)
    'E/G#'
    >>> transpose_chord_symbol("Bbmaj7", 12)
    'Bbmaj7'
    >>> transpose_chord_symbol("C#b5", -1)
    'C-5'
    """
    symbol = parse_chord_symbol(text)
    if semitones % 12 == 0:
        return text

    root = (symbol.root + semitones) % 12
    bass = None if symbol.bass is None else (symbol.bass + semitones) % 12
    result = _render(root, symbol.suffix, bass)
    reread = parse_chord_symbol(result)
    if (reread.root, reread.quality) != (root, symbol.quality):
        result = _render(root, QUALITY_TO_SUFFIX[symbol.quality], bass)
    return result


def transpose_fingering(fingering: Fingering, semitones: int) -> Fingering | None:
    """Move a fingering up or down the neck by ``semitones`` frets.

    Parameters
    ----------
    fingering : Fingering
        The fingering to move.
    semitones : int
        Frets to shift (positive = towards the body).

    Returns
    -------
    Fingering | None
        The shifted fingering with fingers, barre, base fret and difficulty
        recomputed. None if any string would leave the neck (below the nut
        or past :data:`MAX_FRET`) or the shifted shape needs a fifth finger;
        callers should regenerate for the new root instead. Whole-octave
        shifts return ``fingering`` unchanged.

    Examples
    --------
    >>> from chord_fingering.caged import caged_fingering
    >>> e_form = caged_fingering(4, "maj", "E")
    >>> transpose_fingering(e_form, 1).frets
    (1, 1, 2, 3, 3, 1)
    >>> transpose_fingering(e_form, -1) is None
    True
    """
    if semitones % 12 == 0:
        return fingering

    frets = shift_frets(fingering.layout_key, semitones)
    if any(fret is not None and not 0 <= fret <= MAX_FRET for fret in frets):
        return None

    return build_fingering(f"{fingering.id}{semitones:+d}", frets, is_default=fingering.is_default)
