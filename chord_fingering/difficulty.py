"""Difficulty classification for finished fingerings."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chord_fingering.models import Difficulty, Fingering

# Thresholds
EASY_MAX_SPAN = 2
HARD_MIN_SPAN = 3
HARD_MIN_BARRE_STRINGS = 4
HARD_MIN_BASE_FRET = 7


def barre_width(fingering: Fingering) -> int:
    """Number of strings covered by the barre (0 without a barre)."""
    if fingering.barre_at is None or fingering.barre_strings is None:
        return 0
    lo, hi = fingering.barre_strings
    return hi - lo + 1


def classify_difficulty(fingering: Fingering) -> Difficulty:
    """Classify how hard a fingering is to play.

    Parameters
    ----------
    fingering : Fingering
        A finished fingering.

    Returns
    -------
    Difficulty
        "easy" for open-position shapes without a barre and a span of at
        most two frets; "hard" for a span of three or more frets, a barre
        over four or more strings, or a position at the seventh fret or
        above; "medium" otherwise.

    Examples
    --------
    >>> from chord_fingering.models import Fingering
    >>> f = Fingering(id="x", frets=(0, 1, 0, 2, 3, None), fingers=(None, 1, None, 2, 3, None))
    >>> classify_difficulty(f)
    'easy'
    """
    span = fingering.span
    has_barre = fingering.barre_at is not None

    if fingering.base_fret <= 1 and not has_barre and span <= EASY_MAX_SPAN:
        return "easy"
    if (
        span >= HARD_MIN_SPAN
        or barre_width(fingering) >= HARD_MIN_BARRE_STRINGS
        or fingering.base_fret >= HARD_MIN_BASE_FRET
    ):
        return "hard"
    return "medium"
