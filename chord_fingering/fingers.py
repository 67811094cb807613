"""Barre detection and finger assignment.

Derives finger numbers (1-4) and barre placement from a raw per-string fret
assignment, and finishes raw assignments into :class:`Fingering` records.
"""

from __future__ import annotations

from dataclasses import replace

from chord_fingering.difficulty import classify_difficulty
from chord_fingering.models import STRING_COUNT, FingerLayout, Fingering

# Fretting fingers available to the left hand
MAX_FINGERS = 4

# Highest fret that still belongs to the open-position window
OPEN_POSITION_MAX_FRET = 4

Frets = tuple[int | None, ...]


def _is_pressed(fret: int | None) -> bool:
    return fret is not None and fret > 0


def find_barre(frets: Frets) -> tuple[int, tuple[int, int]] | None:
    """Find a barre at the lowest pressed fret.

    A barre needs two or more strings at the lowest pressed fret with every
    string between them also pressed; an open or muted string cannot sit
    under the bar. When several runs qualify, the one covering the most
    strings at the barre fret wins, lowest string index first.

    Parameters
    ----------
    frets : tuple[int | None, ...]
        Fret per string (None = muted, 0 = open).

    Returns
    -------
    tuple[int, tuple[int, int]] | None
        Barre fret and inclusive string range, or None.

    Examples
    --------
    >>> find_barre((1, 1, 2, 3, 3, 1))
    (1, (0, 5))
    >>> find_barre((0, 1, 0, 2, 3, None)) is None
    True
    """
    pressed = [fret for fret in frets if _is_pressed(fret)]
    if not pressed:
        return None
    low = min(pressed)

    best: tuple[int, int] | None = None
    best_hits = 1
    run_hits: list[int] = []
    for string in range(len(frets) + 1):
        fret = frets[string] if string < len(frets) else None
        if _is_pressed(fret):
            if fret == low:
                run_hits.append(string)
            continue
        # Segment of consecutive pressed strings ends here
        if len(run_hits) > best_hits:
            best = (run_hits[0], run_hits[-1])
            best_hits = len(run_hits)
        run_hits = []

    if best is None:
        return None
    return low, best


def assign_fingers(frets: Frets) -> FingerLayout | None:
    """Assign finger numbers to a fret assignment.

    The barre, if any, takes the index finger and its strings at the barre
    fret carry no individual finger. Strings at the barre fret outside the
    barre range are also fretted by the index finger (1). Remaining pressed
    strings are numbered by ascending fret; strings at the same fret share
    a finger.

    Parameters
    ----------
    frets : tuple[int | None, ...]
        Fret per string (None = muted, 0 = open).

    Returns
    -------
    FingerLayout | None
        The layout, or None if the shape needs more than four fingers.

    Examples
    --------
    >>> assign_fingers((0, 1, 0, 2, 3, None)).fingers
    (None, 1, None, 2, 3, None)
    >>> layout = assign_fingers((3, 5, 5, 5, 3, None))
    >>> layout.barre_at, layout.barre_strings, layout.fingers
    (3, (0, 4), (None, 2, 2, 2, None, None))
    >>> assign_fingers((1, 1, 0, 1, None, None)).fingers
    (None, None, None, 1, None, None)
    >>> assign_fingers((1, 2, 3, 4, 5, None)) is None
    True
    """
    barre = find_barre(frets)
    barre_at, barre_strings = barre if barre is not None else (None, None)

    individual = sorted({fret for fret in frets if _is_pressed(fret) and fret != barre_at})
    first_finger = 2 if barre_at is not None else 1
    if first_finger + len(individual) - 1 > MAX_FINGERS:
        return None

    finger_for_fret = {fret: first_finger + i for i, fret in enumerate(individual)}

    def finger_for(string: int, fret: int | None) -> int | None:
        if not _is_pressed(fret):
            return None
        if fret != barre_at:
            return finger_for_fret[fret]
        lo, hi = barre_strings
        return None if lo <= string <= hi else 1

    fingers = tuple(finger_for(string, fret) for string, fret in enumerate(frets))
    return FingerLayout(fingers=fingers, barre_at=barre_at, barre_strings=barre_strings)


def base_fret_for(frets: Frets) -> int:
    """Lowest fret of the 4-fret window a fret assignment is shown in.

    Shapes that fit below the fifth fret sit in the open position (1);
    anything higher starts at its lowest pressed fret.

    Examples
    --------
    >>> base_fret_for((0, 1, 0, 2, 3, None))
    1
    >>> base_fret_for((8, 8, 9, 10, 10, 8))
    8
    """
    pressed = [fret for fret in frets if _is_pressed(fret)]
    if not pressed or max(pressed) <= OPEN_POSITION_MAX_FRET:
        return 1
    return min(pressed)


def build_fingering(fingering_id: str, frets: Frets, *, is_default: bool = False) -> Fingering | None:
    """Finish a raw fret assignment into a :class:`Fingering`.

    Parameters
    ----------
    fingering_id : str
        Identifier of the new fingering.
    frets : tuple[int | None, ...]
        Six frets (None = muted, 0 = open).
    is_default : bool
        Default flag of the new fingering.

    Returns
    -------
    Fingering | None
        The fingering with fingers, barre, base fret and difficulty filled
        in, or None if it cannot be fretted with four fingers.

    Examples
    --------
    >>> f = build_fingering("C-C-open", (0, 1, 0, 2, 3, None))
    >>> f.base_fret, f.difficulty, f.muted[5]
    (1, 'easy', True)
    """
    if len(frets) != STRING_COUNT:
        msg = f"Expected {STRING_COUNT} frets, got {len(frets)}"
        raise ValueError(msg)

    layout = assign_fingers(frets)
    if layout is None:
        return None

    fingering = Fingering(
        id=fingering_id,
        frets=tuple(frets),
        fingers=layout.fingers,
        barre_at=layout.barre_at,
        barre_strings=layout.barre_strings,
        base_fret=base_fret_for(frets),
        muted=tuple(fret is None for fret in frets),
        is_default=is_default,
    )
    return replace(fingering, difficulty=classify_difficulty(fingering))
