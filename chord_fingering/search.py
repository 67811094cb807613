"""Voicing search engine.

Enumerates 4-fret windows along the neck and searches, inside each window,
for a fret on each of the four highest-pitched strings such that together
they sound every required pitch class of the chord.

Slash chords also get bass-string voicings: the bass on the sixth or fifth
string and the chord tones on the strings above it, all in one window.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

import numpy as np

from chord_fingering.fingers import assign_fingers, build_fingering
from chord_fingering.models import STRING_COUNT
from chord_fingering.pitch_class import fretboard_grid, ordered_pitch_classes, pc_to_note
from chord_fingering.qualities import QUALITY_TO_SUFFIX

if TYPE_CHECKING:
    from chord_fingering.models import Fingering

logger = logging.getLogger(__name__)

# Highest window start searched
MAX_BASE_FRET = 12

# Frets reachable without shifting the hand
WINDOW_FRETS = 4

# Strings used by the search, first (high e) to fourth (D)
SEARCH_STRINGS: tuple[int, ...] = (0, 1, 2, 3)

# Strings that may carry a slash-chord bass, sixth string first
BASS_STRINGS: tuple[int, ...] = (5, 4)

# Bass-string voicings kept per slash chord
MAX_SLASH_VOICINGS = 3

_DIFFICULTY_RANK = {"easy": 0, "medium": 1, "hard": 2}

_GRID = fretboard_grid(MAX_BASE_FRET + WINDOW_FRETS - 1)


def chord_label(root: int, quality: str, bass: int | None = None) -> str:
    """Sharp-spelled symbol used in generated fingering ids.

    Examples
    --------
    >>> chord_label(0, "hdim7")
    'Cm7-5'
    >>> chord_label(7, "maj", 11)
    'G/B'
    """
    label = f"{pc_to_note(root)}{QUALITY_TO_SUFFIX.get(quality, quality)}"
    if bass is not None and bass != root:
        label = f"{label}/{pc_to_note(bass)}"
    return label


def _fret_for(string: int, pc: int, base: int) -> int | None:
    """Fret in ``[base, base + WINDOW_FRETS)`` where ``string`` sounds ``pc``."""
    window = _GRID[string, base : base + WINDOW_FRETS]
    hits = np.flatnonzero(window == pc)
    if hits.size == 0:
        return None
    return base + int(hits[0])


def _string_options(
    string: int,
    base: int,
    candidates: tuple[int, ...],
    covered: frozenset[int],
) -> list[tuple[int, int]]:
    """(pitch class, fret) choices for one string, uncovered tones first."""
    ordered = [pc for pc in candidates if pc not in covered] + [pc for pc in candidates if pc in covered]
    options = []
    for pc in ordered:
        fret = _fret_for(string, pc, base)
        if fret is not None:
            options.append((pc, fret))
    return options


def search_window(
    required: tuple[int, ...],
    base: int,
    *,
    bass: int | None = None,
) -> tuple[int, ...] | None:
    """Search one window for a fret assignment covering ``required``.

    Strings are assigned in order; on each string the required pitch classes
    are tried in priority order (tones not yet covered first, then in
    interval order). The first assignment whose covered set equals the
    whole required set is returned.

    Parameters
    ----------
    required : tuple[int, ...]
        Required pitch classes in priority order.
    base : int
        Window start fret (0 includes open strings).
    bass : int | None
        If given, the lowest searched string must sound this pitch class.

    Returns
    -------
    tuple[int, ...] | None
        Frets for :data:`SEARCH_STRINGS`, or None if the window is invalid.

    Examples
    --------
    >>> search_window((0, 3, 6, 10), 0)
    (2, 1, 3, 1)
    >>> search_window((0, 4, 7), 0)
    (0, 1, 0, 2)
    """
    target = frozenset(required)
    strings = SEARCH_STRINGS
    lowest = strings[-1]
    assigned: list[int] = []

    def descend(index: int, covered: frozenset[int]) -> bool:
        remaining = len(strings) - index
        if len(target - covered) > remaining:
            return False
        if index == len(strings):
            return covered == target

        string = strings[index]
        candidates = (bass,) if bass is not None and string == lowest else required
        for pc, fret in _string_options(string, base, candidates, covered):
            assigned.append(fret)
            if descend(index + 1, covered | {pc}):
                return True
            assigned.pop()
        return False

    if descend(0, frozenset()):
        return tuple(assigned)
    return None


def _span(frets: tuple[int, ...]) -> int:
    pressed = [fret for fret in frets if fret > 0]
    return max(pressed) - min(pressed) if pressed else 0


def search_voicings(
    root: int,
    quality: str,
    *,
    bass: int | None = None,
    max_base_fret: int = MAX_BASE_FRET,
) -> list[Fingering]:
    """Find playable 4-string voicings of a chord.

    Parameters
    ----------
    root : int
        Root pitch class.
    quality : str
        Quality identifier.
    bass : int | None
        Slash-chord bass pitch class. It joins the required tones and must
        sound on the fourth string.
    max_base_fret : int
        Highest window start to search.

    Returns
    -------
    list[Fingering]
        Voicings sorted by span, then window position; the first is the
        tightest, lowest-position voicing. Empty if no window works.

    Examples
    --------
    >>> voicings = search_voicings(0, "hdim7")
    >>> voicings[0].frets
    (8, 7, 8, 8, None, None)
    """
    required = ordered_pitch_classes(root, quality)
    if bass is not None and bass not in required:
        required = (*required, bass)
    if len(set(required)) > len(SEARCH_STRINGS):
        logger.debug("%d tones cannot fit on %d strings", len(set(required)), len(SEARCH_STRINGS))
        return []

    found: list[tuple[int, int, tuple[int, ...]]] = []
    for base in range(max_base_fret + 1):
        frets = search_window(required, base, bass=bass)
        if frets is None:
            continue
        found.append((_span(frets), base, frets))

    found.sort(key=lambda item: (item[0], item[1]))

    label = chord_label(root, quality, bass)
    seen: set[tuple[int, ...]] = set()
    voicings: list[Fingering] = []
    for _, _, frets in found:
        if frets in seen:
            continue
        seen.add(frets)
        full = frets + (None,) * (STRING_COUNT - len(frets))
        fingering = build_fingering(f"search-{label}-{len(voicings)}", full)
        if fingering is None:
            logger.debug("Rejected %s voicing %s: needs a fifth finger", label, full)
            continue
        voicings.append(fingering)

    logger.debug("Found %d voicings for %s", len(voicings), label)
    return voicings


def slash_window(
    required: tuple[int, ...],
    bass: int,
    bass_string: int,
    base: int,
) -> tuple[int | None, ...] | None:
    """Search one window for a voicing with the bass on ``bass_string``.

    The bass string sounds ``bass`` inside the window and every string above
    it sounds a chord tone; a string with no chord tone in the window is
    muted. Strings below the bass string are muted. The first assignment
    covering every chord tone that four fingers can fret is returned.

    Parameters
    ----------
    required : tuple[int, ...]
        Chord pitch classes in priority order.
    bass : int
        Bass pitch class.
    bass_string : int
        String carrying the bass (5 = sixth string).
    base : int
        Window start fret (0 includes open strings).

    Returns
    -------
    tuple[int | None, ...] | None
        Six frets, or None if the window has no such voicing.

    Examples
    --------
    >>> slash_window((7, 11, 2), 11, 4, 0)
    (3, 3, 0, 0, 2, None)
    """
    bass_fret = _fret_for(bass_string, bass, base)
    if bass_fret is None:
        return None

    target = frozenset(required) | {bass}
    below = (None,) * (STRING_COUNT - bass_string - 1)
    assigned: list[int | None] = []

    def descend(string: int, covered: frozenset[int]) -> bool:
        if len(target - covered) > bass_string - string:
            return False
        if string == bass_string:
            return covered == target and assign_fingers((*assigned, bass_fret, *below)) is not None

        options: list[tuple[int | None, int | None]] = list(_string_options(string, base, required, covered))
        for pc, fret in options or [(None, None)]:
            assigned.append(fret)
            if descend(string + 1, covered if pc is None else covered | {pc}):
                return True
            assigned.pop()
        return False

    if descend(0, frozenset({bass})):
        return (*assigned, bass_fret, *below)
    return None


def slash_voicings(
    root: int,
    quality: str,
    bass: int,
    *,
    max_base_fret: int = MAX_BASE_FRET,
    limit: int = MAX_SLASH_VOICINGS,
) -> list[Fingering]:
    """Find slash-chord voicings with the bass on the sixth or fifth string.

    Parameters
    ----------
    root : int
        Root pitch class.
    quality : str
        Quality identifier.
    bass : int
        Bass pitch class; it is the lowest sounding note.
    max_base_fret : int
        Highest window start to search.
    limit : int
        Maximum number of voicings returned.

    Returns
    -------
    list[Fingering]
        Voicings sorted by difficulty, then span, then position; sixth-string
        bass first among equals. Empty if no window works.

    Examples
    --------
    >>> voicings = slash_voicings(7, "maj", 11)
    >>> voicings[0].id, voicings[0].frets
    ('slash-G/B-0', (3, 3, 0, 0, 2, None))
    """
    required = ordered_pitch_classes(root, quality)
    label = chord_label(root, quality, bass)

    found: list[Fingering] = []
    seen: set[tuple[int | None, ...]] = set()
    for bass_string in BASS_STRINGS:
        for base in range(max_base_fret + 1):
            frets = slash_window(required, bass, bass_string, base)
            if frets is None or frets in seen:
                continue
            seen.add(frets)
            fingering = build_fingering(f"slash-{label}", frets)
            if fingering is not None:
                found.append(fingering)

    found.sort(key=lambda f: (_DIFFICULTY_RANK[f.difficulty], f.span, f.base_fret))
    logger.debug("Found %d bass-string voicings for %s", len(found), label)
    return [replace(f, id=f"slash-{label}-{index}") for index, f in enumerate(found[:limit])]
