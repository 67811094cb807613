"""Data models for chord-fingering.

This module provides the value records shared by every part of the engine:
parsed chord symbols and six-string fingerings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from chord_fingering.pitch_class import note_at, pc_to_note

Difficulty = Literal["easy", "medium", "hard"]

# Number of strings on the instrument (standard-tuned guitar)
STRING_COUNT = 6


@dataclass(frozen=True)
class ChordSymbol:
    """Parsed chord symbol.

    Parameters
    ----------
    root : int
        Root pitch class (0-11, where C=0).
    quality : str
        Quality identifier (e.g., "maj", "min7", "hdim7").
    bass : int | None
        Bass pitch class for slash chords, None otherwise.
    suffix : str
        The quality token exactly as written (e.g., "m7-5", "maj7", "").

    Examples
    --------
    >>> symbol = ChordSymbol(root=0, quality="hdim7", suffix="m7-5")
    >>> symbol.name
    'Cm7-5'
    >>> ChordSymbol(root=7, quality="maj", bass=11).name
    'G/B'
    """

    root: int
    quality: str
    bass: int | None = None
    suffix: str = ""

    @property
    def is_slash(self) -> bool:
        """Whether the symbol names a bass note other than its root."""
        return self.bass is not None and self.bass != self.root

    @property
    def name(self) -> str:
        """Render the symbol with sharp spelling."""
        result = f"{pc_to_note(self.root)}{self.suffix}"
        if self.bass is not None:
            result = f"{result}/{pc_to_note(self.bass)}"
        return result

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class FingerLayout:
    """Finger numbers and barre placement derived from a fret assignment.

    Parameters
    ----------
    fingers : tuple[int | None, ...]
        Finger number (1-4) per string, None for open, muted or barred strings.
    barre_at : int | None
        Fret held by the barre, or None.
    barre_strings : tuple[int, int] | None
        Inclusive (low index, high index) string range under the barre.
    """

    fingers: tuple[int | None, ...]
    barre_at: int | None = None
    barre_strings: tuple[int, int] | None = None

    @property
    def finger_count(self) -> int:
        """Distinct fretting fingers used, counting the barre as the index finger."""
        used = {f for f in self.fingers if f is not None}
        if self.barre_at is not None:
            used.add(1)
        return len(used)


@dataclass(frozen=True)
class Fingering:
    """A six-string chord fingering.

    String index 0 is the first (high e) string, index 5 the sixth (low E).

    Parameters
    ----------
    id : str
        Identifier; generated fingerings embed their origin (e.g., "C-E-barre").
    frets : tuple[int | None, ...]
        Fret per string: None = muted, 0 = open, positive = fretted.
    fingers : tuple[int | None, ...]
        Finger per string (1-4). None on a pressed string means it is
        covered by the barre.
    barre_at : int | None
        Fret held by the barre, or None.
    barre_strings : tuple[int, int] | None
        Inclusive string range under the barre.
    base_fret : int
        Lowest fret of the 4-fret reachable window (1 for open position).
    muted : tuple[bool, ...]
        Muted flag per string.
    is_default : bool
        Whether this is the default fingering in a ranked list.
    difficulty : Difficulty
        Playability class.

    Examples
    --------
    >>> f = Fingering(
    ...     id="C-C-open",
    ...     frets=(0, 1, 0, 2, 3, None),
    ...     fingers=(None, 1, None, 2, 3, None),
    ...     base_fret=1,
    ...     muted=(False, False, False, False, False, True),
    ... )
    >>> f.pressed_frets
    (1, 2, 3)
    >>> f.span
    2
    """

    id: str
    frets: tuple[int | None, ...]
    fingers: tuple[int | None, ...]
    barre_at: int | None = None
    barre_strings: tuple[int, int] | None = None
    base_fret: int = 1
    muted: tuple[bool, ...] = (False,) * STRING_COUNT
    is_default: bool = False
    difficulty: Difficulty = "medium"

    @property
    def pressed_frets(self) -> tuple[int, ...]:
        """Fretted (non-open, non-muted) frets in string order."""
        return tuple(
            fret for fret, mute in zip(self.frets, self.muted) if fret is not None and fret > 0 and not mute
        )

    @property
    def span(self) -> int:
        """Distance between the highest and lowest pressed frets."""
        pressed = self.pressed_frets
        if not pressed:
            return 0
        return max(pressed) - min(pressed)

    @property
    def layout_key(self) -> tuple[int | None, ...]:
        """Fret layout with muted strings normalized to None, used for de-duplication."""
        return tuple(None if mute else fret for fret, mute in zip(self.frets, self.muted))

    def sounding_pitch_classes(self) -> frozenset[int]:
        """Pitch classes of every open or fretted string.

        Examples
        --------
        >>> f = Fingering(id="x", frets=(0, 1, 0, 2, 3, None), fingers=(None,) * 6,
        ...               muted=(False,) * 5 + (True,))
        >>> sorted(f.sounding_pitch_classes())
        [0, 4, 7]
        """
        return frozenset(
            note_at(string, fret)
            for string, (fret, mute) in enumerate(zip(self.frets, self.muted))
            if fret is not None and not mute
        )
