"""Chord quality tables.

The closed set of supported qualities, their interval structure, and the
suffix tokens that name them in chord symbols.
"""

# Quality identifier to semitones above the root. Intervals above 11 are
# compound (14 = ninth) and are reduced mod 12 only when matching.
QUALITY_INTERVALS: dict[str, tuple[int, ...]] = {
    # Triads
    "maj": (0, 4, 7),
    "min": (0, 3, 7),
    "dim": (0, 3, 6),
    "aug": (0, 4, 8),
    "5": (0, 7),
    # Suspended
    "sus2": (0, 2, 7),
    "sus4": (0, 5, 7),
    "7sus4": (0, 5, 7, 10),
    "9sus4": (0, 5, 7, 10, 14),
    # Sixth chords
    "maj6": (0, 4, 7, 9),
    "min6": (0, 3, 7, 9),
    "69": (0, 4, 7, 9, 14),
    "min69": (0, 3, 7, 9, 14),
    # Seventh chords
    "7": (0, 4, 7, 10),
    "maj7": (0, 4, 7, 11),
    "min7": (0, 3, 7, 10),
    "minmaj7": (0, 3, 7, 11),
    "hdim7": (0, 3, 6, 10),
    "dim7": (0, 3, 6, 9),
    # Ninth chords
    "9": (0, 4, 7, 10, 14),
    "maj9": (0, 4, 7, 11, 14),
    "min9": (0, 3, 7, 10, 14),
    "add9": (0, 4, 7, 14),
    "madd9": (0, 3, 7, 14),
    # Flat five
    "b5": (0, 4, 6),
    "7b5": (0, 4, 6, 10),
    "maj7b5": (0, 4, 6, 11),
    # Sharp five
    "7#5": (0, 4, 8, 10),
    "maj7#5": (0, 4, 8, 11),
    "min7#5": (0, 3, 8, 10),
    # Altered ninth
    "7#9": (0, 4, 7, 10, 15),
    # Special voicings
    "quartal": (0, 5, 10),
    "blackadder": (0, 2, 6, 10),
}

# Suffix token to quality identifier
SUFFIX_TO_QUALITY: dict[str, str] = {
    "": "maj",
    "M": "maj",
    "maj": "maj",
    "m": "min",
    "min": "min",
    "mi": "min",
    "-": "min",
    "dim": "dim",
    "°": "dim",
    "o": "dim",
    "aug": "aug",
    "+": "aug",
    "5": "5",
    "sus2": "sus2",
    "sus4": "sus4",
    "sus": "sus4",
    "7sus4": "7sus4",
    "7sus": "7sus4",
    "9sus4": "9sus4",
    "9sus": "9sus4",
    "6": "maj6",
    "M6": "maj6",
    "maj6": "maj6",
    "add6": "maj6",
    "m6": "min6",
    "min6": "min6",
    "-6": "min6",
    "69": "69",
    "6/9": "69",
    "m69": "min69",
    "m6/9": "min69",
    "7": "7",
    "M7": "maj7",
    "maj7": "maj7",
    "Maj7": "maj7",
    "Δ": "maj7",
    "Δ7": "maj7",
    "m7": "min7",
    "min7": "min7",
    "mi7": "min7",
    "-7": "min7",
    "mM7": "minmaj7",
    "mMaj7": "minmaj7",
    "minMaj7": "minmaj7",
    "mmaj7": "minmaj7",
    "m(M7)": "minmaj7",
    "m7-5": "hdim7",
    "m7b5": "hdim7",
    "min7b5": "hdim7",
    "-7b5": "hdim7",
    "ø": "hdim7",
    "ø7": "hdim7",
    "Ø": "hdim7",
    "Ø7": "hdim7",
    "dim7": "dim7",
    "°7": "dim7",
    "o7": "dim7",
    "9": "9",
    "M9": "maj9",
    "maj9": "maj9",
    "m9": "min9",
    "min9": "min9",
    "add9": "add9",
    "add2": "add9",
    "madd9": "madd9",
    "-5": "b5",
    "b5": "b5",
    "7-5": "7b5",
    "7b5": "7b5",
    "M7-5": "maj7b5",
    "M7b5": "maj7b5",
    "maj7b5": "maj7b5",
    "7#5": "7#5",
    "7+5": "7#5",
    "aug7": "7#5",
    "+7": "7#5",
    "M7#5": "maj7#5",
    "maj7#5": "maj7#5",
    "M7+5": "maj7#5",
    "m7#5": "min7#5",
    "m7+5": "min7#5",
    "7#9": "7#9",
    "7+9": "7#9",
    "4.4": "quartal",
    "quartal": "quartal",
    "blk": "blackadder",
    "blackadder": "blackadder",
}

# Preferred suffix when rendering a quality identifier
QUALITY_TO_SUFFIX: dict[str, str] = {
    "maj": "",
    "min": "m",
    "dim": "dim",
    "aug": "aug",
    "5": "5",
    "sus2": "sus2",
    "sus4": "sus4",
    "7sus4": "7sus4",
    "9sus4": "9sus4",
    "maj6": "6",
    "min6": "m6",
    "69": "69",
    "min69": "m69",
    "7": "7",
    "maj7": "M7",
    "min7": "m7",
    "minmaj7": "mM7",
    "hdim7": "m7-5",
    "dim7": "dim7",
    "9": "9",
    "maj9": "M9",
    "min9": "m9",
    "add9": "add9",
    "madd9": "madd9",
    "b5": "-5",
    "7b5": "7-5",
    "maj7b5": "M7-5",
    "7#5": "7#5",
    "maj7#5": "M7#5",
    "min7#5": "m7#5",
    "7#9": "7#9",
    "quartal": "4.4",
    "blackadder": "blk",
}
