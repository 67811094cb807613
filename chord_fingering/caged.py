"""CAGED form generator.

Produces movable-shape fingerings by shifting open-position templates named
after the open C, A, G, E and D chords up the neck to the requested root.

CAGED shapes:
- C form: open C shape, root on the fifth string
- A form: open A shape, root on the fifth string
- G form: open G shape, root on the sixth string
- E form: open E shape, root on the sixth string
- D form: open D shape, root on the fourth string
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from chord_fingering.fingers import build_fingering
from chord_fingering.search import chord_label

if TYPE_CHECKING:
    from chord_fingering.models import Fingering

Shape = Literal["C", "A", "G", "E", "D"]

# Shape order used when listing forms
SHAPE_ORDER: tuple[Shape, ...] = ("C", "A", "G", "E", "D")

# Root pitch class each template is written for
HOME_ROOTS: dict[Shape, int] = {"C": 0, "A": 9, "G": 7, "E": 4, "D": 2}


@dataclass(frozen=True)
class CagedTemplate:
    """An open-position template anchored at its shape's home root.

    Parameters
    ----------
    shape : Shape
        CAGED shape letter.
    frets : tuple[int | None, ...]
        Frets at the home root, first to sixth string (None = muted).
    """

    shape: Shape
    frets: tuple[int | None, ...]

    @property
    def home_root(self) -> int:
        return HOME_ROOTS[self.shape]


def _t(shape: Shape, *frets: int | None) -> CagedTemplate:
    return CagedTemplate(shape=shape, frets=frets)


x = None

# (quality, shape) -> template, frets listed first (high e) to sixth string
CAGED_TEMPLATES: dict[tuple[str, Shape], CagedTemplate] = {
    # Major
    ("maj", "C"): _t("C", 0, 1, 0, 2, 3, x),
    ("maj", "A"): _t("A", 0, 2, 2, 2, 0, x),
    ("maj", "G"): _t("G", 3, 0, 0, 0, 2, 3),
    ("maj", "E"): _t("E", 0, 0, 1, 2, 2, 0),
    ("maj", "D"): _t("D", 2, 3, 2, 0, x, x),
    # Minor
    ("min", "C"): _t("C", x, 1, 0, 1, 3, x),
    ("min", "A"): _t("A", 0, 1, 2, 2, 0, x),
    ("min", "G"): _t("G", 3, 3, 3, 0, 1, 3),
    ("min", "E"): _t("E", 0, 0, 0, 2, 2, 0),
    ("min", "D"): _t("D", 1, 3, 2, 0, x, x),
    # Dominant seventh
    ("7", "C"): _t("C", 3, 1, 3, 2, 3, x),
    ("7", "A"): _t("A", 0, 2, 0, 2, 0, x),
    ("7", "G"): _t("G", 1, 0, 0, 0, 2, 3),
    ("7", "E"): _t("E", 0, 0, 1, 0, 2, 0),
    ("7", "D"): _t("D", 2, 1, 2, 0, x, x),
    # Minor seventh
    ("min7", "C"): _t("C", x, 4, 3, 5, 3, x),
    ("min7", "A"): _t("A", 0, 1, 0, 2, 0, x),
    ("min7", "G"): _t("G", 1, 3, 3, 0, 1, 3),
    ("min7", "E"): _t("E", 0, 3, 0, 2, 2, 0),
    ("min7", "D"): _t("D", 1, 1, 2, 0, x, x),
    # Major seventh
    ("maj7", "C"): _t("C", 0, 0, 0, 2, 3, x),
    ("maj7", "A"): _t("A", 0, 2, 1, 2, 0, x),
    ("maj7", "G"): _t("G", 2, 0, 0, 0, 2, 3),
    ("maj7", "E"): _t("E", 0, 0, 1, 1, 2, 0),
    ("maj7", "D"): _t("D", 2, 2, 2, 0, x, x),
    # Half-diminished
    ("hdim7", "C"): _t("C", x, 4, 3, 4, 3, x),
    ("hdim7", "A"): _t("A", x, 1, 0, 1, 0, x),
    ("hdim7", "E"): _t("E", 0, 3, 0, 2, 1, 0),
    ("hdim7", "D"): _t("D", 1, 1, 1, 0, x, x),
    # Diminished seventh
    ("dim7", "A"): _t("A", 2, 1, 2, 1, 0, x),
    ("dim7", "E"): _t("E", 0, 2, 0, 2, 1, 0),
    ("dim7", "D"): _t("D", 1, 0, 1, 0, x, x),
    # Augmented
    ("aug", "C"): _t("C", 0, 1, 1, 2, 3, x),
    # Suspended
    ("sus4", "C"): _t("C", 1, 1, 0, 3, 3, x),
    ("sus4", "A"): _t("A", 0, 3, 2, 2, 0, x),
    ("sus4", "E"): _t("E", 0, 0, 2, 2, 2, 0),
    ("sus4", "D"): _t("D", 3, 3, 2, 0, x, x),
    ("sus2", "C"): _t("C", 3, 3, 0, 0, 3, x),
    ("sus2", "A"): _t("A", 0, 0, 2, 2, 0, x),
    ("sus2", "D"): _t("D", 0, 3, 2, 0, x, x),
    ("7sus4", "A"): _t("A", 0, 3, 0, 2, 0, x),
    ("7sus4", "E"): _t("E", 0, 0, 2, 0, 2, 0),
    ("7sus4", "D"): _t("D", 3, 1, 2, 0, x, x),
    ("9sus4", "E"): _t("E", 2, 0, 2, 0, 2, 0),
    # Sixths
    ("maj6", "C"): _t("C", 3, 1, 2, 2, 3, x),
    ("maj6", "A"): _t("A", 2, 2, 2, 2, 0, x),
    ("maj6", "E"): _t("E", 0, 2, 1, 2, 2, 0),
    ("maj6", "D"): _t("D", 2, 0, 2, 0, x, x),
    ("min6", "A"): _t("A", 2, 1, 2, 2, 0, x),
    ("min6", "E"): _t("E", 0, 2, 0, 2, 2, 0),
    ("min6", "D"): _t("D", 1, 0, 2, 0, x, x),
    ("69", "E"): _t("E", 2, 2, 1, 2, 2, 0),
    # Minor-major seventh
    ("minmaj7", "A"): _t("A", 0, 1, 1, 2, 0, x),
    ("minmaj7", "E"): _t("E", 0, 0, 0, 1, 2, 0),
    ("minmaj7", "D"): _t("D", 1, 2, 2, 0, x, x),
    # Ninths
    ("add9", "C"): _t("C", 0, 3, 0, 2, 3, x),
    ("add9", "G"): _t("G", 3, 0, 2, 0, 2, 3),
    ("9", "C"): _t("C", 3, 3, 3, 2, 3, x),
    ("9", "E"): _t("E", 2, 0, 1, 0, 2, 0),
    ("min9", "C"): _t("C", 3, 3, 3, 1, 3, x),
    ("min9", "E"): _t("E", 2, 0, 0, 0, 2, 0),
    ("maj9", "E"): _t("E", 2, 0, 1, 1, 2, 0),
    # Altered
    ("7#9", "E"): _t("E", 3, 3, 1, 0, 2, 0),
}

del x


def shift_frets(frets: tuple[int | None, ...], offset: int) -> tuple[int | None, ...]:
    """Shift every sounding string up by ``offset`` frets.

    Open strings become fretted at ``offset``; muted strings stay muted.

    Examples
    --------
    >>> shift_frets((0, 0, 1, 2, 2, 0), 1)
    (1, 1, 2, 3, 3, 1)
    >>> shift_frets((2, 3, 2, 0, None, None), 0)
    (2, 3, 2, 0, None, None)
    """
    return tuple(None if fret is None else fret + offset for fret in frets)


def supported_shapes(quality: str) -> tuple[Shape, ...]:
    """Shapes with an authored template for ``quality``, in CAGED order.

    Examples
    --------
    >>> supported_shapes("hdim7")
    ('C', 'A', 'E', 'D')
    >>> supported_shapes("blackadder")
    ()
    """
    return tuple(shape for shape in SHAPE_ORDER if (quality, shape) in CAGED_TEMPLATES)


def caged_fingering(root: int, quality: str, shape: Shape) -> Fingering | None:
    """Build one CAGED form for ``root``.

    Parameters
    ----------
    root : int
        Requested root pitch class.
    quality : str
        Quality identifier.
    shape : Shape
        CAGED shape letter.

    Returns
    -------
    Fingering | None
        The shifted form, or None if the quality has no template for
        this shape.

    Examples
    --------
    >>> f = caged_fingering(5, "maj", "E")
    >>> f.id, f.frets, f.barre_at
    ('F-E-barre', (1, 1, 2, 3, 3, 1), 1)
    """
    template = CAGED_TEMPLATES.get((quality, shape))
    if template is None:
        return None

    offset = (root - template.home_root + 12) % 12
    frets = shift_frets(template.frets, offset)
    kind = "open" if offset == 0 else "barre"
    return build_fingering(f"{chord_label(root, quality)}-{shape}-{kind}", frets)


def caged_fingerings(root: int, quality: str) -> list[Fingering]:
    """All CAGED forms of a chord, in C, A, G, E, D order.

    Qualities without authored templates return fewer forms (possibly none).

    Examples
    --------
    >>> [f.id for f in caged_fingerings(0, "maj")]
    ['C-C-open', 'C-A-barre', 'C-G-barre', 'C-E-barre', 'C-D-barre']
    """
    forms = []
    for shape in SHAPE_ORDER:
        fingering = caged_fingering(root, quality, shape)
        if fingering is not None:
            forms.append(fingering)
    return forms
