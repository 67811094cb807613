import pytest

from chord_fingering.difficulty import barre_width, classify_difficulty
from chord_fingering.fingers import build_fingering
from chord_fingering.models import Fingering


class TestClassifyDifficulty:
    @pytest.mark.parametrize(
        "frets,difficulty",
        [
            ((0, 1, 0, 2, 3, None), "easy"),  # open C
            ((0, 0, 1, 2, 2, 0), "easy"),  # open E
            ((0, 1, 2, 2, 0, None), "easy"),  # open Am
            ((1, 1, 2, 3, 3, 1), "hard"),  # F, six-string barre
            ((2, 3, 4, 4, 2, None), "hard"),  # Bm, five-string barre
            ((1, 2, 3, 4, None, None), "hard"),  # span of three frets
            ((7, 8, 9, None, None, None), "hard"),  # seventh position
            ((3, 3, 4, 5, None, None), "medium"),  # two-string barre at third fret
            ((5, 6, 7, None, None, None), "medium"),  # fifth position, no barre
            ((2, 3, 2, 0, None, None), "medium"),  # open D, index across two strings
        ],
    )
    def test_classification(self, frets, difficulty):
        fingering = build_fingering("x", frets)
        assert classify_difficulty(fingering) == difficulty
        assert fingering.difficulty == difficulty

    def test_all_muted_is_easy(self):
        assert classify_difficulty(Fingering(id="x", frets=(None,) * 6, fingers=(None,) * 6)) == "easy"


class TestBarreWidth:
    def test_no_barre(self):
        assert barre_width(build_fingering("x", (0, 1, 0, 2, 3, None))) == 0

    def test_full_barre(self):
        assert barre_width(build_fingering("x", (1, 1, 2, 3, 3, 1))) == 6
