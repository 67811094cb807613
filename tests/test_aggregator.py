"""Tests for fingering aggregation and default selection."""

import logging
from dataclasses import replace

import pytest

from chord_fingering import (
    Fingering,
    ParseError,
    generate_fingering,
    generate_fingerings,
    generate_fingerings_for,
    parse_chord_symbol,
)
from chord_fingering.aggregator import Provider, default_providers, merge_fingerings, select_default
from chord_fingering.caged import caged_fingering
from chord_fingering.fingers import build_fingering
from chord_fingering.pitch_class import note_at, required_pitch_classes
from chord_fingering.validator import check_fingering


@pytest.fixture
def open_c():
    return build_fingering("db-C", (0, 1, 0, 2, 3, None))


@pytest.fixture
def impossible():
    return Fingering(
        id="bad",
        frets=(0, 8, 0, 2, 3, None),
        fingers=(None, 1, None, 2, 3, None),
        base_fret=1,
        muted=(False, False, False, False, False, True),
    )


class TestGenerateFingerings:
    @pytest.mark.parametrize("text", ["C", "Am", "G7", "F#m7", "Bbmaj7", "Cm7-5", "Edim7", "Dsus4", "Caug"])
    def test_invariants(self, text):
        fingerings = generate_fingerings_for(text)
        assert fingerings
        assert sum(fingering.is_default for fingering in fingerings) == 1
        assert fingerings[0].is_default
        keys = [fingering.layout_key for fingering in fingerings]
        assert len(set(keys)) == len(keys)
        for fingering in fingerings:
            assert check_fingering(fingering) == []

    @pytest.mark.parametrize("text", ["C", "Am", "G7", "Cm7-5"])
    def test_every_fingering_spells_chord(self, text):
        symbol = parse_chord_symbol(text)
        for fingering in generate_fingerings(symbol):
            assert fingering.sounding_pitch_classes() == required_pitch_classes(symbol.root, symbol.quality)

    def test_caged_before_search(self):
        ids = [fingering.id for fingering in generate_fingerings_for("C")]
        assert ids[:5] == ["C-C-open", "C-A-barre", "C-G-barre", "C-E-barre", "C-D-barre"]
        assert all(fingering_id.startswith("search-") for fingering_id in ids[5:])

    def test_deterministic(self):
        assert generate_fingerings_for("F#m7") == generate_fingerings_for("F#m7")

    def test_database_ranked_first(self, open_c):
        fingerings = generate_fingerings_for("C", database_fingerings=[open_c])
        assert fingerings[0].id == "db-C"
        assert fingerings[0].is_default
        # the CAGED form with the same layout is dropped
        assert "C-C-open" not in [fingering.id for fingering in fingerings]

    def test_database_input_not_modified(self, open_c):
        database = [open_c]
        generate_fingerings_for("C", database_fingerings=database)
        assert database == [open_c]
        assert not open_c.is_default

    def test_impossible_fingering_dropped(self, impossible, caplog):
        with caplog.at_level(logging.WARNING, logger="chord_fingering.aggregator"):
            fingerings = generate_fingerings_for("C", database_fingerings=[impossible])
        assert "bad" not in [fingering.id for fingering in fingerings]
        assert "Dropping fingering bad" in caplog.text

    @pytest.mark.parametrize("text,bass", [("G/B", 11), ("D/F#", 6), ("Am/G", 7), ("C/Bb", 10)])
    def test_slash_chord_bass_is_lowest_note(self, text, bass):
        fingerings = generate_fingerings_for(text)
        assert fingerings
        for fingering in fingerings:
            assert fingering.id.startswith(("slash-", "search-"))
            lowest = max(string for string, fret in enumerate(fingering.frets) if fret is not None)
            assert note_at(lowest, fingering.frets[lowest]) == bass

    @pytest.mark.parametrize("text", ["G/B", "D/F#"])
    def test_slash_chord_has_bass_string_form(self, text):
        default = generate_fingerings_for(text)[0]
        assert default.id.startswith("slash-")
        assert default.frets[4] is not None or default.frets[5] is not None

    def test_slash_chord_default(self):
        default = generate_fingerings_for("G/B")[0]
        assert default.id == "slash-G/B-0"
        assert default.frets == (3, 3, 0, 0, 2, None)
        assert default.is_default

    def test_nothing_playable(self):
        assert generate_fingerings_for("Cm69") == []

    def test_invalid_symbol_raises(self):
        with pytest.raises(ParseError):
            generate_fingerings_for("Hmaj7")

    def test_custom_providers(self, open_c):
        providers = [Provider("fixed", lambda symbol: [open_c, open_c])]
        fingerings = generate_fingerings(parse_chord_symbol("C"), providers=providers)
        assert [fingering.id for fingering in fingerings] == ["db-C"]

    def test_default_provider_order(self):
        assert [provider.name for provider in default_providers()] == ["database", "caged", "slash", "search"]


class TestPreference:
    def test_matching_preference_becomes_default(self):
        preferred = replace(caged_fingering(0, "maj", "E"), id="my-C")
        fingerings = generate_fingerings_for("C", preference=preferred)
        assert fingerings[0].layout_key == preferred.layout_key
        assert fingerings[0].id == "C-E-barre"
        assert fingerings[0].is_default
        assert sum(fingering.is_default for fingering in fingerings) == 1

    def test_unmatched_preference_ignored(self, caplog):
        preferred = build_fingering("my-C", (3, 1, 0, 2, 3, None))
        with caplog.at_level(logging.DEBUG, logger="chord_fingering.aggregator"):
            fingerings = generate_fingerings_for("C", preference=preferred)
        assert fingerings[0].id == "C-C-open"
        assert "matches no candidate" in caplog.text

    def test_preference_keeps_other_order(self):
        plain = generate_fingerings_for("C")
        preferred = generate_fingerings_for("C", preference=plain[3])
        assert [f.id for f in preferred] == [plain[3].id] + [f.id for f in plain if f.id != plain[3].id]


class TestSelectDefault:
    def test_empty(self):
        assert select_default([]) == []

    def test_first_is_default(self, open_c):
        other = build_fingering("other", (0, 0, 1, 2, 2, 0))
        result = select_default([open_c, other])
        assert [f.is_default for f in result] == [True, False]

    def test_clears_stale_default_flags(self, open_c):
        other = build_fingering("other", (0, 0, 1, 2, 2, 0), is_default=True)
        result = select_default([open_c, other])
        assert [f.is_default for f in result] == [True, False]


class TestMergeFingerings:
    def test_keeps_first_of_each_layout(self, open_c):
        duplicate = replace(open_c, id="dup")
        assert [f.id for f in merge_fingerings([open_c, duplicate])] == ["db-C"]

    def test_muted_string_changes_layout(self, open_c):
        muted_high = replace(open_c, id="muted", muted=(True, False, False, False, False, True))
        assert len(merge_fingerings([open_c, muted_high])) == 2


class TestGenerateFingering:
    def test_half_diminished(self):
        fingering = generate_fingering(0, "hdim7")
        assert fingering.sounding_pitch_classes() == frozenset({0, 3, 6, 10})
        assert fingering.is_default

    def test_prefers_search(self):
        assert generate_fingering(0, "maj").id.startswith("search-")

    def test_falls_back_to_caged(self):
        # five tones do not fit on four strings
        assert generate_fingering(0, "9").id == "C9-C-open"

    def test_none_when_unplayable(self):
        assert generate_fingering(0, "min69") is None
