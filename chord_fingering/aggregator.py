"""Fingering aggregation and default selection.

Merges fingerings from a fixed, ordered list of providers into one ranked,
de-duplicated list and picks the default:

1. database: curated fingerings supplied by the caller
2. caged: CAGED forms in C, A, G, E, D order
3. slash: bass-string voicings of slash chords
4. search: 4-string voicings in span order

A caller-supplied preference that matches one of the merged fingerings is
moved to the front and becomes the default.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from functools import partial
from typing import TYPE_CHECKING

from chord_fingering.caged import caged_fingerings
from chord_fingering.parser import parse_chord_symbol
from chord_fingering.search import search_voicings, slash_voicings
from chord_fingering.validator import check_fingering

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from chord_fingering.models import ChordSymbol, Fingering

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Provider:
    """A named source of fingerings for a chord symbol.

    Parameters
    ----------
    name : str
        Provider name (e.g., "database", "caged", "slash", "search").
    fetch : Callable[[ChordSymbol], list[Fingering]]
        Pure function returning fingerings for a symbol.
    """

    name: str
    fetch: Callable[[ChordSymbol], list[Fingering]]


def _database_fingerings(fingerings: Sequence[Fingering], symbol: ChordSymbol) -> list[Fingering]:
    return list(fingerings)


def _caged_fingerings(symbol: ChordSymbol) -> list[Fingering]:
    # CAGED templates are root-position shapes
    if symbol.is_slash:
        return []
    return caged_fingerings(symbol.root, symbol.quality)


def _slash_fingerings(symbol: ChordSymbol) -> list[Fingering]:
    if not symbol.is_slash:
        return []
    return slash_voicings(symbol.root, symbol.quality, symbol.bass)


def _search_fingerings(symbol: ChordSymbol) -> list[Fingering]:
    bass = symbol.bass if symbol.is_slash else None
    return search_voicings(symbol.root, symbol.quality, bass=bass)


def default_providers(database_fingerings: Sequence[Fingering] = ()) -> tuple[Provider, ...]:
    """The provider pipeline, highest priority first."""
    return (
        Provider("database", partial(_database_fingerings, tuple(database_fingerings))),
        Provider("caged", _caged_fingerings),
        Provider("slash", _slash_fingerings),
        Provider("search", _search_fingerings),
    )


def merge_fingerings(candidates: Iterable[Fingering]) -> list[Fingering]:
    """De-duplicate by fret layout and drop physically impossible fingerings.

    The first (highest-priority) occurrence of each layout is kept.
    """
    merged: list[Fingering] = []
    seen: set[tuple[int | None, ...]] = set()
    for fingering in candidates:
        key = fingering.layout_key
        if key in seen:
            continue
        issues = check_fingering(fingering)
        if issues:
            logger.warning("Dropping fingering %s: %s", fingering.id, "; ".join(i.details for i in issues))
            continue
        seen.add(key)
        merged.append(fingering)
    return merged


def select_default(fingerings: list[Fingering], preference: Fingering | None = None) -> list[Fingering]:
    """Order ``fingerings`` so the default comes first and flag it.

    A preference matching the fret layout of a fingering moves that
    fingering to index 0. Otherwise the first fingering is the default.
    Exactly one fingering of a non-empty result has ``is_default=True``.
    """
    ordered = list(fingerings)
    if preference is not None:
        key = preference.layout_key
        match = next((i for i, f in enumerate(ordered) if f.layout_key == key), None)
        if match is None:
            logger.debug("Preference %s matches no candidate layout", preference.id)
        else:
            ordered.insert(0, ordered.pop(match))

    return [replace(f, is_default=index == 0) for index, f in enumerate(ordered)]


def generate_fingerings(
    symbol: ChordSymbol,
    preference: Fingering | None = None,
    database_fingerings: Sequence[Fingering] = (),
    *,
    providers: Sequence[Provider] | None = None,
) -> list[Fingering]:
    """Ranked, de-duplicated fingerings for a chord.

    Parameters
    ----------
    symbol : ChordSymbol
        Parsed chord symbol.
    preference : Fingering | None
        User-preferred fingering for this chord, if any.
    database_fingerings : Sequence[Fingering]
        Curated fingerings for this exact symbol; ranked ahead of generated
        ones. Not modified.
    providers : Sequence[Provider] | None
        Replacement provider pipeline; defaults to :func:`default_providers`.

    Returns
    -------
    list[Fingering]
        Fingerings with the default first. Empty when nothing is playable;
        callers show "no fingering available".

    Examples
    --------
    >>> from chord_fingering.parser import parse_chord_symbol
    >>> fingerings = generate_fingerings(parse_chord_symbol("C"))
    >>> fingerings[0].id, fingerings[0].is_default
    ('C-C-open', True)
    """
    pipeline = default_providers(database_fingerings) if providers is None else providers

    candidates: list[Fingering] = []
    for provider in pipeline:
        found = provider.fetch(symbol)
        logger.debug("Provider %s returned %d fingerings for %s", provider.name, len(found), symbol)
        candidates.extend(found)

    return select_default(merge_fingerings(candidates), preference)


def generate_fingerings_for(
    text: str,
    preference: Fingering | None = None,
    database_fingerings: Sequence[Fingering] = (),
) -> list[Fingering]:
    """Parse ``text`` and return its ranked fingerings.

    Raises
    ------
    ParseError
        If ``text`` is not a chord symbol.
    """
    return generate_fingerings(parse_chord_symbol(text), preference, database_fingerings)


def generate_fingering(root: int, quality: str) -> Fingering | None:
    """Best single fingering: the primary search voicing, else the first CAGED form.

    Parameters
    ----------
    root : int
        Root pitch class.
    quality : str
        Quality identifier.

    Returns
    -------
    Fingering | None
        The fingering, or None if neither source can voice the chord.

    Examples
    --------
    >>> f = generate_fingering(0, "hdim7")
    >>> sorted(f.sounding_pitch_classes())
    [0, 3, 6, 10]
    """
    voicings = search_voicings(root, quality)
    if voicings:
        return replace(voicings[0], is_default=True)
    forms = caged_fingerings(root, quality)
    if forms:
        return replace(forms[0], is_default=True)
    return None
