"""Reads a cell selection against the active word list."""

from __future__ import annotations

from typing import AbstractSet, Iterable, Sequence

from ..core.models import MatchResult, SelectedCell


NO_MATCH = MatchResult(found=False)


def selection_text(selection: Iterable[SelectedCell]) -> str:
    return "".join(cell.letter for cell in selection).lower()


def match_selection(
    selection: Sequence[SelectedCell],
    words: Sequence[str],
    found: AbstractSet[str],
) -> MatchResult:
    """Return the first unfound word spelled by the selection, forward or reversed.

    Words are checked in list order and must match the whole selection;
    a word that is only a substring of the selection never matches.
    """

    if not selection:
        return NO_MATCH
    forward = selection_text(selection)
    backward = forward[::-1]
    for word in words:
        if word in found:
            continue
        candidate = word.lower()
        if candidate == forward:
            return MatchResult(found=True, word=word, reversed=False)
        if candidate == backward:
            return MatchResult(found=True, word=word, reversed=True)
    return NO_MATCH


def longest_remaining_length(words: Sequence[str], found: AbstractSet[str]) -> int:
    return max((len(word) for word in words if word not in found), default=0)
