"""Fuzzy subsequence scoring and ranked entry filtering."""

from __future__ import annotations

from collections.abc import Sequence

from .ansi import strip_ansi
from .entries import Entry

WORD_BOUNDARY_CHARS = "/_- .:`("
FIRST_BOUNDARY_BONUS = 35
BOUNDARY_BONUS = 10


def _boundary(candidate: str, idx: int) -> bool:
    return idx == 0 or candidate[idx - 1] in WORD_BOUNDARY_CHARS


def _char_bonus(candidate: str, original: str, query_char: str, idx: int, first: bool) -> int:
    bonus = 0
    if _boundary(candidate, idx):
        bonus += FIRST_BOUNDARY_BONUS if first else BOUNDARY_BONUS
    if original[idx] == query_char:
        bonus += 2
    return bonus


def _gap_penalty(gap: int) -> int:
    return 5 + min(35, gap * 3)


def fuzzy_score(query: str, candidate: str) -> int | None:
    """Score ``query`` as a case-insensitive subsequence of ``candidate``.

    Returns ``None`` when some query character cannot be matched in order.
    Every placement of the query is considered and the best one is scored:
    contiguous runs and word-boundary starts earn bonuses, exact-case hits a
    small one; gaps and long candidates are penalized.
    """
    if not query:
        return 0
    query_folded = query.casefold()
    candidate_folded = candidate.casefold()
    if len(query_folded) != len(query) or len(candidate_folded) != len(candidate):
        # Case folding changed lengths (e.g. "ß"), so exact-case bonuses cannot be aligned.
        query = query_folded
        candidate = candidate_folded

    # best[j] holds (score, run) for the best placement ending at candidate[j].
    best: list[tuple[int, int] | None] = []
    needle = query_folded[0]
    for idx, ch in enumerate(candidate_folded):
        if ch != needle:
            best.append(None)
            continue
        bonus = _char_bonus(candidate_folded, candidate, query[0], idx, True)
        if idx == 0:
            best.append((24 + bonus, 1))
        else:
            best.append((bonus - min(15, idx), 0))

    for pos in range(1, len(query_folded)):
        needle = query_folded[pos]
        current: list[tuple[int, int] | None] = [None] * len(candidate_folded)
        for idx in range(pos, len(candidate_folded)):
            if candidate_folded[idx] != needle:
                continue
            choice: tuple[int, int] | None = None
            adjacent = best[idx - 1]
            if adjacent is not None:
                run = adjacent[1] + 1
                choice = (adjacent[0] + 20 + min(16, run * 4), run)
            for prev_idx in range(idx - 1):
                earlier = best[prev_idx]
                if earlier is None:
                    continue
                score = earlier[0] - _gap_penalty(idx - prev_idx - 1)
                if choice is None or score > choice[0]:
                    choice = (score, 0)
            if choice is None:
                continue
            bonus = _char_bonus(candidate_folded, candidate, query[pos], idx, False)
            current[idx] = (choice[0] + bonus, choice[1])
        best = current

    scores = [item[0] for item in best if item is not None]
    if not scores:
        return None
    return max(scores) - len(candidate_folded) // 5


def filter_entries(entries: Sequence[Entry], filter_text: str) -> list[Entry]:
    """Return entries matching ``filter_text``, best score first.

    An empty filter returns every entry in catalog order. Ties keep catalog
    order because the sort is stable.
    """
    if not filter_text:
        return list(entries)
    scored: list[tuple[int, Entry]] = []
    for entry in entries:
        score = fuzzy_score(filter_text, strip_ansi(entry.label))
        if score is None:
            continue
        scored.append((score, entry))
    scored.sort(key=lambda item: -item[0])
    return [entry for _, entry in scored]


__all__ = ["WORD_BOUNDARY_CHARS", "filter_entries", "fuzzy_score"]
