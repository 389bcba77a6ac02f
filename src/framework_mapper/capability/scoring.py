"""
Lexical scoring helpers shared by every engine component.

Matching is plain case-insensitive substring search. "manage" matches
"management", "data" matches "databases". Callers that need word boundaries
should pick longer phrases rather than change these folds.
"""

from collections.abc import Iterable

OCCURRENCE_BONUS = 0.1
OCCURRENCE_BONUS_CAP = 0.5


def normalize(text: str) -> str:
    return text.lower()


def matched_phrases(text: str, phrases: Iterable[str]) -> list[str]:
    """Phrases present in ``text``, in table order, without duplicates."""
    lowered = normalize(text)
    found: list[str] = []
    for phrase in phrases:
        p = phrase.lower()
        if p and p in lowered and p not in found:
            found.append(p)
    return found


def count_occurrences(text: str, phrases: Iterable[str]) -> int:
    """Total non-overlapping occurrences of all phrases in ``text``."""
    lowered = normalize(text)
    return sum(lowered.count(p.lower()) for p in set(phrases) if p)


def keyword_score(text: str, phrases: Iterable[str]) -> float:
    """Coverage fraction plus a capped occurrence bonus, capped at 1.0.

    score = matched / len(phrases) + min(0.1 * occurrences, 0.5)
    """
    unique = list(dict.fromkeys(p.lower() for p in phrases if p))
    if not unique:
        return 0.0
    found = matched_phrases(text, unique)
    if not found:
        return 0.0
    occurrences = count_occurrences(text, found)
    bonus = min(OCCURRENCE_BONUS * occurrences, OCCURRENCE_BONUS_CAP)
    return min(len(found) / len(unique) + bonus, 1.0)


def weighted_score(
    text: str,
    primary: Iterable[str],
    secondary: Iterable[str],
    primary_weight: int = 3,
    secondary_weight: int = 1,
) -> int:
    """Integer score: weight per distinct phrase present, not per occurrence."""
    return (
        primary_weight * len(matched_phrases(text, primary))
        + secondary_weight * len(matched_phrases(text, secondary))
    )


def element_coverage(text: str, elements: Iterable[str]) -> tuple[float, list[str]]:
    """Share of whole element strings found in ``text``, and which ones."""
    elements = [e for e in elements if e]
    if not elements:
        return 0.0, []
    found = matched_phrases(text, elements)
    return len(found) / len(elements), found
