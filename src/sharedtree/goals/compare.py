"""String similarity between successive goal versions.

Pure functions with no I/O, usable on their own.
"""

from __future__ import annotations

from sharedtree.goals.schema import ChangeMetrics


def levenshtein(a: str, b: str) -> int:
    """Classic edit distance (insert, delete, substitute all cost 1)."""
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(
                min(
                    previous[j] + 1,  # deletion
                    current[j - 1] + 1,  # insertion
                    previous[j - 1] + cost,  # substitution
                )
            )
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """Return 1 - distance / longest length, in [0.0, 1.0].

    Two empty strings are identical (1.0).
    """
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - levenshtein(a, b) / longest


def tokenize(text: str) -> list[str]:
    return text.lower().split()


def _ordered_difference(words: list[str], exclude: set[str], limit: int) -> list[str]:
    if limit <= 0:
        return []
    seen: set[str] = set()
    result: list[str] = []
    for word in words:
        if word in exclude or word in seen:
            continue
        seen.add(word)
        result.append(word)
        if len(result) >= limit:
            break
    return result


def analyze_changes(old: str, new: str, word_sample: int = 10) -> ChangeMetrics:
    """Describe how `new` differs from `old`.

    Added/removed words are lowercase whitespace tokens, first-seen order,
    at most `word_sample` of each.
    """
    old_words = tokenize(old)
    new_words = tokenize(new)
    return ChangeMetrics(
        length_change=len(new) - len(old),
        word_change=len(new_words) - len(old_words),
        added_words=_ordered_difference(new_words, set(old_words), word_sample),
        removed_words=_ordered_difference(old_words, set(new_words), word_sample),
        similarity=similarity(old, new),
    )
