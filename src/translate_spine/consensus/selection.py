"""Majority selection over provider texts.

Rule, applied to successful texts in registry order:

1. Group identical texts (exact string equality).
2. The largest group with at least two members wins; between equally large
   groups the one whose first member came earliest wins.
3. With no repeated text, the first text wins.
4. With no texts at all there is no winner.

Examples:
    >>> select_consensus(["Bonjour", "Bonjour", "Salut"])
    ('Bonjour', 2)
    >>> select_consensus(["Bonjour", "Salut", "Ciao"])
    ('Bonjour', 1)
    >>> select_consensus([])
    (None, 0)
"""

from __future__ import annotations

from collections.abc import Sequence


def select_consensus(texts: Sequence[str]) -> tuple[str | None, int]:
    """Return ``(winning text, number of agreeing providers)``."""
    if not texts:
        return None, 0

    # dicts keep first-occurrence order, which is the tie-break
    votes: dict[str, int] = {}
    for text in texts:
        votes[text] = votes.get(text, 0) + 1

    best_text, best_votes = texts[0], 1
    for text, count in votes.items():
        if count >= 2 and count > best_votes:
            best_text, best_votes = text, count
    return best_text, best_votes


__all__ = ["select_consensus"]
