"""
Power set generation.
"""

from __future__ import annotations

from typing import FrozenSet, Hashable, Iterable, Tuple, TypeVar

E = TypeVar("E", bound=Hashable)


def power_set(elements: Iterable[E]) -> FrozenSet[FrozenSet[E]]:
    """
    Return every subset of ``elements``, including the empty set and the
    full set. The input is never modified.

        power_set({1, 2}) --> {{}, {1}, {2}, {1, 2}}
    """
    return _split(tuple(frozenset(elements)))


def _split(items: Tuple[E, ...]) -> FrozenSet[FrozenSet[E]]:
    if not items:
        return frozenset({frozenset()})
    head, rest = items[0], items[1:]
    without_head = _split(rest)
    with_head = frozenset(subset | {head} for subset in without_head)
    return without_head | with_head
