"""
Armstrong's axioms as derivation rules over FD sets.

    reflexivity   Y ⊆ X          =>  X -> Y          (trivial)
    augmentation  X -> Y         =>  XZ -> YZ        (augment)
    transitivity  X -> Y, Y -> Z =>  X -> Z          (transitive)

Every rule reads its input FDSet and returns a newly built FDSet; inputs are
never modified.
"""

from __future__ import annotations

from typing import Iterable, List

from .model import FD, Attribute, FDSet
from .powerset import power_set


def attributes(fds: Iterable[FD]) -> List[Attribute]:
    """All attributes on either side of any FD, in canonical (sorted) order."""
    found = set()
    for fd in fds:
        found |= fd.left
        found |= fd.right
    return sorted(found)


def trivial(fds: Iterable[FD]) -> FDSet:
    """
    For every FD ``X -> Y`` derive ``X -> S`` for each non-empty ``S ⊆ X``.

    Only the derived FDs are returned; the input is not folded in.
    """
    derived = FDSet()
    for fd in FDSet(fds):
        for subset in power_set(fd.left):
            if subset:
                derived.add(FD(fd.left, subset))
    return derived


def augment(fds: Iterable[FD], attrs: Iterable[Attribute]) -> FDSet:
    """Union ``attrs`` into both sides of every FD."""
    extra = frozenset(attrs)
    return FDSet(fd.augmented(extra) for fd in FDSet(fds))


def transitive(fds: Iterable[FD]) -> FDSet:
    """
    Chain FDs whose right side equals another's left side until no round
    grows the set.

    Returns the FDs derived in the terminal round only. Callers that need the
    input as well must union it themselves.
    """
    current = FDSet(fds)
    while True:
        derived = _chain(current)
        grown = current | derived
        if len(grown) == len(current):
            return derived
        current = grown


def _chain(fds: FDSet) -> FDSet:
    by_left = {}
    for fd in fds:
        by_left.setdefault(fd.left, []).append(fd)

    derived = FDSet()
    for first in fds:
        for second in by_left.get(first.right, ()):
            if first != second:
                derived.add(FD(first.left, second.right))
    return derived
