"""
Implication checks built on top of FD sets and their closures.
"""

from __future__ import annotations

from typing import FrozenSet, Iterable

from .model import FD, Attribute


def attribute_closure(attrs: Iterable[Attribute], fds: Iterable[FD]) -> FrozenSet[Attribute]:
    """
    Compute X+ with respect to ``fds``: every attribute A such that X -> A
    follows from ``fds``.
    """
    closed = set(attrs)
    pairs = [(fd.left, fd.right) for fd in fds]
    changed = True
    while changed:
        changed = False
        for left, right in pairs:
            if left <= closed and not right <= closed:
                closed |= right
                changed = True
    return frozenset(closed)


def implies(fds: Iterable[FD], fd: FD) -> bool:
    """True when ``fd`` follows from ``fds``."""
    return fd.right <= attribute_closure(fd.left, fds)


def holds_in(closed: Iterable[FD], fd: FD) -> bool:
    """
    Containment test against a precomputed closure: some member has a left
    side contained in ``fd.left`` and a right side covering ``fd.right``.
    """
    return any(
        member.left <= fd.left and member.right >= fd.right for member in closed
    )
