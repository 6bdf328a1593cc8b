"""
FD set closure.

Applies reflexivity, transitivity and augmentation (by every non-empty subset
of the attributes in play) to the current set, folds the results back in, and
repeats until a round no longer grows the set. The attribute universe never
grows during the loop, so the number of rounds is bounded.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator

from .model import FD, FDSet
from .powerset import power_set
from .rules import attributes, augment, transitive, trivial


@dataclass(frozen=True)
class ClosureRound:
    """Bookkeeping for one pass of the closure loop."""

    index: int
    size_before: int
    size_after: int
    trivial: int
    augmented: int
    transitive: int
    result: FDSet

    @property
    def converged(self) -> bool:
        return self.size_after == self.size_before

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "size_before": self.size_before,
            "size_after": self.size_after,
            "trivial": self.trivial,
            "augmented": self.augmented,
            "transitive": self.transitive,
            "converged": self.converged,
        }


def closure_rounds(fds: Iterable[FD]) -> Iterator[ClosureRound]:
    """
    Yield one ClosureRound per pass. The last round yielded is converged and
    its ``result`` is the closure.
    """
    current = FDSet(fds)
    index = 0
    while True:
        index += 1
        trivial_fds = trivial(current)
        transitive_fds = transitive(current)

        augmented = current.copy()
        for subset in power_set(attributes(current)):
            if subset:
                augmented.update(augment(current, subset))

        result = trivial_fds | augmented | transitive_fds
        added = result | current
        step = ClosureRound(
            index=index,
            size_before=len(current),
            size_after=len(added),
            trivial=len(trivial_fds),
            augmented=len(augmented),
            transitive=len(transitive_fds),
            result=result,
        )
        yield step
        if step.converged:
            return
        current = added


def closure(fds: Iterable[FD]) -> FDSet:
    """Every FD derivable from ``fds`` by Armstrong's axioms, to a fixed point."""
    result = FDSet()
    for step in closure_rounds(fds):
        result = step.result
    return result
