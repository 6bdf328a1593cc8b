"""
Functional dependency data model.

FDs are immutable values; an FDSet is a collection of FDs with set
semantics. Engine operations never share an FDSet with their caller:
constructing an FDSet from another one always copies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Hashable, Iterable, Iterator, List, Optional, Set, Tuple

Attribute = Hashable
AttributeSet = FrozenSet[Attribute]


class FDError(Exception):
    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details


@dataclass(frozen=True)
class FD:
    """A functional dependency ``left -> right``. Both sides are non-empty."""

    left: AttributeSet
    right: AttributeSet

    def __post_init__(self) -> None:
        object.__setattr__(self, "left", frozenset(self.left))
        object.__setattr__(self, "right", frozenset(self.right))
        if not self.left or not self.right:
            raise FDError(
                code="EMPTY_SIDE",
                message="Functional dependency sides must be non-empty.",
                details={"left": sorted(self.left), "right": sorted(self.right)},
            )

    @property
    def is_trivial(self) -> bool:
        return self.right <= self.left

    def augmented(self, attrs: Iterable[Attribute]) -> "FD":
        extra = frozenset(attrs)
        return FD(self.left | extra, self.right | extra)

    def sort_key(self) -> Tuple[Tuple[Attribute, ...], Tuple[Attribute, ...]]:
        return tuple(sorted(self.left)), tuple(sorted(self.right))

    def __str__(self) -> str:
        from .notation import format_fd

        return format_fd(self)


class FDSet:
    def __init__(self, fds: Iterable[FD] = ()) -> None:
        self._fds: Set[FD] = set(fds)

    def add(self, fd: FD) -> None:
        self._fds.add(fd)

    def update(self, *others: Iterable[FD]) -> None:
        for other in others:
            self._fds.update(other)

    def union(self, *others: Iterable[FD]) -> "FDSet":
        result = self.copy()
        result.update(*others)
        return result

    def copy(self) -> "FDSet":
        return FDSet(self._fds)

    def sorted(self) -> List[FD]:
        """Members in canonical order, for reproducible rendering."""
        return sorted(self._fds, key=FD.sort_key)

    def __or__(self, other: Iterable[FD]) -> "FDSet":
        return self.union(other)

    def __contains__(self, fd: object) -> bool:
        return fd in self._fds

    def __iter__(self) -> Iterator[FD]:
        return iter(self._fds)

    def __len__(self) -> int:
        return len(self._fds)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FDSet):
            return self._fds == other._fds
        if isinstance(other, (set, frozenset)):
            return self._fds == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        inner = ", ".join(str(fd) for fd in self.sorted())
        return f"FDSet({{{inner}}})"
