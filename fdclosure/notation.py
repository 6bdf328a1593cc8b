"""
Text notation for functional dependencies.

    "A, B -> C"   comma form, attributes may be multi-character names
    "AB->C"       compact form, one character per attribute
"""

from __future__ import annotations

from typing import Iterable, List

from .model import FD, Attribute, FDError, FDSet

ARROW = "->"


def parse_fd(text: str, compact: bool = False) -> FD:
    parts = text.split(ARROW)
    if len(parts) != 2:
        raise FDError(
            code="PARSE_ERROR",
            message=f"Cannot parse '{text}' into a functional dependency.",
            details={"text": text},
        )
    left, right = (parse_attributes(part, compact) for part in parts)
    return FD(left, right)


def parse_fds(lines: Iterable[str], compact: bool = False) -> FDSet:
    """Parse every notation in ``lines``; a line may hold several separated by ';'."""
    fds = FDSet()
    for line in lines:
        for entry in line.split(";"):
            if entry.strip():
                fds.add(parse_fd(entry, compact=compact))
    return fds


def format_attributes(attrs: Iterable[Attribute], compact: bool = False) -> str:
    names = [str(attr) for attr in sorted(attrs)]
    # compact form only round-trips for single-character names
    if compact and all(len(name) == 1 for name in names):
        return "".join(names)
    return ", ".join(names)


def format_fd(fd: FD, compact: bool = False) -> str:
    return f"{format_attributes(fd.left, compact)} {ARROW} {format_attributes(fd.right, compact)}"


def parse_attributes(side: str, compact: bool = False) -> List[str]:
    """One side of the notation. Compact mode treats commas as optional separators."""
    if compact:
        return [ch for ch in side if not ch.isspace() and ch != ","]
    return [token.strip() for token in side.split(",") if token.strip()]
