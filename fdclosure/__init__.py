"""
fdclosure - Armstrong's-axiom derivations over functional dependencies

Given FDs over a set of attributes, derives:
- trivial FDs (reflexivity)
- augmented FDs (augmentation)
- chained FDs (transitivity)
- the closure of the FD set, iterated to a fixed point

The derivation functions are pure: inputs are never modified and every call
returns a new FDSet. The runner and CLI add configuration, logging and
canonical text rendering on top.
"""

from .model import FD, FDSet, FDError
from .notation import format_fd, parse_fd, parse_fds
from .powerset import power_set
from .rules import attributes, augment, transitive, trivial
from .closure import ClosureRound, closure, closure_rounds
from .query import attribute_closure, holds_in, implies
from .config import ClosureConfig, load_config
from .runner import ClosureRunner, RunResult

__all__ = [
    "FD",
    "FDSet",
    "FDError",
    "format_fd",
    "parse_fd",
    "parse_fds",
    "power_set",
    "attributes",
    "augment",
    "transitive",
    "trivial",
    "ClosureRound",
    "closure",
    "closure_rounds",
    "attribute_closure",
    "holds_in",
    "implies",
    "ClosureConfig",
    "load_config",
    "ClosureRunner",
    "RunResult",
]
