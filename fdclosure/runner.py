"""
fdclosure Runner

Runs the configured derivations over one FD set and reports the results.

The runner:
1. Checks the attribute count against max_attributes
2. Runs each configured operation in order
3. Logs every closure round with its growth
4. Returns a RunResult (text report or JSON summary)

The derivation modules stay pure; all logging happens here.
"""

import json
import os
import sys
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, TextIO

from .closure import closure_rounds
from .config import OPERATIONS, ClosureConfig
from .model import FD, Attribute, FDError, FDSet
from .notation import format_attributes, format_fd
from .rules import attributes, augment, transitive, trivial


@dataclass
class RunResult:
    """Result of a runner invocation."""
    run_id: str
    fds: FDSet
    attributes: List[Attribute] = field(default_factory=list)
    derived: Dict[str, FDSet] = field(default_factory=dict)
    rounds: List[Dict[str, Any]] = field(default_factory=list)
    augment_with: Optional[List[Attribute]] = None
    elapsed_time: float = 0.0
    log_dir: str = ""

    def to_dict(self, compact: bool = False) -> dict:
        return {
            "run_id": self.run_id,
            "fds": [format_fd(fd, compact) for fd in self.fds.sorted()],
            "attributes": [str(attr) for attr in self.attributes],
            "augment_with": None if self.augment_with is None else [str(attr) for attr in self.augment_with],
            "derived": {
                name: [format_fd(fd, compact) for fd in fds.sorted()]
                for name, fds in self.derived.items()
            },
            "rounds": self.rounds,
            "elapsed_time": self.elapsed_time,
            "log_dir": self.log_dir,
        }

    def render(self, compact: bool = False, show_trivial: bool = True) -> str:
        lines = [f"input ({len(self.fds)}):"]
        lines.extend(f"  {format_fd(fd, compact)}" for fd in self.fds.sorted())
        if self.attributes:
            lines.append(f"attributes: {format_attributes(self.attributes, compact)}")
        for name, fds in self.derived.items():
            shown = fds.sorted()
            if name == "closure" and not show_trivial:
                shown = [fd for fd in shown if not fd.is_trivial]
            lines.append(f"{name} ({len(shown)}):")
            lines.extend(f"  {format_fd(fd, compact)}" for fd in shown)
        return "\n".join(lines)


class ClosureRunner:
    def __init__(self, config: Optional[ClosureConfig] = None, run_id: Optional[str] = None):
        self.config = config or ClosureConfig()
        self.verbose = self.config.verbose
        self.run_id = run_id or datetime.now().strftime("%Y%m%d-%H%M%S") + "-" + uuid.uuid4().hex[:8]

        self.run_log_dir = ""
        self.log_file: Optional[TextIO] = None
        if self.config.log_dir:
            self.run_log_dir = os.path.join(self.config.log_dir, self.run_id)

    def _open_log(self) -> None:
        """Start a fresh run.log; result.json from an earlier run is discarded."""
        if not self.run_log_dir:
            return
        os.makedirs(self.run_log_dir, exist_ok=True)
        result_path = os.path.join(self.run_log_dir, "result.json")
        if os.path.exists(result_path):
            os.remove(result_path)
        self.log_file = open(os.path.join(self.run_log_dir, "run.log"), "w")

    def _write_log(self, msg: str) -> None:
        if self.log_file:
            self.log_file.write(msg + "\n")
            self.log_file.flush()

    def log(self, msg: str) -> None:
        """Log a message to the run log and, when verbose, to stderr."""
        timestamped = f"[{datetime.now().strftime('%H:%M:%S.%f')[:-3]}] {msg}"
        self._write_log(timestamped)
        if self.verbose:
            print(f"[fdclosure] {msg}", file=sys.stderr)

    def run(self, fds: Iterable[FD], augment_with: Optional[Iterable[Attribute]] = None) -> RunResult:
        self._open_log()
        try:
            return self._run(fds, augment_with)
        finally:
            self.close()

    def _run(self, fds: Iterable[FD], augment_with: Optional[Iterable[Attribute]]) -> RunResult:
        source = FDSet(fds)
        attrs = attributes(source)
        extra = sorted(augment_with) if augment_with is not None else None
        result = RunResult(
            run_id=self.run_id,
            fds=source,
            augment_with=extra,
            log_dir=self.run_log_dir,
        )
        self.log(f"Run {self.run_id}: {len(source)} FDs over {len(attrs)} attributes")

        if len(attrs) > self.config.max_attributes:
            self.log(f"Refusing: {len(attrs)} attributes exceeds max_attributes={self.config.max_attributes}")
            raise FDError(
                code="LIMIT_EXCEEDED",
                message="Too many attributes for closure computation.",
                details={"attributes": len(attrs), "max_attributes": self.config.max_attributes},
            )

        start = time.time()
        try:
            for name in self.config.operations:
                self._run_operation(name, source, attrs, extra, result)
        finally:
            result.elapsed_time = time.time() - start
            self.log(f"Finished in {result.elapsed_time:.4f}s")
            self._save_result(result)
        return result

    def _run_operation(
        self,
        name: str,
        source: FDSet,
        attrs: List[Attribute],
        extra: Optional[List[Attribute]],
        result: RunResult,
    ) -> None:
        if name not in OPERATIONS:
            raise FDError(
                code="UNKNOWN_OPERATION",
                message=f"Unknown operation '{name}'.",
                details={"known": list(OPERATIONS)},
            )
        if name == "attributes":
            result.attributes = attrs
            self.log(f"attributes: {format_attributes(attrs)}")
        elif name == "trivial":
            result.derived[name] = trivial(source)
        elif name == "augment":
            if extra is None:
                self.log("augment: no attributes given, skipped")
                return
            result.derived[name] = augment(source, extra)
        elif name == "transitive":
            result.derived[name] = transitive(source)
        elif name == "closure":
            closed = FDSet()
            for step in closure_rounds(source):
                self.log(
                    f"closure round {step.index}: {step.size_before} -> {step.size_after} FDs "
                    f"(trivial={step.trivial}, augmented={step.augmented}, transitive={step.transitive})"
                )
                result.rounds.append(step.to_dict())
                closed = step.result
            result.derived[name] = closed

        if name in result.derived:
            self.log(f"{name}: {len(result.derived[name])} FDs")

    def _save_result(self, result: RunResult) -> None:
        if not self.run_log_dir:
            return
        result_path = os.path.join(self.run_log_dir, "result.json")
        with open(result_path, "w") as f:
            json.dump(result.to_dict(self.config.compact_notation), f, indent=2)
        self.log(f"Result saved to: {result_path}")

    def close(self) -> None:
        if self.log_file:
            self.log_file.close()
            self.log_file = None
