"""
Runner configuration and its YAML loader.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .model import FDError

OPERATIONS = ("attributes", "trivial", "augment", "transitive", "closure")


@dataclass
class ClosureConfig:
    """Configuration for a ClosureRunner."""
    max_attributes: int = 5  # closure cost is exponential in this
    compact_notation: bool = False
    operations: List[str] = field(
        default_factory=lambda: ["attributes", "trivial", "transitive", "closure"]
    )
    show_trivial_in_closure: bool = True
    verbose: bool = False
    log_dir: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.max_attributes, int) or self.max_attributes < 0:
            raise FDError(
                code="INVALID_CONFIG",
                message="max_attributes must be a non-negative integer.",
                details={"max_attributes": self.max_attributes},
            )
        if not isinstance(self.operations, list) or not all(
            isinstance(name, str) for name in self.operations
        ):
            raise FDError(
                code="INVALID_CONFIG",
                message="operations must be a list of operation names.",
                details={"operations": self.operations},
            )
        unknown = sorted(set(self.operations) - set(OPERATIONS))
        if unknown:
            raise FDError(
                code="INVALID_CONFIG",
                message="Configuration names unknown operations.",
                details={"unknown": unknown, "known": list(OPERATIONS)},
            )

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def load_config(path: str, **overrides: Any) -> ClosureConfig:
    """
    Load a ClosureConfig from a YAML mapping. Keyword overrides whose value is
    not None replace file values.
    """
    try:
        data = yaml.safe_load(Path(path).read_text()) or {}
    except OSError as exc:
        raise FDError(
            code="INVALID_CONFIG",
            message=f"Cannot read configuration file: {exc.strerror or exc}.",
            details={"path": path},
        ) from exc
    except yaml.YAMLError as exc:
        raise FDError(
            code="INVALID_CONFIG",
            message="Configuration file is not valid YAML.",
            details={"path": path, "error": str(exc)},
        ) from exc
    if not isinstance(data, dict):
        raise FDError(
            code="INVALID_CONFIG",
            message="Configuration file must contain a mapping.",
            details={"path": path},
        )
    known = {f.name for f in fields(ClosureConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise FDError(
            code="INVALID_CONFIG",
            message="Configuration file has unknown keys.",
            details={"path": path, "unknown": unknown},
        )
    data.update({key: value for key, value in overrides.items() if value is not None})
    return ClosureConfig(**data)
