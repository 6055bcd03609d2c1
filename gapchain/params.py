"""Clustering and chaining parameters."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, Union


DEFAULT_FIXED_SEPARATION = 5
DEFAULT_MAX_SEPARATION = 1000
DEFAULT_MIN_OUTPUT_SCORE = 200
DEFAULT_SEPARATION_FACTOR = 0.05


@dataclass(frozen=True)
class ClusterParams:
    """Settings shared by the cluster builder and the chain selector.

    *fixed_separation* is the diagonal drift always tolerated between two
    neighbouring anchors; *separation_factor* lets that tolerance grow with
    the query gap between them.  Anchors further apart than
    *max_separation* are never joined directly.  A chain is reported only
    when its score reaches *min_output_score*; with *use_extents* the score
    is the reference span of the chain instead of its summed anchor length.
    """

    fixed_separation: int = DEFAULT_FIXED_SEPARATION
    max_separation: int = DEFAULT_MAX_SEPARATION
    min_output_score: int = DEFAULT_MIN_OUTPUT_SCORE
    separation_factor: float = DEFAULT_SEPARATION_FACTOR
    use_extents: bool = False

    def __post_init__(self) -> None:
        if self.fixed_separation < 0:
            raise ValueError("fixed_separation must be non-negative")
        if self.max_separation < 0:
            raise ValueError("max_separation must be non-negative")
        if self.min_output_score < 0:
            raise ValueError("min_output_score must be non-negative")
        if self.separation_factor < 0:
            raise ValueError("separation_factor must be non-negative")

    def diagonal_tolerance(self, separation: int) -> int:
        """Largest diagonal difference allowed across a gap of *separation*."""
        return max(self.fixed_separation, int(self.separation_factor * separation))

    def to_dict(self) -> Dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict) -> "ClusterParams":
        """Create from dictionary, ignoring keys that are not parameters."""
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in names})

    @classmethod
    def from_json(cls, filepath: Union[str, Path]) -> "ClusterParams":
        with open(filepath) as f:
            return cls.from_dict(json.load(f))
