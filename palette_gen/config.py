"""
Tuning parameters for distinct palette generation.
"""

import dataclasses
from dataclasses import dataclass
from typing import Optional

from .delta_e import METRICS
from .errors import InvalidArgument

# "mean-min" spreads the whole palette first, then lifts the bottleneck
TARGETS = ("min", "mean", "mean-min")


@dataclass(frozen=True)
class DistinctConfig:
    """Configuration for the distinct color optimizer."""
    # Distance
    metric: str = "ciede2000"

    # Reproducibility; None draws fresh entropy on every call
    seed: Optional[int] = 42

    # Seeding
    pool_factor: int = 4  # candidate pool size per requested color
    min_pool: int = 4096
    min_lightness: float = 20.0  # CIELAB L* band kept away from black/white
    max_lightness: float = 90.0

    # Refinement
    target: str = "min"  # nearest-neighbour distance to maximize: minimum or mean
    max_iterations: int = 3000
    time_budget: Optional[float] = None  # seconds
    patience: int = 150  # consecutive rejected rounds before stopping
    step_factor: float = 0.5  # move size relative to the current bottleneck distance
    min_step: float = 1.0
    random_trials: int = 4

    # Performance
    workers: int = 1
    block_size: int = 256

    # Progress callback frequency (rounds)
    report_every: int = 250

    def validate(self):
        if self.metric not in METRICS:
            raise InvalidArgument("metric", f"must be one of {', '.join(METRICS)}", self.metric)
        if self.target not in TARGETS:
            raise InvalidArgument("target", f"must be one of {', '.join(TARGETS)}", self.target)
        if not 0.0 <= self.min_lightness < self.max_lightness <= 100.0:
            raise InvalidArgument("min_lightness/max_lightness",
                                  "need 0 <= min_lightness < max_lightness <= 100",
                                  (self.min_lightness, self.max_lightness))
        for name in ("pool_factor", "min_pool", "patience", "block_size", "report_every"):
            if getattr(self, name) < 1:
                raise InvalidArgument(name, "must be positive", getattr(self, name))
        for name in ("max_iterations", "random_trials"):
            if getattr(self, name) < 0:
                raise InvalidArgument(name, "must not be negative", getattr(self, name))
        if self.workers < 1:
            raise InvalidArgument("workers", "must be at least 1", self.workers)
        if self.step_factor <= 0 or self.min_step < 0:
            raise InvalidArgument("step_factor/min_step", "step sizes must be positive",
                                  (self.step_factor, self.min_step))
        if self.time_budget is not None and self.time_budget <= 0:
            raise InvalidArgument("time_budget", "must be positive", self.time_budget)
        return self

    def replace(self, **changes):
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_mapping(cls, mapping):
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(mapping) - known)
        if unknown:
            raise InvalidArgument("config", "unknown keys", unknown)
        return cls(**mapping).validate()


DEFAULT_CONFIG = DistinctConfig()
