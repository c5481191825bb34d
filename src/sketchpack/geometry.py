"""
Geometry utilities for packed layouts.

Contains:
- Bounds: rectangular sampling region, anchored at a corner or at its centre
- Circle-circle overlap predicates, scalar and vectorized
"""

import numpy as np
from dataclasses import dataclass
from typing import Tuple

from .config import ConfigurationError, Point


@dataclass(frozen=True)
class Bounds:
    """Rectangular region positions are sampled from."""
    width: float
    height: float
    centered: bool = False

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(
                f"bounds must have positive size, got {self.width}x{self.height}"
            )

    @property
    def min_coords(self) -> np.ndarray:
        if self.centered:
            return np.array([-self.width / 2, -self.height / 2])
        return np.array([0.0, 0.0])

    @property
    def max_coords(self) -> np.ndarray:
        return self.min_coords + np.array([self.width, self.height])

    def sample_point(self, rng: np.random.Generator) -> Tuple[float, float]:
        """Uniform random position inside the bounds."""
        point = rng.uniform(self.min_coords, self.max_coords)
        return float(point[0]), float(point[1])

    def contains(self, point) -> bool:
        """Half-open like sample_point: lower edges inside, upper edges outside."""
        p = np.asarray(point, dtype=float)
        return bool(np.all(p >= self.min_coords) and np.all(p < self.max_coords))


def circles_overlap(c1: Point, r1: float, c2: Point, r2: float) -> bool:
    """True if the two circles intersect. Tangent circles do not."""
    d = np.linalg.norm(np.asarray(c1, dtype=float) - np.asarray(c2, dtype=float))
    return bool(d < r1 + r2)


def overlaps_any(center: Point, radius: float, centers: np.ndarray, radii: np.ndarray) -> bool:
    """Vectorized overlap test of one circle against many."""
    if len(centers) == 0:
        return False
    distances = np.linalg.norm(centers - np.asarray(center, dtype=float), axis=1)
    return bool(np.any(distances < radii + radius))


def min_clearance(centers: np.ndarray, radii: np.ndarray) -> float:
    """Smallest gap between any two circles; negative when some pair overlaps."""
    if len(centers) < 2:
        return float('inf')

    diffs = centers[:, np.newaxis, :] - centers[np.newaxis, :, :]
    distances = np.linalg.norm(diffs, axis=2)
    gaps = distances - (radii[:, np.newaxis] + radii[np.newaxis, :])

    # Ignore each circle's distance to itself
    upper = np.triu_indices(len(centers), k=1)
    return float(np.min(gaps[upper]))
