"""
Configuration and type definitions for packed layouts.
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional, Tuple
from enum import Enum

# Type aliases
Point = np.ndarray
Circle = Tuple[float, float, float]  # (x, y, radius)

# Patchwork tiles: up to ten items, give up after more than ten straight rejections
TILE_ITEM_LIMIT = 10
TILE_FAILURE_BUDGET = 11

# Snowflake field: candidate positions tried across the canvas
SNOWFLAKE_ATTEMPTS = 100


class ConfigurationError(ValueError):
    """Raised when a layout cannot be configured meaningfully."""


class PackingPolicy(Enum):
    """Available termination policies."""
    FIXED_COUNT = "fixed_count"            # Target count, bounded consecutive failures
    SHRINKING_RADIUS = "shrinking_radius"  # Fixed attempts, radius shrinks per position


@dataclass
class LayoutConfig:
    """
    Configuration parameters for the rejection-sampling engine.

    Basic parameters:
        policy: Which termination policy drives generation
        max_items: Target item count (fixed count) or positions to try (shrinking radius)

    Fixed count parameters:
        max_consecutive_failures: Stop after this many rejections in a row

    Shrinking radius parameters:
        max_radius: First radius tried at each position
        min_radius: Last radius tried before the position is discarded
        radius_step: Amount the radius shrinks between tries

    Output:
        verbose: Print progress while generating
    """
    policy: PackingPolicy = PackingPolicy.FIXED_COUNT
    max_items: int = TILE_ITEM_LIMIT

    max_consecutive_failures: int = TILE_FAILURE_BUDGET

    max_radius: Optional[float] = None
    min_radius: Optional[float] = None
    radius_step: float = 1.0

    verbose: bool = False

    def validate(self) -> None:
        if self.max_items <= 0:
            raise ConfigurationError(f"max_items must be positive, got {self.max_items}")

        if self.policy is PackingPolicy.FIXED_COUNT:
            if self.max_consecutive_failures < 0:
                raise ConfigurationError(
                    f"max_consecutive_failures must be non-negative, got {self.max_consecutive_failures}"
                )
            return

        if self.max_radius is None or self.min_radius is None:
            raise ConfigurationError("shrinking radius policy needs max_radius and min_radius")
        if self.min_radius > self.max_radius:
            raise ConfigurationError(
                f"min_radius ({self.min_radius}) is larger than max_radius ({self.max_radius})"
            )
        if self.min_radius <= 0:
            raise ConfigurationError(f"min_radius must be positive, got {self.min_radius}")
        if self.radius_step <= 0:
            raise ConfigurationError(f"radius_step must be positive, got {self.radius_step}")


@dataclass
class PackingProgress:
    """Tracks the current state of the packing algorithm."""
    items_placed: int = 0
    failed_attempts: int = 0
    max_failed_attempts: int = 0
    candidates_evaluated: int = 0
    phase: str = ""

    @property
    def progress_ratio(self) -> float:
        """How close to stopping (0.0 = just started, 1.0 = done)."""
        return self.failed_attempts / self.max_failed_attempts if self.max_failed_attempts > 0 else 0

    def __str__(self) -> str:
        phase_str = f"[{self.phase}] " if self.phase else ""
        return (
            f"{phase_str}Placed: {self.items_placed} | Evaluated: {self.candidates_evaluated} | "
            f"Failed: {self.failed_attempts}/{self.max_failed_attempts} ({self.progress_ratio:.0%})"
        )
