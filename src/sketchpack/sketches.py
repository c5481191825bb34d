"""
Payload generators for the packed sketches.

Roses and bubbles fill a single patchwork tile; snowflakes fill the whole
canvas. Each sketch draws its randomness from an explicit SketchContext.
"""

import math
import numpy as np
from dataclasses import dataclass, field
from typing import Optional, Tuple
from enum import Enum

from .config import (
    LayoutConfig,
    PackingPolicy,
    SNOWFLAKE_ATTEMPTS,
    TILE_FAILURE_BUDGET,
    TILE_ITEM_LIMIT,
)
from .geometry import Bounds
from .layout import CandidateFactory, Layout, PackedLayout, PlacedItem


@dataclass
class SketchContext:
    """Canvas dimensions and random source for one rendering session."""
    width: float = 500
    height: float = 500
    seed: Optional[int] = None
    verbose: bool = False
    rng: np.random.Generator = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        self.rng = np.random.default_rng(self.seed)

    @property
    def tile_size(self) -> float:
        return self.width / 6

    @property
    def canvas_bounds(self) -> Bounds:
        return Bounds(self.width, self.height)

    @property
    def tile_bounds(self) -> Bounds:
        return Bounds(self.tile_size, self.tile_size)

    def ceil_uniform(self, low: float, high: float) -> int:
        return int(math.ceil(self.rng.uniform(low, high)))


class ShapeKind(Enum):
    """Shapes a snowflake is assembled from."""
    ELLIPSE = "ellipse"
    HEXAGON = "hexagon"
    TRIANGLE = "triangle"


SHAPES = tuple(ShapeKind)


# =========================================================================
# Roses
# =========================================================================

@dataclass(frozen=True)
class RosePayload:
    """Polar rose r = a * cos(k * theta) with k = numerator / denominator."""
    numerator: int
    denominator: int
    k: float
    amplitude: float
    revolutions: float


def rose_revolutions(numerator: int, denominator: int) -> float:
    """Angle needed to close the rose: the reduced denominator times a full turn."""
    return (denominator // math.gcd(numerator, denominator)) * 2 * math.pi


def random_harmonic(ctx: SketchContext) -> Tuple[int, int]:
    n = d = 0
    while n == d:
        n = ctx.ceil_uniform(3, 9)
        d = ctx.ceil_uniform(3, 9)
    return n, d


def rose_factory(ctx: SketchContext, size: Optional[float] = None) -> CandidateFactory:
    size = size if size is not None else ctx.tile_size
    bounds = Bounds(size, size)

    def make_rose() -> PlacedItem:
        n, d = random_harmonic(ctx)
        position = bounds.sample_point(ctx.rng)
        amplitude = float(ctx.rng.uniform(size / 6, size / 4))
        payload = RosePayload(
            numerator=n,
            denominator=d,
            k=n / d,
            amplitude=amplitude,
            revolutions=rose_revolutions(n, d),
        )
        return PlacedItem(position, amplitude, payload)

    return make_rose


# =========================================================================
# Bubbles
# =========================================================================

@dataclass(frozen=True)
class BubblePayload:
    radius: float
    rotation: float  # degrees


def bubble_factory(ctx: SketchContext, size: Optional[float] = None) -> CandidateFactory:
    size = size if size is not None else ctx.tile_size
    bounds = Bounds(size, size)

    def make_bubble() -> PlacedItem:
        position = bounds.sample_point(ctx.rng)
        radius = float(ctx.rng.uniform(size / 8, size / 4))
        rotation = float(ctx.rng.uniform(0, 360))
        return PlacedItem(position, radius, BubblePayload(radius, rotation))

    return make_bubble


# =========================================================================
# Snowflakes
# =========================================================================

@dataclass(frozen=True)
class SnowflakePayload:
    centre_piece: ShapeKind
    extension_pieces: Tuple[ShapeKind, ...]
    rotation: float  # degrees
    pieces: int      # shapes orbiting each ring

    def piece_size(self, radius: float) -> float:
        return radius / len(self.extension_pieces) / 2


def random_shape(ctx: SketchContext) -> ShapeKind:
    return SHAPES[int(ctx.rng.integers(len(SHAPES)))]


def snowflake_factory(ctx: SketchContext) -> CandidateFactory:
    """Snowflake candidates. The radius is left at zero for the shrinking loop to assign."""
    bounds = ctx.canvas_bounds

    def make_snowflake() -> PlacedItem:
        position = bounds.sample_point(ctx.rng)
        payload = SnowflakePayload(
            centre_piece=random_shape(ctx),
            extension_pieces=tuple(random_shape(ctx) for _ in range(ctx.ceil_uniform(3, 5))),
            rotation=float(ctx.rng.uniform(0, 360)),
            pieces=ctx.ceil_uniform(4, 15),
        )
        return PlacedItem(position, 0.0, payload)

    return make_snowflake


# =========================================================================
# Layout builders
# =========================================================================

def _tile_config(ctx: SketchContext) -> LayoutConfig:
    return LayoutConfig(
        policy=PackingPolicy.FIXED_COUNT,
        max_items=TILE_ITEM_LIMIT,
        max_consecutive_failures=TILE_FAILURE_BUDGET,
        verbose=ctx.verbose,
    )


def rose_layout(ctx: SketchContext) -> Layout:
    return PackedLayout(ctx.tile_bounds, _tile_config(ctx)).pack(rose_factory(ctx))


def bubble_layout(ctx: SketchContext) -> Layout:
    return PackedLayout(ctx.tile_bounds, _tile_config(ctx)).pack(bubble_factory(ctx))


def snowflake_layout(ctx: SketchContext, attempts: int = SNOWFLAKE_ATTEMPTS) -> Layout:
    """Fill the canvas with snowflakes between a fifth and a twentieth of its width."""
    config = LayoutConfig(
        policy=PackingPolicy.SHRINKING_RADIUS,
        max_items=attempts,
        max_radius=ctx.width / 5,
        min_radius=ctx.width / 20,
        verbose=ctx.verbose,
    )
    return PackedLayout(ctx.canvas_bounds, config).pack(snowflake_factory(ctx))
