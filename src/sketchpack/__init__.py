"""
sketchpack - Non-overlapping layouts for generative-art sketches.

Usage:
    from sketchpack import PackedLayout, LayoutConfig, PackingPolicy, Bounds

    # Up to ten items, stop after eleven rejections in a row
    packer = PackedLayout(Bounds(100, 100))
    layout = packer.pack(candidate_factory)

    # Shrink the radius at each candidate position until it fits
    config = LayoutConfig(
        policy=PackingPolicy.SHRINKING_RADIUS,
        max_items=100,
        max_radius=100,
        min_radius=25,
    )
    layout = PackedLayout(Bounds(500, 500), config).pack(candidate_factory)

    # Ready-made sketches
    ctx = SketchContext(seed=7)
    snowflakes = snowflake_layout(ctx)
    quilt = build_patchwork(ctx)

Packing policies:
    - Fixed count: target item count with a consecutive-failure budget
    - Shrinking radius: fixed number of positions, radius ladder per position
"""

from .config import (
    Circle,
    ConfigurationError,
    LayoutConfig,
    PackingPolicy,
    PackingProgress,
    Point,
)
from .geometry import Bounds, circles_overlap, min_clearance, overlaps_any
from .layout import Layout, PackedLayout, PlacedItem, generate
from .sketches import (
    BubblePayload,
    RosePayload,
    ShapeKind,
    SketchContext,
    SnowflakePayload,
    bubble_layout,
    rose_layout,
    snowflake_layout,
)
from .patchwork import PatchworkTile, PatternStyle, build_patchwork, tile_offsets

__all__ = [
    "PackedLayout",
    "Layout",
    "PlacedItem",
    "generate",
    "LayoutConfig",
    "PackingPolicy",
    "PackingProgress",
    "ConfigurationError",
    "Bounds",
    "circles_overlap",
    "overlaps_any",
    "min_clearance",
    "SketchContext",
    "ShapeKind",
    "RosePayload",
    "BubblePayload",
    "SnowflakePayload",
    "rose_layout",
    "bubble_layout",
    "snowflake_layout",
    "PatternStyle",
    "PatchworkTile",
    "build_patchwork",
    "tile_offsets",
    "Circle",
    "Point",
]

__version__ = "0.1.0"
