"""
Patchwork quilt: a grid of tiles, each showing one pattern style.

Tiles are laid out in pairs separated by gutters a third of a tile wide.
Styles that scatter items over their tile (roses, bubbles) get an independent
packed layout each.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple
from enum import Enum

from .layout import Layout
from .sketches import SketchContext, bubble_layout, rose_layout


class PatternStyle(Enum):
    """Available quilt tile styles."""
    SHAPES = "shapes"
    CROSSES = "crosses"
    DASHES = "dashes"
    LINES = "lines"
    TARTAN = "tartan"
    ROSES = "roses"
    CROSSHAIR = "crosshair"
    SHRINKING = "shrinking"
    BUBBLES = "bubbles"


LayoutBuilder = Callable[[SketchContext], Layout]

LAYOUT_BUILDERS: Dict[PatternStyle, LayoutBuilder] = {
    PatternStyle.ROSES: rose_layout,
    PatternStyle.BUBBLES: bubble_layout,
}


@dataclass(frozen=True)
class PatchworkTile:
    offset_x: float
    offset_y: float
    style: PatternStyle
    layout: Optional[Layout] = None

    @property
    def is_packed(self) -> bool:
        return self.layout is not None


def _axis_positions(extent: float, size: float) -> List[float]:
    """Tile starts along one axis, with a gutter after every second tile."""
    positions = []
    count = 0
    pos = -extent / 2 - size
    while pos < extent / 2 + size:
        positions.append(pos)
        count += 1
        if count % 2 == 0:
            pos += size / 3
        pos += size
    return positions


def tile_offsets(ctx: SketchContext) -> List[Tuple[float, float]]:
    """Top-left corners of every tile, column by column, relative to the canvas centre."""
    size = ctx.tile_size
    xs = _axis_positions(ctx.width, size)
    ys = _axis_positions(ctx.height, size)
    return [(x, y) for x in xs for y in ys]


def random_style(ctx: SketchContext) -> PatternStyle:
    styles = list(PatternStyle)
    return styles[int(ctx.rng.integers(len(styles)))]


def build_tile(ctx: SketchContext, offset: Tuple[float, float], style: PatternStyle) -> PatchworkTile:
    builder = LAYOUT_BUILDERS.get(style)
    layout = builder(ctx) if builder is not None else None
    return PatchworkTile(offset[0], offset[1], style, layout)


def build_patchwork(ctx: SketchContext) -> List[PatchworkTile]:
    """Pick a style for every tile and pack the ones that need it."""
    tiles = [build_tile(ctx, offset, random_style(ctx)) for offset in tile_offsets(ctx)]

    if ctx.verbose:
        packed = sum(tile.is_packed for tile in tiles)
        print(f"Patchwork: {len(tiles)} tiles, {packed} packed")

    return tiles
