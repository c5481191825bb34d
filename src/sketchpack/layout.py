import numpy as np
from dataclasses import dataclass, replace
from collections.abc import Sequence
from typing import Any, Callable, Iterable, Iterator, List, Optional, Tuple

from .config import (
    Circle,
    ConfigurationError,
    LayoutConfig,
    PackingPolicy,
    PackingProgress,
    TILE_FAILURE_BUDGET,
)
from .geometry import Bounds, overlaps_any


@dataclass(frozen=True)
class PlacedItem:
    """One placement. extent_radius is the radius used for overlap tests, not for drawing."""
    position: Tuple[float, float]
    extent_radius: float
    payload: Any = None

    @property
    def x(self) -> float:
        return self.position[0]

    @property
    def y(self) -> float:
        return self.position[1]

    @property
    def center(self) -> np.ndarray:
        return np.array(self.position, dtype=float)

    def with_radius(self, radius: float) -> "PlacedItem":
        return replace(self, extent_radius=radius)

    def as_circle(self) -> Circle:
        return (float(self.position[0]), float(self.position[1]), float(self.extent_radius))


CandidateFactory = Callable[[], PlacedItem]


class Layout(Sequence):
    """Ordered accumulator of placed items. Read-only once frozen."""

    def __init__(self, bounds: Bounds):
        self.bounds = bounds
        self._items: List[PlacedItem] = []
        self._frozen = False

        # Cache for numpy arrays
        self._centers_arr: Optional[np.ndarray] = None
        self._radii_arr: Optional[np.ndarray] = None
        self._cache_valid = False

    def __getitem__(self, index):
        if isinstance(index, slice):
            return tuple(self._items[index])
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"Layout({len(self._items)} items, {state})"

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def items(self) -> Tuple[PlacedItem, ...]:
        return tuple(self._items)

    def freeze(self) -> None:
        self._frozen = True

    def _get_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        if not self._cache_valid or self._centers_arr is None:
            if self._items:
                self._centers_arr = np.array([item.position for item in self._items], dtype=float)
                self._radii_arr = np.array([item.extent_radius for item in self._items], dtype=float)
            else:
                self._centers_arr = np.empty((0, 2))
                self._radii_arr = np.empty(0)
            self._cache_valid = True
        return self._centers_arr, self._radii_arr

    def overlaps(self, position, radius: float) -> bool:
        """Check a circle against every accepted item."""
        centers_arr, radii_arr = self._get_arrays()
        return overlaps_any(position, radius, centers_arr, radii_arr)

    def add(self, item: PlacedItem) -> None:
        if self._frozen:
            raise RuntimeError("cannot add items to a frozen layout")
        self._items.append(item)
        self._cache_valid = False

    def circles(self) -> List[Circle]:
        return [item.as_circle() for item in self._items]


class PackedLayout:
    """Places non-overlapping items by rejection sampling under a bounded retry budget."""

    def __init__(
        self,
        bounds: Bounds,
        config: Optional[LayoutConfig] = None,
        initial_items: Iterable[PlacedItem] = (),
    ):
        self.config = config or LayoutConfig()
        self.config.validate()
        self.bounds = bounds
        self.initial_items = tuple(initial_items)
        self._reset()

    def _reset(self) -> None:
        """Start a run from a fresh layout holding only the initial items."""
        self.layout = Layout(self.bounds)
        self.progress = PackingProgress(max_failed_attempts=self._failure_limit())

        for item in self.initial_items:
            if self.layout.overlaps(item.position, item.extent_radius):
                raise ConfigurationError(f"initial item at {item.position} overlaps another initial item")
            self.layout.add(item)

    def _failure_limit(self) -> int:
        if self.config.policy is PackingPolicy.FIXED_COUNT:
            return self.config.max_consecutive_failures
        return self.config.max_items

    def _accept(self, item: PlacedItem) -> PlacedItem:
        self.layout.add(item)
        self.progress.items_placed += 1
        return item

    # =========================================================================
    # Fixed Count Packing
    # =========================================================================

    def _pack_fixed_count(self, candidate_factory: CandidateFactory) -> Iterator[PlacedItem]:
        self.progress.phase = "fixed count"
        max_items = self.config.max_items
        max_failures = self.config.max_consecutive_failures
        accepted = 0

        while accepted < max_items and self.progress.failed_attempts < max_failures:
            candidate = candidate_factory()
            self.progress.candidates_evaluated += 1

            if self.layout.overlaps(candidate.position, candidate.extent_radius):
                self.progress.failed_attempts += 1
                continue

            self.progress.failed_attempts = 0
            accepted += 1
            yield self._accept(candidate)

            if self.config.verbose:
                print(self.progress)

    # =========================================================================
    # Shrinking Radius Packing
    # =========================================================================

    def _fit_radius(self, position) -> Optional[float]:
        """Largest radius on the step ladder that fits at position, if any."""
        radius = self.config.max_radius
        while radius >= self.config.min_radius:
            if not self.layout.overlaps(position, radius):
                return radius
            radius -= self.config.radius_step
        return None

    def _pack_shrinking_radius(self, candidate_factory: CandidateFactory) -> Iterator[PlacedItem]:
        self.progress.phase = "shrinking radius"

        for _ in range(self.config.max_items):
            candidate = candidate_factory()
            self.progress.candidates_evaluated += 1

            radius = self._fit_radius(candidate.position)
            if radius is None:
                self.progress.failed_attempts += 1
                continue

            yield self._accept(candidate.with_radius(radius))

            if self.config.verbose and self.progress.items_placed % 25 == 0:
                print(self.progress)

    # =========================================================================
    # Main Entry Points
    # =========================================================================

    def generate(self, candidate_factory: CandidateFactory) -> Iterator[PlacedItem]:
        """
        Generate items until the policy's budget is used up.
        Each run starts over from the initial items.

        Strategy selection:
        1. FIXED_COUNT: accept candidates until max_items are placed or
           max_consecutive_failures rejections happen in a row
        2. SHRINKING_RADIUS: try max_items positions, shrinking the radius at
           each one until it fits or min_radius is passed

        Yields:
            Each accepted PlacedItem, in insertion order.
        """
        self._reset()

        if self.config.policy is PackingPolicy.FIXED_COUNT:
            yield from self._pack_fixed_count(candidate_factory)
        else:
            yield from self._pack_shrinking_radius(candidate_factory)

        self.layout.freeze()

        if self.config.verbose:
            print(f"Done! {self.progress}")

    def pack(self, candidate_factory: CandidateFactory) -> Layout:
        """Run generation to completion and return the frozen layout."""
        for _ in self.generate(candidate_factory):
            pass
        return self.layout


def generate(
    policy: PackingPolicy,
    bounds: Bounds,
    candidate_factory: CandidateFactory,
    max_items: int,
    max_consecutive_failures: int = TILE_FAILURE_BUDGET,
    max_radius: Optional[float] = None,
    min_radius: Optional[float] = None,
    verbose: bool = False,
) -> Layout:
    """
    Build a layout of non-overlapping items.

    For FIXED_COUNT, max_items is the target item count and
    max_consecutive_failures the number of rejections in a row that ends
    generation. For SHRINKING_RADIUS, max_items is the number of candidate
    positions to try and each is tried at max_radius down to min_radius.

    An under-filled layout is a normal result. ConfigurationError is raised
    before sampling starts when the parameters make no sense.
    """
    config = LayoutConfig(
        policy=policy,
        max_items=max_items,
        max_consecutive_failures=max_consecutive_failures,
        max_radius=max_radius,
        min_radius=min_radius,
        verbose=verbose,
    )
    return PackedLayout(bounds, config).pack(candidate_factory)
