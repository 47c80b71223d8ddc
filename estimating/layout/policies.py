"""
Packing Policies.

Heuristic overrides layered on top of the plain grid model. They encode
production expectations for specific size classes, not packing geometry,
so each one is a named function that can be tested and switched on its
own.

Policies:
- Compact profile: business-card sized stock packs with a reduced gap
- Large format: bulky dielines target a fixed count (3 or 2) per sheet
- Minimum yield: small tall cup nets are guaranteed 4 items (max 8)

All size checks are orientation independent (long side / short side).
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from ..models.geometry import ProductClass, PackingStrategy
from ..models.layout_result import Orientation
from .grid import best_grid, fit_count

logger = logging.getLogger(__name__)


# Compact profile: both sides within this range [cm]
COMPACT_MIN_SIDE = 5.0
COMPACT_MAX_SIDE = 10.0

# Large format: bounding box above LONG x SHORT [cm]
LARGE_FORMAT_LONG = 50.0
LARGE_FORMAT_SHORT = 30.0
LARGE_FORMAT_SMALL_TIER_LONG = 60.0      # Up to this long side: target 3
LARGE_FORMAT_SMALL_TIER_TARGET = 3
LARGE_FORMAT_LARGE_TIER_TARGET = 2

# Minimum yield: bounding box up to LONG x SHORT [cm]
MIN_YIELD_LONG = 22.0
MIN_YIELD_SHORT = 8.5
MIN_YIELD_COUNT = 4
MIN_YIELD_MAX_STACK = 8


@dataclass(frozen=True)
class PolicyOutcome:
    """Grid dictated by a policy."""
    name: str
    rows: int
    cols: int
    orientation: Orientation
    gap: float

    @property
    def count(self) -> int:
        return self.rows * self.cols


def _long_short(width: float, height: float) -> Tuple[float, float]:
    return max(width, height), min(width, height)


def is_compact_profile(width: float, height: float) -> bool:
    """Both sides in the business-card range."""
    return (COMPACT_MIN_SIDE <= width <= COMPACT_MAX_SIDE
            and COMPACT_MIN_SIDE <= height <= COMPACT_MAX_SIDE)


def is_large_format(width: float, height: float) -> bool:
    """Bounding box exceeds the large-item threshold."""
    long_side, short_side = _long_short(width, height)
    return long_side > LARGE_FORMAT_LONG and short_side > LARGE_FORMAT_SHORT


def is_min_yield_profile(width: float, height: float) -> bool:
    """Small and tall: fits within the minimum-yield bounding box."""
    long_side, short_side = _long_short(width, height)
    return 0 < long_side <= MIN_YIELD_LONG and 0 < short_side <= MIN_YIELD_SHORT


def classify_packing(product_class: ProductClass, width: float, height: float) -> PackingStrategy:
    """
    Select the packing strategy for a bounding box.

    Args:
        product_class: Resolved product class
        width: Bounding box width [cm]
        height: Bounding box height [cm]

    Returns:
        PackingStrategy variant
    """
    if width <= 0 or height <= 0:
        return PackingStrategy.STANDARD
    if product_class == ProductClass.CUP and is_min_yield_profile(width, height):
        return PackingStrategy.CUP_MIN_YIELD
    if is_large_format(width, height):
        return PackingStrategy.LARGE_FORMAT
    if is_compact_profile(width, height):
        return PackingStrategy.COMPACT
    return PackingStrategy.STANDARD


def large_format_target(width: float, height: float) -> int:
    """Target items per sheet for a large-format bounding box."""
    long_side, _ = _long_short(width, height)
    if long_side <= LARGE_FORMAT_SMALL_TIER_LONG:
        return LARGE_FORMAT_SMALL_TIER_TARGET
    return LARGE_FORMAT_LARGE_TIER_TARGET


def fits_evenly(length: float, side: float, count: int, gap: float) -> bool:
    """count items of a side share a length with gaps only between them."""
    return count > 0 and count * side + (count - 1) * gap <= length + 1e-9


def apply_large_format_policy(usable_width: float, usable_height: float,
                              item_width: float, item_height: float,
                              gap: float, grid_count: int) -> Optional[PolicyOutcome]:
    """
    Large-format target count.

    The usable area is split evenly into `target` cells in a single line;
    gaps are only needed between neighbours, which the floor-division grid
    over-charges for bulky items.

    Returns:
        PolicyOutcome, or None when the grid already reaches the target or
        the target does not fit
    """
    target = large_format_target(item_width, item_height)
    if grid_count >= target:
        return None

    layouts = [
        (Orientation.NORMAL, item_width, item_height),
        (Orientation.ROTATED, item_height, item_width),
    ]
    for orientation, across, down in layouts:
        if fits_evenly(usable_width, across, target, gap) and down <= usable_height + 1e-9:
            return PolicyOutcome("large_format", 1, target, orientation, gap)
        if fits_evenly(usable_height, down, target, gap) and across <= usable_width + 1e-9:
            return PolicyOutcome("large_format", target, 1, orientation, gap)

    logger.debug(f"Large-format target {target} does not fit "
                 f"{usable_width:.2f}x{usable_height:.2f}")
    return None


def _forced_stack(usable_width: float, usable_height: float,
                  item_width: float, item_height: float,
                  gap: float) -> Optional[PolicyOutcome]:
    """Single column along the longer usable axis, MIN_YIELD_COUNT..MAX_STACK items."""
    stack_along_height = usable_height >= usable_width
    stack_length = usable_height if stack_along_height else usable_width
    across_length = usable_width if stack_along_height else usable_height

    long_side, short_side = _long_short(item_width, item_height)
    # Prefer the long side across the column, short side along the stack
    for across, along in ((long_side, short_side), (short_side, long_side)):
        if across > across_length + 1e-9:
            continue
        natural = fit_count(stack_length, along + gap)
        if natural == 0:
            # Not even one item along the stack
            continue
        count = min(MIN_YIELD_MAX_STACK, max(MIN_YIELD_COUNT, natural))
        item_across_is_width = (across == item_width)
        if stack_along_height:
            orientation = Orientation.NORMAL if item_across_is_width else Orientation.ROTATED
            return PolicyOutcome("min_yield_stack", count, 1, orientation, gap)
        orientation = Orientation.ROTATED if item_across_is_width else Orientation.NORMAL
        return PolicyOutcome("min_yield_stack", 1, count, orientation, gap)
    return None


def apply_min_yield_policy(usable_width: float, usable_height: float,
                           item_width: float, item_height: float,
                           gap: float, reduced_gap: float) -> Optional[PolicyOutcome]:
    """
    Minimum-yield guarantee for small tall nets.

    HEURISTIC: compensates for the grid under-counting nets with
    non-rectangular extensions. Thresholds (22x8.5 cm, 4 items, cap 8)
    are business expectations awaiting validation against real tooling.

    Steps:
    1. Grid with the normal gap reaches MIN_YIELD_COUNT: no override
    2. Retry with the reduced gap
    3. Force a single-column stack of MIN_YIELD_COUNT..MIN_YIELD_MAX_STACK,
       only when at least one item fits along the stack

    Returns:
        PolicyOutcome, or None when no override applies (an item that does
        not fit at all keeps the empty grid)
    """
    grid = best_grid(usable_width, usable_height, item_width, item_height, gap)
    if grid.count >= MIN_YIELD_COUNT:
        return None

    reduced = min(gap, reduced_gap)
    retry = best_grid(usable_width, usable_height, item_width, item_height, reduced)
    if retry.count >= MIN_YIELD_COUNT:
        logger.debug(f"Min-yield: reduced gap {reduced} gives {retry.count}")
        return PolicyOutcome("min_yield_reduced_gap", retry.rows, retry.cols,
                             retry.orientation, reduced)

    stack = _forced_stack(usable_width, usable_height, item_width, item_height, reduced)
    if stack is not None:
        logger.debug(f"Min-yield: forced stack of {stack.count}")
    return stack
