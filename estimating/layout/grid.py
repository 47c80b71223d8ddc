"""Row/column grid primitive shared by the imposition engine and its policies."""

import math
from dataclasses import dataclass

from ..models.layout_result import Orientation

# Guards floor() against 5.999999 style float results on exact fits
FLOOR_EPS = 1e-9


@dataclass(frozen=True)
class GridCandidate:
    """Grid of one orientation."""
    orientation: Orientation
    rows: int
    cols: int
    gap: float

    @property
    def count(self) -> int:
        return self.rows * self.cols


def fit_count(length: float, pitch: float) -> int:
    """How many pitches fit in a length (0 for non-positive input)."""
    if length <= 0 or pitch <= 0:
        return 0
    return max(0, int(math.floor(length / pitch + FLOOR_EPS)))


def grid_candidate(usable_width: float, usable_height: float,
                   item_width: float, item_height: float,
                   gap: float, orientation: Orientation) -> GridCandidate:
    """Floor-division grid; ROTATED swaps the item sides."""
    if orientation == Orientation.ROTATED:
        item_width, item_height = item_height, item_width
    rows = fit_count(usable_height, item_height + gap)
    cols = fit_count(usable_width, item_width + gap)
    if rows == 0 or cols == 0:
        rows = cols = 0
    return GridCandidate(orientation=orientation, rows=rows, cols=cols, gap=gap)


def best_grid(usable_width: float, usable_height: float,
              item_width: float, item_height: float, gap: float) -> GridCandidate:
    """Larger of the two orientations; ties favor NORMAL."""
    normal = grid_candidate(usable_width, usable_height, item_width, item_height,
                            gap, Orientation.NORMAL)
    rotated = grid_candidate(usable_width, usable_height, item_width, item_height,
                             gap, Orientation.ROTATED)
    return rotated if rotated.count > normal.count else normal
