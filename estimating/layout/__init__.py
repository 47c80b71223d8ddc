"""Sheet layout: imposition grid, packing policies and press-sheet sizing."""

from .grid import GridCandidate, fit_count, grid_candidate, best_grid
from .policies import (
    PolicyOutcome,
    classify_packing,
    is_compact_profile,
    is_large_format,
    large_format_target,
    apply_large_format_policy,
    is_min_yield_profile,
    apply_min_yield_policy
)
from .imposition import (
    compute_usable_area,
    effective_gap,
    calculate_efficiency,
    impose
)
from .press_sheet import (
    CuttingConstraints,
    PressOption,
    pieces_per_press,
    press_sheets_per_parent,
    calculate_press_options,
    best_press_option
)

__all__ = [
    'GridCandidate',
    'fit_count',
    'grid_candidate',
    'best_grid',
    'PolicyOutcome',
    'classify_packing',
    'is_compact_profile',
    'is_large_format',
    'large_format_target',
    'apply_large_format_policy',
    'is_min_yield_profile',
    'apply_min_yield_policy',
    'compute_usable_area',
    'effective_gap',
    'calculate_efficiency',
    'impose',
    'CuttingConstraints',
    'PressOption',
    'pieces_per_press',
    'press_sheets_per_parent',
    'calculate_press_options',
    'best_press_option'
]
