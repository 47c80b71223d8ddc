"""
Imposition Engine - Items per press sheet.

Fixed row/column grid model:
1. Gripper along the longer sheet side (ties: width side)
2. Item pitch = item size + gap (bleed is not part of the footprint)
3. Normal and rotated grids, larger count wins, ties favor Normal
4. Strategy policies (large format, minimum yield) may override the grid
5. Efficiency = placed item area / sheet area, clamped to 100%

Usage:
    item = resolve_geometry("Business Card", 9, 5.5)
    layout = impose(SheetSize(35, 50), item)
"""

import logging
from typing import Optional, Tuple, Union

from ..models.geometry import (
    SheetSize, ProductionParameters, ResolvedItem, ItemGeometry,
    ProductClass, PackingStrategy
)
from ..models.layout_result import LayoutResult, GripperEdge
from .grid import best_grid
from .policies import (
    PolicyOutcome, classify_packing, apply_large_format_policy, apply_min_yield_policy
)

logger = logging.getLogger(__name__)

DEFAULT_PARAMETERS = ProductionParameters()


def gripper_edge_for(sheet: SheetSize) -> GripperEdge:
    """Gripper edge for a sheet: along the longer side, width on ties."""
    if sheet.width >= sheet.height:
        return GripperEdge.TOP_OR_BOTTOM
    return GripperEdge.LEFT_OR_RIGHT


def compute_usable_area(sheet: SheetSize,
                        params: ProductionParameters) -> Tuple[float, float, GripperEdge]:
    """
    Usable printing area after gripper and edge margins.

    The dimension across the gripper edge loses gripper + one edge margin,
    the other dimension loses two edge margins.

    Returns:
        (usable_width, usable_height, gripper_edge)
    """
    edge = gripper_edge_for(sheet)
    if edge == GripperEdge.TOP_OR_BOTTOM:
        usable_width = sheet.width - 2 * params.edge_margin
        usable_height = sheet.height - params.gripper_width - params.edge_margin
    else:
        usable_width = sheet.width - params.gripper_width - params.edge_margin
        usable_height = sheet.height - 2 * params.edge_margin
    return max(0.0, usable_width), max(0.0, usable_height), edge


def effective_gap(params: ProductionParameters, strategy: PackingStrategy) -> float:
    """Gap between items; compact stock uses the capped compact gap."""
    if strategy == PackingStrategy.COMPACT:
        return min(params.gap_width, params.compact_gap_width)
    return params.gap_width


def calculate_efficiency(items_per_sheet: int, item_width: float, item_height: float,
                         sheet: SheetSize) -> float:
    """Placed item area as percent of the sheet, within [0, 100]."""
    if items_per_sheet <= 0 or not sheet.is_valid():
        return 0.0
    efficiency = items_per_sheet * item_width * item_height / sheet.area * 100
    return round(min(100.0, max(0.0, efficiency)), 2)


def _item_size(item: Union[ResolvedItem, ItemGeometry]) -> Tuple[float, float]:
    if isinstance(item, ResolvedItem):
        return item.width, item.height
    return item.bounding_box()


def impose(sheet: SheetSize,
           item: Union[ResolvedItem, ItemGeometry],
           params: Optional[ProductionParameters] = None,
           strategy: Optional[PackingStrategy] = None) -> LayoutResult:
    """
    Compute the imposition of an item on a press sheet.

    Args:
        sheet: Press sheet size [cm]
        item: Resolved item (carries its strategy) or bare geometry
        params: Production parameters (defaults if None)
        strategy: Packing strategy override; defaults to the resolved
            item's strategy, or a size-based classification for bare geometry

    Returns:
        New LayoutResult; items_per_sheet == 0 when nothing fits or the
        input is insufficient
    """
    params = params or DEFAULT_PARAMETERS
    item_width, item_height = _item_size(item)

    if strategy is None:
        if isinstance(item, ResolvedItem):
            strategy = item.strategy
        else:
            strategy = classify_packing(ProductClass.GENERIC, item_width, item_height)

    if not sheet.is_valid() or item_width <= 0 or item_height <= 0:
        logger.debug(f"Insufficient input for imposition: sheet={sheet}, "
                     f"item={item_width}x{item_height}")
        return LayoutResult(gripper_edge=gripper_edge_for(sheet))

    usable_width, usable_height, edge = compute_usable_area(sheet, params)
    gap = effective_gap(params, strategy)

    grid = best_grid(usable_width, usable_height, item_width, item_height, gap)
    rows, cols, orientation, gap_used, policy = grid.rows, grid.cols, grid.orientation, gap, ""

    outcome: Optional[PolicyOutcome] = None
    if strategy == PackingStrategy.LARGE_FORMAT:
        outcome = apply_large_format_policy(usable_width, usable_height,
                                            item_width, item_height, gap, grid.count)
    elif strategy == PackingStrategy.CUP_MIN_YIELD:
        outcome = apply_min_yield_policy(usable_width, usable_height,
                                         item_width, item_height,
                                         gap, params.compact_gap_width)

    if outcome is not None:
        rows, cols, orientation = outcome.rows, outcome.cols, outcome.orientation
        gap_used, policy = outcome.gap, outcome.name

    items = rows * cols
    result = LayoutResult(
        usable_width=round(usable_width, 4),
        usable_height=round(usable_height, 4),
        items_per_row=cols,
        items_per_col=rows,
        orientation=orientation,
        efficiency_percent=calculate_efficiency(items, item_width, item_height, sheet),
        gripper_edge=edge,
        gap_used=gap_used,
        policy=policy
    )

    logger.debug(f"Imposition {item_width}x{item_height} on {sheet.width}x{sheet.height}: "
                 f"{cols}x{rows}={items} {orientation.value}"
                 + (f" [{policy}]" if policy else ""))
    return result
