"""Sheet requirement: sheets needed for a quantity, reconciled with a user entry."""

import math
import logging
from typing import Optional

from ..models.layout_result import SheetRequirement

logger = logging.getLogger(__name__)


def recommended_sheets(quantity: int, items_per_sheet: int) -> int:
    """ceil(quantity / items_per_sheet), 0 when nothing fits or nothing is ordered."""
    if items_per_sheet <= 0 or quantity <= 0:
        return 0
    return math.ceil(quantity / items_per_sheet)


def calculate_sheet_requirement(quantity: int, items_per_sheet: int,
                                entered_sheets: Optional[int] = None) -> SheetRequirement:
    """
    Recommended and actual sheets.

    The actual count is never below the recommended one. An entry below
    the recommendation is reported through `warning`; the caller decides
    how to present it.

    Args:
        quantity: Ordered quantity
        items_per_sheet: Layout yield
        entered_sheets: User override, None for automatic

    Returns:
        SheetRequirement
    """
    quantity = max(0, int(quantity or 0))
    items_per_sheet = max(0, int(items_per_sheet or 0))
    recommended = recommended_sheets(quantity, items_per_sheet)

    if entered_sheets is None:
        return SheetRequirement(
            quantity=quantity,
            items_per_sheet=items_per_sheet,
            recommended_sheets=recommended,
            actual_sheets=recommended
        )

    entered = max(0, int(entered_sheets))
    warning = None
    if entered < recommended:
        warning = (f"Entered sheets ({entered}) below recommended ({recommended}) "
                   f"for quantity {quantity}")
        logger.warning(warning)

    return SheetRequirement(
        quantity=quantity,
        items_per_sheet=items_per_sheet,
        recommended_sheets=recommended,
        actual_sheets=max(recommended, entered),
        entered_sheets=entered,
        warning=warning
    )
