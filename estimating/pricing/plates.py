"""
Plates and units.

    plates = 0 for digital, otherwise one plate per color per printed side
             (4 per side when the colors are not specified, CMYK)
    units  = actual sheets x printed sides
"""

from typing import Optional

from ..models.costing import (
    PrintingMethod, PlatesUnits, DEFAULT_COLORS_PER_SIDE, parse_color_count
)


def _printed_sides(sides: int) -> int:
    return 2 if sides and sides >= 2 else 1


def calculate_plates(sides: int, method: PrintingMethod,
                     colors_front: int = DEFAULT_COLORS_PER_SIDE,
                     colors_back: int = DEFAULT_COLORS_PER_SIDE) -> int:
    """Plate count for a print job."""
    if method != PrintingMethod.OFFSET:
        return 0
    plates = max(0, colors_front)
    if _printed_sides(sides) == 2:
        plates += max(0, colors_back)
    return plates


def calculate_units(actual_sheets: int, sides: int) -> int:
    """Printed units: sheets times printed sides."""
    return max(0, int(actual_sheets or 0)) * _printed_sides(sides)


def derive_plates_units(sides: int, method: PrintingMethod, actual_sheets: int,
                        colors_front: int = DEFAULT_COLORS_PER_SIDE,
                        colors_back: int = DEFAULT_COLORS_PER_SIDE,
                        plates_override: Optional[int] = None,
                        units_override: Optional[int] = None) -> PlatesUnits:
    """
    Computed plates/units plus the effective values after user overrides.

    Returns:
        PlatesUnits
    """
    computed_plates = calculate_plates(sides, method, colors_front, colors_back)
    computed_units = calculate_units(actual_sheets, sides)
    return PlatesUnits(
        computed_plates=computed_plates,
        computed_units=computed_units,
        plates=max(0, plates_override) if plates_override is not None else computed_plates,
        units=max(0, units_override) if units_override is not None else computed_units
    )
