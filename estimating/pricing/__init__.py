"""Sheet, paper, finishing and plates/units calculators."""

from .sheets import recommended_sheets, calculate_sheet_requirement
from .paper import calculate_paper_cost
from .finishing import (
    FINISHING_RATES,
    parse_technique,
    parse_side,
    parse_finishing_key,
    effective_impressions,
    die_cut_minimum,
    calculate_finishing_cost,
    merge_finishing_specs,
    calculate_order_finishing
)
from .plates import (
    parse_color_count,
    calculate_plates,
    calculate_units,
    derive_plates_units
)

__all__ = [
    'recommended_sheets',
    'calculate_sheet_requirement',
    'calculate_paper_cost',
    'FINISHING_RATES',
    'parse_technique',
    'parse_side',
    'parse_finishing_key',
    'effective_impressions',
    'die_cut_minimum',
    'calculate_finishing_cost',
    'merge_finishing_specs',
    'calculate_order_finishing',
    'parse_color_count',
    'calculate_plates',
    'calculate_units',
    'derive_plates_units'
]
