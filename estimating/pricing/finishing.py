"""
Finishing Cost Calculator.

Three formula shapes:
- Sheet based:       base + per_sheet x sheets          (lamination)
- Impression based:  max(minimum, ceil(impressions / 1000) x rate_per_1000),
                     impressions = max(1000, quantity)
- Fixed:             flat charge

Side-doubling techniques cost twice when applied to both sides. Die cutting
takes its minimum from the item footprint (A5 / A4 / A3 / larger).

Finishing is charged once per technique per order: the same technique on
several papers or product repeats is merged before pricing.
"""

import math
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from core.exceptions import InvalidFieldValueError
from ..models.costing import (
    FinishingTechnique, FinishingSpec, FinishingCost, FinishingBreakdown, Side
)

logger = logging.getLogger(__name__)


IMPRESSION_FLOOR = 1000
IMPRESSION_BLOCK = 1000

# Die-cut minimum by item footprint [cm2]: A5, A4, A3, above
DIE_CUT_AREA_TIERS: Tuple[Tuple[float, float], ...] = (
    (14.8 * 21.0, 75.0),
    (21.0 * 29.7, 100.0),
    (29.7 * 42.0, 150.0),
)
DIE_CUT_MAX_MINIMUM = 200.0


class FormulaType(Enum):
    """Finishing formula shape."""
    SHEET_BASED = "sheet_based"
    IMPRESSION_BASED = "impression_based"
    FIXED = "fixed"


@dataclass(frozen=True)
class FinishingRate:
    """Finishing table row."""
    formula: FormulaType
    minimum: float = 0.0
    rate_per_1000: float = 0.0
    per_sheet: float = 0.0
    fixed: float = 0.0
    side_doubling: bool = False
    size_tiered_minimum: bool = False


FINISHING_RATES: Dict[FinishingTechnique, FinishingRate] = {
    FinishingTechnique.LAMINATION: FinishingRate(
        FormulaType.SHEET_BASED, minimum=75.0, per_sheet=0.75, side_doubling=True),
    FinishingTechnique.VELVET_LAMINATION: FinishingRate(
        FormulaType.SHEET_BASED, minimum=100.0, per_sheet=1.00, side_doubling=True),
    FinishingTechnique.EMBOSSING: FinishingRate(
        FormulaType.IMPRESSION_BASED, minimum=75.0, rate_per_1000=50.0, side_doubling=True),
    FinishingTechnique.FOILING: FinishingRate(
        FormulaType.IMPRESSION_BASED, minimum=75.0, rate_per_1000=75.0, side_doubling=True),
    FinishingTechnique.DIE_CUTTING: FinishingRate(
        FormulaType.IMPRESSION_BASED, minimum=75.0, rate_per_1000=50.0, size_tiered_minimum=True),
    FinishingTechnique.UV_SPOT: FinishingRate(
        FormulaType.IMPRESSION_BASED, minimum=350.0, rate_per_1000=350.0, side_doubling=True),
    FinishingTechnique.FOLDING: FinishingRate(
        FormulaType.IMPRESSION_BASED, minimum=25.0, rate_per_1000=25.0),
    FinishingTechnique.PADDING: FinishingRate(FormulaType.FIXED, fixed=25.0),
    FinishingTechnique.VARNISHING: FinishingRate(FormulaType.FIXED, fixed=30.0),
}

# Label aliases seen in quote forms, lower case
TECHNIQUE_ALIASES: Dict[str, FinishingTechnique] = {
    'spot uv': FinishingTechnique.UV_SPOT,
    'uv': FinishingTechnique.UV_SPOT,
    'die cut': FinishingTechnique.DIE_CUTTING,
    'die-cut': FinishingTechnique.DIE_CUTTING,
    'die-cutting': FinishingTechnique.DIE_CUTTING,
    'foil': FinishingTechnique.FOILING,
    'foil stamping': FinishingTechnique.FOILING,
    'emboss': FinishingTechnique.EMBOSSING,
    'fold': FinishingTechnique.FOLDING,
    'varnish': FinishingTechnique.VARNISHING,
    'velvet': FinishingTechnique.VELVET_LAMINATION,
}


def parse_technique(label: str) -> FinishingTechnique:
    """Technique from its display label or a known alias."""
    name = (label or '').strip().lower()
    for technique in FinishingTechnique:
        if technique.value.lower() == name:
            return technique
    if name in TECHNIQUE_ALIASES:
        return TECHNIQUE_ALIASES[name]
    raise InvalidFieldValueError('technique', label, "unknown finishing technique")


def parse_side(label: str) -> Side:
    name = (label or '').strip().lower()
    for side in Side:
        if side.value.lower() == name:
            return side
    raise InvalidFieldValueError('side', label, "expected Front, Back or Both")


def parse_finishing_key(key: str) -> Tuple[FinishingTechnique, Side]:
    """
    Parse a finishing selection key.

    Keys are "Technique" or "Technique-Side", e.g. "UV Spot-Both".

    Returns:
        (technique, side), side defaults to FRONT
    """
    label = (key or '').strip()
    head, sep, tail = label.rpartition('-')
    if sep and tail.strip().lower() in {s.value.lower() for s in Side}:
        return parse_technique(head), parse_side(tail)
    return parse_technique(label), Side.FRONT


def effective_impressions(quantity: int) -> int:
    """Billed impressions, never below the 1000 floor."""
    return max(IMPRESSION_FLOOR, int(quantity or 0))


def die_cut_minimum(item_footprint_area: Optional[float]) -> float:
    """Die-cut minimum charge for an item footprint [cm2]."""
    if item_footprint_area is None or item_footprint_area <= 0:
        return DIE_CUT_AREA_TIERS[0][1]
    for max_area, minimum in DIE_CUT_AREA_TIERS:
        if item_footprint_area <= max_area:
            return minimum
    return DIE_CUT_MAX_MINIMUM


def calculate_finishing_cost(spec: FinishingSpec,
                             override: Optional[float] = None) -> FinishingCost:
    """
    Cost of one finishing technique.

    Args:
        spec: Technique, side, quantity and sheet count
        override: User-entered cost kept next to the computed one

    Returns:
        FinishingCost
    """
    rate = FINISHING_RATES[spec.technique]
    impressions = 0

    if rate.formula == FormulaType.SHEET_BASED:
        base = max(rate.minimum, rate.minimum + rate.per_sheet * max(0, spec.sheet_count))
    elif rate.formula == FormulaType.IMPRESSION_BASED:
        impressions = effective_impressions(spec.quantity)
        blocks = math.ceil(impressions / IMPRESSION_BLOCK)
        minimum = die_cut_minimum(spec.item_footprint_area) if rate.size_tiered_minimum else rate.minimum
        base = max(minimum, blocks * rate.rate_per_1000)
    else:
        base = rate.fixed

    cost = base * 2 if rate.side_doubling and spec.side == Side.BOTH else base

    return FinishingCost(
        technique=spec.technique,
        side=spec.side,
        base_cost=round(base, 2),
        cost=round(cost, 2),
        impressions=impressions,
        override=override
    )


def _merge_side(a: Side, b: Side) -> Side:
    return a if a == b else Side.BOTH


def merge_finishing_specs(specs: Iterable[FinishingSpec]) -> List[FinishingSpec]:
    """
    One spec per technique, in first-seen order.

    Repeats of a technique are merged: differing sides become BOTH,
    quantity, sheet count and footprint take the largest value.
    """
    merged: Dict[FinishingTechnique, FinishingSpec] = {}
    for spec in specs:
        current = merged.get(spec.technique)
        if current is None:
            merged[spec.technique] = spec
            continue
        areas = [a for a in (current.item_footprint_area, spec.item_footprint_area) if a is not None]
        merged[spec.technique] = FinishingSpec(
            technique=spec.technique,
            side=_merge_side(current.side, spec.side),
            quantity=max(current.quantity, spec.quantity),
            sheet_count=max(current.sheet_count, spec.sheet_count),
            item_footprint_area=max(areas) if areas else None
        )
    return list(merged.values())



def calculate_order_finishing(specs: Iterable[FinishingSpec],
                              overrides: Optional[Dict[FinishingTechnique, float]] = None
                              ) -> FinishingBreakdown:
    """
    Finishing cost for a whole order, once per distinct technique.

    Args:
        specs: All finishing selections across products and papers
        overrides: User-entered cost per technique

    Returns:
        FinishingBreakdown
    """
    overrides = overrides or {}
    items = [
        calculate_finishing_cost(spec, overrides.get(spec.technique))
        for spec in merge_finishing_specs(specs)
    ]
    breakdown = FinishingBreakdown(items=items)
    logger.debug(f"Finishing: {len(items)} techniques, total {breakdown.total:.2f}")
    return breakdown
