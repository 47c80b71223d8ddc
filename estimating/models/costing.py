"""
Costing Models.

Inputs and results of the paper, finishing and plates/units calculators.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union
from enum import Enum


DEFAULT_COLORS_PER_SIDE = 4        # CMYK

_COLOR_COUNT_RE = re.compile(r'(\d+)')


def parse_color_count(label: Union[str, int, None], default: int = DEFAULT_COLORS_PER_SIDE) -> int:
    """Color count from a label such as "4 Colors (CMYK)" or "1 Color"."""
    if isinstance(label, int):
        return max(0, label)
    if not label:
        return default
    match = _COLOR_COUNT_RE.search(str(label))
    if not match:
        return default
    return max(0, int(match.group(1)))


class PricingMode(Enum):
    """How the paper cost was derived."""
    NONE = "none"                # No usable price: pricing incomplete
    SHEET = "sheet"
    PACKET = "packet"
    HYBRID = "hybrid"            # Full packets first, remainder as loose sheets


class Side(Enum):
    """Printed/finished side."""
    FRONT = "Front"
    BACK = "Back"
    BOTH = "Both"


class PrintingMethod(Enum):
    """Printing process."""
    DIGITAL = "Digital"
    OFFSET = "Offset"


class FinishingTechnique(Enum):
    """Finishing techniques with a rate in the finishing table."""
    LAMINATION = "Lamination"
    VELVET_LAMINATION = "Velvet Lamination"
    EMBOSSING = "Embossing"
    FOILING = "Foiling"
    DIE_CUTTING = "Die Cutting"
    UV_SPOT = "UV Spot"
    FOLDING = "Folding"
    PADDING = "Padding"
    VARNISHING = "Varnishing"


@dataclass(frozen=True)
class PaperPricing:
    """Paper record pricing fields. Either price may be missing."""
    name: str = ""
    gsm: Optional[int] = None
    price_per_sheet: Optional[float] = None
    price_per_packet: Optional[float] = None
    sheets_per_packet: Optional[int] = None

    @property
    def has_sheet_price(self) -> bool:
        return self.price_per_sheet is not None

    @property
    def has_packet_price(self) -> bool:
        return (self.price_per_packet is not None
                and self.sheets_per_packet is not None
                and self.sheets_per_packet > 0)

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'gsm': self.gsm,
            'price_per_sheet': self.price_per_sheet,
            'price_per_packet': self.price_per_packet,
            'sheets_per_packet': self.sheets_per_packet
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'PaperPricing':
        return cls(
            name=data.get('name', ''),
            gsm=data.get('gsm'),
            price_per_sheet=data.get('price_per_sheet'),
            price_per_packet=data.get('price_per_packet'),
            sheets_per_packet=data.get('sheets_per_packet')
        )


@dataclass(frozen=True)
class PaperCostResult:
    """Material cost for a number of sheets."""
    mode: PricingMode
    sheets: int
    cost: float = 0.0
    full_packets: int = 0
    remainder_sheets: int = 0

    @property
    def is_complete(self) -> bool:
        """False means 'pricing incomplete', not a genuine zero cost."""
        return self.mode != PricingMode.NONE

    @property
    def cost_per_sheet(self) -> float:
        return self.cost / self.sheets if self.sheets > 0 else 0.0

    def to_dict(self) -> Dict:
        return {
            'mode': self.mode.value,
            'sheets': self.sheets,
            'cost': self.cost,
            'cost_per_sheet': self.cost_per_sheet,
            'full_packets': self.full_packets,
            'remainder_sheets': self.remainder_sheets,
            'is_complete': self.is_complete
        }


@dataclass(frozen=True)
class FinishingSpec:
    """One finishing selection."""
    technique: FinishingTechnique
    side: Side = Side.FRONT
    quantity: int = 0                     # Quantity or impressions
    sheet_count: int = 0
    item_footprint_area: Optional[float] = None  # [cm2], die-cut minimum tier

    def to_dict(self) -> Dict:
        return {
            'technique': self.technique.value,
            'side': self.side.value,
            'quantity': self.quantity,
            'sheet_count': self.sheet_count,
            'item_footprint_area': self.item_footprint_area
        }


@dataclass(frozen=True)
class FinishingCost:
    """Cost of one technique."""
    technique: FinishingTechnique
    side: Side
    base_cost: float                      # Single-side cost
    cost: float                           # After side doubling
    impressions: int = 0                  # Billed impressions (0 for non-impression formulas)
    override: Optional[float] = None      # User-entered cost, replaces `cost`

    @property
    def effective_cost(self) -> float:
        return self.override if self.override is not None else self.cost

    def to_dict(self) -> Dict:
        return {
            'technique': self.technique.value,
            'side': self.side.value,
            'base_cost': self.base_cost,
            'cost': self.cost,
            'impressions': self.impressions,
            'override': self.override,
            'effective_cost': self.effective_cost
        }


@dataclass(frozen=True)
class PlatesUnits:
    """Plate and unit counts, computed and effective."""
    computed_plates: int
    computed_units: int
    plates: int
    units: int

    def to_dict(self) -> Dict:
        return {
            'computed_plates': self.computed_plates,
            'computed_units': self.computed_units,
            'plates': self.plates,
            'units': self.units
        }


@dataclass(frozen=True)
class FinishingBreakdown:
    """Per-technique and total finishing cost of an order."""
    items: List[FinishingCost] = field(default_factory=list)

    @property
    def computed_total(self) -> float:
        return round(sum(item.cost for item in self.items), 2)

    @property
    def total(self) -> float:
        return round(sum(item.effective_cost for item in self.items), 2)

    def to_dict(self) -> Dict:
        return {
            'items': [item.to_dict() for item in self.items],
            'computed_total': self.computed_total,
            'total': self.total
        }
