"""
Estimate Models.

Job description handed over by the quoting form and the estimate returned
for it. Computed values and user overrides are kept side by side so the
caller can always reset to the computed one.
"""

import json
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional

from core.exceptions import InvalidFieldValueError

from .geometry import SheetSize, ResolvedItem, enum_from_value
from .layout_result import LayoutResult, SheetRequirement
from .costing import (
    PaperPricing, PaperCostResult, PlatesUnits, PrintingMethod, FinishingBreakdown,
    DEFAULT_COLORS_PER_SIDE, parse_color_count
)


@dataclass
class PaperJob:
    """One paper of a product: pricing record and press sheet."""
    pricing: PaperPricing
    sheet: SheetSize
    entered_sheets: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict) -> 'PaperJob':
        return cls(
            pricing=PaperPricing.from_dict(data.get('pricing', {})),
            sheet=SheetSize.from_dict(data.get('sheet', {})),
            entered_sheets=data.get('entered_sheets')
        )


@dataclass
class ProductJob:
    """Product line of a quote."""
    product_name: str
    quantity: int
    papers: List[PaperJob] = field(default_factory=list)
    flat_width: Optional[float] = None
    flat_height: Optional[float] = None
    bag_preset: Optional[str] = None
    sides: int = 1
    printing_method: PrintingMethod = PrintingMethod.DIGITAL
    colors_front: int = DEFAULT_COLORS_PER_SIDE
    colors_back: int = DEFAULT_COLORS_PER_SIDE
    finishing: List[str] = field(default_factory=list)       # "Technique-Side" keys
    finishing_overrides: Dict[str, float] = field(default_factory=dict)
    plates_override: Optional[int] = None
    units_override: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict) -> 'ProductJob':
        colors = data.get('colors') or {}
        if isinstance(colors, str):
            # Stored form: '{"front":"4 Colors (CMYK)","back":"1 Color"}'
            try:
                colors = json.loads(colors)
            except json.JSONDecodeError:
                raise InvalidFieldValueError('colors', colors, "expected a JSON object")
        if not isinstance(colors, dict):
            raise InvalidFieldValueError('colors', colors, "expected front/back labels")
        return cls(
            product_name=data.get('product_name', ''),
            quantity=int(data.get('quantity', 0) or 0),
            papers=[PaperJob.from_dict(p) for p in data.get('papers', [])],
            flat_width=data.get('flat_width'),
            flat_height=data.get('flat_height'),
            bag_preset=data.get('bag_preset'),
            sides=int(data.get('sides', 1) or 1),
            printing_method=enum_from_value(PrintingMethod, 'printing_method',
                                            data.get('printing_method', 'Digital')),
            colors_front=parse_color_count(colors.get('front')),
            colors_back=parse_color_count(colors.get('back')),
            finishing=list(data.get('finishing', [])),
            finishing_overrides=dict(data.get('finishing_overrides', {})),
            plates_override=data.get('plates_override'),
            units_override=data.get('units_override')
        )


@dataclass
class AdditionalCost:
    """Free-form cost line (rush delivery, special packaging)."""
    description: str
    cost: float
    comment: str = ""

    @classmethod
    def from_dict(cls, data: Dict) -> 'AdditionalCost':
        return cls(
            description=data.get('description', ''),
            cost=float(data.get('cost', 0.0) or 0.0),
            comment=data.get('comment', '') or ''
        )


@dataclass
class PaperEstimate:
    """Layout and costs of one paper."""
    pricing: PaperPricing
    sheet: SheetSize
    layout: LayoutResult
    requirement: SheetRequirement
    paper_cost: PaperCostResult
    plates_units: PlatesUnits
    plates_cost: float = 0.0
    units_cost: float = 0.0

    def to_dict(self) -> Dict:
        return {
            'paper': self.pricing.to_dict(),
            'sheet': self.sheet.to_dict(),
            'layout': self.layout.to_dict(),
            'requirement': self.requirement.to_dict(),
            'paper_cost': self.paper_cost.to_dict(),
            'plates_units': self.plates_units.to_dict(),
            'plates_cost': self.plates_cost,
            'units_cost': self.units_cost
        }


@dataclass
class ProductEstimate:
    """Estimate of one product line (finishing is priced per order)."""
    product_name: str
    quantity: int
    item: ResolvedItem
    papers: List[PaperEstimate] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def paper_cost(self) -> float:
        return round(sum(p.paper_cost.cost for p in self.papers), 2)

    @property
    def plates_cost(self) -> float:
        return round(sum(p.plates_cost for p in self.papers), 2)

    @property
    def units_cost(self) -> float:
        return round(sum(p.units_cost for p in self.papers), 2)

    @property
    def is_complete(self) -> bool:
        """False while the layout or pricing is not yet computable."""
        return (self.item.is_valid() and bool(self.papers)
                and all(not p.layout.is_empty and p.paper_cost.is_complete for p in self.papers))

    def to_dict(self) -> Dict:
        return {
            'product_name': self.product_name,
            'quantity': self.quantity,
            'item': self.item.to_dict(),
            'papers': [p.to_dict() for p in self.papers],
            'paper_cost': self.paper_cost,
            'plates_cost': self.plates_cost,
            'units_cost': self.units_cost,
            'is_complete': self.is_complete,
            'warnings': list(self.warnings)
        }


@dataclass
class OrderEstimate:
    """Order totals: base, margin, discount, VAT."""
    products: List[ProductEstimate] = field(default_factory=list)
    finishing: FinishingBreakdown = field(default_factory=FinishingBreakdown)
    additional_costs: List[AdditionalCost] = field(default_factory=list)

    paper_cost: Decimal = Decimal('0.00')
    plates_cost: Decimal = Decimal('0.00')
    units_cost: Decimal = Decimal('0.00')
    finishing_cost: Decimal = Decimal('0.00')
    additional_cost: Decimal = Decimal('0.00')

    base_cost: Decimal = Decimal('0.00')
    margin_percent: Decimal = Decimal('0.00')
    margin_amount: Decimal = Decimal('0.00')
    discount_percent: Decimal = Decimal('0.00')
    discount_amount: Decimal = Decimal('0.00')
    subtotal: Decimal = Decimal('0.00')
    vat_percent: Decimal = Decimal('0.00')
    vat_amount: Decimal = Decimal('0.00')
    total: Decimal = Decimal('0.00')

    @property
    def is_complete(self) -> bool:
        return bool(self.products) and all(p.is_complete for p in self.products)

    @property
    def warnings(self) -> List[str]:
        return [w for p in self.products for w in p.warnings]

    def to_dict(self) -> Dict:
        return {
            'products': [p.to_dict() for p in self.products],
            'finishing': self.finishing.to_dict(),
            'additional_costs': [
                {'description': a.description, 'cost': a.cost, 'comment': a.comment}
                for a in self.additional_costs
            ],
            'paper_cost': str(self.paper_cost),
            'plates_cost': str(self.plates_cost),
            'units_cost': str(self.units_cost),
            'finishing_cost': str(self.finishing_cost),
            'additional_cost': str(self.additional_cost),
            'base_cost': str(self.base_cost),
            'margin_percent': str(self.margin_percent),
            'margin_amount': str(self.margin_amount),
            'discount_percent': str(self.discount_percent),
            'discount_amount': str(self.discount_amount),
            'subtotal': str(self.subtotal),
            'vat_percent': str(self.vat_percent),
            'vat_amount': str(self.vat_amount),
            'total': str(self.total),
            'is_complete': self.is_complete,
            'warnings': self.warnings
        }
