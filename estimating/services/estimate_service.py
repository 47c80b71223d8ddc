"""
Estimate Service - Production cost of a print order.

Pipeline per product and paper:
    resolve geometry -> impose -> sheet requirement -> paper cost -> plates/units

Per order:
    finishing once per technique, additional costs, then
    base     = paper + plates + units + finishing + additional
    margin   = base x margin%
    discount = (base + margin) x discount%
    subtotal = base + margin - discount
    vat      = subtotal x vat%
    total    = subtotal + vat

Usage:
    service = EstimateService()
    estimate = service.estimate_order([job], additional_costs)
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional

from ..geometry.resolver import resolve_geometry
from ..layout.imposition import impose
from ..models.costing import FinishingSpec, FinishingTechnique
from ..models.estimate import (
    ProductJob, PaperJob, AdditionalCost,
    PaperEstimate, ProductEstimate, OrderEstimate
)
from ..models.geometry import ProductionParameters, ResolvedItem
from ..pricing.sheets import calculate_sheet_requirement
from ..pricing.paper import calculate_paper_cost
from ..pricing.plates import derive_plates_units
from ..pricing.finishing import parse_finishing_key, parse_technique, calculate_order_finishing

logger = logging.getLogger(__name__)

CENT = Decimal('0.01')


def _money(value) -> Decimal:
    """Round to cents, half up."""
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def _product_override(override: Optional[int], first: bool) -> Optional[int]:
    if override is None:
        return None
    return override if first else 0


@dataclass
class EstimateRates:
    """Order-level rates."""
    plate_cost: float = 35.0            # Per plate
    unit_cost: float = 0.0              # Per printed unit (sheet side)
    margin_percent: float = 30.0
    vat_percent: float = 5.0
    discount_percent: float = 0.0

    def to_dict(self) -> Dict:
        return {
            'plate_cost': self.plate_cost,
            'unit_cost': self.unit_cost,
            'margin_percent': self.margin_percent,
            'vat_percent': self.vat_percent,
            'discount_percent': self.discount_percent
        }


class EstimateService:
    """
    Service for print order estimates.

    Stateless apart from its production parameters and rates; every call
    returns new result objects.
    """

    def __init__(self, parameters: Optional[ProductionParameters] = None,
                 rates: Optional[EstimateRates] = None):
        self.parameters = parameters or ProductionParameters()
        self.rates = rates or EstimateRates()

    def resolve_item(self, job: ProductJob) -> ResolvedItem:
        return resolve_geometry(job.product_name, job.flat_width,
                                job.flat_height, job.bag_preset)

    def estimate_paper(self, job: ProductJob, item: ResolvedItem,
                       paper: PaperJob, first: bool = True) -> PaperEstimate:
        """
        Layout, sheets and costs of one paper of a product.

        Plates/units overrides are product totals: the first paper carries
        them, the other papers are overridden to zero.
        """
        layout = impose(paper.sheet, item, self.parameters)
        requirement = calculate_sheet_requirement(
            job.quantity, layout.items_per_sheet, paper.entered_sheets
        )
        paper_cost = calculate_paper_cost(paper.pricing, requirement.actual_sheets)
        plates_units = derive_plates_units(
            sides=job.sides,
            method=job.printing_method,
            actual_sheets=requirement.actual_sheets,
            colors_front=job.colors_front,
            colors_back=job.colors_back,
            plates_override=_product_override(job.plates_override, first),
            units_override=_product_override(job.units_override, first)
        )

        return PaperEstimate(
            pricing=paper.pricing,
            sheet=paper.sheet,
            layout=layout,
            requirement=requirement,
            paper_cost=paper_cost,
            plates_units=plates_units,
            plates_cost=round(plates_units.plates * self.rates.plate_cost, 2),
            units_cost=round(plates_units.units * self.rates.unit_cost, 2)
        )

    def estimate_product(self, job: ProductJob) -> ProductEstimate:
        """
        Estimate one product line across its papers.

        Args:
            job: Product line

        Returns:
            ProductEstimate (finishing excluded, it is priced per order)
        """
        item = self.resolve_item(job)
        estimate = ProductEstimate(
            product_name=job.product_name,
            quantity=job.quantity,
            item=item
        )

        if not item.is_valid():
            estimate.warnings.append(f"No usable size for product {job.product_name!r}")

        for index, paper in enumerate(job.papers):
            paper_estimate = self.estimate_paper(job, item, paper, first=(index == 0))
            estimate.papers.append(paper_estimate)

            label = paper.pricing.name or f"{paper.sheet.width}x{paper.sheet.height}"
            if paper_estimate.requirement.warning:
                estimate.warnings.append(f"{label}: {paper_estimate.requirement.warning}")
            if item.is_valid() and paper_estimate.layout.is_empty:
                estimate.warnings.append(f"{label}: item does not fit on the press sheet")
            if not paper_estimate.paper_cost.is_complete:
                estimate.warnings.append(f"{label}: pricing incomplete")

        logger.debug(f"Product {job.product_name!r}: paper={estimate.paper_cost:.2f}, "
                     f"plates={estimate.plates_cost:.2f}, units={estimate.units_cost:.2f}")
        return estimate

    def finishing_specs(self, job: ProductJob,
                        estimate: ProductEstimate) -> List[FinishingSpec]:
        """Finishing selections of a product, one per selection and paper."""
        specs = []
        sheet_counts = [p.requirement.actual_sheets for p in estimate.papers] or [0]
        for key in job.finishing:
            technique, side = parse_finishing_key(key)
            for sheets in sheet_counts:
                specs.append(FinishingSpec(
                    technique=technique,
                    side=side,
                    quantity=job.quantity,
                    sheet_count=sheets,
                    item_footprint_area=estimate.item.area or None
                ))
        return specs

    def estimate_order(self, jobs: Iterable[ProductJob],
                       additional_costs: Optional[Iterable[AdditionalCost]] = None,
                       discount_percent: Optional[float] = None) -> OrderEstimate:
        """
        Estimate a whole order.

        Args:
            jobs: Product lines
            additional_costs: Free-form cost lines
            discount_percent: Overrides the configured discount

        Returns:
            OrderEstimate with Decimal totals
        """
        jobs = list(jobs)
        order = OrderEstimate(additional_costs=list(additional_costs or []))

        finishing_specs: List[FinishingSpec] = []
        finishing_overrides: Dict[FinishingTechnique, float] = {}

        for job in jobs:
            estimate = self.estimate_product(job)
            order.products.append(estimate)
            finishing_specs.extend(self.finishing_specs(job, estimate))
            for label, cost in job.finishing_overrides.items():
                finishing_overrides[parse_technique(label)] = cost

        order.finishing = calculate_order_finishing(finishing_specs, finishing_overrides)

        order.paper_cost = _money(sum(p.paper_cost for p in order.products))
        order.plates_cost = _money(sum(p.plates_cost for p in order.products))
        order.units_cost = _money(sum(p.units_cost for p in order.products))
        order.finishing_cost = _money(order.finishing.total)
        order.additional_cost = _money(sum(a.cost for a in order.additional_costs))

        discount = self.rates.discount_percent if discount_percent is None else discount_percent
        self._apply_totals(order, discount)

        if not order.is_complete:
            logger.warning(f"Estimate incomplete: {'; '.join(order.warnings) or 'no products'}")

        logger.info(f"Estimate complete: base={order.base_cost}, total={order.total} "
                    f"({len(order.products)} products)")
        return order

    def _apply_totals(self, order: OrderEstimate, discount_percent: float):
        """Base, margin, discount and VAT."""
        hundred = Decimal('100')

        order.base_cost = (order.paper_cost + order.plates_cost + order.units_cost
                           + order.finishing_cost + order.additional_cost)

        order.margin_percent = _money(self.rates.margin_percent)
        order.margin_amount = (order.base_cost * order.margin_percent / hundred).quantize(
            CENT, rounding=ROUND_HALF_UP
        )

        order.discount_percent = _money(max(0.0, min(100.0, discount_percent)))
        order.discount_amount = (
            (order.base_cost + order.margin_amount) * order.discount_percent / hundred
        ).quantize(CENT, rounding=ROUND_HALF_UP)

        order.subtotal = order.base_cost + order.margin_amount - order.discount_amount

        order.vat_percent = _money(self.rates.vat_percent)
        order.vat_amount = (order.subtotal * order.vat_percent / hundred).quantize(
            CENT, rounding=ROUND_HALF_UP
        )

        order.total = order.subtotal + order.vat_amount
