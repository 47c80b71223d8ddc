"""
Tests for the estimate service.

Whole-order flow: layout, sheets, paper, plates/units, finishing once per
technique, additional costs, margin, discount and VAT.
"""

from decimal import Decimal

import pytest

from core.exceptions import InvalidFieldValueError
from estimating.models.costing import PaperPricing, PrintingMethod
from estimating.models.estimate import ProductJob, PaperJob, AdditionalCost
from estimating.models.geometry import SheetSize
from estimating.services.estimate_service import EstimateService, EstimateRates


def business_cards(**kwargs) -> ProductJob:
    """1000 business cards on 35x50 at 0.50 per sheet (25 up, 40 sheets)."""
    paper = PaperJob(pricing=PaperPricing(name="Art 350", price_per_sheet=0.5),
                     sheet=SheetSize(35.0, 50.0))
    job = ProductJob(product_name="Business Card", quantity=1000, papers=[paper])
    for key, value in kwargs.items():
        setattr(job, key, value)
    return job


def test_product_estimate():
    estimate = EstimateService().estimate_product(business_cards())
    paper = estimate.papers[0]
    assert paper.layout.items_per_sheet == 25
    assert paper.requirement.actual_sheets == 40
    assert paper.paper_cost.cost == 20.0
    assert paper.plates_units.plates == 0
    assert paper.plates_units.units == 40
    assert estimate.is_complete
    assert estimate.warnings == []


def test_digital_order_totals():
    order = EstimateService().estimate_order([business_cards()])
    assert order.base_cost == Decimal('20.00')
    assert order.margin_amount == Decimal('6.00')
    assert order.discount_amount == Decimal('0.00')
    assert order.subtotal == Decimal('26.00')
    assert order.vat_amount == Decimal('1.30')
    assert order.total == Decimal('27.30')
    assert order.is_complete


def test_offset_order_with_finishing():
    job = business_cards(sides=2, printing_method=PrintingMethod.OFFSET,
                         finishing=["UV Spot-Both"])
    order = EstimateService().estimate_order([job])

    assert order.plates_cost == Decimal('280.00')        # 8 plates x 35
    assert order.finishing_cost == Decimal('700.00')     # 350 x 2 sides
    assert order.base_cost == Decimal('1000.00')
    assert order.margin_amount == Decimal('300.00')
    assert order.vat_amount == Decimal('65.00')
    assert order.total == Decimal('1365.00')
    assert order.products[0].papers[0].plates_units.units == 80


def test_discount():
    job = business_cards(sides=2, printing_method=PrintingMethod.OFFSET,
                         finishing=["UV Spot-Both"])
    order = EstimateService().estimate_order([job], discount_percent=10)
    assert order.discount_amount == Decimal('130.00')
    assert order.subtotal == Decimal('1170.00')
    assert order.vat_amount == Decimal('58.50')
    assert order.total == Decimal('1228.50')


def test_configured_rates():
    rates = EstimateRates(plate_cost=50.0, unit_cost=0.1, margin_percent=0.0, vat_percent=0.0)
    job = business_cards(printing_method=PrintingMethod.OFFSET)
    order = EstimateService(rates=rates).estimate_order([job])
    # 20 paper + 4 plates x 50 + 40 units x 0.1
    assert order.base_cost == Decimal('224.00')
    assert order.total == Decimal('224.00')


def test_finishing_charged_once_across_products():
    jobs = [business_cards(finishing=["UV Spot-Front"]),
            business_cards(finishing=["UV Spot-Front"])]
    order = EstimateService().estimate_order(jobs)
    assert len(order.finishing.items) == 1
    assert order.finishing_cost == Decimal('350.00')


def test_finishing_charged_once_across_papers():
    job = business_cards(finishing=["Lamination-Front"])
    job.papers.append(PaperJob(pricing=PaperPricing(price_per_sheet=0.5),
                               sheet=SheetSize(35.0, 50.0)))
    order = EstimateService().estimate_order([job])
    # One lamination charge for 40 sheets: 75 + 0.75 x 40
    assert order.finishing_cost == Decimal('105.00')
    assert order.paper_cost == Decimal('40.00')


def test_finishing_override():
    job = business_cards(finishing=["UV Spot-Front"],
                         finishing_overrides={"UV Spot": 200.0})
    order = EstimateService().estimate_order([job])
    assert order.finishing.computed_total == 350.0
    assert order.finishing_cost == Decimal('200.00')


def test_additional_costs():
    extra = [AdditionalCost("Rush delivery", 50.0), AdditionalCost("Boxes", 12.5)]
    order = EstimateService().estimate_order([business_cards()], extra)
    assert order.additional_cost == Decimal('62.50')
    assert order.base_cost == Decimal('82.50')


def test_plates_override():
    job = business_cards(printing_method=PrintingMethod.OFFSET, plates_override=2)
    order = EstimateService().estimate_order([job])
    plates_units = order.products[0].papers[0].plates_units
    assert plates_units.computed_plates == 4
    assert plates_units.plates == 2
    assert order.plates_cost == Decimal('70.00')


def test_overrides_are_charged_once_per_product():
    papers = [
        PaperJob(pricing=PaperPricing(name="Cover", price_per_sheet=1.0),
                 sheet=SheetSize(35.0, 50.0)),
        PaperJob(pricing=PaperPricing(name="Inner", price_per_sheet=0.5),
                 sheet=SheetSize(35.0, 50.0)),
    ]
    job = ProductJob(product_name="Flyer", quantity=500, papers=papers,
                     printing_method=PrintingMethod.OFFSET,
                     plates_override=2, units_override=100)
    rates = EstimateRates(unit_cost=0.1)
    order = EstimateService(rates=rates).estimate_order([job])

    plates_units = [p.plates_units for p in order.products[0].papers]
    assert [p.computed_plates for p in plates_units] == [4, 4]
    assert [p.plates for p in plates_units] == [2, 0]
    assert [p.units for p in plates_units] == [100, 0]
    assert order.plates_cost == Decimal('70.00')
    assert order.units_cost == Decimal('10.00')


def test_entered_sheets_below_recommended():
    job = business_cards()
    job.papers[0].entered_sheets = 30
    order = EstimateService().estimate_order([job])
    assert order.products[0].papers[0].requirement.actual_sheets == 40
    assert any("below recommended" in w for w in order.warnings)


def test_missing_price_marks_estimate_incomplete():
    job = business_cards()
    job.papers[0].pricing = PaperPricing(name="Unpriced")
    order = EstimateService().estimate_order([job])
    assert not order.is_complete
    assert order.paper_cost == Decimal('0.00')
    assert any("pricing incomplete" in w for w in order.warnings)


def test_item_without_size_marks_estimate_incomplete():
    job = business_cards(product_name="Widget")
    estimate = EstimateService().estimate_product(job)
    assert not estimate.is_complete
    assert estimate.papers[0].layout.is_empty


def test_empty_order():
    order = EstimateService().estimate_order([])
    assert not order.is_complete
    assert order.total == Decimal('0.00')


def test_job_from_dict_with_stored_colors():
    job = ProductJob.from_dict({
        'product_name': 'Flyer',
        'quantity': 500,
        'sides': 2,
        'printing_method': 'Offset',
        'colors': '{"front":"4 Colors (CMYK)","back":"1 Color"}',
        'papers': [{'pricing': {'name': 'Gloss 150', 'price_per_sheet': 1.2},
                    'sheet': {'width': 70, 'height': 100}}],
        'finishing': ['Folding']
    })
    assert (job.colors_front, job.colors_back) == (4, 1)
    assert job.papers[0].sheet == SheetSize(70.0, 100.0)

    order = EstimateService().estimate_order([job])
    assert order.plates_cost == Decimal('175.00')      # 5 plates x 35
    assert order.to_dict()['total'] == str(order.total)


def test_job_from_dict_rejects_unknown_values():
    with pytest.raises(InvalidFieldValueError) as error:
        ProductJob.from_dict({'product_name': 'Flyer', 'printing_method': 'Screen'})
    assert error.value.details['field'] == 'printing_method'

    with pytest.raises(InvalidFieldValueError):
        ProductJob.from_dict({'product_name': 'Flyer', 'colors': '{front: 4'})

    with pytest.raises(InvalidFieldValueError):
        ProductJob.from_dict({'product_name': 'Flyer', 'colors': '["4 Colors"]'})
