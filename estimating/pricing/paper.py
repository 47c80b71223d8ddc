"""
Paper (material) cost - hybrid packet/sheet pricing.

Modes:
- Sheet only:  sheets x price per sheet
- Packet only: ceil(sheets / sheets per packet) x price per packet
- Hybrid:      full packets x packet price + remainder x sheet price
- Neither:     0, flagged as incomplete

Hybrid always buys full packets first; this is the contractual order even
where loose sheets would be cheaper.
"""

import logging

from ..models.costing import PaperPricing, PaperCostResult, PricingMode

logger = logging.getLogger(__name__)


def calculate_paper_cost(pricing: PaperPricing, sheets: int) -> PaperCostResult:
    """
    Material cost for a number of sheets.

    Args:
        pricing: Paper pricing fields
        sheets: Actual sheets

    Returns:
        PaperCostResult (mode NONE when pricing is incomplete)
    """
    sheets = max(0, int(sheets or 0))

    if pricing.has_packet_price and pricing.has_sheet_price:
        per_packet = pricing.sheets_per_packet
        full_packets, remainder = divmod(sheets, per_packet)
        cost = full_packets * pricing.price_per_packet + remainder * pricing.price_per_sheet
        return PaperCostResult(
            mode=PricingMode.HYBRID,
            sheets=sheets,
            cost=max(0.0, cost),
            full_packets=full_packets,
            remainder_sheets=remainder
        )

    if pricing.has_packet_price:
        per_packet = pricing.sheets_per_packet
        packets = -(-sheets // per_packet)
        return PaperCostResult(
            mode=PricingMode.PACKET,
            sheets=sheets,
            cost=max(0.0, packets * pricing.price_per_packet),
            full_packets=packets
        )

    if pricing.has_sheet_price:
        return PaperCostResult(
            mode=PricingMode.SHEET,
            sheets=sheets,
            cost=max(0.0, sheets * pricing.price_per_sheet),
            remainder_sheets=sheets
        )

    logger.warning(f"Pricing incomplete for paper {pricing.name!r}")
    return PaperCostResult(mode=PricingMode.NONE, sheets=sheets)
