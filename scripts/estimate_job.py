"""
Estimate Job - Command line print estimate
==========================================
Computes the imposition and production cost of a print job and prints the
estimate as JSON.

Usage:
    python scripts/estimate_job.py --product "Business Card" --quantity 1000 \
        --sheet 35x50 --price-per-sheet 0.5 --finishing "UV Spot-Both"
    python scripts/estimate_job.py --job order.json
    python scripts/estimate_job.py --press-options --item 9x5.5
"""

import sys
import json
import logging
import argparse
from pathlib import Path
from typing import List, Tuple

# Project root on the path when run from a checkout
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import LOG_FORMAT, get_log_level
from core.exceptions import EstimatorError
from estimating.config import (
    load_config,
    create_parameters_from_config,
    create_rates_from_config,
    create_sheet_from_config,
    create_constraints_from_config
)
from estimating.layout.press_sheet import calculate_press_options
from estimating.models.costing import PaperPricing, PrintingMethod
from estimating.models.estimate import ProductJob, PaperJob, AdditionalCost
from estimating.models.geometry import SheetSize
from estimating.services.estimate_service import EstimateService

logger = logging.getLogger(__name__)


def parse_size(value: str) -> Tuple[float, float]:
    """Parse "WxH" [cm]."""
    try:
        width, height = value.lower().split('x')
        return float(width), float(height)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {value!r}")


def parse_additional(value: str) -> AdditionalCost:
    """Parse "description=cost"."""
    description, sep, cost = value.rpartition('=')
    if not sep:
        raise argparse.ArgumentTypeError(f"expected DESCRIPTION=COST, got {value!r}")
    try:
        return AdditionalCost(description=description.strip(), cost=float(cost))
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid cost in {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Print job imposition and cost estimate')
    parser.add_argument('--config', type=str, default=None,
                        help='Engine config JSON (default: ESTIMATOR_CONFIG_PATH or packaged)')
    parser.add_argument('--job', type=str, default=None,
                        help='Order JSON file: {"products": [...], "additional_costs": [...]}')

    job = parser.add_argument_group('product')
    job.add_argument('--product', type=str, default='', help='Product name, e.g. "Business Card"')
    job.add_argument('--quantity', type=int, default=0)
    job.add_argument('--flat-size', type=parse_size, default=None, help='Flat size WxH [cm]')
    job.add_argument('--bag-preset', type=str, default=None)
    job.add_argument('--sides', type=int, choices=[1, 2], default=1)
    job.add_argument('--method', type=str, choices=[m.value for m in PrintingMethod],
                     default=PrintingMethod.DIGITAL.value)
    job.add_argument('--colors-front', type=str, default=None, help='e.g. "4 Colors (CMYK)"')
    job.add_argument('--colors-back', type=str, default=None)
    job.add_argument('--finishing', action='append', default=[],
                     help='Finishing key, e.g. "Lamination-Front" (repeatable)')
    job.add_argument('--plates', type=int, default=None, help='Plates override')
    job.add_argument('--units', type=int, default=None, help='Units override')

    paper = parser.add_argument_group('paper')
    paper.add_argument('--sheet', type=parse_size, default=None, help='Press sheet WxH [cm]')
    paper.add_argument('--paper-name', type=str, default='')
    paper.add_argument('--price-per-sheet', type=float, default=None)
    paper.add_argument('--price-per-packet', type=float, default=None)
    paper.add_argument('--sheets-per-packet', type=int, default=None)
    paper.add_argument('--entered-sheets', type=int, default=None)

    quote = parser.add_argument_group('quote')
    quote.add_argument('--additional', type=parse_additional, action='append', default=[],
                       help='Additional cost "description=cost" (repeatable)')
    quote.add_argument('--discount', type=float, default=None, help='Discount percent')

    press = parser.add_argument_group('press sheet')
    press.add_argument('--press-options', action='store_true',
                       help='List press-sheet sizes cut from the parent sheet')
    press.add_argument('--item', type=parse_size, default=None, help='Item size WxH [cm]')
    press.add_argument('--top', type=int, default=5, help='Number of press options shown')

    return parser


def job_from_args(args, default_sheet: SheetSize) -> ProductJob:
    sheet = SheetSize(*args.sheet) if args.sheet else default_sheet
    flat_width, flat_height = args.flat_size if args.flat_size else (None, None)
    colors = {'front': args.colors_front, 'back': args.colors_back}

    job = ProductJob.from_dict({
        'product_name': args.product,
        'quantity': args.quantity,
        'flat_width': flat_width,
        'flat_height': flat_height,
        'bag_preset': args.bag_preset,
        'sides': args.sides,
        'printing_method': args.method,
        'colors': colors,
        'finishing': args.finishing,
        'plates_override': args.plates,
        'units_override': args.units
    })
    job.papers.append(PaperJob(
        pricing=PaperPricing(
            name=args.paper_name,
            price_per_sheet=args.price_per_sheet,
            price_per_packet=args.price_per_packet,
            sheets_per_packet=args.sheets_per_packet
        ),
        sheet=sheet,
        entered_sheets=args.entered_sheets
    ))
    return job


def load_order(path: str) -> Tuple[List[ProductJob], List[AdditionalCost]]:
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    products = [ProductJob.from_dict(p) for p in data.get('products', [])]
    additional = [AdditionalCost.from_dict(a) for a in data.get('additional_costs', [])]
    return products, additional


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=get_log_level(), format=LOG_FORMAT)

    try:
        config = load_config(args.config)

        if args.press_options:
            if not args.item:
                logger.error("--press-options requires --item")
                return 2
            options = calculate_press_options(*args.item, create_constraints_from_config(config))
            print(json.dumps([o.to_dict() for o in options[:args.top]], indent=2))
            return 0

        service = EstimateService(
            parameters=create_parameters_from_config(config),
            rates=create_rates_from_config(config)
        )

        if args.job:
            jobs, additional = load_order(args.job)
            additional.extend(args.additional)
        else:
            jobs = [job_from_args(args, create_sheet_from_config(config))]
            additional = args.additional

        estimate = service.estimate_order(jobs, additional, discount_percent=args.discount)
        print(json.dumps(estimate.to_dict(), indent=2))
        return 0 if estimate.is_complete else 1

    except EstimatorError as e:
        logger.error(str(e))
        return 2
    except (OSError, json.JSONDecodeError, ValueError) as e:
        logger.error(f"Cannot read job: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
