"""
Geometry Resolver.

Turns a product selection (name, declared flat size, optional bag preset)
into the bounding rectangle used for packing, and picks the packing
strategy for it once so the imposition engine never looks at product
names.

Rules:
- Flat products: declared flat size, product default size when missing
- Gusseted bags: dieline total from panel width/height/gusset preset
- Cups: declared flat size as bounding box (the net is a rendering concern)

Never raises. A zero-area result means "insufficient data".
"""

import logging
from typing import Dict, Optional, Tuple

from ..models.geometry import (
    ProductClass, ResolvedItem,
    RectangularItem, GussetedDieline, BoundingBoxOnly
)
from ..layout.policies import classify_packing

logger = logging.getLogger(__name__)


# Dieline constants for gusseted bags [cm]
BAG_MIN_TOP_HEM = 3.0
BAG_TOP_HEM_RATIO = 0.12
BAG_MIN_BOTTOM_FLAP = 6.0
BAG_BOTTOM_FLAP_RATIO = 0.25
BAG_GLUE_FLAP = 2.0

# Bag presets: name -> (panel_width, panel_height, gusset) [cm]
BAG_PRESETS: Dict[str, Tuple[float, float, float]] = {
    'small': (18.0, 23.0, 8.0),
    'medium': (25.0, 35.0, 10.0),
    'large': (32.0, 42.0, 12.0),
    'extra large': (40.0, 50.0, 15.0),
}
DEFAULT_BAG_PRESET = 'medium'

# Flat default sizes per product class [cm]
DEFAULT_SIZES: Dict[ProductClass, Tuple[float, float]] = {
    ProductClass.BUSINESS_CARD: (9.0, 5.5),
    ProductClass.FLYER: (14.8, 21.0),
    ProductClass.LETTERHEAD: (21.0, 29.7),
    ProductClass.BROCHURE: (29.7, 21.0),
    ProductClass.POSTER: (42.0, 59.4),
    ProductClass.STICKER: (5.0, 5.0),
    ProductClass.ENVELOPE: (22.0, 11.0),
    ProductClass.CUP: (21.0, 8.0),
}

# Name keywords -> product class, checked in order
PRODUCT_KEYWORDS = [
    ('business card', ProductClass.BUSINESS_CARD),
    ('visiting card', ProductClass.BUSINESS_CARD),
    ('shopping bag', ProductClass.SHOPPING_BAG),
    ('paper bag', ProductClass.SHOPPING_BAG),
    ('bag', ProductClass.SHOPPING_BAG),
    ('cup', ProductClass.CUP),
    ('flyer', ProductClass.FLYER),
    ('leaflet', ProductClass.FLYER),
    ('letterhead', ProductClass.LETTERHEAD),
    ('brochure', ProductClass.BROCHURE),
    ('poster', ProductClass.POSTER),
    ('sticker', ProductClass.STICKER),
    ('label', ProductClass.STICKER),
    ('envelope', ProductClass.ENVELOPE),
]


def resolve_product_class(product_name: Optional[str]) -> ProductClass:
    """Map a product name to its class (case-insensitive keyword match)."""
    if not product_name:
        return ProductClass.GENERIC
    name = product_name.strip().lower()
    for keyword, product_class in PRODUCT_KEYWORDS:
        if keyword in name:
            return product_class
    return ProductClass.GENERIC


def get_bag_preset(preset_name: Optional[str]) -> Optional[Tuple[float, float, float]]:
    """Look up (panel_width, panel_height, gusset) for a preset name."""
    if not preset_name:
        return None
    return BAG_PRESETS.get(preset_name.strip().lower())


def gusseted_dieline(panel_width: float, panel_height: float, gusset: float) -> GussetedDieline:
    """Build the bag dieline; hem and flap scale with the panel width."""
    return GussetedDieline(
        panel_width=panel_width,
        panel_height=panel_height,
        gusset=gusset,
        top_hem=max(BAG_MIN_TOP_HEM, BAG_TOP_HEM_RATIO * panel_width),
        bottom_flap=max(BAG_MIN_BOTTOM_FLAP, BAG_BOTTOM_FLAP_RATIO * panel_width),
        glue_flap=BAG_GLUE_FLAP
    )


def gusseted_dieline_from_preset(preset_name: Optional[str]) -> Optional[GussetedDieline]:
    """Dieline for a named preset, None when the preset is unknown."""
    preset = get_bag_preset(preset_name)
    if preset is None:
        return None
    return gusseted_dieline(*preset)


def get_default_size(product_class: ProductClass) -> Tuple[float, float]:
    """
    Default flat size for a product class.

    Returns:
        (width, height) in cm, (0, 0) for classes without a default
    """
    if product_class == ProductClass.SHOPPING_BAG:
        return gusseted_dieline_from_preset(DEFAULT_BAG_PRESET).bounding_box()
    return DEFAULT_SIZES.get(product_class, (0.0, 0.0))


def _declared_or_default(product_class: ProductClass,
                         flat_width: Optional[float],
                         flat_height: Optional[float]) -> Tuple[float, float, bool]:
    """Declared flat size, or the class default when either side is missing."""
    if flat_width and flat_height and flat_width > 0 and flat_height > 0:
        return float(flat_width), float(flat_height), False
    width, height = get_default_size(product_class)
    return width, height, True


def resolve_geometry(product_name: Optional[str],
                     flat_width: Optional[float] = None,
                     flat_height: Optional[float] = None,
                     bag_preset: Optional[str] = None) -> ResolvedItem:
    """
    Resolve the packing geometry of a product.

    Args:
        product_name: Product identifier as selected in the quote
        flat_width: Declared flat width [cm]
        flat_height: Declared flat height [cm]
        bag_preset: Bag preset name (gusseted bag products only)

    Returns:
        ResolvedItem with bounding geometry and packing strategy
    """
    product_class = resolve_product_class(product_name)

    if product_class == ProductClass.SHOPPING_BAG:
        dieline = gusseted_dieline_from_preset(bag_preset)
        if dieline is not None:
            width, height = dieline.bounding_box()
            return ResolvedItem(
                product_class=product_class,
                geometry=dieline,
                strategy=classify_packing(product_class, width, height)
            )
        logger.debug(f"Bag preset {bag_preset!r} not found, using declared flat size")
        width, height, fallback = _declared_or_default(product_class, flat_width, flat_height)
        geometry = RectangularItem(width, height)
    elif product_class == ProductClass.CUP:
        width, height, fallback = _declared_or_default(product_class, flat_width, flat_height)
        geometry = BoundingBoxOnly(width, height)
    else:
        width, height, fallback = _declared_or_default(product_class, flat_width, flat_height)
        geometry = RectangularItem(width, height)

    if width <= 0 or height <= 0:
        logger.debug(f"No usable size for product {product_name!r}")

    return ResolvedItem(
        product_class=product_class,
        geometry=geometry,
        strategy=classify_packing(product_class, width, height),
        used_fallback=fallback
    )
