"""Geometry resolution: product name and flat size to packing geometry."""

from .resolver import (
    resolve_product_class,
    get_default_size,
    get_bag_preset,
    gusseted_dieline,
    gusseted_dieline_from_preset,
    resolve_geometry,
    BAG_PRESETS,
    DEFAULT_SIZES
)

__all__ = [
    'resolve_product_class',
    'get_default_size',
    'get_bag_preset',
    'gusseted_dieline',
    'gusseted_dieline_from_preset',
    'resolve_geometry',
    'BAG_PRESETS',
    'DEFAULT_SIZES'
]
