"""Data models for geometry, layout and costing."""

from .geometry import (
    ProductClass,
    PackingStrategy,
    SheetSize,
    RectangularItem,
    GussetedDieline,
    BoundingBoxOnly,
    ItemGeometry,
    ProductionParameters,
    ResolvedItem,
    geometry_to_dict,
    geometry_from_dict
)
from .layout_result import (
    Orientation,
    GripperEdge,
    LayoutResult,
    SheetRequirement
)
from .costing import (
    PricingMode,
    Side,
    PrintingMethod,
    FinishingTechnique,
    PaperPricing,
    PaperCostResult,
    FinishingSpec,
    FinishingCost,
    FinishingBreakdown,
    PlatesUnits,
    parse_color_count
)
from .estimate import (
    PaperJob,
    ProductJob,
    AdditionalCost,
    PaperEstimate,
    ProductEstimate,
    OrderEstimate
)

__all__ = [
    'ProductClass',
    'PackingStrategy',
    'SheetSize',
    'RectangularItem',
    'GussetedDieline',
    'BoundingBoxOnly',
    'ItemGeometry',
    'ProductionParameters',
    'ResolvedItem',
    'geometry_to_dict',
    'geometry_from_dict',
    'Orientation',
    'GripperEdge',
    'LayoutResult',
    'SheetRequirement',
    'PricingMode',
    'Side',
    'PrintingMethod',
    'FinishingTechnique',
    'PaperPricing',
    'PaperCostResult',
    'FinishingSpec',
    'FinishingCost',
    'FinishingBreakdown',
    'PlatesUnits',
    'parse_color_count',
    'PaperJob',
    'ProductJob',
    'AdditionalCost',
    'PaperEstimate',
    'ProductEstimate',
    'OrderEstimate'
]
