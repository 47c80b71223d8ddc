"""
Print Estimating - Imposition and production cost engine.

Main components:
- geometry: Product name and flat size to packing geometry
- layout: Imposition grid, packing policies, press-sheet sizing
- pricing: Sheet requirement, paper, finishing, plates/units
- models: Data models (ResolvedItem, LayoutResult, OrderEstimate)
- services: EstimateService
- config: JSON configuration
"""

from .services.estimate_service import EstimateService, EstimateRates
from .geometry.resolver import resolve_geometry
from .layout.imposition import impose
from .models.geometry import SheetSize, ProductionParameters
from .models.estimate import ProductJob, PaperJob, AdditionalCost, OrderEstimate
from .config import (
    load_config,
    save_config,
    create_parameters_from_config,
    create_rates_from_config
)

__version__ = "1.0.0"

__all__ = [
    # Services
    'EstimateService',
    'EstimateRates',

    # Engine
    'resolve_geometry',
    'impose',

    # Models
    'SheetSize',
    'ProductionParameters',
    'ProductJob',
    'PaperJob',
    'AdditionalCost',
    'OrderEstimate',

    # Config
    'load_config',
    'save_config',
    'create_parameters_from_config',
    'create_rates_from_config',
]
