"""
Geometry Models for Imposition.

Sheet and item sizes consumed by the imposition engine. All sizes are in
centimeters. Item geometry is a closed set of variants; the engine only
ever sees the bounding rectangle each variant reports.
"""

from dataclasses import dataclass
from typing import Dict, Tuple, Union
from enum import Enum

from core.exceptions import InvalidFieldValueError


def enum_from_value(enum_cls, field: str, value):
    """Enum member for a stored value; unknown values raise InvalidFieldValueError."""
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidFieldValueError(field, value, f"unknown {enum_cls.__name__} value")


class ProductClass(Enum):
    """Product family, selects geometry rules and default size."""
    GENERIC = "generic"
    BUSINESS_CARD = "business_card"
    FLYER = "flyer"
    LETTERHEAD = "letterhead"
    BROCHURE = "brochure"
    POSTER = "poster"
    STICKER = "sticker"
    ENVELOPE = "envelope"
    SHOPPING_BAG = "shopping_bag"
    CUP = "cup"


class PackingStrategy(Enum):
    """Packing variant chosen once per item by the geometry resolver."""
    STANDARD = "STANDARD"
    COMPACT = "COMPACT"                  # Small-format stock, reduced gap
    LARGE_FORMAT = "LARGE_FORMAT"        # Bulky dielines, fixed target count
    CUP_MIN_YIELD = "CUP_MIN_YIELD"      # Small tall nets, guaranteed minimum


@dataclass(frozen=True)
class SheetSize:
    """Press sheet [cm]."""
    width: float
    height: float

    @property
    def area(self) -> float:
        return self.width * self.height

    def is_valid(self) -> bool:
        return self.width > 0 and self.height > 0

    def to_dict(self) -> Dict:
        return {'width': self.width, 'height': self.height}

    @classmethod
    def from_dict(cls, data: Dict) -> 'SheetSize':
        return cls(
            width=float(data.get('width', 0.0)),
            height=float(data.get('height', 0.0))
        )


@dataclass(frozen=True)
class RectangularItem:
    """Plain flat product."""
    width: float
    height: float

    kind = "rectangular"

    def bounding_box(self) -> Tuple[float, float]:
        return self.width, self.height


@dataclass(frozen=True)
class GussetedDieline:
    """Gusseted bag laid flat: two panels, two gussets and a glue flap."""
    panel_width: float
    panel_height: float
    gusset: float
    top_hem: float
    bottom_flap: float
    glue_flap: float

    kind = "gusseted_dieline"

    @property
    def total_width(self) -> float:
        return 2 * self.panel_width + 2 * self.gusset + self.glue_flap

    @property
    def total_height(self) -> float:
        return self.top_hem + self.panel_height + self.bottom_flap

    def bounding_box(self) -> Tuple[float, float]:
        return self.total_width, self.total_height


@dataclass(frozen=True)
class BoundingBoxOnly:
    """Non-rectangular net (cups); packed as its bounding box."""
    width: float
    height: float

    kind = "bounding_box"

    def bounding_box(self) -> Tuple[float, float]:
        return self.width, self.height


ItemGeometry = Union[RectangularItem, GussetedDieline, BoundingBoxOnly]


def geometry_to_dict(geometry: ItemGeometry) -> Dict:
    """Serialize any item geometry variant with its kind tag."""
    width, height = geometry.bounding_box()
    result = {'kind': geometry.kind, 'width': width, 'height': height}
    if isinstance(geometry, GussetedDieline):
        result.update({
            'panel_width': geometry.panel_width,
            'panel_height': geometry.panel_height,
            'gusset': geometry.gusset,
            'top_hem': geometry.top_hem,
            'bottom_flap': geometry.bottom_flap,
            'glue_flap': geometry.glue_flap,
        })
    return result


def geometry_from_dict(data: Dict) -> ItemGeometry:
    """Inverse of geometry_to_dict."""
    kind = data.get('kind', RectangularItem.kind)
    if kind == GussetedDieline.kind:
        return GussetedDieline(
            panel_width=data.get('panel_width', 0.0),
            panel_height=data.get('panel_height', 0.0),
            gusset=data.get('gusset', 0.0),
            top_hem=data.get('top_hem', 0.0),
            bottom_flap=data.get('bottom_flap', 0.0),
            glue_flap=data.get('glue_flap', 0.0)
        )
    if kind == BoundingBoxOnly.kind:
        return BoundingBoxOnly(data.get('width', 0.0), data.get('height', 0.0))
    if kind == RectangularItem.kind:
        return RectangularItem(data.get('width', 0.0), data.get('height', 0.0))
    raise InvalidFieldValueError('kind', kind, "unknown geometry kind")


@dataclass(frozen=True)
class ProductionParameters:
    """Press margins and spacing [cm]."""
    gripper_width: float = 0.9
    edge_margin: float = 0.5
    gap_width: float = 0.5
    bleed_width: float = 0.3
    compact_gap_width: float = 0.2       # Gap cap for compact items

    def to_dict(self) -> Dict:
        return {
            'gripper_width': self.gripper_width,
            'edge_margin': self.edge_margin,
            'gap_width': self.gap_width,
            'bleed_width': self.bleed_width,
            'compact_gap_width': self.compact_gap_width
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'ProductionParameters':
        defaults = cls()
        return cls(
            gripper_width=max(0.0, data.get('gripper_width', defaults.gripper_width)),
            edge_margin=max(0.0, data.get('edge_margin', defaults.edge_margin)),
            gap_width=max(0.0, data.get('gap_width', defaults.gap_width)),
            bleed_width=max(0.0, data.get('bleed_width', defaults.bleed_width)),
            compact_gap_width=max(0.0, data.get('compact_gap_width', defaults.compact_gap_width))
        )


@dataclass(frozen=True)
class ResolvedItem:
    """Geometry resolver output: geometry plus its packing strategy."""
    product_class: ProductClass
    geometry: ItemGeometry
    strategy: PackingStrategy = PackingStrategy.STANDARD
    used_fallback: bool = False

    @property
    def width(self) -> float:
        return self.geometry.bounding_box()[0]

    @property
    def height(self) -> float:
        return self.geometry.bounding_box()[1]

    @property
    def area(self) -> float:
        return self.width * self.height

    def is_valid(self) -> bool:
        """Zero area means 'insufficient data', not a degenerate layout."""
        return self.width > 0 and self.height > 0

    def to_dict(self) -> Dict:
        return {
            'product_class': self.product_class.value,
            'geometry': geometry_to_dict(self.geometry),
            'strategy': self.strategy.value,
            'used_fallback': self.used_fallback
        }
