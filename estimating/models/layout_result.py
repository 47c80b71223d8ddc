"""
Layout Result Models.

Derived values returned by the imposition engine and the sheet requirement
calculator. Every call returns a new frozen instance.
"""

from dataclasses import dataclass
from typing import Dict, Optional
from enum import Enum

from .geometry import enum_from_value


class Orientation(Enum):
    """Item orientation on the sheet."""
    NORMAL = "Normal"
    ROTATED = "Rotated"


class GripperEdge(Enum):
    """Sheet edge held by the press gripper."""
    TOP_OR_BOTTOM = "TopOrBottom"
    LEFT_OR_RIGHT = "LeftOrRight"


@dataclass(frozen=True)
class LayoutResult:
    """Imposition of one item on one press sheet."""
    usable_width: float = 0.0
    usable_height: float = 0.0
    items_per_row: int = 0
    items_per_col: int = 0
    orientation: Orientation = Orientation.NORMAL
    efficiency_percent: float = 0.0
    gripper_edge: GripperEdge = GripperEdge.TOP_OR_BOTTOM
    gap_used: float = 0.0
    policy: str = ""                      # Name of the heuristic applied, if any

    @property
    def items_per_sheet(self) -> int:
        return self.items_per_row * self.items_per_col

    @property
    def is_empty(self) -> bool:
        return self.items_per_sheet == 0

    def to_dict(self) -> Dict:
        return {
            'usable_width': self.usable_width,
            'usable_height': self.usable_height,
            'items_per_row': self.items_per_row,
            'items_per_col': self.items_per_col,
            'items_per_sheet': self.items_per_sheet,
            'orientation': self.orientation.value,
            'efficiency_percent': self.efficiency_percent,
            'gripper_edge': self.gripper_edge.value,
            'gap_used': self.gap_used,
            'policy': self.policy
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'LayoutResult':
        return cls(
            usable_width=data.get('usable_width', 0.0),
            usable_height=data.get('usable_height', 0.0),
            items_per_row=data.get('items_per_row', 0),
            items_per_col=data.get('items_per_col', 0),
            orientation=enum_from_value(Orientation, 'orientation',
                                        data.get('orientation', 'Normal')),
            efficiency_percent=data.get('efficiency_percent', 0.0),
            gripper_edge=enum_from_value(GripperEdge, 'gripper_edge',
                                         data.get('gripper_edge', 'TopOrBottom')),
            gap_used=data.get('gap_used', 0.0),
            policy=data.get('policy', '')
        )


@dataclass(frozen=True)
class SheetRequirement:
    """Recommended vs. actual sheet count for a quantity."""
    quantity: int
    items_per_sheet: int
    recommended_sheets: int
    actual_sheets: int
    entered_sheets: Optional[int] = None
    warning: Optional[str] = None

    @property
    def below_recommended(self) -> bool:
        return self.entered_sheets is not None and self.entered_sheets < self.recommended_sheets

    def to_dict(self) -> Dict:
        return {
            'quantity': self.quantity,
            'items_per_sheet': self.items_per_sheet,
            'recommended_sheets': self.recommended_sheets,
            'actual_sheets': self.actual_sheets,
            'entered_sheets': self.entered_sheets,
            'below_recommended': self.below_recommended,
            'warning': self.warning
        }
