"""
Press Sheet Optimizer.

Chooses a press-sheet size cut from a parent sheet. Every candidate press
size (in fixed steps between the min and max press size) that fits the
parent sheet with the cutting margin is scored by how many items it yields
per parent sheet.

    pieces per press   = best of two orientations, floor(press / (item + gap))
    presses per parent = floor(parent / press) in both directions
    efficiency         = pieces per parent * item area / parent area * 100
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from .grid import fit_count

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CuttingConstraints:
    """Parent sheet and press size limits [cm]."""
    parent_width: float = 100.0
    parent_height: float = 70.0
    min_press_width: float = 20.0
    min_press_height: float = 15.0
    max_press_width: float = 100.0
    max_press_height: float = 70.0
    cutting_margin: float = 1.0
    gap_between_pieces: float = 0.5
    step: float = 5.0

    @classmethod
    def from_dict(cls, data: Dict) -> 'CuttingConstraints':
        defaults = cls()
        return cls(**{
            name: data.get(name, getattr(defaults, name))
            for name in cls.__dataclass_fields__
        })


@dataclass(frozen=True)
class PressOption:
    """One candidate press-sheet size."""
    width: float
    height: float
    pieces_per_press: int
    presses_per_parent: int
    efficiency: float

    @property
    def pieces_per_parent(self) -> int:
        return self.pieces_per_press * self.presses_per_parent

    @property
    def label(self) -> str:
        return f"{self.width:g}×{self.height:g} cm"

    def to_dict(self) -> Dict:
        return {
            'width': self.width,
            'height': self.height,
            'label': self.label,
            'pieces_per_press': self.pieces_per_press,
            'presses_per_parent': self.presses_per_parent,
            'pieces_per_parent': self.pieces_per_parent,
            'efficiency': self.efficiency
        }


def pieces_per_press(press_width: float, press_height: float,
                     item_width: float, item_height: float, gap: float) -> int:
    """Items on a press sheet, better of normal and rotated."""
    normal = fit_count(press_width, item_width + gap) * fit_count(press_height, item_height + gap)
    rotated = fit_count(press_width, item_height + gap) * fit_count(press_height, item_width + gap)
    return max(normal, rotated)


def press_sheets_per_parent(parent_width: float, parent_height: float,
                            press_width: float, press_height: float) -> int:
    """Press sheets cut from one parent sheet (same orientation)."""
    return fit_count(parent_width, press_width) * fit_count(parent_height, press_height)


def _steps(start: float, stop: float, step: float) -> List[float]:
    values = []
    index = 0
    while True:
        value = round(start + index * step, 6)
        if value > stop + 1e-9:
            return values
        values.append(value)
        index += 1


def calculate_press_options(item_width: float, item_height: float,
                            constraints: Optional[CuttingConstraints] = None) -> List[PressOption]:
    """
    Score every press size for an item.

    Args:
        item_width: Item width [cm]
        item_height: Item height [cm]
        constraints: Parent sheet and press limits (defaults if None)

    Returns:
        Options sorted by efficiency, best first; empty for invalid input
    """
    c = constraints or CuttingConstraints()
    if item_width <= 0 or item_height <= 0 or c.step <= 0:
        return []

    parent_area = c.parent_width * c.parent_height
    if parent_area <= 0:
        return []

    options = []
    for press_width in _steps(c.min_press_width, c.max_press_width, c.step):
        for press_height in _steps(c.min_press_height, c.max_press_height, c.step):
            if (press_width + c.cutting_margin > c.parent_width
                    or press_height + c.cutting_margin > c.parent_height):
                continue

            per_press = pieces_per_press(press_width, press_height,
                                         item_width, item_height, c.gap_between_pieces)
            per_parent = press_sheets_per_parent(c.parent_width, c.parent_height,
                                                 press_width, press_height)
            if per_press <= 0 or per_parent <= 0:
                continue

            efficiency = per_press * per_parent * item_width * item_height / parent_area * 100
            options.append(PressOption(
                width=press_width,
                height=press_height,
                pieces_per_press=per_press,
                presses_per_parent=per_parent,
                efficiency=round(efficiency, 2)
            ))

    options.sort(key=lambda o: o.efficiency, reverse=True)
    if options:
        logger.debug(f"Best press for {item_width}x{item_height}: {options[0].label} "
                     f"({options[0].pieces_per_parent} per parent, {options[0].efficiency}%)")
    return options


def best_press_option(item_width: float, item_height: float,
                      constraints: Optional[CuttingConstraints] = None) -> Optional[PressOption]:
    """Most efficient press size, or None when nothing fits."""
    options = calculate_press_options(item_width, item_height, constraints)
    return options[0] if options else None
