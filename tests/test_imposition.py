"""
Tests for the imposition engine.

Concrete layouts plus properties checked over a fixed grid of sheet and
item sizes: idempotence, grid consistency, efficiency bounds, monotonicity
in sheet size and rotation symmetry.
"""

import pytest

from core.exceptions import InvalidFieldValueError
from estimating.geometry.resolver import resolve_geometry
from estimating.layout.grid import grid_candidate, fit_count
from estimating.layout.imposition import compute_usable_area, effective_gap, impose
from estimating.models.geometry import (
    SheetSize, ProductionParameters, PackingStrategy, RectangularItem, ResolvedItem
)
from estimating.models.layout_result import Orientation, GripperEdge, LayoutResult


SHEETS = [
    SheetSize(35.0, 50.0),
    SheetSize(50.0, 35.0),
    SheetSize(32.0, 45.0),
    SheetSize(70.0, 100.0),
    SheetSize(100.0, 70.0),
    SheetSize(64.0, 90.0),
]

ITEMS = [
    (9.0, 5.5),
    (5.5, 9.0),
    (14.8, 21.0),
    (21.0, 29.7),
    (10.0, 10.0),
    (42.0, 59.4),
    (54.0, 32.0),
    (3.0, 17.0),
]

# Products whose strategy carries a policy (min yield, large format)
POLICY_PRODUCTS = [
    ("Paper Cup", 21.0, 8.0),
    ("Shopping Bag", 54.0, 32.0),
    ("Shopping Bag", 72.0, 44.25),
]

SMALL_SHEETS = [
    SheetSize(10.0, 10.0),
    SheetSize(20.0, 25.0),
    SheetSize(25.0, 30.0),
    SheetSize(30.0, 25.0),
    SheetSize(22.0, 12.0),
    SheetSize(35.0, 50.0),
]


def item_pairs():
    """Every test item with its rotated counterpart."""
    pairs = [(RectangularItem(w, h), RectangularItem(h, w)) for w, h in ITEMS]
    pairs += [(resolve_geometry(name, w, h), resolve_geometry(name, h, w))
              for name, w, h in POLICY_PRODUCTS]
    return pairs


def item_size(item):
    if isinstance(item, ResolvedItem):
        return item.width, item.height
    return item.bounding_box()


def test_fit_count():
    assert fit_count(33.6, 5.7) == 5
    assert fit_count(10.0, 0.0) == 0
    assert fit_count(0.0, 5.0) == 0
    # Exact fits survive float rounding
    assert fit_count(0.7, 0.1) == 7


def test_usable_area_gripper_on_long_side():
    params = ProductionParameters()

    width, height, edge = compute_usable_area(SheetSize(35.0, 50.0), params)
    assert edge == GripperEdge.LEFT_OR_RIGHT
    assert width == pytest.approx(33.6)
    assert height == pytest.approx(49.0)

    width, height, edge = compute_usable_area(SheetSize(50.0, 35.0), params)
    assert edge == GripperEdge.TOP_OR_BOTTOM
    assert width == pytest.approx(49.0)
    assert height == pytest.approx(33.6)

    # Square sheets grip on the width side
    _, _, edge = compute_usable_area(SheetSize(50.0, 50.0), params)
    assert edge == GripperEdge.TOP_OR_BOTTOM


def test_usable_area_never_negative():
    width, height, _ = compute_usable_area(SheetSize(1.0, 1.0), ProductionParameters())
    assert width == 0.0
    assert height == 0.0


def test_compact_items_use_reduced_gap():
    params = ProductionParameters(gap_width=0.5, compact_gap_width=0.2)
    assert effective_gap(params, PackingStrategy.COMPACT) == 0.2
    assert effective_gap(params, PackingStrategy.STANDARD) == 0.5
    # The compact gap only caps, it never widens
    tight = ProductionParameters(gap_width=0.1, compact_gap_width=0.2)
    assert effective_gap(tight, PackingStrategy.COMPACT) == 0.1


def test_business_card_on_35x50():
    item = resolve_geometry("Business Card", 9.0, 5.5)
    layout = impose(SheetSize(35.0, 50.0), item)

    # Normal 3x8 = 24, rotated 5x5 = 25
    assert layout.items_per_sheet == 25
    assert layout.orientation == Orientation.ROTATED
    assert layout.items_per_row == 5
    assert layout.items_per_col == 5
    assert layout.gap_used == 0.2
    assert layout.gripper_edge == GripperEdge.LEFT_OR_RIGHT
    assert layout.usable_width == pytest.approx(33.6)
    assert layout.usable_height == pytest.approx(49.0)
    assert layout.efficiency_percent == pytest.approx(70.71)
    assert layout.policy == ""


def test_flyer_on_70x100():
    item = resolve_geometry("Flyer")
    layout = impose(SheetSize(70.0, 100.0), item)

    # Normal 4x4 = 16, rotated 3x6 = 18
    assert layout.items_per_sheet == 18
    assert layout.orientation == Orientation.ROTATED
    assert layout.efficiency_percent == pytest.approx(79.92)


def test_tie_favors_normal():
    layout = impose(SheetSize(50.0, 50.0), RectangularItem(10.0, 10.0))
    assert layout.items_per_sheet == 16
    assert layout.orientation == Orientation.NORMAL


def test_infeasible_item():
    sheet = SheetSize(10.0, 10.0)
    layout = impose(sheet, RectangularItem(20.0, 20.0))
    assert layout.items_per_sheet == 0
    assert layout.efficiency_percent == 0.0

    width, height, _ = compute_usable_area(sheet, ProductionParameters())
    for orientation in Orientation:
        assert grid_candidate(width, height, 20.0, 20.0, 0.5, orientation).count == 0


def test_insufficient_input_gives_empty_layout():
    assert impose(SheetSize(0.0, 50.0), RectangularItem(9.0, 5.5)).is_empty
    assert impose(SheetSize(35.0, 50.0), RectangularItem(0.0, 5.5)).is_empty
    assert impose(SheetSize(35.0, 50.0), resolve_geometry("Widget")).is_empty


def test_strategy_override():
    item = RectangularItem(9.0, 5.5)
    compact = impose(SheetSize(35.0, 50.0), item, strategy=PackingStrategy.COMPACT)
    standard = impose(SheetSize(35.0, 50.0), item, strategy=PackingStrategy.STANDARD)
    assert compact.gap_used == 0.2
    assert standard.gap_used == 0.5
    assert compact.items_per_sheet >= standard.items_per_sheet


def test_idempotent():
    for sheet in SHEETS:
        for item, _ in item_pairs():
            assert impose(sheet, item) == impose(sheet, item)


def test_grid_consistency_and_efficiency_bounds():
    for sheet in SHEETS:
        for item, _ in item_pairs():
            width, height = item_size(item)
            layout = impose(sheet, item)
            assert layout.items_per_sheet == layout.items_per_row * layout.items_per_col
            assert 0.0 <= layout.efficiency_percent <= 100.0

            expected = layout.items_per_sheet * width * height / sheet.area * 100
            assert layout.efficiency_percent == pytest.approx(min(100.0, expected), abs=0.01)


def test_monotonic_in_sheet_size():
    for sheet in SHEETS:
        for item, _ in item_pairs():
            previous = 0
            for scale in (1.0, 1.1, 1.25, 1.5, 2.0):
                bigger = SheetSize(sheet.width * scale, sheet.height * scale)
                count = impose(bigger, item).items_per_sheet
                assert count >= previous
                previous = count


def test_rotating_the_item_keeps_the_count():
    for sheet in SHEETS + [SheetSize(50.0, 50.0)]:
        for item, rotated in item_pairs():
            assert impose(sheet, item).items_per_sheet == impose(sheet, rotated).items_per_sheet


def test_rotating_sheet_and_item_keeps_the_count():
    for sheet in SHEETS:
        rotated_sheet = SheetSize(sheet.height, sheet.width)
        for item, rotated in item_pairs():
            a = impose(sheet, item)
            b = impose(rotated_sheet, rotated)
            assert a.items_per_sheet == b.items_per_sheet
            assert a.efficiency_percent == pytest.approx(b.efficiency_percent)


def test_cup_on_small_sheets():
    params = ProductionParameters()
    cup = resolve_geometry("Paper Cup", 21.0, 8.0)
    rotated = resolve_geometry("Paper Cup", 8.0, 21.0)
    assert cup.strategy == PackingStrategy.CUP_MIN_YIELD

    for sheet in SMALL_SHEETS:
        layout = impose(sheet, cup)
        assert layout.items_per_sheet == layout.items_per_row * layout.items_per_col
        assert 0.0 <= layout.efficiency_percent <= 100.0
        assert layout.items_per_sheet == impose(sheet, rotated).items_per_sheet

        # Anything placed means at least one cup fits the usable area
        if layout.items_per_sheet:
            usable_w, usable_h, _ = compute_usable_area(sheet, params)
            assert ((21.0 <= usable_w and 8.0 <= usable_h)
                    or (8.0 <= usable_w and 21.0 <= usable_h))

    assert impose(SheetSize(10.0, 10.0), cup).items_per_sheet == 0
    # Exact fit leaves no room for the gap
    assert impose(SheetSize(22.0, 12.0), cup).items_per_sheet == 0


def test_layout_dict():
    layout = impose(SheetSize(35.0, 50.0), resolve_geometry("Business Card"))
    data = layout.to_dict()
    assert data['items_per_sheet'] == 25
    assert data['orientation'] == "Rotated"
    assert data['gripper_edge'] == "LeftOrRight"


def test_layout_from_dict():
    layout = impose(SheetSize(35.0, 50.0), resolve_geometry("Business Card"))
    assert LayoutResult.from_dict(layout.to_dict()) == layout

    with pytest.raises(InvalidFieldValueError):
        LayoutResult.from_dict({'orientation': 'Diagonal'})
    with pytest.raises(InvalidFieldValueError):
        LayoutResult.from_dict({'gripper_edge': 'Middle'})
