import pytest

from models import (
    FoilAssignment, FoilSubtype, OptimizationMode, RollWidth, Surface, SurfaceKey
)
from strips import (
    allowed_widths, bottom_mix_candidates, choose_layout, layout_roll_area, mixed_strips,
    overlap_bounds, strips_for_count, strips_for_width, wall_courses,
    wall_edge_waste, wall_single_course_width
)

N, W = RollWidth.NARROW, RollWidth.WIDE


def covered(layout):
    return layout.material_width - (layout.count - 1) * layout.overlap - layout.edge_waste


def test_single_strip_trims_excess():
    lay = strips_for_width(1.2, N, 0.05, 0.10)
    assert lay.widths == (N,)
    assert lay.edge_waste == pytest.approx(0.45)


def test_exact_overlap_has_no_edge_waste():
    lay = strips_for_width(3.2, N, 0.05, 0.10)
    assert lay.count == 2
    assert lay.overlap == pytest.approx(0.10)
    assert lay.edge_waste == pytest.approx(0.0)


def test_overlap_is_capped_and_rest_trimmed():
    lay = strips_for_width(3.0, N, 0.05, 0.10)
    assert lay.count == 2
    assert lay.overlap == pytest.approx(0.10)
    assert lay.edge_waste == pytest.approx(0.20)


@pytest.mark.parametrize("cover", [0.8, 1.65, 3.2, 4.0, 5.0, 7.3, 12.5])
@pytest.mark.parametrize("width", [N, W])
def test_strips_cover_exactly(cover, width):
    lay = strips_for_width(cover, width, 0.05, 0.10)
    assert covered(lay) == pytest.approx(cover)
    assert lay.count == 1 or 0.05 - 1e-9 <= lay.overlap <= 0.10 + 1e-9


def test_too_few_strips_rejected():
    assert mixed_strips(5.0, [N, N], 0.05, 0.10) is None
    with pytest.raises(ValueError):
        strips_for_count(5.0, N, 2, 0.05, 0.10)


def test_fully_trimmed_last_strip_rejected():
    # 4 wide strips over 5 m would cut the last one away entirely
    assert mixed_strips(5.0, [W] * 4, 0.05, 0.10) is None


def test_bottom_mix_for_five_meters():
    layouts = bottom_mix_candidates(5.0, 0.05, 0.10)
    assert all(covered(lay) == pytest.approx(5.0) for lay in layouts)

    best = choose_layout(layouts, 10.0, OptimizationMode.MIN_WASTE)
    assert best.widths == (W, N, N)
    assert best.edge_waste == pytest.approx(0.15)

    # four 10 m strips fill two 1.65 m rolls; 1 x 2.05 + 2 x 1.65 opens one of each
    best = choose_layout(layouts, 10.0, OptimizationMode.MIN_ROLLS)
    assert best.widths == (N, N, N, N)


def test_layout_roll_area():
    mix = mixed_strips(5.0, [W, N, N], 0.05, 0.10)
    assert layout_roll_area(mix, 10.0, 25.0) == pytest.approx(2.05 * 25 + 1.65 * 25)
    assert layout_roll_area(mix, 13.0, 25.0) == pytest.approx(2.05 * 25 + 2 * 1.65 * 25)
    narrow = strips_for_width(5.0, N, 0.05, 0.10)
    assert layout_roll_area(narrow, 10.0, 25.0) == pytest.approx(2 * 1.65 * 25)
    assert layout_roll_area(narrow, 12.5, 25.0) == pytest.approx(2 * 1.65 * 25)


def test_choose_layout_needs_candidates():
    with pytest.raises(ValueError):
        choose_layout([], 10.0, OptimizationMode.MIN_WASTE)


def test_structural_surfaces_are_narrow_only():
    stairs = Surface(SurfaceKey.STAIRS, 1.2, 1.5, 1.8, FoilAssignment.STRUCTURAL)
    bottom = Surface(SurfaceKey.BOTTOM, 5.0, 10.0, 50.0, FoilAssignment.MAIN)
    assert allowed_widths(stairs, FoilSubtype.SOLID) == [N]
    assert allowed_widths(bottom, FoilSubtype.SOLID) == [N, W]
    assert allowed_widths(bottom, FoilSubtype.PRINTED) == [N]


def test_butt_joint_bottom(settings):
    bottom = Surface(SurfaceKey.BOTTOM, 5.0, 10.0, 50.0, FoilAssignment.MAIN)
    walls = Surface(SurfaceKey.WALLS, 1.5, 30.0, 45.0, FoilAssignment.MAIN)
    assert overlap_bounds(bottom, FoilSubtype.STRUCTURAL, settings) == (0.0, 0.0)
    assert overlap_bounds(bottom, FoilSubtype.SOLID, settings) == (0.05, 0.10)
    assert overlap_bounds(walls, FoilSubtype.STRUCTURAL, settings) == (0.10, 0.10)


def test_wall_width_by_depth(settings):
    assert wall_single_course_width(1.5, FoilSubtype.SOLID, settings) is N
    assert wall_single_course_width(1.8, FoilSubtype.SOLID, settings) is W
    assert wall_single_course_width(1.8, FoilSubtype.PRINTED, settings) is N
    assert wall_single_course_width(2.2, FoilSubtype.SOLID, settings) is N


def test_wall_courses(settings):
    assert wall_courses(1.55, N, settings) == 1
    assert wall_courses(1.8, N, settings) == 2
    assert wall_courses(1.95, W, settings) == 1
    assert wall_courses(2.1, N, settings) == 2
    assert wall_courses(3.5, N, settings) == 3


def test_wall_edge_waste(settings):
    # 2.05 on a 1.5 m wall: 0.275 m per side, 0.10 absorbed by each overlap
    assert wall_edge_waste(1.5, W, 1, settings) == pytest.approx(0.35)
    assert wall_edge_waste(1.5, N, 1, settings) == pytest.approx(0.0)
    assert wall_edge_waste(1.2, N, 1, settings) == pytest.approx(0.25)
