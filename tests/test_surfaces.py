from dataclasses import replace

import pytest

from models import (
    FoilAssignment, PoolDimensions, PoolShape, StairsConfig, StairsShape,
    SurfaceKey, WadingPoolConfig
)
from surfaces import (
    plan_bottom, plan_dividing_wall, plan_paddling_bottom, plan_paddling_walls,
    plan_stairs, plan_surfaces, plan_walls
)


def test_bottom_strips_run_along_longer_side(pool_10x5):
    s = plan_bottom(pool_10x5)
    assert (s.strip_length, s.cover_width, s.area) == (10.0, 5.0, 50.0)
    assert s.foil_assignment is FoilAssignment.MAIN


def test_walls_cover_depth_around_perimeter(pool_10x5):
    s = plan_walls(pool_10x5)
    assert s.cover_width == 1.5
    assert s.strip_length == pytest.approx(30.0)
    assert s.area == pytest.approx(45.0)


def test_sloped_pool_walls_use_deep_end():
    dims = PoolDimensions(PoolShape.RECTANGULAR, 10.0, 5.0, 1.2, depth_deep=1.8)
    assert plan_walls(dims).cover_width == 1.8


def test_area_conservation(pool_with_extras, settings):
    surfaces = plan_surfaces(pool_with_extras, settings)
    expected = (
        10 * 5                       # bottom
        + 2 * 10 * 1.5 + 2 * 5 * 1.5  # walls
        + 4 * 0.30 * 1.5             # stair treads
        + 2.0 * 1.5                  # paddling bottom
        + (2 * 1.5 + 2.0) * 0.4      # paddling walls
        + 2.0 * (0.4 + 2 * 0.10)     # dividing wall
    )
    assert sum(s.area for s in surfaces) == pytest.approx(expected, abs=1e-6)
    assert [s.key for s in surfaces] == list(SurfaceKey)


def test_disabled_features_are_absent(pool_10x5, settings):
    assert plan_stairs(pool_10x5) is None
    assert plan_paddling_bottom(pool_10x5) is None
    assert plan_paddling_walls(pool_10x5) is None
    assert plan_dividing_wall(pool_10x5, settings) is None
    assert [s.key for s in plan_surfaces(pool_10x5, settings)] == [
        SurfaceKey.BOTTOM, SurfaceKey.WALLS]


def test_degenerate_geometry_gives_no_surface(settings):
    dims = PoolDimensions(PoolShape.RECTANGULAR, 0.0, 5.0, 1.5)
    assert plan_bottom(dims) is None
    flat = PoolDimensions(PoolShape.RECTANGULAR, 10.0, 5.0, 0.0)
    assert plan_walls(flat) is None


def test_stairs_are_structural_treads_only(pool_with_extras):
    s = plan_stairs(pool_with_extras)
    assert s.foil_assignment is FoilAssignment.STRUCTURAL
    assert s.area == pytest.approx(1.8)


def test_diagonal_stairs_use_triangle_area():
    dims = PoolDimensions(
        PoolShape.RECTANGULAR, 10.0, 5.0, 1.5,
        stairs=StairsConfig(enabled=True, shape=StairsShape.DIAGONAL_45,
                            step_count=4, step_depth=0.30),
    )
    s = plan_stairs(dims)
    assert s.area == pytest.approx(1.2 * 1.2 / 2)
    assert s.cover_width == pytest.approx(1.2)


def test_full_width_stairs():
    dims = PoolDimensions(
        PoolShape.RECTANGULAR, 10.0, 5.0, 1.5,
        stairs=StairsConfig(enabled=True, step_count=3, step_depth=0.3, width=None),
    )
    s = plan_stairs(dims)
    assert s.strip_length == 5.0
    assert s.area == pytest.approx(0.9 * 5.0)


def test_dividing_wall_offset(settings):
    dims = PoolDimensions(
        PoolShape.RECTANGULAR, 10.0, 5.0, 1.5,
        wading_pool=WadingPoolConfig(enabled=True, depth=0.4, dividing_wall_offset=0.1),
    )
    s = plan_dividing_wall(dims, settings)
    assert s.cover_width == pytest.approx(0.3 + 0.2)
    assert s.strip_length == 2.0

    no_height = PoolDimensions(
        PoolShape.RECTANGULAR, 10.0, 5.0, 1.5,
        wading_pool=WadingPoolConfig(enabled=True, depth=0.4, dividing_wall_offset=0.4),
    )
    assert plan_dividing_wall(no_height, settings) is None


def test_paddling_pool_without_dividing_wall(settings):
    dims = PoolDimensions(
        PoolShape.RECTANGULAR, 10.0, 5.0, 1.5,
        wading_pool=WadingPoolConfig(enabled=True, has_dividing_wall=False),
    )
    keys = [s.key for s in plan_surfaces(dims, settings)]
    assert SurfaceKey.PADDLING_BOTTOM in keys
    assert SurfaceKey.DIVIDING_WALL not in keys
    assert plan_paddling_bottom(dims).foil_assignment is FoilAssignment.STRUCTURAL
    assert plan_paddling_walls(dims).foil_assignment is FoilAssignment.MAIN


def test_dividing_wall_overlaps_take_the_maximum(settings):
    dims = PoolDimensions(
        PoolShape.RECTANGULAR, 10.0, 5.0, 1.5,
        wading_pool=WadingPoolConfig(enabled=True, depth=0.4),
    )
    assert plan_dividing_wall(dims, settings).cover_width == pytest.approx(0.4 + 2 * 0.10)
    tighter = replace(settings, max_horizontal_overlap=0.07)
    assert plan_dividing_wall(dims, tighter).cover_width == pytest.approx(0.4 + 2 * 0.07)
