import pytest

from models import (
    PoolDimensions, PoolShape, StairsConfig, WadingPoolConfig
)
from validation import (
    check_main_dimensions, check_roll_length, check_shape, check_stairs,
    check_wading_pool, check_wall_lengths, validate_pool
)


def test_valid_pool_passes(pool_with_extras, settings):
    validate_pool(pool_with_extras, settings)


def test_non_positive_dimensions(settings):
    dims = PoolDimensions(PoolShape.RECTANGULAR, 10.0, -5.0, 1.5)
    ok, reason = check_main_dimensions(dims)
    assert not ok and "width" in reason
    with pytest.raises(ValueError, match="Pool dimensions are invalid"):
        validate_pool(dims, settings)


def test_deep_end_shallower_than_depth():
    dims = PoolDimensions(PoolShape.RECTANGULAR, 10.0, 5.0, 1.5, depth_deep=1.2)
    assert not check_main_dimensions(dims)[0]


def test_pool_longer_than_roll(settings):
    dims = PoolDimensions(PoolShape.RECTANGULAR, 26.0, 5.0, 1.5)
    assert not check_roll_length(dims, settings)[0]


def test_custom_shape_needs_vertices():
    dims = PoolDimensions(PoolShape.CUSTOM, 8.0, 6.0, 1.5, vertices=((0, 0), (1, 0)))
    assert not check_shape(dims)[0]
    line = PoolDimensions(PoolShape.CUSTOM, 8.0, 6.0, 1.5,
                          vertices=((0, 0), (1, 0), (2, 0)))
    assert not check_shape(line)[0]


def test_stairs_rules():
    tall = PoolDimensions(
        PoolShape.RECTANGULAR, 10.0, 5.0, 1.0,
        stairs=StairsConfig(enabled=True, step_count=6, step_height=0.2),
    )
    assert not check_stairs(tall)[0]
    disabled = PoolDimensions(
        PoolShape.RECTANGULAR, 10.0, 5.0, 1.0,
        stairs=StairsConfig(enabled=False, step_count=0),
    )
    assert check_stairs(disabled)[0]


def test_paddling_pool_rules(settings):
    deep = PoolDimensions(
        PoolShape.RECTANGULAR, 10.0, 5.0, 1.5,
        wading_pool=WadingPoolConfig(enabled=True, depth=1.5),
    )
    assert not check_wading_pool(deep, settings)[0]
    offset = PoolDimensions(
        PoolShape.RECTANGULAR, 10.0, 5.0, 1.5,
        wading_pool=WadingPoolConfig(enabled=True, depth=0.4, dividing_wall_offset=0.5),
    )
    assert not check_wading_pool(offset, settings)[0]


def test_all_problems_reported(settings):
    dims = PoolDimensions(
        PoolShape.RECTANGULAR, 30.0, 5.0, 1.5,
        wading_pool=WadingPoolConfig(enabled=True, depth=2.0),
    )
    with pytest.raises(ValueError) as err:
        validate_pool(dims, settings)
    assert str(err.value).count("\n- ") == 3


def test_paddling_walls_longer_than_roll(settings):
    # 2 x 8 + 10 = 26 m of paddling pool wall in one run
    dims = PoolDimensions(
        PoolShape.RECTANGULAR, 20.0, 10.0, 1.5,
        wading_pool=WadingPoolConfig(enabled=True, width=10.0, length=8.0, depth=0.4),
    )
    ok, reason = check_wading_pool(dims, settings)
    assert not ok and "26.00 m" in reason
    with pytest.raises(ValueError, match="paddling pool walls") as err:
        validate_pool(dims, settings)
    assert str(err.value).count("\n- ") == 1


def test_paddling_walls_on_one_roll(settings):
    dims = PoolDimensions(
        PoolShape.RECTANGULAR, 20.0, 10.0, 1.5,
        wading_pool=WadingPoolConfig(enabled=True, width=9.0, length=8.0, depth=0.4),
    )
    assert check_wading_pool(dims, settings)[0]


def test_custom_wall_longer_than_roll(settings):
    # hypotenuse C-A is 20 * sqrt(2) = 28.28 m; the bounding box fits a roll
    dims = PoolDimensions(PoolShape.CUSTOM, 20.0, 20.0, 1.5,
                          vertices=((0, 0), (20, 0), (0, 20)))
    assert check_roll_length(dims, settings)[0]
    ok, reason = check_wall_lengths(dims, settings)
    assert not ok and "C-A 28.28 m" in reason
    with pytest.raises(ValueError, match="walls longer"):
        validate_pool(dims, settings)


def test_rectangular_walls_fit(pool_10x5, settings):
    assert check_wall_lengths(pool_10x5, settings)[0]
