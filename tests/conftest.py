import pytest

from models import (
    FoilAssignment, PoolDimensions, PoolShape, RollWidth, StairsConfig,
    SurfaceKey, WadingPoolConfig
)
from roll_packing import RollPacker
from settings import DEFAULT_SETTINGS


@pytest.fixture
def settings():
    return DEFAULT_SETTINGS


@pytest.fixture
def pool_10x5():
    """10 x 5 x 1.5 m rectangle, no extras."""
    return PoolDimensions(PoolShape.RECTANGULAR, 10.0, 5.0, 1.5)


@pytest.fixture
def pool_with_extras():
    return PoolDimensions(
        PoolShape.RECTANGULAR, 10.0, 5.0, 1.5,
        stairs=StairsConfig(enabled=True, step_count=4, step_depth=0.30, width=1.5),
        wading_pool=WadingPoolConfig(enabled=True, width=2.0, length=1.5, depth=0.4),
    )


@pytest.fixture
def bottom_packer(settings):
    """Bottom of the 10 x 5 pool packed as 1 x 2.05 + 2 x 1.65 strips of 10 m."""
    packer = RollPacker(settings.roll_length, settings.tolerance)
    packer.pack(SurfaceKey.BOTTOM, FoilAssignment.MAIN, [
        (RollWidth.WIDE, 10.0),
        (RollWidth.NARROW, 10.0),
        (RollWidth.NARROW, 10.0),
    ])
    return packer
