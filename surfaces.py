# surfaces.py - poolfoil ver1.0
#
# Surface planners. Each returns the area a physical surface needs and its
# natural strip direction, or None when the feature is disabled or degenerate.
# Roll width is not decided here.

from typing import List, Optional

from geometry import bounding_box, perimeter, polygon_area
from models import (
    FoilAssignment, PoolDimensions, StairsShape, Surface, SurfaceKey
)
from settings import PlannerSettings


def _surface(key: SurfaceKey, a: float, b: float, assignment: FoilAssignment,
             area: Optional[float] = None) -> Optional[Surface]:
    """Strips run along the longer of (a, b); zero or negative sizes give no surface."""
    if a <= 0 or b <= 0:
        return None
    length, cover = max(a, b), min(a, b)
    return Surface(
        key=key,
        cover_width=cover,
        strip_length=length,
        area=cover * length if area is None else area,
        foil_assignment=assignment,
    )


# ------------------------------
# Main pool
# ------------------------------

def plan_bottom(dims: PoolDimensions) -> Optional[Surface]:
    longer, shorter = bounding_box(dims)
    return _surface(SurfaceKey.BOTTOM, longer, shorter, FoilAssignment.MAIN)


def plan_walls(dims: PoolDimensions) -> Optional[Surface]:
    """
    All walls as one continuous run around the perimeter; strips are
    vertical, so the run is the strip direction and the depth is covered.
    """
    run = perimeter(dims)
    depth = dims.wall_depth
    if run <= 0 or depth <= 0:
        return None
    return Surface(
        key=SurfaceKey.WALLS,
        cover_width=depth,
        strip_length=run,
        area=run * depth,
        foil_assignment=FoilAssignment.MAIN,
    )


def plan_stairs(dims: PoolDimensions) -> Optional[Surface]:
    """
    Only the tread footprint gets anti-slip foil. Risers are not part of
    the foil plan.
    """
    st = dims.stairs
    if not st.enabled or st.step_count <= 0 or st.step_depth <= 0:
        return None

    run = st.step_count * st.step_depth
    if st.shape is StairsShape.DIAGONAL_45:
        # corner stairs: right triangle with both legs equal to the run
        area = polygon_area([(0.0, 0.0), (run, 0.0), (0.0, run)])
        return _surface(SurfaceKey.STAIRS, run, run, FoilAssignment.STRUCTURAL, area)

    width = st.width if st.width is not None else min(dims.length, dims.width)
    return _surface(SurfaceKey.STAIRS, run, width, FoilAssignment.STRUCTURAL)


# ------------------------------
# Paddling pool
# ------------------------------

def plan_paddling_bottom(dims: PoolDimensions) -> Optional[Surface]:
    wp = dims.wading_pool
    if not wp.enabled:
        return None
    return _surface(SurfaceKey.PADDLING_BOTTOM, wp.width, wp.length, FoilAssignment.STRUCTURAL)


def plan_paddling_walls(dims: PoolDimensions) -> Optional[Surface]:
    """Three external walls: two along the length, one across the width."""
    wp = dims.wading_pool
    if not wp.enabled or wp.depth <= 0 or wp.width <= 0 or wp.length <= 0:
        return None
    run = 2 * wp.length + wp.width
    return Surface(
        key=SurfaceKey.PADDLING_WALLS,
        cover_width=wp.depth,
        strip_length=run,
        area=run * wp.depth,
        foil_assignment=FoilAssignment.MAIN,
    )


def plan_dividing_wall(dims: PoolDimensions, settings: PlannerSettings) -> Optional[Surface]:
    """
    One strip along the paddling pool's open side, covering the wall
    height above the offset plus top and bottom overlaps. Both overlaps
    take max_horizontal_overlap (10 cm), the upper end of the 5-10 cm range.
    """
    wp = dims.wading_pool
    if not wp.enabled or not wp.has_dividing_wall:
        return None
    height = wp.depth - wp.dividing_wall_offset
    inner_perimeter = wp.width
    if height <= 0 or inner_perimeter <= 0:
        return None
    cover = height + 2 * settings.max_horizontal_overlap
    return Surface(
        key=SurfaceKey.DIVIDING_WALL,
        cover_width=cover,
        strip_length=inner_perimeter,
        area=inner_perimeter * cover,
        foil_assignment=FoilAssignment.MAIN,
    )


# ------------------------------
# Aggregate
# ------------------------------

def plan_surfaces(dims: PoolDimensions, settings: PlannerSettings) -> List[Surface]:
    """Non-null surfaces in declaration (and packing) order."""
    planned = [
        plan_bottom(dims),
        plan_walls(dims),
        plan_stairs(dims),
        plan_paddling_bottom(dims),
        plan_paddling_walls(dims),
        plan_dividing_wall(dims, settings),
    ]
    return [s for s in planned if s is not None]
