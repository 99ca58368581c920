# validation.py - poolfoil ver1.0
#
# Input checks run before the optimizer. Each rule returns (ok, reason);
# validate_pool collects every failure and raises one ValueError.

from typing import List, Tuple

from geometry import bounding_box, polygon_area, wall_segments
from models import PoolDimensions, PoolShape
from settings import PlannerSettings


# ---------------------------------------
# Pool body
# ---------------------------------------

def check_main_dimensions(dims: PoolDimensions) -> Tuple[bool, str]:
    bad = [
        f"{name}={value}"
        for name, value in (("length", dims.length), ("width", dims.width), ("depth", dims.depth))
        if value <= 0
    ]
    if bad:
        return False, f"dimensions must be positive, got {', '.join(bad)}"
    if dims.depth_deep is not None and dims.depth_deep < dims.depth:
        return False, (
            f"deep-end depth {dims.depth_deep} m is shallower than {dims.depth} m"
        )
    return True, ""


def check_shape(dims: PoolDimensions) -> Tuple[bool, str]:
    if dims.shape is not PoolShape.CUSTOM:
        return True, ""
    if len(dims.vertices) < 3:
        return False, f"custom shape needs at least 3 vertices, has {len(dims.vertices)}"
    if polygon_area(dims.vertices) <= 0:
        return False, "custom shape vertices enclose no area"
    return True, ""


def check_roll_length(dims: PoolDimensions, settings: PlannerSettings) -> Tuple[bool, str]:
    longer, _ = bounding_box(dims)
    if longer > settings.roll_length:
        return False, (
            f"bottom strips would be {longer:.2f} m, longer than a "
            f"{settings.roll_length:.0f} m roll"
        )
    return True, ""


def check_wall_lengths(dims: PoolDimensions, settings: PlannerSettings) -> Tuple[bool, str]:
    """Each wall must fit on one roll, whatever the strip partition."""
    limit = settings.roll_length + settings.tolerance
    too_long = [s for s in wall_segments(dims) if s.length > limit]
    if too_long:
        walls = ", ".join(f"{s.label} {s.length:.2f} m" for s in too_long)
        return False, f"walls longer than a {settings.roll_length:.0f} m roll: {walls}"
    return True, ""


# ---------------------------------------
# Stairs and paddling pool
# ---------------------------------------

def check_stairs(dims: PoolDimensions) -> Tuple[bool, str]:
    st = dims.stairs
    if not st.enabled:
        return True, ""
    if st.step_count < 1 or st.step_depth <= 0 or st.step_height <= 0:
        return False, "stairs need at least one step with positive depth and height"
    run = st.step_count * st.step_depth
    if run > max(dims.length, dims.width):
        return False, f"stairs run {run:.2f} m does not fit the pool"
    if st.width is not None and (st.width <= 0 or st.width > max(dims.length, dims.width)):
        return False, f"stairs width {st.width} m does not fit the pool"
    if st.step_count * st.step_height > dims.wall_depth:
        return False, "stairs are higher than the pool is deep"
    return True, ""


def check_wading_pool(dims: PoolDimensions, settings: PlannerSettings) -> Tuple[bool, str]:
    wp = dims.wading_pool
    if not wp.enabled:
        return True, ""
    if wp.width <= 0 or wp.length <= 0 or wp.depth <= 0:
        return False, "paddling pool dimensions must be positive"
    if wp.depth >= dims.depth:
        return False, (
            f"paddling pool depth {wp.depth} m must be less than pool depth {dims.depth} m"
        )
    if wp.width > max(dims.length, dims.width) or wp.length > min(dims.length, dims.width):
        return False, "paddling pool does not fit inside the pool"
    run = 2 * wp.length + wp.width
    if run > settings.roll_length + settings.tolerance:
        return False, (
            f"paddling pool walls run {run:.2f} m, longer than a "
            f"{settings.roll_length:.0f} m roll"
        )
    if wp.has_dividing_wall and not (0 <= wp.dividing_wall_offset < wp.depth):
        return False, (
            f"dividing wall offset {wp.dividing_wall_offset} m must be within "
            f"0-{wp.depth} m"
        )
    return True, ""


# ---------------------------------------
# Global validation before optimizing
# ---------------------------------------

def validate_pool(dims: PoolDimensions, settings: PlannerSettings) -> None:
    """Raises ValueError listing every violated rule."""
    problems: List[str] = []
    ok, reason = check_main_dimensions(dims)
    if not ok:
        # the remaining rules assume positive dimensions
        raise ValueError(f"Pool dimensions are invalid:\n- {reason}")

    for ok, reason in (
        check_shape(dims),
        check_stairs(dims),
        check_wading_pool(dims, settings),
        check_roll_length(dims, settings),
        check_wall_lengths(dims, settings),
    ):
        if not ok:
            problems.append(reason)

    if problems:
        msg = "Pool dimensions are invalid:\n"
        msg += "\n".join(f"- {p}" for p in problems)
        raise ValueError(msg)
