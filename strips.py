# strips.py - poolfoil ver1.0
#
# Strip decomposition rules:
# - strips laid side by side across a cover width (bottom, stairs, paddling pool)
# - mixed 1.65/2.05 layouts for the pool bottom
# - wall courses and the edge waste of a wall strip

import math
from typing import List, Optional, Sequence, Tuple

from models import (
    FoilAssignment, FoilSubtype, OptimizationMode, RollWidth,
    StripLayout, Surface, SurfaceKey
)
from settings import PlannerSettings


# -------------------------------------------------------------
# Width eligibility
# -------------------------------------------------------------

def is_narrow_only(surface: Surface, subtype: FoilSubtype) -> bool:
    return subtype.narrow_only or surface.foil_assignment is FoilAssignment.STRUCTURAL


def allowed_widths(surface: Surface, subtype: FoilSubtype) -> List[RollWidth]:
    if is_narrow_only(surface, subtype):
        return [RollWidth.NARROW]
    return [RollWidth.NARROW, RollWidth.WIDE]


def overlap_bounds(surface: Surface, subtype: FoilSubtype,
                   settings: PlannerSettings) -> Tuple[float, float]:
    if surface.key is SurfaceKey.BOTTOM:
        if subtype.butt_joint_bottom:
            return 0.0, 0.0
        return settings.min_overlap_bottom, settings.max_strip_overlap
    return settings.min_overlap_wall, settings.max_strip_overlap


# -------------------------------------------------------------
# Strips across a cover width
# -------------------------------------------------------------

def strips_for_width(cover: float, width: RollWidth,
                     min_overlap: float, max_overlap: float,
                     tol: float = 1e-6) -> StripLayout:
    """
    Fewest strips of one width covering `cover`.
    The overlap is stretched up to max_overlap to absorb excess width;
    whatever is left is trimmed off the last strip as edge waste.
    """
    w = width.meters
    if cover <= w + tol:
        return StripLayout((width,), 0.0, cover, max(0.0, w - cover))

    n = 1 + math.ceil((cover - w) / (w - min_overlap) - tol)
    return strips_for_count(cover, width, n, min_overlap, max_overlap, tol)


def strips_for_count(cover: float, width: RollWidth, count: int,
                     min_overlap: float, max_overlap: float,
                     tol: float = 1e-6) -> StripLayout:
    layout = mixed_strips(cover, [width] * count, min_overlap, max_overlap, tol)
    if layout is None:
        raise ValueError(
            f"{count} strip(s) of {width.meters:.2f} m cannot cover {cover:.2f} m."
        )
    return layout


def mixed_strips(cover: float, widths: Sequence[RollWidth],
                 min_overlap: float, max_overlap: float,
                 tol: float = 1e-6) -> Optional[StripLayout]:
    """Checks a given list of strip widths; None when they cannot cover."""
    n = len(widths)
    if n == 0:
        return None
    total = sum(w.meters for w in widths)
    if n == 1:
        if total + tol < cover:
            return None
        return StripLayout(tuple(widths), 0.0, cover, max(0.0, total - cover))

    exact = (total - cover) / (n - 1)
    if exact + tol < min_overlap:
        return None
    overlap = min(exact, max_overlap)
    edge = max(0.0, total - (n - 1) * overlap - cover)
    if edge >= widths[-1].meters - overlap:
        # the last strip would be trimmed away completely
        return None
    return StripLayout(tuple(widths), overlap, cover, edge)


def bottom_mix_candidates(cover: float, min_overlap: float, max_overlap: float,
                          tol: float = 1e-6) -> List[StripLayout]:
    """All valid wide+narrow combinations, wide strips first."""
    lo = max(1, math.ceil(cover / RollWidth.WIDE.meters - tol))
    hi = math.ceil(cover / RollWidth.NARROW.meters - tol) + 2

    out: List[StripLayout] = []
    for n in range(lo, hi + 1):
        for wide in range(n + 1):
            widths = [RollWidth.WIDE] * wide + [RollWidth.NARROW] * (n - wide)
            layout = mixed_strips(cover, widths, min_overlap, max_overlap, tol)
            if layout is not None:
                out.append(layout)
    return out


def layout_roll_area(layout: StripLayout, strip_length: float,
                     roll_length: float, tol: float = 1e-6) -> float:
    """Roll area next-fit packing opens for one surface laid out this way."""
    per_roll = max(1, int((roll_length + tol) // strip_length))
    area = 0.0
    for width in set(layout.widths):
        n = layout.widths.count(width)
        area += math.ceil(n / per_roll) * width.meters * roll_length
    return area


def rank_layouts(layouts: Sequence[StripLayout], strip_length: float,
                 mode: OptimizationMode, roll_length: float = 25.0) -> List[StripLayout]:
    """Layouts best first for the mode; sorting is stable, so ties keep their order."""
    if mode is OptimizationMode.MIN_ROLLS:
        def key(lay: StripLayout):
            return (round(layout_roll_area(lay, strip_length, roll_length), 9),
                    round(lay.material_width * strip_length, 9), lay.count,
                    round(lay.edge_waste, 9))
    else:
        def key(lay: StripLayout):
            return (round(lay.edge_waste * strip_length, 9), lay.count,
                    round(lay.material_width, 9))

    return sorted(layouts, key=key)


def choose_layout(layouts: Sequence[StripLayout], strip_length: float,
                  mode: OptimizationMode, roll_length: float = 25.0) -> StripLayout:
    if not layouts:
        raise ValueError("No strip layout can cover this surface.")
    return rank_layouts(layouts, strip_length, mode, roll_length)[0]


# -------------------------------------------------------------
# Walls
# -------------------------------------------------------------

def wall_single_course_width(depth: float, subtype: FoilSubtype,
                             settings: PlannerSettings) -> RollWidth:
    """Default width for wall strips at this depth."""
    if subtype.narrow_only:
        return RollWidth.NARROW
    if depth <= settings.narrow_wall_max_depth:
        return RollWidth.NARROW
    if depth <= settings.wide_wall_max_depth:
        return RollWidth.WIDE
    # too deep for one wide course: two narrow courses
    return RollWidth.NARROW


def wall_courses(depth: float, width: RollWidth, settings: PlannerSettings) -> int:
    max_depth = (settings.narrow_wall_max_depth if width is RollWidth.NARROW
                 else settings.wide_wall_max_depth)
    if depth <= max_depth:
        return 1
    # each further course adds one width less the course-to-course overlap
    needed = depth + 2 * settings.min_horizontal_overlap
    step = width.meters - settings.min_overlap_wall
    return 1 + math.ceil((needed - width.meters) / step - settings.tolerance)


def wall_edge_waste(depth: float, width: RollWidth, courses: int,
                    settings: PlannerSettings) -> float:
    """
    Width cut off a wall strip: height beyond the wall depth that the
    top and bottom horizontal overlaps cannot absorb.
    """
    covered = courses * width.meters - (courses - 1) * settings.min_overlap_wall
    per_side = (covered - depth) / 2.0
    return max(0.0, per_side - settings.max_horizontal_overlap) * 2.0
