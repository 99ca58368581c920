# wall_optimizer.py - poolfoil ver1.0
#
# Chooses how the wall perimeter is cut into vertical strips:
# - how many strips (1-4) and which walls each strip spans
# - which strip absorbs each vertical seam overlap
# - which strips may switch to 2.05 m to use a wide bottom remnant
# Every candidate is packed for real against the bottom rolls and scored.

import itertools
import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from models import (
    FoilAssignment, FoilSubtype, OptimizationMode, RollWidth,
    SurfaceKey, WallSegment, WallStrip, WallStripPlan
)
from roll_packing import RollPacker
from settings import PlannerSettings
from strips import wall_courses, wall_edge_waste, wall_single_course_width

logger = logging.getLogger(__name__)

REUSE_SOURCES = (SurfaceKey.BOTTOM,)


@dataclass(frozen=True)
class _Span:
    segments: Tuple[WallSegment, ...]

    @property
    def length(self) -> float:
        return sum(s.length for s in self.segments)

    @property
    def labels(self) -> Tuple[str, ...]:
        return (self.segments[0].start,) + tuple(s.end for s in self.segments)


# -------------------------------------------------------------
# Partitions
# -------------------------------------------------------------

def generate_partitions(segments: Sequence[WallSegment],
                        max_strips: int) -> Iterator[Tuple[_Span, ...]]:
    """Contiguous groupings of the walls, clockwise from corner A, 1..max_strips groups."""
    m = len(segments)
    for n in range(1, min(max_strips, m) + 1):
        for cuts in itertools.combinations(range(1, m), n - 1):
            bounds = (0,) + cuts + (m,)
            yield tuple(
                _Span(tuple(segments[bounds[i]:bounds[i + 1]])) for i in range(n)
            )


# -------------------------------------------------------------
# Candidate construction
# -------------------------------------------------------------

def _reserve_remnants(bases: Sequence[float], widths: Sequence[RollWidth],
                      packer: Optional[RollPacker], tol: float) -> List[bool]:
    """Marks strips whose base length can be cut from a bottom remnant."""
    if packer is None:
        return [False] * len(bases)
    free = {
        r.number: (r.width, packer.free_length(r))
        for r in packer.donor_rolls(FoilAssignment.MAIN, RollWidth.NARROW, REUSE_SOURCES)
        + packer.donor_rolls(FoilAssignment.MAIN, RollWidth.WIDE, REUSE_SOURCES)
    }
    reserved = []
    for base, width in zip(bases, widths):
        fitting = [(length, num) for num, (w, length) in free.items()
                   if w is width and length + tol >= base]
        if fitting:
            length, num = min(fitting)
            free[num] = (width, length - base)
            reserved.append(True)
        else:
            reserved.append(False)
    return reserved


def distribute_overlaps(bases: Sequence[float], widths: Sequence[RollWidth],
                        reserved: Sequence[bool], seam: float,
                        roll_length: float, tol: float) -> Optional[List[float]]:
    """
    One seam between each pair of neighbouring strips (n-1 seams).
    Returns the overlap carried by each strip, or None if no valid placement.
    """
    n = len(bases)
    overlaps = [0.0] * n
    mixed = len(set(widths)) > 1

    for k in range(n - 1):
        options = [k, k + 1]
        if mixed:
            options = [i for i in options if widths[i] is RollWidth.NARROW]
            if not options:
                return None
        # fresh strips first, then longer, then earlier
        options.sort(key=lambda i: (reserved[i], -bases[i], i))
        for i in options:
            if bases[i] + overlaps[i] + seam <= roll_length + tol:
                overlaps[i] += seam
                break
        else:
            return None
    return overlaps


def _width_options(span: _Span, default: RollWidth, wide_allowed: bool,
                   max_wide_remnant: float, tol: float) -> List[RollWidth]:
    if wide_allowed and default is RollWidth.NARROW and span.length <= max_wide_remnant + tol:
        return [default, RollWidth.WIDE]
    return [default]


def _evaluate(spans: Sequence[_Span], widths: Sequence[RollWidth], default: RollWidth,
              depth: float, packer: Optional[RollPacker],
              settings: PlannerSettings) -> Optional[WallStripPlan]:
    tol = settings.tolerance
    bases = [s.length for s in spans]
    reserved = _reserve_remnants(bases, widths, packer, tol)
    overlaps = distribute_overlaps(bases, widths, reserved, settings.vertical_join_overlap,
                                   settings.roll_length, tol)
    if overlaps is None:
        return None

    courses = wall_courses(depth, default, settings)
    sim = packer.copy() if packer is not None else RollPacker(settings.roll_length, tol)
    before = {r.number for r in sim.rolls}

    strips: List[WallStrip] = []
    foil_area = 0.0
    edge_area = 0.0
    for index, (span, width, overlap) in enumerate(zip(spans, widths, overlaps)):
        length = span.length + overlap
        strip_courses = courses if width is default else 1
        reused = False
        for course in range(strip_courses):
            cut = sim.place(SurfaceKey.WALLS, FoilAssignment.MAIN, width, length,
                            index, course, REUSE_SOURCES)
            reused = reused or cut.reused
        if width is not default and not reused:
            # a switched strip only makes sense on a wide remnant
            return None

        strips.append(WallStrip(width, span.length, overlap, span.labels, reused, strip_courses))
        foil_area += length * width.meters * strip_courses
        edge_area += length * wall_edge_waste(depth, width, strip_courses, settings)

    new_rolls = [r for r in sim.rolls if r.number not in before]
    touched = new_rolls + [
        r for r in sim.rolls
        if r.number in before and any(c.surface is SurfaceKey.WALLS for c in r.strips)
    ]

    tail_waste = 0.0
    reusable = 0.0
    for r in touched:
        tail = sim.free_length(r)
        if tail >= settings.min_reusable_offcut_length:
            reusable += tail * r.width.meters
        elif tail > 0.01:
            tail_waste += tail * r.width.meters

    return WallStripPlan(
        strips=tuple(strips),
        courses=courses,
        new_roll_area=sum(r.width.meters * r.roll_length for r in new_rolls),
        foil_area=foil_area,
        edge_waste_area=edge_area,
        tail_waste_area=tail_waste,
        reusable_offcut_area=reusable,
    )


def enumerate_candidates(segments: Sequence[WallSegment], depth: float,
                         subtype: FoilSubtype, settings: PlannerSettings,
                         packer: Optional[RollPacker] = None,
                         strip_count: Optional[int] = None,
                         width: Optional[RollWidth] = None) -> List[WallStripPlan]:
    """
    Every feasible wall plan. `strip_count` and `width` pin the count
    or force one uniform width (manual overrides).
    """
    tol = settings.tolerance
    default = width or wall_single_course_width(depth, subtype, settings)

    wide_remnants = []
    if packer is not None:
        wide_remnants = [packer.free_length(r) for r in
                         packer.donor_rolls(FoilAssignment.MAIN, RollWidth.WIDE, REUSE_SOURCES)]
    wide_allowed = (
        width is None
        and not subtype.narrow_only
        and depth <= settings.narrow_wall_max_depth
        and bool(wide_remnants)
    )
    max_wide = max(wide_remnants, default=0.0)

    plans: List[WallStripPlan] = []
    for spans in generate_partitions(segments, settings.max_wall_strips):
        if strip_count is not None and len(spans) != strip_count:
            continue
        if any(s.length > settings.roll_length + tol for s in spans):
            continue
        options = [_width_options(s, default, wide_allowed, max_wide, tol) for s in spans]
        for widths in itertools.product(*options):
            plan = _evaluate(spans, widths, default, depth, packer, settings)
            if plan is not None:
                plans.append(plan)
    return plans


# -------------------------------------------------------------
# Selection
# -------------------------------------------------------------

def _r(x: float) -> float:
    return round(x, 9)


def selection_key(plan: WallStripPlan, mode: OptimizationMode):
    consumed = (_r(plan.new_roll_area), _r(plan.foil_area))
    if mode is OptimizationMode.MIN_ROLLS:
        return consumed + (_r(plan.waste_area), plan.total_strip_count)
    return (_r(plan.waste_area), plan.total_strip_count) + consumed


def select_plan(plans: Sequence[WallStripPlan], mode: OptimizationMode) -> WallStripPlan:
    if not plans:
        raise ValueError("No feasible wall strip layout for these walls (a span may exceed the roll length).")
    # min() keeps the first of equal keys, so enumeration order breaks exact ties
    return min(plans, key=lambda p: selection_key(p, mode))


def optimize_wall_strips(segments: Sequence[WallSegment], depth: float,
                         subtype: FoilSubtype, mode: OptimizationMode,
                         settings: PlannerSettings,
                         packer: Optional[RollPacker] = None,
                         strip_count: Optional[int] = None,
                         width: Optional[RollWidth] = None) -> WallStripPlan:
    """
    Best wall plan for the mode. `packer` holds the already packed bottom
    rolls whose tails may feed wall strips; it is not modified.
    """
    if width is RollWidth.WIDE and subtype.narrow_only:
        width = RollWidth.NARROW

    plans = enumerate_candidates(segments, depth, subtype, settings, packer,
                                 strip_count, width)
    best = select_plan(plans, mode)
    logger.debug(
        "Wall plan (%s): %d candidates, chose %d strips [%s], waste %.3f m2, new rolls %.2f m2",
        mode.value, len(plans), best.total_strip_count,
        ", ".join(f"{s.label}:{s.roll_width.meters}x{s.total_length:.2f}" for s in best.strips),
        best.waste_area, best.new_roll_area,
    )
    return best
