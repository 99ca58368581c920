# mix_planner.py - poolfoil ver1.0
#
# Aggregates all surfaces into a MixConfiguration:
# - chooses each surface's strip layout (roll width / strip mix)
# - runs the wall strip optimizer against the packed bottom rolls
# - packs every strip onto rolls and totals rolls and waste
# - compares the plan against 1.65-only and 2.05-only cutting

import logging
from typing import Iterable, List, Optional, Sequence

from models import (
    FoilAreaSummary, FoilAssignment, FoilSubtype, MixConfiguration,
    OptimizationMode, PlanInputs, PoolDimensions, RollWidth, StripLayout, Surface,
    SurfaceKey, SurfaceRollConfig, WallStripPlan, WidthComparison
)
from geometry import wall_segments
from roll_packing import RollPacker
from settings import DEFAULT_SETTINGS, PlannerSettings
from strips import (
    allowed_widths, bottom_mix_candidates, choose_layout, layout_roll_area,
    overlap_bounds, rank_layouts, strips_for_count, strips_for_width, wall_edge_waste
)
from surfaces import plan_surfaces
from wall_optimizer import REUSE_SOURCES, optimize_wall_strips

logger = logging.getLogger(__name__)


# -------------------------------------------------------------
# Per-surface configuration
# -------------------------------------------------------------

def product_for(surface: Surface, subtype: FoilSubtype) -> FoilAssignment:
    """Which foil product (and so which rolls) a surface is cut from."""
    if subtype is FoilSubtype.STRUCTURAL:
        return FoilAssignment.MAIN
    return surface.foil_assignment


def layout_candidates(surface: Surface, subtype: FoilSubtype, settings: PlannerSettings,
                      width: Optional[RollWidth] = None,
                      strip_count: Optional[int] = None) -> List[StripLayout]:
    """Every layout allowed for a surface whose strips lie side by side across it."""
    min_ov, max_ov = overlap_bounds(surface, subtype, settings)
    tol = settings.tolerance
    widths = allowed_widths(surface, subtype)
    if width is not None and width not in widths:
        width = RollWidth.NARROW

    if width is not None or strip_count is not None:
        candidates = [width] if width is not None else widths
        if strip_count is None:
            return [strips_for_width(surface.cover_width, w, min_ov, max_ov, tol)
                    for w in candidates]
        layouts = []
        for w in candidates:
            try:
                layouts.append(strips_for_count(surface.cover_width, w, strip_count,
                                                min_ov, max_ov, tol))
            except ValueError:
                continue
        if not layouts:
            raise ValueError(
                f"{strip_count} strip(s) cannot cover {surface.label} "
                f"({surface.cover_width:.2f} m)."
            )
        return layouts

    if surface.key is SurfaceKey.BOTTOM and len(widths) == 2:
        return bottom_mix_candidates(surface.cover_width, min_ov, max_ov, tol)
    return [strips_for_width(surface.cover_width, w, min_ov, max_ov, tol) for w in widths]


def config_from_layout(surface: Surface, layout: StripLayout,
                       manual: bool = False) -> SurfaceRollConfig:
    return SurfaceRollConfig(
        surface=surface,
        strip_widths=layout.widths,
        strip_lengths=tuple(surface.strip_length for _ in layout.widths),
        overlap=layout.overlap,
        waste_area=layout.edge_waste * surface.strip_length,
        is_manual_override=manual,
        layout=layout,
    )


def plan_surface_config(surface: Surface, subtype: FoilSubtype, mode: OptimizationMode,
                        settings: PlannerSettings,
                        width: Optional[RollWidth] = None,
                        strip_count: Optional[int] = None,
                        manual: bool = False) -> SurfaceRollConfig:
    """Best strip layout for the mode; `width` / `strip_count` pin it."""
    layouts = layout_candidates(surface, subtype, settings, width, strip_count)
    layout = choose_layout(layouts, surface.strip_length, mode, settings.roll_length)
    return config_from_layout(surface, layout, manual)


def wall_config_from_plan(surface: Surface, plan: WallStripPlan, depth: float,
                          settings: PlannerSettings, manual: bool = False) -> SurfaceRollConfig:
    edge = sum(
        s.total_length * wall_edge_waste(
            depth, s.roll_width, s.courses, settings)
        for s in plan.strips
    )
    return SurfaceRollConfig(
        surface=surface,
        strip_widths=tuple(s.roll_width for s in plan.strips),
        strip_lengths=tuple(s.total_length for s in plan.strips),
        overlap=settings.vertical_join_overlap,
        waste_area=edge,
        courses=plan.courses,
        is_manual_override=manual,
        wall_plan=plan,
    )


def plan_wall_config(surface: Surface, dims: PoolDimensions, subtype: FoilSubtype,
                     mode: OptimizationMode, settings: PlannerSettings,
                     packer: Optional[RollPacker],
                     width: Optional[RollWidth] = None,
                     strip_count: Optional[int] = None,
                     manual: bool = False) -> SurfaceRollConfig:
    plan = optimize_wall_strips(
        wall_segments(dims), dims.wall_depth, subtype, mode, settings,
        packer=packer, strip_count=strip_count, width=width,
    )
    return wall_config_from_plan(surface, plan, dims.wall_depth, settings, manual)


# -------------------------------------------------------------
# Packing and totals
# -------------------------------------------------------------

def pack_surface(packer: RollPacker, cfg: SurfaceRollConfig, subtype: FoilSubtype) -> None:
    product = product_for(cfg.surface, subtype)
    if cfg.wall_plan is not None:
        plan = cfg.wall_plan
        for index, s in enumerate(plan.strips):
            for course in range(s.courses):
                packer.place(cfg.key, product, s.roll_width, s.total_length,
                             index, course, REUSE_SOURCES)
        return
    packer.pack(cfg.key, product, zip(cfg.strip_widths, cfg.strip_lengths), cfg.courses)


def assemble(inputs: PlanInputs, configs: Iterable[SurfaceRollConfig],
             is_optimized: bool, packer: Optional[RollPacker] = None) -> MixConfiguration:
    """Totals a set of surface configs. Packs them first unless a packer is given."""
    configs = tuple(configs)
    if packer is None:
        packer = RollPacker(inputs.settings.roll_length, inputs.settings.tolerance)
        for cfg in configs:
            pack_surface(packer, cfg, inputs.subtype)

    rolls = tuple(packer.rolls)
    useful = sum(c.length * r.width.meters for r in rolls for c in r.strips)
    return MixConfiguration(
        inputs=inputs,
        surfaces=configs,
        rolls=rolls,
        total_rolls_165=sum(1 for r in rolls if r.width is RollWidth.NARROW),
        total_rolls_205=sum(1 for r in rolls if r.width is RollWidth.WIDE),
        total_waste=sum(r.waste_area for r in rolls),
        useful_area=useful,
        is_optimized=is_optimized,
    )


# -------------------------------------------------------------
# Whole-pool planning
# -------------------------------------------------------------

def plan_all(inputs: PlanInputs, surfaces: Sequence[Surface],
             width: Optional[RollWidth] = None,
             bottom: Optional[SurfaceRollConfig] = None,
             wall_width: Optional[RollWidth] = None,
             is_optimized: bool = True) -> MixConfiguration:
    """
    Plans and packs every surface in order. `width` pins every surface to
    one roll width (narrow-only surfaces stay narrow); `bottom` and
    `wall_width` fix the bottom layout and the wall strip width.
    """
    settings = inputs.settings
    packer = RollPacker(settings.roll_length, settings.tolerance)

    configs: List[SurfaceRollConfig] = []
    for surface in surfaces:
        if surface.key is SurfaceKey.WALLS:
            cfg = plan_wall_config(surface, inputs.dimensions, inputs.subtype, inputs.mode,
                                   settings, packer, width=wall_width or width)
        elif surface.key is SurfaceKey.BOTTOM and bottom is not None:
            cfg = bottom
        else:
            cfg = plan_surface_config(surface, inputs.subtype, inputs.mode, settings,
                                      width=width)
        pack_surface(packer, cfg, inputs.subtype)
        configs.append(cfg)

    return assemble(inputs, configs, is_optimized=is_optimized, packer=packer)


def _least_roll_area(inputs: PlanInputs, surfaces: Sequence[Surface]) -> MixConfiguration:
    """
    Tries every bottom layout with the walls planned against it (free width,
    or all strips of one width) and keeps the plan opening the least roll area.
    """
    subtype, settings = inputs.subtype, inputs.settings
    bottoms: List[Optional[SurfaceRollConfig]] = [None]
    wall_widths: List[Optional[RollWidth]] = [None]
    for surface in surfaces:
        if surface.key is SurfaceKey.BOTTOM:
            layouts = rank_layouts(layout_candidates(surface, subtype, settings),
                                   surface.strip_length, inputs.mode, settings.roll_length)
            bottoms = [config_from_layout(surface, lay) for lay in layouts]
        elif surface.key is SurfaceKey.WALLS:
            wall_widths += allowed_widths(surface, subtype)

    best, best_key = None, None
    for bottom in bottoms:
        if best is not None and bottom is not None:
            # ranked by own roll area: no later bottom can beat the best plan
            own = layout_roll_area(bottom.layout, bottom.surface.strip_length,
                                   settings.roll_length, settings.tolerance)
            if round(own, 9) >= best_key[0]:
                break
        for wall_width in wall_widths:
            config = plan_all(inputs, surfaces, bottom=bottom, wall_width=wall_width)
            key = (round(config.roll_area, 9), round(config.total_waste, 9))
            if best is None or key < best_key:
                best, best_key = config, key
    return best


# -------------------------------------------------------------
# Entry points
# -------------------------------------------------------------

def optimize_mix(dimensions: PoolDimensions, subtype: FoilSubtype,
                 mode: OptimizationMode,
                 settings: PlannerSettings = DEFAULT_SETTINGS) -> MixConfiguration:
    """Fresh optimization of every surface; a pure function of its arguments."""
    inputs = PlanInputs(dimensions, subtype, mode, settings)
    surfaces = plan_surfaces(dimensions, settings)

    if mode is OptimizationMode.MIN_ROLLS:
        config = _least_roll_area(inputs, surfaces)
    else:
        config = plan_all(inputs, surfaces)

    logger.info(
        "Optimized %s (%s): %d x 1.65 m, %d x 2.05 m rolls, waste %.2f m2 (%.1f%%)",
        subtype.value, mode.value, config.total_rolls_165, config.total_rolls_205,
        config.total_waste, config.waste_percentage,
    )
    return config


def compare_widths(dimensions: PoolDimensions, subtype: FoilSubtype,
                   settings: PlannerSettings = DEFAULT_SETTINGS) -> WidthComparison:
    """Rolls and waste when cutting everything from 1.65 m, from 2.05 m, or the optimized mix."""
    inputs = PlanInputs(dimensions, subtype, OptimizationMode.MIN_ROLLS, settings)
    surfaces = plan_surfaces(dimensions, settings)
    comparison = WidthComparison(
        only_165=plan_all(inputs, surfaces, width=RollWidth.NARROW, is_optimized=False),
        only_205=plan_all(inputs, surfaces, width=RollWidth.WIDE, is_optimized=False),
        mixed=optimize_mix(dimensions, subtype, OptimizationMode.MIN_ROLLS, settings),
    )
    logger.debug(
        "Width comparison: 1.65 only %.2f m2, 2.05 only %.2f m2, mix %.2f m2 of rolls",
        comparison.only_165.roll_area, comparison.only_205.roll_area,
        comparison.mixed.roll_area,
    )
    return comparison


def foil_area_summary(config: MixConfiguration) -> FoilAreaSummary:
    """Cut areas per product, structural butt-joint length and reusable offcuts."""
    settings = config.inputs.settings
    main = 0.0
    structural = 0.0
    for r in config.rolls:
        area = sum(c.length for c in r.strips) * r.width.meters
        if r.product is FoilAssignment.STRUCTURAL:
            structural += area
        else:
            main += area

    butt = 0.0
    if config.inputs.subtype.butt_joint_bottom:
        for cfg in config.surfaces:
            if cfg.key is SurfaceKey.BOTTOM:
                butt += (cfg.strip_count - 1) * cfg.surface.strip_length

    offcuts = tuple(
        (r.width, r.waste_length) for r in config.rolls
        if r.waste_length >= settings.min_reusable_offcut_length
    )
    return FoilAreaSummary(main, structural, butt, offcuts)
