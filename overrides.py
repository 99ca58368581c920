# overrides.py - poolfoil ver1.0
#
# Manual per-surface overrides. Each call takes a MixConfiguration and
# returns a new one; other surfaces keep their plans and are only re-packed.

import logging

from models import MixConfiguration, RollWidth, SurfaceKey, SurfaceRollConfig
from geometry import wall_segments
from mix_planner import (
    assemble, optimize_mix, pack_surface, plan_surface_config, wall_config_from_plan
)
from roll_packing import RollPacker
from strips import is_narrow_only
from wall_optimizer import optimize_wall_strips

logger = logging.getLogger(__name__)


def _replace_surface(config: MixConfiguration, key: SurfaceKey, width=None,
                     strip_count=None) -> MixConfiguration:
    current = config.surface(key)
    inputs = config.inputs
    settings = inputs.settings

    configs = []
    packer = RollPacker(settings.roll_length, settings.tolerance)
    for cfg in config.surfaces:
        if cfg.key is key:
            if cfg.wall_plan is not None:
                dims = inputs.dimensions
                plan = optimize_wall_strips(
                    wall_segments(dims), dims.wall_depth, inputs.subtype, inputs.mode,
                    settings, packer=packer,
                    strip_count=strip_count,
                    width=width,
                )
                cfg = wall_config_from_plan(cfg.surface, plan, dims.wall_depth, settings,
                                            manual=True)
            else:
                cfg = plan_surface_config(cfg.surface, inputs.subtype, inputs.mode, settings,
                                          width=width, strip_count=strip_count, manual=True)
        pack_surface(packer, cfg, inputs.subtype)
        configs.append(cfg)

    changed = assemble(inputs, configs, is_optimized=False, packer=packer)
    logger.info("Manual override on %s: %s -> %s", key.value,
                _describe(current), _describe(changed.surface(key)))
    return changed


def _describe(cfg: SurfaceRollConfig) -> str:
    widths = "/".join(f"{w.meters:.2f}x{n}" for w, n in cfg.strip_mix.items())
    return f"{cfg.strip_count} strips ({widths})"


# -------------------------------------------------------------
# Entry points
# -------------------------------------------------------------

def set_surface_roll_width(config: MixConfiguration, key: SurfaceKey,
                           width: RollWidth) -> MixConfiguration:
    """
    Pins one surface to a single roll width. Narrow-only surfaces are
    clamped to 1.65 m; if that changes nothing, the configuration is
    returned as is.
    """
    current = config.surface(key)
    if width is RollWidth.WIDE and is_narrow_only(current.surface, config.inputs.subtype):
        logger.warning("%s is narrow-only; keeping %.2f m rolls", key.value,
                       RollWidth.NARROW.meters)
        width = RollWidth.NARROW
        if current.roll_width is RollWidth.NARROW:
            return config

    if current.wall_plan is not None:
        # same seams, new width
        return _replace_surface(config, key, width=width, strip_count=current.strip_count)
    return _replace_surface(config, key, width=width)


def set_surface_strip_count(config: MixConfiguration, key: SurfaceKey,
                            count: int) -> MixConfiguration:
    """Pins the number of strips on one surface, keeping its roll width."""
    if count < 1:
        raise ValueError(f"Strip count must be at least 1, got {count}.")
    current = config.surface(key)
    return _replace_surface(config, key, width=current.roll_width, strip_count=count)


def reset_to_optimal(config: MixConfiguration) -> MixConfiguration:
    """Drops every override: same result as a fresh optimization."""
    inputs = config.inputs
    return optimize_mix(inputs.dimensions, inputs.subtype, inputs.mode, inputs.settings)
