# models.py - poolfoil ver1.0
# Data structures for pool geometry, surfaces, strip plans, rolls and the mix result.

from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from settings import PlannerSettings


# ------------------------------
# Enumerations
# ------------------------------

class RollWidth(Enum):
    NARROW = 1.65
    WIDE = 2.05

    @property
    def meters(self) -> float:
        return self.value


class FoilAssignment(Enum):
    MAIN = "main"
    STRUCTURAL = "structural"


class FoilSubtype(Enum):
    """Foil families offered for the pool liner."""
    SOLID = "jednokolorowa"
    PRINTED = "nadruk"
    STRUCTURAL = "strukturalna"

    @property
    def narrow_only(self) -> bool:
        return self is not FoilSubtype.SOLID

    @property
    def butt_joint_bottom(self) -> bool:
        # structural foil is welded edge to edge on the floor
        return self is FoilSubtype.STRUCTURAL


class OptimizationMode(Enum):
    MIN_WASTE = "minWaste"
    MIN_ROLLS = "minRolls"


class SurfaceKey(Enum):
    BOTTOM = "bottom"
    WALLS = "walls"
    STAIRS = "stairs"
    PADDLING_BOTTOM = "paddling-bottom"
    PADDLING_WALLS = "paddling-walls"
    DIVIDING_WALL = "dividing-wall"

    @property
    def label(self) -> str:
        return SURFACE_LABELS[self]


SURFACE_LABELS = {
    SurfaceKey.BOTTOM: "Bottom",
    SurfaceKey.WALLS: "Walls",
    SurfaceKey.STAIRS: "Stairs (treads)",
    SurfaceKey.PADDLING_BOTTOM: "Paddling pool bottom",
    SurfaceKey.PADDLING_WALLS: "Paddling pool walls",
    SurfaceKey.DIVIDING_WALL: "Dividing wall",
}


class PoolShape(Enum):
    RECTANGULAR = "rectangular"
    OVAL = "oval"
    CUSTOM = "custom"


class StairsShape(Enum):
    RECTANGULAR = "rectangular"
    DIAGONAL_45 = "diagonal-45"


# ------------------------------
# Pool dimensions (input snapshot)
# ------------------------------

@dataclass(frozen=True)
class StairsConfig:
    enabled: bool = False
    shape: StairsShape = StairsShape.RECTANGULAR
    step_count: int = 4
    step_depth: float = 0.30
    step_height: float = 0.20
    width: Optional[float] = 1.5      # None = across the pool's shorter side


@dataclass(frozen=True)
class WadingPoolConfig:
    enabled: bool = False
    width: float = 2.0
    length: float = 1.5
    depth: float = 0.4
    has_dividing_wall: bool = True
    dividing_wall_offset: float = 0.0   # meters below the paddling-pool rim


@dataclass(frozen=True)
class PoolDimensions:
    shape: PoolShape
    length: float
    width: float
    depth: float
    depth_deep: Optional[float] = None
    stairs: StairsConfig = field(default_factory=StairsConfig)
    wading_pool: WadingPoolConfig = field(default_factory=WadingPoolConfig)
    vertices: Tuple[Tuple[float, float], ...] = ()

    @property
    def wall_depth(self) -> float:
        """Wall strips are cut for the deepest point of the pool."""
        if self.depth_deep is None:
            return self.depth
        return max(self.depth, self.depth_deep)


# ------------------------------
# Surfaces
# ------------------------------

@dataclass(frozen=True)
class Surface:
    key: SurfaceKey
    cover_width: float      # dimension the strips must span side by side
    strip_length: float     # length of each strip
    area: float
    foil_assignment: FoilAssignment

    @property
    def label(self) -> str:
        return self.key.label


@dataclass(frozen=True)
class WallSegment:
    start: str      # corner label, A..
    end: str
    length: float

    @property
    def label(self) -> str:
        return f"{self.start}-{self.end}"


# ------------------------------
# Strip plans
# ------------------------------

@dataclass(frozen=True)
class StripLayout:
    """
    Strips laid side by side across a cover width.
    The last strip is trimmed; the trimmed part is edge waste.
    """
    widths: Tuple[RollWidth, ...]
    overlap: float
    cover_width: float
    edge_waste: float

    @property
    def count(self) -> int:
        return len(self.widths)

    @property
    def material_width(self) -> float:
        return sum(w.meters for w in self.widths)


@dataclass(frozen=True)
class WallStrip:
    roll_width: RollWidth
    base_length: float
    vertical_overlap: float
    wall_labels: Tuple[str, ...]    # corner path, e.g. ("A", "B", "C")
    from_remnant: bool = False
    courses: int = 1

    @property
    def total_length(self) -> float:
        return self.base_length + self.vertical_overlap

    @property
    def label(self) -> str:
        return "-".join(self.wall_labels)


@dataclass(frozen=True)
class WallStripPlan:
    strips: Tuple[WallStrip, ...]
    courses: int
    new_roll_area: float
    foil_area: float
    edge_waste_area: float
    tail_waste_area: float
    reusable_offcut_area: float

    @property
    def total_strip_count(self) -> int:
        return len(self.strips)

    @property
    def waste_area(self) -> float:
        return self.edge_waste_area + self.tail_waste_area


# ------------------------------
# Rolls
# ------------------------------

@dataclass(frozen=True)
class CutStrip:
    surface: SurfaceKey
    index: int          # strip index within its surface
    course: int
    length: float
    offset: float       # position along the roll
    reused: bool = False


@dataclass
class RollAllocation:
    number: int
    width: RollWidth
    product: FoilAssignment
    opened_for: SurfaceKey
    roll_length: float = 25.0
    strips: List[CutStrip] = field(default_factory=list)

    @property
    def used_length(self) -> float:
        return sum(s.length for s in self.strips)

    @property
    def waste_length(self) -> float:
        return max(0.0, self.roll_length - self.used_length)

    @property
    def waste_area(self) -> float:
        return self.waste_length * self.width.meters


# ------------------------------
# Mix result
# ------------------------------

@dataclass(frozen=True)
class SurfaceRollConfig:
    surface: Surface
    strip_widths: Tuple[RollWidth, ...]
    strip_lengths: Tuple[float, ...]
    overlap: float
    waste_area: float
    courses: int = 1
    is_manual_override: bool = False
    layout: Optional[StripLayout] = None
    wall_plan: Optional[WallStripPlan] = None

    @property
    def key(self) -> SurfaceKey:
        return self.surface.key

    @property
    def area(self) -> float:
        return self.surface.area

    @property
    def strip_count(self) -> int:
        return len(self.strip_widths)

    @property
    def roll_width(self) -> Optional[RollWidth]:
        """The surface's width, or None when it mixes both widths."""
        distinct = set(self.strip_widths)
        if len(distinct) == 1:
            return next(iter(distinct))
        return None

    @property
    def strip_mix(self) -> Dict[RollWidth, int]:
        mix: Dict[RollWidth, int] = {}
        for w in self.strip_widths:
            mix[w] = mix.get(w, 0) + 1
        return mix


@dataclass(frozen=True)
class PlanInputs:
    dimensions: PoolDimensions
    subtype: FoilSubtype
    mode: OptimizationMode
    settings: PlannerSettings


@dataclass(frozen=True)
class MixConfiguration:
    inputs: PlanInputs
    surfaces: Tuple[SurfaceRollConfig, ...]
    rolls: Tuple[RollAllocation, ...]
    total_rolls_165: int
    total_rolls_205: int
    total_waste: float
    useful_area: float
    is_optimized: bool = True

    @property
    def waste_percentage(self) -> float:
        total = self.total_waste + self.useful_area
        if total <= 0:
            return 0.0
        return self.total_waste / total * 100.0

    @property
    def roll_area(self) -> float:
        """Total area of the rolls opened."""
        return sum(r.width.meters * r.roll_length for r in self.rolls)

    def surface(self, key: SurfaceKey) -> SurfaceRollConfig:
        for cfg in self.surfaces:
            if cfg.key is key:
                return cfg
        raise KeyError(f"No surface '{key.value}' in this configuration.")

    def to_dict(self) -> dict:
        d = to_plain(self)
        d["waste_percentage"] = self.waste_percentage
        return d


@dataclass(frozen=True)
class WidthComparison:
    only_165: MixConfiguration
    only_205: MixConfiguration
    mixed: MixConfiguration


@dataclass(frozen=True)
class FoilAreaSummary:
    main_area: float
    structural_area: float
    butt_joint_length: float
    reusable_offcuts: Tuple[Tuple[RollWidth, float], ...]


# ------------------------------
# Plain-data conversion
# ------------------------------

def to_plain(obj):
    """Dataclasses, enums and containers -> dicts, lists and scalars."""
    if isinstance(obj, Enum):
        return obj.value
    if is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: to_plain(getattr(obj, f.name)) for f in fields(obj)}
    if isinstance(obj, dict):
        return {to_plain(k): to_plain(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_plain(v) for v in obj]
    return obj

