# settings.py - poolfoil ver1.0
# Named planning constants, threaded explicitly through the optimizer.

from dataclasses import dataclass, fields, replace
from typing import Dict


# Allowed range for the vertical join overlap between neighbouring wall strips
VERTICAL_OVERLAP_MIN = 0.07
VERTICAL_OVERLAP_MAX = 0.15


@dataclass(frozen=True)
class PlannerSettings:
    # ------------------------------
    # Rolls
    # ------------------------------
    roll_length: float = 25.0
    min_reusable_offcut_length: float = 2.0

    # ------------------------------
    # Overlaps between strips laid side by side
    # ------------------------------
    min_overlap_bottom: float = 0.05
    min_overlap_wall: float = 0.10
    max_strip_overlap: float = 0.10

    # ------------------------------
    # Wall seams
    # ------------------------------
    vertical_join_overlap: float = 0.10
    min_horizontal_overlap: float = 0.05
    max_horizontal_overlap: float = 0.10

    # deepest wall a single course of each width can cover
    narrow_wall_max_depth: float = 1.55
    wide_wall_max_depth: float = 1.95

    max_wall_strips: int = 4

    # ------------------------------
    # Numerics
    # ------------------------------
    tolerance: float = 1e-6

    @classmethod
    def from_properties(cls, props: Dict[str, str]) -> "PlannerSettings":
        """
        Reads overrides from a parsed .properties mapping.
        Keys are the field names with '-' instead of '_'
        (e.g. vertical-join-overlap=0.12). Unknown keys are ignored.
        """
        values = {}
        for f in fields(cls):
            key = f.name.replace("_", "-")
            if key not in props:
                continue
            raw = props[key]
            try:
                values[f.name] = int(raw) if f.type in (int, "int") else float(raw)
            except ValueError:
                raise ValueError(f"Setting '{key}' must be numeric, got '{raw}'.") from None

        settings = replace(cls(), **values)
        settings.check()
        return settings

    def check(self) -> None:
        problems = []
        if not (VERTICAL_OVERLAP_MIN <= self.vertical_join_overlap <= VERTICAL_OVERLAP_MAX):
            problems.append(
                f"vertical-join-overlap must be within {VERTICAL_OVERLAP_MIN:.2f}-"
                f"{VERTICAL_OVERLAP_MAX:.2f} m, got {self.vertical_join_overlap}"
            )
        if self.min_horizontal_overlap > self.max_horizontal_overlap:
            problems.append("min-horizontal-overlap exceeds max-horizontal-overlap")
        if self.min_overlap_bottom > self.max_strip_overlap:
            problems.append("min-overlap-bottom exceeds max-strip-overlap")
        if self.min_overlap_wall > self.max_strip_overlap:
            problems.append("min-overlap-wall exceeds max-strip-overlap")
        if self.roll_length <= 0:
            problems.append("roll-length must be positive")
        if not (1 <= self.max_wall_strips <= 4):
            problems.append("max-wall-strips must be within 1-4")
        if problems:
            raise ValueError("Invalid planner settings:\n" + "\n".join(f" - {p}" for p in problems))


DEFAULT_SETTINGS = PlannerSettings()
