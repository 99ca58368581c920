# io_utils.py - poolfoil ver1.0
# Reading pool .properties files and custom-shape vertex CSVs.

import csv
from typing import Dict, List, Optional, Tuple, Type, TypeVar

from models import (
    FoilSubtype, OptimizationMode, PoolDimensions, PoolShape,
    StairsConfig, StairsShape, WadingPoolConfig
)

E = TypeVar("E")


# ------------------------------
# Boolean parser
# ------------------------------

def parse_bool(val: str) -> bool:
    if val is None:
        return False
    v = val.strip().lower()
    return v in ("1", "true", "yes", "tak", "y")


# ------------------------------
# Config parser (strict one key per line)
# ------------------------------

def parse_properties(path: str) -> Dict[str, str]:
    """
    Conservative parser:
    - One key=value per line
    - Lines without '=' are ignored
    - '#' at start of line = comment
    """
    props: Dict[str, str] = {}
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue
            key, val = line.split("=", 1)
            props[key.strip()] = val.strip()
    return props


# ------------------------------
# Typed getters
# ------------------------------

def get_float(props: Dict[str, str], key: str, default: Optional[float] = None) -> Optional[float]:
    raw = props.get(key, "").strip()
    if not raw:
        if default is None and key in REQUIRED_KEYS:
            raise ValueError(f"Missing required property '{key}'.")
        return default
    try:
        return float(raw.replace(",", "."))
    except ValueError:
        raise ValueError(f"Property '{key}' must be a number, got '{raw}'.") from None


def get_int(props: Dict[str, str], key: str, default: int) -> int:
    raw = props.get(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Property '{key}' must be an integer, got '{raw}'.") from None


def parse_enum(enum_cls: Type[E], raw: str, key: str) -> E:
    """Accepts either the value ('minWaste') or the member name ('MIN_WASTE')."""
    v = raw.strip()
    for member in enum_cls:
        if v == member.value or v.upper().replace("-", "_") == member.name:
            return member
    allowed = ", ".join(str(m.value) for m in enum_cls)
    raise ValueError(f"Property '{key}' must be one of: {allowed}; got '{raw}'.")


REQUIRED_KEYS = {"length", "width", "depth"}


# ------------------------------
# Pool dimensions
# ------------------------------

def load_pool_dimensions(props: Dict[str, str],
                         vertices: Tuple[Tuple[float, float], ...] = ()) -> PoolDimensions:
    shape = parse_enum(PoolShape, props.get("shape", "rectangular"), "shape")

    stairs = StairsConfig(
        enabled=parse_bool(props.get("stairs-enabled", "false")),
        shape=parse_enum(StairsShape, props.get("stairs-shape", "rectangular"), "stairs-shape"),
        step_count=get_int(props, "stairs-step-count", 4),
        step_depth=get_float(props, "stairs-step-depth", 0.30),
        step_height=get_float(props, "stairs-step-height", 0.20),
        width=None if props.get("stairs-width", "").strip().lower() == "full"
        else get_float(props, "stairs-width", 1.5),
    )

    wading = WadingPoolConfig(
        enabled=parse_bool(props.get("wading-enabled", "false")),
        width=get_float(props, "wading-width", 2.0),
        length=get_float(props, "wading-length", 1.5),
        depth=get_float(props, "wading-depth", 0.4),
        has_dividing_wall=parse_bool(props.get("wading-dividing-wall", "true")),
        dividing_wall_offset=get_float(props, "wading-dividing-wall-offset", 0.0),
    )

    return PoolDimensions(
        shape=shape,
        length=get_float(props, "length"),
        width=get_float(props, "width"),
        depth=get_float(props, "depth"),
        depth_deep=get_float(props, "depth-deep", None),
        stairs=stairs,
        wading_pool=wading,
        vertices=tuple(vertices),
    )


def load_subtype(props: Dict[str, str]) -> FoilSubtype:
    return parse_enum(FoilSubtype, props.get("foil-subtype", FoilSubtype.SOLID.value), "foil-subtype")


def load_mode(props: Dict[str, str]) -> OptimizationMode:
    return parse_enum(OptimizationMode,
                      props.get("optimization-mode", OptimizationMode.MIN_WASTE.value),
                      "optimization-mode")


# ------------------------------
# Vertices CSV (custom shapes)
# ------------------------------

def parse_vertices(path: str) -> Tuple[Tuple[float, float], ...]:
    points: List[Tuple[float, float]] = []
    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        if not {"x", "y"}.issubset(set(reader.fieldnames or [])):
            raise ValueError("vertices.csv missing required columns 'x' and 'y'")

        for row in reader:
            if not (row["x"] or "").strip():
                continue
            try:
                points.append((float(row["x"]), float(row["y"])))
            except ValueError:
                raise ValueError(f"vertices.csv has a non-numeric row: {row}") from None

    if len(points) < 3:
        raise ValueError("vertices.csv must list at least 3 vertices.")
    return tuple(points)
