import pytest

from io_utils import (
    load_mode, load_pool_dimensions, load_subtype, parse_bool, parse_enum,
    parse_properties, parse_vertices
)
from models import FoilSubtype, OptimizationMode, PoolShape, StairsShape


def write(tmp_path, name, text):
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    return str(p)


def test_parse_properties_skips_comments(tmp_path):
    path = write(tmp_path, "pool.properties",
                 "# pool\nlength = 10\nwidth=5\n\nnot a pair\ndepth=1,5\n")
    props = parse_properties(path)
    assert props == {"length": "10", "width": "5", "depth": "1,5"}


def test_load_pool_dimensions(tmp_path):
    path = write(tmp_path, "pool.properties", "\n".join([
        "shape=oval",
        "length=8",
        "width=4",
        "depth=1,4",
        "stairs-enabled=tak",
        "stairs-shape=diagonal-45",
        "stairs-step-count=3",
        "stairs-width=full",
        "wading-enabled=yes",
        "wading-depth=0.3",
        "foil-subtype=nadruk",
        "optimization-mode=MIN_ROLLS",
    ]))
    props = parse_properties(path)
    dims = load_pool_dimensions(props)
    assert dims.shape is PoolShape.OVAL
    assert dims.depth == pytest.approx(1.4)
    assert dims.stairs.enabled and dims.stairs.shape is StairsShape.DIAGONAL_45
    assert dims.stairs.step_count == 3
    assert dims.stairs.width is None
    assert dims.wading_pool.enabled
    assert dims.wading_pool.depth == pytest.approx(0.3)
    assert dims.depth_deep is None
    assert load_subtype(props) is FoilSubtype.PRINTED
    assert load_mode(props) is OptimizationMode.MIN_ROLLS


def test_defaults_for_optional_keys():
    props = {"length": "10", "width": "5", "depth": "1.5"}
    dims = load_pool_dimensions(props)
    assert dims.shape is PoolShape.RECTANGULAR
    assert not dims.stairs.enabled
    assert not dims.wading_pool.enabled
    assert load_subtype(props) is FoilSubtype.SOLID
    assert load_mode(props) is OptimizationMode.MIN_WASTE


def test_missing_required_key():
    with pytest.raises(ValueError, match="depth"):
        load_pool_dimensions({"length": "10", "width": "5"})


def test_non_numeric_value():
    with pytest.raises(ValueError, match="width"):
        load_pool_dimensions({"length": "10", "width": "five", "depth": "1.5"})


def test_unknown_enum_value():
    with pytest.raises(ValueError, match="jednokolorowa"):
        parse_enum(FoilSubtype, "gold", "foil-subtype")
    assert parse_enum(FoilSubtype, "structural", "foil-subtype") is FoilSubtype.STRUCTURAL


def test_parse_bool():
    assert parse_bool("Tak")
    assert parse_bool(" true ")
    assert not parse_bool("nie")
    assert not parse_bool(None)


def test_parse_vertices(tmp_path):
    path = write(tmp_path, "vertices.csv", "x,y\n0,0\n8,0\n8,3\n\n0,3\n")
    assert parse_vertices(path) == ((0, 0), (8, 0), (8, 3), (0, 3))


def test_parse_vertices_errors(tmp_path):
    with pytest.raises(ValueError, match="columns"):
        parse_vertices(write(tmp_path, "a.csv", "a,b\n1,2\n"))
    with pytest.raises(ValueError, match="at least 3"):
        parse_vertices(write(tmp_path, "b.csv", "x,y\n0,0\n1,1\n"))
    with pytest.raises(ValueError, match="non-numeric"):
        parse_vertices(write(tmp_path, "c.csv", "x,y\n0,0\n1,q\n2,2\n"))
