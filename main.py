# poolfoil ver1.0 - main entry
# - Pool and planner settings come from one .properties file
# - Clean error reporting (no traceback)
# - PDF cut sheet only when --pdf is given

import argparse
import logging

from io_utils import (
    load_mode, load_pool_dimensions, load_subtype, parse_enum, parse_properties,
    parse_vertices
)
from mix_planner import compare_widths, foil_area_summary, optimize_mix
from models import FoilSubtype, MixConfiguration, OptimizationMode, PoolShape, WidthComparison
from pdf_export import generate_pdf, surface_rows, totals_rows, wall_rows
from settings import PlannerSettings
from validation import validate_pool


def print_table(rows):
    widths = [max(len(r[i]) for r in rows) for i in range(len(rows[0]))]
    for n, row in enumerate(rows):
        print("  ".join(cell.ljust(w) for cell, w in zip(row, widths)))
        if n == 0:
            print("  ".join("-" * w for w in widths))


def comparison_rows(comparison: WidthComparison):
    rows = [["Option", "Rolls 1.65 m", "Rolls 2.05 m", "Roll area (m²)", "Waste (m²)", "Waste (%)"]]
    for name, cfg in (("1.65 m only", comparison.only_165),
                      ("2.05 m only", comparison.only_205),
                      ("Optimized mix", comparison.mixed)):
        rows.append([
            name,
            f"{cfg.total_rolls_165}",
            f"{cfg.total_rolls_205}",
            f"{cfg.roll_area:.2f}",
            f"{cfg.total_waste:.2f}",
            f"{cfg.waste_percentage:.1f}",
        ])
    return rows


def print_summary(config: MixConfiguration, comparison: WidthComparison):
    print()
    print_table(surface_rows(config))
    print()
    wall = wall_rows(config)
    if len(wall) > 1:
        print_table(wall)
        print()
    print_table(totals_rows(config))

    areas = foil_area_summary(config)
    print(f"\nMain foil cut: {areas.main_area:.2f} m², structural foil cut: "
          f"{areas.structural_area:.2f} m²")
    if areas.butt_joint_length > 0:
        print(f"Butt-joint welding: {areas.butt_joint_length:.2f} m")
    if areas.reusable_offcuts:
        offcuts = ", ".join(f"{w.meters:.2f}x{length:.2f} m" for w, length in areas.reusable_offcuts)
        print(f"Reusable offcuts: {offcuts}")

    print()
    print_table(comparison_rows(comparison))


def main():
    parser = argparse.ArgumentParser(description="poolfoil 1.0 - pool foil roll planner")
    parser.add_argument("pool_properties", help="pool.properties input")
    parser.add_argument("--mode", help="minWaste or minRolls (overrides optimization-mode)")
    parser.add_argument("--subtype", help="jednokolorowa, nadruk or strukturalna (overrides foil-subtype)")
    parser.add_argument("--vertices", help="vertices.csv for shape=custom")
    parser.add_argument("--pdf", help="output PDF path for the roll cut sheet")
    parser.add_argument("-v", "--verbose", action="store_true", help="log optimizer decisions")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # --- LOAD INPUT FILES ---
    try:
        cfg = parse_properties(args.pool_properties)
        vertices = parse_vertices(args.vertices) if args.vertices else ()
        dims = load_pool_dimensions(cfg, vertices)
        settings = PlannerSettings.from_properties(cfg)
        subtype = (parse_enum(FoilSubtype, args.subtype, "--subtype")
                   if args.subtype else load_subtype(cfg))
        mode = (parse_enum(OptimizationMode, args.mode, "--mode")
                if args.mode else load_mode(cfg))
    except (OSError, ValueError) as e:
        print(f"\n[ERROR] Cannot read input: {e}\n")
        return

    if dims.shape is PoolShape.CUSTOM and not dims.vertices:
        print("\n[ERROR] shape=custom needs --vertices with a vertices.csv file.\n")
        return

    # --- VALIDATION ---
    try:
        validate_pool(dims, settings)
    except ValueError as ve:
        print("\n[ERROR] Validation failed:")
        print(str(ve).strip())
        print("No plan created.\n")
        return

    # --- OPTIMIZE ---
    try:
        config = optimize_mix(dims, subtype, mode, settings)
        comparison = compare_widths(dims, subtype, settings)
    except ValueError as e:
        print(f"\n[ERROR] No foil plan possible: {e}\n")
        return

    print_summary(config, comparison)

    # --- PDF ---
    if args.pdf:
        generate_pdf(args.pdf, config, cfg)
        print(f"\nSuccess! PDF saved to {args.pdf}")


if __name__ == "__main__":
    main()
