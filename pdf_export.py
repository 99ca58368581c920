# pdf_export.py - poolfoil ver1.0
#
# Roll cut sheet for the workshop:
# - Summary page: surfaces table, roll totals, wall strips
# - Roll pages: each 25 m roll drawn as a bar with its strips and unused tail
# - Lucida Sans Unicode when available, Courier for numeric columns

from reportlab.pdfgen import canvas
from reportlab.lib.pagesizes import A4, portrait, landscape
from reportlab.lib.colors import Color, black, white
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from typing import Dict, List, Sequence

from models import MixConfiguration, RollAllocation
from io_utils import parse_bool

import os


# ------------------------------------------------------------
# mm → pt
# ------------------------------------------------------------
def mm_to_pt(mm: float) -> float:
    return mm * 72.0 / 25.4


# ------------------------------------------------------------
# Parse hex RGB like "F00", "FF0000"
# ------------------------------------------------------------
def parse_rgb(hex_str: str) -> Color:
    s = hex_str.strip().lstrip("#")
    if len(s) == 3:
        s = "".join(ch * 2 for ch in s)
    if len(s) != 6:
        return black
    r = int(s[0:2], 16) / 255
    g = int(s[2:4], 16) / 255
    b = int(s[4:6], 16) / 255
    return Color(r, g, b)


# ------------------------------------------------------------
# FONT LOADING (Lucida Sans Unicode)
# ------------------------------------------------------------
# Polish surface and foil names need a Unicode font; Helvetica is the
# fallback. Numeric columns use builtin Courier.

LUCIDA_NAME = "LucidaSansUnicode_poolfoil"
MONO_NAME = "Courier"

FONT_PATHS = [
    "/usr/share/fonts/truetype/lucida/LucidaSansUnicode.ttf",
    "/usr/share/fonts/truetype/LucidaSansUnicode.ttf",
    "/Library/Fonts/LucidaSansUnicode.ttf",
    "C:/Windows/Fonts/l_10646.ttf",
    "C:/Windows/Fonts/LSANS.TTF",
]


def register_fonts() -> str:
    """Registers Lucida if found and returns the text font name to use."""
    global LUCIDA_NAME

    for p in FONT_PATHS:
        if os.path.isfile(p):
            pdfmetrics.registerFont(TTFont(LUCIDA_NAME, p))
            return LUCIDA_NAME

    LUCIDA_NAME = "Helvetica"
    return LUCIDA_NAME


# ------------------------------------------------------------
# TABLE DRAWING ENGINE (FULL-WIDTH, STACKED TABLES)
# ------------------------------------------------------------

def draw_table(
    c: canvas.Canvas,
    x0_pt: float, y0_pt: float,
    col_widths: List[float],
    row_height_pt: float,
    data: List[List[str]],
    font_size: float = 10,
    numeric_cols: Sequence[int] = ()
):
    """
    Grid table, top-left corner at (x0_pt, y0_pt).
    Numeric columns are monospace and right aligned; row 0 is the header.
    """
    for r, row in enumerate(data):
        y_top = y0_pt - r * row_height_pt
        x_left = x0_pt

        for c_idx, w in enumerate(col_widths):
            c.setStrokeColor(black)
            c.setLineWidth(1)
            c.rect(x_left, y_top - row_height_pt, w, row_height_pt, stroke=1, fill=0)

            text = row[c_idx] if row[c_idx] is not None else ""
            numeric = c_idx in numeric_cols and r > 0
            font_name = MONO_NAME if numeric else LUCIDA_NAME
            c.setFont(font_name, font_size)
            c.setFillColor(black)

            ty = y_top - row_height_pt + (row_height_pt * 0.33)
            if numeric:
                tw = pdfmetrics.stringWidth(text, font_name, font_size)
                c.drawString(x_left + w - tw - 3, ty, text)
            else:
                c.drawString(x_left + 3, ty, text)

            x_left += w

    return y0_pt - row_height_pt * len(data)


# ------------------------------------------------------------
# SUMMARY PAGE
# ------------------------------------------------------------

def _width_text(cfg) -> str:
    if cfg.roll_width is not None:
        return f"{cfg.roll_width.meters:.2f}"
    return " + ".join(f"{n}x{w.meters:.2f}" for w, n in sorted(
        cfg.strip_mix.items(), key=lambda kv: -kv[0].meters))


def surface_rows(config: MixConfiguration) -> List[List[str]]:
    rows = [["Surface", "Foil", "Width (m)", "Strips", "Strip length (m)",
             "Area (m²)", "Trim waste (m²)", "Manual"]]
    for cfg in config.surfaces:
        rows.append([
            cfg.surface.label,
            cfg.surface.foil_assignment.value,
            _width_text(cfg),
            f"{cfg.strip_count}" + (f" x{cfg.courses}" if cfg.courses > 1 else ""),
            f"{max(cfg.strip_lengths):.2f}",
            f"{cfg.area:.2f}",
            f"{cfg.waste_area:.2f}",
            "yes" if cfg.is_manual_override else "",
        ])
    return rows


def totals_rows(config: MixConfiguration) -> List[List[str]]:
    return [
        ["Rolls 1.65 m", "Rolls 2.05 m", "Useful (m²)", "Waste (m²)", "Waste (%)"],
        [
            f"{config.total_rolls_165}",
            f"{config.total_rolls_205}",
            f"{config.useful_area:.2f}",
            f"{config.total_waste:.2f}",
            f"{config.waste_percentage:.1f}",
        ],
    ]


def wall_rows(config: MixConfiguration) -> List[List[str]]:
    rows = [["Walls", "Width (m)", "Base (m)", "Overlap (m)", "Cut length (m)", "From remnant"]]
    for cfg in config.surfaces:
        if cfg.wall_plan is None:
            continue
        for s in cfg.wall_plan.strips:
            rows.append([
                s.label,
                f"{s.roll_width.meters:.2f}",
                f"{s.base_length:.2f}",
                f"{s.vertical_overlap:.2f}",
                f"{s.total_length:.2f}",
                "yes" if s.from_remnant else "",
            ])
    return rows


def draw_summary_page(c: canvas.Canvas, page_w_pt: float, page_h_pt: float,
                      margin_mm: float, config: MixConfiguration):
    margin_pt = mm_to_pt(margin_mm)
    y = page_h_pt - margin_pt

    inputs = config.inputs
    dims = inputs.dimensions
    c.setFont(LUCIDA_NAME, 18)
    c.setFillColor(black)
    c.drawString(margin_pt, y - 12, "Foil roll plan")
    c.setFont(LUCIDA_NAME, 10)
    c.drawString(
        margin_pt, y - 28,
        f"{dims.shape.value} {dims.length:.2f} x {dims.width:.2f} x {dims.wall_depth:.2f} m, "
        f"foil: {inputs.subtype.value}, mode: {inputs.mode.value}"
        + ("" if config.is_optimized else " (manual changes)")
    )
    y -= mm_to_pt(16)

    table_width = page_w_pt - 2 * margin_pt
    row_h = mm_to_pt(7)

    rows = surface_rows(config)
    widths = [table_width * f for f in (0.22, 0.11, 0.13, 0.08, 0.13, 0.11, 0.13, 0.09)]
    y = draw_table(c, margin_pt, y, widths, row_h, rows, font_size=9,
                   numeric_cols=[3, 4, 5, 6])
    y -= mm_to_pt(8)

    rows = totals_rows(config)
    y = draw_table(c, margin_pt, y, [table_width / 5] * 5, row_h, rows, font_size=9,
                   numeric_cols=[0, 1, 2, 3, 4])
    y -= mm_to_pt(8)

    rows = wall_rows(config)
    if len(rows) > 1:
        draw_table(c, margin_pt, y, [table_width / 6] * 6, row_h, rows, font_size=9,
                   numeric_cols=[1, 2, 3, 4])


# ------------------------------------------------------------
# ROLL PAGES
# ------------------------------------------------------------

def draw_roll_bar(c: canvas.Canvas, roll: RollAllocation,
                  x0_pt: float, y_top_pt: float, bar_w_pt: float, bar_h_pt: float,
                  roll_color: Color, strip_color: Color, waste_color: Color):
    """One roll as a horizontal bar, 0 m at the left."""
    scale = bar_w_pt / roll.roll_length

    c.setFont(LUCIDA_NAME, 10)
    c.setFillColor(roll_color)
    c.drawString(
        x0_pt, y_top_pt + 4,
        f"Roll {roll.number}: {roll.width.meters:.2f} m, {roll.product.value}, "
        f"opened for {roll.opened_for.label}, used {roll.used_length:.2f} m"
    )

    for cut in roll.strips:
        x = x0_pt + cut.offset * scale
        w = cut.length * scale
        c.setStrokeColor(strip_color)
        c.rect(x, y_top_pt - bar_h_pt, w, bar_h_pt, stroke=1, fill=0)
        label = f"{cut.surface.label} #{cut.index + 1}"
        if cut.course:
            label += f"/{cut.course + 1}"
        label += f" {cut.length:.2f} m" + (" (remnant)" if cut.reused else "")
        font_size = 7
        while font_size > 4 and pdfmetrics.stringWidth(label, LUCIDA_NAME, font_size) > w - 4:
            font_size -= 1
        c.setFont(LUCIDA_NAME, font_size)
        c.setFillColor(strip_color)
        c.drawCentredString(x + w / 2, y_top_pt - bar_h_pt / 2 - font_size * 0.4, label)

    if roll.waste_length > 0:
        x = x0_pt + roll.used_length * scale
        w = roll.waste_length * scale
        c.setFillColor(waste_color)
        c.setStrokeColor(waste_color)
        c.rect(x, y_top_pt - bar_h_pt, w, bar_h_pt, stroke=1, fill=1)
        c.setFillColor(white)
        c.setFont(MONO_NAME, 7)
        c.drawCentredString(x + w / 2, y_top_pt - bar_h_pt / 2 - 3, f"{roll.waste_length:.2f}")

    c.setStrokeColor(roll_color)
    c.rect(x0_pt, y_top_pt - bar_h_pt, bar_w_pt, bar_h_pt, stroke=1, fill=0)


def draw_roll_pages(c: canvas.Canvas, page_w_pt: float, page_h_pt: float,
                    margin_mm: float, rolls: Sequence[RollAllocation],
                    roll_color: Color, strip_color: Color, waste_color: Color):
    margin_pt = mm_to_pt(margin_mm)
    bar_h = mm_to_pt(14)
    slot_h = bar_h + mm_to_pt(12)
    per_page = max(1, int((page_h_pt - 2 * margin_pt) // slot_h))
    bar_w = page_w_pt - 2 * margin_pt

    for start in range(0, len(rolls), per_page):
        y = page_h_pt - margin_pt - mm_to_pt(8)
        for roll in rolls[start:start + per_page]:
            draw_roll_bar(c, roll, margin_pt, y, bar_w, bar_h,
                          roll_color, strip_color, waste_color)
            y -= slot_h
        c.showPage()


# ------------------------------------------------------------
# FINAL PDF GENERATOR
# ------------------------------------------------------------

def generate_pdf(output_path: str, config: MixConfiguration, cfg: Dict[str, str]):
    """
    Generates the complete PDF:
      - optional summary page
      - optional roll pages
    """
    register_fonts()

    gen_summary = parse_bool(cfg.get("generate-summary", "true"))
    gen_rolls = parse_bool(cfg.get("generate-rolls", "true"))

    roll_color = parse_rgb(cfg.get("roll-color", "000"))
    strip_color = parse_rgb(cfg.get("strip-color", "1A4F8B"))
    waste_color = parse_rgb(cfg.get("waste-color", "C33"))

    margin_mm = float(cfg.get("margin", "10"))

    orientation = (cfg.get("orientation", "h") or "h").lower()
    pagesize = landscape(A4) if orientation == "h" else portrait(A4)
    page_w_pt, page_h_pt = pagesize

    c = canvas.Canvas(output_path, pagesize=pagesize)

    if gen_summary:
        draw_summary_page(c, page_w_pt, page_h_pt, margin_mm, config)
        c.showPage()

    if gen_rolls:
        draw_roll_pages(c, page_w_pt, page_h_pt, margin_mm, config.rolls,
                        roll_color, strip_color, waste_color)

    c.save()
