"""Image rendering of a solver grid: a 900x900 PNG with thick box lines, resolved digits, small candidate digits for unresolved cells, and highlights for the cells placed by the move trace."""

from __future__ import annotations

# board_renderer.py
from PIL import Image, ImageDraw, ImageFont

from sudoku_engine import domain
from sudoku_engine.grid_state import SIZE, GridState, key_to_pos
from types_sudoku import Move

CELL = 100  # 900/9
W = H = 900

TECHNIQUE_COLORS = {
    "naked_single": (144, 238, 144, 128),
    "hidden_single": (173, 216, 230, 128),
    "fork": (255, 165, 0, 128),
}


def cell_rect(r, c, pad=2):
    # r, c are 1-based
    x0 = (c - 1) * CELL + pad
    y0 = (r - 1) * CELL + pad
    x1 = c * CELL - pad
    y1 = r * CELL - pad
    return (x0, y0, x1, y1)


def load_font(size):
    try:
        return ImageFont.truetype("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf", size)
    except OSError:
        return ImageFont.load_default()


def _centered_text(d: ImageDraw.ImageDraw, cx: float, cy: float, text: str, font, fill) -> None:
    x0, y0, x1, y1 = d.textbbox((0, 0), text, font=font)
    d.text((cx - (x1 - x0) / 2 - x0, cy - (y1 - y0) / 2 - y0), text, fill=fill, font=font)


def draw_grid_lines(d: ImageDraw.ImageDraw) -> None:
    for i in range(SIZE + 1):
        th = 6 if i % 3 == 0 else 2
        pos = min(i * CELL, W - 1)
        d.line([(pos, 0), (pos, H)], fill=(0, 0, 0, 255), width=th)
        d.line([(0, pos), (W, pos)], fill=(0, 0, 0, 255), width=th)


def render_png(state: GridState, out_path: str, moves: list[Move] | None = None, title: str | None = None) -> str:
    """Draw `state` (and the cells touched by `moves`) and save it as `out_path`."""
    im = Image.new("RGBA", (W, H), (255, 255, 255, 255))
    overlay = Image.new("RGBA", im.size, (0, 0, 0, 0))
    d = ImageDraw.Draw(overlay)

    for move in moves or []:
        key = move.get("cell")
        if not key:
            continue
        r, c = key_to_pos(key)
        fill = TECHNIQUE_COLORS.get(move.get("technique", ""), (200, 200, 200, 128))
        d.rectangle(cell_rect(r + 1, c + 1), fill=fill)

    big = load_font(64)
    small = load_font(22)
    for r in range(SIZE):
        for c in range(SIZE):
            mask = state.domain(r, c)
            x0, y0, x1, y1 = cell_rect(r + 1, c + 1)
            if domain.is_resolved(mask):
                _centered_text(d, (x0 + x1) / 2, (y0 + y1) / 2, str(domain.value_of(mask)), big, (0, 0, 0, 255))
                continue
            # candidates in a 3x3 mini-grid, digit d at ((d-1)//3, (d-1)%3)
            for v in domain.digits(mask):
                sub_r, sub_c = divmod(v - 1, 3)
                cx = x0 + (sub_c + 0.5) * (x1 - x0) / 3
                cy = y0 + (sub_r + 0.5) * (y1 - y0) / 3
                _centered_text(d, cx, cy, str(v), small, (90, 90, 90, 255))

    draw_grid_lines(d)

    if title:
        ftitle = load_font(28)
        pad = 10
        tw, th = d.textbbox((0, 0), title, font=ftitle)[2:]
        d.rectangle((pad, pad, pad + tw + 20, pad + th + 20), fill=(0, 0, 0, 160))
        d.text((pad + 10, pad + 10), title, fill=(255, 255, 255, 255), font=ftitle)

    out = Image.alpha_composite(im, overlay).convert("RGB")
    out.save(out_path)
    return out_path
