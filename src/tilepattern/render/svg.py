# src/tilepattern/render/svg.py
# Serialize a placement plan as a self-contained SVG document.
from __future__ import annotations

import base64
import io
from typing import List, Sequence
from xml.sax.saxutils import escape, quoteattr

from ..mapgen.placement import Placement
from ..tiles import PATTERN_FRAME, TileCatalog, TileDescriptor
from .tileset import SVG_NS, XLINK_NS

BACKGROUND = "#1E1E1E"
BORDER = "#D3D3D3"
BORDER_WIDTH = 2
EMPTY_MESSAGE = "Upload tiles to generate a pattern"

def _fmt(v: float) -> str:
    return f"{v:g}"

def _symbol(tile: TileDescriptor, unit: int) -> str:
    sid = quoteattr(tile.tile_id)
    if tile.pattern is not None:
        rects = "".join(
            f'<rect x="{x}" y="0" width="{w}" height="{PATTERN_FRAME}" fill="{fill}"/>'
            for x, w, fill in tile.pattern
        )
        return f'<symbol id={sid} viewBox="0 0 {PATTERN_FRAME} {PATTERN_FRAME}">{rects}</symbol>'

    extent = unit * tile.size
    if tile.image is not None:
        buf = io.BytesIO()
        tile.image.save(buf, format="PNG")
        data = base64.b64encode(buf.getvalue()).decode("ascii")
        return (f'<symbol id={sid} viewBox="0 0 {extent} {extent}">'
                f'<image href="data:image/png;base64,{data}" x="0" y="0" '
                f'width="{extent}" height="{extent}"/></symbol>')

    # SVG source: normalise the viewBox and scale the content to fit it.
    src_w, src_h = tile.source_size
    sx = extent / src_w if src_w > 0 else 1
    sy = extent / src_h if src_h > 0 else 1
    group = "<g>" if (sx == 1 and sy == 1) else f'<g transform="scale({_fmt(sx)}, {_fmt(sy)})">'
    return f'<symbol id={sid} viewBox="0 0 {extent} {extent}">{group}{tile.svg_body or ""}</g></symbol>'

def render_svg(
    placements: Sequence[Placement],
    catalog: TileCatalog,
    rows: int,
    cols: int,
    tile_size: int,
) -> str:
    w, h = cols * tile_size, rows * tile_size
    parts: List[str] = [
        f'<svg xmlns="{SVG_NS}" xmlns:xlink="{XLINK_NS}" '
        f'width="{w}" height="{h}" viewBox="0 0 {w} {h}">',
        f'<rect id="background-rect" x="0" y="0" width="{w}" height="{h}" fill="{BACKGROUND}"/>',
    ]
    border = (f'<rect id="border-rect" x="0" y="0" width="{w}" height="{h}" fill="none" '
              f'stroke="{BORDER}" stroke-width="{BORDER_WIDTH}"/>')

    if len(catalog) == 0:
        parts.append(
            f'<g id="empty-state-message"><text x="{_fmt(w / 2)}" y="{_fmt(h / 2)}" '
            'text-anchor="middle" dominant-baseline="middle" fill="#999" '
            'font-family="system-ui, -apple-system, sans-serif" font-size="32">'
            f"{escape(EMPTY_MESSAGE)}</text></g>"
        )
        parts.append(border)
        parts.append("</svg>")
        return "\n".join(parts)

    parts.append("<defs>")
    parts.extend(_symbol(tile, catalog.unit) for tile in catalog)
    parts.append("</defs>")

    for p in placements:
        side = p.size * tile_size
        ref = quoteattr("#" + p.tile_id)
        parts.append(
            f'<g data-cell="{p.row}-{p.col}" transform="{p.svg_transform(tile_size)}">'
            f'<use href={ref} xlink:href={ref} x="0" y="0" width="{side}" height="{side}"/></g>'
        )
    parts.append(border)
    parts.append("</svg>")
    return "\n".join(parts)

def write_svg(path: str, svg_text: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(svg_text)
