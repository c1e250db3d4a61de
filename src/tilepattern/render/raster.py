# src/tilepattern/render/raster.py
# Render a placement plan to a Pillow image (preview / PNG export).
from __future__ import annotations

import os
from typing import Optional, Sequence

from PIL import Image, ImageDraw, ImageFont

from ..mapgen.placement import Placement
from ..tiles import TileCatalog
from .svg import BACKGROUND, BORDER, EMPTY_MESSAGE
from .tileset import Tileset, hex_rgba

# Clockwise screen rotations expressed as Pillow transposes (which turn CCW).
_CLOCKWISE = {
    90: Image.Transpose.ROTATE_270,
    180: Image.Transpose.ROTATE_180,
    270: Image.Transpose.ROTATE_90,
}

def oriented(img: Image.Image, placement: Placement) -> Image.Image:
    # Same order as the SVG transform: flip in the tile's own frame, then rotate.
    if placement.flipped:
        img = img.transpose(Image.Transpose.FLIP_LEFT_RIGHT)
    if placement.rotation:
        img = img.transpose(_CLOCKWISE[placement.rotation])
    return img

def render_image(
    placements: Sequence[Placement],
    catalog: TileCatalog,
    rows: int,
    cols: int,
    tile_size: int,
    tileset: Optional[Tileset] = None,
) -> Image.Image:
    tileset = tileset or Tileset(catalog)
    w, h = cols * tile_size, rows * tile_size
    canvas = Image.new("RGBA", (w, h), hex_rgba(BACKGROUND))
    draw = ImageDraw.Draw(canvas)

    if len(catalog) == 0:
        font = ImageFont.load_default()
        tw = draw.textlength(EMPTY_MESSAGE, font=font)
        draw.text(((w - tw) / 2, h / 2 - 4), EMPTY_MESSAGE, fill=(0x99, 0x99, 0x99, 255), font=font)
    else:
        for p in placements:
            x0, y0, side = p.pixel_box(tile_size)
            img = oriented(tileset.view(p.tile_id, side), p)
            canvas.paste(img, (x0, y0, x0 + side, y0 + side), img)

    draw.rectangle([0, 0, w - 1, h - 1], outline=hex_rgba(BORDER), width=1)
    return canvas

def save_png(path: str, image: Image.Image) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    image.save(path)
