# src/tilepattern/render/tileset.py
# Tile asset library: reads SVG/PNG files into the catalog and hands out
# Pillow images of registered tiles at a requested pixel size.
from __future__ import annotations

import logging
import os
import re
import xml.etree.ElementTree as ET
from typing import Dict, List, Tuple

from PIL import Image, ImageDraw, ImageFont

from ..rng import hash_seed
from ..tiles import (
    PATTERN_FRAME, InvalidTileError, TileCatalog, TileDescriptor, footprint_for_dimensions,
)

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"
ET.register_namespace("", SVG_NS)
ET.register_namespace("xlink", XLINK_NS)

def _parse_length(value: str) -> float:
    try:
        return float(value.strip().replace("px", ""))
    except ValueError:
        return 0.0

def svg_dimensions(root: ET.Element) -> Tuple[float, float]:
    """viewBox wins when present; otherwise width/height (optional px suffix)."""
    view_box = root.get("viewBox")
    if view_box:
        parts = re.split(r"[\s,]+", view_box.strip())
        if len(parts) < 4:
            raise InvalidTileError(f"malformed viewBox {view_box!r}")
        try:
            return float(parts[2]), float(parts[3])
        except ValueError:
            raise InvalidTileError(f"malformed viewBox {view_box!r}") from None
    return _parse_length(root.get("width") or "0"), _parse_length(root.get("height") or "0")

def _is_svg_root(root: ET.Element) -> bool:
    return root.tag in ("svg", f"{{{SVG_NS}}}svg")

def load_svg(catalog: TileCatalog, path: str) -> TileDescriptor:
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as e:
        raise InvalidTileError(f"Invalid SVG format ({e})") from e
    if not _is_svg_root(root):
        raise InvalidTileError("Invalid SVG format")
    width, height = svg_dimensions(root)
    size = footprint_for_dimensions(width, height, catalog.unit)
    body = "".join(ET.tostring(child, encoding="unicode") for child in root)
    return catalog.add(size, os.path.basename(path), svg_body=body, source_size=(width, height))

def load_png(catalog: TileCatalog, path: str) -> TileDescriptor:
    try:
        with Image.open(path) as im:
            img = im.convert("RGBA")
    except OSError as e:
        raise InvalidTileError(f"unreadable image ({e})") from e
    size = footprint_for_dimensions(*img.size, unit=catalog.unit)
    return catalog.add(size, os.path.basename(path), image=img)

def load_tile_file(catalog: TileCatalog, path: str) -> TileDescriptor:
    ext = os.path.splitext(path)[1].lower()
    if ext == ".svg":
        return load_svg(catalog, path)
    if ext == ".png":
        return load_png(catalog, path)
    raise InvalidTileError("Not an SVG or PNG file")

def load_directory(catalog: TileCatalog, directory: str) -> Tuple[List[TileDescriptor], List[str]]:
    """
    Load every tile file under directory (sorted, non-recursive).
    Bad files are reported, not fatal: returns (loaded, errors).
    """
    loaded: List[TileDescriptor] = []
    errors: List[str] = []
    for name in sorted(os.listdir(directory)):
        path = os.path.join(directory, name)
        if not os.path.isfile(path):
            continue
        try:
            loaded.append(load_tile_file(catalog, path))
        except InvalidTileError as e:
            logger.warning("Skipping %s: %s", name, e)
            errors.append(f"{name}: {e}")
    logger.info("Loaded %d tile(s) from %s; %s", len(loaded), directory, catalog.summary())
    return loaded, errors

# --- Raster views ---

def hex_rgba(colour: str) -> Tuple[int, int, int, int]:
    h = colour.lstrip("#")
    if len(h) == 3:
        h = "".join(ch * 2 for ch in h)
    return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16), 255)

def _fallback_color(tile: TileDescriptor) -> Tuple[int, int, int, int]:
    v = hash_seed(tile.tile_id)
    return (64 + (v & 0x7F), 64 + ((v >> 8) & 0x7F), 64 + ((v >> 16) & 0x7F), 255)

def draw_pattern(stripes, side: int) -> Image.Image:
    img = Image.new("RGBA", (side, side), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    scale = side / PATTERN_FRAME
    for x, width, fill in stripes:
        x0 = round(x * scale)
        x1 = round((x + width) * scale)
        if x1 > x0:
            draw.rectangle([x0, 0, x1 - 1, side - 1], fill=hex_rgba(fill))
    return img

class Tileset:
    """
    Cached Pillow views of catalog tiles:
      - PNG tiles are resized
      - built-in patterns are drawn
      - SVG tiles (Pillow cannot rasterise them) become a flat colour with the label
    """
    def __init__(self, catalog: TileCatalog):
        self.catalog = catalog
        self._cache: Dict[Tuple[str, int], Image.Image] = {}

    def view(self, tile_id: str, side: int) -> Image.Image:
        key = (tile_id, side)
        if key not in self._cache:
            self._cache[key] = self._build(self.catalog.get(tile_id), side)
        return self._cache[key]

    def _build(self, tile: TileDescriptor, side: int) -> Image.Image:
        if tile.image is not None:
            img = tile.image
            if img.size != (side, side):
                img = img.resize((side, side), Image.LANCZOS)
            return img
        if tile.pattern is not None:
            return draw_pattern(tile.pattern, side)
        img = Image.new("RGBA", (side, side), _fallback_color(tile))
        draw = ImageDraw.Draw(img)
        font = ImageFont.load_default()
        text = tile.display_name
        tw = draw.textlength(text, font=font)
        draw.text(((side - tw) / 2, side / 2 - 4), text, fill=(0, 0, 0, 255), font=font)
        return img
