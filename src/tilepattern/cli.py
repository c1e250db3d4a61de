#!/usr/bin/env python3
# tilepattern command line: emit a plan, export SVG, or render PNG.
import argparse
import csv
import json
import logging
import sys
from dataclasses import replace

from .config import PatternSettings, load_settings, random_seed_text, save_settings
from .mapgen.generator import generate_from_catalog
from .render.raster import render_image, save_png
from .render.svg import render_svg, write_svg
from .render.tileset import load_directory
from .tiles import TileCatalog, add_fallback_tiles

logger = logging.getLogger("tilepattern")

PLAN_HEADER = ["row", "col", "size", "tile", "rotation", "flipped"]

def settings_from_args(args) -> PatternSettings:
    s = load_settings(args.settings) if args.settings else PatternSettings()
    for name in ("rows", "cols", "tile_size", "seed"):
        value = getattr(args, name)
        if value is not None:
            s = replace(s, **{name: value})
    if args.random_seed:
        s = replace(s, seed=random_seed_text())
    opts = {k: getattr(args, k) for k in ("random_rotation", "allow_flips", "enable_clustering")
            if getattr(args, k) is not None}
    if opts:
        s = s.with_options(**opts)
    if args.settings and args.save_settings:
        save_settings(s, args.settings)
    return s

def build_catalog(args) -> TileCatalog:
    catalog = TileCatalog()
    if args.tiles:
        for directory in args.tiles:
            load_directory(catalog, directory)
    elif not args.no_fallback:
        add_fallback_tiles(catalog)
    if len(catalog) == 0:
        logger.warning("No tiles available; output will be an empty pattern")
    return catalog

def _plan(args):
    settings = settings_from_args(args)
    catalog = build_catalog(args)
    return settings, catalog, generate_from_catalog(settings, catalog)

def write_plan(placements, fmt, out) -> None:
    if fmt == "json":
        json.dump([dict(zip(PLAN_HEADER, p.as_row())) for p in placements], out, indent=2)
        out.write("\n")
        return
    w = csv.writer(out, delimiter="\t", lineterminator="\n")
    w.writerow(PLAN_HEADER)
    for p in placements:
        w.writerow([p.row, p.col, p.size, p.tile_id, p.rotation, int(p.flipped)])

def cmd_plan(args):
    _, _, placements = _plan(args)
    if args.out == "-":
        write_plan(placements, args.format, sys.stdout)
    else:
        with open(args.out, "w", encoding="utf-8", newline="") as f:
            write_plan(placements, args.format, f)
        print(f"Wrote {args.out}")

def cmd_svg(args):
    s, catalog, placements = _plan(args)
    out = args.out or f"pattern-{s.seed or 'export'}.svg"
    write_svg(out, render_svg(placements, catalog, s.rows, s.cols, s.tile_size))
    print(f"Wrote {out}")

def cmd_png(args):
    s, catalog, placements = _plan(args)
    out = args.out or f"pattern-{s.seed or 'export'}.png"
    save_png(out, render_image(placements, catalog, s.rows, s.cols, s.tile_size))
    print(f"Wrote {out}")

def _add_common(p):
    p.add_argument("--rows", type=int)
    p.add_argument("--cols", type=int)
    p.add_argument("--tile", dest="tile_size", type=int, help="Grid unit in pixels")
    p.add_argument("--seed", type=str)
    p.add_argument("--random-seed", action="store_true", help="Use a fresh random seed")
    p.add_argument("--tiles", action="append", metavar="DIR",
                   help="Directory of 200x200 / 400x400 SVG or PNG tiles (repeatable)")
    p.add_argument("--no-fallback", action="store_true",
                   help="Do not use the built-in tiles when --tiles is absent")
    p.add_argument("--settings", type=str, help="JSON settings file to start from")
    p.add_argument("--save-settings", action="store_true", help="Write the effective settings back")
    p.add_argument("--rotation", dest="random_rotation", action=argparse.BooleanOptionalAction)
    p.add_argument("--flips", dest="allow_flips", action=argparse.BooleanOptionalAction)
    p.add_argument("--clustering", dest="enable_clustering", action=argparse.BooleanOptionalAction)
    p.add_argument("-v", "--verbose", action="store_true")

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tilepattern")
    sub = p.add_subparsers(dest="cmd", required=True)
    p1 = sub.add_parser("plan", help="Print the placement plan")
    _add_common(p1)
    p1.add_argument("--format", choices=["tsv", "json"], default="tsv")
    p1.add_argument("--out", type=str, default="-")
    p1.set_defaults(func=cmd_plan)
    p2 = sub.add_parser("svg", help="Export the pattern as SVG")
    _add_common(p2)
    p2.add_argument("--out", type=str)
    p2.set_defaults(func=cmd_svg)
    p3 = sub.add_parser("png", help="Render the pattern as PNG")
    _add_common(p3)
    p3.add_argument("--out", type=str)
    p3.set_defaults(func=cmd_png)
    return p

def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        args.func(args)
    except ValueError as e:
        raise SystemExit(f"tilepattern: {e}")

if __name__ == "__main__":
    main()
