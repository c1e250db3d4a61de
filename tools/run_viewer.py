#!/usr/bin/env python3
# Interactive preview for tilepattern.
# - R: new random seed          T: toggle rotation
# - F: toggle flips             C: toggle clustering
# - S: save SVG (pattern-<seed>.svg)
# - Drop .svg/.png files on the window to add tiles
# - Delete: remove the last added tile; Backspace clears tiles
# - Settings are saved on every change

import argparse
import logging
import os

import pygame

from tilepattern.config import SETTINGS_FILE, load_settings, random_seed_text, save_settings
from tilepattern.mapgen.generator import generate_from_catalog
from tilepattern.render.raster import render_image
from tilepattern.render.svg import render_svg, write_svg
from tilepattern.render.tileset import Tileset, load_directory, load_tile_file
from tilepattern.tiles import InvalidTileError, TileCatalog, add_fallback_tiles

def to_surface(img) -> pygame.Surface:
    return pygame.image.frombuffer(img.tobytes(), img.size, "RGBA")

def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--settings", type=str, default=SETTINGS_FILE, help="JSON settings file")
    ap.add_argument("--tiles", type=str, help="Directory of tiles to load at start")
    ap.add_argument("--scale", type=float, default=0.5, help="Window scale of the rendered pattern")
    args = ap.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    settings = load_settings(args.settings)
    try:
        settings.check()
    except ValueError as e:
        raise SystemExit(f"run_viewer: {args.settings}: {e}")
    catalog = TileCatalog()
    if args.tiles:
        load_directory(catalog, args.tiles)
    if len(catalog) == 0:
        add_fallback_tiles(catalog)

    pygame.init()
    W = max(1, int(settings.cols * settings.tile_size * args.scale))
    H = max(1, int(settings.rows * settings.tile_size * args.scale))
    screen = pygame.display.set_mode((W, H))
    clock = pygame.time.Clock()

    def rebuild():
        placements = generate_from_catalog(settings, catalog)
        img = render_image(placements, catalog, settings.rows, settings.cols,
                           settings.tile_size, Tileset(catalog))
        return placements, pygame.transform.smoothscale(to_surface(img), (W, H))

    def changed():
        save_settings(settings, args.settings)
        return rebuild()

    placements, frame = rebuild()
    running = True
    while running:
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                running = False
            elif ev.type == pygame.DROPFILE:
                try:
                    load_tile_file(catalog, ev.file)
                except InvalidTileError as e:
                    print(f"[viewer] {os.path.basename(ev.file)}: {e}")
                else:
                    placements, frame = rebuild()
            elif ev.type == pygame.KEYDOWN:
                if ev.key == pygame.K_ESCAPE:
                    running = False
                elif ev.key == pygame.K_r:
                    settings.seed = random_seed_text()
                    placements, frame = changed()
                elif ev.key == pygame.K_t:
                    settings = settings.with_options(random_rotation=not settings.options.random_rotation)
                    placements, frame = changed()
                elif ev.key == pygame.K_f:
                    settings = settings.with_options(allow_flips=not settings.options.allow_flips)
                    placements, frame = changed()
                elif ev.key == pygame.K_c:
                    settings = settings.with_options(enable_clustering=not settings.options.enable_clustering)
                    placements, frame = changed()
                elif ev.key == pygame.K_DELETE:
                    gone = catalog.remove_newest()
                    if gone is not None:
                        print(f"[viewer] removed {gone.display_name}")
                        placements, frame = rebuild()
                elif ev.key == pygame.K_BACKSPACE:
                    catalog.clear()
                    placements, frame = rebuild()
                elif ev.key == pygame.K_s:
                    out = f"pattern-{settings.seed or 'export'}.svg"
                    write_svg(out, render_svg(placements, catalog, settings.rows,
                                              settings.cols, settings.tile_size))
                    print(f"[viewer] wrote {out}")

        screen.blit(frame, (0, 0))
        o = settings.options
        pygame.display.set_caption(
            f"tilepattern: {settings.seed}  [{catalog.summary()}]  "
            f"ROT:{o.random_rotation} FLIP:{o.allow_flips} CLUSTER:{o.enable_clustering}"
        )
        pygame.display.flip()
        clock.tick(30)

    pygame.quit()

if __name__ == "__main__":
    main()
