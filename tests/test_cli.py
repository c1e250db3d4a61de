import json
import os

import pytest
from PIL import Image

from tilepattern.cli import main
from tilepattern.config import load_settings

def test_plan_tsv_default_scenario(capsys):
    main(["plan"])
    lines = capsys.readouterr().out.strip().split("\n")
    assert lines[0] == "row\tcol\tsize\ttile\trotation\tflipped"
    assert len(lines) == 37
    assert lines[1] == "0\t0\t1\ttile-6\t90\t0"

def test_plan_json_to_file(tmp_path):
    out = tmp_path / "plan.json"
    main(["plan", "--format", "json", "--out", str(out), "--no-rotation", "--no-clustering",
          "--rows", "2", "--cols", "3"])
    data = json.loads(out.read_text())
    assert len(data) == 6
    assert all(d["rotation"] == 0 and d["size"] == 1 for d in data)

def test_svg_and_png_export(tmp_path):
    svg = tmp_path / "p.svg"
    png = tmp_path / "out" / "p.png"
    main(["svg", "--out", str(svg), "--seed", "abc"])
    main(["png", "--out", str(png), "--seed", "abc", "--tile", "10"])
    assert svg.read_text().startswith("<svg")
    assert Image.open(png).size == (80, 50)

def test_tiles_directory_and_settings(tmp_path):
    tiles = tmp_path / "tiles"
    tiles.mkdir()
    (tiles / "big.svg").write_text('<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 400 400"/>')
    (tiles / "small.svg").write_text('<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 200 200"/>')
    settings = tmp_path / "settings.json"
    out = tmp_path / "plan.json"
    main(["plan", "--tiles", str(tiles), "--settings", str(settings), "--save-settings",
          "--seed", "saved", "--flips", "--format", "json", "--out", str(out)])
    data = json.loads(out.read_text())
    assert {d["tile"] for d in data} <= {"tile-0", "tile-1"}
    s = load_settings(str(settings))
    assert s.seed == "saved" and s.options.allow_flips

def test_empty_catalog_writes_empty_plan(capsys):
    main(["plan", "--no-fallback"])
    assert capsys.readouterr().out.strip() == "row\tcol\tsize\ttile\trotation\tflipped"

def test_bad_grid_exits():
    with pytest.raises(SystemExit):
        main(["plan", "--rows", "0"])
