import json
import logging
import re

import pytest

from tilepattern.config import (
    PatternOptions, PatternSettings, load_settings, random_seed_text, save_settings,
)

def test_defaults():
    s = PatternSettings()
    assert (s.rows, s.cols, s.tile_size, s.seed) == (5, 8, 200, "pattern-2024")
    assert s.options == PatternOptions(True, False, True)

def test_round_trip(tmp_path):
    path = str(tmp_path / "s.json")
    s = PatternSettings(rows=3, seed="hello").with_options(allow_flips=True)
    save_settings(s, path)
    assert load_settings(path) == s

def test_missing_file_gives_defaults(tmp_path):
    assert load_settings(str(tmp_path / "nope.json")) == PatternSettings()

def test_malformed_file_warns_and_defaults(tmp_path, caplog):
    path = tmp_path / "bad.json"
    path.write_text("{not json")
    with caplog.at_level(logging.WARNING, logger="tilepattern.config"):
        assert load_settings(str(path)) == PatternSettings()
    assert "Failed to load saved settings" in caplog.text

def test_partial_and_unknown_keys(tmp_path):
    path = tmp_path / "p.json"
    path.write_text(json.dumps({"seed": "x", "options": {"allow_flips": True}, "junk": 1}))
    s = load_settings(str(path))
    assert s.seed == "x" and s.rows == 5
    assert s.options == PatternOptions(random_rotation=True, allow_flips=True, enable_clustering=True)

def test_random_seed_text_shape():
    a, b = random_seed_text(), random_seed_text()
    assert re.fullmatch(r"pattern-\d+-[0-9a-z]{9}", a)
    assert a != b

def test_non_boolean_options_are_ignored(tmp_path, caplog):
    path = tmp_path / "o.json"
    path.write_text(json.dumps({"options": {"allow_flips": "false", "random_rotation": 0,
                                            "enable_clustering": False}}))
    with caplog.at_level(logging.WARNING, logger="tilepattern.config"):
        s = load_settings(str(path))
    assert s.options == PatternOptions(random_rotation=True, allow_flips=False, enable_clustering=False)
    assert "allow_flips" in caplog.text and "random_rotation" in caplog.text

def test_check_rejects_degenerate_grids():
    PatternSettings(rows=1, cols=1, tile_size=1).check()
    for bad in (PatternSettings(rows=0), PatternSettings(cols=-2), PatternSettings(tile_size=0)):
        with pytest.raises(ValueError):
            bad.check()

def test_zero_rows_file_loads_but_fails_check(tmp_path):
    path = tmp_path / "z.json"
    path.write_text(json.dumps({"rows": 0}))
    s = load_settings(str(path))
    assert s.rows == 0
    with pytest.raises(ValueError, match="at least 1x1"):
        s.check()
