import json

from stroke_artist.config_manager import ConfigManager
from stroke_artist.models import DEFAULT_PALETTE, DEFAULT_PEN_DIAMETERS, ArtistConfig


def test_missing_file_gives_defaults(tmp_path):
    config = ConfigManager(tmp_path / "config.json").load()

    assert config == ArtistConfig()
    assert config.palette == DEFAULT_PALETTE
    assert config.pen_diameters == DEFAULT_PEN_DIAMETERS


def test_save_then_load(tmp_path):
    manager = ConfigManager(tmp_path / "config.json")
    config = ArtistConfig(
        canvas_width=640,
        canvas_height=480,
        palette=[(0, 0, 0), (255, 0, 0)],
        pen_diameters=[3, 6],
    )

    ok, error = manager.save(config)
    loaded = manager.load()

    assert ok and error is None
    assert loaded.canvas_width == 640
    assert loaded.canvas_height == 480
    assert loaded.palette == [(0, 0, 0), (255, 0, 0)]
    assert loaded.pen_diameters == [3, 6]


def test_partial_file_keeps_other_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"canvas_width": 1024}))

    config = ConfigManager(path).load()

    assert config.canvas_width == 1024
    assert config.canvas_height == ArtistConfig().canvas_height
    assert config.palette == DEFAULT_PALETTE


def test_invalid_file_falls_back_to_defaults(tmp_path, capsys):
    path = tmp_path / "config.json"
    path.write_text("{not json")

    config = ConfigManager(path).load()

    assert config == ArtistConfig()
    assert "Could not load config file" in capsys.readouterr().out


def test_save_reports_errors(tmp_path):
    manager = ConfigManager(tmp_path / "missing-dir" / "config.json")

    ok, error = manager.save(ArtistConfig())

    assert not ok
    assert error
