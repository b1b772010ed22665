import json
import logging
from typing import Optional, get_type_hints

import numpy as np

from mandelview.settings import Settings, load_settings


def test_packaged_settings_match_defaults():
    assert load_settings() == Settings()


def test_min_scale_defaults_to_machine_epsilon():
    assert Settings().min_scale == float(np.finfo(np.float64).eps)


def test_missing_file_falls_back_to_defaults(tmp_path, caplog):
    with caplog.at_level(logging.WARNING, logger="mandelview.settings"):
        settings = load_settings(str(tmp_path / "nope.json"))
    assert settings == Settings()
    assert "Could not load" in caplog.text


def test_broken_file_falls_back_to_defaults(tmp_path, caplog):
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    with caplog.at_level(logging.WARNING, logger="mandelview.settings"):
        assert load_settings(str(path)) == Settings()
    assert "Could not load" in caplog.text


def test_directory_path_falls_back_to_defaults(tmp_path, caplog):
    with caplog.at_level(logging.WARNING, logger="mandelview.settings"):
        assert load_settings(str(tmp_path)) == Settings()
    assert "Could not load" in caplog.text


def test_undecodable_file_falls_back_to_defaults(tmp_path, caplog):
    path = tmp_path / "settings.json"
    path.write_bytes(b"\xff\xfe{}")
    with caplog.at_level(logging.WARNING, logger="mandelview.settings"):
        assert load_settings(str(path)) == Settings()
    assert "Could not load" in caplog.text


def test_threads_is_optional_int():
    assert get_type_hints(Settings)["threads"] == Optional[int]


def test_partial_file_overrides_only_its_keys(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"window_width": 800, "colormap": "Hot", "threads": None}))
    settings = load_settings(str(path))
    assert settings.window_width == 800
    assert settings.colormap == "Hot"
    assert settings.threads is None
    assert settings.window_height == Settings().window_height


def test_unknown_keys_are_ignored(tmp_path, caplog):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"zoom_speed": 9, "scale": 0.01}))
    with caplog.at_level(logging.WARNING, logger="mandelview.settings"):
        settings = load_settings(str(path))
    assert settings.scale == 0.01
    assert "zoom_speed" in caplog.text


def test_non_object_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("[1, 2, 3]")
    assert load_settings(str(path)) == Settings()
