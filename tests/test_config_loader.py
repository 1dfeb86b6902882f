"""Tests for options loading (file, camelCase keys, env overrides)."""

import json
from pathlib import Path

import pytest

from wsinvoker.config.loader import camel_to_snake, convert_keys, load_options, save_options, snake_to_camel
from wsinvoker.config.schema import InvokerOptions


def test_defaults_when_file_missing(tmp_path: Path) -> None:
    opts = load_options(tmp_path / "missing.json")
    assert opts.strict_method_names is True
    assert opts.log_raw_frames is False
    assert opts.not_implemented_message == "Method not implemented"


def test_load_camel_case_file(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"logRawFrames": True, "notImplementedMessage": "nope"}), encoding="utf-8")
    opts = load_options(path)
    assert opts.log_raw_frames is True
    assert opts.not_implemented_message == "nope"


def test_invalid_json_raises_value_error_with_path(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{broken", encoding="utf-8")
    with pytest.raises(ValueError) as exc_info:
        load_options(path)
    assert str(path) in str(exc_info.value)


def test_invalid_value_raises_value_error(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"notImplementedMessage": ""}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_options(path)


def test_non_object_file_raises_value_error(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_options(path)


def test_env_override(monkeypatch) -> None:
    monkeypatch.setenv("WSINVOKER_LOG_RAW_FRAMES", "true")
    monkeypatch.setenv("WSINVOKER_LOG_LEVEL", "INFO")
    opts = InvokerOptions()
    assert opts.log_raw_frames is True
    assert opts.log_level == "INFO"


def test_save_then_load(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.json"
    save_options(InvokerOptions(strict_method_names=False), path)
    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw["strictMethodNames"] is False
    assert load_options(path).strict_method_names is False


def test_key_helpers() -> None:
    assert camel_to_snake("logRawFrames") == "log_raw_frames"
    assert snake_to_camel("log_raw_frames") == "logRawFrames"
    assert convert_keys({"a": [{"bC": 1}]}) == {"a": [{"b_c": 1}]}
