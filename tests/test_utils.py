"""Tests for configuration and logging helpers."""

import json
import logging
from pathlib import Path

import pytest

from utils import load_config, load_json, save_json, setup_logging

project_root = Path(__file__).parent.parent


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_load_config(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"run_control": {"max_steps": 10}}))
    assert load_config(str(path)) == {"run_control": {"max_steps": 10}}


def test_shipped_config_is_valid():
    config = load_config(str(project_root / "config.json"))
    assert {"visualization", "run_control", "logging", "themes"} <= set(config)


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.json"))


def test_load_config_bad_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{")
    with pytest.raises(json.JSONDecodeError):
        load_config(str(path))


def test_load_config_requires_object(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]")
    with pytest.raises(ValueError):
        load_config(str(path))


def test_save_json_creates_directories(tmp_path):
    path = tmp_path / "a" / "b" / "state.json"
    save_json(str(path), {"theme": "dark"})
    assert load_json(str(path)) == {"theme": "dark"}


def test_setup_logging_with_file(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "network.log"
    setup_logging({"logging": {"level": "debug", "log_file": str(log_file)}})
    root = restore_root_logger
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 2
    logging.info("hello")
    for handler in root.handlers:
        handler.flush()
    assert "hello" in log_file.read_text()


def test_setup_logging_without_file(restore_root_logger):
    setup_logging({"logging": {"log_file": None}})
    root = restore_root_logger
    assert root.level == logging.INFO
    assert [type(h) for h in root.handlers] == [logging.StreamHandler]
