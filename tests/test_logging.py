"""Tests for logging configuration."""

import json
from pathlib import Path

import pytest
import structlog

from scott.logging import configure_logging, get_logger, hash_player_processor


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


def test_hash_player_processor():
    event = hash_player_processor(None, "info", {"event": "x", "player": "ada"})
    assert "player" not in event
    assert len(event["player_hash"]) == 12


def test_json_logs_to_file(tmp_path: Path):
    log_file = tmp_path / "scott.log"
    configure_logging(log_level="INFO", log_file=log_file, json_logs=True)
    logger = get_logger("scott.test")
    logger.debug("hidden_event")
    logger.info("game_saved", player="ada", turns=3)

    lines = log_file.read_text().splitlines()
    assert len(lines) == 1
    record = json.loads(lines[0])
    assert record["event"] == "game_saved"
    assert record["level"] == "info"
    assert record["turns"] == 3
    assert "player" not in record
    assert "player_hash" in record


def test_player_names_kept_when_not_hashing(tmp_path: Path):
    log_file = tmp_path / "scott.log"
    configure_logging(log_file=log_file, json_logs=True, hash_player_names=False)
    get_logger("scott.test").info("player_created", player="ada")
    assert json.loads(log_file.read_text())["player"] == "ada"
