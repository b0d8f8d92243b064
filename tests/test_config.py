import logging

from gridconn.config import CONFIG, DATA_ENV_VAR, DEFAULT_DATA_PATH, resolve_data_location
from gridconn.logger import setup_logging


def test_data_location_precedence(monkeypatch):
    monkeypatch.delenv(DATA_ENV_VAR, raising=False)
    assert resolve_data_location(None) == str(DEFAULT_DATA_PATH)

    monkeypatch.setenv(DATA_ENV_VAR, "https://example.invalid/battery-data.json")
    assert resolve_data_location(None) == "https://example.invalid/battery-data.json"
    assert resolve_data_location("local.json") == "local.json"


def test_visual_constants():
    assert CONFIG.bubble.max_radius == 90
    assert CONFIG.map.min_zoom <= CONFIG.map.zoom <= CONFIG.map.max_zoom
    assert set(CONFIG.palette.status_colors()) == {"under-review", "contracted", "connected"}


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "gridconn.log"
    setup_logging(logging.DEBUG, log_file)
    logging.getLogger("gridconn.test").info("hello")
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert "gridconn.test: hello" in log_file.read_text(encoding="utf-8")
    setup_logging(logging.INFO)
