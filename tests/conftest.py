"""
Shared pytest fixtures for test suite.
"""

import io
import json
import logging

import pytest
from rich.console import Console

from patterncraft import config_loader, logging_config
from patterncraft.cli import PATTERNCRAFT_THEME


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Every test starts with an empty bundle cache and no config env overrides."""
    monkeypatch.delenv(config_loader.CONFIG_DIR_ENV, raising=False)
    monkeypatch.delenv(config_loader.STRICT_ENV, raising=False)
    config_loader.clear_config_cache()
    yield
    config_loader.clear_config_cache()


@pytest.fixture
def isolated_logging():
    """
    Snapshot root and audit logger handlers and restore them afterwards.

    setup_logging() replaces every root handler, so tests that call it must
    not leak file handlers into later tests.
    """
    root = logging.getLogger()
    audit = logging.getLogger(logging_config.AUDIT_LOGGER)
    saved = (list(root.handlers), root.level, list(audit.handlers), audit.propagate)
    yield
    for logger, handlers in ((root, saved[0]), (audit, saved[2])):
        for handler in list(logger.handlers):
            if handler not in handlers:
                logger.removeHandler(handler)
                handler.close()
        for handler in handlers:
            if handler not in logger.handlers:
                logger.addHandler(handler)
    root.setLevel(saved[1])
    audit.propagate = saved[3]


@pytest.fixture
def runtime_config():
    return {
        "discounts": {"rates": {"vip": 0.18, "platinum": 0.25}},
        "payments": {"small_payment_limit": 50, "large_payment_limit": 5000},
        "settings": {"AppName": "Test App", "MaxConnections": 5},
        "notifications": {
            "channels": [{"type": "email", "target": "ops@example.com"}],
            "urgent": True,
        },
    }


@pytest.fixture
def config_dir(tmp_path, runtime_config):
    """Creates an isolated config directory holding runtime_config.json."""
    path = tmp_path / "config"
    path.mkdir()
    (path / config_loader.RUNTIME_CONFIG_FILE).write_text(
        json.dumps(runtime_config), encoding="utf-8"
    )
    return path


@pytest.fixture
def console():
    """Returns a rich Console that records plain text into a buffer."""
    return Console(file=io.StringIO(), theme=PATTERNCRAFT_THEME, width=120, color_system=None)
