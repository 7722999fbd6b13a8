import logging
from pathlib import Path

import pytest

from facility.server import _configure_logging


@pytest.fixture()
def restore_root_handlers():
    root = logging.getLogger()
    saved = list(root.handlers)
    level = root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in saved:
        root.addHandler(h)
    root.setLevel(level)


def test_configure_logging_sets_handlers(test_app, tmp_path, restore_root_handlers):
    _configure_logging(test_app)
    kinds = {type(h).__name__ for h in restore_root_handlers.handlers}
    assert "RotatingFileHandler" in kinds and "StreamHandler" in kinds
    assert (Path(tmp_path) / "app.log").exists()


def test_configure_logging_is_idempotent(test_app, tmp_path, restore_root_handlers):
    _configure_logging(test_app)
    _configure_logging(test_app)
    assert len(restore_root_handlers.handlers) == 2
    logging.getLogger("facility.test").info("layout server ready")
    for h in restore_root_handlers.handlers:
        h.flush()
    assert "layout server ready" in (Path(tmp_path) / "app.log").read_text()


def test_configure_logging_level_applies_to_handlers(test_app, restore_root_handlers):
    _configure_logging(test_app, level=logging.DEBUG)
    assert restore_root_handlers.level == logging.DEBUG
    assert all(h.level == logging.DEBUG for h in restore_root_handlers.handlers)
