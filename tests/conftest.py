import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from facility import create_app  # noqa: E402
from facility.layout import EMPTY_ROOM, SECURITY, default_catalog  # noqa: E402
from tests.layout_test_utils import side_door_template  # noqa: E402

_LAYOUT_ENV = (
    "LAYOUT_WIDTH",
    "LAYOUT_HEIGHT",
    "LAYOUT_SCATTERED_ROOMS",
    "LAYOUT_SEED",
    "LAYOUT_ENABLE_METRICS",
    "LAYOUT_CATALOG",
    "LAYOUT_DISABLE_CACHE",
)


@pytest.fixture(autouse=True)
def _isolate_layout_env(monkeypatch):
    """Keep developer LAYOUT_* variables from leaking into test configs."""
    for key in _LAYOUT_ENV:
        monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture(autouse=True)
def _clear_layout_caches():
    from facility.routes import layout_api

    with layout_api._layout_cache_lock:
        layout_api._layout_cache.clear()
    with layout_api._catalog_cache_lock:
        layout_api._catalog_cache.clear()
    yield


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def small_catalog():
    """3x3 rooms with West/East mid-edge doors for both anchor and side rooms."""
    template = side_door_template()
    return {SECURITY: template, EMPTY_ROOM: template}


@pytest.fixture()
def test_app(tmp_path):
    app = create_app({"TESTING": True})
    app.instance_path = str(tmp_path)
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()
