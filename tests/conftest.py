import os
import sys

import pytest

# Ensure repository root importable early (run.py lives there)
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from geomorph import create_app  # noqa: E402


@pytest.fixture(scope="session")
def test_app():
    app = create_app({"TESTING": True, "GEOMORPH_DEFAULT_GRID_SIZE": 30, "GEOMORPH_DEFAULT_ROOM_COUNT": 8})
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture(autouse=True)
def _quiet_generation_logs(monkeypatch):
    """Keep info-level generation events out of captured output unless a test opts in."""
    monkeypatch.setenv("GEOMORPH_LOG_LEVEL", "warn")
    yield
