"""
- Provide a fresh GameEngine per test (timed and untimed)
- Provide helpers that walk an engine through setup so play tests stay short
- Override FastAPI's get_engine so routes use the test engine, and give a
  client fixture (TestClient(app)) that already has the override applied.
"""
import os
import pytest

from fastapi.testclient import TestClient

# Keep tests independent of whatever a developer has in their local .env
os.environ["NUMBRAINER_TIMING"] = "true"
os.environ["NUMBRAINER_HISTORY_LIMIT"] = "10"

from numbrainer.main import app, get_engine
from numbrainer.session import GameEngine

PLAYER_1_NUMBER = "1234"
PLAYER_2_NUMBER = "5678"


def start_game(engine: GameEngine, turn_limit: int = 3, time_limit: int = 30) -> GameEngine:
    """Configure and set both numbers: player 1 holds 1234, player 2 holds 5678."""
    engine.configure_turn_limit(turn_limit).raise_for_error()
    if engine.timing_enabled:
        engine.configure_time_limit(time_limit).raise_for_error()
    engine.set_player_number(PLAYER_1_NUMBER).raise_for_error()
    engine.set_player_number(PLAYER_2_NUMBER).raise_for_error()
    return engine


@pytest.fixture
def engine() -> GameEngine:
    return GameEngine(timing_enabled=True)


@pytest.fixture
def untimed_engine() -> GameEngine:
    return GameEngine(timing_enabled=False)


@pytest.fixture
def playing_engine(engine) -> GameEngine:
    return start_game(engine)


@pytest.fixture(autouse=True)
def override_dep(engine):
    """Force the app to use our test engine for every request."""
    app.dependency_overrides[get_engine] = lambda: engine
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    # Talks to the FastAPI app in-process; every request hits the test engine.
    return TestClient(app)
