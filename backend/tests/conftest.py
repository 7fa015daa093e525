import os
import random
import sys
import pytest

# Ensure the backend root (containing the `organic_life` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from organic_life import create_app, db, socketio
from organic_life.services.game.state import GameStore
from organic_life.services.game.timers import ManualClock

# 2026-01-01T00:00:00Z
WALL_START_MS = 1767225600000.0


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    WTF_CSRF_ENABLED = False
    LEADERBOARD_BACKEND = 'memory'
    LEADERBOARD_CAPACITY = 10
    LEADERBOARD_SEED = True
    SESSION_IDLE_TIMEOUT_SEC = 60
    OAUTH_SERVER_URL = 'http://oauth.test'
    APP_ID = 'test-app'
    APP_DOMAIN = 'http://localhost:3000'


@pytest.fixture()
def clock():
    return ManualClock()


@pytest.fixture()
def wall_clock():
    return ManualClock(WALL_START_MS)


@pytest.fixture()
def store(clock):
    return GameStore(clock=clock, session_id='test-session')


@pytest.fixture()
def flask_app(clock, wall_clock):
    application = create_app(TestConfig, clock=clock, wall_clock=wall_clock, rng=random.Random(7))
    with application.app_context():
        # Ensure models are imported so tables are created
        import organic_life.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass
