import os
import sys
import pytest

# Ensure the backend root (containing the `arcade` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from arcade import create_app, db


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Cheap hashes keep registration fast in tests
    BCRYPT_LOG_ROUNDS = 4
    RECENT_GAMES_LIMIT = 10
    CORS_ORIGINS = ['http://localhost:5173']
    LOG_LEVEL = 'DEBUG'


def _make_app(config_class):
    application = create_app(config_class)
    with application.app_context():
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def flask_app():
    yield from _make_app(TestConfig)


@pytest.fixture()
def file_app(tmp_path):
    """App on a file-backed SQLite database, for tests that need one connection per thread."""
    class FileConfig(TestConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'arcade.db'}"

    yield from _make_app(FileConfig)


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def identity(flask_app):
    return flask_app.extensions['arcade'].identity


@pytest.fixture()
def ledger(flask_app):
    return flask_app.extensions['arcade'].ledger


@pytest.fixture()
def aggregator(flask_app):
    return flask_app.extensions['arcade'].aggregator


@pytest.fixture()
def user(identity):
    return identity.register('alice', 'alice@example.com', 'secret')
