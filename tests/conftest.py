from datetime import time

import pytest

from app import app as flask_app
from auth import Session
from data_store import RecordStore
from file_store import FileStore
from models import Route


@pytest.fixture
def data_files(tmp_path):
    """Routes and accounts file paths in a throwaway directory"""
    return str(tmp_path / 'bus_routes.json'), str(tmp_path / 'user_accounts.json')


@pytest.fixture
def file_store(data_files):
    routes_file, accounts_file = data_files
    return FileStore(routes_file, accounts_file)


@pytest.fixture
def store(file_store):
    """Record store on fresh files, so it starts with the seed data"""
    return RecordStore(file_store)


@pytest.fixture
def admin_session(store):
    session = Session(store)
    session.login('admin', 'admin123')
    return session


@pytest.fixture
def user_session(store):
    session = Session(store)
    session.login('user', 'user123')
    return session


@pytest.fixture
def make_route():
    def _make_route(route_number, bus_type='Regular', destination='Minsk',
                    departure=time(8, 0), arrival=time(10, 0)):
        return Route(route_number, bus_type, destination, departure, arrival)
    return _make_route


@pytest.fixture
def app(data_files):
    """Flask app pointed at the throwaway data files, with all CLI commands registered"""
    import main  # noqa: F401

    routes_file, accounts_file = data_files
    original = dict(flask_app.config)
    flask_app.config.update(
        TESTING=True,
        ROUTES_DATA_FILE=routes_file,
        ACCOUNTS_DATA_FILE=accounts_file,
    )
    yield flask_app
    flask_app.config.clear()
    flask_app.config.update(original)


@pytest.fixture
def runner(app):
    return app.test_cli_runner()
