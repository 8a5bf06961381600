import json
import logging
import os
from datetime import time

from file_store import FileStore
from models import Route, UserAccount


def test_fresh_storage_seeds_routes(file_store):
    routes = file_store.load_routes()

    assert routes == [Route('1', 'Express', 'Minsk', time(9, 0), time(12, 0))]
    assert os.path.exists(file_store.routes_file)
    assert file_store.load_routes() == routes


def test_fresh_storage_seeds_accounts(file_store):
    accounts = file_store.load_accounts()

    assert [(a.username, a.password, a.is_admin) for a in accounts] == [
        ('admin', 'admin123', True),
        ('user', 'user123', False),
    ]
    assert os.path.exists(file_store.accounts_file)


def test_routes_round_trip(file_store):
    routes = [
        Route('1', 'Express', 'Minsk', time(0, 0), time(23, 59)),
        Route('1', 'Night', 'Brest', time(23, 59), time(0, 0)),
        Route('12A', 'Интерcity', 'Гродно', time(6, 7), time(18, 30)),
    ]
    assert file_store.save_routes(routes) is True
    assert file_store.load_routes() == routes


def test_empty_routes_file_loads_empty(file_store):
    file_store.save_routes([])
    assert file_store.load_routes() == []


def test_accounts_round_trip(file_store):
    accounts = [UserAccount('boss', 'pw', True), UserAccount('driver', '', False)]
    file_store.save_accounts(accounts)

    loaded = file_store.load_accounts()
    assert [a.to_dict() for a in loaded] == [a.to_dict() for a in accounts]


def test_routes_file_format(file_store):
    file_store.save_routes([Route('3', 'City', 'Pinsk', time(7, 5), time(8, 0))])
    with open(file_store.routes_file, encoding='utf-8') as f:
        assert json.load(f) == [{
            'route_number': '3',
            'bus_type': 'City',
            'destination': 'Pinsk',
            'departure_time': '07:05',
            'arrival_time': '08:00',
        }]


def write(path, content):
    with open(path, 'w', encoding='utf-8') as f:
        f.write(content)


def test_corrupt_routes_file_falls_back_to_empty(file_store, caplog):
    write(file_store.routes_file, '{not json')

    with caplog.at_level(logging.ERROR, logger='file_store'):
        assert file_store.load_routes() == []

    assert 'Error loading routes data' in caplog.text
    # Corrupt files are left alone, not reseeded
    with open(file_store.routes_file, encoding='utf-8') as f:
        assert f.read() == '{not json'


def test_malformed_route_entries_fall_back_to_empty(file_store, caplog):
    write(file_store.routes_file, json.dumps([{'route_number': '1', 'bus_type': 'Express'}]))
    assert file_store.load_routes() == []

    write(file_store.routes_file, json.dumps([{
        'route_number': '1', 'bus_type': 'Express', 'destination': 'Minsk',
        'departure_time': '9:00', 'arrival_time': '12:00',
    }]))
    assert file_store.load_routes() == []

    write(file_store.routes_file, json.dumps({'routes': []}))
    assert file_store.load_routes() == []


def test_corrupt_accounts_file_falls_back_to_empty(file_store, caplog):
    write(file_store.accounts_file, '[1, 2, 3]')

    with caplog.at_level(logging.ERROR, logger='file_store'):
        assert file_store.load_accounts() == []

    assert 'Error loading accounts data' in caplog.text


def test_failed_save_is_logged_not_raised(tmp_path, caplog):
    missing_dir = tmp_path / 'missing'
    store = FileStore(str(missing_dir / 'routes.json'), str(missing_dir / 'accounts.json'))

    with caplog.at_level(logging.ERROR, logger='file_store'):
        assert store.save_routes([Route('1', 'Express', 'Minsk', time(9, 0), time(12, 0))]) is False
        assert store.save_accounts([UserAccount('admin', 'admin123', True)]) is False

    assert 'Error saving routes data' in caplog.text
    assert 'Error saving accounts data' in caplog.text


def test_seed_is_returned_even_if_it_cannot_be_saved(tmp_path):
    missing_dir = tmp_path / 'missing'
    store = FileStore(str(missing_dir / 'routes.json'), str(missing_dir / 'accounts.json'))

    assert [r.route_number for r in store.load_routes()] == ['1']
    assert [a.username for a in store.load_accounts()] == ['admin', 'user']


def test_non_boolean_admin_flag_is_treated_as_corrupt(file_store, caplog):
    write(file_store.accounts_file, json.dumps([
        {'username': 'admin', 'password': 'admin123', 'is_admin': 'false'},
    ]))

    with caplog.at_level(logging.ERROR, logger='file_store'):
        assert file_store.load_accounts() == []

    assert 'Error loading accounts data' in caplog.text


def test_failed_saves_are_tracked_until_next_success(tmp_path, file_store):
    missing_dir = tmp_path / 'missing'
    store = FileStore(str(missing_dir / 'routes.json'), str(missing_dir / 'accounts.json'))
    store.load_routes()
    store.load_accounts()
    assert store.unsaved == {'routes', 'accounts'}

    os.mkdir(missing_dir)
    assert store.save_routes([]) is True
    assert store.unsaved == {'accounts'}

    file_store.load_routes()
    assert file_store.unsaved == set()
