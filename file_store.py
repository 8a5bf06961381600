"""
File-based persistence for the bus depot records.
Routes and accounts each live in their own JSON file, overwritten wholesale on every save.
"""
import json
import logging
import os
from datetime import time

from errors import PersistenceFailure
from models import Route, UserAccount

logger = logging.getLogger(__name__)


def seed_routes():
    """Default routes for a fresh depot"""
    return [Route('1', 'Express', 'Minsk', time(9, 0), time(12, 0))]


def seed_accounts():
    """Default admin and regular user for a fresh depot"""
    return [
        UserAccount('admin', 'admin123', is_admin=True),
        UserAccount('user', 'user123', is_admin=False)
    ]


class FileStore:
    """Loads and saves the route and account collections"""

    def __init__(self, routes_file, accounts_file):
        self.routes_file = routes_file
        self.accounts_file = accounts_file
        # Collections whose last save failed, e.g. a seed that could not be written
        self.unsaved = set()

    def load_routes(self):
        """Load routes, seeding the file when it doesn't exist yet"""
        return self._load(self.routes_file, Route, seed_routes, self.save_routes, 'routes')

    def load_accounts(self):
        """Load accounts, seeding the file when it doesn't exist yet"""
        return self._load(self.accounts_file, UserAccount, seed_accounts, self.save_accounts, 'accounts')

    def save_routes(self, routes):
        """Save all routes, returns False if the write failed"""
        return self._save(self.routes_file, routes, 'routes')

    def save_accounts(self, accounts):
        """Save all accounts, returns False if the write failed"""
        return self._save(self.accounts_file, accounts, 'accounts')

    def _load(self, path, record_class, seed, save, label):
        if not os.path.exists(path):
            records = seed()
            logger.info(f"No {label} data at {path}, seeding {len(records)} {label}")
            save(records)
            return records

        try:
            records = self._decode(path, self._read_json(path), record_class)
        except PersistenceFailure as e:
            logger.error(f"Error loading {label} data: {e}")
            return []

        logger.info(f"Loaded {len(records)} {label} from {path}")
        return records

    def _save(self, path, records, label):
        try:
            self._write_json(path, [record.to_dict() for record in records])
        except PersistenceFailure as e:
            logger.error(f"Error saving {label} data: {e}")
            self.unsaved.add(label)
            return False

        self.unsaved.discard(label)
        logger.info(f"Saved {len(records)} {label} to {path}")
        return True

    @staticmethod
    def _decode(path, data, record_class):
        if not isinstance(data, list):
            raise PersistenceFailure(f"{path}: expected a list, got {type(data).__name__}")
        try:
            return [record_class.from_dict(item) for item in data]
        except (KeyError, TypeError, ValueError) as e:
            raise PersistenceFailure(f"{path}: malformed entry ({e!r})") from e

    @staticmethod
    def _read_json(path):
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise PersistenceFailure(f"{path}: {e}") from e

    @staticmethod
    def _write_json(path, data):
        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceFailure(f"{path}: {e}") from e
