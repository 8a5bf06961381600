"""
In-memory data store for the bus depot.
Holds the route catalog and user accounts, and saves every change through the file store.
"""
import logging

from errors import AlreadyExists, NotFound, SelfDeleteForbidden
from models import EDITABLE_FIELDS, TEXT_FIELDS, UserAccount
from time_utils import minus_hours

logger = logging.getLogger(__name__)

ARRIVAL_WINDOW_HOURS = 12


def _check_text_field(field):
    if field not in TEXT_FIELDS:
        raise ValueError(f"Unknown route field: {field!r}")


class RecordStore:
    """Owns the route and account collections for the lifetime of the process"""

    def __init__(self, file_store):
        self.file_store = file_store
        self.routes = file_store.load_routes()
        self.accounts = file_store.load_accounts()
        # Set when the last save failed and memory is ahead of disk
        self.routes_unsaved = 'routes' in file_store.unsaved
        self.accounts_unsaved = 'accounts' in file_store.unsaved

    def _save_routes(self):
        self.routes_unsaved = not self.file_store.save_routes(self.routes)

    def _save_accounts(self):
        self.accounts_unsaved = not self.file_store.save_accounts(self.accounts)

    # Route queries
    def list_routes(self):
        """Get all routes in insertion order"""
        return list(self.routes)

    def find_routes_by(self, field, value):
        """Case-insensitive exact match on route number, bus type or destination"""
        _check_text_field(field)
        value = value.lower()
        return [route for route in self.routes if getattr(route, field).lower() == value]

    def sort_routes(self, field):
        """Sorted copy of the routes, stored order is untouched"""
        _check_text_field(field)
        return sorted(self.routes, key=lambda route: getattr(route, field))

    def routes_arriving_within(self, limit, hours=ARRIVAL_WINDOW_HOURS):
        """
        Routes arriving at or before `limit` minus `hours`.

        The threshold wraps across midnight but the comparison is a plain
        time-of-day one: a 23:00 arrival never matches a 01:00 limit.
        """
        threshold = minus_hours(limit, hours)
        return [route for route in self.routes if route.arrival_time <= threshold]

    def _first_route_index(self, route_number):
        for index, route in enumerate(self.routes):
            if route.route_number == route_number:
                return index
        return None

    def get_route(self, route_number):
        """Get the first route with this exact number"""
        index = self._first_route_index(route_number)
        return None if index is None else self.routes[index]

    # Route mutations
    def add_route(self, route):
        """Add a route. Duplicate route numbers are allowed."""
        self.routes.append(route)
        self._save_routes()
        logger.info(f"Created route: {route.route_number}")
        return route

    def update_route(self, route_number, /, **updates):
        """Overwrite the given fields on the first route with this number, None keeps the old value"""
        unknown = set(updates) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update route fields: {', '.join(sorted(unknown))}")

        index = self._first_route_index(route_number)
        if index is None:
            raise NotFound(f"Route №{route_number} not found")

        route = self.routes[index]
        changes = {key: value for key, value in updates.items() if value is not None}
        for key, value in changes.items():
            setattr(route, key, value)
        self._save_routes()
        logger.info(f"Updated route {route_number}: {sorted(changes)}")
        return route

    def delete_route(self, route_number):
        """Delete the first route with this number"""
        index = self._first_route_index(route_number)
        if index is None:
            return False
        del self.routes[index]
        self._save_routes()
        logger.info(f"Deleted route {route_number}")
        return True

    # Account operations
    def get_account(self, username):
        """Get an account by exact username"""
        for account in self.accounts:
            if account.username == username:
                return account
        return None

    def authenticate(self, username, password):
        """Account matching both username and password, or None"""
        account = self.get_account(username)
        if account and account.check_password(password):
            return account
        return None

    def list_accounts(self):
        """Usernames and roles, passwords are never exposed"""
        return [account.to_public_dict() for account in self.accounts]

    def add_account(self, account):
        """Add an account with a unique username"""
        if self.get_account(account.username) is not None:
            raise AlreadyExists(f"User {account.username} already exists")
        self.accounts.append(account)
        self._save_accounts()
        logger.info(f"Created account: {account.username} (admin: {account.is_admin})")
        return account

    def update_account(self, username, password=None, is_admin=None):
        """Replace an account in place, keeping any field passed as None"""
        current = self.get_account(username)
        if current is None:
            raise NotFound(f"User {username} not found")

        updated = UserAccount(
            username,
            current.password if password is None else password,
            current.is_admin if is_admin is None else is_admin
        )
        self.accounts[self.accounts.index(current)] = updated
        self._save_accounts()
        logger.info(f"Updated account {username}")
        return updated

    def delete_account(self, username, acting_username):
        """Delete an account. Nobody can delete their own account."""
        if username == acting_username:
            raise SelfDeleteForbidden("You can not delete yourself")

        account = self.get_account(username)
        if account is None:
            raise NotFound(f"User {username} not found")

        self.accounts.remove(account)
        self._save_accounts()
        logger.info(f"Deleted account {username}")
        return True
