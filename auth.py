"""
Session and authorization for the bus depot console.
A session starts anonymous, is bound to one account on login, and gates store operations by role.
"""
import logging
from functools import wraps

from flask_login import AnonymousUserMixin

from data_store import ARRIVAL_WINDOW_HOURS
from errors import AdminRequired, LoginRequired

logger = logging.getLogger(__name__)


def login_required(f):
    """Decorator to require an authenticated session"""
    @wraps(f)
    def decorated_function(self, *args, **kwargs):
        if not self.is_authenticated:
            raise LoginRequired('Please log in first.')
        return f(self, *args, **kwargs)
    return decorated_function


def admin_required(f):
    """Decorator to require admin privileges"""
    @wraps(f)
    def decorated_function(self, *args, **kwargs):
        if not self.is_authenticated:
            raise LoginRequired('Please log in first.')
        if not self.is_admin:
            logger.warning(f"Access denied for user {self.username} to {f.__name__}")
            raise AdminRequired('Access denied. Admin privileges required.')
        return f(self, *args, **kwargs)
    return decorated_function


class Session:
    """Binds the console to one account and exposes the store operations it may use"""

    def __init__(self, store):
        self.store = store
        # Only the key is held; the account itself is always read from the store
        self.username = None

    @property
    def current_user(self):
        if self.username is not None:
            account = self.store.get_account(self.username)
            if account is not None:
                return account
        return AnonymousUserMixin()

    @property
    def is_authenticated(self):
        return self.current_user.is_authenticated

    @property
    def is_admin(self):
        return getattr(self.current_user, 'is_admin', False)

    def login(self, username, password):
        """Bind the session to the matching account, returns None on bad credentials"""
        account = self.store.authenticate(username, password)
        if account is None:
            logger.info(f"Failed login for {username!r}")
            return None
        self.username = account.username
        logger.info(f"User {account.username} logged in (admin: {account.is_admin})")
        return account

    def logout(self):
        """Return to the unauthenticated state"""
        if self.username is not None:
            logger.info(f"User {self.username} logged out")
        self.username = None

    # Read-only operations for every authenticated user
    @login_required
    def list_routes(self):
        return self.store.list_routes()

    @login_required
    def get_route(self, route_number):
        return self.store.get_route(route_number)

    @login_required
    def find_routes_by(self, field, value):
        return self.store.find_routes_by(field, value)

    @login_required
    def sort_routes(self, field):
        return self.store.sort_routes(field)

    @login_required
    def routes_arriving_within(self, limit, hours=ARRIVAL_WINDOW_HOURS):
        return self.store.routes_arriving_within(limit, hours)

    # Admin-only operations
    @admin_required
    def add_route(self, route):
        return self.store.add_route(route)

    @admin_required
    def update_route(self, route_number, /, **updates):
        return self.store.update_route(route_number, **updates)

    @admin_required
    def delete_route(self, route_number):
        return self.store.delete_route(route_number)

    @admin_required
    def list_accounts(self):
        return self.store.list_accounts()

    @admin_required
    def add_account(self, account):
        return self.store.add_account(account)

    @admin_required
    def update_account(self, username, password=None, is_admin=None):
        return self.store.update_account(username, password=password, is_admin=is_admin)

    @admin_required
    def delete_account(self, username):
        return self.store.delete_account(username, acting_username=self.username)
