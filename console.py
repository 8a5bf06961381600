"""
Interactive console for the bus depot records.
Registered as the `console` Flask CLI command; also started by main.py and the bus-depot script.
"""
import click
from flask import current_app

from app import app
from auth import Session
from data_store import RecordStore
from errors import DepotError, InvalidTimeFormat
from file_store import FileStore
from models import BUS_TYPE, DESTINATION, ROUTE_NUMBER, Route, UserAccount
from time_utils import format_time, parse_time


FIELD_CHOICES = {
    '1': (ROUTE_NUMBER, 'route number'),
    '2': (BUS_TYPE, 'bus type'),
    '3': (DESTINATION, 'destination point'),
}


def open_store():
    """Build the record store from the app's configured data files"""
    file_store = FileStore(current_app.config['ROUTES_DATA_FILE'], current_app.config['ACCOUNTS_DATA_FILE'])
    return RecordStore(file_store)


def ask(text, hide_input=False, strip=True):
    """Prompt for a line of input, blank allowed"""
    value = click.prompt(text, default='', show_default=False, hide_input=hide_input)
    return value.strip() if strip else value


def show_routes(routes, header, empty_message):
    if not routes:
        click.echo(empty_message)
        return
    click.echo(header)
    for route in routes:
        click.echo(str(route))


def warn_if_unsaved(session):
    if session.store.routes_unsaved or session.store.accounts_unsaved:
        click.echo('Warning: changes could not be saved to disk and will be lost on exit.')


def choose_field(title):
    click.echo(f"\n{title}")
    for key, (_, label) in FIELD_CHOICES.items():
        click.echo(f"{key}. By {label}")
    click.echo('0. Return')
    choice = ask('Your choice')
    if choice == '0':
        return None
    if choice not in FIELD_CHOICES:
        click.echo('Incorrect choice.')
        return None
    return FIELD_CHOICES[choice]


class DepotConsole:
    """Menu loop on top of an authenticated session"""

    def __init__(self, session, window_hours):
        self.session = session
        self.window_hours = window_hours

    def run(self):
        click.echo('=== Welcome to the bus depot database ===')
        self.authenticate()
        self.main_menu()

    def authenticate(self):
        while True:
            # Credentials must match exactly, surrounding spaces included
            username = ask('Enter username', strip=False)
            password = ask('Enter password', hide_input=True, strip=False)
            account = self.session.login(username, password)
            if account is not None:
                click.echo(f"Log in successful. Hello, {account.username}!")
                return
            click.echo('Username or password is incorrect. Try again.')

    def menu_items(self):
        items = [
            ('1', 'Search route', self.search_routes),
            ('2', 'Sort routes', self.sort_routes),
            ('3', f"Show routes, that arrive less than {self.window_hours} hours before time",
             self.routes_by_arrival_limit),
        ]
        if self.session.is_admin:
            items += [
                ('4', 'Add route', self.add_route),
                ('5', 'Edit route', self.edit_route),
                ('6', 'Delete route', self.delete_route),
                ('7', 'Manage accounts', self.manage_accounts),
            ]
        return items

    def main_menu(self):
        while True:
            title = 'Administrator menu' if self.session.is_admin else 'User menu'
            items = self.menu_items()
            click.echo(f"\n=== {title} ===")
            for key, label, _ in items:
                click.echo(f"{key}. {label}")
            click.echo('0. Log out')

            choice = ask('Your choice')
            if choice == '0':
                click.echo('Logging out...')
                self.session.logout()
                return

            actions = {key: action for key, _, action in items}
            if choice not in actions:
                click.echo('Incorrect choice. Try again.')
                continue
            self.dispatch(actions[choice])

    def dispatch(self, action):
        try:
            action()
        except DepotError as e:
            click.echo(str(e))
        warn_if_unsaved(self.session)

    # Read-only actions
    def search_routes(self):
        selected = choose_field('Choose data to search:')
        if selected is None:
            return
        field, label = selected
        value = ask(f"Enter {label}")
        show_routes(self.session.find_routes_by(field, value), 'Results:', 'No results.')

    def sort_routes(self):
        selected = choose_field('Choose data to sort by:')
        if selected is None:
            return
        field, _ = selected
        show_routes(self.session.sort_routes(field), 'Sorted routes:', 'No routes.')

    def routes_by_arrival_limit(self):
        limit = parse_time(ask('Enter time (HH:mm)'))
        routes = self.session.routes_arriving_within(limit, self.window_hours)
        show_routes(routes, 'Results:',
                    f"There are no routes arriving less than {self.window_hours} hours before {format_time(limit)}")

    # Route administration
    def add_route(self):
        click.echo('\n=== Create new route ===')
        route_number = ask('Enter route number')
        bus_type = ask('Enter bus type')
        destination = ask('Enter destination point')
        departure_time = parse_time(ask('Enter departure time (HH:mm)'))
        arrival_time = parse_time(ask('Enter arrival time (HH:mm)'))

        self.session.add_route(Route(route_number, bus_type, destination, departure_time, arrival_time))
        click.echo('Route created successfully.')

    def read_time_or_skip(self, text):
        value = ask(text)
        if not value:
            return None
        try:
            return parse_time(value)
        except InvalidTimeFormat as e:
            click.echo(f"{e}, keeping the old value.")
            return None

    def edit_route(self):
        click.echo('\n=== Route editing ===')
        route_number = ask('Enter route number to edit')
        route = self.session.get_route(route_number)
        if route is None:
            click.echo(f"Route №{route_number} is not found.")
            return

        click.echo('Old route data:')
        click.echo(str(route))

        self.session.update_route(
            route_number,
            bus_type=ask('Enter new bus type (leave blank to skip)') or None,
            destination=ask('Enter new destination point (leave blank to skip)') or None,
            departure_time=self.read_time_or_skip('Enter new departure time (HH:mm) (leave blank to skip)'),
            arrival_time=self.read_time_or_skip('Enter new arrival time (HH:mm) (leave blank to skip)')
        )
        click.echo('Route updated successfully.')

    def delete_route(self):
        click.echo('\n=== Route deleting ===')
        route_number = ask('Enter route number to delete')
        if self.session.delete_route(route_number):
            click.echo('Route deleted successfully.')
        else:
            click.echo('Route with this number is not found.')

    # Account administration
    def manage_accounts(self):
        items = {
            '1': ('Add account', self.add_account),
            '2': ('Edit account', self.edit_account),
            '3': ('Delete account', self.delete_account),
            '4': ('Show all users', self.list_accounts),
        }
        while self.session.is_admin:
            click.echo('\n=== Account manage menu ===')
            for key, (label, _) in items.items():
                click.echo(f"{key}. {label}")
            click.echo('0. Return')

            choice = ask('Your choice')
            if choice == '0':
                return
            if choice not in items:
                click.echo('Incorrect choice.')
                continue
            self.dispatch(items[choice][1])

    def add_account(self):
        click.echo('\n=== Adding user ===')
        username = ask('Enter username')
        if any(account['username'] == username for account in self.session.list_accounts()):
            click.echo('User with this username already exists.')
            return
        password = ask('Enter password', hide_input=True)
        is_admin = ask('Give this user admin rights? (y/n)').lower() == 'y'

        self.session.add_account(UserAccount(username, password, is_admin))
        click.echo('User added successfully.')

    def edit_account(self):
        click.echo('\n=== Editing user ===')
        username = ask('Enter username of user to edit')
        if not any(account['username'] == username for account in self.session.list_accounts()):
            click.echo('User is not found.')
            return

        password = ask('Enter new password (leave blank to skip)', hide_input=True) or None
        role = ask('New admin rights (y/n/skip)').lower()
        is_admin = {'y': True, 'n': False}.get(role)

        self.session.update_account(username, password=password, is_admin=is_admin)
        click.echo('Account updated successfully.')

    def delete_account(self):
        click.echo('\n=== Deleting user ===')
        username = ask('Enter username of user to delete')
        self.session.delete_account(username)
        click.echo('User deleted successfully.')

    def list_accounts(self):
        click.echo('\nUser list:')
        for account in self.session.list_accounts():
            click.echo(f"{account['username']} (Admin: {'Yes' if account['is_admin'] else 'No'})")


def start_console():
    """Run one console session against the configured data files"""
    session = Session(open_store())
    DepotConsole(session, current_app.config['ARRIVAL_WINDOW_HOURS']).run()


@app.cli.command('console')
def console_command():
    """Start the interactive bus depot console."""
    start_console()


def main():
    """Entry point for the bus-depot script"""
    with app.app_context():
        start_console()
