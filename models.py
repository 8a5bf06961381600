from flask_login import UserMixin

from time_utils import format_time, parse_time

# Route fields that can be searched and sorted
ROUTE_NUMBER = 'route_number'
BUS_TYPE = 'bus_type'
DESTINATION = 'destination'
TEXT_FIELDS = (ROUTE_NUMBER, BUS_TYPE, DESTINATION)

# Route fields that can be changed after creation
EDITABLE_FIELDS = (BUS_TYPE, DESTINATION, 'departure_time', 'arrival_time')


class Route:
    """One scheduled bus service"""

    def __init__(self, route_number, bus_type, destination, departure_time, arrival_time):
        self.route_number = route_number
        self.bus_type = bus_type
        self.destination = destination
        self.departure_time = departure_time
        self.arrival_time = arrival_time

    def to_dict(self):
        return {
            'route_number': self.route_number,
            'bus_type': self.bus_type,
            'destination': self.destination,
            'departure_time': format_time(self.departure_time),
            'arrival_time': format_time(self.arrival_time)
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            route_number=data['route_number'],
            bus_type=data['bus_type'],
            destination=data['destination'],
            departure_time=parse_time(data['departure_time']),
            arrival_time=parse_time(data['arrival_time'])
        )

    def __eq__(self, other):
        if not isinstance(other, Route):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    # Routes are edited in place, so they are not hashable
    __hash__ = None

    def __str__(self):
        return (f"Route №{self.route_number} | Type: {self.bus_type} | "
                f"Destination point: {self.destination} | "
                f"Departure time: {format_time(self.departure_time)} | "
                f"Arrival time: {format_time(self.arrival_time)}")

    def __repr__(self):
        return f'<Route {self.route_number}>'


class UserAccount(UserMixin):
    """Login identity with a role flag. Password is kept in plaintext."""

    def __init__(self, username, password, is_admin=False):
        self.username = username
        self.password = password
        self.is_admin = is_admin

    def get_id(self):
        """Accounts are keyed by username"""
        return self.username

    def check_password(self, password):
        """Check if provided password matches"""
        return self.password == password

    def to_dict(self):
        return {
            'username': self.username,
            'password': self.password,
            'is_admin': self.is_admin
        }

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data['is_admin'], bool):
            raise ValueError(f"is_admin must be true or false, got {data['is_admin']!r}")
        return cls(data['username'], data['password'], data['is_admin'])

    def to_public_dict(self):
        """Listing projection without the password"""
        return {'username': self.username, 'is_admin': self.is_admin}

    def __repr__(self):
        return f'<UserAccount {self.username}>'
