"""
Error kinds raised by the record store, the session and the file store.
All of them are recoverable: the console reports them and carries on.
"""


class DepotError(Exception):
    """Base class for bus depot errors"""


class NotFound(DepotError):
    """Route or account key is absent"""


class AlreadyExists(DepotError):
    """Account username is already taken"""


class SelfDeleteForbidden(DepotError):
    """The logged-in account tried to delete itself"""


class InvalidTimeFormat(DepotError, ValueError):
    """Time of day is not in HH:mm form"""


class PersistenceFailure(DepotError):
    """Data file could not be read or written"""


class LoginRequired(DepotError):
    """Operation needs an authenticated session"""


class AdminRequired(DepotError):
    """Operation needs administrator privileges"""
