"""
Error taxonomy shared by services, the application controller and the API.
"""
from fastapi import status


class DaydicatedError(Exception):
    """Base error. Carries the HTTP status used when it reaches the API."""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthError(DaydicatedError):
    """Bad credentials or an unusable session."""
    status_code = status.HTTP_401_UNAUTHORIZED


class NotAuthenticatedError(DaydicatedError):
    """A write was attempted with no authenticated actor."""
    status_code = status.HTTP_401_UNAUTHORIZED


class FetchError(DaydicatedError):
    """Reading entries from storage failed."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class WriteError(DaydicatedError):
    """Writing an entry to storage failed."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class EntryValidationError(DaydicatedError):
    """Rating or date supplied for an entry is not acceptable."""
    pass


class PreferenceError(DaydicatedError):
    """Invalid theme mode or accent color."""
    pass
