# ================================
# FILE: app/errors.py
# ================================
"""Domain errors raised by the claim services.

Services raise these instead of HTTPException so they can run outside a
request (cron scan, scripts). main.py maps them to JSON responses.
"""


class ClaimsError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ClaimsError):
    """Missing or malformed input. Nothing was written."""
    status_code = 422


class AuthorizationError(ClaimsError):
    status_code = 401


class NotFoundError(ClaimsError):
    """Row does not exist or is not owned by the caller."""
    status_code = 404


class StateError(ClaimsError):
    """Transition not allowed from the current wizard/session state."""
    status_code = 409


class NotificationError(ClaimsError):
    status_code = 502
