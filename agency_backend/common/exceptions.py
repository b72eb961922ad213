# common/exceptions.py

"""
BACK-OFFICE ERROR TAXONOMY

Shared base errors for every service layer in the project.

Rules:
- Services raise these (or subclasses declared in <app>/services/exceptions.py).
- Views are the action boundary: they catch them and answer
  {"success": false, "error": "..."} instead of letting them escape.
- Pure computation (apportionment) never raises; callers validate results.
"""


class BackofficeError(Exception):
    """Base exception for all back-office service failures."""


class DomainValidationError(BackofficeError):
    """Raised when user input breaks a business rule (shown to the user as-is)."""


class AuthorizationError(BackofficeError):
    """Raised when no authenticated identity can be resolved for a mutation."""


class PersistenceUnavailable(BackofficeError):
    """Raised when the database cannot be reached or refuses the operation."""
