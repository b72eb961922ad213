# accounting/services/exceptions.py

"""
ACCOUNTING SERVICE ERRORS

Centralized domain errors for accounting services.

Engine-level errors (AccountResolutionError, JournalEntryCreationError,
IdempotencyError) stay inside the accounting app. The posting adapter
translates every one of them into PostingError, the only error its callers
need to handle.
"""

from common.exceptions import BackofficeError


class AccountingServiceError(BackofficeError):
    """Base exception for all accounting service failures."""


class AccountResolutionError(AccountingServiceError):
    """Raised when an expected account cannot be resolved."""


class JournalEntryCreationError(AccountingServiceError):
    """Raised when a journal entry cannot be created."""


class IdempotencyError(AccountingServiceError):
    """Raised on duplicate or retried accounting events."""


class PostingError(AccountingServiceError):
    """Raised by the posting adapter when a voucher cannot be recorded."""
