"""Exception hierarchy shared by the store, services and API layer."""

from __future__ import annotations


class EchoError(RuntimeError):
    """Base exception for all domain failures raised by Echo Board.

    The API layer maps each subclass onto an HTTP status code.
    """


class InvalidArgumentError(EchoError):
    """Raised for malformed or out-of-range input supplied by the caller."""


class NotFoundError(EchoError):
    """Raised when a referenced post or report does not exist."""


class ForbiddenError(EchoError):
    """Raised on ownership violations and for banned identities."""


class PersistenceError(EchoError):
    """Raised when the snapshot cannot be durably written or locked.

    The message is meant for logs only; clients receive a generic failure.
    """
