"""Custom exception classes for replication directive management."""

from typing import Optional


class ReplicatorError(Exception):
    """
    Base exception class for all replicator errors.
    """
    pass


class TransportError(ReplicatorError):
    """
    Raised when a host call fails at the network or HTTP level.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DirectiveNotFoundError(TransportError):
    """
    Raised when a requested document does not exist on the host.
    """
    pass


class SerializationError(ReplicatorError):
    """
    Raised when a request or response body cannot be encoded or decoded.
    """
    pass
