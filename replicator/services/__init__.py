"""Service layer for directive reconciliation and deletion."""

from replicator.services.deletion_service import DeletionService
from replicator.services.replication_service import ReplicationService

__all__ = [
    "DeletionService",
    "ReplicationService",
]
