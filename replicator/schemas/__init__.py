"""Pydantic schemas for host documents and responses."""

from replicator.schemas.couch import (
    AllDocsResponse,
    AllDocsRow,
    Database,
    Session
)
from replicator.schemas.replication import (
    ReplicationDirective,
    RegisteredReplication
)

__all__ = [
    "AllDocsResponse",
    "AllDocsRow",
    "Database",
    "Session",
    "ReplicationDirective",
    "RegisteredReplication"
]
