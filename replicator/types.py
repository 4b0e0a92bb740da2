"""Replicator data type definitions (host settings, per-database outcomes, pass results)."""

from dataclasses import dataclass, field
from typing import List, Literal, Optional

from replicator.exceptions import ReplicatorError
from replicator.registry import ReplicatorRegistry
from replicator.schemas import Database


@dataclass(frozen=True)
class HostConfig:
    """
    Connection settings for one host.
    """
    url: str
    username: Optional[str] = None
    password: Optional[str] = None


@dataclass(frozen=True)
class Created:
    """Directive submitted without a revision."""

    database: str
    directive_id: str
    disposition: Literal["created"] = "created"


@dataclass(frozen=True)
class Updated:
    """Directive resubmitted with the revision currently held by the host."""

    database: str
    directive_id: str
    rev: str
    disposition: Literal["updated"] = "updated"


@dataclass(frozen=True)
class SkippedTriggered:
    """Existing directive is triggered; nothing was submitted."""

    database: str
    directive_id: str
    disposition: Literal["skipped_triggered"] = "skipped_triggered"


DatabaseOutcome = Created | Updated | SkippedTriggered


@dataclass(frozen=True)
class ReconcileResult:
    """
    Outcome of one reconciliation pass.

    processed holds the databases whose directive was submitted, in listing
    order. When error is set, the pass stopped at the first failure and
    nothing after it was attempted.
    """
    processed: List[Database] = field(default_factory=list)
    outcomes: List[DatabaseOutcome] = field(default_factory=list)
    error: Optional[ReplicatorError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def processed_names(self) -> List[str]:
        return [db.name for db in self.processed]

    @property
    def skipped(self) -> List[SkippedTriggered]:
        return [o for o in self.outcomes if isinstance(o, SkippedTriggered)]

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


@dataclass(frozen=True)
class DeletionResult:
    """
    Outcome of a delete-all pass.

    registry is the snapshot loaded before deleting; deleted_ids lists what
    was removed before any failure.
    """
    registry: ReplicatorRegistry
    deleted_ids: List[str] = field(default_factory=list)
    error: Optional[ReplicatorError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error
