"""Pydantic schemas for documents in the replicator control collection."""

from typing import Any, Dict, Optional, Union
from urllib.parse import quote

from pydantic import BaseModel, Field

from common.constants import REPLICATOR_DB, STATE_TRIGGERED
from replicator.identifier import generate_id

BODY_FIELDS = {"id", "rev", "source", "target", "cancel", "create_target", "continuous", "user_ctx"}


class ReplicationDirective(BaseModel):
    """Desired replication from a source locator to a target locator."""
    id: Optional[str] = Field(default=None, alias="_id")
    rev: Optional[str] = Field(default=None, alias="_rev")
    source: str = ""
    target: str = ""
    cancel: bool = False
    create_target: bool = False
    continuous: bool = False
    user_ctx: Dict[str, Any] = Field(default_factory=dict)

    # source and target were swapped for this invocation; never serialized
    push: bool = Field(default=False, exclude=True)

    model_config = {"populate_by_name": True}

    def has_id(self) -> bool:
        return bool(self.id)

    def with_generated_id(self) -> "ReplicationDirective":
        """Return a copy whose id is derived from its source and target."""
        return self.model_copy(update={"id": generate_id(self.source, self.target)})

    def path(self, replicator_db: str = REPLICATOR_DB) -> str:
        """
        Address of this directive inside the control collection.

        Args:
            replicator_db: Name of the control collection

        Returns:
            "{replicator_db}/{id}", with "?rev={rev}" appended when a revision is set;
            the id is encoded as a single path segment
        """
        doc_id = quote(self.id or "", safe="")
        if not self.rev:
            return f"{replicator_db}/{doc_id}"
        return f"{replicator_db}/{doc_id}?rev={quote(self.rev, safe='')}"

    def to_body(self) -> Dict[str, Any]:
        """JSON body for an upsert; empty id/rev are omitted."""
        return self.model_dump(by_alias=True, exclude_none=True, include=BODY_FIELDS)


class RegisteredReplication(ReplicationDirective):
    """A directive as stored by the host, including engine-assigned fields."""
    owner: Optional[str] = None
    replication_id: Optional[str] = Field(default=None, alias="_replication_id")
    replication_state: Optional[str] = Field(default=None, alias="_replication_state")
    replication_state_time: Optional[Union[str, int]] = Field(default=None, alias="_replication_state_time")

    def is_triggered(self) -> bool:
        return self.replication_state == STATE_TRIGGERED
