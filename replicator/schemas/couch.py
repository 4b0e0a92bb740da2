"""Pydantic schemas for host responses outside the control collection documents."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from common.constants import REPLICATOR_DB


class AllDocsRow(BaseModel):
    """One row of an _all_docs listing; doc is decoded by the caller."""
    id: str
    doc: Optional[Dict[str, Any]] = None


class AllDocsResponse(BaseModel):
    """Response model for an _all_docs?include_docs=true listing."""
    total_rows: int = 0
    offset: Optional[int] = 0
    rows: List[AllDocsRow] = Field(default_factory=list)

    @staticmethod
    def path(replicator_db: str = REPLICATOR_DB) -> str:
        return f"{replicator_db}/_all_docs?include_docs=true"


class Session(BaseModel):
    """Response model for the current session."""
    ok: bool = True
    user_ctx: Dict[str, Any] = Field(default_factory=dict, alias="userCtx")
    info: Dict[str, Any] = Field(default_factory=dict)

    model_config = {"populate_by_name": True}


class Database(BaseModel):
    """Database descriptor returned by the database lister."""
    name: str
