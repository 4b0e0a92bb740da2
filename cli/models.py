"""Command request data types for the console."""

from dataclasses import dataclass
from typing import Literal, Optional


@dataclass(frozen=True)
class ReplicateCommand:
    """Reconcile directives for every database in the given direction."""

    push: bool
    continuous: Optional[bool] = None
    create_target: Optional[bool] = None
    command: Literal["replicate"] = "replicate"


@dataclass(frozen=True)
class ListCommand:
    """List directives registered on the local host."""

    command: Literal["list"] = "list"


@dataclass(frozen=True)
class ShowCommand:
    """Show one registered directive."""

    directive_id: str
    command: Literal["show"] = "show"


@dataclass(frozen=True)
class DeleteCommand:
    """Delete one directive by id."""

    directive_id: str
    command: Literal["delete"] = "delete"


@dataclass(frozen=True)
class DeleteAllCommand:
    """Delete every registered directive."""

    command: Literal["delete-all"] = "delete-all"


@dataclass(frozen=True)
class DatabasesCommand:
    """List databases on a host."""

    role: Literal["local", "remote"] = "local"
    command: Literal["databases"] = "databases"


CommandRequest = (
    ReplicateCommand
    | ListCommand
    | ShowCommand
    | DeleteCommand
    | DeleteAllCommand
    | DatabasesCommand
)
