"""Formatting helpers for console output."""

from cli.constants import GREEN, RESET, YELLOW
from common.logging_config import mask_sensitive
from replicator.registry import ReplicatorRegistry
from replicator.schemas import Database, RegisteredReplication
from replicator.types import DeletionResult, ReconcileResult, SkippedTriggered, Updated


def format_replicator(replicator: RegisteredReplication) -> str:
    """
    Render one registered directive.

    Args:
        replicator: Directive as stored on the host

    Returns:
        Multi-line description (id, source → target, state, flags, state time)
    """
    return '\n'.join([
        f"[{replicator.id}]",
        f"  {format_locators(replicator)}",
        f"  Replication State: {replicator.replication_state or '-'}",
        f"  Continuous: {replicator.continuous}",
        f"  Create Target: {replicator.create_target}",
        f"  Replication State Time: {replicator.replication_state_time or '-'}",
    ])


def format_locators(replicator: RegisteredReplication) -> str:
    """Render "source → target" with any URL credentials masked."""
    return f"{mask_sensitive(replicator.source)} → {mask_sensitive(replicator.target)}"


def format_registry(registry: ReplicatorRegistry) -> str:
    if len(registry) == 0:
        return "No replicators registered."
    output = [f"Found {len(registry)} replicator(s):\n"]
    output.extend(format_replicator(replicator) for replicator in registry)
    return '\n'.join(output)


def format_databases(databases: list[Database]) -> str:
    if not databases:
        return "No databases found."
    return '\n'.join([f"Found {len(databases)} database(s):"] + [f"  - {db.name}" for db in databases])


def format_reconcile_result(result: ReconcileResult) -> str:
    """
    Render a reconciliation pass: one line per database, then any error.

    Args:
        result: Result returned by ReplicationService.reconcile

    Returns:
        Formatted summary
    """
    output = []
    for outcome in result.outcomes:
        if isinstance(outcome, SkippedTriggered):
            output.append(f"  {YELLOW}skipped{RESET} {outcome.database} (triggered, id {outcome.directive_id[:8]}...)")
        elif isinstance(outcome, Updated):
            output.append(f"  {GREEN}updated{RESET} {outcome.database} (id {outcome.directive_id[:8]}...)")
        else:
            output.append(f"  {GREEN}created{RESET} {outcome.database} (id {outcome.directive_id[:8]}...)")

    output.insert(0, f"Replicated {len(result.processed)} database(s), skipped {len(result.skipped)}.")
    if result.error is not None:
        output.append(f"Error: {result.error}")
    return '\n'.join(output)


def format_deletion_result(result: DeletionResult) -> str:
    output = [f"Deleted {len(result.deleted_ids)} of {len(result.registry)} replicator(s)."]
    output.extend(f"  - {directive_id}" for directive_id in result.deleted_ids)
    if result.error is not None:
        output.append(f"Error: {result.error}")
    return '\n'.join(output)
