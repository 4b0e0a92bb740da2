"""Command handler functions for console operations."""

from pathlib import Path
from typing import Optional

from common.logging_config import get_logger
from cli.config import Config
from cli.models import (
    DatabasesCommand,
    DeleteAllCommand,
    DeleteCommand,
    ListCommand,
    ReplicateCommand,
    ShowCommand,
)
from cli.utils import (
    format_databases,
    format_deletion_result,
    format_locators,
    format_reconcile_result,
    format_registry,
    format_replicator,
)
from replicator.couch_client import CouchClient
from replicator.exceptions import DirectiveNotFoundError, ReplicatorError
from replicator.registry import ReplicatorRegistry
from replicator.schemas import ReplicationDirective
from replicator.services import DeletionService, ReplicationService

logger = get_logger(__name__)


_config: Optional[Config] = None
_clients: dict[str, CouchClient] = {}


def get_config() -> Config:
    """
    Get or load global Config instance.

    Returns:
        Config instance backed by ~/.couchrep/config.json
    """
    global _config
    if _config is None:
        _config = Config(Path.home() / '.couchrep' / 'config.json')
    return _config


def get_client(role: str = "local") -> CouchClient:
    """
    Get or create the global CouchClient for a host.

    Args:
        role: "local" or "remote"

    Returns:
        CouchClient instance
    """
    if role not in _clients:
        logger.debug(f"Creating new CouchClient instance [role={role}]")
        config = get_config()
        _clients[role] = CouchClient(
            config.get_host(role),
            timeout=config.get_timeout(),
            replicator_db=config.get_replicator_db(),
        )
    return _clients[role]


def close_clients() -> None:
    """Close every client created by get_client."""
    for client in _clients.values():
        client.close()
    _clients.clear()


def handle_replicate(
    cmd: ReplicateCommand,
    service: Optional[ReplicationService] = None,
    config: Optional[Config] = None
) -> str:
    """
    Handle 'replicate' command.

    Args:
        cmd: ReplicateCommand with direction and optional flags
        service: Optional ReplicationService for dependency injection (testing)
        config: Optional Config supplying flag defaults

    Returns:
        Per-database summary, followed by the error if the pass stopped early
    """
    config = config or get_config()
    defaults = config.get_replication_defaults()
    template = ReplicationDirective(
        push=cmd.push,
        continuous=defaults['continuous'] if cmd.continuous is None else cmd.continuous,
        create_target=defaults['create_target'] if cmd.create_target is None else cmd.create_target,
    )
    logger.info(
        f"Executing replicate command: push={template.push} "
        f"continuous={template.continuous} create_target={template.create_target}"
    )
    if service is None:
        service = ReplicationService(
            get_client("local"),
            get_client("remote"),
            reserved_prefix=config.get_reserved_prefix(),
        )
    result = service.reconcile(template)
    logger.debug("Replicate command completed")
    return format_reconcile_result(result)


def handle_list(
    cmd: ListCommand,
    client: Optional[CouchClient] = None,
    config: Optional[Config] = None
) -> str:
    """
    Handle 'list' command.

    Args:
        cmd: ListCommand
        client: Optional CouchClient for dependency injection (testing)
        config: Optional Config supplying the reserved prefix

    Returns:
        Formatted list of registered replicators
    """
    config = config or get_config()
    if client is None:
        client = get_client("local")
    try:
        registry = ReplicatorRegistry.load(client, config.get_reserved_prefix())
    except ReplicatorError as e:
        logger.error(f"List command failed: {e}")
        return f"Error: {e}"
    return format_registry(registry)


def handle_show(cmd: ShowCommand, client: Optional[CouchClient] = None) -> str:
    """
    Handle 'show' command.

    Args:
        cmd: ShowCommand with directive_id
        client: Optional CouchClient for dependency injection (testing)

    Returns:
        Formatted replicator or error message
    """
    if client is None:
        client = get_client("local")
    try:
        replicator = client.get_replicator(cmd.directive_id)
    except DirectiveNotFoundError:
        return f"Error: Replicator not found: {cmd.directive_id}"
    except ReplicatorError as e:
        return f"Error: {e}"
    return format_replicator(replicator)


def handle_delete(cmd: DeleteCommand, service: Optional[DeletionService] = None) -> str:
    """
    Handle 'delete' command.

    Args:
        cmd: DeleteCommand with directive_id
        service: Optional DeletionService for dependency injection (testing)

    Returns:
        Success or error message
    """
    logger.info(f"Executing delete command [id={cmd.directive_id}]")
    if service is None:
        service = DeletionService(get_client("local"), get_config().get_reserved_prefix())
    try:
        replicator = service.delete_one(cmd.directive_id)
    except DirectiveNotFoundError:
        return f"Error: Replicator not found: {cmd.directive_id}"
    except ReplicatorError as e:
        logger.error(f"Delete command failed: {e} [id={cmd.directive_id}]")
        return f"Error: {e}"
    return f"Deleted: {replicator.id} ({format_locators(replicator)})"


def handle_delete_all(cmd: DeleteAllCommand, service: Optional[DeletionService] = None) -> str:
    """
    Handle 'delete-all' command.

    Args:
        cmd: DeleteAllCommand
        service: Optional DeletionService for dependency injection (testing)

    Returns:
        Deleted ids, followed by the error if the pass stopped early
    """
    logger.info("Executing delete-all command")
    if service is None:
        service = DeletionService(get_client("local"), get_config().get_reserved_prefix())
    result = service.delete_all()
    return format_deletion_result(result)


def handle_databases(cmd: DatabasesCommand, client: Optional[CouchClient] = None) -> str:
    """
    Handle 'databases' command.

    Args:
        cmd: DatabasesCommand with host role
        client: Optional CouchClient for dependency injection (testing)

    Returns:
        Formatted list of databases
    """
    if client is None:
        client = get_client(cmd.role)
    try:
        databases = client.get_databases()
    except ReplicatorError as e:
        return f"Error: {e}"
    return format_databases(databases)
