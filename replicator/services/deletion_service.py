"""Deletion service for registered replication directives."""

from common.constants import RESERVED_PREFIX
from common.logging_config import get_logger
from replicator.couch_client import CouchClient
from replicator.exceptions import ReplicatorError
from replicator.registry import ReplicatorRegistry
from replicator.schemas import RegisteredReplication
from replicator.types import DeletionResult

logger = get_logger(__name__)


class DeletionService:
    def __init__(self, client: CouchClient, reserved_prefix: str = RESERVED_PREFIX):
        self.client = client
        self.reserved_prefix = reserved_prefix

    def delete_one(self, directive_id: str) -> RegisteredReplication:
        """
        Delete one directive after re-fetching it for its live revision.

        Args:
            directive_id: Directive id

        Returns:
            The directive as it was before deletion

        Raises:
            DirectiveNotFoundError: If the directive does not exist
            TransportError: If the fetch or the delete fails
        """
        replicator = self.client.get_replicator(directive_id)
        self.client.delete_replicator(replicator)
        return replicator

    def delete_all(self) -> DeletionResult:
        """
        Delete every registered directive, stopping at the first failure.

        Returns:
            DeletionResult with the registry snapshot, deleted ids and any error
        """
        try:
            registry = ReplicatorRegistry.load(self.client, self.reserved_prefix)
        except ReplicatorError as e:
            logger.error(f"Delete-all aborted: cannot load registry: {e}")
            return DeletionResult(registry=ReplicatorRegistry(self.reserved_prefix), error=e)

        deleted_ids = []
        for replicator in registry:
            try:
                self.delete_one(replicator.id)
            except ReplicatorError as e:
                logger.error(f"Delete-all stopped: {e} [id={replicator.id} deleted={len(deleted_ids)}]")
                return DeletionResult(registry=registry, deleted_ids=deleted_ids, error=e)
            deleted_ids.append(replicator.id)

        logger.info(f"Deleted {len(deleted_ids)} replicators")
        return DeletionResult(registry=registry, deleted_ids=deleted_ids)
