"""Registry of replication directives currently known to a host."""

from typing import Dict, Iterator, List, Optional, Tuple

from pydantic import ValidationError

from common.constants import RESERVED_PREFIX
from common.logging_config import get_logger
from replicator.exceptions import SerializationError
from replicator.schemas import AllDocsResponse, RegisteredReplication

logger = get_logger(__name__)


class ReplicatorRegistry:
    """
    In-memory index of registered directives, grouped by engine replication id.

    The registry owns its entries: everything handed out is a copy, so callers
    cannot alter the index. It is rebuilt for every pass rather than cached,
    since the engine and other writers change the control collection.
    """

    def __init__(self, reserved_prefix: str = RESERVED_PREFIX):
        self.reserved_prefix = reserved_prefix
        self._groups: Dict[str, List[RegisteredReplication]] = {}

    @classmethod
    def load(cls, client, reserved_prefix: str = RESERVED_PREFIX) -> "ReplicatorRegistry":
        """
        Build a registry from a host's control collection.

        Args:
            client: CouchClient of the host holding the directives
            reserved_prefix: Rows whose id starts with this are skipped (design documents)

        Returns:
            Populated registry
        """
        return cls.from_listing(client.get_replicator_docs(), reserved_prefix)

    @classmethod
    def from_listing(cls, listing: AllDocsResponse, reserved_prefix: str = RESERVED_PREFIX) -> "ReplicatorRegistry":
        registry = cls(reserved_prefix)
        for row in listing.rows:
            if registry.is_reserved(row.id):
                logger.debug(f"Ignoring reserved document [id={row.id}]")
                continue
            if row.doc is None:
                logger.debug(f"Ignoring row without document [id={row.id}]")
                continue
            try:
                replicator = RegisteredReplication.model_validate(row.doc)
            except ValidationError as e:
                raise SerializationError(f"Malformed replicator document {row.id}: {e}") from e
            registry.add(replicator)

        logger.info(f"Loaded {len(registry)} replicators in {len(registry._groups)} groups")
        return registry

    def is_reserved(self, doc_id: str) -> bool:
        return bool(self.reserved_prefix) and doc_id.startswith(self.reserved_prefix)

    def add(self, replicator: RegisteredReplication) -> None:
        """Append a copy of replicator to the group of its replication id."""
        key = replicator.replication_id or ""
        self._groups.setdefault(key, []).append(replicator.model_copy(deep=True))

    def find_by_id(self, directive_id: str) -> Optional[RegisteredReplication]:
        """
        Look up a directive by id across all groups.

        Args:
            directive_id: Directive id (hash of source and target)

        Returns:
            Copy of the registered directive, or None if not registered
        """
        for replicators in self._groups.values():
            for replicator in replicators:
                if replicator.id == directive_id:
                    return replicator.model_copy(deep=True)
        return None

    def groups(self) -> Dict[str, Tuple[RegisteredReplication, ...]]:
        return {
            key: tuple(r.model_copy(deep=True) for r in replicators)
            for key, replicators in self._groups.items()
        }

    def ids(self) -> List[str]:
        return [replicator.id for replicator in self]

    def __iter__(self) -> Iterator[RegisteredReplication]:
        for replicators in self._groups.values():
            for replicator in replicators:
                yield replicator.model_copy(deep=True)

    def __len__(self) -> int:
        return sum(len(replicators) for replicators in self._groups.values())
