"""Replication service: computes desired directives and upserts them against the registry."""

from typing import Any, Dict

from common.constants import RESERVED_PREFIX
from common.logging_config import get_logger
from replicator.couch_client import CouchClient
from replicator.exceptions import ReplicatorError
from replicator.registry import ReplicatorRegistry
from replicator.schemas import ReplicationDirective
from replicator.types import Created, ReconcileResult, SkippedTriggered, Updated

logger = get_logger(__name__)


class ReplicationService:
    def __init__(self, local: CouchClient, remote: CouchClient, reserved_prefix: str = RESERVED_PREFIX):
        self.local = local
        self.remote = remote
        self.reserved_prefix = reserved_prefix

    def submit(self, directive: ReplicationDirective) -> ReplicationDirective:
        """
        Upsert a single directive on the local host.

        Args:
            directive: Directive to store; its id is generated when missing

        Returns:
            The directive as submitted (with id)
        """
        if not directive.has_id():
            directive = directive.with_generated_id()
        logger.debug(f"Submitting directive [id={directive.id} rev={directive.rev}]")
        self.local.put_replicator(directive)
        return directive

    def _desired_directive(
        self,
        template: ReplicationDirective,
        db_name: str,
        user_ctx: Dict[str, Any]
    ) -> ReplicationDirective:
        if template.push:
            source, target = db_name, self.remote.url(db_name)
        else:
            source, target = self.remote.url(db_name), db_name
        directive = template.model_copy(update={
            "source": source,
            "target": target,
            "user_ctx": dict(user_ctx),
            "rev": None,
        })
        return directive.with_generated_id()

    def reconcile(self, template: ReplicationDirective) -> ReconcileResult:
        """
        Create or update one directive per database of the master host.

        The master host is the local host when pushing and the remote host
        when pulling. Directives always live on the local host and always
        carry the local session's user context. Databases whose directive
        is triggered are skipped. Processing stops at the first failure.

        Args:
            template: Direction and flags; source, target, id and rev are replaced per database

        Returns:
            ReconcileResult with processed databases, per-database outcomes and any error
        """
        master = self.local if template.push else self.remote
        direction = "push" if template.push else "pull"
        logger.info(f"Reconciling replicators [direction={direction} master={master.base_url}]")

        try:
            databases = master.get_databases()
            registry = ReplicatorRegistry.load(self.local, self.reserved_prefix)
            session = self.local.get_session()
        except ReplicatorError as e:
            logger.error(f"Reconcile aborted before submitting: {e} [direction={direction}]")
            return ReconcileResult(error=e)

        processed = []
        outcomes = []
        for db in databases:
            if self.reserved_prefix and db.name.startswith(self.reserved_prefix):
                continue

            directive = self._desired_directive(template, db.name, session.user_ctx)
            existing = registry.find_by_id(directive.id)
            if existing is not None and existing.is_triggered():
                logger.info(f"Skipped triggered replicator [db={db.name} id={directive.id}]")
                outcomes.append(SkippedTriggered(database=db.name, directive_id=directive.id))
                continue

            if existing is not None:
                directive = directive.model_copy(update={"rev": existing.rev})
                outcome = Updated(database=db.name, directive_id=directive.id, rev=existing.rev)
            else:
                outcome = Created(database=db.name, directive_id=directive.id)

            try:
                self.submit(directive)
            except ReplicatorError as e:
                logger.error(
                    f"Reconcile stopped at {db.name}: {e} [processed={len(processed)} id={directive.id}]"
                )
                return ReconcileResult(processed=processed, outcomes=outcomes, error=e)

            logger.info(f"Replicator {outcome.disposition} [db={db.name} id={directive.id}]")
            processed.append(db)
            outcomes.append(outcome)

        logger.info(
            f"Reconcile completed: {len(processed)} submitted, "
            f"{len(outcomes) - len(processed)} skipped [direction={direction}]"
        )
        return ReconcileResult(processed=processed, outcomes=outcomes)
