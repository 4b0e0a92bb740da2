"""HTTP client for one CouchDB host: databases, session and replicator documents."""

import uuid
from typing import List, Optional, Type, TypeVar
from urllib.parse import quote, unquote, urlsplit, urlunsplit

import httpx
from pydantic import BaseModel, ValidationError

from common.constants import DEFAULT_TIMEOUT_SECONDS, REPLICATOR_DB
from common.logging_config import get_logger
from replicator.exceptions import DirectiveNotFoundError, SerializationError, TransportError
from replicator.schemas import (
    AllDocsResponse,
    Database,
    RegisteredReplication,
    ReplicationDirective,
    Session,
)
from replicator.types import HostConfig

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class CouchClient:
    """HTTP client for a CouchDB host with error mapping and JSON decoding."""

    def __init__(
        self,
        host: HostConfig,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        replicator_db: str = REPLICATOR_DB
    ):
        """
        Initialize host client.

        Credentials embedded in the URL are moved into basic auth, unless
        explicit credentials are configured.

        Args:
            host: Host URL and optional credentials
            timeout: Per-request timeout in seconds
            replicator_db: Name of the control collection holding directives
        """
        parts = urlsplit(host.url)
        self.username = host.username or (unquote(parts.username) if parts.username else None)
        self.password = host.password or (unquote(parts.password) if parts.password else None)
        netloc = parts.hostname or ''
        if ':' in netloc:
            netloc = f"[{netloc}]"
        if parts.port:
            netloc = f"{netloc}:{parts.port}"
        self.base_url = urlunsplit((parts.scheme, netloc, parts.path.rstrip('/'), '', ''))
        self.replicator_db = replicator_db
        self.request_id = None

        auth = (self.username, self.password or '') if self.username else None
        self.session = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            auth=auth,
            headers={'Accept': 'application/json'}
        )
        logger.info(f"Initialized CouchClient [base_url={self.base_url}]")

    def url(self, db_name: str) -> str:
        """
        Build the locator of a database on this host, as used in directives.

        Args:
            db_name: Database name; encoded as a single path segment

        Returns:
            Absolute URL including credentials when the host has them
        """
        parts = urlsplit(self.base_url)
        netloc = parts.netloc
        if self.username:
            userinfo = quote(self.username, safe='')
            if self.password:
                userinfo = f"{userinfo}:{quote(self.password, safe='')}"
            netloc = f"{userinfo}@{netloc}"
        path = f"{parts.path}/{quote(db_name, safe='')}"
        return urlunsplit((parts.scheme, netloc, path, '', ''))

    def _request(self, method: str, endpoint: str, **kwargs) -> httpx.Response:
        """
        Make a single HTTP request and map failures to replicator errors.

        Args:
            method: HTTP method (GET, PUT, DELETE)
            endpoint: Path relative to the host base URL
            **kwargs: Additional arguments to pass to httpx request

        Returns:
            Successful (2xx) HTTP response

        Raises:
            DirectiveNotFoundError: On 404
            TransportError: On network failures and any other non-2xx status
        """
        self.request_id = str(uuid.uuid4())
        logger.debug(f"Making request: {method} {endpoint} [request_id={self.request_id}]")

        try:
            response = self.session.request(method, endpoint, **kwargs)
        except httpx.ConnectError as e:
            logger.error(f"Connection failed: {method} {endpoint} error={e} [request_id={self.request_id}]")
            raise TransportError(f"Cannot connect to {self.base_url}: {e}") from e
        except httpx.TimeoutException as e:
            logger.error(f"Request timed out: {method} {endpoint} [request_id={self.request_id}]")
            raise TransportError(f"Request to {self.base_url} timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"HTTP error: {method} {endpoint} error={e} [request_id={self.request_id}]")
            raise TransportError(f"Request to {self.base_url} failed: {e}") from e

        logger.debug(
            f"Response received: {method} {endpoint} status={response.status_code} [request_id={self.request_id}]"
        )

        if response.status_code == 404:
            raise DirectiveNotFoundError(
                f"Not found: {endpoint} ({self._format_error(response)})",
                status_code=404
            )
        if response.status_code >= 400:
            logger.warning(
                f"Request rejected: {method} {endpoint} status={response.status_code} [request_id={self.request_id}]"
            )
            raise TransportError(
                f"{method} {endpoint} failed: {self._format_error(response)}",
                status_code=response.status_code
            )
        return response

    def _format_error(self, response: httpx.Response) -> str:
        """
        Summarize a CouchDB error body ({"error": ..., "reason": ...}).

        Args:
            response: HTTP response object

        Returns:
            Human readable error description
        """
        try:
            error_data = response.json()
            error = error_data.get('error', 'unknown_error')
            reason = error_data.get('reason', '')
        except (ValueError, AttributeError):
            return f"HTTP {response.status_code}: {response.text or 'Unknown error'}"
        if reason:
            return f"HTTP {response.status_code} {error}: {reason}"
        return f"HTTP {response.status_code} {error}"

    def _decode(self, response: httpx.Response, model: Type[ModelT]) -> ModelT:
        try:
            return model.model_validate(response.json())
        except ValueError as e:
            # pydantic's ValidationError is a ValueError too
            raise SerializationError(f"Malformed response from {response.request.url}: {e}") from e

    def _get_json(self, endpoint: str, model: Type[ModelT]) -> ModelT:
        return self._decode(self._request('GET', endpoint), model)

    def get_databases(self) -> List[Database]:
        """
        List databases on this host, in the order the host returns them.

        Returns:
            Database descriptors
        """
        response = self._request('GET', '_all_dbs')
        try:
            names = response.json()
        except ValueError as e:
            raise SerializationError(f"Malformed database listing from {self.base_url}: {e}") from e
        if not isinstance(names, list):
            raise SerializationError(f"Malformed database listing from {self.base_url}: expected a list")
        try:
            return [Database(name=name) for name in names]
        except ValidationError as e:
            raise SerializationError(f"Malformed database listing from {self.base_url}: {e}") from e

    def get_session(self) -> Session:
        """Get the acting session (user context) for this host's credentials."""
        return self._get_json('_session', Session)

    def get_replicator_docs(self) -> AllDocsResponse:
        """
        Fetch the full listing of the control collection, documents included.

        Returns:
            Raw listing; rows are decoded by ReplicatorRegistry
        """
        return self._get_json(AllDocsResponse.path(self.replicator_db), AllDocsResponse)

    def get_replicator(self, directive_id: str, rev: Optional[str] = None) -> RegisteredReplication:
        """
        Fetch one registered directive.

        Args:
            directive_id: Directive id
            rev: Optional revision to fetch

        Returns:
            RegisteredReplication as currently stored

        Raises:
            DirectiveNotFoundError: If no document has this id
        """
        directive = ReplicationDirective(id=directive_id, rev=rev)
        return self._get_json(directive.path(self.replicator_db), RegisteredReplication)

    def put_replicator(self, directive: ReplicationDirective) -> dict:
        """
        Create or update a directive at its address.

        Args:
            directive: Directive with id set; rev set only for updates

        Returns:
            Host acknowledgement ({"ok", "id", "rev"})
        """
        try:
            body = directive.to_body()
            response = self._request('PUT', directive.path(self.replicator_db), json=body)
        except TypeError as e:
            raise SerializationError(f"Cannot encode directive {directive.id}: {e}") from e
        try:
            return response.json()
        except ValueError as e:
            raise SerializationError(f"Malformed response for directive {directive.id}: {e}") from e

    def delete_replicator(self, replicator: ReplicationDirective) -> None:
        """
        Delete a directive addressed by its id and revision.

        Args:
            replicator: Directive carrying the revision currently held by the host
        """
        self._request('DELETE', replicator.path(self.replicator_db))
        logger.info(f"Deleted replicator document [id={replicator.id} rev={replicator.rev}]")

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()
