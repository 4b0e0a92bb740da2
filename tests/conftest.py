"""Shared pytest fixtures for all tests."""

import json
import uuid

import httpx
import pytest

from cli.config import Config
from replicator.couch_client import CouchClient
from replicator.identifier import generate_id
from replicator.types import HostConfig


class FakeCouch:
    """
    In-memory CouchDB host behind httpx.MockTransport.

    Serves _all_dbs, _session and a replicator collection with revision
    checks. Updates to triggered documents are rejected like the real
    replicator does.
    """

    def __init__(self, databases=None, user_ctx=None, replicator_db="_replicator"):
        self.databases = list(databases or [])
        self.user_ctx = user_ctx if user_ctx is not None else {"name": "admin", "roles": ["_admin"]}
        self.replicator_db = replicator_db
        self.docs: dict[str, dict] = {}
        self.requests: list[tuple[str, str]] = []
        self.fail_put_for: set[str] = set()
        self.fail_delete_for: set[str] = set()

    def seed(self, source, target, state=None, replication_id=None, doc_id=None, **fields):
        """Store a registered directive and return its document."""
        doc_id = doc_id or generate_id(source, target)
        doc = {
            "_id": doc_id,
            "_rev": f"1-{uuid.uuid4().hex}",
            "source": source,
            "target": target,
            "continuous": True,
            "create_target": True,
            "user_ctx": {"name": "admin", "roles": ["_admin"]},
            "owner": "admin",
        }
        if state is not None:
            doc["_replication_state"] = state
            doc["_replication_state_time"] = "2024-01-01T00:00:00+00:00"
        if replication_id is not None:
            doc["_replication_id"] = replication_id
        doc.update(fields)
        self.docs[doc_id] = doc
        return doc

    def seed_design_doc(self, name="_design/_replicator"):
        self.docs[name] = {"_id": name, "_rev": "1-design", "language": "javascript"}

    def puts(self) -> list[str]:
        return [path for method, path in self.requests if method == "PUT"]

    def _next_rev(self, rev):
        generation = int(rev.split("-", 1)[0]) if rev else 0
        return f"{generation + 1}-{uuid.uuid4().hex}"

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.requests.append((request.method, path))
        prefix = f"/{self.replicator_db}/"

        if path == "/_all_dbs" and request.method == "GET":
            return httpx.Response(200, json=self.databases)
        if path == "/_session" and request.method == "GET":
            return httpx.Response(200, json={"ok": True, "userCtx": self.user_ctx, "info": {}})
        if path == f"{prefix}_all_docs" and request.method == "GET":
            include_docs = request.url.params.get("include_docs") == "true"
            rows = []
            for doc_id in sorted(self.docs):
                row = {"id": doc_id, "key": doc_id, "value": {"rev": self.docs[doc_id]["_rev"]}}
                if include_docs:
                    row["doc"] = dict(self.docs[doc_id])
                rows.append(row)
            return httpx.Response(200, json={"total_rows": len(rows), "offset": 0, "rows": rows})
        if path.startswith(prefix):
            return self._handle_doc(request, path[len(prefix):])
        return httpx.Response(404, json={"error": "not_found", "reason": "missing"})

    def _handle_doc(self, request, doc_id):
        rev = request.url.params.get("rev")
        existing = self.docs.get(doc_id)

        if request.method == "GET":
            if existing is None:
                return httpx.Response(404, json={"error": "not_found", "reason": "missing"})
            return httpx.Response(200, json=existing)

        if request.method == "PUT":
            if doc_id in self.fail_put_for:
                return httpx.Response(500, json={"error": "internal_error", "reason": "boom"})
            body = json.loads(request.content)
            rev = rev or body.get("_rev")
            if existing is not None:
                if existing.get("_replication_state") == "triggered":
                    return httpx.Response(403, json={
                        "error": "forbidden",
                        "reason": "Only the replicator can edit replication documents that are in the triggered state.",
                    })
                if rev != existing["_rev"]:
                    return httpx.Response(409, json={"error": "conflict", "reason": "Document update conflict."})
            elif rev is not None:
                return httpx.Response(409, json={"error": "conflict", "reason": "Document update conflict."})
            new_rev = self._next_rev(existing["_rev"] if existing else None)
            body["_id"] = doc_id
            body["_rev"] = new_rev
            self.docs[doc_id] = body
            return httpx.Response(201, json={"ok": True, "id": doc_id, "rev": new_rev})

        if request.method == "DELETE":
            if doc_id in self.fail_delete_for:
                return httpx.Response(500, json={"error": "internal_error", "reason": "boom"})
            if existing is None:
                return httpx.Response(404, json={"error": "not_found", "reason": "missing"})
            if rev != existing["_rev"]:
                return httpx.Response(409, json={"error": "conflict", "reason": "Document update conflict."})
            del self.docs[doc_id]
            return httpx.Response(200, json={"ok": True, "id": doc_id, "rev": self._next_rev(rev)})

        return httpx.Response(405, json={"error": "method_not_allowed", "reason": "Only GET,PUT,DELETE allowed"})

    def client(self, url="http://local.test:5984") -> CouchClient:
        """Create a CouchClient whose HTTP session is served by this fake."""
        client = CouchClient(HostConfig(url=url), replicator_db=self.replicator_db)
        client.session = httpx.Client(transport=httpx.MockTransport(self.handler), base_url=client.base_url)
        return client


@pytest.fixture
def local_couch():
    """Fake local host with two user databases and two system databases."""
    return FakeCouch(databases=["_replicator", "_users", "inventory", "orders"])


@pytest.fixture
def remote_couch():
    """Fake remote host with its own database list."""
    return FakeCouch(
        databases=["_global_changes", "customers", "inventory"],
        user_ctx={"name": "remote_admin", "roles": ["_admin"]},
    )


@pytest.fixture
def local_client(local_couch):
    client = local_couch.client("http://local.test:5984")
    yield client
    client.close()


@pytest.fixture
def remote_client(remote_couch):
    client = remote_couch.client("https://remote.example")
    yield client
    client.close()


@pytest.fixture
def temp_config_dir(tmp_path):
    """
    Create temporary config directory.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to temporary .couchrep directory
    """
    config_dir = tmp_path / '.couchrep'
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def temp_config(temp_config_dir):
    """
    Create temporary config instance.

    Args:
        temp_config_dir: Temporary config directory fixture

    Returns:
        Config instance with temp config file
    """
    return Config(temp_config_dir / 'config.json')
