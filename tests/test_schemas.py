"""Tests for directive and host response schemas."""

from replicator.identifier import generate_id
from replicator.schemas import AllDocsResponse, RegisteredReplication, ReplicationDirective, Session


def test_directive_body_uses_wire_names():
    directive = ReplicationDirective(
        source="inventory",
        target="https://remote.example/inventory",
        continuous=True,
        create_target=True,
        user_ctx={"name": "admin", "roles": ["_admin"]},
        push=True,
    )

    body = directive.to_body()

    assert body == {
        "source": "inventory",
        "target": "https://remote.example/inventory",
        "cancel": False,
        "create_target": True,
        "continuous": True,
        "user_ctx": {"name": "admin", "roles": ["_admin"]},
    }


def test_directive_body_never_contains_push():
    body = ReplicationDirective(source="a", target="b", push=True).to_body()
    assert "push" not in body


def test_directive_body_includes_id_and_rev_when_set():
    directive = ReplicationDirective(id="abc", rev="2-xyz", source="a", target="b")

    body = directive.to_body()

    assert body["_id"] == "abc"
    assert body["_rev"] == "2-xyz"


def test_registered_body_excludes_engine_fields():
    replicator = RegisteredReplication.model_validate({
        "_id": "abc",
        "_rev": "3-def",
        "source": "a",
        "target": "b",
        "_replication_state": "completed",
        "_replication_id": "r1",
        "owner": "admin",
    })

    body = replicator.to_body()

    assert "_replication_state" not in body
    assert "owner" not in body
    assert body["_rev"] == "3-def"


def test_path_without_revision():
    directive = ReplicationDirective(id="abc", source="a", target="b")
    assert directive.path() == "_replicator/abc"


def test_path_with_revision():
    directive = ReplicationDirective(id="abc", rev="1-x", source="a", target="b")
    assert directive.path() == "_replicator/abc?rev=1-x"


def test_path_with_custom_control_collection():
    directive = ReplicationDirective(id="abc", source="a", target="b")
    assert directive.path("ops_replicator") == "ops_replicator/abc"


def test_with_generated_id_does_not_modify_original():
    directive = ReplicationDirective(source="a", target="b")

    with_id = directive.with_generated_id()

    assert with_id.id == generate_id("a", "b")
    assert directive.id is None
    assert not directive.has_id()
    assert with_id.has_id()


def test_registered_replication_decodes_engine_fields():
    replicator = RegisteredReplication.model_validate({
        "_id": "abc",
        "_rev": "1-x",
        "source": "inventory",
        "target": "http://remote/inventory",
        "continuous": True,
        "create_target": False,
        "user_ctx": {"name": "admin", "roles": []},
        "owner": "admin",
        "_replication_id": "c0ffee",
        "_replication_state": "triggered",
        "_replication_state_time": "2024-01-01T00:00:00+00:00",
        "_replication_stats": {"docs_written": 3},
    })

    assert replicator.id == "abc"
    assert replicator.rev == "1-x"
    assert replicator.replication_id == "c0ffee"
    assert replicator.replication_state_time == "2024-01-01T00:00:00+00:00"
    assert replicator.is_triggered()


def test_registered_replication_state_optional():
    replicator = RegisteredReplication.model_validate({"_id": "abc", "source": "a", "target": "b"})

    assert replicator.replication_state is None
    assert not replicator.is_triggered()
    assert replicator.user_ctx == {}


def test_all_docs_path():
    assert AllDocsResponse.path() == "_replicator/_all_docs?include_docs=true"
    assert AllDocsResponse.path("other") == "other/_all_docs?include_docs=true"


def test_session_reads_user_ctx():
    session = Session.model_validate({"ok": True, "userCtx": {"name": "admin", "roles": ["_admin"]}})
    assert session.user_ctx == {"name": "admin", "roles": ["_admin"]}


def test_path_encodes_id_as_single_segment():
    assert ReplicationDirective(id="nightly#1").path() == "_replicator/nightly%231"
    assert ReplicationDirective(id="what?now", rev="2-x").path() == "_replicator/what%3Fnow?rev=2-x"
    assert ReplicationDirective(id="team/orders").path() == "_replicator/team%2Forders"
