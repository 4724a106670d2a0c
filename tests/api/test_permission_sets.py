"""Permission set API tests."""

from falcon.testing import TestClient

from permsync.domain.exceptions import ValidationError


def test_post_upserts_permission_set(client: TestClient, permission_sets, readonly_document) -> None:
    result = client.simulate_post(
        "/v1/permission-sets", json={"name": "readonly", "document": readonly_document}
    )

    assert result.status_code == 200
    assert result.json == {"name": "readonly", "status": "upserted"}
    assert permission_sets.snapshot() == {"readonly": readonly_document}


def test_post_then_get_round_trips_document(client: TestClient, readonly_document) -> None:
    client.simulate_post("/v1/permission-sets", json={"name": "readonly", "document": readonly_document})

    result = client.simulate_get("/v1/permission-sets/readonly")

    assert result.status_code == 200
    assert result.json["document"] == readonly_document
    assert result.json["providerId"] is None


def test_post_malformed_document_is_validation_error(client: TestClient, permission_sets) -> None:
    """An empty document fails the schema and the store is untouched."""
    result = client.simulate_post("/v1/permission-sets", json={"name": "x", "document": {}})

    assert result.status_code == 400
    assert result.json["type"] == "ValidationError"
    assert permission_sets.snapshot() == {}


def test_post_missing_document(client: TestClient) -> None:
    result = client.simulate_post("/v1/permission-sets", json={"name": "x"})

    assert result.status_code == 400
    assert "document" in result.json["error"]


def test_post_non_json_body(client: TestClient) -> None:
    result = client.simulate_post(
        "/v1/permission-sets", body="{oops", headers={"Content-Type": "application/json"}
    )

    assert result.status_code == 400
    assert result.json["type"] == "ValidationError"


def test_post_unknown_action(client: TestClient, readonly_document) -> None:
    result = client.simulate_post(
        "/v1/permission-sets", json={"name": "x", "document": readonly_document, "action": "rename"}
    )

    assert result.status_code == 400


def test_post_store_failure_is_retryable(client: TestClient, permission_sets, readonly_document) -> None:
    permission_sets.fail_writes = True

    result = client.simulate_post(
        "/v1/permission-sets", json={"name": "readonly", "document": readonly_document}
    )

    assert result.status_code == 503
    assert result.json["type"] == "StoreWriteError"
    assert result.headers["Retry-After"] == "1"


def test_delete_action(client: TestClient, permission_sets, readonly_document) -> None:
    client.simulate_post("/v1/permission-sets", json={"name": "readonly", "document": readonly_document})

    result = client.simulate_post("/v1/permission-sets", json={"name": "readonly", "action": "DELETE"})

    assert result.status_code == 200
    assert result.json["status"] == "deleted"
    assert permission_sets.snapshot() == {}


def test_delete_with_links_conflicts(client: TestClient, permission_sets, links, readonly_document) -> None:
    client.simulate_post("/v1/permission-sets", json={"name": "admin", "document": readonly_document})
    links.add("account-123456789012", "admin")

    result = client.simulate_post("/v1/permission-sets", json={"name": "admin", "action": "delete"})

    assert result.status_code == 409
    assert "admin" in permission_sets.snapshot()


def test_get_missing_is_404(client: TestClient) -> None:
    assert client.simulate_get("/v1/permission-sets/ghost").status_code == 404


def test_responses_allow_any_origin(client: TestClient, readonly_document) -> None:
    result = client.simulate_post(
        "/v1/permission-sets",
        json={"name": "readonly", "document": readonly_document},
        headers={"Origin": "https://portal.example.com"},
    )

    assert result.headers["Access-Control-Allow-Origin"] == "*"


def test_options_preflight(client: TestClient) -> None:
    result = client.simulate_options("/v1/permission-sets")

    assert result.status_code == 200
    assert result.headers["Access-Control-Allow-Origin"] == "*"


def test_post_unstorable_number_is_validation_error(client: TestClient, permission_sets, readonly_document) -> None:
    document = {**readonly_document, "serial": 1234567890123456789012345678901234567890}

    result = client.simulate_post("/v1/permission-sets", json={"name": "readonly", "document": document})

    assert result.status_code == 400
    assert result.json["type"] == "ValidationError"
    assert permission_sets.snapshot() == {}


def test_post_item_rejected_by_store_is_not_retryable(client: TestClient, permission_sets, readonly_document) -> None:
    """A write the store refuses outright (e.g. an oversized item) is a 400, never a 503."""

    async def reject(record):
        raise ValidationError(f"Permission set {record.name} cannot be stored: item too large")

    permission_sets.put = reject

    result = client.simulate_post("/v1/permission-sets", json={"name": "readonly", "document": readonly_document})

    assert result.status_code == 400
    assert "Retry-After" not in result.headers
    assert result.json["type"] == "ValidationError"
