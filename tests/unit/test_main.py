"""Tests for the composition root and entry points."""

import json
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError
from falcon.testing import TestClient

from permsync import main as entrypoints
from permsync.application.ingestion import build_ingestion_strategy
from permsync.config import Settings
from permsync.domain.exceptions import ConfigurationError, IngestionFailed


def _settings(mode: str, **overrides) -> Settings:
    return Settings(provisioning_mode=mode, _env_file=None, **overrides)


@pytest.fixture
def event_strategy(permission_sets, references, links, object_store, notifier):
    return build_ingestion_strategy(
        "event",
        permission_sets=permission_sets,
        references=references,
        links=links,
        object_store=object_store,
        notifier=notifier,
    )


@pytest.fixture
def api_strategy(permission_sets, references, links):
    return build_ingestion_strategy(
        "api", permission_sets=permission_sets, references=references, links=links
    )


def _s3_event(event_name: str, key: str) -> dict:
    return {"Records": [{"eventName": event_name, "s3": {"bucket": {"name": "b"}, "object": {"key": key}}}]}


def test_http_app_unavailable_in_event_mode(event_strategy) -> None:
    with pytest.raises(ConfigurationError, match="event mode"):
        entrypoints.create_permsync_app(settings=_settings("event"), strategy=event_strategy)


def test_event_mode_requires_bucket_and_topic() -> None:
    with pytest.raises(ConfigurationError, match="artefacts_bucket"):
        entrypoints.build_strategy(_settings("event"), session=_FakeSession())


def test_build_strategy_api_mode_creates_no_event_clients() -> None:
    session = _FakeSession()

    entrypoints.build_strategy(_settings("api"), session=session)

    assert session.services == ["dynamodb"]


def test_build_strategy_event_mode_creates_s3_and_sns_clients() -> None:
    session = _FakeSession()
    settings = _settings(
        "event",
        artefacts_bucket="sso-artefacts",
        error_notifications_topic_arn="arn:aws:sns:us-east-1:123456789012:errors",
    )

    entrypoints.build_strategy(settings, session=session)

    assert session.services == ["dynamodb", "s3", "sns"]


def test_lambda_created_handler(monkeypatch, event_strategy, object_store, permission_sets, readonly_document) -> None:
    monkeypatch.setattr(entrypoints, "_event_ingestion", lambda: event_strategy)
    object_store.objects["permission_sets/readonly.json"] = json.dumps(readonly_document).encode()

    result = entrypoints.handle_object_created(
        _s3_event("ObjectCreated:Put", "permission_sets/readonly.json"), None
    )

    assert result == {"processed": ["permission_sets/readonly.json"]}
    assert "readonly" in permission_sets.snapshot()


def test_lambda_created_handler_fails_invocation(monkeypatch, event_strategy, object_store, notifier) -> None:
    monkeypatch.setattr(entrypoints, "_event_ingestion", lambda: event_strategy)
    object_store.objects["permission_sets/broken.json"] = b"not json"

    with pytest.raises(IngestionFailed):
        entrypoints.handle_object_created(_s3_event("ObjectCreated:Put", "permission_sets/broken.json"), None)

    assert len(notifier.sent) == 1


def test_lambda_removed_handler(monkeypatch, event_strategy) -> None:
    monkeypatch.setattr(entrypoints, "_event_ingestion", lambda: event_strategy)

    result = entrypoints.handle_object_removed(
        _s3_event("ObjectRemoved:Delete", "permission_sets/ghost.json"), None
    )

    assert result == {"processed": ["permission_sets/ghost.json"]}


def test_lambda_handlers_unavailable_in_api_mode(monkeypatch, api_strategy) -> None:
    monkeypatch.setattr(entrypoints, "get_settings", lambda: _settings("api"))
    monkeypatch.setattr(entrypoints, "build_strategy", lambda settings: api_strategy)
    entrypoints._event_ingestion.cache_clear()

    with pytest.raises(ConfigurationError, match="api mode"):
        entrypoints.handle_object_removed(_s3_event("ObjectRemoved:Delete", "permission_sets/a.json"), None)

    entrypoints._event_ingestion.cache_clear()


def test_cli_version(capsys) -> None:
    assert entrypoints.main(["version"]) == 0
    assert "permsync v" in capsys.readouterr().out


def test_cli_location(monkeypatch, capsys) -> None:
    monkeypatch.setattr(
        entrypoints, "get_settings", lambda: _settings("event", artefacts_bucket="sso-artefacts")
    )

    assert entrypoints.main(["location"]) == 0
    assert capsys.readouterr().out.strip() == "s3://sso-artefacts/permission_sets/"


def test_cli_grant_access_refused_in_api_mode(monkeypatch) -> None:
    monkeypatch.setattr(entrypoints, "get_settings", lambda: _settings("api"))

    assert entrypoints.main(["grant-access"]) == 1


class _FakeSession:
    """Records which service clients were requested."""

    def __init__(self) -> None:
        self.services: list[str] = []

    def client(self, service: str, config=None):
        self.services.append(service)
        return object()


class _DynamoDBSession:
    """Hands out one mocked DynamoDB client."""

    def __init__(self, dynamodb) -> None:
        self.dynamodb = dynamodb

    def client(self, service: str, config=None):
        assert service == "dynamodb"
        return self.dynamodb


def test_app_readiness_describes_all_three_tables(monkeypatch) -> None:
    dynamodb = MagicMock()
    dynamodb.describe_table.return_value = {"Table": {"TableStatus": "ACTIVE"}}
    monkeypatch.setattr(entrypoints, "create_session", lambda region: _DynamoDBSession(dynamodb))

    client = TestClient(entrypoints.create_permsync_app(settings=_settings("api")))
    result = client.simulate_get("/v1/health/ready")

    assert result.status_code == 200
    assert set(result.json["checks"]) == {
        "dev-permissionSetTable",
        "dev-permissionSetArnTable",
        "dev-linksTable",
    }
    described = [c.kwargs["TableName"] for c in dynamodb.describe_table.call_args_list]
    assert sorted(described) == ["dev-linksTable", "dev-permissionSetArnTable", "dev-permissionSetTable"]


def test_app_not_ready_when_links_table_is_missing(monkeypatch) -> None:
    def describe_table(TableName):
        if TableName == "dev-linksTable":
            raise ClientError({"Error": {"Code": "ResourceNotFoundException", "Message": "gone"}}, "DescribeTable")
        return {"Table": {"TableStatus": "ACTIVE"}}

    dynamodb = MagicMock()
    dynamodb.describe_table.side_effect = describe_table
    monkeypatch.setattr(entrypoints, "create_session", lambda region: _DynamoDBSession(dynamodb))

    client = TestClient(entrypoints.create_permsync_app(settings=_settings("api")))
    result = client.simulate_get("/v1/health/ready")

    assert result.status_code == 503
    assert result.json["checks"]["dev-permissionSetTable"] == "ok"
    assert "ResourceNotFoundException" in result.json["checks"]["dev-linksTable"]
