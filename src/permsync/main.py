"""Application entry points and composition root."""

import argparse
import asyncio
import logging
import sys
from functools import lru_cache
from typing import Any

from permsync import __version__
from permsync.application.ingestion import (
    ApiIngestion,
    EventIngestion,
    IngestionStrategy,
    build_ingestion_strategy,
)
from permsync.application.use_cases.access.grant_caller_access import GrantCallerAccessUseCase
from permsync.config import Settings, get_settings
from permsync.domain.exceptions import ConfigurationError, PermSyncError
from permsync.domain.value_objects import ProvisioningMode
from permsync.infrastructure.aws.access_grantor import AWSAccessGrantor
from permsync.infrastructure.aws.link_repository import DynamoDBLinkRepository
from permsync.infrastructure.aws.permission_set_repository import (
    DynamoDBPermissionSetRepository,
)
from permsync.infrastructure.aws.reference_repository import (
    DynamoDBPermissionSetReferenceRepository,
)
from permsync.infrastructure.aws.s3_object_store import S3ObjectStore
from permsync.infrastructure.aws.session import create_client, create_session
from permsync.infrastructure.aws.sns_notifier import SNSErrorNotifier
from permsync.infrastructure.aws.table_provisioner import TableProvisioner
from permsync.interfaces.api.app import create_app
from permsync.interfaces.api.resources.health import HealthResource, ReadinessCheck
from permsync.interfaces.api.resources.permission_sets import (
    PermissionSetResource,
    PermissionSetsResource,
)
from permsync.interfaces.events.s3_events import dispatch_created, dispatch_removed
from permsync.log import configure_logging

logger = logging.getLogger(__name__)


def build_repositories(settings: Settings, session) -> tuple[
    DynamoDBPermissionSetRepository,
    DynamoDBPermissionSetReferenceRepository,
    DynamoDBLinkRepository,
]:
    """Metadata Store, Reference Store and links table over one DynamoDB client."""
    dynamodb = create_client(session, "dynamodb")
    return (
        DynamoDBPermissionSetRepository(dynamodb, settings.permission_set_table),
        DynamoDBPermissionSetReferenceRepository(dynamodb, settings.permission_set_arn_table),
        DynamoDBLinkRepository(dynamodb, settings.links_table, settings.links_permission_set_index),
    )


def build_strategy(settings: Settings, session=None, repositories=None) -> IngestionStrategy:
    """Wire AWS adapters into the ingestion strategy selected by settings."""
    session = session or create_session(settings.aws_region)
    permission_sets, references, links = repositories or build_repositories(settings, session)

    if settings.provisioning_mode is ProvisioningMode.API:
        return build_ingestion_strategy(
            settings.provisioning_mode,
            permission_sets=permission_sets,
            references=references,
            links=links,
        )

    if not settings.artefacts_bucket or not settings.error_notifications_topic_arn:
        raise ConfigurationError(
            "Event mode needs artefacts_bucket and error_notifications_topic_arn"
        )
    return build_ingestion_strategy(
        settings.provisioning_mode,
        permission_sets=permission_sets,
        references=references,
        links=links,
        object_store=S3ObjectStore(create_client(session, "s3"), settings.artefacts_bucket),
        notifier=SNSErrorNotifier(
            create_client(session, "sns"), settings.error_notifications_topic_arn
        ),
    )


def create_permsync_app(
    settings: Settings | None = None,
    strategy: IngestionStrategy | None = None,
    readiness_checks: dict[str, ReadinessCheck] | None = None,
):
    """Composition root - build Falcon app for API mode.

    Without an injected strategy the AWS adapters are built from settings and
    readiness covers the three tables they use.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    if strategy is None:
        session = create_session(settings.aws_region)
        repositories = build_repositories(settings, session)
        strategy = build_strategy(settings, session, repositories)
        if readiness_checks is None:
            permission_sets, references, links = repositories
            readiness_checks = {
                settings.permission_set_table: permission_sets.check_ready,
                settings.permission_set_arn_table: references.check_ready,
                settings.links_table: links.check_ready,
            }
    if not isinstance(strategy, ApiIngestion):
        raise ConfigurationError(f"HTTP API is not available in {strategy.mode} mode")

    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    return create_app(
        permission_sets_resource=PermissionSetsResource(strategy.upsert, strategy.delete),
        permission_set_resource=PermissionSetResource(strategy.get),
        health_resource=HealthResource(readiness_checks),
        cors_origins=cors_origins,
    )


@lru_cache
def _event_ingestion() -> EventIngestion:
    settings = get_settings()
    configure_logging(settings.log_level)
    strategy = build_strategy(settings)
    if not isinstance(strategy, EventIngestion):
        raise ConfigurationError(f"Object event handlers are not available in {strategy.mode} mode")
    return strategy


def handle_object_created(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Lambda entry point for ObjectCreated notifications."""
    strategy = _event_ingestion()
    keys = asyncio.run(dispatch_created(event, strategy.on_created))
    return {"processed": keys}


def handle_object_removed(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Lambda entry point for ObjectRemoved notifications."""
    strategy = _event_ingestion()
    keys = asyncio.run(dispatch_removed(event, strategy.on_removed))
    return {"processed": keys}


def run_server(host: str = "0.0.0.0", port: int = 8000) -> None:
    """Run uvicorn server."""
    import uvicorn

    app = create_permsync_app()
    uvicorn.run(app, host=host, port=port)


def _grant_access(settings: Settings) -> None:
    session = create_session(settings.aws_region)
    grantor = AWSAccessGrantor(
        create_client(session, "s3"), create_client(session, "kms"), settings.artefacts_bucket
    )
    asyncio.run(GrantCallerAccessUseCase(grantor).execute(settings.permission_set_caller_role_arn))


def _provision_tables(settings: Settings) -> None:
    session = create_session(settings.aws_region)
    provisioner = TableProvisioner(
        create_client(session, "dynamodb"),
        settings.permission_set_table,
        settings.permission_set_arn_table,
        settings.ddb_tables_key_arn,
    )
    created = asyncio.run(provisioner.ensure_tables())
    print(", ".join(created) if created else "All tables already exist")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(prog="permsync", description="Permission set sync")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("version", help="Print version")
    serve = sub.add_parser("serve", help="Run the HTTP API (api mode)")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)
    sub.add_parser("location", help="Print the permission set object store location")
    sub.add_parser("grant-access", help="Grant the caller principal bucket and key access")
    sub.add_parser("provision-tables", help="Create the permission set tables if missing")
    args = parser.parse_args(argv)

    if args.command == "version":
        print(f"permsync v{__version__}")
        return 0

    settings = get_settings()
    configure_logging(settings.log_level)
    try:
        if args.command == "serve":
            run_server(args.host, args.port)
        elif args.command == "location":
            print(settings.permission_sets_location)
        elif args.command == "grant-access":
            if settings.provisioning_mode is not ProvisioningMode.EVENT:
                raise ConfigurationError("Caller access grants are only wired in event mode")
            _grant_access(settings)
        elif args.command == "provision-tables":
            _provision_tables(settings)
    except PermSyncError as e:
        logger.error("%s failed: %s", args.command, e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
