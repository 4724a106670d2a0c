"""Ingestion router - picks exactly one ingestion strategy at initialization."""

from dataclasses import dataclass

from permsync.application.ports import (
    ErrorNotifier,
    LinkRepository,
    ObjectStore,
    PermissionSetReferenceRepository,
    PermissionSetRepository,
)
from permsync.application.use_cases.ingestion.ingest_created_object import (
    IngestCreatedObjectUseCase,
)
from permsync.application.use_cases.ingestion.ingest_removed_object import (
    IngestRemovedObjectUseCase,
)
from permsync.application.use_cases.permission_set.delete_permission_set import (
    DeletePermissionSetUseCase,
)
from permsync.application.use_cases.permission_set.get_permission_set import (
    GetPermissionSetUseCase,
)
from permsync.application.use_cases.permission_set.upsert_permission_set import (
    UpsertPermissionSetUseCase,
)
from permsync.domain.exceptions import ConfigurationError
from permsync.domain.value_objects import ProvisioningMode


@dataclass(frozen=True)
class ApiIngestion:
    """Direct calls from a trusted caller."""

    upsert: UpsertPermissionSetUseCase
    delete: DeletePermissionSetUseCase
    get: GetPermissionSetUseCase

    mode = ProvisioningMode.API


@dataclass(frozen=True)
class EventIngestion:
    """Object store create/remove notifications."""

    on_created: IngestCreatedObjectUseCase
    on_removed: IngestRemovedObjectUseCase

    mode = ProvisioningMode.EVENT


IngestionStrategy = ApiIngestion | EventIngestion


def build_ingestion_strategy(
    mode: str | ProvisioningMode,
    *,
    permission_sets: PermissionSetRepository,
    references: PermissionSetReferenceRepository,
    links: LinkRepository,
    object_store: ObjectStore | None = None,
    notifier: ErrorNotifier | None = None,
) -> IngestionStrategy:
    """Build the handlers for one mode; the other mode's handlers are never constructed."""
    mode = ProvisioningMode.parse(mode)
    if mode is ProvisioningMode.API:
        return ApiIngestion(
            upsert=UpsertPermissionSetUseCase(permission_sets),
            delete=DeletePermissionSetUseCase(permission_sets, references, links),
            get=GetPermissionSetUseCase(permission_sets, references),
        )

    if object_store is None or notifier is None:
        raise ConfigurationError("Event mode needs an object store and an error notifier")
    return EventIngestion(
        on_created=IngestCreatedObjectUseCase(object_store, permission_sets, notifier),
        on_removed=IngestRemovedObjectUseCase(permission_sets, references, links, notifier),
    )
