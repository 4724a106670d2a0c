"""Application ports - interfaces for external adapters."""

from permsync.application.ports.access_grantor import AccessGrantor
from permsync.application.ports.error_notifier import ErrorNotifier, OperatorNotification
from permsync.application.ports.object_store import ObjectStore
from permsync.application.ports.repositories import (
    LinkRepository,
    PermissionSetReferenceRepository,
    PermissionSetRepository,
)

__all__ = [
    "AccessGrantor",
    "ErrorNotifier",
    "LinkRepository",
    "ObjectStore",
    "OperatorNotification",
    "PermissionSetReferenceRepository",
    "PermissionSetRepository",
]
