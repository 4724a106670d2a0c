"""Domain entities."""

from permsync.domain.entities.link import LinkRecord
from permsync.domain.entities.permission_set import (
    PermissionSetRecord,
    PermissionSetReference,
)

__all__ = [
    "LinkRecord",
    "PermissionSetRecord",
    "PermissionSetReference",
]
