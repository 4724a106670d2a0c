"""Repository ports."""

from permsync.application.ports.repositories.link_repository import LinkRepository
from permsync.application.ports.repositories.permission_set_reference_repository import (
    PermissionSetReferenceRepository,
)
from permsync.application.ports.repositories.permission_set_repository import (
    PermissionSetRepository,
)

__all__ = [
    "LinkRepository",
    "PermissionSetReferenceRepository",
    "PermissionSetRepository",
]
