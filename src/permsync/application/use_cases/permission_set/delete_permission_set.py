"""Delete permission set use case (API mode)."""

import logging
from typing import Any

from permsync.application.dto.permission_set_dto import PermissionSetAck, validate_name
from permsync.application.ports import (
    LinkRepository,
    PermissionSetReferenceRepository,
    PermissionSetRepository,
)
from permsync.domain.exceptions import DependentLinksExist, ValidationError

logger = logging.getLogger(__name__)


class DeletePermissionSetUseCase:
    """Delete a permission set unless links still depend on it."""

    def __init__(
        self,
        permission_sets: PermissionSetRepository,
        references: PermissionSetReferenceRepository,
        links: LinkRepository,
    ) -> None:
        self._permission_sets = permission_sets
        self._references = references
        self._links = links

    async def execute(self, name: Any) -> PermissionSetAck:
        """Delete record and reference. Absent records are a no-op."""
        try:
            name = validate_name(name)
        except ValueError as e:
            raise ValidationError(str(e)) from None

        links = await self._links.list_by_permission_set(name)
        if links:
            raise DependentLinksExist(name, len(links))

        removed = await self._permission_sets.delete(name)
        await self._references.delete(name)
        if removed:
            logger.info("Deleted permission set %s", name)
        else:
            logger.info("Permission set %s already absent", name)
        return PermissionSetAck(name=name, status="deleted")
