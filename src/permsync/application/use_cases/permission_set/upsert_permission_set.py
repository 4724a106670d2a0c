"""Upsert permission set use case (API mode)."""

import logging
from typing import Any

from permsync.application.dto.permission_set_dto import (
    PermissionSetAck,
    validate_document,
    validate_name,
)
from permsync.application.ports import PermissionSetRepository
from permsync.domain.entities import PermissionSetRecord
from permsync.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)


class UpsertPermissionSetUseCase:
    """Create or overwrite a permission set record. Last write wins."""

    def __init__(self, permission_sets: PermissionSetRepository) -> None:
        self._permission_sets = permission_sets

    async def execute(self, name: Any, document: Any) -> PermissionSetAck:
        """Validate and write through to the Metadata Store."""
        try:
            name = validate_name(name)
            document = validate_document(document)
        except ValueError as e:
            raise ValidationError(str(e)) from None

        declared = document.get("permissionSetName")
        if declared is not None and declared != name:
            raise ValidationError(
                f"Document permissionSetName {declared!r} does not match name {name!r}"
            )

        await self._permission_sets.put(PermissionSetRecord(name=name, document=document))
        logger.info("Upserted permission set %s", name)
        return PermissionSetAck(name=name, status="upserted")
