"""Get permission set use case."""

from permsync.application.dto.permission_set_dto import PermissionSetOutput
from permsync.application.ports import (
    PermissionSetReferenceRepository,
    PermissionSetRepository,
)
from permsync.domain.exceptions import NotFound


class GetPermissionSetUseCase:
    """Read a permission set with its provider reference, if one exists yet."""

    def __init__(
        self,
        permission_sets: PermissionSetRepository,
        references: PermissionSetReferenceRepository,
    ) -> None:
        self._permission_sets = permission_sets
        self._references = references

    async def execute(self, name: str) -> PermissionSetOutput:
        record = await self._permission_sets.get(name)
        if not record:
            raise NotFound("Permission set", name)
        reference = await self._references.get(name)
        return PermissionSetOutput(
            name=record.name,
            document=record.document,
            provider_id=reference.provider_id if reference else None,
        )
