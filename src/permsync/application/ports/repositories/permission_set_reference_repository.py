"""Permission set reference repository port - the Reference Store."""

from typing import Protocol

from permsync.domain.entities import PermissionSetReference


class PermissionSetReferenceRepository(Protocol):
    """Port for provider references. Written downstream; read and cleaned up here."""

    async def get(self, name: str) -> PermissionSetReference | None: ...

    async def delete(self, name: str) -> bool: ...
