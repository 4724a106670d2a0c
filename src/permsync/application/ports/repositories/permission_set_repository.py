"""Permission set repository port - the Metadata Store."""

from typing import Protocol

from permsync.domain.entities import PermissionSetRecord


class PermissionSetRepository(Protocol):
    """Port for permission set persistence. Single-key atomic operations only."""

    async def get(self, name: str) -> PermissionSetRecord | None: ...

    async def put(self, record: PermissionSetRecord) -> None: ...

    async def delete(self, name: str) -> bool: ...
