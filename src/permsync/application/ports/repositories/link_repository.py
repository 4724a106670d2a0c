"""Link repository port - consumers of a permission set."""

from typing import Protocol

from permsync.domain.entities import LinkRecord


class LinkRepository(Protocol):
    """Port for looking up links that depend on a permission set."""

    async def list_by_permission_set(self, name: str) -> list[LinkRecord]: ...
