"""Object store port - where event-mode permission set files live."""

from typing import Protocol


class ObjectStore(Protocol):
    """Port for reading permission set objects."""

    async def get_object_body(self, key: str) -> bytes: ...
