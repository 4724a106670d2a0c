"""Access grantor port - deployment-time authorization wiring."""

from typing import Protocol


class AccessGrantor(Protocol):
    """Port for granting a principal access to the permission set path and its key."""

    async def grant_object_read_write(self, principal_arn: str, prefix: str) -> None: ...

    async def grant_key_encrypt_decrypt(self, principal_arn: str) -> bool: ...
