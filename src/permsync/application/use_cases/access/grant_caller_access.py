"""Grant caller access use case (deployment time)."""

import logging

from permsync.application.ports import AccessGrantor
from permsync.domain.exceptions import ConfigurationError
from permsync.domain.object_layout import PERMISSION_SETS_PREFIX

logger = logging.getLogger(__name__)


class GrantCallerAccessUseCase:
    """Give the caller principal read/write on the permission set path and use of its key.

    Without this, event-mode callers cannot drop or remove permission set
    files even though every other component is deployed.
    """

    def __init__(self, grantor: AccessGrantor) -> None:
        self._grantor = grantor

    async def execute(self, principal_arn: str) -> bool:
        """Wire both grants. Returns whether a key grant was made."""
        if not principal_arn:
            raise ConfigurationError("permission_set_caller_role_arn is required to grant access")

        await self._grantor.grant_object_read_write(principal_arn, PERMISSION_SETS_PREFIX)
        key_granted = await self._grantor.grant_key_encrypt_decrypt(principal_arn)
        if not key_granted:
            logger.warning("Bucket has no customer managed key; skipped key grant for %s", principal_arn)
        logger.info("Granted %s access to %s", principal_arn, PERMISSION_SETS_PREFIX)
        return key_granted
