"""Creates the Metadata Store and Reference Store tables."""

import logging
from typing import Any

from permsync.domain.exceptions import StoreReadError, StoreWriteError
from permsync.infrastructure.aws.session import call, error_code

logger = logging.getLogger(__name__)

KEY_ATTRIBUTE = "permissionSetName"


class TableProvisioner:
    """Ensures both tables exist: on-demand billing, KMS encryption, point-in-time recovery.

    Only the Metadata Store table carries a NEW_AND_OLD_IMAGES stream.
    Existing tables are left untouched.
    """

    def __init__(
        self,
        client: Any,
        permission_set_table: str,
        permission_set_arn_table: str,
        kms_key_arn: str = "",
    ) -> None:
        self._client = client
        self._permission_set_table = permission_set_table
        self._permission_set_arn_table = permission_set_arn_table
        self._kms_key_arn = kms_key_arn

    async def ensure_tables(self) -> list[str]:
        """Create missing tables. Returns the names of tables that were created."""
        created = []
        if await self._ensure(self._permission_set_table, with_stream=True):
            created.append(self._permission_set_table)
        if await self._ensure(self._permission_set_arn_table, with_stream=False):
            created.append(self._permission_set_arn_table)
        return created

    async def _ensure(self, table_name: str, with_stream: bool) -> bool:
        if await self._exists(table_name):
            logger.info("Table %s already exists", table_name)
            return False

        params: dict[str, Any] = {
            "TableName": table_name,
            "AttributeDefinitions": [{"AttributeName": KEY_ATTRIBUTE, "AttributeType": "S"}],
            "KeySchema": [{"AttributeName": KEY_ATTRIBUTE, "KeyType": "HASH"}],
            "BillingMode": "PAY_PER_REQUEST",
        }
        if self._kms_key_arn:
            params["SSESpecification"] = {
                "Enabled": True,
                "SSEType": "KMS",
                "KMSMasterKeyId": self._kms_key_arn,
            }
        if with_stream:
            params["StreamSpecification"] = {
                "StreamEnabled": True,
                "StreamViewType": "NEW_AND_OLD_IMAGES",
            }
        await call(self._client.create_table, StoreWriteError, f"Creating table {table_name} failed", **params)

        waiter = self._client.get_waiter("table_exists")
        await call(waiter.wait, StoreWriteError, f"Waiting for table {table_name} failed", TableName=table_name)
        await call(
            self._client.update_continuous_backups,
            StoreWriteError,
            f"Enabling point-in-time recovery on {table_name} failed",
            TableName=table_name,
            PointInTimeRecoverySpecification={"PointInTimeRecoveryEnabled": True},
        )
        logger.info("Created table %s", table_name)
        return True

    async def _exists(self, table_name: str) -> bool:
        try:
            await call(
                self._client.describe_table,
                StoreReadError,
                f"Describing table {table_name} failed",
                TableName=table_name,
            )
        except StoreReadError as e:
            if error_code(e.__cause__) == "ResourceNotFoundException":
                return False
            raise
        return True
