"""DynamoDB permission set reference repository - the Reference Store."""

from typing import Any

from permsync.domain.entities import PermissionSetReference
from permsync.domain.exceptions import StoreReadError, StoreWriteError
from permsync.infrastructure.aws.dynamodb_codec import from_item, to_item
from permsync.infrastructure.aws.session import call, check_table_ready

KEY_ATTRIBUTE = "permissionSetName"
PROVIDER_ID_ATTRIBUTE = "permissionSetArn"


class DynamoDBPermissionSetReferenceRepository:
    """Reference repository implementation. Items are written by downstream provisioning."""

    def __init__(self, client: Any, table_name: str) -> None:
        self._client = client
        self._table = table_name

    async def get(self, name: str) -> PermissionSetReference | None:
        """Get reference by permission set name; None while provisioning lags."""
        resp = await call(
            self._client.get_item,
            StoreReadError,
            f"Reading reference for {name} failed",
            TableName=self._table,
            Key=to_item({KEY_ATTRIBUTE: name}),
        )
        item = resp.get("Item")
        if not item:
            return None
        values = from_item(item)
        return PermissionSetReference(
            name=values[KEY_ATTRIBUTE],
            provider_id=values.get(PROVIDER_ID_ATTRIBUTE, ""),
        )

    async def delete(self, name: str) -> bool:
        """Delete reference. Returns whether one existed."""
        resp = await call(
            self._client.delete_item,
            StoreWriteError,
            f"Deleting reference for {name} failed",
            TableName=self._table,
            Key=to_item({KEY_ATTRIBUTE: name}),
            ReturnValues="ALL_OLD",
        )
        return bool(resp.get("Attributes"))

    async def check_ready(self) -> None:
        await check_table_ready(self._client, self._table, StoreReadError)
