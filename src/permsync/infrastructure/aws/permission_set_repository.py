"""DynamoDB permission set repository - the Metadata Store."""

from typing import Any

from permsync.domain.entities import PermissionSetRecord
from permsync.domain.exceptions import StoreReadError, StoreWriteError, ValidationError
from permsync.infrastructure.aws.dynamodb_codec import from_item, to_item
from permsync.infrastructure.aws.session import call, check_table_ready, error_code

KEY_ATTRIBUTE = "permissionSetName"
DOCUMENT_ATTRIBUTE = "document"


class DynamoDBPermissionSetRepository:
    """Permission set repository implementation.

    Every mutation is a single-item write; the table's stream carries the
    old and new images to downstream consumers.
    """

    def __init__(self, client: Any, table_name: str) -> None:
        self._client = client
        self._table = table_name

    async def get(self, name: str) -> PermissionSetRecord | None:
        """Get permission set by name (strongly consistent)."""
        resp = await call(
            self._client.get_item,
            StoreReadError,
            f"Reading permission set {name} failed",
            TableName=self._table,
            Key=to_item({KEY_ATTRIBUTE: name}),
            ConsistentRead=True,
        )
        item = resp.get("Item")
        if not item:
            return None
        values = from_item(item)
        return PermissionSetRecord(
            name=values[KEY_ATTRIBUTE],
            document=values.get(DOCUMENT_ATTRIBUTE, {}),
        )

    async def put(self, record: PermissionSetRecord) -> None:
        """Create or overwrite permission set.

        An item the table refuses outright (over 400 KB, unsupported number)
        is a ValidationError; retrying it can never succeed.
        """
        try:
            await call(
                self._client.put_item,
                StoreWriteError,
                f"Writing permission set {record.name} failed",
                TableName=self._table,
                Item=to_item({KEY_ATTRIBUTE: record.name, DOCUMENT_ATTRIBUTE: record.document}),
            )
        except StoreWriteError as e:
            if error_code(e.__cause__) == "ValidationException":
                raise ValidationError(
                    f"Permission set {record.name} cannot be stored: {e.__cause__}"
                ) from e
            raise

    async def delete(self, name: str) -> bool:
        """Delete permission set. Returns whether an item existed."""
        resp = await call(
            self._client.delete_item,
            StoreWriteError,
            f"Deleting permission set {name} failed",
            TableName=self._table,
            Key=to_item({KEY_ATTRIBUTE: name}),
            ReturnValues="ALL_OLD",
        )
        return bool(resp.get("Attributes"))

    async def check_ready(self) -> None:
        """Raise StoreReadError unless the table is usable."""
        await check_table_ready(self._client, self._table, StoreReadError)
