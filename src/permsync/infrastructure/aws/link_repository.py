"""DynamoDB link repository - read-only view of the links table."""

from typing import Any

from permsync.domain.entities import LinkRecord
from permsync.domain.exceptions import LinkLookupError
from permsync.infrastructure.aws.dynamodb_codec import from_item, to_item
from permsync.infrastructure.aws.session import call, check_table_ready


class DynamoDBLinkRepository:
    """Link repository implementation, querying the index keyed by permission set name."""

    def __init__(self, client: Any, table_name: str, index_name: str = "permissionSetName") -> None:
        self._client = client
        self._table = table_name
        self._index = index_name

    async def list_by_permission_set(self, name: str) -> list[LinkRecord]:
        """List all links for permission set, following pagination."""
        links: list[LinkRecord] = []
        params: dict[str, Any] = {
            "TableName": self._table,
            "IndexName": self._index,
            "KeyConditionExpression": "#ps = :ps",
            "ExpressionAttributeNames": {"#ps": "permissionSetName"},
            "ExpressionAttributeValues": to_item({":ps": name}),
        }
        while True:
            resp = await call(
                self._client.query,
                LinkLookupError,
                f"Looking up links for {name} failed",
                **params,
            )
            for item in resp.get("Items", []):
                values = from_item(item)
                links.append(
                    LinkRecord(
                        link_id=str(values.get("awsEntityId", "")),
                        permission_set_name=values.get("permissionSetName", name),
                        principal_name=values.get("principalName"),
                        principal_type=values.get("principalType"),
                        target=values.get("awsEntityData"),
                    )
                )
            last_key = resp.get("LastEvaluatedKey")
            if not last_key:
                return links
            params["ExclusiveStartKey"] = last_key

    async def check_ready(self) -> None:
        """Raise LinkLookupError unless the links table is usable."""
        await check_table_ready(self._client, self._table, LinkLookupError)
