"""S3 object store adapter."""

from typing import Any

from permsync.domain.exceptions import StoreReadError
from permsync.infrastructure.aws.session import call


class S3ObjectStore:
    """Reads permission set objects from the artefacts bucket."""

    def __init__(self, client: Any, bucket: str) -> None:
        self._client = client
        self._bucket = bucket

    async def get_object_body(self, key: str) -> bytes:
        """Fetch the full object body."""
        resp = await call(
            self._client.get_object,
            StoreReadError,
            f"Fetching s3://{self._bucket}/{key} failed",
            Bucket=self._bucket,
            Key=key,
        )
        return await call(
            resp["Body"].read,
            StoreReadError,
            f"Reading body of s3://{self._bucket}/{key} failed",
        )
