"""Bucket policy and KMS grant wiring for the permission set caller."""

import json
from typing import Any

from permsync.domain.exceptions import StoreReadError, StoreWriteError
from permsync.infrastructure.aws.session import call, error_code

LIST_SID = "PermissionSetCallerList"
READ_WRITE_SID = "PermissionSetCallerReadWrite"
KEY_GRANT_NAME = "permission-set-caller"

BUCKET_ACTIONS = ["s3:GetBucket*", "s3:List*"]
OBJECT_ACTIONS = [
    "s3:GetObject*",
    "s3:PutObject",
    "s3:PutObjectTagging",
    "s3:DeleteObject*",
    "s3:Abort*",
]
KEY_OPERATIONS = [
    "Encrypt",
    "Decrypt",
    "ReEncryptFrom",
    "ReEncryptTo",
    "GenerateDataKey",
    "GenerateDataKeyWithoutPlaintext",
]


class AWSAccessGrantor:
    """Grants a principal access to the artefacts bucket and its customer managed key."""

    def __init__(self, s3_client: Any, kms_client: Any, bucket: str, partition: str = "aws") -> None:
        self._s3 = s3_client
        self._kms = kms_client
        self._bucket = bucket
        self._bucket_arn = f"arn:{partition}:s3:::{bucket}"

    async def grant_object_read_write(self, principal_arn: str, prefix: str) -> None:
        """Merge caller statements into the bucket policy, replacing earlier versions."""
        policy = await self._get_bucket_policy()
        ours = {LIST_SID, READ_WRITE_SID}
        statements = [s for s in policy.get("Statement", []) if s.get("Sid") not in ours]
        statements.append(
            {
                "Sid": LIST_SID,
                "Effect": "Allow",
                "Principal": {"AWS": principal_arn},
                "Action": BUCKET_ACTIONS,
                "Resource": self._bucket_arn,
            }
        )
        statements.append(
            {
                "Sid": READ_WRITE_SID,
                "Effect": "Allow",
                "Principal": {"AWS": principal_arn},
                "Action": OBJECT_ACTIONS,
                "Resource": f"{self._bucket_arn}/{prefix}*",
            }
        )
        policy["Statement"] = statements
        policy.setdefault("Version", "2012-10-17")
        await call(
            self._s3.put_bucket_policy,
            StoreWriteError,
            f"Updating policy of bucket {self._bucket} failed",
            Bucket=self._bucket,
            Policy=json.dumps(policy),
        )

    async def grant_key_encrypt_decrypt(self, principal_arn: str) -> bool:
        """Grant use of the bucket's KMS key. False when the bucket has no such key."""
        key_id = await self._bucket_key_id()
        if not key_id:
            return False
        await call(
            self._kms.create_grant,
            StoreWriteError,
            f"Granting {principal_arn} use of key {key_id} failed",
            KeyId=key_id,
            GranteePrincipal=principal_arn,
            Operations=KEY_OPERATIONS,
            Name=KEY_GRANT_NAME,
        )
        return True

    async def _get_bucket_policy(self) -> dict[str, Any]:
        try:
            resp = await call(
                self._s3.get_bucket_policy,
                StoreReadError,
                f"Reading policy of bucket {self._bucket} failed",
                Bucket=self._bucket,
            )
        except StoreReadError as e:
            if error_code(e.__cause__) == "NoSuchBucketPolicy":
                return {"Version": "2012-10-17", "Statement": []}
            raise
        return json.loads(resp["Policy"])

    async def _bucket_key_id(self) -> str | None:
        try:
            resp = await call(
                self._s3.get_bucket_encryption,
                StoreReadError,
                f"Reading encryption of bucket {self._bucket} failed",
                Bucket=self._bucket,
            )
        except StoreReadError as e:
            if error_code(e.__cause__) == "ServerSideEncryptionConfigurationNotFoundError":
                return None
            raise
        for rule in resp.get("ServerSideEncryptionConfiguration", {}).get("Rules", []):
            default = rule.get("ApplyServerSideEncryptionByDefault", {})
            if default.get("SSEAlgorithm") in ("aws:kms", "aws:kms:dsse") and default.get("KMSMasterKeyID"):
                return default["KMSMasterKeyID"]
        return None
