"""boto3 session and client construction."""

import asyncio
from collections.abc import Callable
from typing import Any, TypeVar

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

T = TypeVar("T")

# Redrive is owned by the event source or API caller; keep SDK retries short.
_CLIENT_CONFIG = Config(retries={"max_attempts": 3, "mode": "standard"})


def create_session(region_name: str) -> boto3.session.Session:
    """Create a boto3 session for one region."""
    return boto3.session.Session(region_name=region_name)


def create_client(session: boto3.session.Session, service: str) -> Any:
    """Create a low-level client with the shared retry configuration."""
    return session.client(service, config=_CLIENT_CONFIG)


def error_code(err: Exception) -> str:
    """AWS error code of a ClientError, '' for anything else."""
    if isinstance(err, ClientError):
        return err.response.get("Error", {}).get("Code", "")
    return ""


async def call(
    fn: Callable[..., T],
    error_cls: type[Exception],
    message: str,
    **kwargs: Any,
) -> T:
    """Run a blocking boto3 call off the event loop, translating SDK errors."""
    try:
        return await asyncio.to_thread(fn, **kwargs)
    except (BotoCoreError, ClientError) as e:
        raise error_cls(f"{message}: {e}") from e


READY_TABLE_STATUSES = ("ACTIVE", "UPDATING")


async def check_table_ready(client: Any, table_name: str, error_cls: type[Exception]) -> None:
    """Raise error_cls unless the table exists and serves reads and writes."""
    resp = await call(
        client.describe_table,
        error_cls,
        f"Describing table {table_name} failed",
        TableName=table_name,
    )
    status = resp.get("Table", {}).get("TableStatus", "")
    if status not in READY_TABLE_STATUSES:
        raise error_cls(f"Table {table_name} is {status or 'unavailable'}")
