"""S3 event notification dispatch for event-mode ingestion."""

import logging
from dataclasses import dataclass
from typing import Any

from permsync.application.use_cases.ingestion.ingest_created_object import (
    IngestCreatedObjectUseCase,
)
from permsync.application.use_cases.ingestion.ingest_removed_object import (
    IngestRemovedObjectUseCase,
)
from permsync.domain.object_layout import decode_event_key, is_permission_set_key

logger = logging.getLogger(__name__)

OBJECT_CREATED = "ObjectCreated:"
OBJECT_REMOVED = "ObjectRemoved:"


@dataclass
class ObjectEvent:
    """One record of an S3 notification."""

    event_name: str
    bucket: str
    key: str


def parse_records(event: dict[str, Any]) -> list[ObjectEvent]:
    """Extract object events from an S3 notification payload."""
    records = []
    for record in event.get("Records", []):
        s3 = record.get("s3", {})
        key = s3.get("object", {}).get("key")
        if not key:
            logger.warning("Skipping record without object key: %s", record.get("eventName"))
            continue
        records.append(
            ObjectEvent(
                event_name=record.get("eventName", ""),
                bucket=s3.get("bucket", {}).get("name", ""),
                key=decode_event_key(key),
            )
        )
    return records


def _matching(event: dict[str, Any], event_prefix: str) -> list[str]:
    keys = []
    for record in parse_records(event):
        if not record.event_name.startswith(event_prefix):
            logger.warning("Skipping %s event for %s", record.event_name, record.key)
        elif not is_permission_set_key(record.key):
            logger.warning("Skipping %s: outside permission set layout", record.key)
        else:
            keys.append(record.key)
    return keys


async def dispatch_created(event: dict[str, Any], use_case: IngestCreatedObjectUseCase) -> list[str]:
    """Ingest every created permission set object. Stops at the first failure."""
    keys = _matching(event, OBJECT_CREATED)
    for key in keys:
        await use_case.execute(key)
    return keys


async def dispatch_removed(event: dict[str, Any], use_case: IngestRemovedObjectUseCase) -> list[str]:
    """Remove every deleted permission set object. Stops at the first failure."""
    keys = _matching(event, OBJECT_REMOVED)
    for key in keys:
        await use_case.execute(key)
    return keys
