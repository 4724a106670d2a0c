"""Ingest created object use case (event mode, create/update)."""

import json
import logging

from permsync.application.dto.permission_set_dto import validate_document, validate_name
from permsync.application.ports import ErrorNotifier, ObjectStore, PermissionSetRepository
from permsync.application.use_cases.ingestion.base import EventIngestionUseCase
from permsync.domain.entities import PermissionSetRecord
from permsync.domain.exceptions import ParseError
from permsync.domain.object_layout import permission_set_name_from_key

logger = logging.getLogger(__name__)


class IngestCreatedObjectUseCase(EventIngestionUseCase):
    """Upsert the permission set described by a newly created object."""

    handler_name = "permissionSetCu"

    def __init__(
        self,
        object_store: ObjectStore,
        permission_sets: PermissionSetRepository,
        notifier: ErrorNotifier,
    ) -> None:
        super().__init__(notifier)
        self._object_store = object_store
        self._permission_sets = permission_sets

    async def execute(self, object_key: str) -> PermissionSetRecord:
        """Fetch, parse and upsert. Redelivery of the same event is harmless."""
        try:
            name = _name_for(object_key)
            body = await self._object_store.get_object_body(object_key)
            document = _parse_document(body)
            record = PermissionSetRecord(name=name, document=document)
            await self._permission_sets.put(record)
        except Exception as e:
            raise await self._fail(object_key, e) from e

        logger.info("Ingested permission set %s from %s", name, object_key)
        return record


def _name_for(object_key: str) -> str:
    try:
        return validate_name(permission_set_name_from_key(object_key))
    except ValueError as e:
        raise ParseError(str(e)) from None


def _parse_document(body: bytes) -> dict:
    try:
        document = json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ParseError(f"Invalid JSON: {e}") from None
    try:
        return validate_document(document)
    except ValueError as e:
        raise ParseError(str(e)) from None
