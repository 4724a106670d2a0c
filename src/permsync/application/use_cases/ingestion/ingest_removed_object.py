"""Ingest removed object use case (event mode, delete)."""

import logging

from permsync.application.dto.permission_set_dto import validate_name
from permsync.application.ports import (
    ErrorNotifier,
    LinkRepository,
    PermissionSetReferenceRepository,
    PermissionSetRepository,
)
from permsync.application.use_cases.ingestion.base import (
    DEPENDENT_LINKS_REMAINING,
    EventIngestionUseCase,
)
from permsync.domain.object_layout import permission_set_name_from_key

logger = logging.getLogger(__name__)


class IngestRemovedObjectUseCase(EventIngestionUseCase):
    """Remove the permission set whose object was deleted.

    The object is already gone, so the record is deleted even when links still
    depend on the permission set. The provider reference is then kept for the
    links' cleanup and the operator is told about them.
    """

    handler_name = "permissionSetDel"

    def __init__(
        self,
        permission_sets: PermissionSetRepository,
        references: PermissionSetReferenceRepository,
        links: LinkRepository,
        notifier: ErrorNotifier,
    ) -> None:
        super().__init__(notifier)
        self._permission_sets = permission_sets
        self._references = references
        self._links = links

    async def execute(self, object_key: str) -> bool:
        """Delete record and reference. Returns False when nothing was stored."""
        try:
            name = validate_name(permission_set_name_from_key(object_key))
        except ValueError as e:
            # No record can exist under a name ingestion would reject.
            logger.warning("Removal of %s is a no-op: %s", object_key, e)
            return False

        try:
            links = await self._links.list_by_permission_set(name)
            removed = await self._permission_sets.delete(name)
            if not links:
                await self._references.delete(name)
        except Exception as e:
            raise await self._fail(object_key, e) from e

        if links:
            reason = (
                f"Permission set {name} deleted while {len(links)} dependent link(s) remain; "
                "provider reference kept for their cleanup: "
                + ", ".join(link.link_id for link in links)
            )
            logger.warning("%s", reason)
            await self._publish(DEPENDENT_LINKS_REMAINING, object_key, reason)

        if removed:
            logger.info("Deleted permission set %s after removal of %s", name, object_key)
        else:
            logger.info("Permission set %s already absent; %s removal is a no-op", name, object_key)
        return removed
