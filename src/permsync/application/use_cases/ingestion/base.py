"""Shared failure policy for event-mode ingestion."""

import logging

from permsync.application.ports import ErrorNotifier, OperatorNotification
from permsync.domain.exceptions import IngestionFailed

logger = logging.getLogger(__name__)

FAILURE = "ingestion-failure"
DEPENDENT_LINKS_REMAINING = "dependent-links-remaining"


def describe_failure(exc: BaseException) -> str:
    """Failure reason text: exception type plus message."""
    return f"{type(exc).__name__}: {exc}"


class EventIngestionUseCase:
    """Base for handlers triggered by object store events.

    Failures are never retried here: the operator is notified once and
    IngestionFailed is raised so the event source can redrive.
    """

    handler_name = "event"

    def __init__(self, notifier: ErrorNotifier) -> None:
        self._notifier = notifier

    async def _publish(self, kind: str, object_key: str, reason: str) -> None:
        notification = OperatorNotification(
            kind=kind,
            handler=self.handler_name,
            object_key=object_key,
            failure_reason=reason,
        )
        try:
            await self._notifier.notify(notification)
        except Exception:
            # The notification sink is fire-and-forget; the caller's outcome stands.
            logger.exception("Could not publish %s notification for %s", kind, object_key)

    async def _fail(self, object_key: str, exc: BaseException) -> IngestionFailed:
        reason = describe_failure(exc)
        logger.error("Ingestion of %s failed: %s", object_key, reason)
        await self._publish(FAILURE, object_key, reason)
        return IngestionFailed(object_key, reason)
