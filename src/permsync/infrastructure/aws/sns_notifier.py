"""SNS operator notification adapter."""

import json
from typing import Any

from permsync.application.ports import OperatorNotification
from permsync.domain.exceptions import StoreWriteError
from permsync.infrastructure.aws.session import call

MAX_SUBJECT_LENGTH = 100


class SNSErrorNotifier:
    """Publishes operator notifications to an SNS topic."""

    def __init__(self, client: Any, topic_arn: str) -> None:
        self._client = client
        self._topic_arn = topic_arn

    async def notify(self, notification: OperatorNotification) -> None:
        """Publish one message per notification."""
        subject = f"{notification.handler} {notification.kind}: {notification.object_key}"
        # SNS subjects must be printable ASCII without line breaks.
        subject = subject.encode("ascii", "replace").decode("ascii").replace("\n", " ")
        await call(
            self._client.publish,
            StoreWriteError,
            f"Publishing notification for {notification.object_key} failed",
            TopicArn=self._topic_arn,
            Subject=subject[:MAX_SUBJECT_LENGTH],
            Message=json.dumps(notification.to_message()),
        )
