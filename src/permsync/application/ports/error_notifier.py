"""Error notifier port - fire-and-forget operator notifications."""

from dataclasses import dataclass
from typing import Protocol


@dataclass
class OperatorNotification:
    """Message sent to the operator notification sink."""

    kind: str
    handler: str
    object_key: str
    failure_reason: str

    def to_message(self) -> dict[str, str]:
        return {
            "kind": self.kind,
            "handler": self.handler,
            "objectKey": self.object_key,
            "failureReason": self.failure_reason,
        }


class ErrorNotifier(Protocol):
    """Port for publishing operator notifications."""

    async def notify(self, notification: OperatorNotification) -> None: ...
