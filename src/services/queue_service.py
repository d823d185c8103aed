"""Work queue access and delivery acknowledgement."""

from __future__ import annotations

from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError

from models.queue import DeliveryReceipt, QueuedMessage
from repositories.sqs_repo import QueueRepository
from utils.error_handling import DeliveryPartialFailureError, DependencyUnavailableError
from utils.logging_config import get_logger

logger = get_logger(__name__)


class WorkQueue:
    """Poll the notification queue one message at a time."""

    def __init__(
        self,
        repository: QueueRepository,
        wait_seconds: int = 0,
        visibility_timeout: Optional[int] = None,
    ):
        self.repository = repository
        self.wait_seconds = wait_seconds
        self.visibility_timeout = visibility_timeout

    def poll(self) -> Optional[QueuedMessage]:
        """Return the next visible message, or None when the queue is empty."""
        try:
            messages = self.repository.receive(
                max_messages=1,
                wait_seconds=self.wait_seconds,
                visibility_timeout=self.visibility_timeout,
            )
        except (BotoCoreError, ClientError) as exc:
            raise DependencyUnavailableError("queue", str(exc), cause=exc) from exc

        if not messages:
            return None
        raw = messages[0]
        return QueuedMessage(
            message_id=raw["MessageId"],
            body=raw["Body"],
            receipt_handle=raw["ReceiptHandle"],
            receive_count=int(raw.get("Attributes", {}).get("ApproximateReceiveCount", 1)),
        )

    def delete(self, message: QueuedMessage) -> None:
        self.repository.delete(message.receipt_handle)


class DeliveryAcknowledger:
    """Remove a message from the queue once its email has been handed off."""

    def __init__(self, queue: WorkQueue):
        self.queue = queue

    def acknowledge(self, message: QueuedMessage, receipt: Optional[DeliveryReceipt]) -> None:
        """
        Delete the message. A receipt from the mail transport is required.

        Raises DeliveryPartialFailureError when the delete fails; the message
        will then reappear after its visibility timeout and be sent again.
        """
        if receipt is None:
            raise ValueError("Refusing to acknowledge a message that was not delivered")
        try:
            self.queue.delete(message)
        except (BotoCoreError, ClientError) as exc:
            raise DeliveryPartialFailureError(message.message_id, cause=exc) from exc
        logger.info(
            "Message acknowledged",
            extra={"message_id": message.message_id, "transport": receipt.transport},
        )
