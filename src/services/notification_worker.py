"""
Notification worker: queue message -> email -> acknowledgement.

Each call to consume_once() is one pass through

    IDLE -> POLLING -> PROCESSING -> DELIVERING -> ACKNOWLEDGING -> IDLE

stopping at POLLING when the queue is empty. Any failure before the email
is handed off propagates with the message left on the queue; SQS makes it
visible again after the visibility timeout, so retries are the queue's job.
"""

from __future__ import annotations

from enum import Enum
import json
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from models.queue import ConsumeResult, ConsumeStatus, DeliveryReceipt, QueuedMessage
from models.ticket import PurchaseEvent
from services.mail_service import MailTransport
from services.notification_service import NotificationRenderer
from services.queue_service import DeliveryAcknowledger, WorkQueue
from utils.error_handling import (
    DeliveryPartialFailureError,
    EnvelopeError,
    MalformedEventError,
)
from utils.logging_config import get_logger

logger = get_logger(__name__)


class ConsumerState(str, Enum):
    IDLE = "idle"
    POLLING = "polling"
    PROCESSING = "processing"
    DELIVERING = "delivering"
    ACKNOWLEDGING = "acknowledging"


class DeliveryPolicy(str, Enum):
    """
    What to do when an email went out but its message could not be deleted.

    AT_LEAST_ONCE: log it and report UNACKNOWLEDGED; the buyer may get the
    same email twice when the message is redelivered.
    STRICT: raise DeliveryPartialFailureError so the invocation fails.
    """

    AT_LEAST_ONCE = "at_least_once"
    STRICT = "strict"


def unwrap_transport_envelope(body: str) -> str:
    """
    Return the original published payload from an SQS message body.

    SNS delivers to SQS wrapped in a notification document; the payload we
    published is the string in its `Message` attribute. Exactly one layer
    is removed.
    """
    try:
        envelope = json.loads(body)
    except (TypeError, ValueError) as exc:
        raise EnvelopeError(f"Message body is not JSON: {exc}") from exc

    if not isinstance(envelope, dict):
        raise EnvelopeError("Message body is not an SNS notification object")
    payload = envelope.get("Message")
    if not isinstance(payload, str):
        raise EnvelopeError("SNS notification has no string Message attribute")
    return payload


def parse_purchase_event(payload: str) -> PurchaseEvent:
    try:
        return PurchaseEvent.from_message(payload)
    except PydanticValidationError as exc:
        raise MalformedEventError(f"Invalid purchase event: {exc}") from exc


class NotificationQueueConsumer:
    """Consume at most one purchase event per call and email the buyer."""

    def __init__(
        self,
        queue: WorkQueue,
        transport: MailTransport,
        renderer: NotificationRenderer,
        acknowledger: DeliveryAcknowledger,
        sender_address: str,
        policy: DeliveryPolicy = DeliveryPolicy.AT_LEAST_ONCE,
    ):
        self.queue = queue
        self.transport = transport
        self.renderer = renderer
        self.acknowledger = acknowledger
        self.sender_address = sender_address
        self.policy = policy
        self.state = ConsumerState.IDLE
        self.failed_state: Optional[ConsumerState] = None

    def consume_once(self) -> ConsumeResult:
        self.failed_state = None
        try:
            return self._iterate()
        except Exception:
            self.failed_state = self.state
            raise
        finally:
            self.state = ConsumerState.IDLE

    def _iterate(self) -> ConsumeResult:
        self.state = ConsumerState.POLLING
        message = self.queue.poll()
        if message is None:
            logger.info("No messages to process")
            return ConsumeResult(status=ConsumeStatus.EMPTY)

        self.state = ConsumerState.PROCESSING
        log_extra = {"message_id": message.message_id, "receive_count": message.receive_count}
        try:
            event = parse_purchase_event(unwrap_transport_envelope(message.body))
        except (EnvelopeError, MalformedEventError):
            logger.exception("Unreadable queue message", extra=log_extra)
            raise
        log_extra["ticket_id"] = event.ticket.id
        notification = self.renderer.render(event)

        self.state = ConsumerState.DELIVERING
        receipt = self.transport.send(
            sender=self.sender_address,
            recipient=event.ticket.email,
            subject=notification.subject,
            body=notification.body,
        )
        logger.info("Ticket email handed off", extra={**log_extra, "transport": receipt.transport})

        self.state = ConsumerState.ACKNOWLEDGING
        return self._acknowledge(message, receipt, event, log_extra)

    def _acknowledge(
        self,
        message: QueuedMessage,
        receipt: DeliveryReceipt,
        event: PurchaseEvent,
        log_extra: dict,
    ) -> ConsumeResult:
        try:
            self.acknowledger.acknowledge(message, receipt)
        except DeliveryPartialFailureError:
            if self.policy is DeliveryPolicy.STRICT:
                raise
            logger.warning(
                "Email sent but message not deleted; it will be redelivered",
                extra=log_extra,
                exc_info=True,
            )
            return ConsumeResult(
                status=ConsumeStatus.UNACKNOWLEDGED,
                message_id=message.message_id,
                ticket_id=event.ticket.id,
            )

        logger.info("1 message processed successfully", extra=log_extra)
        return ConsumeResult(
            status=ConsumeStatus.DELIVERED,
            message_id=message.message_id,
            ticket_id=event.ticket.id,
        )
