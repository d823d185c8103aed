"""
Worker Lambda that emails ticket codes, triggered on a schedule.

Processing errors are not caught: a failed invocation is how the scheduler
and CloudWatch learn about it, and the unacknowledged message stays on the
queue for the next run.
"""

from __future__ import annotations

from typing import Optional

from models.queue import ConsumeStatus
from utils.logging_config import get_logger

logger = get_logger(__name__)

# Lazy-loaded consumer, reused across warm invocations
_consumer: Optional["NotificationQueueConsumer"] = None


def _get_consumer():
    """Lazy-load NotificationQueueConsumer with its collaborators."""
    global _consumer
    if _consumer is None:
        from repositories.sqs_repo import QueueRepository
        from services.mail_service import build_mail_transport
        from services.notification_service import NotificationRenderer
        from services.notification_worker import NotificationQueueConsumer
        from services.queue_service import DeliveryAcknowledger, WorkQueue
        from utils.settings import AppSettings

        settings = AppSettings.from_environment()
        queue = WorkQueue(
            QueueRepository(settings.queue_url),
            wait_seconds=settings.queue_wait_seconds,
            visibility_timeout=settings.queue_visibility_timeout,
        )
        _consumer = NotificationQueueConsumer(
            queue=queue,
            transport=build_mail_transport(settings),
            renderer=NotificationRenderer(),
            acknowledger=DeliveryAcknowledger(queue),
            sender_address=settings.sender_address,
        )
    return _consumer


def lambda_handler(event, context):
    """Process at most one queued purchase event."""
    result = _get_consumer().consume_once()
    if result.status is ConsumeStatus.EMPTY:
        return "no messages to process"
    logger.info(
        "Worker iteration finished",
        extra={"status": result.status.value, "ticket_id": result.ticket_id},
    )
    return "Completed"
