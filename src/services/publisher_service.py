"""Publishes purchase events to the SNS fan-out topic."""

from __future__ import annotations

from botocore.exceptions import BotoCoreError, ClientError

from models.gig import Gig
from models.ticket import PurchaseEvent, Ticket
from repositories.sns_repo import TopicRepository
from utils.error_handling import DependencyUnavailableError
from utils.logging_config import get_logger

logger = get_logger(__name__)


class PurchaseEventPublisher:
    """Serialize (ticket, gig) snapshots and hand them to the topic."""

    def __init__(self, topic: TopicRepository):
        self.topic = topic

    def publish(self, ticket: Ticket, gig: Gig) -> str:
        """
        Publish synchronously and return the SNS message id.

        Delivery to subscribed queues happens later and independently; a
        rejected publish raises so the purchase is not reported as accepted.
        """
        event = PurchaseEvent(ticket=ticket, gig=gig)
        try:
            message_id = self.topic.publish(event.to_message())
        except (BotoCoreError, ClientError) as exc:
            raise DependencyUnavailableError("topic", str(exc), cause=exc) from exc

        logger.info(
            "Purchase event published",
            extra={"ticket_id": ticket.id, "gig": gig.slug, "message_id": message_id},
        )
        return message_id
