"""Ticket purchase flow: validate, resolve the gig, issue, publish."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from models.ticket import Ticket
from services.catalog_service import CatalogLookup
from services.publisher_service import PurchaseEventPublisher
from services.validation_service import ValidationEngine
from utils.error_handling import UnknownGigError, ValidationFailedError
from utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class PurchaseResult:
    """What the caller learns about an accepted purchase."""

    ticket: Ticket
    message_id: str


class PurchaseService:
    """Encapsulates ticket purchase logic for the synchronous request path."""

    def __init__(
        self,
        validator: ValidationEngine,
        catalog: CatalogLookup,
        publisher: PurchaseEventPublisher,
    ):
        self.validator = validator
        self.catalog = catalog
        self.publisher = publisher

    def purchase(self, payload: Mapping[str, Any]) -> PurchaseResult:
        """
        Turn a raw payload into a published ticket.

        Raises ValidationFailedError, UnknownGigError or
        DependencyUnavailableError; nothing is published unless every step
        before it succeeded.
        """
        errors = self.validator.validate(payload)
        if errors:
            raise ValidationFailedError(errors)

        request = self.validator.parse(payload)
        gig = self.catalog.get_gig(request.gig)
        if gig is None:
            raise UnknownGigError(request.gig)

        ticket = Ticket.issue(request)
        message_id = self.publisher.publish(ticket, gig)
        logger.info("Ticket purchased", extra={"ticket_id": ticket.id, "gig": gig.slug})
        return PurchaseResult(ticket=ticket, message_id=message_id)
