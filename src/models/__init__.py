"""Pydantic models and DTOs for purchases, tickets and the work queue."""

from models.gig import Gig  # noqa: F401
from models.purchase import FieldError, PurchaseRequest  # noqa: F401
from models.queue import (  # noqa: F401
    ConsumeResult,
    ConsumeStatus,
    DeliveryReceipt,
    QueuedMessage,
)
from models.ticket import PurchaseEvent, Ticket  # noqa: F401
