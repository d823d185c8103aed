"""Work queue DTOs used by the notification worker."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class QueuedMessage:
    """An SQS message: raw body plus the receipt handle needed to delete it."""

    message_id: str
    body: str
    receipt_handle: str
    receive_count: int = 1


@dataclass(frozen=True)
class DeliveryReceipt:
    """Evidence that the mail transport accepted a message for sending."""

    transport: str
    message_id: Optional[str] = None


class ConsumeStatus(str, Enum):
    """Outcome of one worker iteration."""

    EMPTY = "empty"
    DELIVERED = "delivered"
    UNACKNOWLEDGED = "unacknowledged"


@dataclass
class ConsumeResult:
    status: ConsumeStatus
    message_id: Optional[str] = None
    ticket_id: Optional[str] = None
