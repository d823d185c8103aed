"""Ticket and purchase event models."""

from datetime import datetime, timezone
from typing import Optional
import uuid

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from models.gig import Gig
from models.purchase import PurchaseRequest


class Ticket(BaseModel):
    """Proof of a successful purchase. Never updated once issued."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: str
    created_at: datetime
    name: str
    email: str
    gig: str

    @classmethod
    def issue(cls, request: PurchaseRequest, now: Optional[datetime] = None) -> "Ticket":
        """Create a new ticket with a random uuid4 access code."""
        return cls(
            id=str(uuid.uuid4()),
            created_at=now or datetime.now(timezone.utc),
            name=request.name,
            email=request.email,
            gig=request.gig,
        )


class PurchaseEvent(BaseModel):
    """Snapshot of a ticket and the gig it was bought for, as published."""

    model_config = ConfigDict(frozen=True)

    ticket: Ticket
    gig: Gig

    def to_message(self) -> str:
        """Serialize with camelCase keys, the format consumers expect."""
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_message(cls, payload: str) -> "PurchaseEvent":
        return cls.model_validate_json(payload)
