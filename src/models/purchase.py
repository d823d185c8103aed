"""Purchase request models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class FieldError(BaseModel):
    """One broken rule: which field and why."""

    field: str
    message: str


class PurchaseRequest(BaseModel):
    """
    A purchase payload that already passed validation.

    Card details are only ever shape-checked; they are excluded from every
    dump so they cannot leak into logs or events.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    gig: str
    name: str
    email: str
    card_number: str
    card_expiry_month: int
    card_expiry_year: int
    card_cvc: str = Field(alias="cardCVC")
    disclaimer_accepted: bool

    @field_validator("card_number", "card_cvc", mode="before")
    @classmethod
    def stringify(cls, value: Any) -> Any:
        """Clients sometimes send digits as JSON numbers."""
        return str(value) if isinstance(value, int) else value

    def buyer(self) -> dict:
        """Fields safe to log or persist."""
        return self.model_dump(include={"gig", "name", "email"})
