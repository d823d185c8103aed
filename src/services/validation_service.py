"""
Purchase request validation.

Every rule runs on every request, so a client gets the complete list of
problems in one round trip instead of fixing fields one at a time.
Validation is pure: no catalog lookups, no clock, no network.
"""

from __future__ import annotations

from typing import Any, Callable, List, Mapping, Tuple

from models.purchase import FieldError, PurchaseRequest
from utils.validators import (
    is_credit_card,
    is_cvc,
    is_email,
    is_int_in_range,
    is_non_empty_string,
    is_present,
    to_int,
)

MANDATORY = "field is mandatory"

# (field, format check, message when the check fails), checked only once
# the field is present.
Rule = Tuple[str, Callable[[Any], bool], str]


class ValidationEngine:
    """Check a raw purchase payload against the fixed field schema."""

    def __init__(self, expiry_year_min: int = 2018, expiry_year_max: int = 2024):
        if expiry_year_min > expiry_year_max:
            raise ValueError("expiry_year_min must not exceed expiry_year_max")
        self.expiry_year_min = expiry_year_min
        self.expiry_year_max = expiry_year_max
        self._rules: Tuple[Rule, ...] = (
            ("gig", is_non_empty_string, "field must be a string"),
            ("name", is_non_empty_string, "field must be a string"),
            ("email", is_email, "field is not a valid email"),
            ("cardNumber", is_credit_card, "field is not a valid credit card number"),
            (
                "cardExpiryMonth",
                lambda v: is_int_in_range(v, 1, 12),
                "field must be an integer in range [1,12]",
            ),
            (
                "cardExpiryYear",
                lambda v: is_int_in_range(v, expiry_year_min, expiry_year_max),
                f"field must be an integer in range [{expiry_year_min},{expiry_year_max}]",
            ),
            ("cardCVC", is_cvc, "field must be a valid CVC"),
        )

    def validate(self, payload: Mapping[str, Any]) -> List[FieldError]:
        """Return every broken rule in field order; empty means accept."""
        errors: List[FieldError] = []
        for field, check, message in self._rules:
            value = payload.get(field)
            if not is_present(value):
                errors.append(FieldError(field=field, message=MANDATORY))
            elif not check(value):
                errors.append(FieldError(field=field, message=message))

        # Strict identity: the string "true" or 1 is not acceptance.
        accepted = payload.get("disclaimerAccepted")
        if accepted is None:
            errors.append(FieldError(field="disclaimerAccepted", message=MANDATORY))
        elif accepted is not True:
            errors.append(FieldError(field="disclaimerAccepted", message="field must be true"))
        return errors

    def parse(self, payload: Mapping[str, Any]) -> PurchaseRequest:
        """Build the typed request. Call only after validate() returned no errors."""
        data = dict(payload)
        for field in ("cardExpiryMonth", "cardExpiryYear"):
            data[field] = to_int(data.get(field))
        return PurchaseRequest.model_validate(data)
