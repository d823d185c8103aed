"""Ticket, gig and purchase event models."""

import json
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from models.gig import Gig
from models.purchase import PurchaseRequest
from models.ticket import PurchaseEvent, Ticket


@pytest.fixture
def request_model(valid_payload):
    return PurchaseRequest.model_validate(valid_payload)


def test_gig_reads_catalog_item(gig_item):
    gig = Gig.model_validate(gig_item)

    assert gig.slug == "blur-hyde-park"
    assert gig.band_name == "Blur"
    assert gig.collection_point.startswith("Hyde Park Corner")
    # Undeclared attributes are kept for the event snapshot.
    assert gig.model_dump(by_alias=True)["venue"] == "Hyde Park"


def test_gig_requires_notification_fields(gig_item):
    del gig_item["collectionTime"]
    with pytest.raises(ValidationError):
        Gig.model_validate(gig_item)


def test_ticket_issue_generates_unique_ids(request_model):
    first = Ticket.issue(request_model)
    second = Ticket.issue(request_model)

    assert first.id != second.id
    assert len(first.id) == 36
    assert first.name == "Alice"
    assert first.email == "alice@example.com"
    assert first.gig == "blur-hyde-park"
    assert first.created_at.tzinfo is not None


def test_ticket_is_immutable(request_model):
    ticket = Ticket.issue(request_model)
    with pytest.raises(ValidationError):
        ticket.email = "mallory@example.com"


def test_purchase_event_uses_camel_case_on_the_wire(request_model, gig_item):
    ticket = Ticket.issue(request_model, now=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc))
    event = PurchaseEvent(ticket=ticket, gig=Gig.model_validate(gig_item))

    data = json.loads(event.to_message())

    assert set(data) == {"ticket", "gig"}
    assert data["ticket"]["id"] == ticket.id
    assert "createdAt" in data["ticket"]
    assert data["gig"]["bandName"] == "Blur"
    assert data["gig"]["collectionTime"] == "16:30"


def test_purchase_event_survives_serialization(request_model, gig_item):
    ticket = Ticket.issue(request_model)
    gig = Gig.model_validate(gig_item)
    event = PurchaseEvent(ticket=ticket, gig=gig)

    restored = PurchaseEvent.from_message(event.to_message())

    assert restored.ticket == ticket
    assert restored.gig == gig


def test_purchase_event_is_a_snapshot(request_model, gig_item):
    gig = Gig.model_validate(gig_item)
    event = PurchaseEvent(ticket=Ticket.issue(request_model), gig=gig)

    gig_item["city"] = "Manchester"

    assert event.gig.city == "London"


def test_purchase_request_never_dumps_card_data(request_model):
    assert "card_number" not in request_model.buyer()
    assert "card_cvc" not in request_model.buyer()
