"""Renders the ticket confirmation email."""

from dataclasses import dataclass

from models.ticket import PurchaseEvent

_BODY_TEMPLATE = """\
Hey {name},
you are going to see {band} in {city}!

This is the secret code that will give you access to our time travel collection point:

---
{code}
---

Be sure to show it to our staff at entrance.

Collection point is placed in {collection_point}.
Be sure to be there on {date} at {collection_time}

We already look forward (or maybe backward) to having you there, it's going to be epic!

- Your friendly Ticketless staff

PS: remember that is forbidden to place bets or do any other action that might substantially
increase your net worth while time travelling. Travel safe!
"""


@dataclass(frozen=True)
class Notification:
    subject: str
    body: str


class NotificationRenderer:
    """Pure PurchaseEvent -> (subject, body) rendering."""

    def render(self, event: PurchaseEvent) -> Notification:
        gig, ticket = event.gig, event.ticket
        subject = f"Your ticket for {gig.band_name} in {gig.city}"
        body = _BODY_TEMPLATE.format(
            name=ticket.name,
            band=gig.band_name,
            city=gig.city,
            code=ticket.id,
            collection_point=gig.collection_point,
            date=gig.date,
            collection_time=gig.collection_time,
        )
        return Notification(subject=subject, body=body)
