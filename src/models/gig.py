"""Gig catalog models."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Gig(BaseModel):
    """
    A catalog entry as stored in the `gig` DynamoDB table.

    Only the attributes the notification needs are declared; anything else
    in the item (venue, description, image, ...) is carried through
    untouched so published events hold the full record.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
    )

    slug: str
    band_name: str
    city: str
    date: str
    collection_point: str
    collection_time: str
