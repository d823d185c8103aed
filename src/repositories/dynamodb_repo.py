"""DynamoDB repository for the gig catalog."""

from typing import Any, Dict, Iterator, Optional
import boto3


class GigTableRepository:
    """Key lookups and full scans over the gig table (partition key `slug`)."""

    def __init__(self, table_name: str, dynamodb=None):
        self.table_name = table_name
        self.table = (dynamodb or boto3.resource("dynamodb")).Table(table_name)

    def get(self, slug: str) -> Optional[Dict[str, Any]]:
        """Fetch one item, or None when the key is absent."""
        resp = self.table.get_item(Key={"slug": slug})
        return resp.get("Item")

    def scan_all(self) -> Iterator[Dict[str, Any]]:
        """Yield every item, following scan pagination."""
        kwargs: Dict[str, Any] = {}
        while True:
            resp = self.table.scan(**kwargs)
            yield from resp.get("Items", [])
            last_key = resp.get("LastEvaluatedKey")
            if not last_key:
                return
            kwargs["ExclusiveStartKey"] = last_key
