"""Gig catalog lookups backed by DynamoDB."""

from __future__ import annotations

from typing import List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from models.gig import Gig
from repositories.dynamodb_repo import GigTableRepository
from utils.error_handling import DependencyUnavailableError
from utils.logging_config import get_logger

logger = get_logger(__name__)


class CatalogLookup:
    """Resolve gig slugs to catalog records. Read-only."""

    def __init__(self, table: GigTableRepository):
        self.table = table

    def get_gig(self, slug: str) -> Optional[Gig]:
        """Return the gig, or None when the slug is not in the catalog."""
        try:
            item = self.table.get(slug)
        except (BotoCoreError, ClientError) as exc:
            raise DependencyUnavailableError("catalog", str(exc), cause=exc) from exc

        if item is None:
            logger.info("Gig not found", extra={"gig": slug})
            return None
        return Gig.model_validate(item)

    def list_gigs(self) -> List[Gig]:
        try:
            items = list(self.table.scan_all())
        except (BotoCoreError, ClientError) as exc:
            raise DependencyUnavailableError("catalog", str(exc), cause=exc) from exc
        return [Gig.model_validate(item) for item in items]
