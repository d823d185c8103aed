"""Handlers for GET /gigs and GET /gigs/{slug}."""

from typing import Optional

from utils.error_handling import AppError, NotFoundError, to_response
from utils.logging_config import get_logger
from utils.responses import json_response

logger = get_logger(__name__)

# Lazy-loaded service to avoid import-time AWS clients
_catalog: Optional["CatalogLookup"] = None


def _get_catalog():
    """Lazy-load CatalogLookup."""
    global _catalog
    if _catalog is None:
        from repositories.dynamodb_repo import GigTableRepository
        from services.catalog_service import CatalogLookup
        from utils.settings import AppSettings

        settings = AppSettings.from_environment()
        _catalog = CatalogLookup(GigTableRepository(settings.gig_table_name))
    return _catalog


def _slug_from(event) -> str:
    path_params = event.get("pathParameters") or {}
    if path_params.get("slug"):
        return path_params["slug"]
    path = event.get("requestContext", {}).get("http", {}).get("path", "")
    return path.rstrip("/").rsplit("/", 1)[-1]


def list_handler(event, context):
    """Return every gig in the catalog."""
    try:
        gigs = _get_catalog().list_gigs()
    except AppError as exc:
        logger.exception("Listing gigs failed")
        return to_response(exc)

    return json_response(
        200, {"gigs": [gig.model_dump(mode="json", by_alias=True) for gig in gigs]}
    )


def get_handler(event, context):
    """Return one gig by slug, 404 when it does not exist."""
    slug = _slug_from(event)
    try:
        gig = _get_catalog().get_gig(slug)
    except AppError as exc:
        logger.exception("Fetching gig failed", extra={"gig": slug})
        return to_response(exc)

    if gig is None:
        return to_response(NotFoundError("Gig not found"))
    return json_response(200, gig.model_dump(mode="json", by_alias=True))
