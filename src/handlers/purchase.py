"""
Ticket purchase handler for POST /purchase.

Validation, catalog lookup and publishing all finish before we answer; the
confirmation email is sent later by the worker, so a 202 means "accepted",
not "delivered".
"""

from __future__ import annotations

import json
import uuid
from typing import Optional

from utils.error_handling import (
    AppError,
    DependencyUnavailableError,
    MalformedInputError,
    UnknownGigError,
    ValidationFailedError,
    to_response,
)
from utils.logging_config import get_logger
from utils.responses import json_response

logger = get_logger(__name__)

# Lazy-loaded service to avoid import-time AWS clients
_purchase_service: Optional["PurchaseService"] = None


def _get_purchase_service():
    """Lazy-load PurchaseService with its collaborators."""
    global _purchase_service
    if _purchase_service is None:
        from repositories.dynamodb_repo import GigTableRepository
        from repositories.sns_repo import TopicRepository
        from services.catalog_service import CatalogLookup
        from services.publisher_service import PurchaseEventPublisher
        from services.ticket_service import PurchaseService
        from services.validation_service import ValidationEngine
        from utils.settings import AppSettings

        settings = AppSettings.from_environment()
        _purchase_service = PurchaseService(
            validator=ValidationEngine(
                settings.card_expiry_year_min, settings.card_expiry_year_max
            ),
            catalog=CatalogLookup(GigTableRepository(settings.gig_table_name)),
            publisher=PurchaseEventPublisher(TopicRepository(settings.topic_arn)),
        )
    return _purchase_service


def _parse_body(event) -> dict:
    body = event.get("body")
    if body is None:
        raise MalformedInputError("Request body is empty")
    try:
        data = json.loads(body)
    except (TypeError, ValueError) as exc:
        raise MalformedInputError(f"Request body is not JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise MalformedInputError("Request body is not a JSON object")
    return data


def lambda_handler(event, context):
    """Handle POST /purchase."""
    correlation_id = str(uuid.uuid4())
    extra = {"correlation_id": correlation_id}

    try:
        payload = _parse_body(event)
        result = _get_purchase_service().purchase(payload)
    except MalformedInputError as exc:
        logger.info("Malformed purchase request", extra={**extra, "reason": str(exc)})
        return to_response(exc)
    except ValidationFailedError as exc:
        logger.info(
            "Purchase request rejected",
            extra={**extra, "fields": [e.field for e in exc.errors]},
        )
        return to_response(exc)
    except UnknownGigError as exc:
        logger.info("Purchase for unknown gig", extra={**extra, "gig": exc.slug})
        return to_response(exc)
    except DependencyUnavailableError as exc:
        logger.exception(
            "Purchase failed on a dependency",
            extra={**extra, "dependency": exc.dependency},
        )
        return to_response(exc)
    except AppError as exc:
        logger.exception("Purchase failed", extra=extra)
        return to_response(exc)
    except Exception:
        logger.exception("Unexpected purchase failure", extra=extra)
        return json_response(500, {"error": "Internal Server Error"})

    logger.info(
        "Purchase accepted",
        extra={**extra, "ticket_id": result.ticket.id, "gig": result.ticket.gig},
    )
    return json_response(202, {"success": True})
