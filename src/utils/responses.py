"""Helpers for API Gateway HTTP API proxy responses."""

import json
from typing import Any, Dict

CORS_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
}


def json_response(status: int, body: Any) -> Dict[str, Any]:
    """Format a JSON response with the CORS headers the web client needs."""
    return {
        "statusCode": status,
        "headers": dict(CORS_HEADERS),
        "body": json.dumps(body),
    }
