"""
Single entrypoint Lambda that routes HTTP API requests to thin handler modules.

The worker Lambda has its own entrypoint (handlers.send_mail_worker); only
the synchronous API goes through here.
"""

from typing import Callable, Dict, Tuple

from utils.responses import CORS_HEADERS, json_response

from . import gigs, purchase


def cors_preflight(event, context) -> Dict:
    """Answer browser preflight requests for any route."""
    return {
        "statusCode": 200,
        "headers": {
            **CORS_HEADERS,
            "Access-Control-Allow-Methods": "*",
            "Access-Control-Allow-Headers": (
                "Content-Type,Authorization,X-Amz-Date,X-Api-Key,X-Amz-Security-Token"
            ),
        },
        "body": "",
    }


def lambda_handler(event, context):
    """
    Entry point invoked by API Gateway HTTP API.

    The event contains the HTTP method and path; we route it to the correct
    handler while keeping shared setup (logging, error handling) centralized.
    """
    method = event.get("requestContext", {}).get("http", {}).get("method", "")
    path = event.get("requestContext", {}).get("http", {}).get("path", "")
    route_key = f"{method.upper()} {path.rstrip('/') or '/'}"

    if method.upper() == "OPTIONS":
        return cors_preflight(event, context)

    # Map route keys to handler callables. Only routes with a path parameter
    # match by prefix; the rest must match exactly.
    route_table: Tuple[Tuple[str, Callable, bool], ...] = (
        ("GET /gigs/", gigs.get_handler, True),
        ("GET /gigs", gigs.list_handler, False),
        ("POST /purchase", purchase.lambda_handler, False),
    )

    for key, handler, is_prefix in route_table:
        matched = route_key.startswith(key) if is_prefix else route_key == key
        if matched:
            return handler(event, context)

    return json_response(404, {"error": "Route not found", "route": route_key})
