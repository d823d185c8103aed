"""
JSON logging for the Ticketless Lambdas.

Every record carries `service` and `environment`, so the purchase API and
the mail worker can be queried together in CloudWatch Logs Insights and a
ticket id can be followed from the 202 response to the email hand-off.
"""

import logging
import os

from pythonjsonlogger import jsonlogger

SERVICE_NAME = "ticketless"


def build_formatter() -> jsonlogger.JsonFormatter:
    return jsonlogger.JsonFormatter(
        "%(levelname)s %(name)s %(message)s %(asctime)s",
        static_fields={
            "service": SERVICE_NAME,
            "environment": os.environ.get("ENVIRONMENT", "dev"),
        },
    )


def get_logger(name: str) -> logging.Logger:
    """Return the module logger, attaching the JSON handler on first use."""
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(build_formatter())
    logger.addHandler(handler)
    logger.setLevel(os.environ.get("LOG_LEVEL", "INFO").upper())
    logger.propagate = False
    return logger
