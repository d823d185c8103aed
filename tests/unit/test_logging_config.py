import json
import logging

from utils.logging_config import SERVICE_NAME, build_formatter, get_logger


def test_records_carry_service_and_environment(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "staging")
    record = logging.LogRecord(
        "handlers.purchase", logging.INFO, __file__, 1, "Purchase accepted", None, None
    )
    record.ticket_id = "t-1"

    line = json.loads(build_formatter().format(record))

    assert line["service"] == SERVICE_NAME
    assert line["environment"] == "staging"
    assert line["levelname"] == "INFO"
    assert line["message"] == "Purchase accepted"
    assert line["ticket_id"] == "t-1"


def test_get_logger_attaches_one_handler():
    logger = get_logger("tests.logging_config")
    again = get_logger("tests.logging_config")

    assert logger is again
    assert len(logger.handlers) == 1
    assert logger.propagate is False
