"""
Pytest configuration to ensure paths are set up correctly for tests.

This allows imports like `from handlers import purchase` to work
when running tests, simulating the Lambda environment where code
is deployed from the src/ directory. It also provides in-memory stand-ins
for the catalog table, the SNS topic, the SQS queue and the mail transport.
"""

import json
import os
import sys
import uuid
from pathlib import Path

import boto3
import pytest
from botocore.exceptions import ClientError


def _ensure_paths_on_sys_path() -> None:
    """Add repository root AND src/ to sys.path if missing.

    The src/ directory is added to simulate Lambda's import behavior,
    where Code.from_asset("src") makes src/ the root of the package.
    """
    repo_root = Path(__file__).resolve().parents[1]
    src_root = repo_root / "src"

    root_str = str(repo_root)
    if root_str not in sys.path:
        sys.path.insert(0, root_str)

    src_str = str(src_root)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)


_ensure_paths_on_sys_path()

# Ensure boto3 has offline-friendly defaults so tests do not require AWS access.
os.environ.setdefault("AWS_REGION", "eu-west-2")
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-2")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "test")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "test")
os.environ.setdefault("AWS_SESSION_TOKEN", "test")
os.environ.setdefault("ENVIRONMENT", "dev")

# Lambda environment variables used by handlers
os.environ.setdefault("GIG_TABLE", "test-gig")
os.environ.setdefault("SNS_TOPIC_ARN", "arn:aws:sns:eu-west-2:123456789012:test-purchases")
os.environ.setdefault("SQS_QUEUE_URL", "https://sqs.eu-west-2.amazonaws.com/123456789012/test-notifications")
os.environ.setdefault("MAIL_SENDER_ADDRESS", "tickets@ticketless.example")

# Create a default boto3 session so resources/clients do not error during import.
boto3.setup_default_session(region_name="eu-west-2")

from models.queue import DeliveryReceipt  # noqa: E402
from utils.error_handling import DependencyUnavailableError  # noqa: E402

VALID_CARD = "4242424242424242"
TOPIC_ARN = os.environ["SNS_TOPIC_ARN"]


def aws_error(operation: str, code: str = "ServiceUnavailable") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": "simulated outage"}}, operation)


class FakeGigTable:
    """Stands in for GigTableRepository."""

    def __init__(self, items=None):
        self.items = {item["slug"]: item for item in (items or [])}
        self.fail = False

    def get(self, slug):
        if self.fail:
            raise aws_error("GetItem")
        return self.items.get(slug)

    def scan_all(self):
        if self.fail:
            raise aws_error("Scan")
        return iter(list(self.items.values()))


class FakeQueueRepository:
    """
    Stands in for QueueRepository with SQS visibility semantics.

    A received message is hidden until expire_visibility() is called, which
    plays the role of the visibility timeout elapsing.
    """

    def __init__(self):
        self.messages = []
        self.deleted = []
        self.fail_receive = False
        self.fail_delete = False

    def send(self, body: str) -> str:
        message_id = str(uuid.uuid4())
        self.messages.append(
            {"id": message_id, "body": body, "visible": True, "count": 0, "receipt": None}
        )
        return message_id

    def receive(self, max_messages=1, wait_seconds=0, visibility_timeout=None):
        if self.fail_receive:
            raise aws_error("ReceiveMessage")
        out = []
        for message in self.messages:
            if len(out) >= max_messages:
                break
            if not message["visible"]:
                continue
            message["visible"] = False
            message["count"] += 1
            message["receipt"] = f"rh-{uuid.uuid4()}"
            out.append(
                {
                    "MessageId": message["id"],
                    "Body": message["body"],
                    "ReceiptHandle": message["receipt"],
                    "Attributes": {"ApproximateReceiveCount": str(message["count"])},
                }
            )
        return out

    def delete(self, receipt_handle: str) -> None:
        if self.fail_delete:
            raise aws_error("DeleteMessage")
        kept = []
        for message in self.messages:
            if message["receipt"] == receipt_handle:
                self.deleted.append(message["id"])
            else:
                kept.append(message)
        self.messages = kept

    def expire_visibility(self) -> None:
        for message in self.messages:
            message["visible"] = True


class FakeTopic:
    """Stands in for TopicRepository; fans out to subscribed fake queues like SNS."""

    def __init__(self, topic_arn: str = TOPIC_ARN):
        self.topic_arn = topic_arn
        self.published = []
        self.subscribers = []
        self.fail = False

    def publish(self, message: str) -> str:
        if self.fail:
            raise aws_error("Publish", code="InternalError")
        message_id = str(uuid.uuid4())
        self.published.append(message)
        envelope = json.dumps(
            {
                "Type": "Notification",
                "MessageId": message_id,
                "TopicArn": self.topic_arn,
                "Message": message,
                "Timestamp": "2024-05-01T12:00:00.000Z",
                "SignatureVersion": "1",
            }
        )
        for queue in self.subscribers:
            queue.send(envelope)
        return message_id


class FakeMailTransport:
    """Records sent mail; can be told to fail like an unreachable SMTP relay."""

    def __init__(self):
        self.sent = []
        self.fail = False

    def send(self, sender, recipient, subject, body):
        if self.fail:
            raise DependencyUnavailableError("smtp", "connection refused")
        self.sent.append(
            {"sender": sender, "recipient": recipient, "subject": subject, "body": body}
        )
        return DeliveryReceipt(transport="fake", message_id=f"mail-{len(self.sent)}")


@pytest.fixture
def gig_item():
    """A gig as stored in DynamoDB."""
    return {
        "slug": "blur-hyde-park",
        "bandName": "Blur",
        "city": "London",
        "date": "2015-06-20",
        "collectionPoint": "Hyde Park Corner, near the Wellington Arch",
        "collectionTime": "16:30",
        "venue": "Hyde Park",
        "description": "Britpop legends reunite for a summer show.",
    }


@pytest.fixture
def valid_payload():
    return {
        "gig": "blur-hyde-park",
        "name": "Alice",
        "email": "alice@example.com",
        "cardNumber": VALID_CARD,
        "cardExpiryMonth": 6,
        "cardExpiryYear": 2024,
        "cardCVC": "123",
        "disclaimerAccepted": True,
    }


@pytest.fixture
def gig_table(gig_item):
    return FakeGigTable([gig_item])


@pytest.fixture
def queue_repo():
    return FakeQueueRepository()


@pytest.fixture
def topic(queue_repo):
    fake = FakeTopic()
    fake.subscribers.append(queue_repo)
    return fake


@pytest.fixture
def mail_transport():
    return FakeMailTransport()


@pytest.fixture
def purchase_service(gig_table, topic):
    from services.catalog_service import CatalogLookup
    from services.publisher_service import PurchaseEventPublisher
    from services.ticket_service import PurchaseService
    from services.validation_service import ValidationEngine

    return PurchaseService(
        validator=ValidationEngine(2018, 2024),
        catalog=CatalogLookup(gig_table),
        publisher=PurchaseEventPublisher(topic),
    )


@pytest.fixture
def consumer(queue_repo, mail_transport):
    from services.notification_service import NotificationRenderer
    from services.notification_worker import NotificationQueueConsumer
    from services.queue_service import DeliveryAcknowledger, WorkQueue

    queue = WorkQueue(queue_repo)
    return NotificationQueueConsumer(
        queue=queue,
        transport=mail_transport,
        renderer=NotificationRenderer(),
        acknowledger=DeliveryAcknowledger(queue),
        sender_address="tickets@ticketless.example",
    )
