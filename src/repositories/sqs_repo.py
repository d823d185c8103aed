"""SQS repository for the notification work queue."""

from typing import Any, Dict, List, Optional
import boto3


class QueueRepository:
    """Receive and delete messages on one SQS queue."""

    def __init__(self, queue_url: str, client=None):
        self.queue_url = queue_url
        self.client = client or boto3.client("sqs")

    def receive(
        self,
        max_messages: int = 1,
        wait_seconds: int = 0,
        visibility_timeout: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Return up to max_messages raw SQS messages (possibly none)."""
        params: Dict[str, Any] = {
            "QueueUrl": self.queue_url,
            "MaxNumberOfMessages": max_messages,
            "WaitTimeSeconds": wait_seconds,
            "AttributeNames": ["ApproximateReceiveCount"],
        }
        if visibility_timeout is not None:
            params["VisibilityTimeout"] = visibility_timeout
        resp = self.client.receive_message(**params)
        return resp.get("Messages", [])

    def delete(self, receipt_handle: str) -> None:
        self.client.delete_message(QueueUrl=self.queue_url, ReceiptHandle=receipt_handle)
