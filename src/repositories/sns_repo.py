"""SNS repository for the purchase topic."""

import boto3


class TopicRepository:
    """Publish raw string messages to one SNS topic."""

    def __init__(self, topic_arn: str, client=None):
        self.topic_arn = topic_arn
        self.client = client or boto3.client("sns")

    def publish(self, message: str) -> str:
        """Publish and return the SNS message id."""
        resp = self.client.publish(TopicArn=self.topic_arn, Message=message)
        return resp["MessageId"]
