"""PyTest fixtures for the SQS collector

This defines the PyTest fixtures exclusively for the SQS collector.

:Module: starchart.tests.collectors.sqs.conftest
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""
# pylint: disable=redefined-outer-name,unused-argument
import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List

import pytest
from botocore.client import BaseClient
from botocore.exceptions import ClientError

# moto treats the prefix filter as a regular expression, so there is no "." here:
MOTO_ALPHABET = "-0123456789abcdefghijklmnopqrstuvwxyz"

QUEUE_NAMES = ["alpha", "alpha-2", "beta", "orders.fifo"]


class FakeSqsClient:
    """A boto3-like SQS client that truncates ListQueues at the cap (in no particular order), like the real thing does."""

    def __init__(self, names: List[str], cap: int = 1000):
        self.names = names
        self.cap = cap
        self.list_calls: List[Dict[str, Any]] = []

    @staticmethod
    def url(name: str) -> str:
        return f"https://sqs.us-east-2.amazonaws.com/123456789012/{name}"

    def list_queues(self, **kwargs) -> Dict[str, Any]:
        self.list_calls.append(kwargs)
        prefix = kwargs.get("QueueNamePrefix", "")
        matches = sorted((name for name in self.names if name.startswith(prefix)), key=lambda name: name[::-1])
        if not matches:
            return {"ResponseMetadata": {}}

        cap = min(self.cap, kwargs.get("MaxResults", self.cap))
        return {"QueueUrls": [self.url(name) for name in matches[:cap]], "ResponseMetadata": {}}

    def get_queue_url(self, QueueName: str) -> Dict[str, Any]:  # noqa # pylint: disable=invalid-name
        if QueueName not in self.names:
            raise ClientError({"Error": {"Code": "AWS.SimpleQueueService.NonExistentQueue", "Message": "Nope"}}, "GetQueueUrl")

        return {"QueueUrl": self.url(QueueName), "ResponseMetadata": {}}


@pytest.fixture
def run_sqs() -> Callable:
    """Returns a function that runs an SQS logic coroutine function (with the async client as the first argument) to completion."""
    from starchart.utils.aws import AsyncAwsClient

    def run(client: Any, func: Callable, *args, **kwargs) -> Any:
        async def runner() -> Any:
            with ThreadPoolExecutor(max_workers=5) as executor:
                return await func(AsyncAwsClient(client, executor), *args, **kwargs)

        return asyncio.run(runner())

    return run


@pytest.fixture
def sqs_queues(aws_sqs: BaseClient) -> List[str]:
    """Creates the queues in moto (in us-east-2) and returns their URLs."""
    urls = []
    for name in QUEUE_NAMES:
        attributes = {"FifoQueue": "true"} if name.endswith(".fifo") else {}
        urls.append(aws_sqs.create_queue(QueueName=name, Attributes=attributes)["QueueUrl"])

    return sorted(urls)
