"""SQS collection logic

SQS's ListQueues returns at most 1,000 queue URLs and (without MaxResults) there is no cursor. The only way to see past that cap is the
QueueNamePrefix filter, so the prefix truncation expander is used to list every queue.

:Module: starchart.collectors.plugins.sqs.logic
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""
import posixpath
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

from botocore.exceptions import ClientError

from starchart.engines.prefix_expander import PrefixTruncationExpander
from starchart.utils.aws import AsyncAwsClient
from starchart.utils.logging import LOGGER

# Queue names can have alphanumeric characters, hyphens and underscores. FIFO queues also end in ".fifo", so the "." is needed too:
DEFAULT_ALPHABET = ".0123456789-ABCDEFGHIJKLMNOPQRSTUVWXYZ_abcdefghijklmnopqrstuvwxyz"
DEFAULT_MAX_RESULTS = 1000
MAX_QUEUE_NAME_LENGTH = 80

NON_EXISTENT_QUEUE_ERROR_CODES = {"AWS.SimpleQueueService.NonExistentQueue", "QueueDoesNotExist"}


def queue_name(queue_url: str) -> str:
    """The name of the queue is the last component of its URL path."""
    return posixpath.basename(urlparse(queue_url).path.rstrip("/"))


async def list_queue_urls(client: AsyncAwsClient, prefix: str, max_results: Optional[int] = None) -> List[str]:
    """One ListQueues call. This is truncated at max_results if given, else at the service's cap. The NextToken is not followed."""
    LOGGER.debug(f"[📬] Listing queues with the prefix: {prefix!r}...")
    kwargs = {"QueueNamePrefix": prefix} if prefix else {}
    if max_results:
        kwargs["MaxResults"] = max_results

    response = await client.call("list_queues", **kwargs)

    return response.get("QueueUrls", [])


async def get_queue_url(client: AsyncAwsClient, name: str) -> Optional[str]:
    """Returns the URL of the queue with exactly this name, or None if there is no such queue."""
    try:
        return (await client.call("get_queue_url", QueueName=name))["QueueUrl"]

    except ClientError as err:
        if err.response.get("Error", {}).get("Code") in NON_EXISTENT_QUEUE_ERROR_CODES:
            return None

        raise


async def list_all_queues(
    client: AsyncAwsClient, prefix: str = "", alphabet: str = DEFAULT_ALPHABET, max_results: int = DEFAULT_MAX_RESULTS
) -> Dict[str, Any]:
    """Lists every queue whose name starts with the prefix."""

    async def list_func(list_prefix: str) -> List[str]:
        return await list_queue_urls(client, list_prefix, max_results=max_results)

    async def exact_lookup(name: str) -> Optional[str]:
        return await get_queue_url(client, name)

    expander = PrefixTruncationExpander(
        list_func,
        queue_name,
        alphabet,
        max_results,
        exact_lookup=exact_lookup,
        max_prefix_length=MAX_QUEUE_NAME_LENGTH,
    )

    return {"QueueUrls": await expander.expand(prefix)}
