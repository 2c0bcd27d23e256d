"""Starchart's AWS call plumbing

This is how Starchart obtains client handles and how the blocking boto3 calls are turned into awaitables. boto3 is synchronous, so every remote
call is run on a shared ThreadPoolExecutor and awaited from the event loop. This is what lets hundreds of calls be in flight at the same time
while the collection engines themselves stay single-threaded.

:Module: starchart.utils.aws
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""
import asyncio
from concurrent.futures import Executor
from functools import partial
from typing import Any, Awaitable, Callable, Dict, Optional

from botocore.client import BaseClient
from cloudaux.aws.sts import boto3_cached_conn

from starchart.utils.configuration import STARCHART_CONFIGURATION
from starchart.utils.logging import LOGGER


def get_client(service: str, region: Optional[str] = None) -> BaseClient:
    """Returns a (cached) boto3 client for the given service.

    If the configuration has both an AccountId and an AssumeRole, then CloudAux will assume the role in that account. Otherwise, the ambient
    credentials are used.
    """
    config = STARCHART_CONFIGURATION.config["STARCHART"]
    region = region or config["DeploymentRegion"]

    if config.get("AssumeRole"):
        LOGGER.debug(f"[🔑] Obtaining a {service} client in {config['AccountId']}/{region} via role: {config['AssumeRole']}...")
        return boto3_cached_conn(
            service,
            account_number=config["AccountId"],
            assume_role=config["AssumeRole"],
            session_name=config.get("SessionName", "starchart"),
            region=region,
        )

    LOGGER.debug(f"[🔑] Obtaining a {service} client in {region} with the ambient credentials...")
    return boto3_cached_conn(service, region=region)


def tidy_response_metadata(response: Dict[str, Any]) -> Dict[str, Any]:
    """Removes the `ResponseMetadata` that boto3 attaches to every response. It's noise in a snapshot."""
    response.pop("ResponseMetadata", None)
    return response


class AsyncAwsClient:
    """Wraps a boto3 client so that its calls can be awaited.

    The client handle is shared (read-only) by every concurrent call -- boto3 clients are thread safe -- so nothing here needs locking.
    """

    def __init__(self, client: BaseClient, executor: Executor):
        self.client = client
        self.executor = executor

    async def call(self, method: str, **kwargs) -> Dict[str, Any]:
        """Runs the boto3 method on the executor and returns the tidied response."""
        loop = asyncio.get_running_loop()
        response = await loop.run_in_executor(self.executor, partial(getattr(self.client, method), **kwargs))

        return tidy_response_metadata(response)

    def capability(self, method: str, **fixed_kwargs) -> Callable[..., Awaitable[Dict[str, Any]]]:
        """Returns an async callable for the given method with some arguments already bound. This is what gets handed to the engines."""

        async def bound_call(**kwargs) -> Dict[str, Any]:
            return await self.call(method, **{**fixed_kwargs, **kwargs})

        return bound_call
