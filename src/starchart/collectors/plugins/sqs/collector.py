"""Starchart's SQS collector

This exports the full list of SQS queues in each of the configured regions. This contains the entrypoint for the CLI as well.

:Module: starchart.collectors.plugins.sqs.collector
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Awaitable, Dict, List, Optional

import click
from click import Context
from marshmallow import fields, validate

from starchart.collectors.cli_utils import StarchartCollectCommand
from starchart.collectors.plugins.sqs.logic import DEFAULT_ALPHABET, DEFAULT_MAX_RESULTS, list_all_queues
from starchart.collectors.schematics import CollectorBaseConfigurationTemplate, StarchartCollector, persist
from starchart.utils.aws import AsyncAwsClient, get_client
from starchart.utils.configuration import STARCHART_CONFIGURATION
from starchart.utils.logging import LOGGER
from starchart.utils.niceties import get_all_regions
from starchart.utils.sinks import Sink

SQS_PATH = "service/sqs/region"


class SqsCollectorConfigurationTemplate(CollectorBaseConfigurationTemplate):
    """The configuration for the SqsCollector."""

    regions = fields.List(fields.String(validate=validate.OneOf(get_all_regions(service="sqs"))), required=False, data_key="Regions")
    max_results = fields.Integer(
        required=False, data_key="MaxResults", load_default=DEFAULT_MAX_RESULTS, validate=validate.Range(min=1, max=DEFAULT_MAX_RESULTS)
    )
    alphabet = fields.String(required=False, data_key="Alphabet", load_default=DEFAULT_ALPHABET, validate=validate.Length(min=1))


class SqsCollector(StarchartCollector):
    """This is a collector that exports every SQS queue URL, region by region."""

    configuration_template_class = SqsCollectorConfigurationTemplate

    def resolve_regions(self, regions: Optional[List[str]] = None) -> List[str]:
        """The regions to collect: the ones passed in, else the configured ones, else just the deployment region."""
        if regions:
            return sorted(set(regions))

        return self.configuration.get("regions") or [STARCHART_CONFIGURATION.config["STARCHART"]["DeploymentRegion"]]

    async def collect(
        self, executor: ThreadPoolExecutor, sink: Sink, regions: Optional[List[str]] = None, prefix: str = "", **kwargs
    ) -> Dict[str, Awaitable[Any]]:
        config = self.configuration

        resources = {}
        for region in self.resolve_regions(regions):
            client = AsyncAwsClient(get_client("sqs", region=region), executor)
            resources[f"list-queues/{region}"] = persist(
                executor,
                sink,
                f"{SQS_PATH}/{region}/list-queues.json",
                list_all_queues(client, prefix=prefix, alphabet=config["alphabet"], max_results=config["max_results"]),
            )

        return resources


@click.group()
@click.pass_context
def sqs(ctx: Context) -> None:
    """This is the collector for the SQS queues"""
    ctx.obj = SqsCollector()


@sqs.command(cls=StarchartCollectCommand)
@click.option("--region", "regions", multiple=True, type=str, help="A region to collect (can be repeated). Defaults to the configured regions")
@click.option("--prefix", type=str, default="", show_default=True, help="Only collect the queues whose names start with this prefix")
@click.pass_context
def collect(ctx: Context, sink: Sink, regions: List[str], prefix: str, **kwargs) -> None:  # noqa # pylint: disable=unused-argument
    """This will export all the SQS queue URLs (even past the 1,000 queue cap of ListQueues)"""
    collector = ctx.obj
    collector.execute(sink, regions=list(regions), prefix=prefix)

    LOGGER.info("[✅] Done!")
