"""Starchart's collector CLI utility functions

This contains utility functions for CLIs that make it easier to do things that need to be done.

:Module: starchart.collectors.cli_utils
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""
from typing import Any, Optional

import click
from click import Context, Command

from starchart.collectors.schematics import StarchartCollector, StarchartCollectorInstance
from starchart.utils.configuration import STARCHART_CONFIGURATION
from starchart.utils.sinks import LocalDirectorySink, LoggingSink, S3Sink, Sink


class BadCollectorError(Exception):
    """This is raised if the developer didn't follow the instructions when setting up the Click group. You need to have:

    ```
        ...
        @click.group()
        @click.pass_context
        def some_collector(ctx: Context) -> None
            # VERY IMPORTANT: Instantiate the collector:
            ctx.obj = MyCollector()
        ...
    ```
    """


def make_sink(output_dir: Optional[str], bucket: Optional[str], bucket_region: Optional[str], key_prefix: str, dry_run: bool) -> Sink:
    """Picks the sink from the command line options. Without any options this is the local directory from the configuration."""
    if dry_run:
        return LoggingSink()

    if bucket:
        return S3Sink(bucket, bucket_region or STARCHART_CONFIGURATION.config["STARCHART"]["DeploymentRegion"], prefix=key_prefix)

    return LocalDirectorySink(output_dir or STARCHART_CONFIGURATION.config["STARCHART"].get("OutputDirectory", "var"))


class StarchartCollectCommand(Command):
    """
    This is a Click command class that defines the parameters for choosing where the collected resources are saved. The invoked command gets the
    constructed `sink` passed in.

    This is used as follows:
    ```
        @click.group()
        @click.pass_context
        def some_collector(ctx: Context) -> None
            # VERY IMPORTANT: Instantiate the collector:
            ctx.obj = MyCollector()


        @some_collector.command(cls=StarchartCollectCommand)
        @click.pass_context
        def collect(ctx: Context, sink: Sink, **kwargs) -> None:
            ctx.obj.execute(sink)
    ```
    """

    def __init__(self, name, callback, **kwargs):
        """This is the overridden __init__ that will set up the parameters that we need."""
        params = kwargs.pop("params", [])

        params += [
            click.Option(["--output-dir"], required=False, type=click.Path(file_okay=False), help="The directory to save to (defaults to the OutputDirectory)"),
            click.Option(["--bucket"], required=False, type=str, help="Save to this S3 bucket instead of a local directory"),
            click.Option(["--bucket-region"], required=False, type=str, help="The region of the S3 bucket (defaults to the DeploymentRegion)"),
            click.Option(["--key-prefix"], required=False, type=str, default="", help="The prefix to prepend to all the S3 object keys"),
            click.Option(["--dry-run"], is_flag=True, default=False, show_default=True, help="Log the collected resources instead of saving them"),
        ]
        super().__init__(name, callback=callback, params=params, **kwargs)

    def invoke(self, ctx: Context) -> Any:
        """Wrap the invocation with our own code to verify that the collector is set up and to build the sink."""
        collector: StarchartCollectorInstance = ctx.obj
        if not isinstance(collector, StarchartCollector):
            click.echo(
                "[⛔] The CLI for this is not set up properly. The developer needs to set `ctx.obj = YourCollector()` in the Click group.",
                err=True,
            )
            raise BadCollectorError()

        ctx.params["sink"] = make_sink(
            ctx.params["output_dir"], ctx.params["bucket"], ctx.params["bucket_region"], ctx.params["key_prefix"], ctx.params["dry_run"]
        )

        click.echo(f"[🆗] Executing collector: {collector.collector_name}...")
        return super().invoke(ctx)
