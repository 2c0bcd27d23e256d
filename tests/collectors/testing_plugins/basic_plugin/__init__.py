"""A sample collector plugin.

Sample collector plugin for unit testing purposes.

:Module: starchart.tests.collectors.testing_plugins.basic_plugin
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""
import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Awaitable, Dict

import click
from click import Context

from starchart.collectors.cli_utils import StarchartCollectCommand
from starchart.collectors.schematics import StarchartCollector, persist
from starchart.utils.sinks import Sink


async def some_resource(value: Any) -> Any:
    """A resource that is ready immediately."""
    await asyncio.sleep(0)
    return value


async def failing_resource() -> Any:
    """A resource that always fails."""
    raise ValueError("pew pew pew")


@click.group()
@click.pass_context
def testing_plugin(ctx: Context) -> None:
    """This is the main group for testing the logic for the test plugin."""
    ctx.obj = TestingCollector()


@testing_plugin.command(cls=StarchartCollectCommand)
@click.pass_context
def collect(ctx: Context, sink: Sink, **kwargs) -> None:  # noqa # pylint: disable=unused-argument
    """Command to test CLIs"""
    ctx.obj.execute(sink)


@click.group()
def testing_plugin_group_two() -> None:
    """This is a second group for testing the logic for the test plugin. This one doesn't set up its collector."""


@testing_plugin_group_two.command(cls=StarchartCollectCommand)
def group_two_collect(**kwargs):  # noqa # pylint: disable=unused-argument
    """Command to test CLIs"""


class TestingCollector(StarchartCollector):
    """Testing Starchart collector plugin."""

    async def collect(self, executor: ThreadPoolExecutor, sink: Sink, **kwargs) -> Dict[str, Awaitable[Any]]:
        return {
            "one": persist(executor, sink, "testing/one.json", some_resource({"Resource": "one"})),
            "two": persist(executor, sink, "testing/two.json", some_resource({"Resource": "two"})),
        }


class TestingCollectorTwo(TestingCollector):
    """A second testing Starchart collector plugin, where one of the resources fails."""

    async def collect(self, executor: ThreadPoolExecutor, sink: Sink, **kwargs) -> Dict[str, Awaitable[Any]]:
        return {
            "one": persist(executor, sink, "testing/one.json", some_resource({"Resource": "one"})),
            "broken": persist(executor, sink, "testing/broken.json", failing_resource()),
            "three": persist(executor, sink, "testing/three.json", some_resource(["three"])),
        }


COLLECTOR_PLUGINS = [TestingCollector, TestingCollectorTwo]
CLICK_CLI_GROUPS = [testing_plugin, testing_plugin_group_two]
