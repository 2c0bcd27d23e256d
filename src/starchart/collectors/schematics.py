"""Starchart's collector definitions

This defines the base classes and components for all of Starchart's collector plugins. The collectors are loaded on start-up and each of them
exports the state of one AWS service as a set of named resources.

All collector plugins *must* implement the components defined here. It is also very helpful to see the existing collectors to get ideas on how to
make your own.

:Module: starchart.collectors.schematics
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""
import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Awaitable, Dict, Type, TypeVar

from marshmallow import Schema, fields, INCLUDE

from starchart.utils.configuration import STARCHART_CONFIGURATION
from starchart.utils.logging import LOGGER
from starchart.utils.sinks import Sink


class CollectionError(Exception):
    """Raised after a collection run if any of its resources failed. The args hold the failed resource names mapped to their exceptions."""


class CollectorBaseConfigurationTemplate(Schema):
    """This is the base collector configuration template schema. The configuration for the collector lives in the global configuration under the
    collector's name.

    Note: All configuration file YAMLs should be written in UpperCamelCase, but programmatically referenced in the Python Marshmallow object in snake_case.
    """

    # All collectors must define an `Enabled = True` for the plugin to be used:
    enabled = fields.Bool(required=True, data_key="Enabled")

    class Meta:
        """By default, we will include unknown values without raising an error."""

        unknown = INCLUDE


async def persist(executor: ThreadPoolExecutor, sink: Sink, name: str, data: Awaitable[Any]) -> None:
    """Awaits the resource's data and then hands it to the sink. The sink blocks (and may retry), so it runs on the executor."""
    result = await data
    await asyncio.get_running_loop().run_in_executor(executor, sink.save_json, name, result)


async def run_collection(resources: Dict[str, Awaitable[Any]]) -> None:
    """
    Runs all the resource coroutines concurrently. The resources are independent failure domains: one failing does not stop the others from being
    collected and saved. After all of them are done, a CollectionError is raised if any of them failed.
    """
    names = list(resources.keys())
    LOGGER.info(f"[🚀] Collecting {len(names)} resources...")
    results = await asyncio.gather(*resources.values(), return_exceptions=True)

    failures = {}
    for name, result in zip(names, results):
        if isinstance(result, Exception):
            LOGGER.error(f"[💥] Failed to collect: {name}. Details: {str(result)}")
            LOGGER.exception(result)
            failures[name] = result

    if failures:
        raise CollectionError(failures)

    LOGGER.info(f"[✅] Collected all {len(names)} resources.")


class StarchartCollector:
    """
    The base class for Starchart collector plugins. All the attributes here should either be defined statically or in the __init__ of the subclass.

    Subclasses need to implement `collect`, which returns the resources to collect as a dictionary of resource name -> coroutine.
    """

    configuration_template_class: Type[CollectorBaseConfigurationTemplate] = CollectorBaseConfigurationTemplate

    @classmethod
    def get_collector_name(cls: Type["StarchartCollector"]) -> str:
        """Static method to return the collector name."""
        return cls.__name__

    # This is the name for the collector plugin (this should be UpperCamelCase). This is also the name of the Configuration section for the collector.
    @property
    def collector_name(self) -> str:
        """Returns the name of the collector, which is by default the name of the class."""
        return self.get_collector_name()

    @property
    def configuration(self) -> Dict[str, Any]:
        """The collector's loaded (and validated) configuration section, with the defaults filled in."""
        return self.configuration_template_class().load(STARCHART_CONFIGURATION.config.get(self.collector_name, {}))

    async def collect(self, executor: ThreadPoolExecutor, sink: Sink, **kwargs) -> Dict[str, Awaitable[Any]]:
        """Returns the resource name -> coroutine dictionary of everything this collector persists. Remote calls are run on the executor."""
        raise NotImplementedError("pew pew pew")  # pragma: no cover

    async def _run(self, sink: Sink, max_workers: int, **kwargs) -> None:
        """Sets up the executor and runs the collection."""
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            resources = await self.collect(executor, sink, **kwargs)
            await run_collection(resources)

    def execute(self, sink: Sink, **kwargs) -> None:
        """This will run the collector to completion, saving everything into the sink."""
        LOGGER.info(f"[🛰️] Starting the {self.collector_name}...")
        max_workers = STARCHART_CONFIGURATION.config["STARCHART"].get("MaxWorkers", 20)

        loop = asyncio.new_event_loop()
        try:
            loop.run_until_complete(self._run(sink, max_workers, **kwargs))
        finally:
            loop.close()

        LOGGER.info(f"[🏁] Completed the {self.collector_name}.")


StarchartCollectorInstance = TypeVar("StarchartCollectorInstance", bound=StarchartCollector)
