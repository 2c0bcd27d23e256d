"""Starchart's collector loader.

This does all the logic required to load the Starchart collector plugins.

:Module: starchart.collectors.loader
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""
from typing import Dict

import starchart.collectors.plugins
from starchart.collectors.schematics import StarchartCollector, StarchartCollectorInstance
from starchart.utils.configuration import BadConfigurationError, STARCHART_CONFIGURATION
from starchart.utils.logging import LOGGER
from starchart.utils.plugin_loader import find_plugins


class StarchartCollectorLoader:
    """This will load all the Starchart collector plugins."""

    # These are defined here for easy testability:
    _collector_path: str = starchart.collectors.plugins.__path__
    _collector_prefix: str = starchart.collectors.plugins.__name__ + "."

    def __init__(self):
        self._collectors: Dict[str, StarchartCollectorInstance] = None  # noqa

    def reset(self) -> None:
        """This resets the loader. This is only used as a convenience for unit testing."""
        self._collectors = None

    def load_all_plugins(self):
        """This will load all Starchart collector plugins and verify that they are configured properly."""
        self._collectors = {}

        LOGGER.debug("[📦] Loading collector plugins...")
        try:
            for _, plugin_classes in find_plugins(self._collector_path, self._collector_prefix, "COLLECTOR_PLUGINS", StarchartCollector).items():
                for plugin in plugin_classes:
                    LOGGER.debug(f"[🔧] Configuring collector: {plugin.get_collector_name()}")

                    # Check if the collector has a configuration entry. If not then skip:
                    collector_config = STARCHART_CONFIGURATION.config.get(plugin.get_collector_name())
                    if not collector_config:
                        LOGGER.debug(f"[⏭️] Collector: {plugin.get_collector_name()} has no discovered configuration. Skipping... ")
                        continue

                    errors = plugin.configuration_template_class().validate(collector_config)
                    if errors:
                        raise BadConfigurationError(f"[💥] Collector: {plugin.get_collector_name()} has an invalid configuration. {str(errors)}")

                    if not collector_config["Enabled"]:
                        LOGGER.debug(f"[⏭️] Collector: {plugin.get_collector_name()} is DISABLED in its configuration. Skipping...")
                        continue

                    self._collectors[plugin.get_collector_name()] = plugin()
                    LOGGER.debug(f"[👍] Collector: {plugin.get_collector_name()} is properly configured and ENABLED.")

        except Exception as exc:
            LOGGER.error("[💥] Major exception encountered configuring all the Starchart collector plugins. See the stacktrace for details.")
            LOGGER.exception(exc)
            raise

        if not self._collectors:
            LOGGER.debug("[🤷] There were no properly enabled collectors to load")
        else:
            LOGGER.debug(f"[🚀] Completed loading {len(self._collectors)} collectors")

    def get_collectors(self) -> Dict[str, StarchartCollectorInstance]:
        """This will return all the enabled collector instances."""
        if self._collectors is None:
            self.load_all_plugins()

        return self._collectors


STARCHART_COLLECTORS = StarchartCollectorLoader()
