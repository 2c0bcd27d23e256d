"""Components for the CLI to make it function properly.

These are pulled out here to make it easy to test and avoid circular dependencies.

:Module: starchart.cli.components
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""
from typing import Any, List

import click

import starchart.collectors.plugins
from starchart.collectors.loader import STARCHART_COLLECTORS
from starchart.startup import base_start_up
from starchart.utils.logging import LOGGER
from starchart.utils.plugin_loader import find_plugins


LOGO = """
             _                 _                _
     ___ ___| |_ __ _ _ __ ___| |__   __ _ _ __| |_
    / __|__ \\ __/ _` | '__/ __| '_ \\ / _` | '__| __|
    \\__ \\ | | || (_| | | | (__| | | | (_| | |  | |_
    |___/ |_|\\__\\__,_|_|  \\___|_| |_|\\__,_|_|   \\__|
"""


class StarchartCliLoader:
    """This will locate all the CLIs."""

    # These are defined here for easy testability -- this is the same path to the collectors:
    _collector_path: str = starchart.collectors.plugins.__path__
    _collector_prefix: str = starchart.collectors.plugins.__name__ + "."

    def __init__(self):
        self._clis: List[click.Group] = None  # noqa

    def load_clis(self):
        """This will load all the Click groups that the collector plugins expose."""
        LOGGER.debug("[🖥️] Loading CLIs (which are just plugins)...")
        self._clis = []
        for _, cli_list in find_plugins(self._collector_path, self._collector_prefix, "CLICK_CLI_GROUPS", click.Group, verify_class=False).items():
            self._clis.extend(cli_list)
        LOGGER.debug(f"[🖥️] Completed loading {len(self._clis)} CLIs")

    @property
    def clis(self) -> List[click.Group]:
        """Gets the CLIs and lazy-loads them if not already set."""
        if self._clis is None:
            self.load_clis()

        return self._clis


STARCHART_CLI_LOADER = StarchartCliLoader()


class StarchartClickGroup(click.Group):
    """The Starchart Click Group. This is here to print the logo :D"""

    def __init__(self, **attrs: Any):
        super().__init__(**attrs)

        click.echo(LOGO)

        # Base start up:
        base_start_up()

        # Load the collectors (makes sure everything is all good):
        STARCHART_COLLECTORS.get_collectors()

        # Load up the CLIs:
        for command in STARCHART_CLI_LOADER.clis:
            self.add_command(command)
