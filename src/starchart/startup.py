"""The main module for Starchart's startup.

This contains the basic code for startup in Starchart. All CLI invocations will need to execute this.

:Module: starchart.startup
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""

from starchart.utils.logging import LOGGER  # noqa pylint: disable=W0611
from starchart.utils.configuration import STARCHART_CONFIGURATION


def base_start_up() -> None:
    """This is a function that will execute all startup related tasks that needs to be performed for Starchart to function.

    The start-up order is as follows:
    1. Load the base configuration
    2. Set up the logger (the configuration sets the log levels)
    """
    # Step 1: Load the base configuration, which also configures the logger for the app:
    STARCHART_CONFIGURATION.config  # noqa pylint: disable=pointless-statement
