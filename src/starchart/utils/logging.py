"""Starchart's logger management

This holds the Starchart logger, which is to be used throughout the application for all logging and output purposes.

:Module: starchart.utils.logging
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""
import logging

LOGGER = logging.getLogger("starchart")

# Create console handler:
handler = logging.StreamHandler()

# Create formatter:
formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s - %(pathname)s - %(funcName)s:%(lineno)i")

# Add formatter to the handler:
handler.setFormatter(formatter)

# Add the handler to the logger:
LOGGER.addHandler(handler)

LOGGER.propagate = False  # Prevents duplicate log entries when the root logger is also configured

# The log level will be set by the configuration.
# The configuration will also update the app's 3rd party logging levels to supress things like urllib and boto since they are noisy.
