"""The main CLI entrypoint for Starchart.

This outlines the main CLI entrypoint objects that are to be used throughout.

:Module: starchart.cli.entrypoint
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""

import click

from starchart.cli.components import StarchartClickGroup


@click.group(cls=StarchartClickGroup)
def cli() -> None:
    """Starchart exports the IAM state and the SQS queues of an AWS account as JSON snapshots."""
