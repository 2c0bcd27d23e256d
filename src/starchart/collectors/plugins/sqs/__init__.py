"""Starchart's collector for the SQS queue inventory.

:Module: starchart.collectors.plugins.sqs
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""

from starchart.collectors.plugins.sqs.collector import SqsCollector, sqs

COLLECTOR_PLUGINS = [SqsCollector]
CLICK_CLI_GROUPS = [sqs]
