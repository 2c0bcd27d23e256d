"""Starchart's collector for the IAM state of an account.

:Module: starchart.collectors.plugins.iam
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""

from starchart.collectors.plugins.iam.collector import IamCollector, iam

COLLECTOR_PLUGINS = [IamCollector]
CLICK_CLI_GROUPS = [iam]
