"""Starchart's included collector plugins.

Each package in here needs a `COLLECTOR_PLUGINS` list of StarchartCollector subclasses, and a `CLICK_CLI_GROUPS` list of the click groups for them.

:Module: starchart.collectors.plugins
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""
