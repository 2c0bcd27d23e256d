"""Starchart's collectors

The collectors are plugins that each export the state of one AWS service. They live in the `starchart.collectors.plugins` package.

:Module: starchart.collectors
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""
