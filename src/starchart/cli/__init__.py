"""Starchart's command line interface.

:Module: starchart.cli
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""
