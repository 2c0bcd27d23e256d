"""Starchart: exports AWS account IAM state and queue inventories to durable JSON snapshots.

:Module: starchart
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""
