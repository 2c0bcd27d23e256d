"""Starchart's collection engines

These are the reusable pieces that make complete collection possible against APIs with partial completeness guarantees: cursor pagination,
readiness polling, prefix truncation expansion, and per-entity fan-out. All of them are async and work on async "capabilities" (see
`starchart.utils.aws.AsyncAwsClient.capability`).

:Module: starchart.engines
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""
