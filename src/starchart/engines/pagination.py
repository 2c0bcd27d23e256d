"""Starchart's paginated collector

This follows a continuation cursor until the server stops handing one back, merging each page into an accumulator with a caller supplied combinator.

:Module: starchart.engines.pagination
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""
from typing import Any, Awaitable, Callable, Dict, Optional

from starchart.utils.logging import LOGGER

Capability = Callable[..., Awaitable[Dict[str, Any]]]
Combinator = Callable[[Dict[str, Any], Dict[str, Any]], Dict[str, Any]]


def concatenate(*keys: str) -> Combinator:
    """Returns a combinator that concatenates the named lists of two pages. A page that lacks one of the keys contributes nothing for it."""

    def combinator(previous: Dict[str, Any], page: Dict[str, Any]) -> Dict[str, Any]:
        return {key: previous.get(key, []) + page.get(key, []) for key in keys}

    return combinator


async def collect(
    capability: Capability,
    combinator: Combinator,
    initial_args: Optional[Dict[str, Any]] = None,
    request_pagination_marker: str = "Marker",
    response_pagination_marker: str = "Marker",
) -> Dict[str, Any]:
    """
    Collects every page from the listing capability. The arguments of each call are the arguments of the previous call with the cursor overlaid on
    them, so anything else the caller passed in (like a UserName) is preserved throughout.

    Any error raised by the capability propagates as-is: there is no such thing as a partial result. There is also no page limit -- this trusts
    the server to eventually stop sending a cursor.
    """
    args = dict(initial_args or {})
    accumulated = await capability(**args)
    cursor = accumulated.get(response_pagination_marker)
    page_count = 1

    # The cursor is tracked apart from the accumulator since a combinator may carry the previous page's cursor forward:
    while cursor:
        args = {**args, request_pagination_marker: cursor}
        page = await capability(**args)
        cursor = page.get(response_pagination_marker)
        page_count += 1

        accumulated = combinator(accumulated, page)

    # Remove the pagination bookkeeping from the result:
    accumulated.pop(response_pagination_marker, None)
    accumulated.pop("IsTruncated", None)

    LOGGER.debug(f"[📚] Collected {page_count} page(s).")
    return accumulated
