"""Starchart's fan-out aggregator

Issues one call per entity (i.e. one `list_access_keys` per user) with all of them in flight at once, and merges the results.

:Module: starchart.engines.fan_out
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""
import asyncio
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional

from starchart.utils.logging import LOGGER


async def fan_out(entities: Iterable[Any], per_entity_call: Callable[[Any], Awaitable[Any]]) -> List[Any]:
    """
    Calls `per_entity_call` for every entity concurrently and returns the results in entity order.

    This is fail-fast: the first failure is raised and none of the other results are returned.
    """
    entities = list(entities)
    LOGGER.debug(f"[🪭] Fanning out over {len(entities)} entities...")

    return await asyncio.gather(*[per_entity_call(entity) for entity in entities])


async def collect_per_entity(
    entities: Iterable[Any],
    per_entity_call: Callable[[Any], Awaitable[Dict[str, Any]]],
    list_key: str,
    sort_key: Optional[str] = None,
) -> Dict[str, List[Any]]:
    """
    Fans out over the entities and concatenates the `list_key` list out of every response, in entity order. If a `sort_key` is provided, then each
    entity's list is sorted by that field before it is concatenated (AWS does not guarantee the order of these).
    """
    responses = await fan_out(entities, per_entity_call)

    merged = []
    for response in responses:
        items = response.get(list_key, [])
        if sort_key:
            items = sorted(items, key=lambda item: item[sort_key])

        merged += items

    return {list_key: merged}
