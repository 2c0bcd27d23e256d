"""Starchart's prefix truncation expander

Some listing APIs (like SQS ListQueues) silently truncate at a fixed number of results, and offer no continuation cursor -- only a name prefix
filter. This enumerates everything such an API can see by walking an implicit trie of name prefixes:

    * A listing with fewer results than the cap is complete for that prefix. Nothing more to do.
    * A listing that hits the cap may be truncated. Its results are discarded and every one-character extension of the prefix is listed
      instead (concurrently). Repeat.

The one wrinkle is the item whose name *is* the prefix. None of the extensions will ever match it, so it's captured from the truncated page (or looked
up directly) before that page is thrown away.

Completeness depends on the alphabet covering every character that can appear in a name. That can't be checked here: an incomplete alphabet will
silently miss items.

:Module: starchart.engines.prefix_expander
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""
import asyncio
from typing import Any, Awaitable, Callable, Dict, Hashable, Iterable, List, Optional, Sequence

from starchart.utils.logging import LOGGER


class ExpansionError(Exception):
    """Raised if the expansion needs to go deeper than names can possibly be long. This means that the server is misbehaving."""


class NamespaceNode:
    """A visited prefix in the expansion trie: "all items whose name starts with `prefix`". The children only exist if the listing was truncated."""

    def __init__(self, prefix: str):
        self.prefix = prefix
        self.children: List["NamespaceNode"] = []
        self.truncated = False
        self.result_count = 0

    def __repr__(self) -> str:
        return f"NamespaceNode({self.prefix!r})"

    def walk(self) -> Iterable["NamespaceNode"]:
        """Yields this node and all of its descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


class PrefixTruncationExpander:
    """
    Expands a name prefix into every item beneath it.

    :param list_func: async function that returns at most `max_results` items whose name starts with the given prefix
    :param local_key: extracts the part of an item's name the prefix filter applies to (for example the last path component)
    :param alphabet: every character that can appear in a name. Order determines the order the branches are created in.
    :param max_results: the server's cap on the number of results returned by `list_func`
    :param identity: the key that items are de-duplicated and sorted on (defaults to the item itself)
    :param exact_lookup: optional async function that returns the item named exactly as the given name, or None if there is no such item. This is
                         used if a truncated page doesn't happen to include the item named after the prefix.
    :param max_prefix_length: optional maximum name length. Branching stops at this length, and a listing there with longer names raises an
                              ExpansionError.
    """

    def __init__(
        self,
        list_func: Callable[[str], Awaitable[Sequence[Any]]],
        local_key: Callable[[Any], str],
        alphabet: Iterable[str],
        max_results: int,
        identity: Callable[[Any], Hashable] = lambda item: item,
        exact_lookup: Optional[Callable[[str], Awaitable[Optional[Any]]]] = None,
        max_prefix_length: Optional[int] = None,
    ):
        # Remove duplicate characters but keep the order:
        self.alphabet = list(dict.fromkeys(alphabet))
        if not self.alphabet:
            raise ValueError("The alphabet must have at least one character.")

        if max_results < 1:
            raise ValueError("The max_results must be at least 1.")

        self.list_func = list_func
        self.local_key = local_key
        self.max_results = max_results
        self.identity = identity
        self.exact_lookup = exact_lookup
        self.max_prefix_length = max_prefix_length

        # The tree of the last expansion. This is informational only:
        self.root: Optional[NamespaceNode] = None

    async def expand(self, prefix: str = "") -> List[Any]:
        """Returns every item whose name starts with the prefix, de-duplicated and sorted by identity."""
        self.root = NamespaceNode(prefix)
        found = await self._expand_node(self.root)

        visited = sum(1 for _ in self.root.walk())
        LOGGER.debug(f"[🌳] Expanded prefix: {prefix!r} into {len(found)} item(s) with {visited} listing(s).")

        return [found[key] for key in sorted(found)]

    async def _expand_node(self, node: NamespaceNode) -> Dict[Hashable, Any]:
        """Lists the node's prefix and either accepts the results or branches out into the children."""
        items = list(await self.list_func(node.prefix))
        node.result_count = len(items)

        # Not truncated, so this is everything there is for this prefix:
        if len(items) < self.max_results:
            return self._merge([items])

        node.truncated = True
        LOGGER.debug(f"[✂️] Listing for prefix: {node.prefix!r} hit the cap of {self.max_results}. Branching out...")

        # The item named exactly after the prefix can't show up under any of the children, so it has to be captured here:
        exact_matches = [item for item in items if self.local_key(item) == node.prefix]

        # A name can't be longer than the maximum, so there is nothing to branch into. The page can only hold the exact match:
        if self.max_prefix_length is not None and len(node.prefix) >= self.max_prefix_length:
            if len(exact_matches) < len(items):
                raise ExpansionError(
                    f"Listing for prefix: {node.prefix!r} has names longer than the maximum of {self.max_prefix_length} characters."
                )

            return self._merge([exact_matches])
        if not exact_matches and self.exact_lookup and node.prefix:
            exact_match = await self.exact_lookup(node.prefix)
            if exact_match is not None:
                exact_matches.append(exact_match)

        node.children = [NamespaceNode(node.prefix + character) for character in self.alphabet]
        child_results = await asyncio.gather(*[self._expand_node(child) for child in node.children])

        return self._merge([exact_matches, *[list(result.values()) for result in child_results]])

    def _merge(self, item_lists: Iterable[Iterable[Any]]) -> Dict[Hashable, Any]:
        """De-duplicated union of the item lists. Siblings should never overlap, but a listing anomaly on the server shouldn't cause duplicates."""
        merged = {}
        for items in item_lists:
            for item in items:
                merged.setdefault(self.identity(item), item)

        return merged
