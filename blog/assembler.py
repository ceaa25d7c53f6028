"""
Relational assembler: turns flat joined reads into nested graphs.

The read layer hands back two independent, flat lists: an ordered list of
parent rows (e.g. ``(post, author)`` pairs, newest first) and a list of
child rows carrying a foreign key to some parent (e.g. ``(comment,
commenter)`` pairs in whatever order the store scanned them).
``group_by_parent`` recombines them in one pass:

1. seed an empty bucket for every parent key, so parents with no children
   still come out with ``[]``;
2. walk the children once, appending each to the bucket for its key.
   Children whose key matches no parent are dropped; that is a
   consistency gap between two reads, not an error;
3. walk the parents in their original order and pair each with its bucket.

Parent order and within-bucket child order are both preserved exactly as
received; nothing is re-sorted.  The function never touches the store,
which is why callers must fetch every child for every parent in a single
read beforehand.
"""
from collections.abc import Callable, Hashable, Iterable, Sequence
from typing import TypeVar

P = TypeVar("P")
C = TypeVar("C")
K = TypeVar("K", bound=Hashable)


def group_by_parent(
    parents: Sequence[P],
    children: Iterable[C],
    *,
    parent_key: Callable[[P], K],
    child_key: Callable[[C], K],
) -> list[tuple[P, list[C]]]:
    """
    Return ``[(parent, [children...]), ...]`` in parent order.

    A parent key that appears more than once in *parents* yields a single
    entry, at the position of its first occurrence.
    """
    buckets: dict[K, list[C]] = {}
    ordered: list[P] = []
    for parent in parents:
        key = parent_key(parent)
        if key not in buckets:
            buckets[key] = []
            ordered.append(parent)

    for child in children:
        bucket = buckets.get(child_key(child))
        if bucket is not None:
            bucket.append(child)

    return [(parent, buckets[parent_key(parent)]) for parent in ordered]
