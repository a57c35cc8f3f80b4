"""Partition a sequence by one or more keys derived from each item."""

from __future__ import annotations

import json
from collections.abc import Callable, Hashable, Iterable, Sequence
from typing import Any, TypeVar

from pydantic import BaseModel

from postloom.core.types import Group

G = TypeVar("G")
R = TypeVar("R")

_UNHASHABLE = object()


def _jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, set | frozenset):
        return sorted(value, key=repr)
    return repr(value)


def structural_key(key: Any) -> Hashable:
    """Return a hashable stand-in that is equal for structurally equal keys.

    Hashable keys are used as they are. Mappings, lists and other unhashable
    values are compared through their canonical JSON form.

    Examples:
        >>> structural_key({"path": "java", "name": "Java"}) == structural_key({"name": "Java", "path": "java"})
        True
        >>> structural_key("java")
        'java'

    """
    try:
        hash(key)
    except TypeError:
        return (_UNHASHABLE, json.dumps(key, sort_keys=True, default=_jsonable))
    return key


def group_by(items: Iterable[R], key_fn: Callable[[R], Sequence[G]]) -> list[Group[G, R]]:
    """Group ``items`` by every key ``key_fn`` returns for them.

    Keys are compared by value, so frozen models such as ``Tag`` and plain
    ``{"name": ..., "path": ...}`` mappings both work as keys. Groups come out
    in order of first appearance and each group's results keep the input
    order. An item joins a given group at most once, and keys that match
    nothing never show up. Each group holds the first key value seen for it.

    Examples:
        >>> groups = group_by(["ab", "b"], lambda word: list(word))
        >>> [(g.group, g.results) for g in groups]
        [('a', ['ab']), ('b', ['ab', 'b'])]

    """
    buckets: dict[Hashable, tuple[G, list[R]]] = {}
    for item in items:
        seen: set[Hashable] = set()
        for key in key_fn(item):
            marker = structural_key(key)
            if marker in seen:
                continue
            seen.add(marker)
            if marker not in buckets:
                buckets[marker] = (key, [])
            buckets[marker][1].append(item)
    return [Group(group=key, results=results) for key, results in buckets.values()]
