"""Walking helpers for message trees.

Logical paths use dots for object keys and ``[i]`` for array items,
e.g. ``pages.home.features[2].title``.
"""

import re
from collections.abc import Iterator
from typing import Any


def join_path(prefix: str, key: str) -> str:
    return f"{prefix}.{key}" if prefix else key


def iter_strings(value: Any, prefix: str = "") -> Iterator[tuple[str, str]]:
    """Yield ``(logical_path, string)`` for every string leaf, depth first.

    Strings inside arrays are included; other scalars are skipped.
    """
    match value:
        case str():
            yield prefix, value
        case dict():
            for key, item in value.items():
                yield from iter_strings(item, join_path(prefix, key))
        case list():
            for index, item in enumerate(value):
                yield from iter_strings(item, f"{prefix}[{index}]")
        case _:
            return


def iter_string_paths(value: Any, prefix: str = "") -> Iterator[str]:
    """Yield dotted paths of string leaves reachable by reference.

    Arrays are not addressable by ``@:`` paths, so they are not entered.
    """
    match value:
        case str():
            yield prefix
        case dict():
            for key, item in value.items():
                yield from iter_string_paths(item, join_path(prefix, key))
        case _:
            return


def collect_key_paths(value: Any, prefix: str = "", keys: set[str] | None = None) -> set[str]:
    """Collect every object key path in a JSON document.

    Objects nested in arrays are entered with ``[i]`` segments; the array
    itself contributes only its own key.
    """
    if keys is None:
        keys = set()

    match value:
        case dict():
            for key, item in value.items():
                full_path = join_path(prefix, key)
                keys.add(full_path)
                collect_key_paths(item, full_path, keys)
        case list():
            for index, item in enumerate(value):
                if isinstance(item, (dict, list)):
                    collect_key_paths(item, f"{prefix}[{index}]", keys)
        case _:
            pass

    return keys


_KEBAB_PATTERN = re.compile(r"-([a-z])")


def to_camel_case(name: str) -> str:
    """Convert a kebab-case file stem to a camelCase key.

    >>> to_camel_case("curated-collections")
    'curatedCollections'
    """
    return _KEBAB_PATTERN.sub(lambda m: m.group(1).upper(), name)
