"""Reference resolution for translation message trees.

Translation strings may point at other strings in the same tree:

- ``@:shared.title`` inserts the string at ``shared.title``
- ``@.upper:shared.title`` inserts it uppercased (``upper``, ``lower``,
  ``capitalize``)

Referenced strings may themselves contain references; they are expanded
recursively and cycles are reported instead of recursing forever.

Everything here is a pure read over the tree, so one tree can be shared by
any number of threads as long as nobody mutates it.
"""

import re
from collections.abc import Iterator
from enum import StrEnum
from typing import Any

from i18nrefs.models.messages import MessageTree, ReferenceToken

# @ [.modifier] : path
REFERENCE_PATTERN = re.compile(r"@(?:\.(\w+))?:(\S+)")


class Modifier(StrEnum):
    """Text transformations applicable to a referenced string."""

    UPPER = "upper"
    LOWER = "lower"
    CAPITALIZE = "capitalize"


SUPPORTED_MODIFIERS: tuple[str, ...] = tuple(m.value for m in Modifier)


class ReferenceResolutionError(Exception):
    """Base class for every failure while resolving a reference."""

    pass


class PathNotFoundError(ReferenceResolutionError):
    """Raised when a dotted path does not exist in the message tree."""

    def __init__(self, path: str, segment: str | None = None):
        if segment is None:
            message = f'Path "{path}" not found in messages'
        else:
            message = f'Path "{path}" is invalid: cannot access "{segment}" on non-object'
        super().__init__(message)
        self.path = path
        self.segment = segment


class NonStringReferenceError(ReferenceResolutionError):
    """Raised when a reference points at a sub-tree, array or other non-string."""

    def __init__(self, reference: str, path: str, actual_type: str):
        super().__init__(
            f'Reference "{reference}" points to a non-string value ({actual_type}) '
            f'at path "{path}". Only string values can be referenced.'
        )
        self.reference = reference
        self.path = path
        self.actual_type = actual_type


class UnsupportedModifierError(ReferenceResolutionError):
    """Raised for a modifier outside upper/lower/capitalize."""

    def __init__(self, modifier: str):
        super().__init__(
            f"Unsupported modifier: {modifier}. "
            f"Supported modifiers are: {', '.join(SUPPORTED_MODIFIERS)}"
        )
        self.modifier = modifier


class CircularReferenceError(ReferenceResolutionError):
    """Raised when a path is referenced while it is already being resolved."""

    def __init__(self, chain: tuple[str, ...], path: str):
        self.chain = tuple(chain)
        self.cycle = (*self.chain, path)
        super().__init__(f"Circular reference detected: {' -> '.join(self.cycle)}")
        self.path = path


def describe_type(value: Any) -> str:
    """Name the JSON shape of a value, for error messages."""
    match value:
        case str():
            return "string"
        case dict():
            return "object"
        case list() | tuple():
            return "array"
        case bool():
            return "boolean"
        case int() | float():
            return "number"
        case None:
            return "null"
        case _:
            return type(value).__name__


def get_value_by_path(messages: MessageTree, path: str) -> Any:
    """Look up the value at a dotted path, starting from the tree root.

    Args:
        messages: Root of the message tree.
        path: Dot-separated key path, e.g. ``"shared.common.title"``.

    Returns:
        Whatever sits at the path: a leaf string or a sub-tree.

    Raises:
        PathNotFoundError: If a segment is missing or a non-object is
            reached before the path is exhausted.
    """
    current: Any = messages
    for segment in path.split("."):
        match current:
            case dict():
                if segment not in current:
                    raise PathNotFoundError(path)
                current = current[segment]
            case _:
                raise PathNotFoundError(path, segment)
    return current


def apply_modifier(value: str, modifier: str | None) -> str:
    """Apply a text modifier to an already resolved string.

    Raises:
        UnsupportedModifierError: If the modifier is not one of
            upper, lower or capitalize.
    """
    if not modifier:
        return value

    match modifier:
        case Modifier.UPPER:
            return value.upper()
        case Modifier.LOWER:
            return value.lower()
        case Modifier.CAPITALIZE:
            return value[:1].upper() + value[1:].lower()
        case _:
            raise UnsupportedModifierError(modifier)


class References:
    """Lazy view over the reference tokens of one string.

    Scanning happens on iteration, so the same object can be iterated
    any number of times and always yields tokens left to right.
    """

    def __init__(self, text: str):
        self.text = text

    def __iter__(self) -> Iterator[ReferenceToken]:
        for match in REFERENCE_PATTERN.finditer(self.text):
            yield ReferenceToken(
                match=match.group(0),
                modifier=match.group(1),
                path=match.group(2),
                start=match.start(),
                end=match.end(),
            )

    def __bool__(self) -> bool:
        return REFERENCE_PATTERN.search(self.text) is not None

    def __repr__(self) -> str:
        return f"References({self.text!r})"


def extract_references(text: str) -> References:
    """Find every reference token in a string without resolving anything."""
    return References(text)


def resolve_reference(
    text: str,
    messages: MessageTree,
    chain: tuple[str, ...] | list[str] = (),
) -> str:
    """Expand every reference in ``text`` against ``messages``.

    Args:
        text: String possibly containing ``@:path`` tokens.
        messages: Root of the message tree. Lookups always start here.
        chain: Paths currently being resolved further up the stack.

    Returns:
        The string with each token replaced by its fully resolved,
        modified value. Strings without tokens come back unchanged.

    Raises:
        CircularReferenceError: A token points back into ``chain``.
        PathNotFoundError: A token's path does not exist.
        NonStringReferenceError: A token's path is not a string leaf.
        UnsupportedModifierError: A token uses an unknown modifier.
    """
    chain = tuple(chain)

    def _substitute(match: re.Match[str]) -> str:
        modifier, path = match.group(1), match.group(2)

        # Checked before lookup so that self-references are caught too
        if path in chain:
            raise CircularReferenceError(chain, path)

        value = get_value_by_path(messages, path)
        if not isinstance(value, str):
            raise NonStringReferenceError(match.group(0), path, describe_type(value))

        resolved = resolve_reference(value, messages, (*chain, path))
        return apply_modifier(resolved, modifier)

    return REFERENCE_PATTERN.sub(_substitute, text)


def resolve_subtree(value: Any, messages: MessageTree) -> Any:
    """Resolve every string under ``value``, looking paths up from ``messages``.

    Only strings inside ``value`` are touched, so broken references elsewhere
    in the tree do not affect the result.
    """
    match value:
        case str():
            return resolve_reference(value, messages)
        case dict():
            return {key: resolve_subtree(item, messages) for key, item in value.items()}
        case list():
            return [resolve_subtree(item, messages) for item in value]
        case _:
            return value


def resolve_messages(messages: MessageTree) -> MessageTree:
    """Return a copy of the tree with every string's references expanded.

    Each leaf is resolved on its own, starting from an empty chain.
    The input tree is left untouched.

    Example:
        >>> resolve_messages({"m": {"dio": "DIO:", "world": "the world",
        ...                         "linked": "@:m.dio @:m.world !!!!"}})["m"]["linked"]
        'DIO: the world !!!!'
    """
    return resolve_subtree(messages, messages)
