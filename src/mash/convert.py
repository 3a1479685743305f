from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Callable

from mash.errors import MalformedSourceError


def normalize_key(key: Any) -> str:
    """Return the canonical string form of ``key``."""
    if isinstance(key, str):
        return key
    return str(key)


def iter_pairs(source: Any) -> Iterator[tuple[Any, Any]]:
    """Iterate over the key/value pairs of a constructor source.

    ``source`` is either a mapping or an iterable of two-item pairs, the
    same inputs ``dict()`` accepts. The whole source is validated before
    anything is yielded.

    Raises
    ------
    MalformedSourceError
        When ``source`` is a string, is not iterable, or contains an item
        that is not a key/value pair.
    """
    if isinstance(source, Mapping):
        return iter(list(source.items()))

    if isinstance(source, (str, bytes, bytearray)) or not isinstance(source, Iterable):
        raise MalformedSourceError(
            f'Expected a mapping or an iterable of key/value pairs, got {type(source).__name__}'
        )

    pairs: list[tuple[Any, Any]] = []
    for index, item in enumerate(source):
        try:
            key, value = item
        except (TypeError, ValueError) as exc:
            raise MalformedSourceError(
                f'Item {index} of the source is not a key/value pair: {item!r}'
            ) from exc
        pairs.append((key, value))
    return iter(pairs)


def convert_value(value: Any, factory: Callable[[Mapping[Any, Any]], Any]) -> Any:
    """Recursively convert mappings found in ``value`` with ``factory``.

    Mappings are handed to ``factory`` (which converts their own values in
    turn). Lists and tuples are rebuilt with each element converted and
    keep their type. Everything else is returned unchanged.
    """
    if isinstance(value, Mapping):
        return factory(value)
    if isinstance(value, list):
        return [convert_value(item, factory) for item in value]
    if isinstance(value, tuple):
        items = (convert_value(item, factory) for item in value)
        if hasattr(value, '_fields'):
            # namedtuple
            return type(value)._make(items)
        return tuple(items)
    return value
