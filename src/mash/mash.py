from collections import defaultdict
from logging import getLogger
from reprlib import recursive_repr
from typing import Any, Callable, Iterator, Mapping, MutableMapping, TypeVar

from mash.accessor import AccessorKind, classify
from mash.convert import convert_value, iter_pairs, normalize_key

_logger = getLogger(__name__)

# Attributes that configure an instance rather than name an entry.
_SETTINGS = frozenset({'default_factory', 'autovivify_reads'})


class Mash(MutableMapping[str, Any]):
    """
    Mapping with attribute-style accessors for its keys.

    A `Mash` lets loosely structured data (parsed API responses, decoded
    config files) be used as a pseudo-object. Keys are normalized to
    strings, and nested mappings in the source, including mappings inside
    lists and tuples, are converted to instances of the same class.

    Parameters
    ----------
    source : Mapping | Iterable[tuple[Any, Any]] | None, optional
        Initial entries. Every value is converted recursively and installed
        through :meth:`set`.
    **kwargs : Any
        Further initial entries, ingested after ``source``.

    Attributes
    ----------
    autovivify_reads : bool
        When true, reading an absent plain attribute creates and returns an
        empty branch, as :meth:`touch` does. By default such reads return
        ``None`` and leave the mapping unchanged.
    default_factory : Callable[[], Any] | None
        When set, item access on an absent key stores and returns the
        result of calling it, like :class:`collections.defaultdict`.

    Notes
    -----
    - Attribute access goes through :func:`mash.accessor.classify`:
      ``m.name = v`` sets, ``getattr(m, 'name?')`` tests existence,
      ``getattr(m, 'name!')`` touches and ``m.name`` gets.
    - Methods of the class take precedence over entries with the same
      name; use item access to reach those entries.
    - Only construction converts nested mappings. Assigning a raw
      ``dict`` afterwards stores it as-is.

    Examples
    --------
    >>> m = Mash({'a': {'b': 23}, 'f': [{'g': 44}, 12]})
    >>> m.a.b
    23
    >>> m.f[0].g
    44
    >>> getattr(m, 'author!').name = 'Bob'
    >>> m.author.name
    'Bob'
    >>> m.missing is None
    True
    """

    _data: dict[str, Any]
    autovivify_reads: bool = False
    default_factory: Callable[[], Any] | None = None

    normalize_key = staticmethod(normalize_key)

    def __init__(self, source: Any = None, /, **kwargs: Any) -> None:
        # Use object.__setattr__ to avoid recursion into __setattr__.
        object.__setattr__(self, '_data', {})
        if source is not None:
            self._ingest(source)
        if kwargs:
            self._ingest(kwargs)

    def _ingest(self, source: Any) -> None:
        for key, value in iter_pairs(source):
            self.set(key, convert_value(value, self._convert_mapping))

    def _convert_mapping(self, mapping: Mapping[Any, Any]) -> 'Mash':
        return type(self)(mapping)

    # Keyed operations

    def get(self, key: Any, default: Any = None) -> Any:
        return self._data.get(self.normalize_key(key), default)

    def set(self, key: Any, value: Any) -> None:
        """Store ``value`` under ``key``.

        Subclasses may override this to intercept every write, including
        the ones made while ingesting the constructor source.
        """
        self._store(key, value)

    def _store(self, key: Any, value: Any) -> None:
        self._data[self.normalize_key(key)] = value

    def has(self, key: Any) -> bool:
        return self.normalize_key(key) in self._data

    def touch(self, key: Any) -> Any:
        """Return the value under ``key``, creating an empty branch if absent.

        Repeated calls return the same stored object, so paths can be
        built one level at a time::

            >>> m = Mash()
            >>> m.touch('author').touch('address').city = 'Delft'
            >>> m.author.address.city
            'Delft'
        """
        key = self.normalize_key(key)
        if key not in self._data:
            _logger.debug('Creating empty branch for key %r', key)
            self.set(key, type(self)())
        return self._data[key]

    def dispatch(self, accessor: str, *args: Any) -> Any:
        """Perform an attribute-style accessor request.

        See :func:`mash.accessor.classify` for how ``accessor`` and the
        number of ``args`` select the operation.
        """
        request = classify(accessor, len(args), self._data.__contains__)
        match request.kind:
            case AccessorKind.SET:
                return self.set(request.key, args[0])
            case AccessorKind.HAS:
                return self.has(request.key)
            case AccessorKind.TOUCH:
                return self.touch(request.key)
            case AccessorKind.GET:
                return self.get(request.key)
            case AccessorKind.ABSENT:
                if self.autovivify_reads:
                    _logger.debug('Auto-vivifying on read of %r', request.key)
                    return self.touch(request.key)
                return None

    # Attribute protocol

    def __getattr__(self, name: str) -> Any:
        # Only called when regular lookup fails. Dunder and storage lookups
        # must fail normally so copy, pickle and friends work.
        if name == '_data' or _is_dunder(name):
            raise AttributeError(name)
        return self.dispatch(name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _SETTINGS or _is_dunder(name):
            object.__setattr__(self, name, value)
        else:
            self.dispatch(f'{name}=', value)

    def __delattr__(self, name: str) -> None:
        if name in _SETTINGS or _is_dunder(name):
            object.__delattr__(self, name)
            return
        try:
            del self[name]
        except KeyError as exc:
            raise AttributeError(name) from exc

    def __dir__(self) -> list[str]:
        names = set(super().__dir__())
        names.update(key for key in self._data if key.isidentifier())
        return sorted(names)

    # Mapping protocol

    def __getitem__(self, key: Any) -> Any:
        key = self.normalize_key(key)
        try:
            return self._data[key]
        except KeyError:
            if self.default_factory is None:
                raise
        value = self.default_factory()
        self.set(key, value)
        return value

    def __setitem__(self, key: Any, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: Any) -> None:
        del self._data[self.normalize_key(key)]

    def pop(self, key: Any, *default: Any) -> Any:
        # Bypass default_factory, which MutableMapping.pop would trigger.
        return self._data.pop(self.normalize_key(key), *default)

    def setdefault(self, key: Any, default: Any = None) -> Any:
        # Same as pop: a missing key takes ``default``, not default_factory.
        key = self.normalize_key(key)
        if key not in self._data:
            self.set(key, default)
        return self._data[key]

    def __contains__(self, key: object) -> bool:
        return self.has(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    # Representation

    @recursive_repr()
    def describe(self) -> str:
        """Return ``<ClassName key=value ...>`` with keys in sorted order."""
        parts = [type(self).__name__]
        parts.extend(f'{key}={self._data[key]!r}' for key in sorted(self._data))
        return '<' + ' '.join(parts) + '>'

    def __repr__(self) -> str:
        return self.describe()

    __str__ = __repr__

    # Conversion

    def copy(self) -> 'Mash':
        """Return a shallow copy of the same class and configuration."""
        duplicate = type(self)()
        duplicate._data.update(self._data)
        for name in _SETTINGS:
            if name in self.__dict__:
                object.__setattr__(duplicate, name, self.__dict__[name])
        return duplicate

    def __copy__(self) -> 'Mash':
        return self.copy()

    def to_dict(self) -> dict[str, Any]:
        """Convert back to plain containers, recursively."""
        return {key: _unmash(value) for key, value in self._data.items()}


def _is_dunder(name: str) -> bool:
    return name.startswith('__') and name.endswith('__')

def _unmash(value: Any) -> Any:
    if isinstance(value, Mash):
        return value.to_dict()
    if isinstance(value, list):
        return [_unmash(item) for item in value]
    if isinstance(value, tuple):
        items = (_unmash(item) for item in value)
        if hasattr(value, '_fields'):
            return type(value)._make(items)
        return tuple(items)
    return value


M = TypeVar('M', bound=Mash)


def to_mash(mapping: Mapping[Any, Any], cls: type[M] = Mash) -> M:
    """Build a new Mash from an existing mapping.

    The mapping's "default for missing keys" policy is kept: when
    ``mapping`` is a :class:`collections.defaultdict`, its
    ``default_factory`` is set on the result.

    Parameters
    ----------
    mapping : Mapping
        The mapping to convert. It is not modified.
    cls : type[Mash], optional
        The class to build, by default :class:`Mash`.

    Returns
    -------
    Mash
        A recursively converted instance of ``cls``.
    """
    result = cls(mapping)
    if isinstance(mapping, defaultdict) and mapping.default_factory is not None:
        result.default_factory = mapping.default_factory
    return result
