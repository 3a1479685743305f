class MashError(Exception):
    """Base class for errors raised by :mod:`mash`."""


class UnresolvedAccessorError(MashError, AttributeError):
    """Raised when an accessor name cannot be classified.

    Attribute-style access on a :class:`~mash.Mash` goes through
    :func:`mash.accessor.classify`. When the requested name matches none
    of the accessor forms (or carries a number of arguments that does not
    fit its suffix) this error is raised. It is an ``AttributeError`` so
    ``getattr(obj, name, default)`` and ``hasattr`` keep working.

    Attributes
    ----------
    name:
        The accessor name that was requested, including any suffix.
    nargs:
        The number of arguments the accessor was called with.
    """

    def __init__(self, name: str, nargs: int) -> None:
        super().__init__(f'Cannot resolve accessor {name!r} with {nargs} argument(s)')
        self.name = name
        self.nargs = nargs

    def __reduce__(self) -> tuple[type['UnresolvedAccessorError'], tuple[str, int]]:
        return type(self), (self.name, self.nargs)


class MalformedSourceError(MashError, TypeError):
    """Raised when a Mash is constructed from something that is not a
    mapping or an iterable of key/value pairs."""
