import re
from dataclasses import dataclass
from enum import Enum
from logging import getLogger
from typing import Callable

from mash.errors import UnresolvedAccessorError

_logger = getLogger(__name__)

# Names that read as a plain attribute and may resolve to "no value".
BARE_IDENTIFIER = re.compile(r'[a-z][a-zA-Z0-9_]+')


class AccessorKind(Enum):
    SET = 'set'
    HAS = 'has'
    TOUCH = 'touch'
    GET = 'get'
    ABSENT = 'absent'


@dataclass(frozen=True)
class Accessor:
    """A classified accessor request.

    Attributes
    ----------
    kind:
        The operation the request maps to.
    key:
        The key the operation applies to, with any suffix stripped.
    """

    kind: AccessorKind
    key: str


def classify(name: str, nargs: int, is_key: Callable[[str], bool]) -> Accessor:
    """Classify an attribute-style accessor name.

    Rules are tried in order, the first match wins:

    1. ``name=`` with one argument sets ``name``.
    2. ``name?`` with no arguments checks whether ``name`` exists.
    3. ``name!`` with no arguments touches ``name``, creating it if absent.
    4. ``name`` verbatim is an existing key: get it.
    5. ``name`` is a bare identifier (lowercase letter followed by at least
       one letter, digit or underscore) with no arguments: no value.

    Suffix forms are checked before the literal key lookup, so a key that
    is literally named ``'valid?'`` is only reachable through item access.

    Parameters
    ----------
    name:
        The requested accessor name.
    nargs:
        How many arguments accompany the request.
    is_key:
        Predicate telling whether ``name`` is currently a stored key.

    Returns
    -------
    Accessor
        The classified request.

    Raises
    ------
    UnresolvedAccessorError
        If no rule applies.
    """
    match name[-1:], nargs:
        case '=', 1:
            return Accessor(AccessorKind.SET, name[:-1])
        case '?', 0:
            return Accessor(AccessorKind.HAS, name[:-1])
        case '!', 0:
            return Accessor(AccessorKind.TOUCH, name[:-1])

    if is_key(name):
        return Accessor(AccessorKind.GET, name)

    if nargs == 0 and BARE_IDENTIFIER.fullmatch(name):
        return Accessor(AccessorKind.ABSENT, name)

    _logger.debug('Unresolved accessor %r with %d argument(s)', name, nargs)
    raise UnresolvedAccessorError(name, nargs)
