# pyright: reportUnusedImport=false
from mash.accessor import Accessor, AccessorKind, classify
from mash.errors import MalformedSourceError, MashError, UnresolvedAccessorError
from mash.mash import Mash, to_mash

__version__ = '0.1.0'

__all__ = [
    'Accessor',
    'AccessorKind',
    'MalformedSourceError',
    'Mash',
    'MashError',
    'UnresolvedAccessorError',
    'classify',
    'to_mash',
]
