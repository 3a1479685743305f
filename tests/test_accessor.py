import pickle

import pytest

from mash.accessor import Accessor, AccessorKind, classify
from mash.errors import UnresolvedAccessorError


def _no_keys(name: str) -> bool:
    return False


def _all_keys(name: str) -> bool:
    return True


@pytest.mark.parametrize(
    'name, nargs, expected',
    [
        ('name=', 1, Accessor(AccessorKind.SET, 'name')),
        ('name?', 0, Accessor(AccessorKind.HAS, 'name')),
        ('name!', 0, Accessor(AccessorKind.TOUCH, 'name')),
        ('missingField', 0, Accessor(AccessorKind.ABSENT, 'missingField')),
        ('snake_case_2', 0, Accessor(AccessorKind.ABSENT, 'snake_case_2')),
    ],
)
def test_classify_without_keys(name: str, nargs: int, expected: Accessor):
    assert classify(name, nargs, _no_keys) == expected


def test_existing_key_is_a_get():
    assert classify('title', 0, _all_keys) == Accessor(AccessorKind.GET, 'title')
    # Literal keys that are not bare identifiers are still reachable.
    assert classify('Title', 0, _all_keys) == Accessor(AccessorKind.GET, 'Title')


def test_suffix_wins_over_literal_key():
    assert classify('valid?', 0, _all_keys) == Accessor(AccessorKind.HAS, 'valid')
    assert classify('name=', 1, _all_keys) == Accessor(AccessorKind.SET, 'name')
    assert classify('name!', 0, _all_keys) == Accessor(AccessorKind.TOUCH, 'name')


def test_suffix_with_wrong_argument_count_falls_through_to_key_lookup():
    assert classify('name=', 0, _all_keys) == Accessor(AccessorKind.GET, 'name=')
    assert classify('name?', 1, _all_keys) == Accessor(AccessorKind.GET, 'name?')


@pytest.mark.parametrize(
    'name, nargs',
    [
        ('name=', 0),
        ('name=', 2),
        ('name?', 1),
        ('name!', 1),
        ('name', 1),
        ('Name', 0),
        ('_private', 0),
        ('x', 0),
        ('with-dash', 0),
        ('', 0),
    ],
)
def test_unresolved_accessors_raise(name: str, nargs: int):
    with pytest.raises(UnresolvedAccessorError) as excinfo:
        classify(name, nargs, _no_keys)

    assert excinfo.value.name == name
    assert excinfo.value.nargs == nargs
    assert isinstance(excinfo.value, AttributeError)
    assert repr(name) in str(excinfo.value)


def test_unresolved_accessor_error_pickles():
    error = UnresolvedAccessorError('name?', 2)
    restored = pickle.loads(pickle.dumps(error))
    assert type(restored) is UnresolvedAccessorError
    assert (restored.name, restored.nargs) == ('name?', 2)
    assert str(restored) == str(error)
