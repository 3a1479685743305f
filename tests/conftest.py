from typing import Any

import pytest


@pytest.fixture
def nested_source() -> dict[str, Any]:
    """The nested structure from the Mash usage example."""
    return {'a': {'b': 23, 'd': {'e': 'abc'}}, 'f': [{'g': 44, 'h': 29}, 12]}


@pytest.fixture
def api_response() -> dict[str, Any]:
    """A loosely structured payload as returned by a JSON API."""
    return {
        'id': 42,
        'title': 'Mash',
        'author': {'name': 'Bob', 'links': [{'rel': 'self', 'href': '/users/7'}]},
        'tags': ['ruby', 'python'],
        'matrix': [[{'x': 1}], ({'y': 2}, 3)],
    }
