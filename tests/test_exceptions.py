from __future__ import annotations

import pickle

import pytest

from lexigraph import exceptions


@pytest.mark.parametrize(
    "error",
    [
        exceptions.LexiconIndexError(4, 2),
        exceptions.VertexNotFoundError("a", ["b"]),
        exceptions.UnreachableVertexError("a", "b"),
        exceptions.IterationLimitError(10, "too many"),
        exceptions.EmptyLexiconError(),
    ],
)
def test_errors_survive_pickling(error: exceptions.LexigraphError):
    restored = pickle.loads(pickle.dumps(error))
    assert type(restored) is type(error)
    assert str(restored) == str(error)


def test_every_error_is_a_lexigraph_error():
    for name in dir(exceptions):
        obj = getattr(exceptions, name)
        if isinstance(obj, type) and issubclass(obj, Exception):
            assert issubclass(obj, exceptions.LexigraphError)


def test_builtin_compatibility():
    assert issubclass(exceptions.LexiconIndexError, IndexError)
    assert issubclass(exceptions.EmptyLexiconError, LookupError)
    assert issubclass(exceptions.VertexNotFoundError, ValueError)
    assert issubclass(exceptions.InvalidColorError, ValueError)
    assert issubclass(exceptions.InvalidWeightError, ValueError)
    assert issubclass(exceptions.ConfigValidationError, exceptions.ConfigError)


def test_index_error_suggestion():
    assert exceptions.LexiconIndexError(3, 0).get_suggestion() == "The Lexicon is empty"
    assert exceptions.LexiconIndexError(3, 2).get_suggestion() == "Use an index between 0 and 1"


def test_vertex_not_found_without_close_match():
    error = exceptions.VertexNotFoundError("zzz", ["alpha"])
    assert error.format_user_message() == "Vertex 'zzz' is not in the graph"


def test_base_error_defaults():
    error = exceptions.GraphError("plain")
    assert error.format_user_message() == "plain"
    assert error.get_suggestion() is None
