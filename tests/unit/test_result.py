"""Unit tests for core/result.py."""

import dataclasses

import pytest

from core.result import ErrorKind, Failure, Success


class TestSuccess:
    def test_holds_value(self):
        assert Success([1, 2]).value == [1, 2]

    def test_is_frozen(self):
        result = Success("x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.value = "y"


class TestFailure:
    def test_not_found(self):
        failure = Failure.not_found("nothing")
        assert failure.kind is ErrorKind.NOT_FOUND
        assert failure.message == "nothing"

    def test_internal(self):
        failure = Failure.internal("boom")
        assert failure.kind is ErrorKind.INTERNAL_ERROR
        assert failure.message == "boom"

    def test_equality(self):
        assert Failure.internal("boom") == Failure(ErrorKind.INTERNAL_ERROR, "boom")

    def test_kind_values(self):
        assert ErrorKind.NOT_FOUND.value == "not_found"
        assert ErrorKind.INTERNAL_ERROR.value == "internal_error"
