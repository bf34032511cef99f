"""
Error Taxonomy Unit Tests
Tests for spvtree/schemas/errors.py
"""
import pytest

from spvtree.schemas.errors import (
    ArtifactIOException,
    EmptyTreeException,
    ErrorCodes,
    IndexOutOfRangeException,
    InvalidLeafCountException,
    RootMismatchException,
    SpvTreeException,
    TreeError,
)


class TestExceptionHierarchy:

    def test_all_derive_from_base(self):
        for exc in (
            InvalidLeafCountException("x"),
            EmptyTreeException(),
            IndexOutOfRangeException("x"),
            ArtifactIOException("x"),
            RootMismatchException("0x00", "0x01"),
        ):
            assert isinstance(exc, SpvTreeException)

    def test_builtin_bases(self):
        assert isinstance(InvalidLeafCountException("x"), ValueError)
        assert isinstance(EmptyTreeException(), ValueError)
        assert isinstance(IndexOutOfRangeException("x"), IndexError)

    def test_codes(self):
        assert InvalidLeafCountException("x").code == ErrorCodes.INVALID_LEAF_COUNT
        assert EmptyTreeException().code == ErrorCodes.EMPTY_TREE
        assert IndexOutOfRangeException("x").code == ErrorCodes.INDEX_OUT_OF_RANGE
        assert ArtifactIOException("x").code == ErrorCodes.ARTIFACT_IO_ERROR
        assert RootMismatchException("a", "b").code == ErrorCodes.ROOT_MISMATCH

    def test_none_are_retryable(self):
        assert not IndexOutOfRangeException("x").retryable
        assert not InvalidLeafCountException("x").retryable


class TestDetails:

    def test_index_details(self):
        exc = IndexOutOfRangeException("bad index", index=7, leaf_count=4)

        assert exc.details == {"index": 7, "leaf_count": 4}
        assert str(exc) == "bad index"

    def test_leaf_count_details(self):
        exc = InvalidLeafCountException("bad count", leaf_count=6, details={"record_count": 5})

        assert exc.details == {"record_count": 5, "leaf_count": 6}

    def test_root_mismatch_details(self):
        exc = RootMismatchException(expected="0xaa", actual="0xbb", path="tree.json")

        assert exc.expected == "0xaa"
        assert exc.actual == "0xbb"
        assert exc.details["path"] == "tree.json"
        assert "0xaa" in exc.message and "0xbb" in exc.message

    def test_repr(self):
        exc = EmptyTreeException()

        assert repr(exc).startswith("EmptyTreeException(code='EMPTY_TREE'")


class TestErrorModel:

    def test_exception_to_model(self):
        exc = IndexOutOfRangeException("bad index", index=-1)

        model = exc.to_error_model()

        assert isinstance(model, TreeError)
        assert model.code == ErrorCodes.INDEX_OUT_OF_RANGE
        assert model.details == {"index": -1}

    def test_model_to_exception(self):
        model = TreeError(code=ErrorCodes.EMPTY_TREE, message="no root")

        exc = model.to_exception()

        assert isinstance(exc, SpvTreeException)
        assert exc.code == ErrorCodes.EMPTY_TREE
        assert exc.message == "no root"

    def test_model_forbids_extra_fields(self):
        from pydantic import ValidationError

        with pytest.raises(ValidationError):
            TreeError(code="X", message="m", unexpected=True)
