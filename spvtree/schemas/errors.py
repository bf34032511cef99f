"""
Error taxonomy for tree construction, proofs and artifacts.

Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

A proof that fails to reproduce the expected root is NOT an error:
verification returns False for it. The exceptions here are reserved
for structural violations (bad leaf count, empty tree, bad index)
and for malformed artifacts.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Tree structure
    INVALID_LEAF_COUNT = "INVALID_LEAF_COUNT"
    EMPTY_TREE = "EMPTY_TREE"
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"

    # Commitments
    ROOT_MISMATCH = "ROOT_MISMATCH"

    # Schema & serialization
    SCHEMA_VALIDATION_ERROR = "SCHEMA_VALIDATION_ERROR"
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"
    UNSUPPORTED_VERSION = "UNSUPPORTED_VERSION"

    # Artifact files
    ARTIFACT_IO_ERROR = "ARTIFACT_IO_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class TreeError(BaseModel):
    """
    Base error model for structured error reporting.

    Used where an error has to be carried as data (CLI JSON output,
    logs) rather than raised.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INDEX_OUT_OF_RANGE],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "SpvTreeException":
        """Convert this error model to a raisable exception."""
        return SpvTreeException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class SpvTreeException(Exception):
    """
    Base exception for all spvtree errors.

    Carries structured error information and can be converted
    to a TreeError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "SPVTREE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> TreeError:
        """Convert this exception to a TreeError model."""
        return TreeError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidLeafCountException(SpvTreeException, ValueError):
    """Raised when the padded leaf count is not a power of two."""

    def __init__(
        self,
        message: str,
        leaf_count: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_count is not None:
            full_details["leaf_count"] = leaf_count
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_LEAF_COUNT,
            details=full_details,
            retryable=False,
        )


class EmptyTreeException(SpvTreeException, ValueError):
    """Raised when an operation needs a root but the tree has none."""

    def __init__(
        self,
        message: str = "Tree is empty: it was built from zero records",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_TREE,
            details=details,
            retryable=False,
        )


class IndexOutOfRangeException(SpvTreeException, IndexError):
    """Raised when a leaf index is negative or not below the leaf count."""

    def __init__(
        self,
        message: str,
        index: int | None = None,
        leaf_count: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if index is not None:
            full_details["index"] = index
        if leaf_count is not None:
            full_details["leaf_count"] = leaf_count
        super().__init__(
            message=message,
            code=ErrorCodes.INDEX_OUT_OF_RANGE,
            details=full_details,
            retryable=False,
        )


class CanonicalizationException(SpvTreeException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
            retryable=False,
        )


class ArtifactIOException(SpvTreeException):
    """Exception raised when a tree or proof file cannot be read or written."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        code: str = ErrorCodes.ARTIFACT_IO_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if path:
            full_details["path"] = path
        super().__init__(
            message=message,
            code=code,
            details=full_details,
            retryable=False,
        )


class RootMismatchException(ArtifactIOException):
    """Stored root does not match the root recomputed from stored leaves."""

    def __init__(
        self,
        expected: str,
        actual: str,
        path: str | None = None,
    ) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            message=f"Root mismatch: expected {expected}, got {actual}",
            path=path,
            code=ErrorCodes.ROOT_MISMATCH,
            details={"expected": expected, "actual": actual},
        )
