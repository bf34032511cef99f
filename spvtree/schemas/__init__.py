"""
Schemas, error taxonomy and canonical serialization.
"""

from .versioning import (
    SCHEMA_VERSION,
    SUPPORTED_SCHEMA_VERSIONS,
    UnsupportedSchemaVersionError,
    assert_supported_schema_version,
    is_compatible_schema_version,
)
from .errors import (
    ErrorCodes,
    TreeError,
    SpvTreeException,
    InvalidLeafCountException,
    EmptyTreeException,
    IndexOutOfRangeException,
    CanonicalizationException,
    ArtifactIOException,
    RootMismatchException,
)
from .canonical import (
    canonicalize_value,
    dumps_canonical,
    loads_canonical,
)
from .proof import (
    InclusionProof,
    TreeSnapshot,
)

__all__ = [
    # Versioning
    "SCHEMA_VERSION",
    "SUPPORTED_SCHEMA_VERSIONS",
    "UnsupportedSchemaVersionError",
    "assert_supported_schema_version",
    "is_compatible_schema_version",
    # Errors
    "ErrorCodes",
    "TreeError",
    "SpvTreeException",
    "InvalidLeafCountException",
    "EmptyTreeException",
    "IndexOutOfRangeException",
    "CanonicalizationException",
    "ArtifactIOException",
    "RootMismatchException",
    # Canonical
    "canonicalize_value",
    "dumps_canonical",
    "loads_canonical",
    # Proof records
    "InclusionProof",
    "TreeSnapshot",
]
