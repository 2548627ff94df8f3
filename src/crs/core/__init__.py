"""
CRS Core - error handling and global configuration.

Usage:
    >>> from crs.core import DimensionMismatch, get_config
    >>> get_config().check_invariants = True
"""

from .error import (
    CRSError,
    DimensionMismatch,
    EmptyMatrixError,
    check_error,
    error_message,
    # Error codes
    CRS_OK,
    CRS_ERROR_UNKNOWN,
    CRS_ERROR_INTERNAL,
    CRS_ERROR_OUT_OF_MEMORY,
    CRS_ERROR_INVALID_ARGUMENT,
    CRS_ERROR_DIMENSION_MISMATCH,
    CRS_ERROR_EMPTY_MATRIX,
)

from .config import (
    get_config,
    set_default_dtype,
    get_default_dtype,
    reset_config,
)

__all__ = [
    # Error handling
    "CRSError",
    "DimensionMismatch",
    "EmptyMatrixError",
    "check_error",
    "error_message",
    "CRS_OK",
    "CRS_ERROR_UNKNOWN",
    "CRS_ERROR_INTERNAL",
    "CRS_ERROR_OUT_OF_MEMORY",
    "CRS_ERROR_INVALID_ARGUMENT",
    "CRS_ERROR_DIMENSION_MISMATCH",
    "CRS_ERROR_EMPTY_MATRIX",
    # Configuration
    "get_config",
    "set_default_dtype",
    "get_default_dtype",
    "reset_config",
]
