"""
Error handling for CRS.

Every library error derives from CRSError and carries an integer code
from the table below.
"""

from __future__ import annotations

from typing import Optional, Tuple


# =============================================================================
# Error Codes
# =============================================================================

# Success
CRS_OK = 0

# General errors (1-9)
CRS_ERROR_UNKNOWN = 1
CRS_ERROR_INTERNAL = 2
CRS_ERROR_OUT_OF_MEMORY = 3

# Argument errors (10-19)
CRS_ERROR_INVALID_ARGUMENT = 10
CRS_ERROR_DIMENSION_MISMATCH = 11
CRS_ERROR_EMPTY_MATRIX = 12

# Type errors (20-29)
CRS_ERROR_TYPE_ERROR = 20
CRS_ERROR_TYPE_MISMATCH = 21


# Error code to message mapping
_ERROR_MESSAGES = {
    CRS_OK: "Success",
    CRS_ERROR_UNKNOWN: "Unknown error",
    CRS_ERROR_INTERNAL: "Internal error",
    CRS_ERROR_OUT_OF_MEMORY: "Out of memory",
    CRS_ERROR_INVALID_ARGUMENT: "Invalid argument",
    CRS_ERROR_DIMENSION_MISMATCH: "Dimension mismatch",
    CRS_ERROR_EMPTY_MATRIX: "Empty matrix",
    CRS_ERROR_TYPE_ERROR: "Type error",
    CRS_ERROR_TYPE_MISMATCH: "Type mismatch",
}


def error_message(code: int) -> str:
    """Human-readable message for an error code."""
    return _ERROR_MESSAGES.get(code, f"Unknown error (code={code})")


# =============================================================================
# Exception Classes
# =============================================================================

class CRSError(Exception):
    """
    Base exception for all CRS errors.
    """

    OK = CRS_OK
    ERROR_UNKNOWN = CRS_ERROR_UNKNOWN
    ERROR_INTERNAL = CRS_ERROR_INTERNAL
    ERROR_OUT_OF_MEMORY = CRS_ERROR_OUT_OF_MEMORY
    ERROR_INVALID_ARGUMENT = CRS_ERROR_INVALID_ARGUMENT
    ERROR_DIMENSION_MISMATCH = CRS_ERROR_DIMENSION_MISMATCH
    ERROR_EMPTY_MATRIX = CRS_ERROR_EMPTY_MATRIX
    ERROR_TYPE_ERROR = CRS_ERROR_TYPE_ERROR
    ERROR_TYPE_MISMATCH = CRS_ERROR_TYPE_MISMATCH

    def __init__(self, code: int, message: Optional[str] = None):
        """
        Create CRS exception.

        Args:
            code: Error code
            message: Optional detailed message (looked up from code if not provided)
        """
        self.code = code
        if message is None:
            message = error_message(code)
        self.message = message
        super().__init__(f"CRS Error {code}: {message}")

    @classmethod
    def from_code(cls, code: int, context: str = "") -> "CRSError":
        """Create exception from error code with optional context."""
        base_msg = error_message(code)
        msg = f"{context}: {base_msg}" if context else base_msg
        return cls(code, msg)


class DimensionMismatch(CRSError):
    """
    Operand shapes are incompatible.

    Raised by addition/subtraction when shapes differ and by
    multiplication when left.cols != right.rows. Always raised
    before any result buffer is allocated.
    """

    def __init__(self, message: Optional[str] = None):
        super().__init__(CRS_ERROR_DIMENSION_MISMATCH, message)

    @classmethod
    def from_shapes(
        cls,
        op: str,
        left: Tuple[int, int],
        right: Tuple[int, int],
    ) -> "DimensionMismatch":
        """Create exception describing the offending operand shapes."""
        return cls(f"{op}: {error_message(CRS_ERROR_DIMENSION_MISMATCH)} "
                   f"{left} vs {right}")


class EmptyMatrixError(CRSError):
    """An operation was applied to a matrix that holds no storage."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(CRS_ERROR_EMPTY_MATRIX, message)


def check_error(code: int, context: str = "") -> None:
    """
    Raise the exception matching a non-OK error code.

    Args:
        code: Error code
        context: Optional context message for better error reporting

    Raises:
        CRSError: If code indicates an error
    """
    if code == CRS_OK:
        return

    msg = f"{context}: {error_message(code)}" if context else error_message(code)
    if code == CRS_ERROR_DIMENSION_MISMATCH:
        raise DimensionMismatch(msg)
    if code == CRS_ERROR_EMPTY_MATRIX:
        raise EmptyMatrixError(msg)
    raise CRSError(code, msg)
