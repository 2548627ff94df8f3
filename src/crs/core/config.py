"""
Global configuration for CRS.

Provides:
- Default scalar dtype for matrices built without an explicit dtype
- Optional invariant checking on every arithmetic result
"""

from __future__ import annotations

import os
from typing import Union

from ..sparse._dtypes import DType, normalize_dtype, validate_dtype


_TRUTHY = ('1', 'true', 'yes')


def _env_flag(name: str) -> bool:
    """Read a boolean flag from the environment (default: False)."""
    return os.environ.get(name, '').lower() in _TRUTHY


# =============================================================================
# Global Configuration State
# =============================================================================

class _Config:
    """
    Global configuration singleton.

    Manages the default dtype and invariant checking.
    """

    def __init__(self):
        # Default: float64 (most compatible)
        self._default_dtype = DType.float64
        self._check_invariants = _env_flag('CRS_CHECK_INVARIANTS')

    @property
    def default_dtype(self) -> DType:
        """Get default scalar dtype."""
        return self._default_dtype

    @default_dtype.setter
    def default_dtype(self, value: Union[DType, str]):
        """Set default scalar dtype."""
        value = normalize_dtype(value)
        validate_dtype(value)
        self._default_dtype = DType(value)

    @property
    def check_invariants(self) -> bool:
        """Whether arithmetic results are validated after construction."""
        return self._check_invariants

    @check_invariants.setter
    def check_invariants(self, value: bool):
        self._check_invariants = bool(value)


# Global config instance
_config = _Config()


# =============================================================================
# Public API
# =============================================================================

def get_config() -> _Config:
    """Get global configuration instance."""
    return _config


def set_default_dtype(dtype: Union[DType, str]) -> None:
    """
    Set default dtype for matrices built without an explicit dtype.

    Args:
        dtype: 'float32', 'float64', 'int32', 'int64' or a DType

    Example:
        >>> crs.set_default_dtype('int64')
        >>> CRSMatrix.from_dense([[1, 0]]).dtype
        'int64'
    """
    _config.default_dtype = dtype


def get_default_dtype() -> str:
    """Get current default dtype string."""
    return _config.default_dtype.value


def reset_config() -> None:
    """Restore defaults (re-reading the environment)."""
    fresh = _Config()
    _config._default_dtype = fresh._default_dtype
    _config._check_invariants = fresh._check_invariants
