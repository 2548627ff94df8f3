"""
Owned Array Buffer

Fixed-size ctypes buffer backing the three CRS arrays. Each Array
exclusively owns its memory; ownership can be handed to another Array
with take(), which leaves the source released.
"""

import ctypes
from typing import Any, Union, List, Iterable

import numpy as np

from ._dtypes import DType, normalize_dtype

__all__ = ['Array', 'empty', 'zeros', 'from_list', 'narrow']


# =============================================================================
# Type Mapping
# =============================================================================

_TYPE_MAP = {
    'float32': (ctypes.c_float, float, 4),
    'float64': (ctypes.c_double, float, 8),
    'int32': (ctypes.c_int32, int, 4),
    'int64': (ctypes.c_int64, int, 8),
}


def _get_type_info(dtype: str):
    """Get (ctypes_type, python_type, itemsize) for dtype string."""
    if dtype not in _TYPE_MAP:
        raise ValueError(f"Unsupported dtype: {dtype}. "
                         f"Supported: {list(_TYPE_MAP.keys())}")
    return _TYPE_MAP[dtype]


# =============================================================================
# Array Class
# =============================================================================

class Array:
    """
    Owned contiguous buffer with C-compatible memory layout.

    Features:
    - Exact-size allocation (no growth after construction)
    - Bounds-checked element access
    - Explicit ownership transfer via take()

    Attributes:
        dtype (str): Data type ('float64', 'int64', etc.)
        size (int): Number of elements
        nbytes (int): Total bytes

    Example:
        >>> arr = Array.zeros(4, dtype='int64')
        >>> arr[0] = 3
        >>> moved = arr.take()   # arr is now released (size 0)
        >>> moved.tolist()
        [3, 0, 0, 0]
    """

    __slots__ = ('_size', '_dtype', '_ctype', '_pytype', '_itemsize', '_data')

    def __init__(self, size: int, dtype: Union[str, DType] = 'float64'):
        """
        Allocate a zero-filled array.

        Args:
            size: Number of elements
            dtype: Data type (string or DType enum)
        """
        if size < 0:
            raise ValueError(f"Array size must be non-negative, got {size}")

        dtype = normalize_dtype(dtype)
        self._ctype, self._pytype, self._itemsize = _get_type_info(dtype)
        self._dtype = dtype
        self._size = size

        # ctypes arrays are zero-initialized on allocation
        self._data = (self._ctype * size)() if size > 0 else None

    @property
    def size(self) -> int:
        """Number of elements."""
        return self._size

    @property
    def dtype(self) -> str:
        """Data type string."""
        return self._dtype

    @property
    def nbytes(self) -> int:
        """Total bytes."""
        return self._size * self._itemsize

    @property
    def itemsize(self) -> int:
        """Bytes per element."""
        return self._itemsize

    @property
    def ptr(self) -> int:
        """Address of the underlying buffer (0 when unallocated)."""
        if self._data is None:
            return 0
        return ctypes.addressof(self._data)

    # -------------------------------------------------------------------------
    # Initialization Methods
    # -------------------------------------------------------------------------

    @classmethod
    def zeros(cls, size: int, dtype: Union[str, DType] = 'float64') -> 'Array':
        """Create zero-initialized array."""
        return cls(size, dtype)

    @classmethod
    def from_list(cls, data: Iterable, dtype: Union[str, DType] = 'float64') -> 'Array':
        """Create array from a Python sequence."""
        data = list(data)
        arr = cls(len(data), dtype)
        convert = arr._pytype
        for i, val in enumerate(data):
            arr._data[i] = convert(val)
        return arr

    # -------------------------------------------------------------------------
    # Element Access
    # -------------------------------------------------------------------------

    def _check_index(self, idx: int) -> int:
        if idx < 0:
            idx += self._size
        if idx < 0 or idx >= self._size:
            raise IndexError(f"Index {idx} out of bounds [0, {self._size})")
        return idx

    def __getitem__(self, idx: Union[int, slice]):
        """Get element(s) by index."""
        if isinstance(idx, slice):
            start, stop, step = idx.indices(self._size)
            return [self._data[i] for i in range(start, stop, step)]
        return self._data[self._check_index(idx)]

    def __setitem__(self, idx: Union[int, slice], value):
        """Set element(s) by index."""
        if isinstance(idx, slice):
            start, stop, step = idx.indices(self._size)
            indices = range(start, stop, step)

            if hasattr(value, '__iter__'):
                for i, v in zip(indices, value):
                    self._data[i] = self._pytype(v)
            else:
                for i in indices:
                    self._data[i] = self._pytype(value)
        else:
            self._data[self._check_index(idx)] = self._pytype(value)

    def __len__(self) -> int:
        return self._size

    def __iter__(self):
        if self._data is None:
            return iter(())
        return iter(self._data)

    def __eq__(self, other) -> bool:
        if isinstance(other, Array):
            return self.tolist() == other.tolist()
        if isinstance(other, (list, tuple)):
            return self.tolist() == list(other)
        return NotImplemented

    __hash__ = None

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def tobytes(self) -> bytes:
        """Convert to bytes."""
        if self._data is None:
            return b''
        return bytes(self._data)

    def tolist(self) -> List:
        """Convert to Python list."""
        if self._data is None:
            return []
        return list(self._data)

    def to_numpy(self) -> np.ndarray:
        """Copy contents into a numpy array of the same dtype."""
        if self._data is None:
            return np.array([], dtype=self._dtype)
        return np.frombuffer(self.tobytes(), dtype=self._dtype).copy()

    # -------------------------------------------------------------------------
    # Ownership
    # -------------------------------------------------------------------------

    def copy(self) -> 'Array':
        """Create a deep copy with its own buffer."""
        new = Array(self._size, self._dtype)
        if self._data is not None:
            ctypes.memmove(new.ptr, self.ptr, self.nbytes)
        return new

    def take(self) -> 'Array':
        """Move the buffer into a new Array and release this one.

        No element is copied: the returned Array adopts the buffer
        and this Array is left with size 0.
        """
        new = Array.__new__(Array)
        new._ctype = self._ctype
        new._pytype = self._pytype
        new._itemsize = self._itemsize
        new._dtype = self._dtype
        new._size = self._size
        new._data = self._data

        self.release()
        return new

    def release(self) -> None:
        """Drop the buffer. Idempotent."""
        self._data = None
        self._size = 0

    # -------------------------------------------------------------------------
    # Representation
    # -------------------------------------------------------------------------

    def __repr__(self) -> str:
        if self._size == 0:
            return f"Array([], dtype={self._dtype})"
        elif self._size <= 6:
            data_str = str(self.tolist())
        else:
            values = self.tolist()
            data_str = str(values[:3] + ['...'] + values[-3:])

        return f"Array({data_str}, dtype={self._dtype})"

    def __str__(self) -> str:
        return self.__repr__()


# =============================================================================
# Factory Functions
# =============================================================================

def empty(size: int, dtype: Union[str, DType] = 'float64') -> Array:
    """Allocate an array of the given size."""
    return Array(size, dtype)


def zeros(size: int, dtype: Union[str, DType] = 'float64') -> Array:
    """Create zero-initialized array."""
    return Array.zeros(size, dtype)


def from_list(data: Iterable, dtype: Union[str, DType] = 'float64') -> Array:
    """Create array from Python sequence."""
    return Array.from_list(data, dtype)


def narrow(value: Any, dtype: Union[str, DType]) -> Any:
    """
    Value as it reads back after being stored in a buffer of `dtype`.

    Integer types truncate and wrap to their width; float32 rounds
    and may underflow to zero. Zero tests must use this value, not
    the unconverted one.

    Example:
        >>> narrow(2 ** 32, 'int32')
        0
        >>> narrow(0.5, 'int64')
        0
    """
    ctype, pytype, _ = _get_type_info(normalize_dtype(dtype))
    return ctype(pytype(value)).value
