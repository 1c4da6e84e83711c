"""
This module is used as a unified resource for various types that are primarily used for type hints.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from typing import Union

    buf = Union[bytes, bytearray, memoryview]
    """
    Any buffer that can hold password, salt or key material.
    """
    wbuf = Union[bytearray, memoryview, list]
    """
    A mutable buffer that can be overwritten in place.
    """
else:
    buf = Any
    wbuf = Any

__all__ = ['buf', 'wbuf']
