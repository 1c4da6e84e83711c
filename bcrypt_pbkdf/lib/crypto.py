"""
Primitives for handling secret material: in-place XOR and a scope for scratch buffers that are
overwritten with zeros when they are no longer needed.
"""
from __future__ import annotations

from bcrypt_pbkdf.lib.types import buf, wbuf


def xor_into(dst: bytearray, src: buf) -> None:
    """
    XOR the bytes of `src` into `dst` in place. Both buffers must have the same length.
    """
    if len(dst) != len(src):
        raise ValueError(F'cannot XOR {len(src)} bytes into a buffer of size {len(dst)}')
    for k, b in enumerate(src):
        dst[k] ^= b


def wipe(buffer: wbuf) -> None:
    """
    Overwrite a mutable buffer with zeros in place. This works for `bytearray` and writable
    `memoryview` objects as well as for lists of integers; the length of the buffer is retained.
    """
    if isinstance(buffer, list):
        buffer[:] = [0] * len(buffer)
    else:
        buffer[:] = bytes(len(buffer))


class Scratch:
    """
    A context manager that hands out scratch buffers for secret material. Every buffer that was
    allocated or registered while the scope was active is overwritten with zeros when the scope
    exits, no matter whether it exits normally or because of an exception:

        with Scratch() as scratch:
            digest = scratch.bytes(64)
            ...
            return bytes(result)

    The return value is evaluated before the scope is left, so the caller receives a copy that is
    not affected by the wipe.
    """

    buffers: list[wbuf]

    def __init__(self):
        self.buffers = []

    def __enter__(self):
        return self

    def __exit__(self, et, ev, tb):
        self.wipe()
        return False

    def wipe(self):
        for buffer in self.buffers:
            wipe(buffer)

    def keep(self, *buffers: wbuf):
        """
        Register existing mutable buffers with the scope. The first buffer is returned for
        convenience.
        """
        self.buffers.extend(buffers)
        return buffers[0] if buffers else None

    def bytes(self, size: int = 0, init: buf | None = None) -> bytearray:
        """
        Allocate a `bytearray` of the given size, or a copy of `init` if it is given.
        """
        buffer = bytearray(init) if init is not None else bytearray(size)
        self.buffers.append(buffer)
        return buffer

    def words(self, count: int = 0, init=None) -> list[int]:
        """
        Allocate a list of `count` integer words, or a copy of the iterable `init`.
        """
        buffer = list(init) if init is not None else [0] * count
        self.buffers.append(buffer)
        return buffer
