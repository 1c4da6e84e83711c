#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
A pure Python implementation of the Blowfish block cipher together with the expensive key schedule
variant ("eksblowfish") that was introduced by Niels Provos and David Mazieres for bcrypt. Unlike
the usual Blowfish interface, the state is exposed so that keys and salts can be mixed into an
existing state any number of times; this is what the bcrypt hash function requires.

The initial P-array and S-boxes are the hexadecimal digits of the fractional part of pi. Rather
than shipping a table of 1042 constants, they are computed once at import time.
"""
from __future__ import annotations

import itertools
import struct

from bcrypt_pbkdf.lib.crypto import wipe
from bcrypt_pbkdf.lib.types import buf

BLF_N = 16
"""
Number of Feistel rounds.
"""
BLF_P = BLF_N + 2
"""
Number of entries in the P-array.
"""
BLF_S = 256
"""
Number of entries in each of the four S-boxes.
"""


def pi_fraction_words(count: int, guard: int = 64) -> tuple[int, ...]:
    """
    Compute the first `count` 32-bit words of the binary expansion of the fractional part of pi.
    The computation uses Machin's formula in fixed-point integer arithmetic with `guard` additional
    bits to absorb the truncation error of the series.
    """
    bits = 32 * count + guard
    one = 1 << bits

    def arctan_inv(x: int) -> int:
        x2 = x * x
        total = power = one // x
        divisor = 1
        negate = False
        while power:
            power //= x2
            divisor += 2
            negate = not negate
            term = power // divisor
            total = total - term if negate else total + term
        return total

    pi = 4 * (4 * arctan_inv(5) - arctan_inv(239))
    fraction = (pi - (3 << bits)) >> guard
    return struct.unpack(F'>{count}I', fraction.to_bytes(4 * count, 'big'))


PI_WORDS = pi_fraction_words(BLF_P + 4 * BLF_S)


def stream_words(data: buf, count: int) -> list[int]:
    """
    Read `count` big-endian 32-bit words from `data`. Whenever the end of `data` is reached, reading
    continues at its start; the key and salt inputs of Blowfish are treated as cyclic streams.
    """
    if not data:
        raise ValueError('cannot read words from an empty buffer')
    stream = itertools.cycle(data)
    words = []
    for _ in range(count):
        word = 0
        for _ in range(4):
            word = word << 8 | next(stream)
        words.append(word)
    return words


class BlowfishState:
    """
    The mutable state of a Blowfish cipher, consisting of the P-array and the four S-boxes. A new
    state is initialized with the digits of pi. Calling `bcrypt_pbkdf.lib.blowfish.BlowfishState.expand0`
    with a key on a fresh state yields the ordinary Blowfish key schedule.
    """

    __slots__ = 'P', 'S'

    P: list[int]
    S: list[list[int]]

    def __init__(self):
        self.P = list(PI_WORDS[:BLF_P])
        self.S = [list(PI_WORDS[BLF_P + k * BLF_S:BLF_P + (k + 1) * BLF_S]) for k in range(4)]

    @property
    def buffers(self) -> list[list[int]]:
        """
        All mutable buffers that make up this state.
        """
        return [self.P, *self.S]

    def encipher(self, L: int, R: int) -> tuple[int, int]:
        """
        Encrypt the 64-bit block given by its two 32-bit halves `L` and `R`.
        """
        P = self.P
        S0, S1, S2, S3 = self.S
        L ^= P[0]
        for k in range(1, BLF_N + 1, 2):
            R ^= ((((S0[L >> 24] + S1[L >> 16 & 0xFF]) ^ S2[L >> 8 & 0xFF]) + S3[L & 0xFF]) & 0xFFFFFFFF) ^ P[k]
            L ^= ((((S0[R >> 24] + S1[R >> 16 & 0xFF]) ^ S2[R >> 8 & 0xFF]) + S3[R & 0xFF]) & 0xFFFFFFFF) ^ P[k + 1]
        return R ^ P[BLF_N + 1], L

    def encrypt(self, words: list[int]) -> None:
        """
        Encrypt a list of 32-bit words in place; each consecutive pair of words is one block.
        """
        encipher = self.encipher
        for k in range(0, len(words) - 1, 2):
            words[k], words[k + 1] = encipher(words[k], words[k + 1])

    def _mix_key(self, key: buf):
        P = self.P
        kw = stream_words(key, BLF_P)
        try:
            for k in range(BLF_P):
                P[k] ^= kw[k]
        finally:
            wipe(kw)

    def _rekey(self, salt: buf | None):
        encipher = self.encipher
        L = R = 0
        sw = stream_words(salt, BLF_P + 4 * BLF_S) if salt is not None else None
        try:
            sw_iter = iter(sw or ())
            for box in (self.P, *self.S):
                for k in range(0, len(box), 2):
                    if sw is not None:
                        L ^= next(sw_iter)
                        R ^= next(sw_iter)
                    L, R = encipher(L, R)
                    box[k] = L
                    box[k + 1] = R
        finally:
            if sw is not None:
                wipe(sw)

    def expand(self, salt: buf, key: buf) -> None:
        """
        The salted key expansion of eksblowfish: The key is mixed into the P-array, after which
        the entire state is replaced by a chain of encryptions. Before each encryption, the next
        two words of the salt are mixed into the chained block.
        """
        self._mix_key(key)
        self._rekey(salt)

    def expand0(self, key: buf) -> None:
        """
        The key expansion of eksblowfish without a salt; on a fresh state, this is the standard
        Blowfish key schedule.
        """
        self._mix_key(key)
        self._rekey(None)
