#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
PKCS #5 PBKDF2 with the bcrypt hash function in place of HMAC, as introduced by OpenBSD and used
by OpenSSH to protect private key files. The bcrypt hash function differs from the bcrypt password
hashing scheme in the following ways:

1. Password and salt are preprocessed with SHA-512.
2. The output length is 256 bits, the encrypted magic string is "OxychromaticBlowfishSwatDynamite".
3. The hash performs a fixed number of 64 rounds of state expansion; more work is done by
   iterating the hash in the PBKDF2 round loop.

One deviation from PBKDF2 is that the key material is not output linearly: the bytes of all
blocks are interleaved. When PBKDF2 is used to derive two 256-bit keys from 512 bits of output, an
attacker can verify guesses against the first key by running the outer loop only once, while the
legitimate user always runs it twice. With interleaved output, every subkey depends on all blocks.
"""
from __future__ import annotations

import struct

from Cryptodome.Hash import SHA512

from bcrypt_pbkdf.lib.blowfish import BlowfishState
from bcrypt_pbkdf.lib.crypto import Scratch, xor_into
from bcrypt_pbkdf.lib.environment import environment, logger
from bcrypt_pbkdf.lib.types import buf

__all__ = [
    'InvalidParameter',
    'bcrypt_hash',
    'derive_block',
    'derive',
]

BCRYPT_WORDS = 8
BCRYPT_HASHSIZE = BCRYPT_WORDS * 4
BCRYPT_ROUNDS = 64
BCRYPT_MAGIC = B'OxychromaticBlowfishSwatDynamite'

SHA512_DIGEST_LENGTH = 64

MAX_KEY_SIZE = BCRYPT_HASHSIZE * BCRYPT_HASHSIZE
"""
The largest key that can be derived; it is bounded by the interleaving of at most 32 blocks.
"""


class InvalidParameter(ValueError):
    """
    Raised when a parameter of the key derivation is out of range. No derivation work has been
    performed when this exception is raised.
    """
    def __init__(self, parameter: str, reason: str):
        super().__init__(F'invalid {parameter}: {reason}')
        self.parameter = parameter


def _check_buffer(name: str, value) -> None:
    if isinstance(value, str):
        raise TypeError(F'the {name} is a string; strings must be encoded before hashing')
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError(F'the {name} must be a bytes-like object, not {type(value).__name__}')


def _check_integer(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(F'the {name} must be an integer, not {type(value).__name__}')


def _sha512(out: bytearray, *chunks: buf) -> None:
    ctx = SHA512.new()
    for chunk in chunks:
        ctx.update(chunk)
    out[:] = ctx.digest()


def _bcrypt_hash(sha2pass: buf, sha2salt: buf, out: bytearray) -> None:
    with Scratch() as scratch:
        state = BlowfishState()
        scratch.keep(*state.buffers)
        state.expand(sha2salt, sha2pass)
        for _ in range(BCRYPT_ROUNDS):
            state.expand0(sha2salt)
            state.expand0(sha2pass)
        cdata = scratch.words(init=struct.unpack(F'>{BCRYPT_WORDS}I', BCRYPT_MAGIC))
        for _ in range(BCRYPT_ROUNDS):
            state.encrypt(cdata)
        struct.pack_into(F'<{BCRYPT_WORDS}I', out, 0, *cdata)


def bcrypt_hash(sha2pass: buf, sha2salt: buf) -> bytes:
    """
    The bcrypt hash function: Computes a 32-byte block from the SHA-512 digests of a password and
    a salt. The Blowfish state is expanded once with both inputs and then 64 times with each input
    alone, after which the magic string is encrypted 64 times. The eight resulting words are
    returned in little endian byte order.
    """
    for name, digest in (('password digest', sha2pass), ('salt digest', sha2salt)):
        if len(digest) != SHA512_DIGEST_LENGTH:
            raise InvalidParameter(name, F'expected {SHA512_DIGEST_LENGTH} bytes, got {len(digest)}')
    with Scratch() as scratch:
        out = scratch.bytes(BCRYPT_HASHSIZE)
        _bcrypt_hash(sha2pass, sha2salt, out)
        return bytes(out)


def _derive_block(scratch: Scratch, sha2pass: buf, salt: buf, count: int, rounds: int) -> bytearray:
    sha2salt = scratch.bytes(SHA512_DIGEST_LENGTH)
    block = scratch.bytes(BCRYPT_HASHSIZE)
    previous = scratch.bytes(BCRYPT_HASHSIZE)
    # first round, the salt is the salt followed by the block counter
    _sha512(sha2salt, salt, struct.pack('>I', count))
    _bcrypt_hash(sha2pass, sha2salt, previous)
    block[:] = previous
    # subsequent rounds, the salt is the previous output
    for _ in range(1, rounds):
        _sha512(sha2salt, previous)
        _bcrypt_hash(sha2pass, sha2salt, previous)
        xor_into(block, previous)
    return block


def derive_block(sha2pass: buf, salt: buf, count: int, rounds: int) -> bytes:
    """
    Compute the 32-byte block with the given 1-based block counter, i.e. the XOR of all `rounds`
    outputs of the bcrypt hash chain for that counter. The password has to be given as its SHA-512
    digest, the salt is given as is.
    """
    _check_buffer('password digest', sha2pass)
    _check_buffer('salt', salt)
    _check_integer('count', count)
    _check_integer('rounds', rounds)
    if rounds < 1:
        raise InvalidParameter('rounds', F'must be at least 1, got {rounds}')
    if not 0 < count <= 0xFFFFFFFF:
        raise InvalidParameter('count', F'must be a positive 32-bit integer, got {count}')
    if len(sha2pass) != SHA512_DIGEST_LENGTH:
        raise InvalidParameter('password digest', F'expected {SHA512_DIGEST_LENGTH} bytes, got {len(sha2pass)}')
    with Scratch() as scratch:
        return bytes(_derive_block(scratch, sha2pass, salt, count, rounds))


def derive(password: buf, salt: buf, size: int, rounds: int) -> bytes:
    """
    Derive a key of `size` bytes from the given password and salt using `rounds` iterations of the
    bcrypt hash function per output block. The output is compatible with OpenBSD's bcrypt_pbkdf
    function. At most 1024 bytes can be derived.
    """
    _check_buffer('password', password)
    _check_buffer('salt', salt)
    _check_integer('size', size)
    _check_integer('rounds', rounds)

    if rounds < 1:
        raise InvalidParameter('rounds', F'must be at least 1, got {rounds}')
    if not len(password):
        raise InvalidParameter('password', 'must not be empty')
    if not len(salt):
        raise InvalidParameter('salt', 'must not be empty')
    if not 0 < size <= MAX_KEY_SIZE:
        raise InvalidParameter('size', F'must be between 1 and {MAX_KEY_SIZE}, got {size}')

    stride = (size + BCRYPT_HASHSIZE - 1) // BCRYPT_HASHSIZE
    amt = (size + stride - 1) // stride

    log = logger(__name__)

    if rounds < environment.few_rounds.value and not environment.quiet.value:
        log.warning(
            F'key derivation requested with only {rounds} round(s); the work factor is linear in the number of '
            F'rounds, so fewer than {environment.few_rounds.value} rounds are not secure.')

    log.debug(F'deriving {size} bytes from {stride} block(s) of {rounds} round(s) each')

    with Scratch() as scratch:
        key = scratch.bytes(size)
        sha2pass = scratch.bytes(SHA512_DIGEST_LENGTH)
        _sha512(sha2pass, password)
        remaining = size
        count = 1
        while remaining > 0:
            block = _derive_block(scratch, sha2pass, salt, count, rounds)
            written = 0
            for i in range(min(amt, remaining)):
                dest = i * stride + count - 1
                if dest >= size:
                    break
                key[dest] = block[i]
                written += 1
            remaining -= written
            log.debug(F'finished block {count} of {stride}')
            count += 1
        return bytes(key)
