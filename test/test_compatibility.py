#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Compare the output against the C implementation that ships with pyca/bcrypt.
"""
import unittest

from bcrypt_pbkdf import derive

from . import TestBase

try:
    import bcrypt
except ImportError:
    bcrypt = None


@unittest.skipIf(bcrypt is None, 'pyca/bcrypt is not installed')
class TestCompatibility(TestBase):

    def _compare(self, password: bytes, salt: bytes, size: int, rounds: int):
        wish = bcrypt.kdf(password, salt, size, rounds, ignore_few_rounds=True)
        self.assertEqual(derive(password, salt, size, rounds), wish,
            msg=F'password={password!r}, salt={salt!r}, size={size}, rounds={rounds}')

    def test_null_bytes(self):
        self._compare(B'password\0', B'salt\0', 32, 2)

    def test_single_byte_inputs(self):
        self._compare(B'\0', B'salt', 16, 2)
        self._compare(B'password', B'\0', 16, 2)

    def test_multiple_blocks(self):
        self._compare(B'password', B'salt', 48, 2)

    def test_many_blocks(self):
        self._compare(self.generate_random_buffer(12), self.generate_random_buffer(16), 100, 1)

    def test_long_inputs(self):
        self._compare(self.generate_random_buffer(200), self.generate_random_buffer(130), 7, 1)

    def test_overhanging_last_block(self):
        self._compare(B'password', B'salt', 67, 1)
        self._compare(B'password', B'salt', 97, 1)

    def test_largest_supported_size(self):
        self._compare(B'password', B'salt', 512, 1)
