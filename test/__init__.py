import logging
import random
import unittest

import bcrypt_pbkdf


__all__ = ['bcrypt_pbkdf', 'TestBase']


class TestBase(unittest.TestCase):

    def generate_random_buffer(self, size):
        return bytes(random.randrange(0, 0x100) for _ in range(size))

    def flip_bit(self, data: bytes, bit: int) -> bytes:
        data = bytearray(data)
        data[bit >> 3] ^= 1 << (bit & 7)
        return bytes(data)

    def hamming_distance(self, a: bytes, b: bytes) -> int:
        return sum(bin(x ^ y).count('1') for x, y in zip(a, b))

    def setUp(self):
        random.seed(0xBAADF00D)  # guarantee deterministic 'random' buffers
        logging.disable(logging.CRITICAL)

    def tearDown(self):
        logging.disable(logging.NOTSET)
