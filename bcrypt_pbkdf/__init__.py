#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
A pure Python implementation of `bcrypt_pbkdf`, the password-based key derivation function that
OpenBSD introduced and OpenSSH uses for its private key files. It follows the structure of PBKDF2
but uses a pseudorandom function derived from bcrypt instead of HMAC:

    >>> from bcrypt_pbkdf import derive
    >>> derive(B'password', B'salt', 32, 4).hex()
    '5bbf0cc293587f1c3635555c27796598d47e579071bf427e9d8fbe842aba34d9'

The package consists of the following modules:

1. `bcrypt_pbkdf.kdf`: the bcrypt hash function and the key derivation itself
2. `bcrypt_pbkdf.lib.blowfish`: the Blowfish cipher with the bcrypt key schedule
3. `bcrypt_pbkdf.lib.crypto`: handling of buffers that contain secret material
4. `bcrypt_pbkdf.lib.environment`: configuration through environment variables and logging
"""
from __future__ import annotations

__version__ = '0.1.0'
__distribution__ = 'bcrypt-pbkdf'

from bcrypt_pbkdf.kdf import InvalidParameter, bcrypt_hash, derive

__all__ = [
    'InvalidParameter',
    'bcrypt_hash',
    'derive',
]
