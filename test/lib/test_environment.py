#!/usr/bin/env python3
# -*- coding: utf-8 -*-
import logging
import os

from unittest import mock

from bcrypt_pbkdf.lib.environment import EVBool, EVInt, EVLog, LogLevel, logger

from .. import TestBase


class TestEnvironment(TestBase):

    def test_int_default(self):
        with mock.patch.dict(os.environ, clear=True):
            self.assertEqual(EVInt('FEW_ROUNDS', 50).value, 50)
            self.assertEqual(EVInt('FEW_ROUNDS').value, 0)

    def test_int_override(self):
        with mock.patch.dict(os.environ, {'BCRYPT_PBKDF_FEW_ROUNDS': '0x10'}):
            self.assertEqual(EVInt('FEW_ROUNDS', 50).value, 16)
        with mock.patch.dict(os.environ, {'BCRYPT_PBKDF_FEW_ROUNDS': 'many'}):
            self.assertEqual(EVInt('FEW_ROUNDS', 50).value, 50)

    def test_bool(self):
        for value, wish in [
            ('1', True),
            ('yes', True),
            ('0', False),
            ('off', False),
            ('False', False),
            ('', False),
        ]:
            with mock.patch.dict(os.environ, {'BCRYPT_PBKDF_QUIET': value}):
                self.assertEqual(EVBool('QUIET').value, wish, msg=value)
        with mock.patch.dict(os.environ, clear=True):
            self.assertFalse(EVBool('QUIET').value)

    def test_log_level(self):
        with mock.patch.dict(os.environ, {'BCRYPT_PBKDF_VERBOSITY': 'debug'}):
            self.assertEqual(EVLog('VERBOSITY').value, LogLevel.DEBUG)
        with mock.patch.dict(os.environ, {'BCRYPT_PBKDF_VERBOSITY': '1'}):
            self.assertEqual(EVLog('VERBOSITY').value, LogLevel.INFO)
        with mock.patch.dict(os.environ, {'BCRYPT_PBKDF_VERBOSITY': 'LOUD'}):
            self.assertIsNone(EVLog('VERBOSITY').value)
        with mock.patch.dict(os.environ, clear=True):
            self.assertIsNone(EVLog('VERBOSITY').value)

    def test_verbosity_mapping(self):
        self.assertEqual(LogLevel.FromVerbosity(-1), LogLevel.DETACHED)
        self.assertEqual(LogLevel.FromVerbosity(0), LogLevel.WARNING)
        self.assertEqual(LogLevel.FromVerbosity(7), LogLevel.DEBUG)

    def test_logger(self):
        log = logger('bcrypt_pbkdf.test')
        self.assertIsInstance(log, logging.Logger)
        self.assertFalse(log.propagate)
        self.assertTrue(log.hasHandlers())
        self.assertIs(logger('bcrypt_pbkdf.test'), log)
