from os import path
from shutil import rmtree
from tempfile import mkdtemp
import unittest
from unittest.mock import patch
from yaml import safe_dump

from core import ClientConfig
from models import ConfigurationError


class BaseConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        self.root = mkdtemp()
        self.fn = path.join(self.root, 'oanda_api.yml')

    def tearDown(self) -> None:
        rmtree(self.root)

    def _write(self, data):
        with open(self.fn, 'w') as f:
            safe_dump(data, f)


class ClientConfigTests(BaseConfigTests):
    def test_defaults(self):
        config = ClientConfig()
        self.assertEqual('fxpractice', config.environment)
        self.assertEqual(0, config.account_id)
        self.assertEqual('', config.debug)
        self.assertEqual((30.0, None), config.timeout)

    def test_load(self):
        self._write({'environment': 'fxtrade', 'token': 'abc', 'account_id': 8108490, 'debug': 'trace',
                     'read_timeout': 15})
        config = ClientConfig.load(self.fn)
        self.assertEqual(ClientConfig('fxtrade', 'abc', 8108490, 'trace', 30.0, 15), config)

    def test_default_file(self):
        self._write({'token': 'abc'})
        with patch('core.config.CONFIG_F', self.fn):
            self.assertEqual('abc', ClientConfig.load().token)

    def test_empty(self):
        open(self.fn, 'w').close()
        self.assertEqual(ClientConfig(), ClientConfig.load(self.fn))

    def test_null_debug(self):
        self._write({'token': 'abc', 'debug': None})
        self.assertEqual('', ClientConfig.load(self.fn).debug)

    def test_missing(self):
        with self.assertRaises(ConfigurationError):
            ClientConfig.load(path.join(self.root, 'missing.yml'))

    def test_not_mapping(self):
        self._write(['fxtrade', 'abc'])
        with self.assertRaises(ConfigurationError):
            ClientConfig.load(self.fn)

    def test_invalid_yaml(self):
        with open(self.fn, 'w') as f:
            f.write('token: [abc\n')
        with self.assertRaises(ConfigurationError):
            ClientConfig.load(self.fn)

    def test_unknown_keys(self):
        self._write({'token': 'abc', 'secret': 'xyz'})
        with self.assertRaisesRegex(ConfigurationError, 'secret'):
            ClientConfig.load(self.fn)


class ConfigValueTests(BaseConfigTests):
    def test_invalid_account_id(self):
        for value in ('abc', -1, True, 1.5, [1]):
            with self.subTest(account_id=value):
                self._write({'token': 'abc', 'account_id': value})
                with self.assertRaisesRegex(ConfigurationError, 'account_id'):
                    ClientConfig.load(self.fn)

    def test_invalid_connect_timeout(self):
        for value in ('fast', 0, -5, False, None):
            with self.subTest(connect_timeout=value):
                self._write({'token': 'abc', 'connect_timeout': value})
                with self.assertRaisesRegex(ConfigurationError, 'connect_timeout'):
                    ClientConfig.load(self.fn)

    def test_invalid_read_timeout(self):
        for value in ('slow', 0, -1, True):
            with self.subTest(read_timeout=value):
                self._write({'token': 'abc', 'read_timeout': value})
                with self.assertRaisesRegex(ConfigurationError, 'read_timeout'):
                    ClientConfig.load(self.fn)

    def test_invalid_strings(self):
        for key in ('environment', 'token', 'debug'):
            with self.subTest(key=key):
                self._write({key: 12345})
                with self.assertRaisesRegex(ConfigurationError, key):
                    ClientConfig.load(self.fn)

    def test_token_not_echoed(self):
        self._write({'token': 987654321})
        with self.assertRaises(ConfigurationError) as ctx:
            ClientConfig.load(self.fn)
        self.assertNotIn('987654321', str(ctx.exception))

    def test_numeric_timeouts(self):
        self._write({'token': 'abc', 'connect_timeout': 5, 'read_timeout': 2.5})
        self.assertEqual((5, 2.5), ClientConfig.load(self.fn).timeout)


if __name__ == '__main__':
    unittest.main()
