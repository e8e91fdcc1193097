import unittest

import requests

from models import ApiError, ConfigurationError, DecodeError, Id, OandaError, RequestConstructionError, \
    ServiceError, TransportError


class ApiErrorTests(unittest.TestCase):
    def test_str(self):
        err = ApiError(1, 'bad', 'see docs')
        self.assertEqual('ApiError{Code: 1, Message: bad, Moreinfo: see docs}', str(err))

    def test_from_json(self):
        err = ApiError.from_json({'code': 43, 'message': 'Order not found',
                                  'moreInfo': 'http://developer.oanda.com/docs/v1/troubleshooting'})
        self.assertEqual(43, err.code)
        self.assertEqual('Order not found', err.message)
        self.assertEqual('http://developer.oanda.com/docs/v1/troubleshooting', err.more_info)

    def test_from_json_defaults(self):
        """ Missing keys fall back to zero values, unknown keys are ignored """
        self.assertEqual(ApiError(0, 'x', ''), ApiError.from_json({'message': 'x', 'extra': 1}))

    def test_from_json_invalid(self):
        for payload in ([], 'error', None, {'code': '1'}, {'code': True}, {'message': 1}):
            with self.assertRaises(DecodeError):
                ApiError.from_json(payload)

    def test_raisable(self):
        with self.assertRaises(OandaError):
            raise ApiError(1, 'bad', '')
        self.assertIs(ApiError, ServiceError)


class TaxonomyTests(unittest.TestCase):
    def test_value_errors(self):
        for cls in (ConfigurationError, RequestConstructionError, DecodeError):
            self.assertTrue(issubclass(cls, OandaError))
            self.assertTrue(issubclass(cls, ValueError))

    def test_transport(self):
        self.assertIs(requests.RequestException, TransportError)
        self.assertTrue(issubclass(requests.exceptions.ConnectionError, TransportError))


class IdTests(unittest.TestCase):
    def test_int(self):
        self.assertEqual(8108490, Id(8108490))
        self.assertEqual(Id(5), Id('5'))

    def test_unset(self):
        self.assertFalse(Id(0))
        self.assertFalse(Id())
        self.assertTrue(Id(1))

    def test_negative(self):
        with self.assertRaises(ValueError):
            Id(-3)

    def test_repr(self):
        self.assertEqual('Id(7)', repr(Id(7)))


if __name__ == '__main__':
    unittest.main()
