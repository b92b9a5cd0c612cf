from unittest import mock
import os
import unittest

import requests
import responses

from deal_roster_sync import ErpSession, exceptions
from .constants import BASE_URL


class TestErpSession(unittest.TestCase):

    url = BASE_URL + 'alumnos'

    def setUp(self):
        self.session = ErpSession(base_url=BASE_URL, token='test-token')
        self.responses = responses.RequestsMock()
        self.responses.start()
        self.addCleanup(self.responses.stop)
        self.addCleanup(self.responses.reset)

    def test_base_url_from_environment(self):
        env = {'ERP_API_URL': 'https://erp.test/api', 'ERP_API_TOKEN': 'abc'}
        with mock.patch.dict(os.environ, env):
            session = ErpSession()
        self.assertEqual(session.url_for('/deals'), 'https://erp.test/api/deals')
        self.assertEqual(session.headers['Authorization'], 'Bearer abc')

    def test_missing_base_url(self):
        with mock.patch.dict(os.environ, clear=True):
            with self.assertRaises(exceptions.ErpConfigurationError) as cm:
                ErpSession()
        self.assertEqual(cm.exception.variable, 'ERP_API_URL')

    def test_error_body(self):
        self.responses.add(responses.GET, self.url, status=400,
                           json={'ok': False, 'error_code': 'VALIDATION_ERROR',
                                 'message': 'dni es obligatorio'})
        with self.assertRaises(exceptions.ErpValidationError) as cm:
            self.session.request_json('GET', 'alumnos')
        self.assertEqual(cm.exception.message, 'dni es obligatorio')
        self.assertEqual(cm.exception.status, 400)

    def test_default_error_code(self):
        self.responses.add(responses.GET, self.url, status=502, body='')
        with self.assertRaises(exceptions.ErpError) as cm:
            self.session.request_json('GET', 'alumnos')
        self.assertEqual(cm.exception.code, 'HTTP_502')

    def test_failure_with_ok_status(self):
        self.responses.add(responses.GET, self.url, status=200,
                           json={'ok': False, 'error_code': 'BOOM'})
        with self.assertRaises(exceptions.ErpError) as cm:
            self.session.request_json('GET', 'alumnos')
        self.assertEqual(cm.exception.code, 'BOOM')

    def test_body_not_an_object(self):
        self.responses.add(responses.GET, self.url, status=200, json=[1, 2])
        with self.assertRaises(exceptions.ErpMalformedJsonException) as cm:
            self.session.request_json('GET', 'alumnos')
        self.assertListEqual(cm.exception.body, [1, 2])
        self.assertEqual(cm.exception.status, 200)

        self.responses.add(responses.GET, BASE_URL + 'deals', status=200,
                           body='"texto"')
        with self.assertRaises(exceptions.ErpMalformedJsonException):
            self.session.request_json('GET', 'deals')

    def test_authentication(self):
        self.responses.add(responses.GET, self.url, status=401,
                           json={'ok': False, 'error_code': 'UNAUTHORIZED'})
        with self.assertRaises(exceptions.ErpAuthenticationError):
            self.session.request_json('GET', 'alumnos')

    def test_malformed_json(self):
        self.responses.add(responses.GET, self.url, status=200,
                           body='<html>Bad gateway</html>')
        with self.assertRaises(exceptions.ErpMalformedJsonException) as cm:
            self.session.request_json('GET', 'alumnos')
        self.assertEqual(cm.exception.code, 'INVALID_RESPONSE')

    def test_empty_body(self):
        self.responses.add(responses.GET, self.url, status=204, body='')
        self.assertDictEqual(self.session.request_json('GET', 'alumnos'), {})

    def test_connection_error(self):
        self.responses.add(
            responses.GET, self.url,
            body=requests.exceptions.ConnectionError('refused')
        )
        with self.assertRaises(exceptions.ErpConnectionException) as cm:
            self.session.request_json('GET', 'alumnos')
        self.assertEqual(cm.exception.code, 'NETWORK_ERROR')


if __name__ == '__main__':
    unittest.main()
