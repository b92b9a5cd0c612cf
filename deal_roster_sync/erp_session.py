from typing import Optional
from urllib.parse import urljoin
import logging
import os

import requests

from . import exceptions
from .utils import get_base_url, get_header


class ErpSession(requests.Session):

    """
    Extends the regular :class:`requests.Session` class to talk to the
    ERP backend functions (`/deals`, `/sessions`, `/alumnos`). The base
    URL and the optional bearer token are read from the environment:

    - ERP_API_URL
    - ERP_API_TOKEN

    Every response goes through :meth:`request_json`, which turns the
    backend's error bodies (``{"ok": false, "error_code": ...,
    "message": ...}``) into :class:`ErpError` subclasses.

    :ivar logging.Logger logger: module-wide logger, accessed by
        __name__
    :ivar str base_url: root URL every path is resolved against
    """

    def __init__(self, base_url: str = None, token: str = None):
        super().__init__()
        self.logger = logging.getLogger(__name__)
        self.base_url = (base_url.rstrip('/') + '/' if base_url
                         else get_base_url())
        if token is None:
            token = os.environ.get('ERP_API_TOKEN')
        self.headers.update(get_header(token))
        self.logger.debug('Session opened against ' + self.base_url)

    def url_for(self, path: str) -> str:
        return urljoin(self.base_url, path.lstrip('/'))

    def request_json(self, method: str, path: str, **kwargs) -> dict:
        """
        Sends a request and returns its decoded JSON body.

        :param method: the HTTP verb
        :param path: path relative to `base_url`
        :raises ErpConnectionException: when the server is unreachable
        :raises ErpMalformedJsonException: when the body is not JSON
        :raises ErpError: when the backend reports a failure
        :return: the JSON object returned by the backend
        """
        url = self.url_for(path)
        try:
            r = self.request(method, url, **kwargs)
        except requests.exceptions.ConnectionError as e:
            raise exceptions.ErpConnectionException(str(e)) from e
        except requests.exceptions.Timeout as e:
            raise exceptions.ErpConnectionException(str(e)) from e

        self.logger.debug(f'{method} {url} returned status {r.status_code}')
        body = self._decode(r)
        failed = isinstance(body, dict) and body.get('ok') is False
        if not r.ok or failed:
            raise self._error_for(r, body)
        if not isinstance(body, dict):
            raise exceptions.ErpMalformedJsonException(body,
                                                       status=r.status_code)
        return body

    @staticmethod
    def _decode(r: requests.Response) -> Optional[dict]:
        if not r.text:
            return {}
        try:
            return r.json()
        except ValueError:
            raise exceptions.ErpMalformedJsonException(r.text,
                                                       status=r.status_code)

    def _error_for(self, r: requests.Response,
                   body) -> exceptions.ErpError:
        if not isinstance(body, dict):
            body = {}
        code = body.get('error_code') or f'HTTP_{r.status_code}'
        message = body.get('message') or 'No se pudo completar la solicitud.'
        self.logger.debug(f'Backend reported [{code}] {message}')
        return exceptions.error_for_code(code, message, r.status_code)
