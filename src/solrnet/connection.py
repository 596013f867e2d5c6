# -*- coding: utf-8 -*-
#
# Copyright (C) 2015-2026 Dubalu LLC. All rights reserved.
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN
# THE SOFTWARE.
#
"""HTTP connection to a Solr server.

``Connection`` turns the two logical operations the client needs, a GET
with query parameters and a POST with an XML body, into httpx requests and
maps every failure into the ``solrnet.exceptions`` taxonomy.

Example:
    >>> conn = Connection('http://localhost:8983/solr')
    >>> await conn.get('/select', {'q': '*:*'})
    '<?xml version="1.0" encoding="UTF-8"?>...'
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TypeAlias

import httpx

from .exceptions import InvalidFieldError, InvalidURLError, SolrConnectionError


logger = logging.getLogger('solrnet')

SCHEMES = ('http', 'https')
XML_CONTENT_TYPE = 'text/xml; charset=utf-8'

Params: TypeAlias = Mapping[str, str] | None


def error_for_status(status_code: int) -> type[SolrConnectionError]:
    """Return the error class for a non-2xx HTTP status.

    A ``400 Bad Request`` means the server could not make sense of a field
    or term referenced by the request; every other status is a plain
    connection error.
    """
    if status_code == httpx.codes.BAD_REQUEST:
        return InvalidFieldError
    return SolrConnectionError


def validate_url(url: str) -> str:
    """Check that ``url`` is an absolute ``http``/``https`` URL.

    Returns:
        str: The URL without trailing slashes.

    Raises:
        InvalidURLError: If the URL cannot be parsed, has another scheme,
            has no host or carries a query string or fragment.
    """
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as exc:
        raise InvalidURLError(f"Invalid URL: {url!r}") from exc
    if parsed.scheme not in SCHEMES:
        raise InvalidURLError(f"Invalid URL scheme {parsed.scheme!r}: {url!r}")
    if not parsed.host:
        raise InvalidURLError(f"Invalid URL, missing host: {url!r}")
    if parsed.query or parsed.fragment:
        raise InvalidURLError(f"Invalid URL, query or fragment not allowed: {url!r}")
    return url.rstrip('/')


class Connection:
    """Connection to a single Solr endpoint.

    Holds nothing but the validated base URL, the transport and the
    timeout, so one instance can be shared by any number of concurrent
    callers.

    Attributes:
        url: Base URL every relative path is appended to.
        session: ``httpx.AsyncClient`` used to send requests. Defaults to
            the class-level shared client.
        timeout: Per-request timeout in seconds, or ``None`` to use the
            session's own.
    """

    session = httpx.AsyncClient(
        trust_env=False,
        follow_redirects=False,
    )

    def __init__(self, url: str, session: httpx.AsyncClient | None = None,
            timeout: float | None = None) -> None:
        """Initialize the connection.

        Args:
            url: Base URL of the Solr core, e.g.
                ``'http://localhost:8983/solr'``.
            session: Transport override. Tests pass a client built on
                ``httpx.MockTransport``.
            timeout: Per-request timeout in seconds.

        Raises:
            InvalidURLError: If ``url`` is not a valid ``http``/``https`` URL.
        """
        self.url = validate_url(url)
        if session is not None:
            self.session = session
        self.timeout = timeout

    def __repr__(self) -> str:
        return f'<Connection {self.url}>'

    async def get(self, path: str, params: Params = None) -> str:
        """Send a GET request.

        Args:
            path: Path relative to the base URL, e.g. ``'/select'``.
            params: Query string parameters. ``None`` and an empty mapping
                both send no parameters.

        Returns:
            str: The response body.

        Raises:
            InvalidFieldError: On a ``400`` response.
            SolrConnectionError: On a transport failure or any other
                non-2xx response.
        """
        kwargs = {}
        if params:
            kwargs['params'] = dict(params)
        return await self._send_request('GET', path, **kwargs)

    async def post(self, path: str, body: str) -> str:
        """Send a POST request with an XML body.

        Args:
            path: Path relative to the base URL, e.g. ``'/update'``.
            body: XML document to send.

        Returns:
            str: The response body.

        Raises:
            InvalidFieldError: On a ``400`` response.
            SolrConnectionError: On a transport failure or any other
                non-2xx response.
        """
        return await self._send_request(
            'POST', path,
            content=body.encode('utf-8'),
            headers={'content-type': XML_CONTENT_TYPE},
        )

    async def _send_request(self, http_method: str, path: str, **kwargs) -> str:
        url = f'{self.url}{path}'
        if self.timeout is not None:
            kwargs['timeout'] = self.timeout

        logger.debug(f"@@@>> {http_method} URL: {url}  ::  KWARGS: {kwargs}")
        try:
            res = await self.session.request(http_method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.debug(f"@@@RES>> {exc!r}")
            raise SolrConnectionError(f"{http_method} {url} failed: {exc}") from exc

        logger.debug(f"@@@RES>> {res.status_code} {http_method} {url}")
        try:
            res.raise_for_status()
        except httpx.HTTPStatusError as exc:
            error = error_for_status(res.status_code)
            raise error(str(exc), status_code=res.status_code, body=res.text) from exc

        return res.text
