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
"""Error taxonomy raised by the Solr client.

Every error derives from ``SolrError``. Transport and HTTP status failures
are ``SolrConnectionError``; a ``400 Bad Request`` is narrowed down to
``InvalidFieldError`` since the server answers that way when a query or
command references a field it does not know.
"""
from __future__ import annotations


class SolrError(Exception):
    """Base class for all errors raised by this package."""


class InvalidURLError(SolrError):
    """The base URL is unparsable or its scheme is not ``http``/``https``."""


class SolrConnectionError(SolrError):
    """The request could not be completed.

    Raised for transport failures (connection refused, DNS, timeouts) and
    for any non-2xx response. The original exception is available as
    ``__cause__``.

    Attributes:
        status_code: HTTP status of the failed response, or ``None`` when
            the request never got a response.
        body: Response body text, or ``None``.
    """

    def __init__(self, message: str, status_code: int | None = None,
            body: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class InvalidFieldError(SolrConnectionError):
    """The server rejected the request with ``400 Bad Request``."""


class NoUniqueKeyError(SolrError):
    """A delete by instance was attempted on a class without a unique key."""


class MultipleUniqueKeysError(SolrError):
    """A document class declares more than one unique key."""


class ResultParseError(SolrError):
    """A search response could not be parsed."""
