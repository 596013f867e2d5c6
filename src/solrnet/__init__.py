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
"""Typed async client for Solr-style search servers.

Declares documents as plain Python classes, builds the server's XML update
commands and search parameters, and talks to the server over HTTP through
``httpx``.

Configuration is read from environment variables (``SOLR_URL``,
``SOLR_TIMEOUT``), with optional overrides from Django settings. A
module-level ``client`` connection is created at import time using these values.

Example:
    >>> from solrnet import Solr, client
    >>> solr = Solr(client, Book)
    >>> await solr.add(Book(isbn='0553573403', title='A Game of Thrones'))
    >>> await solr.commit()
    >>> results = await solr.query('title_t:thrones')
"""
from __future__ import annotations

import os

from .collections import DictObject
from .commands import UPDATE_PATH
from .connection import Connection, error_for_status
from .documents import KeyField, UniqueKeyResolver, field, resolver, unique_key
from .exceptions import (
    InvalidFieldError,
    InvalidURLError,
    MultipleUniqueKeysError,
    NoUniqueKeyError,
    ResultParseError,
    SolrConnectionError,
    SolrError,
)
from .query import SELECT_PATH, Order, Query, SortOrder, decode_sort, encode_query
from .results import QueryResults, XMLResultParser
from .server import Solr


__version__ = '1.0.0'
__all__ = [
    'Solr',
    'Connection',
    'Query',
    'SortOrder',
    'Order',
    'QueryResults',
    'XMLResultParser',
    'DictObject',
    'KeyField',
    'UniqueKeyResolver',
    'field',
    'unique_key',
    'resolver',
    'encode_query',
    'decode_sort',
    'error_for_status',
    'SolrError',
    'InvalidURLError',
    'SolrConnectionError',
    'InvalidFieldError',
    'NoUniqueKeyError',
    'MultipleUniqueKeysError',
    'ResultParseError',
    'UPDATE_PATH',
    'SELECT_PATH',
    'SOLR_URL',
    'SOLR_TIMEOUT',
    'client',
]


SOLR_URL = os.environ.get('SOLR_URL', 'http://127.0.0.1:8983/solr')
SOLR_TIMEOUT = os.environ.get('SOLR_TIMEOUT') or None

try:
    from django.conf import settings
    SOLR_URL = getattr(settings, 'SOLR_URL', SOLR_URL)
    SOLR_TIMEOUT = getattr(settings, 'SOLR_TIMEOUT', SOLR_TIMEOUT)
except Exception:
    settings = None

if SOLR_TIMEOUT is not None:
    SOLR_TIMEOUT = float(SOLR_TIMEOUT)


client = Connection(SOLR_URL, timeout=SOLR_TIMEOUT)
