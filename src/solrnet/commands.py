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
"""XML update commands.

Each function returns the exact XML string for one update command; sending
it to ``/update`` is left to the caller. Attribute order is part of the
wire format: ``waitSearcher`` precedes ``waitFlush`` and ``fromPending``
precedes ``fromCommitted``.

Example:
    >>> commit()
    '<commit />'
    >>> commit(wait_searcher=True, wait_flush=False)
    '<commit waitSearcher="true" waitFlush="false" />'
"""
from __future__ import annotations

from collections.abc import Iterable
from typing import Any
from xml.etree.ElementTree import Element, SubElement, tostring

from .documents import serialize, to_solr_value
from .query import Query


UPDATE_PATH = '/update'


def _flags(**flags: bool | None) -> dict[str, str]:
    # Flags go as a pair or not at all
    given = [v is not None for v in flags.values()]
    if any(given) and not all(given):
        raise ValueError(f"Flags {', '.join(flags)} must be given together")
    return {k: to_solr_value(bool(v)) for k, v in flags.items() if v is not None}


def _tostring(elem: Element) -> str:
    return tostring(elem, encoding='unicode')


def add(*documents: Any) -> str:
    """Build an ``<add>`` command with one ``<doc>`` per document."""
    elem = Element('add')
    for document in documents:
        doc = SubElement(elem, 'doc')
        for name, value in serialize(document):
            SubElement(doc, 'field', name=name).text = value
    return _tostring(elem)


def add_many(documents: Iterable[Any]) -> str:
    return add(*documents)


def _delete(criteria: str, text: str, from_pending: bool | None,
        from_committed: bool | None) -> str:
    elem = Element('delete', _flags(fromPending=from_pending, fromCommitted=from_committed))
    SubElement(elem, criteria).text = text
    return _tostring(elem)


def delete_by_id(value: Any, from_pending: bool | None = None,
        from_committed: bool | None = None) -> str:
    """Build ``<delete><id>...</id></delete>``.

    Args:
        value: Unique key value of the document to delete.
        from_pending: Delete from uncommitted documents.
        from_committed: Delete from committed documents.
    """
    return _delete('id', to_solr_value(value), from_pending, from_committed)


def delete_by_query(query: Query | str, from_pending: bool | None = None,
        from_committed: bool | None = None) -> str:
    """Build ``<delete><query>...</query></delete>``."""
    return _delete('query', str(query), from_pending, from_committed)


def commit(wait_searcher: bool | None = None, wait_flush: bool | None = None) -> str:
    """Build a ``<commit />`` command.

    Args:
        wait_searcher: Block until a new searcher is opened.
        wait_flush: Block until index changes are flushed to disk.
    """
    return _tostring(Element('commit', _flags(waitSearcher=wait_searcher, waitFlush=wait_flush)))


def optimize(wait_searcher: bool | None = None, wait_flush: bool | None = None) -> str:
    """Build an ``<optimize />`` command. Takes the same flags as ``commit``."""
    return _tostring(Element('optimize', _flags(waitSearcher=wait_searcher, waitFlush=wait_flush)))
