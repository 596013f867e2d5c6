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
"""Search results and the XML response parser.

A result parser is any callable turning the raw ``/select`` response text
into a ``QueryResults``. ``XMLResultParser`` is the default, reading the
server's standard XML response writer output::

    <response>
      <lst name="responseHeader"><int name="QTime">1</int></lst>
      <result name="response" numFound="42" start="0">
        <doc><str name="id">SOLR1000</str><float name="price">0.0</float></doc>
      </result>
    </response>
"""
from __future__ import annotations

import dataclasses
import datetime
import logging
from collections.abc import Callable, Iterable
from typing import Any, TypeAlias
from xml.parsers.expat import ExpatError

import xmltodict

from .collections import DictObject
from .documents import field_names
from .exceptions import ResultParseError


logger = logging.getLogger('solrnet')

FIELD_TAGS = (
    'str', 'int', 'long', 'short', 'byte', 'float', 'double',
    'bool', 'date', 'arr', 'lst', 'null',
)


def parse_date(text: str) -> datetime.datetime:
    return datetime.datetime.fromisoformat(text)


CONVERTERS: dict[str, Callable[[str], Any]] = dict(
    int=int,
    long=int,
    short=int,
    byte=int,
    float=float,
    double=float,
    bool=lambda text: text == 'true',
    date=parse_date,
)


class QueryResults(list):
    """Documents of one results page.

    Attributes:
        num_found: Total number of matching documents, regardless of how
            many were returned in this page.
        start: Offset of the first returned document.
        qtime: Server query time in milliseconds, if reported.
    """

    def __init__(self, documents: Iterable[Any] = (), num_found: int = 0,
            start: int = 0, qtime: int | None = None) -> None:
        super().__init__(documents)
        self.num_found = num_found
        self.start = start
        self.qtime = qtime

    def __repr__(self) -> str:
        return f'<QueryResults num_found={self.num_found} start={self.start} {list.__repr__(self)}>'


ResultParser: TypeAlias = Callable[[str], QueryResults]


def _children(node: Any):
    if not isinstance(node, dict):
        return
    for tag, items in node.items():
        if tag.startswith(('@', '#')):
            continue
        if not isinstance(items, list):
            items = [items]
        for item in items:
            yield tag, item


def _text(node: Any) -> str | None:
    if isinstance(node, dict):
        return node.get('#text')
    return node


def _name(node: Any) -> str | None:
    if isinstance(node, dict):
        return node.get('@name')
    return None


def convert(tag: str, node: Any) -> Any:
    """Convert one typed response element into its Python value."""
    if tag == 'arr':
        return [convert(t, n) for t, n in _children(node)]
    if tag == 'lst':
        return DictObject((_name(n), convert(t, n)) for t, n in _children(node))
    if tag == 'null':
        return None
    text = _text(node)
    if tag == 'str':
        return text or ''
    if text is None:
        return None
    try:
        return CONVERTERS.get(tag, str)(text)
    except ValueError as exc:
        raise ResultParseError(f"Invalid <{tag}> value: {text!r}") from exc


class XMLResultParser:
    """Parse XML search responses into ``QueryResults``.

    Args:
        document_class: Class to build each document as. Dataclasses are
            constructed with keyword arguments, other classes are
            instantiated without arguments and populated attribute by
            attribute. ``None`` yields ``DictObject`` documents.
    """

    def __init__(self, document_class: type | None = None) -> None:
        self.document_class = document_class
        self._names = field_names(document_class) if document_class is not None else {}

    def __call__(self, text: str) -> QueryResults:
        return self.parse(text)

    def parse(self, text: str) -> QueryResults:
        try:
            content = xmltodict.parse(text, force_list=FIELD_TAGS + ('doc', 'result'))
        except ExpatError as exc:
            raise ResultParseError(f"Malformed response: {exc}") from exc

        response = content.get('response')
        if not isinstance(response, dict):
            raise ResultParseError("Missing <response> element")

        qtime = None
        for header in response.get('lst', []):
            if _name(header) == 'responseHeader':
                values = convert('lst', header)
                qtime = values.get('QTime')

        results = response.get('result') or []
        result = next((r for r in results if _name(r) == 'response'), None)
        if result is None:
            if not results:
                raise ResultParseError("Missing <result> element")
            result = results[0]
        result = result or {}

        try:
            num_found = int(result.get('@numFound', 0))
            start = int(result.get('@start', 0))
        except ValueError as exc:
            raise ResultParseError(f"Invalid result attributes: {exc}") from exc

        documents = [self.build(doc) for doc in result.get('doc', [])]
        logger.debug(f"@@@RES>> num_found: {num_found} :: returned: {len(documents)}")
        return QueryResults(documents, num_found=num_found, start=start, qtime=qtime)

    def build(self, doc: Any) -> Any:
        """Build a document from a parsed ``<doc>`` element."""
        fields = {_name(n): convert(t, n) for t, n in _children(doc)}
        document_class = self.document_class
        if document_class is None:
            return DictObject(fields)

        if dataclasses.is_dataclass(document_class):
            init_fields = {f.name for f in dataclasses.fields(document_class) if f.init}
            kwargs = {}
            for name, value in fields.items():
                attribute = self._names.get(name, name)
                if attribute in init_fields:
                    kwargs[attribute] = value
            return document_class(**kwargs)

        document = document_class()
        for name, value in fields.items():
            attribute = self._names.get(name, name)
            if isinstance(getattr(document_class, attribute, None), property):
                continue
            setattr(document, attribute, value)
        return document
