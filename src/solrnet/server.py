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
"""High level client bound to one document class.

Example:
    >>> solr = Solr(Connection('http://localhost:8983/solr'), Book)
    >>> await solr.add(Book(isbn='0553573403', title='A Game of Thrones'))
    >>> await solr.commit()
    >>> results = await solr.query('title_t:thrones', rows=10,
    ...                            sort=[SortOrder('isbn', Order.DESC)])
    >>> results.num_found
    1
"""
from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from . import commands
from .commands import UPDATE_PATH
from .connection import Connection
from .documents import UniqueKeyResolver, resolver as default_resolver
from .exceptions import NoUniqueKeyError
from .query import SELECT_PATH, Query, Sort, encode_query
from .results import QueryResults, ResultParser, XMLResultParser


class Solr:
    """Add, delete, commit, optimize and query documents of one class.

    Every operation issues at most one request through ``connection``.
    Errors are never retried and propagate unchanged.

    Attributes:
        connection: ``Connection`` used for all requests.
        document_class: Class of the documents handled by this client.
        result_parser: Callable turning a ``/select`` response into
            ``QueryResults``. Defaults to ``XMLResultParser(document_class)``.
        resolver: ``UniqueKeyResolver`` used by delete by instance.
    """

    def __init__(self, connection: Connection, document_class: type | None = None,
            result_parser: ResultParser | None = None,
            resolver: UniqueKeyResolver | None = None) -> None:
        self.connection = connection
        self.document_class = document_class
        if result_parser is None:
            result_parser = XMLResultParser(document_class)
        self.result_parser = result_parser
        self.resolver = default_resolver if resolver is None else resolver

    async def _update(self, command: str) -> None:
        await self.connection.post(UPDATE_PATH, command)

    async def add(self, document: Any) -> None:
        await self._update(commands.add(document))

    async def add_many(self, documents: Iterable[Any]) -> None:
        await self._update(commands.add_many(documents))

    async def commit(self, wait_searcher: bool | None = None,
            wait_flush: bool | None = None) -> None:
        await self._update(commands.commit(wait_searcher, wait_flush))

    async def optimize(self, wait_searcher: bool | None = None,
            wait_flush: bool | None = None) -> None:
        await self._update(commands.optimize(wait_searcher, wait_flush))

    async def delete(self, target: Any, from_pending: bool | None = None,
            from_committed: bool | None = None) -> None:
        """Delete by query or by document instance.

        Args:
            target: A ``Query`` or query text to delete every match, or a
                document whose unique key identifies what to delete.
            from_pending: Delete from uncommitted documents.
            from_committed: Delete from committed documents.

        Raises:
            NoUniqueKeyError: If ``target`` is a document whose class has
                no unique key or its key value is ``None``. Nothing is sent
                in that case.
        """
        if isinstance(target, (Query, str)):
            command = commands.delete_by_query(target, from_pending, from_committed)
        else:
            key = self.resolver.resolve(type(target))
            if key is None:
                raise NoUniqueKeyError(f"{type(target).__name__} has no unique key")
            value = key.value(target)
            if value is None:
                raise NoUniqueKeyError(f"{type(target).__name__}.{key.attribute} is None")
            command = commands.delete_by_id(value, from_pending, from_committed)
        await self._update(command)

    async def delete_by_id(self, value: Any, from_pending: bool | None = None,
            from_committed: bool | None = None) -> None:
        await self._update(commands.delete_by_id(value, from_pending, from_committed))

    async def query(self, query: Query | str, start: int | None = None,
            rows: int | None = None, sort: Sort | None = None) -> QueryResults:
        """Run a search.

        Args:
            query: ``Query`` or query text.
            start: Offset of the first document to return.
            rows: Maximum number of documents to return.
            sort: Sort keys, as ``SortOrder`` or ``(field, order)`` pairs,
                most significant first.

        Returns:
            QueryResults: Whatever ``result_parser`` builds from the response.
        """
        params = encode_query(query, start=start, rows=rows, sort=sort)
        text = await self.connection.get(SELECT_PATH, params)
        return self.result_parser(text)
