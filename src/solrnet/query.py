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
"""Search queries and their request parameter encoding.

Example:
    >>> encode_query(Query('id:123'), start=10, rows=20,
    ...              sort=[SortOrder('id'), SortOrder('name', Order.DESC)])
    {'q': 'id:123', 'start': '10', 'rows': '20', 'sort': 'id asc,name desc'}
"""
from __future__ import annotations

import enum
from collections.abc import Iterable
from typing import NamedTuple, TypeAlias


SELECT_PATH = '/select'


class Order(enum.Enum):
    ASC = 'asc'
    DESC = 'desc'


class SortOrder(NamedTuple):
    """Sort key: field name and direction."""

    field: str
    order: Order = Order.ASC

    def __str__(self) -> str:
        return f'{self.field} {_order(self.order).value}'

    @classmethod
    def parse(cls, text: str) -> SortOrder:
        """Parse ``'field asc'`` / ``'field desc'`` (direction optional)."""
        field, _, order = text.strip().partition(' ')
        if not field:
            raise ValueError(f"Invalid sort order: {text!r}")
        order = order.strip().lower() or Order.ASC.value
        return cls(field, Order(order))


Sort: TypeAlias = Iterable[SortOrder | tuple[str, Order | str]]


class Query:
    """Query text, passed to the server as is."""

    def __init__(self, text: str) -> None:
        self.text = text

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f'Query({self.text!r})'

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Query):
            return self.text == other.text
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.text)

    @classmethod
    def all(cls) -> Query:
        return cls('*:*')


def _order(order: Order | str) -> Order:
    if isinstance(order, str):
        order = order.lower()
    return Order(order)


def _sort_order(item: SortOrder | tuple[str, Order | str]) -> SortOrder:
    field, order = item
    return SortOrder(field, _order(order))


def encode_sort(sort: Sort) -> str:
    return ','.join(str(_sort_order(item)) for item in sort)


def decode_sort(text: str) -> list[SortOrder]:
    """Inverse of ``encode_sort``."""
    return [SortOrder.parse(part) for part in text.split(',') if part.strip()]


def _window(name: str, value: int) -> str:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{name} must be a non-negative integer, got {value!r}")
    return str(value)


def encode_query(query: Query | str, start: int | None = None,
        rows: int | None = None, sort: Sort | None = None) -> dict[str, str]:
    """Build the parameters of a ``/select`` request.

    Only ``q`` is always present; ``start``, ``rows`` and ``sort`` are
    left out unless given.

    Raises:
        ValueError: If ``start`` or ``rows`` is not a non-negative integer.
    """
    params = {'q': str(query)}
    if start is not None:
        params['start'] = _window('start', start)
    if rows is not None:
        params['rows'] = _window('rows', rows)
    if sort:
        sort = encode_sort(sort)
        if sort:
            params['sort'] = sort
    return params
