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
"""Document declaration, serialization and unique key discovery.

Documents are ordinary Python classes. Dataclasses declare their Solr
fields with ``field()``, which records the wire name and whether the field
is the unique key; plain classes can mark a read-only property as the
unique key with the ``@unique_key`` decorator.

Example:
    >>> @dataclass
    ... class Book:
    ...     isbn: str = field(unique_key=True)
    ...     title: str = field(name='title_t', default='')
    >>> resolver.resolve(Book)
    KeyField(name='isbn', attribute='isbn')
"""
from __future__ import annotations

import dataclasses
import datetime
import threading
from typing import Any, NamedTuple

from .exceptions import MultipleUniqueKeysError


FIELD_NAME = 'solr_name'
UNIQUE_KEY = 'solr_unique_key'

NA = object()


def field(name: str | None = None, unique_key: bool = False, **kwargs) -> Any:
    """Declare a dataclass field mapped to a Solr field.

    Args:
        name: Field name on the wire. Defaults to the attribute name.
        unique_key: Whether this field identifies the document.
        **kwargs: Passed through to ``dataclasses.field``.
    """
    metadata = dict(kwargs.pop('metadata', None) or {})
    metadata[FIELD_NAME] = name
    metadata[UNIQUE_KEY] = unique_key
    return dataclasses.field(metadata=metadata, **kwargs)


class unique_key(property):
    """Property decorator marking the property as the document's unique key.

    Example:
        >>> class Product:
        ...     @unique_key
        ...     def id(self):
        ...         return self.sku
    """

    def __init__(self, fget=None, fset=None, fdel=None, doc=None,
            name: str | None = None) -> None:
        super().__init__(fget, fset, fdel, doc)
        self.name = name


class KeyField(NamedTuple):
    """Unique key of a document class.

    Attributes:
        name: Field name on the wire.
        attribute: Python attribute holding the value.
    """

    name: str
    attribute: str

    def value(self, document: Any) -> Any:
        return getattr(document, self.attribute)


def field_names(document_class: type) -> dict[str, str]:
    """Map wire field names to attribute names for a document class."""
    names = {}
    if dataclasses.is_dataclass(document_class):
        for f in dataclasses.fields(document_class):
            names[f.metadata.get(FIELD_NAME) or f.name] = f.name
    for attribute, prop in _key_properties(document_class):
        names[prop.name or attribute] = attribute
    return names


def _key_properties(document_class: type) -> list[tuple[str, unique_key]]:
    seen = set()
    found = []
    for klass in document_class.__mro__:
        for attribute, value in vars(klass).items():
            if attribute in seen:
                continue
            seen.add(attribute)
            if isinstance(value, unique_key):
                found.append((attribute, value))
    return found


def find_unique_key(document_class: type) -> KeyField | None:
    """Inspect a document class for its unique key, without caching.

    Raises:
        MultipleUniqueKeysError: If more than one key is declared.
    """
    keys = []
    if dataclasses.is_dataclass(document_class):
        for f in dataclasses.fields(document_class):
            if f.metadata.get(UNIQUE_KEY):
                keys.append(KeyField(f.metadata.get(FIELD_NAME) or f.name, f.name))
    for attribute, prop in _key_properties(document_class):
        keys.append(KeyField(prop.name or attribute, attribute))

    if len(keys) > 1:
        raise MultipleUniqueKeysError(
            f"{document_class.__name__} declares more than one unique key: "
            f"{', '.join(k.attribute for k in keys)}"
        )
    return keys[0] if keys else None


class UniqueKeyResolver:
    """Memoized unique key lookup, keyed by document class.

    The cache is written at most once per class (first write wins), so
    concurrent first lookups may inspect the class more than once but
    always agree on the stored entry.
    """

    def __init__(self) -> None:
        self._cache: dict[type, KeyField | None] = {}
        self._lock = threading.Lock()

    def resolve(self, document_class: type) -> KeyField | None:
        """Return the unique key of ``document_class``, or ``None``.

        Raises:
            MultipleUniqueKeysError: If more than one key is declared.
        """
        key = self._cache.get(document_class, NA)
        if key is not NA:
            return key
        key = find_unique_key(document_class)
        with self._lock:
            return self._cache.setdefault(document_class, key)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()


resolver = UniqueKeyResolver()


def to_solr_value(value: Any) -> str:
    """Format a single Python value the way Solr expects it."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, datetime.datetime):
        if value.tzinfo is not None:
            value = value.astimezone(datetime.timezone.utc)
        return value.strftime('%Y-%m-%dT%H:%M:%SZ')
    if isinstance(value, datetime.date):
        return value.strftime('%Y-%m-%dT00:00:00Z')
    return str(value)


def _document_items(document: Any) -> list[tuple[str, Any]]:
    document_class = type(document)
    if dataclasses.is_dataclass(document_class):
        items = [
            (f.metadata.get(FIELD_NAME) or f.name, getattr(document, f.name))
            for f in dataclasses.fields(document_class)
        ]
    else:
        items = [(k, v) for k, v in vars(document).items() if not k.startswith('_')]
    names = {name for name, _ in items}
    for attribute, prop in _key_properties(document_class):
        name = prop.name or attribute
        if name not in names:
            items.append((name, getattr(document, attribute)))
    return items


def serialize(document: Any) -> list[tuple[str, str]]:
    """Flatten a document into ``(field name, value)`` pairs.

    ``None`` values are skipped and multi-valued fields (lists, tuples,
    sets) produce one pair per item.
    """
    fields = []
    for name, value in _document_items(document):
        if value is None:
            continue
        if isinstance(value, (list, tuple, set, frozenset)):
            fields.extend((name, to_solr_value(v)) for v in value if v is not None)
        else:
            fields.append((name, to_solr_value(value)))
    return fields
