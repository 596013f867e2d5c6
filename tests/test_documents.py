"""Tests for solrnet.documents — field declaration, serialization and unique keys."""
from __future__ import annotations

import dataclasses
import datetime
import threading
from dataclasses import dataclass

import pytest

from solrnet.documents import (
    KeyField,
    UniqueKeyResolver,
    field,
    field_names,
    find_unique_key,
    resolver,
    serialize,
    to_solr_value,
    unique_key,
)
from solrnet.exceptions import MultipleUniqueKeysError


# ── document classes ───────────────────────────────────────────────────

class DocumentWithoutUniqueKey:
    pass


class DocumentWithUniqueKey:
    @unique_key
    def id(self):
        return 0


class InheritedDocument(DocumentWithUniqueKey):
    pass


@dataclass
class Book:
    isbn: str = field(unique_key=True)
    title: str = field(name='title_t', default='')
    tags: list[str] = field(default_factory=list)
    pages: int | None = None


@dataclass
class Untyped:
    name: str = ''


@dataclass
class TwoKeys:
    a: str = field(unique_key=True, default='')
    b: str = field(unique_key=True, default='')


class PropertyAndField:
    @unique_key
    def code(self):
        return 'X'

    @unique_key
    def other(self):
        return 'Y'


# ── field() ────────────────────────────────────────────────────────────

class TestField:
    def test_metadata(self):
        f = {f.name: f for f in dataclasses.fields(Book)}
        assert f['isbn'].metadata['solr_unique_key'] is True
        assert f['title'].metadata['solr_name'] == 'title_t'
        assert f['title'].metadata['solr_unique_key'] is False

    def test_keeps_extra_metadata(self):
        @dataclass
        class Doc:
            x: int = field(default=0, metadata={'help': 'x'})

        metadata = dataclasses.fields(Doc)[0].metadata
        assert metadata['help'] == 'x'
        assert metadata['solr_name'] is None

    def test_field_names(self):
        assert field_names(Book) == {'isbn': 'isbn', 'title_t': 'title', 'tags': 'tags', 'pages': 'pages'}

    def test_field_names_plain_class(self):
        assert field_names(DocumentWithUniqueKey) == {'id': 'id'}

    def test_unique_key_wire_name(self):
        class Doc:
            code = unique_key(lambda self: 'A1', name='id')

        assert field_names(Doc) == {'id': 'code'}
        assert find_unique_key(Doc) == KeyField('id', 'code')


# ── find_unique_key / UniqueKeyResolver ────────────────────────────────

class TestFindUniqueKey:
    def test_no_key(self):
        assert find_unique_key(DocumentWithoutUniqueKey) is None
        assert find_unique_key(Untyped) is None

    def test_property_key(self):
        assert find_unique_key(DocumentWithUniqueKey) == KeyField('id', 'id')

    def test_inherited_property_key(self):
        assert find_unique_key(InheritedDocument) == KeyField('id', 'id')

    def test_dataclass_key(self):
        assert find_unique_key(Book) == KeyField('isbn', 'isbn')

    def test_multiple_dataclass_keys(self):
        with pytest.raises(MultipleUniqueKeysError):
            find_unique_key(TwoKeys)

    def test_multiple_property_keys(self):
        with pytest.raises(MultipleUniqueKeysError):
            find_unique_key(PropertyAndField)

    def test_key_value(self):
        key = find_unique_key(Book)
        assert key.value(Book(isbn='0553573403')) == '0553573403'
        assert find_unique_key(DocumentWithUniqueKey).value(DocumentWithUniqueKey()) == 0


class TestUniqueKeyResolver:
    def setup_method(self):
        self.resolver = UniqueKeyResolver()

    def test_resolve(self):
        assert self.resolver.resolve(Book) == KeyField('isbn', 'isbn')
        assert self.resolver.resolve(DocumentWithoutUniqueKey) is None

    def test_memoized(self):
        first = self.resolver.resolve(Book)
        assert self.resolver.resolve(Book) is first
        assert self.resolver._cache == {Book: first}

    def test_memoizes_missing_key(self):
        self.resolver.resolve(DocumentWithoutUniqueKey)
        assert DocumentWithoutUniqueKey in self.resolver._cache
        assert self.resolver._cache[DocumentWithoutUniqueKey] is None

    def test_error_not_cached(self):
        for _ in range(2):
            with pytest.raises(MultipleUniqueKeysError):
                self.resolver.resolve(TwoKeys)
        assert TwoKeys not in self.resolver._cache

    def test_clear(self):
        self.resolver.resolve(Book)
        self.resolver.clear()
        assert self.resolver._cache == {}

    def test_concurrent_first_use(self):
        barrier = threading.Barrier(8)
        results = []

        def worker(document_class):
            barrier.wait()
            results.append(self.resolver.resolve(document_class))

        threads = [
            threading.Thread(target=worker, args=(Book if i % 2 else DocumentWithUniqueKey,))
            for i in range(8)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 8
        assert results.count(KeyField('isbn', 'isbn')) == 4
        assert results.count(KeyField('id', 'id')) == 4
        assert set(self.resolver._cache) == {Book, DocumentWithUniqueKey}

    def test_default_resolver(self):
        assert isinstance(resolver, UniqueKeyResolver)


# ── serialization ──────────────────────────────────────────────────────

class TestToSolrValue:
    def test_bool(self):
        assert to_solr_value(True) == 'true'
        assert to_solr_value(False) == 'false'

    def test_numbers(self):
        assert to_solr_value(0) == '0'
        assert to_solr_value(1.5) == '1.5'

    def test_naive_datetime(self):
        assert to_solr_value(datetime.datetime(2008, 1, 2, 3, 4, 5)) == '2008-01-02T03:04:05Z'

    def test_aware_datetime_converted_to_utc(self):
        tz = datetime.timezone(datetime.timedelta(hours=-3))
        value = datetime.datetime(2008, 1, 2, 21, 0, 0, tzinfo=tz)
        assert to_solr_value(value) == '2008-01-03T00:00:00Z'

    def test_date(self):
        assert to_solr_value(datetime.date(2008, 1, 2)) == '2008-01-02T00:00:00Z'


class TestSerialize:
    def test_empty_document(self):
        assert serialize(DocumentWithoutUniqueKey()) == []

    def test_property_key_included(self):
        assert serialize(DocumentWithUniqueKey()) == [('id', '0')]

    def test_plain_instance_attributes(self):
        doc = DocumentWithoutUniqueKey()
        doc.name = 'pepe'
        doc._private = 'hidden'
        assert serialize(doc) == [('name', 'pepe')]

    def test_dataclass(self):
        book = Book(isbn='0553573403', title='A Game of Thrones', tags=['fantasy', 'epic'])
        assert serialize(book) == [
            ('isbn', '0553573403'),
            ('title_t', 'A Game of Thrones'),
            ('tags', 'fantasy'),
            ('tags', 'epic'),
        ]

    def test_none_skipped(self):
        assert ('pages', None) not in serialize(Book(isbn='1'))
        assert [name for name, _ in serialize(Book(isbn='1', pages=10))] == ['isbn', 'title_t', 'pages']
