"""Tests for solrnet.results — QueryResults and XMLResultParser."""
from __future__ import annotations

import datetime
from dataclasses import dataclass

import pytest

from solrnet.collections import DictObject
from solrnet.documents import field, unique_key
from solrnet.exceptions import ResultParseError
from solrnet.results import QueryResults, XMLResultParser, convert


RESPONSE = """<?xml version="1.0" encoding="UTF-8"?>
<response>
<lst name="responseHeader"><int name="status">0</int><int name="QTime">3</int></lst>
<result name="response" numFound="42" start="10">
  <doc>
    <str name="id">SOLR1000</str>
    <str name="name">Solr, the Enterprise Search Server</str>
    <arr name="cat"><str>software</str><str>search</str></arr>
    <float name="price">0.5</float>
    <int name="popularity">10</int>
    <bool name="inStock">true</bool>
    <date name="timestamp">2006-01-17T00:00:00Z</date>
  </doc>
  <doc>
    <str name="id">SOLR1001</str>
    <str name="name"></str>
    <long name="popularity">7</long>
  </doc>
</result>
</response>
"""

EMPTY_RESPONSE = """<response>
<lst name="responseHeader"><int name="status">0</int><int name="QTime">0</int></lst>
<result name="response" numFound="0" start="0"/>
</response>
"""


@dataclass
class Product:
    id: str = field(unique_key=True)
    title: str = field(name='name', default='')
    popularity: int = 0


class PlainProduct:
    @unique_key
    def key(self):
        return self.id


# ── QueryResults ───────────────────────────────────────────────────────

class TestQueryResults:
    def test_is_iterable_list(self):
        results = QueryResults(['a', 'b'], num_found=10)
        assert list(results) == ['a', 'b']
        assert len(results) == 2
        assert results.num_found == 10

    def test_defaults(self):
        results = QueryResults()
        assert results == []
        assert results.num_found == 0
        assert results.start == 0
        assert results.qtime is None

    def test_repr(self):
        assert repr(QueryResults([1], num_found=5)) == '<QueryResults num_found=5 start=0 [1]>'


# ── convert ────────────────────────────────────────────────────────────

class TestConvert:
    @pytest.mark.parametrize("tag, text, expected", [
        ('int', '10', 10),
        ('long', '10000000000', 10000000000),
        ('short', '-3', -3),
        ('float', '0.5', 0.5),
        ('double', '1e3', 1000.0),
        ('bool', 'true', True),
        ('bool', 'false', False),
        ('str', 'abc', 'abc'),
    ])
    def test_scalars(self, tag, text, expected):
        assert convert(tag, {'@name': 'x', '#text': text}) == expected

    def test_date(self):
        value = convert('date', {'@name': 'd', '#text': '2006-01-17T10:20:30Z'})
        assert value == datetime.datetime(2006, 1, 17, 10, 20, 30, tzinfo=datetime.timezone.utc)

    def test_empty_str(self):
        assert convert('str', {'@name': 'x'}) == ''

    def test_empty_int(self):
        assert convert('int', {'@name': 'x'}) is None

    def test_null(self):
        assert convert('null', {'@name': 'x'}) is None

    def test_arr(self):
        assert convert('arr', {'@name': 'x', 'int': ['1', '2']}) == [1, 2]

    def test_lst(self):
        value = convert('lst', {'@name': 'x', 'int': [{'@name': 'a', '#text': '1'}]})
        assert value == {'a': 1}
        assert value.a == 1

    def test_invalid_value(self):
        with pytest.raises(ResultParseError):
            convert('int', {'@name': 'x', '#text': 'ten'})


# ── XMLResultParser ────────────────────────────────────────────────────

class TestXMLResultParser:
    def test_counts(self):
        results = XMLResultParser().parse(RESPONSE)
        assert isinstance(results, QueryResults)
        assert results.num_found == 42
        assert results.start == 10
        assert results.qtime == 3
        assert len(results) == 2

    def test_untyped_documents(self):
        doc = XMLResultParser()(RESPONSE)[0]
        assert isinstance(doc, DictObject)
        assert doc.id == 'SOLR1000'
        assert doc.cat == ['software', 'search']
        assert doc.price == 0.5
        assert doc.popularity == 10
        assert doc.inStock is True
        assert doc.timestamp == datetime.datetime(2006, 1, 17, tzinfo=datetime.timezone.utc)

    def test_empty_string_field(self):
        assert XMLResultParser().parse(RESPONSE)[1].name == ''

    def test_dataclass_documents(self):
        results = XMLResultParser(Product).parse(RESPONSE)
        assert results[0] == Product(id='SOLR1000', title='Solr, the Enterprise Search Server', popularity=10)
        assert results[1] == Product(id='SOLR1001', title='', popularity=7)

    def test_plain_class_documents(self):
        doc = XMLResultParser(PlainProduct).parse(RESPONSE)[0]
        assert isinstance(doc, PlainProduct)
        assert doc.id == 'SOLR1000'
        assert doc.key == 'SOLR1000'
        assert doc.cat == ['software', 'search']

    def test_no_documents(self):
        results = XMLResultParser().parse(EMPTY_RESPONSE)
        assert results == []
        assert results.num_found == 0
        assert results.qtime == 0

    def test_num_found_independent_of_page(self):
        results = XMLResultParser().parse(RESPONSE)
        assert results.num_found > len(results)

    @pytest.mark.parametrize("text", ['', '<response><result', 'not xml'])
    def test_malformed(self, text):
        with pytest.raises(ResultParseError):
            XMLResultParser().parse(text)

    def test_missing_response(self):
        with pytest.raises(ResultParseError):
            XMLResultParser().parse('<other />')

    def test_missing_result(self):
        with pytest.raises(ResultParseError):
            XMLResultParser().parse('<response><lst name="responseHeader" /></response>')
