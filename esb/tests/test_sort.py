"""Tests for :mod:`esb.sort`."""

from unittest import TestCase

from esb import sort
from esb.types import SortOrder


class TestSort(TestCase):
    """Tests for the sort constructors."""

    def test_field_asc(self):
        self.assertEqual(sort.sort_field_asc("price"),
                         {"price": {"order": "asc"}})

    def test_field_desc(self):
        self.assertEqual(sort.sort_field_desc("price"),
                         {"price": {"order": "desc"}})

    def test_new_sort_empty(self):
        self.assertEqual(sort.new_sort(), [])

    def test_order_is_kept(self):
        clauses = sort.new_sort(
            sort.sort_by("date", SortOrder.DESC),
            None,
            sort.sort_score(),
            sort.sort_by("title"),
        )
        self.assertEqual(clauses, [
            {"date": {"order": "desc"}},
            {"_score": {"order": "desc"}},
            {"title": {"order": "asc"}},
        ])

    def test_extra_settings(self):
        clauses = sort.new_sort(sort.sort_by("price", "asc", missing="_last"))
        self.assertEqual(clauses, [
            {"price": {"order": "asc", "missing": "_last"}}
        ])
