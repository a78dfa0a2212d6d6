"""Tests for :mod:`esb.results`."""

from dataclasses import dataclass
from unittest import TestCase

from esb import results
from esb.exceptions import DocumentNotFound


@dataclass
class Article:
    title: str
    views: int = 0


class Tagged:
    """Entity with its own constructor from a dict."""

    def __init__(self, tags):
        self.tags = tags

    @classmethod
    def from_dict(cls, source):
        return cls(source.get("tags", []))


class TestFormatOne(TestCase):
    """Tests for :func:`.results.format_one`."""

    def test_found(self):
        response = {"_id": "1", "found": True, "_source": {"title": "A"}}
        self.assertEqual(results.format_one(response), {"title": "A"})

    def test_found_with_model(self):
        response = {"_id": "1", "found": True,
                    "_source": {"title": "A", "views": 3}}
        self.assertEqual(results.format_one(response, Article),
                         Article("A", 3))

    def test_not_found(self):
        with self.assertRaises(DocumentNotFound):
            results.format_one({"_id": "1", "found": False})


class TestFormatSearch(TestCase):
    """Tests for :func:`.results.format_search`."""

    def test_empty(self):
        self.assertEqual(results.format_search({"hits": []}), [])
        self.assertEqual(results.format_search({}), [])

    def test_decode_with_model(self):
        hits = {"hits": [
            {"_id": "1", "_source": {"title": "A"}},
            {"_id": "2", "_source": {"title": "B", "views": 2}},
        ]}
        self.assertEqual(results.format_search(hits, model=Article),
                         [Article("A"), Article("B", 2)])

    def test_decode_ignores_undeclared_fields(self):
        self.assertEqual(
            results.decode({"title": "A", "views": 2, "extra": [1]}, Article),
            Article("A", 2)
        )

    def test_from_dict(self):
        hits = {"hits": [{"_id": "1", "_source": {"tags": ["x"]}}]}
        decoded = results.format_search(hits, model=Tagged)
        self.assertEqual(decoded[0].tags, ["x"])

    def test_undecodable_hit_skipped(self):
        """A hit that does not fit the model is left out."""
        hits = {"hits": [
            {"_id": "1", "_source": {"title": "A"}},
            {"_id": "2", "_source": {"unexpected": True}},
            {"_id": "3"},
        ]}
        self.assertEqual(results.format_search(hits, model=Article),
                         [Article("A")])

    def test_post_processor(self):
        """Items for which the post processor returns False are dropped."""
        hits = {"hits": [
            {"_id": "1", "_source": {"title": "A", "views": 1}},
            {"_id": "2", "_source": {"title": "B", "views": 5}},
        ]}
        popular = results.format_search(
            hits, lambda article: article.views > 2, Article,
        )
        self.assertEqual(popular, [Article("B", 5)])
