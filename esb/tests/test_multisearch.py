"""Tests for :mod:`esb.multisearch`."""

from unittest import TestCase
from unittest.mock import MagicMock

from elasticsearch import ConnectionError as ESConnectionError

from esb import multisearch
from esb.exceptions import MultiSearchError
from esb.query import new_query, term
from esb.sort import sort_field_desc


def item(index=None, hits=1):
    """A successful response item whose hits come from ``index``."""
    return {
        "hits": {
            "total": {"value": hits, "relation": "eq"},
            "hits": [{"_index": index, "_id": str(i)} for i in range(hits)],
        }
    }


class TestAliasProcessor(TestCase):
    """Tests for :func:`.multisearch.default_alias_processor`."""

    def test_dated_index(self):
        process = multisearch.default_alias_processor()
        self.assertEqual(process("prefix_table_20250808"), "prefix_table")

    def test_plain_index(self):
        process = multisearch.default_alias_processor()
        self.assertEqual(process("articles"), "articles")

    def test_only_last_suffix_removed(self):
        process = multisearch.default_alias_processor()
        self.assertEqual(process("logs_2024_20250808"), "logs_2024")


class TestPreProcessors(TestCase):
    """Tests for the pre-processors."""

    def setUp(self):
        self.header = {"index": ["articles"]}
        self.body = {"query": {}, "track_total_hits": True, "size": 1}

    def test_include_fields(self):
        multisearch.with_include_source_fields("a", "b")(self.header,
                                                         self.body)
        self.assertEqual(self.body["_source"], {"includes": ["a", "b"]})

    def test_exclude_fields(self):
        multisearch.with_exclude_source_fields("c")(self.header, self.body)
        self.assertEqual(self.body["_source"], {"excludes": ["c"]})

    def test_func(self):
        def route(header, body):
            header["routing"] = "user1"

        multisearch.with_func(route)(self.header, self.body)
        self.assertEqual(self.header["routing"], "user1")

    def test_sort(self):
        multisearch.with_sort(sort_field_desc("date"))(self.header, self.body)
        self.assertEqual(self.body["sort"], [{"date": {"order": "desc"}}])

    def test_size(self):
        multisearch.with_size(20, 40)(self.header, self.body)
        self.assertEqual(self.body["size"], 20)
        self.assertEqual(self.body["from"], 40)

    def test_size_not_positive(self):
        """Size is at least 1 and a zero offset is left out."""
        multisearch.with_size(0, 0)(self.header, self.body)
        self.assertEqual(self.body["size"], 1)
        self.assertNotIn("from", self.body)

    def test_size_10000(self):
        multisearch.with_size_10000()(self.header, self.body)
        self.assertEqual(self.body["size"], 10000)


class TestMultiSearch(TestCase):
    """Tests for :class:`.multisearch.MultiSearch`."""

    def setUp(self):
        self.client = MagicMock()
        self.msearch = multisearch.MultiSearch(self.client)

    def test_add_search(self):
        query = new_query(term("status", "published"))
        self.msearch.add_search("articles", query, MagicMock(), 0)
        self.assertEqual(self.msearch.searches, [
            {"index": ["articles"]},
            {"query": query, "track_total_hits": True, "size": 1},
        ])

    def test_pre_processors_applied(self):
        self.msearch.add_search(
            "articles", {}, MagicMock(), 5,
            multisearch.with_include_source_fields("title"),
            multisearch.with_size(10, 20),
        )
        body = self.msearch.searches[1]
        self.assertEqual(body["size"], 10)
        self.assertEqual(body["from"], 20)
        self.assertEqual(body["_source"], {"includes": ["title"]})

    def test_execute_dispatches_by_index(self):
        """Each item goes to the post processor of its (aliased) index."""
        on_articles = MagicMock()
        on_authors = MagicMock()
        articles = item("articles_20250808", hits=2)
        authors = item("authors", hits=1)
        self.client.msearch.return_value = {
            "responses": [articles, authors]
        }
        self.msearch.add_search("articles", {}, on_articles, 10)
        self.msearch.add_search("authors", {}, on_authors, 10)
        self.msearch.execute()

        self.client.msearch.assert_called_once_with(
            searches=self.msearch.searches
        )
        on_articles.assert_called_once_with(articles, 2, "articles")
        on_authors.assert_called_once_with(authors, 1, "authors")

    def test_empty_item_not_dispatched(self):
        """An item without hits has no index to route on."""
        on_articles = MagicMock()
        self.client.msearch.return_value = {"responses": [item(hits=0)]}
        self.msearch.add_search("articles", {}, on_articles)
        self.msearch.execute()
        on_articles.assert_not_called()

    def test_custom_alias_processor(self):
        on_articles = MagicMock()
        response = item("v2-articles")
        self.client.msearch.return_value = {"responses": [response]}
        self.msearch.add_search("articles", {}, on_articles)
        self.msearch.execute(lambda index: index.split("-", 1)[1])
        on_articles.assert_called_once_with(response, 1, "articles")

    def test_item_error(self):
        self.client.msearch.return_value = {"responses": [
            {"error": {"type": "index_not_found_exception",
                       "reason": "no such index [missing]"},
             "status": 404},
        ]}
        self.msearch.add_search("missing", {}, MagicMock())
        with self.assertRaises(MultiSearchError) as context:
            self.msearch.execute()
        self.assertIn("no such index", str(context.exception))

    def test_client_error_propagates(self):
        self.client.msearch.side_effect = ESConnectionError("down")
        self.msearch.add_search("articles", {}, MagicMock())
        with self.assertRaises(ESConnectionError):
            self.msearch.execute()
