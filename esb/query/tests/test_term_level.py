"""Tests for :mod:`esb.query.term_level`."""

from unittest import TestCase

from esb.query.base import new_query
from esb.query import term_level


class TestTerm(TestCase):
    """Tests for :func:`.term_level.term`."""

    def test_term(self):
        query = new_query(term_level.term("status", "published"))
        self.assertEqual(query, {"term": {"status": {"value": "published"}}})

    def test_value_types_are_kept(self):
        """Numbers and booleans are not turned into strings."""
        query = new_query(term_level.term("age", 30),
                          term_level.term("active", True))
        self.assertEqual(query["term"]["age"], {"value": 30})
        self.assertIs(query["term"]["active"]["value"], True)

    def test_terms_merge(self):
        """Term options on different fields share the per-field map."""
        query = new_query(term_level.term("a", 1), term_level.term("b", 2))
        self.assertEqual(query["term"], {"a": {"value": 1}, "b": {"value": 2}})

    def test_empty_field_is_allowed(self):
        """No validation happens here."""
        query = new_query(term_level.term("", ""))
        self.assertEqual(query, {"term": {"": {"value": ""}}})

    def test_with_options(self):
        query = new_query(term_level.term_with_options(
            "email", "A@B.C",
            lambda opts: opts.update(case_insensitive=True),
        ))
        self.assertEqual(query, {
            "term": {"email": {"value": "A@B.C", "case_insensitive": True}}
        })


class TestTerms(TestCase):
    """Tests for :func:`.term_level.terms` and terms_set."""

    def test_terms(self):
        query = new_query(term_level.terms("tag", "python", "go"))
        self.assertEqual(query, {"terms": {"tag": ["python", "go"]}})

    def test_terms_no_values(self):
        self.assertEqual(new_query(term_level.terms("tag")),
                         {"terms": {"tag": []}})

    def test_terms_set(self):
        query = new_query(term_level.terms_set("tags", ["a", "b"]))
        self.assertEqual(query, {"terms_set": {"tags": {"terms": ["a", "b"]}}})

    def test_terms_set_with_options(self):
        query = new_query(term_level.terms_set_with_options(
            "tags", ["a", "b"],
            lambda opts: opts.update(minimum_should_match_field="required"),
        ))
        self.assertEqual(
            query["terms_set"]["tags"]["minimum_should_match_field"],
            "required",
        )


class TestExistsAndIDs(TestCase):
    """Tests for exists and the ids constructors."""

    def test_exists(self):
        self.assertEqual(new_query(term_level.exists("title")),
                         {"exists": {"field": "title"}})

    def test_ids(self):
        self.assertEqual(new_query(term_level.ids("1", "2")),
                         {"ids": {"values": ["1", "2"]}})

    def test_ids_from_list(self):
        self.assertEqual(new_query(term_level.ids_from_list(["1", "2"])),
                         {"ids": {"values": ["1", "2"]}})

    def test_ids_with_options(self):
        options = term_level.IDsOptions(boost=2.0, query_name="by_id")
        query = new_query(term_level.ids_with_options(["1"], options))
        self.assertEqual(query, {
            "ids": {"values": ["1"], "boost": 2.0, "_name": "by_id"}
        })

    def test_ids_with_empty_options(self):
        query = new_query(term_level.ids_with_options(
            ["1"], term_level.IDsOptions()
        ))
        self.assertEqual(query, {"ids": {"values": ["1"]}})


class TestSingleField(TestCase):
    """Tests for prefix, wildcard, regexp and fuzzy."""

    def test_prefix(self):
        self.assertEqual(new_query(term_level.prefix("name", "jo")),
                         {"prefix": {"name": {"value": "jo"}}})

    def test_prefix_with_options(self):
        query = new_query(term_level.prefix_with_options(
            "name", "jo", lambda opts: opts.update(case_insensitive=True),
        ))
        self.assertEqual(query, {
            "prefix": {"name": {"value": "jo", "case_insensitive": True}}
        })

    def test_wildcard(self):
        self.assertEqual(new_query(term_level.wildcard("name", "j*n")),
                         {"wildcard": {"name": {"value": "j*n"}}})

    def test_wildcard_with_options(self):
        query = new_query(term_level.wildcard_with_options(
            "name", "j*n", lambda opts: opts.update(boost=2.0),
        ))
        self.assertEqual(query["wildcard"]["name"]["boost"], 2.0)

    def test_fuzzy(self):
        self.assertEqual(new_query(term_level.fuzzy("name", "jon")),
                         {"fuzzy": {"name": {"value": "jon"}}})

    def test_fuzzy_with_options(self):
        query = new_query(term_level.fuzzy_with_options(
            "name", "jon", lambda opts: opts.update(fuzziness="AUTO"),
        ))
        self.assertEqual(query["fuzzy"]["name"]["fuzziness"], "AUTO")

    def test_prefix_replaces(self):
        """A second prefix option replaces the first."""
        query = new_query(term_level.prefix("a", "x"),
                          term_level.prefix("b", "y"))
        self.assertEqual(query, {"prefix": {"b": {"value": "y"}}})

    def test_regexp_merges(self):
        """Regexp options on different fields accumulate."""
        query = new_query(term_level.regexp("a", "x.*"),
                          term_level.regexp("b", "y.*"))
        self.assertEqual(query, {
            "regexp": {"a": {"value": "x.*"}, "b": {"value": "y.*"}}
        })

    def test_regexp_with_options(self):
        query = new_query(term_level.regexp_with_options(
            "a", "x.*", lambda opts: opts.update(flags="ALL"),
        ))
        self.assertEqual(query["regexp"]["a"], {"value": "x.*", "flags": "ALL"})
