"""
Builders for Elasticsearch query, aggregation and sort bodies.

Queries are assembled from small functions ("options") that each set one part
of the request body:

.. code-block:: python

   from esb.query import bool_, must, filter_, term, match, range_, new_query

   query = new_query(
       bool_(
           must(match("title", "elasticsearch")),
           filter_(term("status", "published"),
                   range_("date").gte("2023-01-01").build()),
       )
   )

The result is a plain dict in the shape Elasticsearch expects, ready for
``Elasticsearch.search(query=...)``. See :mod:`esb.query`,
:mod:`esb.aggregations` and :mod:`esb.sort` for the constructors, and
:mod:`esb.record` and :mod:`esb.multisearch` for helpers that talk to a
cluster.
"""

__all__ = [
    "new_query",
    "new_aggregations",
    "new_sort",
    "QueryBuilder",
    "EmptyFieldError",
    "DocumentNotFound",
    "MissingAliasError",
    "MultiSearchError",
    "is_not_found",
]

from esb.aggregations import new_aggregations
from esb.exceptions import (
    DocumentNotFound,
    EmptyFieldError,
    MissingAliasError,
    MultiSearchError,
    is_not_found,
)
from esb.query import QueryBuilder, new_query
from esb.sort import new_sort
