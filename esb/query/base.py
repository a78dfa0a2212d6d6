"""
The option pipeline.

A :data:`QueryOption` is a pending change to a :class:`.Query`. Constructors
throughout :mod:`esb.query` return options; :func:`new_query` allocates an
empty query and applies them in order.

.. code-block:: python

   query = new_query(
       bool_(
           must(term("status", "published"),
                range_("date").gte("2023-01-01").build()),
           filter_(term("category", "tech")),
       )
   )
   client.search(index="articles", query=query)

"""

from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional

from elasticsearch_dsl import Q
from elasticsearch_dsl.query import Query as DslQuery

from esb.types import Query

QueryOption = Callable[[Query], None]
"""A function that modifies a :class:`.Query` in place."""


def new_query(*options: Optional[QueryOption]) -> Query:
    """
    Create a query by applying ``options`` to an empty :class:`.Query`.

    Parameters
    ----------
    options : :data:`QueryOption`
        Applied in argument order. ``None`` is skipped.

    Returns
    -------
    :class:`.Query`
        With no options, an empty query (``{}``).

    """
    query: Query = {}
    for option in options:
        if option is not None:
            option(query)
    return query


def sub_queries(options: Iterable[Optional[QueryOption]]) -> List[Query]:
    """Build one fresh :class:`.Query` per non-None option, keeping order."""
    return [new_query(option) for option in options if option is not None]


def field_map(query: Query, kind: str) -> Dict[str, Any]:
    """Get the per-field map for ``kind``, creating it if necessary."""
    return query.setdefault(kind, {})  # type: ignore


def wire_value(value: Any) -> Any:
    """Unwrap enum members into the plain value sent over the wire."""
    return value.value if isinstance(value, Enum) else value


def to_dsl(query: Query) -> DslQuery:
    """
    Hand a built query to :mod:`elasticsearch_dsl`.

    An empty query becomes ``match_all``, which is what Elasticsearch does
    with a search that has no query.
    """
    if not query:
        return Q()
    return Q(dict(query))


class QueryBuilder:
    """
    Collects options one at a time, for callers that assemble them in loops.

    .. code-block:: python

       builder = QueryBuilder()
       for field, value in filters.items():
           builder.add(term(field, value))
       query = builder.build()

    """

    def __init__(self) -> None:
        self.options: List[QueryOption] = []

    def add(self, option: Optional[QueryOption]) -> "QueryBuilder":
        """Queue ``option``; ``None`` is ignored."""
        if option is not None:
            self.options.append(option)
        return self

    def build(self) -> Query:
        """Apply every queued option to a new :class:`.Query`."""
        return new_query(*self.options)
