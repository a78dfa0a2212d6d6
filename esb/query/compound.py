"""
Compound queries: ``bool``, ``nested``, ``dis_max``, ``boosting`` and
``constant_score``.

Each wraps one or more inner queries. Inner options are always applied to a
fresh, empty :class:`.Query` of their own, so sibling branches never share
state.
"""

from typing import Callable, Iterable, Optional, Union

from esb.types import (
    BoolQuery,
    BoostingQuery,
    ConstantScoreQuery,
    DisMaxQuery,
    NestedQuery,
    Query,
)
from esb.query.base import QueryOption, new_query, sub_queries

__all__ = [
    "BoolOption",
    "bool_",
    "must",
    "should",
    "filter_",
    "must_not",
    "minimum_should_match",
    "bool_boost",
    "nested",
    "nested_with_options",
    "dis_max",
    "dis_max_with_options",
    "boosting",
    "boosting_with_options",
    "constant_score",
    "constant_score_with_options",
]

BoolOption = Callable[[BoolQuery], None]
"""A function that modifies a :class:`.BoolQuery` in place."""


def bool_(*options: Optional[BoolOption]) -> QueryOption:
    """
    Combine queries with boolean logic.

    Parameters
    ----------
    options : :data:`BoolOption`
        Usually :func:`must`, :func:`should`, :func:`filter_` and
        :func:`must_not`.

    Returns
    -------
    :data:`.QueryOption`

    """
    def _apply(query: Query) -> None:
        bool_query: BoolQuery = {}
        for option in options:
            if option is not None:
                option(bool_query)
        query["bool"] = bool_query
    return _apply


def _clause(name: str, options: Iterable[Optional[QueryOption]]) -> BoolOption:
    queries = list(options)

    def _apply(bool_query: BoolQuery) -> None:
        for sub_query in sub_queries(queries):
            bool_query.setdefault(name, []).append(sub_query)  # type: ignore
    return _apply


def must(*options: Optional[QueryOption]) -> BoolOption:
    """Clauses that must all match, and contribute to the score."""
    return _clause("must", options)


def should(*options: Optional[QueryOption]) -> BoolOption:
    """Clauses of which at least one should match; more matches score higher."""
    return _clause("should", options)


def filter_(*options: Optional[QueryOption]) -> BoolOption:
    """Clauses that must all match, in filter context (no scoring)."""
    return _clause("filter", options)


def must_not(*options: Optional[QueryOption]) -> BoolOption:
    """Clauses that exclude any document they match."""
    return _clause("must_not", options)


def minimum_should_match(value: Union[int, str]) -> BoolOption:
    """Require ``value`` (a count or a percentage) of the should clauses."""
    def _apply(bool_query: BoolQuery) -> None:
        bool_query["minimum_should_match"] = value
    return _apply


def bool_boost(boost: float) -> BoolOption:
    """Set the boost of the whole bool query."""
    def _apply(bool_query: BoolQuery) -> None:
        bool_query["boost"] = boost
    return _apply


def nested(path: str, query: Optional[QueryOption]) -> QueryOption:
    """Query nested objects at ``path`` as if they were separate documents."""
    return nested_with_options(path, query, None)


def nested_with_options(path: str, query: Optional[QueryOption],
                        set_opts: Optional[Callable[[NestedQuery], None]]
                        ) -> QueryOption:
    """
    Nested query with access to advanced options.

    .. code-block:: python

       nested_with_options(
           "comments",
           term("comments.author", "alice"),
           lambda opts: opts.update(score_mode="max", ignore_unmapped=True),
       )

    """
    def _apply(target: Query) -> None:
        nested_query: NestedQuery = {"path": path, "query": new_query(query)}
        if set_opts is not None:
            set_opts(nested_query)
        target["nested"] = nested_query
    return _apply


def dis_max(*queries: Optional[QueryOption]) -> QueryOption:
    """Return documents matching any query, scored by the best match."""
    return dis_max_with_options(queries, None)


def dis_max_with_options(queries: Iterable[Optional[QueryOption]],
                         set_opts: Optional[Callable[[DisMaxQuery], None]]
                         ) -> QueryOption:
    """Disjunction max query with access to e.g. ``tie_breaker``."""
    options = list(queries)

    def _apply(target: Query) -> None:
        dis_max_query: DisMaxQuery = {"queries": sub_queries(options)}
        if set_opts is not None:
            set_opts(dis_max_query)
        target["dis_max"] = dis_max_query
    return _apply


def boosting(positive: Optional[QueryOption],
             negative: Optional[QueryOption],
             negative_boost: float) -> QueryOption:
    """
    Demote, rather than exclude, documents that match ``negative``.

    Parameters
    ----------
    positive : :data:`.QueryOption`
        Documents must match this query.
    negative : :data:`.QueryOption`
        Matching documents have their score multiplied by ``negative_boost``.
    negative_boost : float
        Between 0 and 1.

    """
    return boosting_with_options(positive, negative, negative_boost, None)


def boosting_with_options(positive: Optional[QueryOption],
                          negative: Optional[QueryOption],
                          negative_boost: float,
                          set_opts: Optional[Callable[[BoostingQuery], None]]
                          ) -> QueryOption:
    """Boosting query with access to advanced options."""
    def _apply(target: Query) -> None:
        boosting_query: BoostingQuery = {
            "positive": new_query(positive),
            "negative": new_query(negative),
            "negative_boost": negative_boost,
        }
        if set_opts is not None:
            set_opts(boosting_query)
        target["boosting"] = boosting_query
    return _apply


def constant_score(filter: Optional[QueryOption]) -> QueryOption:
    """Give every document matching ``filter`` the same score."""
    return constant_score_with_options(filter, None)


def constant_score_with_options(
        filter: Optional[QueryOption],
        set_opts: Optional[Callable[[ConstantScoreQuery], None]]
        ) -> QueryOption:
    """Constant score query with access to ``boost`` and ``_name``."""
    def _apply(target: Query) -> None:
        constant_score_query: ConstantScoreQuery = {
            "filter": new_query(filter)
        }
        if set_opts is not None:
            set_opts(constant_score_query)
        target["constant_score"] = constant_score_query
    return _apply

