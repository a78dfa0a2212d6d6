"""
Full-text queries: ``match`` and friends, query strings, more-like-this.

The ``*Options`` dataclasses carry the optional settings of the
corresponding ``*_with_options`` constructors. Only the fields that are set
(not ``None``) are copied onto the query.
"""

from dataclasses import dataclass, fields as dataclass_fields
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from esb.types import (
    MatchPhraseQuery,
    MatchQuery,
    MultiMatchQuery,
    Operator,
    Query,
    TextQueryType,
    ZeroTermsQuery,
)
from esb.query.base import QueryOption, field_map, wire_value

__all__ = [
    "MatchOptions",
    "MatchPhraseOptions",
    "MultiMatchOptions",
    "match",
    "match_with_options",
    "match_phrase",
    "match_phrase_with_options",
    "match_phrase_prefix",
    "multi_match",
    "multi_match_with_options",
    "multi_match_best_fields",
    "multi_match_most_fields",
    "multi_match_cross_fields",
    "multi_match_phrase",
    "multi_match_phrase_prefix",
    "query_string",
    "query_string_with_options",
    "simple_query_string",
    "simple_query_string_with_options",
    "more_like_this",
    "more_like_this_with_options",
    "more_like_this_with_document",
    "more_like_this_with_multiple_likes",
    "more_like_this_with_unlike",
]

Like = Union[str, Dict[str, Any]]
"""Free text, or a reference to / literal of a document."""


def _set_fields(target: Dict[str, Any], options: Any) -> None:
    """Copy every option that is not ``None`` onto ``target``."""
    for option in dataclass_fields(options):
        value = getattr(options, option.name)
        if value is None:
            continue
        key = "_name" if option.name == "query_name" else option.name
        target[key] = wire_value(value)


@dataclass
class MatchOptions:
    """Optional settings for :func:`match_with_options`."""

    operator: Optional[Operator] = None
    minimum_should_match: Optional[Union[int, str]] = None
    fuzziness: Optional[Union[int, str]] = None
    fuzzy_transpositions: Optional[bool] = None
    fuzzy_rewrite: Optional[str] = None
    lenient: Optional[bool] = None
    analyzer: Optional[str] = None
    auto_generate_synonyms_phrase_query: Optional[bool] = None
    boost: Optional[float] = None
    cutoff_frequency: Optional[float] = None
    max_expansions: Optional[int] = None
    prefix_length: Optional[int] = None
    zero_terms_query: Optional[ZeroTermsQuery] = None


@dataclass
class MatchPhraseOptions:
    """Optional settings for :func:`match_phrase_with_options`."""

    slop: Optional[int] = None
    analyzer: Optional[str] = None
    boost: Optional[float] = None


@dataclass
class MultiMatchOptions:
    """Optional settings for :func:`multi_match_with_options`."""

    analyzer: Optional[str] = None
    auto_generate_synonyms_phrase_query: Optional[bool] = None
    boost: Optional[float] = None
    cutoff_frequency: Optional[float] = None
    fuzziness: Optional[Union[int, str]] = None
    fuzzy_rewrite: Optional[str] = None
    fuzzy_transpositions: Optional[bool] = None
    lenient: Optional[bool] = None
    max_expansions: Optional[int] = None
    minimum_should_match: Optional[Union[int, str]] = None
    operator: Optional[Operator] = None
    prefix_length: Optional[int] = None
    query_name: Optional[str] = None
    slop: Optional[int] = None
    tie_breaker: Optional[float] = None
    type: Optional[TextQueryType] = None
    zero_terms_query: Optional[ZeroTermsQuery] = None


def match(field: str, query: str) -> QueryOption:
    """Analyze ``query`` and match it against ``field``."""
    return match_with_options(field, query, MatchOptions())


def match_with_options(field: str, query: str, options: MatchOptions
                       ) -> QueryOption:
    """
    Match query with advanced settings.

    .. code-block:: python

       match_with_options("title", "elasticsearch search", MatchOptions(
           operator=Operator.AND,
           fuzziness="AUTO",
           minimum_should_match="75%",
       ))

    """
    def _apply(target: Query) -> None:
        match_query: MatchQuery = {"query": query}
        _set_fields(match_query, options)  # type: ignore
        field_map(target, "match")[field] = match_query
    return _apply


def match_phrase(field: str, phrase: str) -> QueryOption:
    """Match ``phrase`` as a whole, in order."""
    return match_phrase_with_options(field, phrase, MatchPhraseOptions())


def match_phrase_with_options(field: str, phrase: str,
                              options: MatchPhraseOptions) -> QueryOption:
    """Phrase match with ``slop``, ``analyzer`` and/or ``boost``."""
    def _apply(target: Query) -> None:
        phrase_query: MatchPhraseQuery = {"query": phrase}
        _set_fields(phrase_query, options)  # type: ignore
        field_map(target, "match_phrase")[field] = phrase_query
    return _apply


def match_phrase_prefix(field: str, prefix: str) -> QueryOption:
    """
    Like :func:`match_phrase`, but the last term is a prefix.

    Useful for search-as-you-type.
    """
    def _apply(target: Query) -> None:
        field_map(target, "match_phrase_prefix")[field] = {"query": prefix}
    return _apply


def multi_match(query: str, *fields: str) -> QueryOption:
    """Run a match query against several fields."""
    return multi_match_with_options(query, fields, MultiMatchOptions())


def multi_match_with_options(query: str, fields: Iterable[str],
                             options: MultiMatchOptions) -> QueryOption:
    """Multi-match query with advanced settings."""
    field_list = list(fields)

    def _apply(target: Query) -> None:
        multi_match_query: MultiMatchQuery = {
            "query": query,
            "fields": list(field_list),
        }
        _set_fields(multi_match_query, options)  # type: ignore
        target["multi_match"] = multi_match_query
    return _apply


def multi_match_best_fields(query: str, *fields: str) -> QueryOption:
    """Score by the single best-matching field."""
    return multi_match_with_options(
        query, fields, MultiMatchOptions(type=TextQueryType.BEST_FIELDS)
    )


def multi_match_most_fields(query: str, *fields: str) -> QueryOption:
    """Combine the scores of every matching field."""
    return multi_match_with_options(
        query, fields, MultiMatchOptions(type=TextQueryType.MOST_FIELDS)
    )


def multi_match_cross_fields(query: str, *fields: str) -> QueryOption:
    """Treat the fields as one big field."""
    return multi_match_with_options(
        query, fields, MultiMatchOptions(type=TextQueryType.CROSS_FIELDS)
    )


def multi_match_phrase(query: str, *fields: str) -> QueryOption:
    """Run :func:`match_phrase` on every field."""
    return multi_match_with_options(
        query, fields, MultiMatchOptions(type=TextQueryType.PHRASE)
    )


def multi_match_phrase_prefix(query: str, *fields: str) -> QueryOption:
    """Run :func:`match_phrase_prefix` on every field."""
    return multi_match_with_options(
        query, fields, MultiMatchOptions(type=TextQueryType.PHRASE_PREFIX)
    )


def query_string(query: str) -> QueryOption:
    """Parse ``query`` with the Lucene query-string syntax."""
    return query_string_with_options(query, None)


def query_string_with_options(
        query: str, set_opts: Optional[Callable[[Dict[str, Any]], None]]
        ) -> QueryOption:
    """
    Query-string query with access to ``fields``, ``default_operator``, etc.

    .. code-block:: python

       query_string_with_options(
           "title:(quick OR brown)",
           lambda opts: opts.update(default_operator="AND",
                                    allow_leading_wildcard=False),
       )

    """
    def _apply(target: Query) -> None:
        query_string_query: Dict[str, Any] = {"query": query}
        if set_opts is not None:
            set_opts(query_string_query)
        target["query_string"] = query_string_query
    return _apply


def simple_query_string(query: str) -> QueryOption:
    """Like :func:`query_string`, but never raises on invalid syntax."""
    return simple_query_string_with_options(query, None)


def simple_query_string_with_options(
        query: str, set_opts: Optional[Callable[[Dict[str, Any]], None]]
        ) -> QueryOption:
    """Simple query-string query with access to advanced options."""
    def _apply(target: Query) -> None:
        simple_query: Dict[str, Any] = {"query": query}
        if set_opts is not None:
            set_opts(simple_query)
        target["simple_query_string"] = simple_query
    return _apply


def _more_like_this(fields: Iterable[str], likes: List[Like],
                    unlikes: Optional[List[Like]] = None,
                    set_opts: Optional[Callable[[Dict[str, Any]], None]] = None
                    ) -> QueryOption:
    field_list = list(fields)

    def _apply(target: Query) -> None:
        mlt_query: Dict[str, Any] = {"fields": list(field_list),
                                     "like": list(likes)}
        if unlikes is not None:
            mlt_query["unlike"] = list(unlikes)
        if set_opts is not None:
            set_opts(mlt_query)
        target["more_like_this"] = mlt_query
    return _apply


def more_like_this(fields: Iterable[str], like_text: str) -> QueryOption:
    """Find documents similar to ``like_text``."""
    return _more_like_this(fields, [like_text])


def more_like_this_with_options(
        fields: Iterable[str], like_text: str,
        set_opts: Optional[Callable[[Dict[str, Any]], None]]) -> QueryOption:
    """More-like-this with access to ``min_term_freq``, ``max_query_terms``..."""
    return _more_like_this(fields, [like_text], set_opts=set_opts)


def more_like_this_with_document(fields: Iterable[str], index: str,
                                 id: str) -> QueryOption:
    """Find documents similar to the stored document ``index``/``id``."""
    return _more_like_this(fields, [{"_index": index, "_id": id}])


def more_like_this_with_multiple_likes(fields: Iterable[str],
                                       likes: Iterable[Like]) -> QueryOption:
    """Find documents similar to a mix of texts and documents."""
    return _more_like_this(fields, list(likes))


def more_like_this_with_unlike(fields: Iterable[str], like_text: str,
                               unlike_text: str) -> QueryOption:
    """Find documents similar to ``like_text`` but not to ``unlike_text``."""
    return _more_like_this(fields, [like_text], [unlike_text])
