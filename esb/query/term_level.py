"""
Term-level queries: exact matching on structured values.

None of these constructors check their arguments; an empty field or value is
passed through to Elasticsearch as-is.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional

from esb.types import FieldValue, Query
from esb.query.base import QueryOption, field_map

__all__ = [
    "term",
    "term_with_options",
    "terms",
    "terms_set",
    "terms_set_with_options",
    "exists",
    "IDsOptions",
    "ids",
    "ids_from_list",
    "ids_with_options",
    "prefix",
    "prefix_with_options",
    "wildcard",
    "wildcard_with_options",
    "regexp",
    "regexp_with_options",
    "fuzzy",
    "fuzzy_with_options",
]

FieldSetter = Optional[Callable[[Dict[str, Any]], None]]


def term(field: str, value: FieldValue) -> QueryOption:
    """
    Match documents whose ``field`` contains exactly ``value``.

    Applying several term options to the same query adds one entry per field.
    """
    return term_with_options(field, value, None)


def term_with_options(field: str, value: FieldValue, set_opts: FieldSetter
                      ) -> QueryOption:
    """Term query with access to e.g. ``case_insensitive`` or ``boost``."""
    def _apply(query: Query) -> None:
        field_query: Dict[str, Any] = {"value": value}
        if set_opts is not None:
            set_opts(field_query)
        field_map(query, "term")[field] = field_query
    return _apply


def terms(field: str, *values: FieldValue) -> QueryOption:
    """Match documents whose ``field`` contains any of ``values``."""
    def _apply(query: Query) -> None:
        query["terms"] = {field: list(values)}
    return _apply


def terms_set(field: str, values: Iterable[str]) -> QueryOption:
    """Match documents containing a minimum number of ``values``."""
    return terms_set_with_options(field, values, None)


def terms_set_with_options(field: str, values: Iterable[str],
                           set_opts: FieldSetter) -> QueryOption:
    """
    Terms set query with access to the minimum-should-match settings.

    .. code-block:: python

       terms_set_with_options(
           "tags", ["python", "search"],
           lambda opts: opts.update(minimum_should_match_field="required"),
       )

    """
    term_list = list(values)

    def _apply(query: Query) -> None:
        field_query: Dict[str, Any] = {"terms": list(term_list)}
        if set_opts is not None:
            set_opts(field_query)
        query["terms_set"] = {field: field_query}
    return _apply


def exists(field: str) -> QueryOption:
    """Match documents that have an indexed value for ``field``."""
    def _apply(query: Query) -> None:
        query["exists"] = {"field": field}
    return _apply


@dataclass
class IDsOptions:
    """Optional settings for :func:`ids_with_options`."""

    boost: Optional[float] = None
    query_name: Optional[str] = None


def ids(*values: str) -> QueryOption:
    """Match documents by their ``_id``."""
    return ids_from_list(values)


def ids_from_list(values: Iterable[str]) -> QueryOption:
    """Like :func:`ids`, for when the identifiers are already in a list."""
    id_list = list(values)

    def _apply(query: Query) -> None:
        query["ids"] = {"values": list(id_list)}
    return _apply


def ids_with_options(values: Iterable[str], options: IDsOptions
                     ) -> QueryOption:
    """Match documents by ``_id``, with a boost and/or query name."""
    id_list = list(values)

    def _apply(query: Query) -> None:
        ids_query: Dict[str, Any] = {"values": list(id_list)}
        if options.boost is not None:
            ids_query["boost"] = options.boost
        if options.query_name is not None:
            ids_query["_name"] = options.query_name
        query["ids"] = ids_query
    return _apply


def _single_field(kind: str, field: str, value: Any,
                  set_opts: FieldSetter) -> QueryOption:
    def _apply(query: Query) -> None:
        field_query: Dict[str, Any] = {"value": value}
        if set_opts is not None:
            set_opts(field_query)
        query[kind] = {field: field_query}  # type: ignore
    return _apply


def prefix(field: str, value: str) -> QueryOption:
    """Match documents whose ``field`` starts with ``value``."""
    return _single_field("prefix", field, value, None)


def prefix_with_options(field: str, value: str, set_opts: FieldSetter
                        ) -> QueryOption:
    """Prefix query with access to e.g. ``case_insensitive`` or ``rewrite``."""
    return _single_field("prefix", field, value, set_opts)


def wildcard(field: str, value: str) -> QueryOption:
    """Match ``field`` against a pattern using ``*`` and ``?``."""
    return _single_field("wildcard", field, value, None)


def wildcard_with_options(field: str, value: str, set_opts: FieldSetter
                          ) -> QueryOption:
    """Wildcard query with access to advanced options."""
    return _single_field("wildcard", field, value, set_opts)


def regexp(field: str, value: str) -> QueryOption:
    """
    Match ``field`` against a regular expression.

    Unlike the other single-field queries, several regexp options on the same
    query accumulate, one entry per field.
    """
    return regexp_with_options(field, value, None)


def regexp_with_options(field: str, value: str, set_opts: FieldSetter
                        ) -> QueryOption:
    """Regexp query with access to e.g. ``flags`` or ``max_determinized_states``."""
    def _apply(query: Query) -> None:
        field_query: Dict[str, Any] = {"value": value}
        if set_opts is not None:
            set_opts(field_query)
        field_map(query, "regexp")[field] = field_query
    return _apply


def fuzzy(field: str, value: str) -> QueryOption:
    """Match terms similar to ``value``, by edit distance."""
    return _single_field("fuzzy", field, value, None)


def fuzzy_with_options(field: str, value: str, set_opts: FieldSetter
                       ) -> QueryOption:
    """Fuzzy query with access to ``fuzziness``, ``prefix_length``, etc."""
    return _single_field("fuzzy", field, value, set_opts)
