"""
Composable query constructors.

Every constructor here returns a :data:`.QueryOption`; pass options to
:func:`.new_query` (or nest them inside compound constructors) to get a
:class:`esb.types.Query` that can be sent to Elasticsearch as-is.
"""

__all__ = [
    # base
    "QueryOption",
    "QueryBuilder",
    "new_query",
    "to_dsl",
    # compound
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
    # term level
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
    # full text
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
    # range
    "RangeBuilder",
    "range_",
    "number_range",
    "date_range",
    "term_range",
    # geo
    "geo_bounding_box",
    "geo_distance",
    "geo_polygon",
    "geo_shape",
    "shape",
    "shape_with_relation",
    "shape_with_indexed_shape",
    "shape_with_options",
    # specialized
    "script",
    "script_with_params",
    "script_with_lang",
    "script_with_options",
    "match_all",
    "match_all_with_options",
    "match_none",
    "match_none_with_options",
]

from esb.query.base import QueryBuilder, QueryOption, new_query, to_dsl
from esb.query.compound import (
    BoolOption,
    bool_,
    must,
    should,
    filter_,
    must_not,
    minimum_should_match,
    bool_boost,
    nested,
    nested_with_options,
    dis_max,
    dis_max_with_options,
    boosting,
    boosting_with_options,
    constant_score,
    constant_score_with_options,
)
from esb.query.term_level import (
    term,
    term_with_options,
    terms,
    terms_set,
    terms_set_with_options,
    exists,
    IDsOptions,
    ids,
    ids_from_list,
    ids_with_options,
    prefix,
    prefix_with_options,
    wildcard,
    wildcard_with_options,
    regexp,
    regexp_with_options,
    fuzzy,
    fuzzy_with_options,
)
from esb.query.full_text import (
    MatchOptions,
    MatchPhraseOptions,
    MultiMatchOptions,
    match,
    match_with_options,
    match_phrase,
    match_phrase_with_options,
    match_phrase_prefix,
    multi_match,
    multi_match_with_options,
    multi_match_best_fields,
    multi_match_most_fields,
    multi_match_cross_fields,
    multi_match_phrase,
    multi_match_phrase_prefix,
    query_string,
    query_string_with_options,
    simple_query_string,
    simple_query_string_with_options,
    more_like_this,
    more_like_this_with_options,
    more_like_this_with_document,
    more_like_this_with_multiple_likes,
    more_like_this_with_unlike,
)
from esb.query.range import (
    RangeBuilder,
    range_,
    number_range,
    date_range,
    term_range,
)
from esb.query.geo import (
    geo_bounding_box,
    geo_distance,
    geo_polygon,
    geo_shape,
    shape,
    shape_with_relation,
    shape_with_indexed_shape,
    shape_with_options,
)
from esb.query.specialized import (
    script,
    script_with_params,
    script_with_lang,
    script_with_options,
    match_all,
    match_all_with_options,
    match_none,
    match_none_with_options,
)
