"""
Shapes of the request structures populated by the builders.

These describe the JSON bodies understood by Elasticsearch (and parsed by
:func:`elasticsearch_dsl.Q` / :func:`elasticsearch_dsl.A`). They have been
written as TypedDicts rather than classes so that a built target can be handed
to the client without any conversion step.
"""

from enum import Enum
from typing import Any, Callable, Dict, List, TypedDict, Union


class Operator(str, Enum):
    """Boolean operator for full-text queries."""

    AND = "and"
    OR = "or"


class TextQueryType(str, Enum):
    """How a ``multi_match`` query is executed."""

    BEST_FIELDS = "best_fields"
    MOST_FIELDS = "most_fields"
    CROSS_FIELDS = "cross_fields"
    PHRASE = "phrase"
    PHRASE_PREFIX = "phrase_prefix"
    BOOL_PREFIX = "bool_prefix"


class ZeroTermsQuery(str, Enum):
    """What to return when the analyzer removes every token."""

    ALL = "all"
    NONE = "none"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class GeoShapeRelation(str, Enum):
    """Spatial relation for shape and geo-shape queries."""

    INTERSECTS = "intersects"
    DISJOINT = "disjoint"
    WITHIN = "within"
    CONTAINS = "contains"


class RangeRelation(str, Enum):
    """How range queries match range fields."""

    WITHIN = "within"
    CONTAINS = "contains"
    INTERSECTS = "intersects"


class ScriptLanguage(str, Enum):
    """Scripting languages."""

    PAINLESS = "painless"
    EXPRESSION = "expression"
    MUSTACHE = "mustache"
    JAVA = "java"


class CalendarInterval(str, Enum):
    """Calendar-aware intervals for date histograms."""

    MINUTE = "1m"
    HOUR = "1h"
    DAY = "1d"
    WEEK = "1w"
    MONTH = "1M"
    QUARTER = "1q"
    YEAR = "1y"


class Conflicts(str, Enum):
    """Behavior of delete-by-query on version conflicts."""

    ABORT = "abort"
    PROCEED = "proceed"


FieldValue = Union[str, int, float, bool, None]
"""A single value that may be compared against a document field."""


class BoolQuery(TypedDict, total=False):
    """A compound query built from must/should/filter/must_not clauses."""

    must: List["Query"]
    should: List["Query"]
    filter: List["Query"]
    must_not: List["Query"]
    minimum_should_match: Union[int, str]
    boost: float
    _name: str


class NestedQuery(TypedDict, total=False):
    """Query against nested objects under ``path``."""

    path: str
    query: "Query"
    score_mode: str
    ignore_unmapped: bool
    inner_hits: Dict[str, Any]
    boost: float
    _name: str


class DisMaxQuery(TypedDict, total=False):
    """Best-scoring of several queries."""

    queries: List["Query"]
    tie_breaker: float
    boost: float
    _name: str


class BoostingQuery(TypedDict, total=False):
    """Demote documents matching ``negative``."""

    positive: "Query"
    negative: "Query"
    negative_boost: float
    boost: float
    _name: str


class ConstantScoreQuery(TypedDict, total=False):
    """Wrap a filter and give every hit the same score."""

    filter: "Query"
    boost: float
    _name: str


# ``from`` is a keyword, so this one uses the functional syntax.
RangeQuery = TypedDict(
    "RangeQuery",
    {
        "gt": Any,
        "gte": Any,
        "lt": Any,
        "lte": Any,
        "from": Any,
        "to": Any,
        "format": str,
        "time_zone": str,
        "boost": float,
        "relation": str,
        "_name": str,
    },
    total=False,
)


class MatchQuery(TypedDict, total=False):
    """Full-text match against a single field."""

    query: Any
    operator: str
    minimum_should_match: Union[int, str]
    fuzziness: Union[int, str]
    fuzzy_transpositions: bool
    fuzzy_rewrite: str
    lenient: bool
    analyzer: str
    auto_generate_synonyms_phrase_query: bool
    boost: float
    cutoff_frequency: float
    max_expansions: int
    prefix_length: int
    zero_terms_query: str
    _name: str


class MatchPhraseQuery(TypedDict, total=False):
    """Phrase match against a single field."""

    query: str
    slop: int
    analyzer: str
    boost: float
    zero_terms_query: str
    _name: str


class MultiMatchQuery(TypedDict, total=False):
    """Full-text match against several fields."""

    query: str
    fields: List[str]
    type: str
    analyzer: str
    auto_generate_synonyms_phrase_query: bool
    boost: float
    cutoff_frequency: float
    fuzziness: Union[int, str]
    fuzzy_rewrite: str
    fuzzy_transpositions: bool
    lenient: bool
    max_expansions: int
    minimum_should_match: Union[int, str]
    operator: str
    prefix_length: int
    slop: int
    tie_breaker: float
    zero_terms_query: str
    _name: str


class Query(TypedDict, total=False):
    """
    A single search predicate.

    Normally exactly one key is set; composite kinds hold further
    :class:`.Query` values.
    """

    bool: BoolQuery
    boosting: BoostingQuery
    constant_score: ConstantScoreQuery
    dis_max: DisMaxQuery
    exists: Dict[str, Any]
    fuzzy: Dict[str, Dict[str, Any]]
    geo_bounding_box: Dict[str, Any]
    geo_distance: Dict[str, Any]
    geo_polygon: Dict[str, Any]
    geo_shape: Dict[str, Any]
    ids: Dict[str, Any]
    match: Dict[str, MatchQuery]
    match_all: Dict[str, Any]
    match_none: Dict[str, Any]
    match_phrase: Dict[str, MatchPhraseQuery]
    match_phrase_prefix: Dict[str, Dict[str, Any]]
    more_like_this: Dict[str, Any]
    multi_match: MultiMatchQuery
    nested: NestedQuery
    prefix: Dict[str, Dict[str, Any]]
    query_string: Dict[str, Any]
    range: Dict[str, RangeQuery]
    regexp: Dict[str, Dict[str, Any]]
    script: Dict[str, Any]
    shape: Dict[str, Any]
    simple_query_string: Dict[str, Any]
    term: Dict[str, Dict[str, Any]]
    terms: Dict[str, Any]
    terms_set: Dict[str, Dict[str, Any]]
    wildcard: Dict[str, Dict[str, Any]]


Aggregation = Dict[str, Any]
"""
One aggregation definition: ``{<kind>: {...}}``, plus ``aggs`` when it has
children.
"""


class AggregationContainer(TypedDict, total=False):
    """Anything that can hold named (sub-)aggregations."""

    aggs: Dict[str, Aggregation]


SortOptions = Dict[str, Dict[str, Any]]
"""A single sort clause, e.g. ``{"price": {"order": "asc"}}``."""


class MultisearchHeader(TypedDict, total=False):
    """The header line of one multi-search item."""

    index: List[str]
    routing: str
    preference: str
    search_type: str


class MultisearchBody(TypedDict, total=False):
    """The body line of one multi-search item."""

    query: Query
    size: int
    track_total_hits: Union[bool, int]
    _source: Dict[str, List[str]]
    sort: List[SortOptions]
    aggs: Dict[str, Aggregation]


Setter = Callable[[Dict[str, Any]], None]
"""Callback given direct access to a query's advanced options."""
