"""
Composable aggregation constructors.

An :data:`AggregationOption` registers one named aggregation on a container
(anything with an ``aggs`` mapping). Bucket aggregations accept further
options, which become their sub-aggregations in call order.

.. code-block:: python

   aggs = new_aggregations(
       terms_agg("categories", "category", avg_agg("avg_price", "price")),
       date_histogram_agg("per_month", "created", CalendarInterval.MONTH),
   )
   client.search(index="products", aggs=aggs, size=0)

The result is a plain ``{name: definition}`` dict; pass a definition to
:func:`elasticsearch_dsl.A` to get a typed aggregation object.
"""

from typing import (
    Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Union,
)

from esb.query.base import QueryOption, new_query, wire_value
from esb.types import Aggregation, AggregationContainer, CalendarInterval

__all__ = [
    "AggregationOption",
    "new_aggregations",
    "sub_agg",
    # Bucket
    "terms_agg",
    "terms_agg_with_options",
    "top_terms_agg",
    "date_histogram_agg",
    "date_histogram_agg_with_options",
    "daily_histogram_agg",
    "monthly_histogram_agg",
    "histogram_agg",
    "range_agg",
    "price_range_agg",
    "date_range_agg",
    "ip_range_agg",
    "filter_agg",
    "filters_agg",
    "nested_agg",
    "reverse_nested_agg",
    "global_agg",
    "missing_agg",
    "rare_terms_agg",
    "sampler_agg",
    "diversified_sampler_agg",
    "children_agg",
    "parent_agg",
    "auto_date_histogram_agg",
    "variable_width_histogram_agg",
    "composite_agg",
    "multi_terms_agg",
    "significant_terms_agg",
    "significant_text_agg",
    "geo_distance_agg",
    "geohash_grid_agg",
    "geotile_grid_agg",
    # Metric
    "avg_agg",
    "sum_agg",
    "max_agg",
    "min_agg",
    "stats_agg",
    "extended_stats_agg",
    "value_count_agg",
    "cardinality_agg",
    "percentiles_agg",
    "top_hits_agg",
    "geo_bounds_agg",
    "geo_centroid_agg",
    "weighted_avg_agg",
    "median_absolute_deviation_agg",
    "string_stats_agg",
    "t_test_agg",
    # Pipeline
    "avg_bucket_agg",
    "max_bucket_agg",
    "min_bucket_agg",
    "sum_bucket_agg",
    "stats_bucket_agg",
    "extended_stats_bucket_agg",
    "percentiles_bucket_agg",
    "moving_avg_agg",
    "derivative_agg",
    "cumulative_sum_agg",
]

AggregationOption = Callable[[AggregationContainer], None]
"""A function that registers an aggregation on a container."""

AggSetter = Optional[Callable[[Dict[str, Any]], None]]

AggRange = Dict[str, Any]
"""One bucket of a range-style aggregation: ``from``, ``to`` and/or ``key``."""


def new_aggregations(*options: Optional[AggregationOption]
                     ) -> Dict[str, Aggregation]:
    """
    Create an aggregation mapping by applying ``options`` in order.

    Returns
    -------
    dict
        Aggregation name to definition, suitable for the ``aggs`` parameter
        of a search request. Empty if no options are given.

    """
    container: AggregationContainer = {"aggs": {}}
    _apply_all(container, options)
    return container["aggs"]


def _apply_all(container: AggregationContainer,
               options: Iterable[Optional[AggregationOption]]) -> None:
    for option in options:
        if option is not None:
            option(container)


def _add_children(definition: Aggregation,
                  sub: Iterable[Optional[AggregationOption]]) -> None:
    """Apply ``sub`` under ``definition["aggs"]``; no children, no ``aggs``."""
    had_aggs = "aggs" in definition
    definition.setdefault("aggs", {})
    _apply_all(definition, sub)  # type: ignore
    if not had_aggs and not definition["aggs"]:
        del definition["aggs"]


def _aggregation(name: str, kind: str, body: Dict[str, Any],
                 sub: Sequence[Optional[AggregationOption]] = ()
                 ) -> AggregationOption:
    """Register ``{kind: body}`` under ``name``, with children if any."""
    def _apply(container: AggregationContainer) -> None:
        definition: Aggregation = {kind: dict(body)}
        _add_children(definition, sub)
        container.setdefault("aggs", {})[name] = definition
    return _apply


def _field(name: str, kind: str, field: str) -> AggregationOption:
    return _aggregation(name, kind, {"field": field})


def _buckets_path(name: str, kind: str, buckets_path: str
                  ) -> AggregationOption:
    return _aggregation(name, kind, {"buckets_path": buckets_path})


def sub_agg(parent_name: str, *sub: Optional[AggregationOption]
            ) -> AggregationOption:
    """
    Attach ``sub`` to the aggregation already registered as ``parent_name``.

    If there is no such aggregation yet, an empty definition is created to
    hold the children.
    """
    def _apply(container: AggregationContainer) -> None:
        aggs = container.setdefault("aggs", {})
        parent = aggs.setdefault(parent_name, {})
        _add_children(parent, sub)
    return _apply


# Bucket aggregations.

def terms_agg(name: str, field: str, *sub: Optional[AggregationOption]
              ) -> AggregationOption:
    """One bucket per distinct value of ``field``."""
    return terms_agg_with_options(name, field, None, *sub)


def terms_agg_with_options(name: str, field: str, set_opts: AggSetter,
                           *sub: Optional[AggregationOption]
                           ) -> AggregationOption:
    """
    Terms aggregation with access to ``size``, ``order``, etc.

    .. code-block:: python

       terms_agg_with_options(
           "top_categories", "category",
           lambda opts: opts.update(size=10),
           avg_agg("avg_price", "price"),
       )

    """
    def _apply(container: AggregationContainer) -> None:
        body: Dict[str, Any] = {"field": field}
        if set_opts is not None:
            set_opts(body)
        _aggregation(name, "terms", body, sub)(container)
    return _apply


def top_terms_agg(name: str, field: str, size: int,
                  *sub: Optional[AggregationOption]) -> AggregationOption:
    """The ``size`` most frequent values of ``field``."""
    return terms_agg_with_options(
        name, field, lambda opts: opts.update(size=size), *sub
    )


def date_histogram_agg(name: str, field: str,
                       interval: Union[CalendarInterval, str],
                       *sub: Optional[AggregationOption]) -> AggregationOption:
    """Bucket dates by a calendar interval such as ``1d`` or ``1M``."""
    return date_histogram_agg_with_options(name, field, interval, None, *sub)


def date_histogram_agg_with_options(name: str, field: str,
                                    interval: Union[CalendarInterval, str],
                                    set_opts: AggSetter,
                                    *sub: Optional[AggregationOption]
                                    ) -> AggregationOption:
    """Date histogram with access to ``format``, ``time_zone``, etc."""
    def _apply(container: AggregationContainer) -> None:
        body: Dict[str, Any] = {
            "field": field,
            "calendar_interval": wire_value(interval),
        }
        if set_opts is not None:
            set_opts(body)
        _aggregation(name, "date_histogram", body, sub)(container)
    return _apply


def daily_histogram_agg(name: str, field: str,
                        *sub: Optional[AggregationOption]
                        ) -> AggregationOption:
    return date_histogram_agg(name, field, CalendarInterval.DAY, *sub)


def monthly_histogram_agg(name: str, field: str,
                          *sub: Optional[AggregationOption]
                          ) -> AggregationOption:
    return date_histogram_agg(name, field, CalendarInterval.MONTH, *sub)


def histogram_agg(name: str, field: str, interval: float) -> AggregationOption:
    """Fixed-width numeric buckets."""
    return _aggregation(name, "histogram",
                        {"field": field, "interval": interval})


def range_agg(name: str, field: str, ranges: Iterable[AggRange]
              ) -> AggregationOption:
    """
    Numeric buckets with explicit bounds.

    .. code-block:: python

       range_agg("prices", "price", [
           {"to": 100}, {"from": 100, "to": 500}, {"from": 500},
       ])

    """
    return _aggregation(name, "range",
                        {"field": field, "ranges": [dict(r) for r in ranges]})


def price_range_agg(name: str, field: str, boundaries: Sequence[float]
                    ) -> AggregationOption:
    """
    Contiguous numeric buckets split at ``boundaries``.

    ``[0, 100, 500]`` gives ``< 0``, ``0..100``, ``100..500`` and ``>= 500``.
    No boundaries gives no buckets.
    """
    return range_agg(name, field, _split_at(boundaries))


def _split_at(boundaries: Sequence[float],
              keys: Sequence[str] = ()) -> List[AggRange]:
    if not boundaries:
        return []
    ranges: List[AggRange] = [{"to": boundaries[0]}]
    for lower, upper in zip(boundaries, boundaries[1:]):
        ranges.append({"from": lower, "to": upper})
    ranges.append({"from": boundaries[-1]})
    for bucket, key in zip(ranges, keys):
        bucket["key"] = key
    return ranges


def date_range_agg(name: str, field: str, ranges: Iterable[AggRange]
                   ) -> AggregationOption:
    """Date buckets; bounds may use date math such as ``now-1M/M``."""
    return _aggregation(name, "date_range",
                        {"field": field, "ranges": [dict(r) for r in ranges]})


def ip_range_agg(name: str, field: str, ranges: Iterable[AggRange]
                 ) -> AggregationOption:
    """IP address buckets; a range may also be given as a ``mask``."""
    return _aggregation(name, "ip_range",
                        {"field": field, "ranges": [dict(r) for r in ranges]})


def filter_agg(name: str, query: Optional[QueryOption]) -> AggregationOption:
    """Single bucket of the documents matching ``query``."""
    def _apply(container: AggregationContainer) -> None:
        container.setdefault("aggs", {})[name] = {"filter": new_query(query)}
    return _apply


def filters_agg(name: str, filters: Mapping[str, Optional[QueryOption]]
                ) -> AggregationOption:
    """One named bucket per query in ``filters``."""
    def _apply(container: AggregationContainer) -> None:
        named = {key: new_query(option) for key, option in filters.items()}
        _aggregation(name, "filters", {"filters": named})(container)
    return _apply


def nested_agg(name: str, path: str) -> AggregationOption:
    """Step into the nested objects at ``path``."""
    return _aggregation(name, "nested", {"path": path})


def reverse_nested_agg(name: str, path: Optional[str] = None
                       ) -> AggregationOption:
    """Step back out of a nested aggregation, to the root or to ``path``."""
    body: Dict[str, Any] = {} if path is None else {"path": path}
    return _aggregation(name, "reverse_nested", body)


def global_agg(name: str) -> AggregationOption:
    """Single bucket of every document, ignoring the search query."""
    return _aggregation(name, "global", {})


def missing_agg(name: str, field: str) -> AggregationOption:
    return _field(name, "missing", field)


def rare_terms_agg(name: str, field: str) -> AggregationOption:
    return _field(name, "rare_terms", field)


def sampler_agg(name: str, shard_size: int) -> AggregationOption:
    """Limit sub-aggregations to the top-scoring documents per shard."""
    return _aggregation(name, "sampler", {"shard_size": shard_size})


def diversified_sampler_agg(name: str, field: str, shard_size: int
                            ) -> AggregationOption:
    return _aggregation(name, "diversified_sampler",
                        {"field": field, "shard_size": shard_size})


def children_agg(name: str, child_type: str) -> AggregationOption:
    return _aggregation(name, "children", {"type": child_type})


def parent_agg(name: str, parent_type: str) -> AggregationOption:
    return _aggregation(name, "parent", {"type": parent_type})


def auto_date_histogram_agg(name: str, field: str, buckets: int
                            ) -> AggregationOption:
    """Date histogram that picks its own interval to hit ``buckets``."""
    return _aggregation(name, "auto_date_histogram",
                        {"field": field, "buckets": buckets})


def variable_width_histogram_agg(name: str, field: str, buckets: int
                                 ) -> AggregationOption:
    return _aggregation(name, "variable_width_histogram",
                        {"field": field, "buckets": buckets})


def composite_agg(name: str, sources: Iterable[Dict[str, Any]]
                  ) -> AggregationOption:
    """
    Paginate over combinations of values.

    .. code-block:: python

       composite_agg("by_category", [
           {"category": {"terms": {"field": "category"}}},
       ])

    """
    return _aggregation(name, "composite", {"sources": list(sources)})


def multi_terms_agg(name: str, terms: Iterable[Dict[str, Any]]
                    ) -> AggregationOption:
    """Buckets on combinations of several fields' values."""
    return _aggregation(name, "multi_terms", {"terms": list(terms)})


def significant_terms_agg(name: str, field: str) -> AggregationOption:
    return _field(name, "significant_terms", field)


def significant_text_agg(name: str, field: str) -> AggregationOption:
    return _field(name, "significant_text", field)


def geo_distance_agg(name: str, field: str, origin: str,
                     range_keys: Sequence[str], distances: Sequence[float]
                     ) -> AggregationOption:
    """
    Rings around ``origin`` (``"lat,lon"``) split at ``distances``.

    ``range_keys`` label the rings in order; extra keys are ignored and
    missing ones leave the ring unlabelled.

    .. code-block:: python

       geo_distance_agg("rings", "location", "40.7128,-74.0060",
                        ["near", "mid", "far"], [1000, 5000])

    """
    return _aggregation(name, "geo_distance", {
        "field": field,
        "origin": origin,
        "ranges": _split_at(distances, range_keys),
    })


def geohash_grid_agg(name: str, field: str, precision: int
                     ) -> AggregationOption:
    return _aggregation(name, "geohash_grid",
                        {"field": field, "precision": precision})


def geotile_grid_agg(name: str, field: str, precision: int
                     ) -> AggregationOption:
    return _aggregation(name, "geotile_grid",
                        {"field": field, "precision": precision})


# Metric aggregations.

def avg_agg(name: str, field: str) -> AggregationOption:
    return _field(name, "avg", field)


def sum_agg(name: str, field: str) -> AggregationOption:
    return _field(name, "sum", field)


def max_agg(name: str, field: str) -> AggregationOption:
    return _field(name, "max", field)


def min_agg(name: str, field: str) -> AggregationOption:
    return _field(name, "min", field)


def stats_agg(name: str, field: str) -> AggregationOption:
    """Count, min, max, avg and sum in one go."""
    return _field(name, "stats", field)


def extended_stats_agg(name: str, field: str) -> AggregationOption:
    return _field(name, "extended_stats", field)


def value_count_agg(name: str, field: str) -> AggregationOption:
    return _field(name, "value_count", field)


def cardinality_agg(name: str, field: str) -> AggregationOption:
    """Approximate count of distinct values."""
    return _field(name, "cardinality", field)


def percentiles_agg(name: str, field: str,
                    percents: Optional[Iterable[float]] = None
                    ) -> AggregationOption:
    """Percentiles of ``field``; the server defaults apply if none given."""
    body: Dict[str, Any] = {"field": field}
    if percents:
        body["percents"] = list(percents)
    return _aggregation(name, "percentiles", body)


def top_hits_agg(name: str, size: int) -> AggregationOption:
    """The top ``size`` documents of each bucket."""
    return _aggregation(name, "top_hits", {"size": size})


def geo_bounds_agg(name: str, field: str) -> AggregationOption:
    return _field(name, "geo_bounds", field)


def geo_centroid_agg(name: str, field: str) -> AggregationOption:
    return _field(name, "geo_centroid", field)


def weighted_avg_agg(name: str, value_field: str, weight_field: str
                     ) -> AggregationOption:
    return _aggregation(name, "weighted_avg", {
        "value": {"field": value_field},
        "weight": {"field": weight_field},
    })


def median_absolute_deviation_agg(name: str, field: str) -> AggregationOption:
    return _field(name, "median_absolute_deviation", field)


def string_stats_agg(name: str, field: str) -> AggregationOption:
    return _field(name, "string_stats", field)


def t_test_agg(name: str, field: str, filter_a: Optional[QueryOption],
               filter_b: Optional[QueryOption]) -> AggregationOption:
    """Compare ``field`` between the populations matched by two filters."""
    def _apply(container: AggregationContainer) -> None:
        _aggregation(name, "t_test", {
            "a": {"field": field, "filter": new_query(filter_a)},
            "b": {"field": field, "filter": new_query(filter_b)},
        })(container)
    return _apply


# Pipeline aggregations.

def avg_bucket_agg(name: str, buckets_path: str) -> AggregationOption:
    return _buckets_path(name, "avg_bucket", buckets_path)


def max_bucket_agg(name: str, buckets_path: str) -> AggregationOption:
    return _buckets_path(name, "max_bucket", buckets_path)


def min_bucket_agg(name: str, buckets_path: str) -> AggregationOption:
    return _buckets_path(name, "min_bucket", buckets_path)


def sum_bucket_agg(name: str, buckets_path: str) -> AggregationOption:
    return _buckets_path(name, "sum_bucket", buckets_path)


def stats_bucket_agg(name: str, buckets_path: str) -> AggregationOption:
    return _buckets_path(name, "stats_bucket", buckets_path)


def extended_stats_bucket_agg(name: str, buckets_path: str
                              ) -> AggregationOption:
    return _buckets_path(name, "extended_stats_bucket", buckets_path)


def percentiles_bucket_agg(name: str, buckets_path: str) -> AggregationOption:
    return _buckets_path(name, "percentiles_bucket", buckets_path)


def moving_avg_agg(name: str, buckets_path: str, window: int
                   ) -> AggregationOption:
    """
    Simple moving average over the last ``window`` buckets.

    Elasticsearch 8 no longer runs ``moving_avg``; the same result is
    available there from ``moving_fn`` with ``MovingFunctions.unweightedAvg``.
    """
    return _aggregation(name, "moving_avg", {
        "buckets_path": buckets_path,
        "model": "simple",
        "window": window,
    })


def derivative_agg(name: str, buckets_path: str) -> AggregationOption:
    """Rate of change between consecutive buckets."""
    return _buckets_path(name, "derivative", buckets_path)


def cumulative_sum_agg(name: str, buckets_path: str) -> AggregationOption:
    return _buckets_path(name, "cumulative_sum", buckets_path)
