"""
Fluent builder for range queries.

.. code-block:: python

   range_("age").gte(18).lt(65).build()
   range_("published").gte("now-1d/d").time_zone("+01:00").build()

Bounds keep their Python type, so numbers go over the wire as bare numbers
and strings (dates, keywords) as quoted strings. :func:`number_range`,
:func:`date_range` and :func:`term_range` are the same builder under names
that say what the caller intends.
"""

from typing import Any, Union

from esb.exceptions import EmptyFieldError
from esb.types import Query, RangeQuery, RangeRelation
from esb.query.base import QueryOption, field_map, wire_value

__all__ = [
    "RangeBuilder",
    "range_",
    "number_range",
    "date_range",
    "term_range",
]


class RangeBuilder:
    """Accumulates bounds and settings for a range query on one field."""

    def __init__(self, field: str) -> None:
        self.field = field
        self.query: RangeQuery = {}

    def _set(self, key: str, value: Any) -> "RangeBuilder":
        self.query[key] = value  # type: ignore
        return self

    def gt(self, value: Any) -> "RangeBuilder":
        """Greater than ``value``."""
        return self._set("gt", value)

    def gte(self, value: Any) -> "RangeBuilder":
        """Greater than or equal to ``value``."""
        return self._set("gte", value)

    def lt(self, value: Any) -> "RangeBuilder":
        """Less than ``value``."""
        return self._set("lt", value)

    def lte(self, value: Any) -> "RangeBuilder":
        """Less than or equal to ``value``."""
        return self._set("lte", value)

    def from_(self, value: Any) -> "RangeBuilder":
        """Lower bound, inclusive (legacy ``from``/``to`` form)."""
        return self._set("from", value)

    def to(self, value: Any) -> "RangeBuilder":
        """Upper bound (legacy ``from``/``to`` form)."""
        return self._set("to", value)

    def boost(self, boost: float) -> "RangeBuilder":
        """Relevance boost for matching documents."""
        return self._set("boost", boost)

    def format(self, format: str) -> "RangeBuilder":
        """Date format used to parse date bounds, e.g. ``yyyy-MM-dd``."""
        return self._set("format", format)

    def time_zone(self, time_zone: str) -> "RangeBuilder":
        """UTC offset or IANA zone applied to date bounds."""
        return self._set("time_zone", time_zone)

    def relation(self, relation: Union[RangeRelation, str]) -> "RangeBuilder":
        """How to match range-typed fields."""
        return self._set("relation", wire_value(relation))

    def query_name(self, name: str) -> "RangeBuilder":
        """Name reported in ``matched_queries`` of each hit."""
        return self._set("_name", name)

    def build(self) -> QueryOption:
        """
        Turn the accumulated state into a :data:`.QueryOption`.

        The option gets a copy of the current state; changing the builder
        afterwards does not affect it.

        Raises
        ------
        :class:`.EmptyFieldError`
            If the field name is empty or only whitespace.

        """
        if not self.field.strip():
            raise EmptyFieldError("Range query requires a field name")
        field = self.field
        range_query: RangeQuery = dict(self.query)  # type: ignore

        def _apply(query: Query) -> None:
            field_map(query, "range")[field] = dict(range_query)
        return _apply


def range_(field: str) -> RangeBuilder:
    """Start a range query on ``field``."""
    return RangeBuilder(field)


number_range = range_
date_range = range_
term_range = range_
