"""
Sort clauses.

.. code-block:: python

   sort = new_sort(sort_by("date", SortOrder.DESC), sort_score())
   client.search(index="articles", query=query, sort=sort)

"""

from typing import Any, Callable, List, Optional, Union

from esb.query.base import wire_value
from esb.types import SortOptions, SortOrder

__all__ = [
    "SortOption",
    "new_sort",
    "sort_field_asc",
    "sort_field_desc",
    "sort_by",
    "sort_score",
]

SortOption = Callable[[List[SortOptions]], None]
"""A function that appends one clause to a sort list."""


def sort_field_asc(field: str) -> SortOptions:
    """Sort on ``field``, smallest first."""
    return {field: {"order": SortOrder.ASC.value}}


def sort_field_desc(field: str) -> SortOptions:
    """Sort on ``field``, largest first."""
    return {field: {"order": SortOrder.DESC.value}}


def new_sort(*options: Optional[SortOption]) -> List[SortOptions]:
    """Build a sort list; clauses keep the order of ``options``."""
    clauses: List[SortOptions] = []
    for option in options:
        if option is not None:
            option(clauses)
    return clauses


def sort_by(field: str, order: Union[SortOrder, str] = SortOrder.ASC,
            **extra: Any) -> SortOption:
    """
    Sort on ``field``.

    Keyword arguments such as ``missing="_last"`` or ``mode="avg"`` are
    added to the clause as they are.
    """
    def _apply(clauses: List[SortOptions]) -> None:
        clause = {"order": wire_value(order)}
        clause.update(extra)
        clauses.append({field: clause})
    return _apply


def sort_score() -> SortOption:
    """Sort by relevance, best match first."""
    def _apply(clauses: List[SortOptions]) -> None:
        clauses.append({"_score": {"order": SortOrder.DESC.value}})
    return _apply
