"""
Geo and shape queries.

Shapes are given as text. GeoJSON text is decoded into the query so the
client sends it as structured JSON; anything else (WKT, an empty string) is
sent as the string it is.
"""

import json
from typing import Any, Callable, Dict, Optional, Sequence, Union

from esb.types import GeoShapeRelation, Query
from esb.query.base import QueryOption, wire_value

__all__ = [
    "geo_bounding_box",
    "geo_distance",
    "geo_polygon",
    "geo_shape",
    "shape",
    "shape_with_relation",
    "shape_with_indexed_shape",
    "shape_with_options",
]


def _location(lat: float, lon: float) -> Dict[str, float]:
    return {"lat": lat, "lon": lon}


def _shape_value(shape: str) -> Any:
    """Decode GeoJSON text; other shape text is used as is."""
    try:
        return json.loads(shape)
    except ValueError:
        return shape


def geo_bounding_box(field: str, top_left_lat: float, top_left_lon: float,
                     bottom_right_lat: float, bottom_right_lon: float
                     ) -> QueryOption:
    """Match geo points inside a bounding box."""
    def _apply(query: Query) -> None:
        query["geo_bounding_box"] = {
            field: {
                "top_left": _location(top_left_lat, top_left_lon),
                "bottom_right": _location(bottom_right_lat, bottom_right_lon),
            }
        }
    return _apply


def geo_distance(field: str, lat: float, lon: float, distance: str
                 ) -> QueryOption:
    """Match geo points within ``distance`` (e.g. ``"12km"``) of a point."""
    def _apply(query: Query) -> None:
        query["geo_distance"] = {
            "distance": distance,
            field: _location(lat, lon),
        }
    return _apply


def geo_polygon(field: str, points: Sequence[Sequence[float]]) -> QueryOption:
    """
    Match geo points inside a polygon.

    Each point is a ``(lat, lon)`` pair; a point with fewer than two
    coordinates becomes an empty location.
    """
    def _apply(query: Query) -> None:
        locations = [
            _location(point[0], point[1]) if len(point) >= 2 else {}
            for point in points
        ]
        query["geo_polygon"] = {field: {"points": locations}}
    return _apply


def geo_shape(field: str, shape: str) -> QueryOption:
    """Match ``geo_shape`` fields against a GeoJSON shape."""
    def _apply(query: Query) -> None:
        query["geo_shape"] = {field: {"shape": _shape_value(shape)}}
    return _apply


def _shape_query(field: str, field_query: Dict[str, Any]) -> Dict[str, Any]:
    return {field: field_query}


def shape(field: str, shape: str) -> QueryOption:
    """Match cartesian ``shape`` fields against a GeoJSON shape."""
    return shape_with_options(field, shape, None)


def shape_with_relation(field: str, shape: str,
                        relation: Union[GeoShapeRelation, str]) -> QueryOption:
    """Shape query with an explicit spatial relation."""
    def _apply(query: Query) -> None:
        query["shape"] = _shape_query(field, {
            "shape": _shape_value(shape),
            "relation": wire_value(relation),
        })
    return _apply


def shape_with_indexed_shape(field: str, index: str, id: str, path: str
                             ) -> QueryOption:
    """Shape query against a shape stored in another document."""
    def _apply(query: Query) -> None:
        query["shape"] = _shape_query(field, {
            "indexed_shape": {"index": index, "id": id, "path": path},
        })
    return _apply


def shape_with_options(
        field: str, shape: str,
        set_opts: Optional[Callable[[Dict[str, Any], Dict[str, Any]], None]]
        ) -> QueryOption:
    """
    Shape query with access to both the query and the per-field settings.

    ``set_opts`` gets ``(shape_query, field_query)``; use the first for
    ``ignore_unmapped``/``boost`` and the second for ``relation``.
    """
    def _apply(query: Query) -> None:
        shape_query: Dict[str, Any] = {}
        field_query: Dict[str, Any] = {"shape": _shape_value(shape)}
        if set_opts is not None:
            set_opts(shape_query, field_query)
        shape_query[field] = field_query
        query["shape"] = shape_query
    return _apply
