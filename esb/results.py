"""
Functions for turning raw Elasticsearch responses into entities.

Without a ``model``, a document is returned as its ``_source`` dict. With
one, the source is handed to ``model.from_dict`` if the model has it, or to
the model's constructor as keyword arguments otherwise. Keys a dataclass
model does not declare are dropped first.
"""

from dataclasses import fields, is_dataclass
from typing import Any, Callable, List, Mapping, Optional

from esb import logging
from esb.exceptions import DocumentNotFound

__all__ = ("decode", "format_one", "format_search")

logger = logging.getLogger(__name__)

PostProcessor = Callable[[Any], bool]
"""Called per decoded hit; return ``False`` to leave the hit out."""


def decode(source: Mapping[str, Any], model: Optional[type] = None) -> Any:
    """Build an entity from a document ``_source``."""
    if model is None:
        return dict(source)
    from_dict = getattr(model, "from_dict", None)
    if callable(from_dict):
        return from_dict(dict(source))
    if is_dataclass(model):
        names = {field.name for field in fields(model) if field.init}
        source = {k: v for k, v in source.items() if k in names}
    return model(**source)


def format_one(response: Mapping[str, Any], model: Optional[type] = None
               ) -> Any:
    """
    Decode the document in a get-by-id response.

    Parameters
    ----------
    response : dict-like
        The body returned by ``Elasticsearch.get()``.
    model : type
        Entity type to decode into; see :func:`decode`.

    Returns
    -------
    object
        The decoded document.

    Raises
    ------
    :class:`.DocumentNotFound`
        If the response says that the document was not found.

    """
    if not response.get("found"):
        raise DocumentNotFound(f"No such document: {response.get('_id')}")
    return decode(response["_source"], model)


def format_search(hits: Mapping[str, Any],
                  post_processor: Optional[PostProcessor] = None,
                  model: Optional[type] = None) -> List[Any]:
    """
    Decode every hit in the ``hits`` section of a search response.

    Hits that cannot be decoded are logged and left out, as are hits for
    which ``post_processor`` returns ``False``.
    """
    results: List[Any] = []
    for hit in hits.get("hits") or []:
        try:
            item = decode(hit["_source"], model)
        except (KeyError, TypeError, ValueError) as ex:
            logger.warning("Could not decode hit %s: %s", hit.get("_id"), ex)
            continue
        if post_processor is None or post_processor(item):
            results.append(item)
    return results
