"""Exceptions raised by the query builders and the index helpers."""

from contextlib import contextmanager
from typing import Generator

from elasticsearch import ApiError, TransportError

from esb import logging

__all__ = (
    "EmptyFieldError",
    "DocumentNotFound",
    "MissingAliasError",
    "MultiSearchError",
    "is_not_found",
    "log_es_exceptions",
)

logger = logging.getLogger(__name__)


class EmptyFieldError(ValueError):
    """A range query was built without a field name."""


class DocumentNotFound(RuntimeError):
    """Could not find a requested document in the search index."""


class MissingAliasError(RuntimeError):
    """An entity did not report the index or alias it lives in."""


class MultiSearchError(RuntimeError):
    """
    One of the searches in a multi-search request failed.

    Elasticsearch reports these per item, inside an otherwise successful
    response; the whole batch is treated as failed.
    """


def is_not_found(ex: BaseException) -> bool:
    """Determine whether ``ex`` means that no matching document exists."""
    return isinstance(ex, DocumentNotFound)


@contextmanager
def log_es_exceptions() -> Generator:
    """Log errors reported by the Elasticsearch client, then re-raise them."""
    try:
        yield
    except ApiError as ex:
        logger.error("ES request failed (%s): %s", ex.meta.status, ex.message)
        raise
    except TransportError as ex:
        logger.error("Problem communicating with ES: %s", ex)
        raise
