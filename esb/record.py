"""
Active-record style access to the documents of one index.

.. code-block:: python

   @dataclass
   class Article:
       title: str = ""
       status: str = ""

       def get_index_alias(self) -> str:
           return "articles"

   records = RecordAccessor(client, Article())
   article = records.refresh(True).find_pk("42")
   records.update_field("42", "status", "archived")

The entity given to the accessor names the index (via
:meth:`IndexAliased.get_index_alias`) and is the type that documents are
decoded into.
"""

from dataclasses import asdict, is_dataclass
from typing import (
    Any, Callable, Dict, Generic, Iterable, Optional, Protocol, TypeVar,
)

from elasticsearch import Elasticsearch, NotFoundError
from elasticsearch_dsl import Search
from elasticsearch_dsl.response import Response

from esb import logging
from esb.exceptions import (
    DocumentNotFound, MissingAliasError, log_es_exceptions,
)
from esb.query import bool_, filter_, new_query, term_with_options, terms
from esb.results import decode, format_one
from esb.session import current_client
from esb.types import Conflicts, FieldValue

__all__ = ("IndexAliased", "RecordAccessor")

logger = logging.getLogger(__name__)


class IndexAliased(Protocol):
    """An entity that knows which index (or alias) it is stored in."""

    def get_index_alias(self) -> str:
        ...


T = TypeVar("T", bound=IndexAliased)

OnRequest = Callable[[Search], Search]
OnResponse = Callable[[Response], Any]


def encode(entity: Any) -> Dict[str, Any]:
    """Get the document body for ``entity``."""
    to_dict = getattr(entity, "to_dict", None)
    if callable(to_dict):
        return dict(to_dict())
    if is_dataclass(entity) and not isinstance(entity, type):
        return asdict(entity)
    return dict(entity)


class RecordAccessor(Generic[T]):
    """CRUD and lookups for the documents of one entity type."""

    def __init__(self, client: Optional[Elasticsearch], entity: T) -> None:
        """
        Bind an accessor to an entity type.

        Parameters
        ----------
        client : :class:`.Elasticsearch`
            If ``None``, the client of the current
            :class:`esb.session.SearchSession` is used.
        entity : object
            Any instance of the entity type; see :class:`.IndexAliased`.

        """
        self._client = client
        self.entity = entity
        self._refresh = False

    @property
    def client(self) -> Elasticsearch:
        if self._client is None:
            self._client = current_client()
        return self._client

    def refresh(self, refresh: bool) -> "RecordAccessor[T]":
        """Make subsequent writes visible to search immediately (or not)."""
        self._refresh = refresh
        return self

    def _refresh_params(self) -> Dict[str, Any]:
        return {"refresh": True} if self._refresh else {}

    def get_model(self) -> T:
        """Get the entity this accessor was created with."""
        return self.entity

    def get_alias(self) -> str:
        """
        Get the index or alias that documents are read from and written to.

        Raises
        ------
        :class:`.MissingAliasError`
            If the entity reports an empty alias.

        """
        alias = self.get_model().get_index_alias()
        if not alias:
            raise MissingAliasError(
                f"{type(self.entity).__name__} has no index alias"
            )
        return alias

    def _decode(self, source: Dict[str, Any]) -> T:
        entity: T = decode(source, type(self.entity))
        return entity

    def find_pk(self, id: str) -> T:
        """
        Get a document by its ``_id``.

        Raises
        ------
        :class:`.DocumentNotFound`
            If there is no such document.

        """
        alias = self.get_alias()
        logger.debug("get %s/%s", alias, id)
        with log_es_exceptions():
            try:
                response = self.client.get(index=alias, id=id)
            except NotFoundError as ex:
                raise DocumentNotFound(
                    f"No such document: {alias}/{id}"
                ) from ex
        entity: T = format_one(response, type(self.entity))
        return entity

    def find_one(self, field: str, value: FieldValue) -> T:
        """Get a document by an exact (case-sensitive) field value."""
        return self.find_one_by_field(field, value, False)

    def find_one_by_field(self, field: str, value: FieldValue,
                          case_insensitive: bool) -> T:
        """
        Get a document by an exact field value.

        The field should be unique across the index. If more than one
        document matches, which of them is returned is up to Elasticsearch
        and may differ from call to call.

        Raises
        ------
        :class:`.DocumentNotFound`
            If no document matches.

        """
        query = new_query(bool_(filter_(term_with_options(
            field, value,
            lambda opts: opts.update(case_insensitive=case_insensitive),
        ))))
        search = Search(using=self.client, index=self.get_alias())
        search = search.query(query).extra(size=1)
        logger.debug("find one %s=%r", field, value)
        with log_es_exceptions():
            response = search.execute()
        hits = response.to_dict()["hits"]["hits"]
        if not hits:
            raise DocumentNotFound(f"No document with {field}={value!r}")
        return self._decode(hits[0]["_source"])

    def exist(self, id: str) -> bool:
        """Determine whether a document with this ``_id`` exists."""
        with log_es_exceptions():
            return bool(self.client.exists(index=self.get_alias(), id=id))

    def index(self, entity: T, id: str) -> str:
        """Store ``entity`` under ``id``, replacing any existing document."""
        with log_es_exceptions():
            response = self.client.index(
                index=self.get_alias(), id=id, document=encode(entity),
                **self._refresh_params()
            )
        doc_id: str = response["_id"]
        return doc_id

    def _update(self, id: str, doc: Dict[str, Any], **params: Any) -> None:
        with log_es_exceptions():
            self.client.update(index=self.get_alias(), id=id, doc=doc,
                               **params, **self._refresh_params())

    def update_entity(self, entity: T, id: str) -> None:
        """
        Overwrite the fields of an existing document with those of ``entity``.

        Prefer :meth:`update_partial` when only some fields change.
        """
        self._update(id, encode(entity))

    def update_partial(self, id: str, fields: Dict[str, Any]) -> None:
        """Update some fields of an existing document."""
        self._update(id, dict(fields))

    def update_field(self, id: str, field: str, value: Any) -> None:
        """Update a single field of an existing document."""
        self._update(id, {field: value})

    def upsert(self, id: str, entity: T) -> None:
        """Update the document, or create it from ``entity`` if missing."""
        self._update(id, encode(entity), doc_as_upsert=True)

    def delete(self, id: str) -> None:
        with log_es_exceptions():
            self.client.delete(index=self.get_alias(), id=id,
                               **self._refresh_params())

    def count(self) -> int:
        """Count the documents in the index."""
        with log_es_exceptions():
            response = self.client.count(index=self.get_alias())
        count: int = response["count"]
        return count

    def batch_delete_by_field(self, field: str,
                              values: Iterable[FieldValue]) -> None:
        """
        Delete every document whose ``field`` holds one of ``values``.

        Version conflicts do not abort the deletion.
        """
        query = new_query(bool_(filter_(terms(field, *values))))
        logger.debug("delete by %s from %s", field, self.get_alias())
        with log_es_exceptions():
            self.client.delete_by_query(
                index=self.get_alias(), query=query,
                conflicts=Conflicts.PROCEED.value, **self._refresh_params()
            )

    def search(self, on_request: OnRequest, on_response: OnResponse) -> Any:
        """
        Run a search against the index.

        Parameters
        ----------
        on_request : callable
            Gets a :class:`elasticsearch_dsl.Search` bound to the index and
            returns it with the query, paging, etc. applied.
        on_response : callable
            Gets the :class:`elasticsearch_dsl.response.Response`; its
            return value is returned from here.

        """
        search = Search(using=self.client, index=self.get_alias())
        search = on_request(search).extra(track_total_hits=True)
        with log_es_exceptions():
            response = search.execute()
        return on_response(response)
