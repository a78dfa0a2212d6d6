"""
Run several searches in a single ``msearch`` request.

Each search is registered with the index (or alias) it targets and a post
processor. After execution, every response item is routed to the post
processor registered under its index name, which is recovered from the
item's first hit.

.. code-block:: python

   def on_articles(item, hit_count, index):
       ...

   MultiSearch(client) \\
       .add_search("articles", new_query(term("status", "published")),
                   on_articles, 10, with_sort(sort_field_desc("date"))) \\
       .add_search("authors", new_query(match_all()), on_authors) \\
       .execute()

"""

from typing import Any, Callable, Dict, List, Optional

from elasticsearch import Elasticsearch

from esb import logging
from esb.exceptions import MultiSearchError, log_es_exceptions
from esb.session import current_client
from esb.types import MultisearchBody, MultisearchHeader, Query, SortOptions

__all__ = (
    "PreProcessor",
    "PostProcessor",
    "AliasProcessor",
    "MultiSearch",
    "default_alias_processor",
    "with_include_source_fields",
    "with_exclude_source_fields",
    "with_func",
    "with_sort",
    "with_size",
    "with_size_10000",
)

logger = logging.getLogger(__name__)

PreProcessor = Callable[[MultisearchHeader, MultisearchBody], None]
"""Adjusts the header and/or body of one search before it is sent."""

PostProcessor = Callable[[Dict[str, Any], int, str], None]
"""Gets ``(response_item, hit_count, index)`` for one search."""

AliasProcessor = Callable[[str], str]
"""Maps the concrete index name of a hit back to a registered name."""

DATE_SUFFIX = "_20"


def with_include_source_fields(*fields: str) -> PreProcessor:
    """Only return these ``_source`` fields."""
    def _apply(header: MultisearchHeader, body: MultisearchBody) -> None:
        body["_source"] = {"includes": list(fields)}
    return _apply


def with_exclude_source_fields(*fields: str) -> PreProcessor:
    """Return every ``_source`` field except these."""
    def _apply(header: MultisearchHeader, body: MultisearchBody) -> None:
        body["_source"] = {"excludes": list(fields)}
    return _apply


def with_func(func: PreProcessor) -> PreProcessor:
    """Wrap an arbitrary function as a pre-processor."""
    def _apply(header: MultisearchHeader, body: MultisearchBody) -> None:
        func(header, body)
    return _apply


def with_sort(*options: SortOptions) -> PreProcessor:
    """Sort the hits of this search."""
    def _apply(header: MultisearchHeader, body: MultisearchBody) -> None:
        body["sort"] = list(options)
    return _apply


def with_size(size: int, from_: int = 0) -> PreProcessor:
    """
    Set the page size and offset.

    A size below 1 is raised to 1: a search without hits cannot be routed
    to its post processor, which would then never see its aggregations.
    """
    def _apply(header: MultisearchHeader, body: MultisearchBody) -> None:
        body["size"] = size if size > 0 else 1
        if from_ > 0:
            body["from"] = from_  # type: ignore
    return _apply


def with_size_10000() -> PreProcessor:
    """The largest page Elasticsearch returns by default."""
    return with_size(10000, 0)


def default_alias_processor() -> AliasProcessor:
    """
    Strip a trailing date suffix from index names.

    Indices are expected to be named ``<alias>_<date>``, e.g.
    ``prefix_table_20250808`` for the alias ``prefix_table``. Names without
    ``_20`` are left as they are.
    """
    def _process(index: str) -> str:
        if DATE_SUFFIX not in index:
            return index
        return DATE_SUFFIX.join(index.split(DATE_SUFFIX)[:-1])
    return _process


class MultiSearch:
    """Collects searches and runs them as one ``msearch`` request."""

    def __init__(self, client: Optional[Elasticsearch] = None) -> None:
        self._client = client
        self.searches: List[Dict[str, Any]] = []
        self.post_processors: Dict[str, PostProcessor] = {}

    @property
    def client(self) -> Elasticsearch:
        if self._client is None:
            self._client = current_client()
        return self._client

    def add_search(self, index: str, query: Query,
                   post_processor: PostProcessor, size: int = 1,
                   *pre_processors: PreProcessor) -> "MultiSearch":
        """
        Register one search.

        Parameters
        ----------
        index : str
            Index or alias to search. Also the name under which
            ``post_processor`` is registered; a later search on the same
            name replaces it.
        query : :class:`.Query`
        post_processor : callable
            See :data:`PostProcessor`.
        size : int
            Page size; values below 1 become 1.
        pre_processors : callable
            Applied in order to the header and body of this search.

        Returns
        -------
        :class:`.MultiSearch`
            This instance, for chaining.

        """
        header: MultisearchHeader = {"index": [index]}
        body: MultisearchBody = {
            "query": query,
            "track_total_hits": True,
            "size": max(size, 1),
        }
        for pre_processor in pre_processors:
            pre_processor(header, body)
        self.searches.extend([header, body])  # type: ignore
        self.post_processors[index] = post_processor
        return self

    def execute(self, alias_processor: Optional[AliasProcessor] = None
                ) -> None:
        """
        Send every registered search and dispatch the responses.

        Parameters
        ----------
        alias_processor : callable
            Maps the ``_index`` of an item's first hit to the name it was
            registered under. Defaults to :func:`default_alias_processor`.

        Raises
        ------
        :class:`.MultiSearchError`
            If any item in the response reports an error. Items before it
            have already been dispatched.

        """
        if alias_processor is None:
            alias_processor = default_alias_processor()
        logger.debug("msearch with %i searches", len(self.searches) // 2)
        with log_es_exceptions():
            response = self.client.msearch(searches=self.searches)
        for item in response["responses"]:
            if item is None:
                continue
            if "error" in item:
                error = item["error"]
                reason = error.get("reason") if isinstance(error, dict) \
                    else error
                logger.error("msearch item failed: %s", reason)
                raise MultiSearchError(reason)
            hits = item.get("hits", {}).get("hits") or []
            index = alias_processor(hits[0]["_index"]) if hits else ""
            for name, post_processor in self.post_processors.items():
                if name == index:
                    post_processor(item, len(hits), index)
