"""Script queries, ``match_all`` and ``match_none``."""

from typing import Any, Dict, Optional, Union

from esb.types import Query, ScriptLanguage, Setter
from esb.query.base import QueryOption, wire_value

__all__ = [
    "script",
    "script_with_params",
    "script_with_lang",
    "script_with_options",
    "match_all",
    "match_all_with_options",
    "match_none",
    "match_none_with_options",
]


def script(source: str) -> QueryOption:
    """
    Match documents for which a script returns true.

    .. code-block:: python

       script("doc['age'].value > 30")

    """
    return script_with_options(source, None)


def script_with_params(source: str, params: Dict[str, Any]) -> QueryOption:
    """Script query whose source reads values from ``params``."""
    script_params = dict(params)

    def _apply(query: Query) -> None:
        query["script"] = {
            "script": {"source": source, "params": dict(script_params)}
        }
    return _apply


def script_with_lang(source: str, lang: Union[ScriptLanguage, str]
                     ) -> QueryOption:
    """Script query in a language other than the default (painless)."""
    def _apply(query: Query) -> None:
        query["script"] = {
            "script": {"source": source, "lang": wire_value(lang)}
        }
    return _apply


def script_with_options(source: str, set_opts: Optional[Setter]
                        ) -> QueryOption:
    """
    Script query with access to the whole query body.

    The script itself sits under the ``"script"`` key of the dict passed to
    ``set_opts``; ``boost`` and ``_name`` go at the top level.

    .. code-block:: python

       def options(opts):
           opts["script"]["lang"] = "painless"
           opts["boost"] = 1.5

       script_with_options("doc['age'].value > 30", options)

    """
    def _apply(query: Query) -> None:
        script_query: Dict[str, Any] = {"script": {"source": source}}
        if set_opts is not None:
            set_opts(script_query)
        query["script"] = script_query
    return _apply


def match_all() -> QueryOption:
    """Match every document, each with a score of 1.0."""
    return match_all_with_options(None)


def match_all_with_options(set_opts: Optional[Setter]) -> QueryOption:
    """``match_all``; ``set_opts`` may add ``boost`` or ``_name``."""
    def _apply(query: Query) -> None:
        match_all_query: Dict[str, Any] = {}
        if set_opts is not None:
            set_opts(match_all_query)
        query["match_all"] = match_all_query
    return _apply


def match_none() -> QueryOption:
    """Match no documents."""
    return match_none_with_options(None)


def match_none_with_options(set_opts: Optional[Setter]) -> QueryOption:
    """``match_none``, with access to its settings."""
    def _apply(query: Query) -> None:
        match_none_query: Dict[str, Any] = {}
        if set_opts is not None:
            set_opts(match_none_query)
        query["match_none"] = match_none_query
    return _apply
