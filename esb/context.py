"""Helpers for working with Flask applications, when there is one."""

import os
from typing import Any, Mapping, Optional

from flask import current_app, g


def get_application_config(app: Any = None) -> Mapping[str, Any]:
    """
    Get a configuration from the current app, or fall back to env.

    Parameters
    ----------
    app : :class:`flask.Flask`

    Returns
    -------
    dict-like
        This is either the current Flask application configuration, or
        ``os.environ``. Either of these should support the ``get()`` method.

    """
    if app is not None:
        config: Mapping[str, Any] = app.config
        return config
    if current_app:
        return current_app.config
    return os.environ


def get_application_global() -> Optional[Any]:
    """
    Get the current application global proxy object.

    Returns
    -------
    proxy or None

    """
    if g:
        return g
    return None
