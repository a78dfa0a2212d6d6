"""
Logger factory for the library.

Level and destination come from ``LOGLEVEL`` and ``LOGFILE`` in the
application config (see :func:`esb.context.get_application_config`), falling
back to :mod:`esb.config`.
"""

import logging
from typing import Any, Union

from esb import config
from esb.context import get_application_config

default_format = '%(asctime)s - %(name)s - %(levelname)s: %(message)s'


def _level(value: Union[int, str]) -> int:
    """Accept either a numeric level or a level name like ``DEBUG``."""
    if isinstance(value, int) or str(value).isdigit():
        return int(value)
    level: Any = logging.getLevelName(str(value).upper())
    return level if isinstance(level, int) else logging.INFO


def getLogger(name: str, fmt: str = default_format) -> logging.Logger:
    """
    Get a :class:`logging.Logger` with the library configuration applied.

    Parameters
    ----------
    name : str
    fmt : str

    Returns
    -------
    :class:`logging.Logger`
    """
    settings = get_application_config()
    logging.basicConfig(format=fmt)
    logger = logging.getLogger(name)
    logger.setLevel(_level(settings.get('LOGLEVEL', config.LOGLEVEL)))
    logfile = settings.get('LOGFILE', config.LOGFILE)
    if logfile:
        handler = logging.FileHandler(logfile)
        handler.setFormatter(logging.Formatter(fmt))
        logger.handlers = [handler]
        logger.propagate = False
    return logger
