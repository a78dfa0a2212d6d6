"""
Provides the connection to an Elasticsearch cluster.

Nothing in the query builders needs a connection; this module exists for the
helpers that do I/O (:class:`esb.record.RecordAccessor` and
:class:`esb.multisearch.MultiSearch`) when the caller does not pass a client
of their own.
"""

import warnings
from typing import Any, Dict, Optional

from elasticsearch import Elasticsearch
from flask import current_app

from esb import config, logging
from esb.context import get_application_config, get_application_global

logger = logging.getLogger(__name__)


class SearchSession:
    """Encapsulates session with Elasticsearch host."""

    def __init__(
        self,
        host: str,
        port: int = 9200,
        scheme: str = "http",
        user: Optional[str] = None,
        password: Optional[str] = None,
        verify: bool = True,
        timeout: float = config.ELASTICSEARCH_TIMEOUT,
        **extra: Any,
    ) -> None:
        """
        Set up the connection parameters for Elasticsearch.

        No connection is made until :attr:`.es` is first accessed.

        Parameters
        ----------
        host : str
        port : int
            Default: 9200
        scheme: str
            Default: 'http'
        user: str
            Default: None
        password: str
            Default: None
        verify: bool
            Whether to verify TLS certificates.
        timeout: float
            Request timeout in seconds.

        """
        self.url = f"{scheme}://{host}:{port}"
        self.conn_params: Dict[str, Any] = {
            "verify_certs": verify,
            "request_timeout": timeout,
        }
        if user:
            self.conn_params["basic_auth"] = (user, password)
        self.conn_extra = extra
        if scheme != "https":
            warnings.warn(f"TLS is disabled, using port {port}")
        if host == "localhost":
            warnings.warn(f"Using ES at {host}:{port}; not OK for production")

    def new_connection(self) -> Elasticsearch:
        """Create a new :class:`.Elasticsearch` connection."""
        logger.debug("init ES session with %s", self.url)
        return Elasticsearch(self.url, **self.conn_params, **self.conn_extra)

    @property
    def es(self) -> Elasticsearch:
        """
        Get or create the current :class:`.Elasticsearch` connection.

        The client is thread-safe, so inside a Flask application it is stored
        in ``current_app.extensions`` and shared.
        """
        if current_app:
            if "elasticsearch" not in current_app.extensions:
                current_app.extensions["elasticsearch"] = self.new_connection()
            client: Elasticsearch = current_app.extensions["elasticsearch"]
            return client
        return self.new_connection()

    def cluster_available(self) -> bool:
        """Determine whether or not the ES cluster is available."""
        try:
            self.es.cluster.health(wait_for_status="yellow", timeout="1s")
            return True
        except Exception as ex:
            logger.debug("Health check failed: %s", str(ex))
            return False

    @classmethod
    def init_app(cls, app: Any) -> None:
        """Set default configuration parameters for an application instance."""
        settings = app.config
        settings.setdefault(
            "ELASTICSEARCH_SERVICE_HOST", config.ELASTICSEARCH_SERVICE_HOST
        )
        settings.setdefault(
            "ELASTICSEARCH_SERVICE_PORT", config.ELASTICSEARCH_SERVICE_PORT
        )
        settings.setdefault("ELASTICSEARCH_USER", config.ELASTICSEARCH_USER)
        settings.setdefault(
            "ELASTICSEARCH_PASSWORD", config.ELASTICSEARCH_PASSWORD
        )
        settings.setdefault(
            "ELASTICSEARCH_VERIFY", config.ELASTICSEARCH_VERIFY
        )

    @classmethod
    def get_session(cls, app: object = None) -> "SearchSession":
        """Get a new session with the search cluster."""
        settings = get_application_config(app)
        host = settings.get(
            "ELASTICSEARCH_SERVICE_HOST", config.ELASTICSEARCH_SERVICE_HOST
        )
        port = settings.get(
            "ELASTICSEARCH_SERVICE_PORT", config.ELASTICSEARCH_SERVICE_PORT
        )
        scheme = settings.get(
            "ELASTICSEARCH_SERVICE_PORT_%s_PROTO" % port,
            config.ELASTICSEARCH_SERVICE_SCHEME,
        )
        verify = settings.get(
            "ELASTICSEARCH_VERIFY", config.ELASTICSEARCH_VERIFY
        ) == "true"
        user = settings.get("ELASTICSEARCH_USER", config.ELASTICSEARCH_USER)
        password = settings.get(
            "ELASTICSEARCH_PASSWORD", config.ELASTICSEARCH_PASSWORD
        )
        timeout = float(settings.get(
            "ELASTICSEARCH_TIMEOUT", config.ELASTICSEARCH_TIMEOUT
        ))
        return cls(host, int(port), scheme, user, password, verify=verify,
                   timeout=timeout)

    @classmethod
    def current_session(cls) -> "SearchSession":
        """Get/create :class:`.SearchSession` for this context."""
        g = get_application_global()
        if not g:
            return cls.get_session()
        if "search_session" not in g:
            g.search_session = cls.get_session()
        session: SearchSession = g.search_session
        return session


def current_client() -> Elasticsearch:
    """Get the :class:`.Elasticsearch` client for the current context."""
    return SearchSession.current_session().es
