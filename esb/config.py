"""
Library configuration.

These are the defaults used when no Flask application config is available.
An application can override any of them in its own config; see
:func:`esb.context.get_application_config`.
"""
import os

ELASTICSEARCH_SERVICE_HOST = os.environ.get(
    "ELASTICSEARCH_SERVICE_HOST", "localhost"
)
"""Hostname of the Elasticsearch cluster."""

ELASTICSEARCH_SERVICE_PORT = os.environ.get(
    "ELASTICSEARCH_SERVICE_PORT", "9200"
)
"""Port of the Elasticsearch cluster."""

_proto_key = f"ELASTICSEARCH_SERVICE_PORT_{ELASTICSEARCH_SERVICE_PORT}_PROTO"
ELASTICSEARCH_SERVICE_SCHEME = os.environ.get(_proto_key, "http")
"""
Scheme used to reach the cluster. Follows the Kubernetes service env
convention, e.g. ``ELASTICSEARCH_SERVICE_PORT_9200_PROTO=https``.
"""

ELASTICSEARCH_USER = os.environ.get("ELASTICSEARCH_USER", None)
ELASTICSEARCH_PASSWORD = os.environ.get("ELASTICSEARCH_PASSWORD", None)

ELASTICSEARCH_VERIFY = os.environ.get("ELASTICSEARCH_VERIFY", "true")
"""Whether to verify TLS certificates (``"true"`` or ``"false"``)."""

ELASTICSEARCH_TIMEOUT = float(os.environ.get("ELASTICSEARCH_TIMEOUT", "10"))
"""Default request timeout, in seconds."""

LOGLEVEL = os.environ.get("LOGLEVEL", "INFO")
"""Either a level name (``DEBUG``) or a number (``10``)."""

LOGFILE = os.environ.get("LOGFILE", None)
"""If set, log records are written here instead of stderr."""
