"""Tests for :mod:`esb.exceptions`."""

from unittest import TestCase, mock
from unittest.mock import MagicMock

from elasticsearch import BadRequestError, ConnectionError as ESConnectionError

from esb import exceptions


class TestIsNotFound(TestCase):
    """Tests for :func:`.exceptions.is_not_found`."""

    def test_not_found(self):
        self.assertTrue(exceptions.is_not_found(exceptions.DocumentNotFound()))

    def test_other(self):
        self.assertFalse(exceptions.is_not_found(RuntimeError()))
        self.assertFalse(exceptions.is_not_found(exceptions.EmptyFieldError()))


class TestLogESExceptions(TestCase):
    """Tests for :func:`.exceptions.log_es_exceptions`."""

    @mock.patch(f"{exceptions.__name__}.logger")
    def test_api_error(self, mock_logger):
        """API errors are logged and re-raised as they are."""
        error = BadRequestError("bad query", MagicMock(status=400), {})
        with self.assertRaises(BadRequestError) as context:
            with exceptions.log_es_exceptions():
                raise error
        self.assertIs(context.exception, error)
        self.assertEqual(mock_logger.error.call_count, 1)

    @mock.patch(f"{exceptions.__name__}.logger")
    def test_transport_error(self, mock_logger):
        with self.assertRaises(ESConnectionError):
            with exceptions.log_es_exceptions():
                raise ESConnectionError("down")
        self.assertEqual(mock_logger.error.call_count, 1)

    @mock.patch(f"{exceptions.__name__}.logger")
    def test_other_errors_untouched(self, mock_logger):
        with self.assertRaises(KeyError):
            with exceptions.log_es_exceptions():
                raise KeyError("x")
        mock_logger.error.assert_not_called()
