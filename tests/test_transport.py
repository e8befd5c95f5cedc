"""Tests for the shared HTTP session helpers."""

import unittest
from unittest import mock

import requests

from harvester.errors import BodyDecodeError, TransportError
from harvester.transport import create_session, fetch_text

from fakes import FakeResponse, FakeSession


class TestFetchText(unittest.TestCase):
    """Verify fetch_text() turns every failure into TransportError."""

    def test_returns_decoded_body_and_passes_timeout(self):
        """A 200 response should be decoded and the timeout forwarded."""
        session = FakeSession({"https://example.com/": "<p>晴</p>"})
        body = fetch_text(session, "https://example.com/", timeout=7)
        self.assertEqual(body, "<p>晴</p>")
        self.assertEqual(session.timeouts, [7])

    def test_non_2xx_status_raises(self):
        """A 503 response should raise TransportError with the status code."""
        session = FakeSession({"https://example.com/": FakeResponse("busy", status_code=503)})
        with self.assertRaises(TransportError) as ctx:
            fetch_text(session, "https://example.com/", timeout=1)
        self.assertEqual(ctx.exception.url, "https://example.com/")
        self.assertIn("HTTP_503", str(ctx.exception))

    def test_client_exception_raises_transport_error(self):
        """A client exception should be wrapped in TransportError."""
        session = FakeSession({"https://example.com/": requests.ConnectionError("refused")})
        with self.assertRaises(TransportError) as ctx:
            fetch_text(session, "https://example.com/", timeout=1)
        self.assertIn("ConnectionError", str(ctx.exception))
        self.assertIsInstance(ctx.exception.__cause__, requests.ConnectionError)

    def test_invalid_utf8_raises_body_decode_error(self):
        """A body that is not UTF-8 should raise BodyDecodeError."""
        session = FakeSession({"https://example.com/": b"\xff\xfe\xfa"})
        with self.assertRaises(BodyDecodeError):
            fetch_text(session, "https://example.com/", timeout=1)


class TestCreateSession(unittest.TestCase):
    """Verify which HTTP client backs the shared session."""

    def test_default_is_requests_session(self):
        """Without impersonation a requests.Session should be built."""
        session = create_session()
        try:
            self.assertIsInstance(session, requests.Session)
        finally:
            session.close()

    def test_impersonate_uses_curl_cffi(self):
        """Impersonation should build a curl_cffi session for that browser."""
        with mock.patch("harvester.transport.curl_requests.Session") as curl_session:
            session = create_session(impersonate="chrome120")
        curl_session.assert_called_once_with(impersonate="chrome120")
        self.assertIs(session, curl_session.return_value)


if __name__ == "__main__":
    unittest.main()
