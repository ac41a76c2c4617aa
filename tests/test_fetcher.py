"""
Unit tests for the document fetcher.
"""

from unittest.mock import MagicMock

import requests

from question_ingest.fetcher import DocumentFetcher, FetchFailure


def _session_returning(status_code=200, text=""):
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    session.get.return_value = response
    return session


class TestDocumentFetcher:

    def test_success_returns_text(self):
        body = "Q1. " + "x" * 200
        fetcher = DocumentFetcher(session=_session_returning(text=body))

        result = fetcher.fetch("https://example.com/a.md")

        assert result.ok
        assert result.text == body
        assert result.failure is None

    def test_uses_timeout_and_user_agent(self):
        session = _session_returning(text="x" * 200)
        fetcher = DocumentFetcher(timeout=5.0, session=session)

        fetcher.fetch("https://example.com/a.md")

        session.get.assert_called_once_with("https://example.com/a.md", timeout=5.0)
        assert "User-Agent" in session.headers

    def test_non_200_status_is_failure(self):
        fetcher = DocumentFetcher(session=_session_returning(status_code=404, text="x" * 200))

        result = fetcher.fetch("https://example.com/missing.md")

        assert not result.ok
        assert result.failure is FetchFailure.NON_SUCCESS_STATUS
        assert result.detail == "HTTP 404"

    def test_short_response_is_failure(self):
        fetcher = DocumentFetcher(session=_session_returning(text="404: Not Found"))

        result = fetcher.fetch("https://example.com/a.md")

        assert result.failure is FetchFailure.UNDERSIZED_RESPONSE
        assert result.text is None

    def test_response_of_exactly_minimum_length_is_accepted(self):
        fetcher = DocumentFetcher(min_length=100, session=_session_returning(text="x" * 100))

        assert fetcher.fetch("https://example.com/a.md").ok

    def test_transport_error_is_returned_not_raised(self):
        session = _session_returning()
        session.get.side_effect = requests.ConnectionError("connection refused")
        fetcher = DocumentFetcher(session=session)

        result = fetcher.fetch("https://example.com/a.md")

        assert result.failure is FetchFailure.TRANSPORT_ERROR
        assert "connection refused" in result.detail

    def test_timeout_is_transport_error(self):
        session = _session_returning()
        session.get.side_effect = requests.Timeout("read timed out")
        fetcher = DocumentFetcher(session=session)

        assert fetcher.fetch("https://example.com/a.md").failure is FetchFailure.TRANSPORT_ERROR
