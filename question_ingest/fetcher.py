"""
HTTP client for downloading question documents.

This module retrieves the raw markdown of one document at a time. Problems
are reported as ``FetchResult`` values so that one bad document never stops
an import run.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Dict, Optional

import requests


logger = logging.getLogger(__name__)

USER_AGENT = "question-ingest/1.0 (+batch importer)"
DEFAULT_TIMEOUT = 30.0
MIN_DOCUMENT_LENGTH = 100


class FetchFailure(enum.Enum):
    TRANSPORT_ERROR = "transport-error"
    NON_SUCCESS_STATUS = "non-success-status"
    UNDERSIZED_RESPONSE = "undersized-response"


@dataclass
class FetchResult:
    """
    Outcome of fetching one document.

    Attributes:
        url: The requested location
        text: Document body when the fetch succeeded
        failure: Failure kind, None on success
        detail: Human-readable description of the failure
    """
    url: str
    text: Optional[str] = None
    failure: Optional[FetchFailure] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.failure is None


class DocumentFetcher:
    """
    Downloads plain-text documents over HTTP.

    One ``requests.Session`` is kept for the lifetime of the fetcher so that
    consecutive documents from the same host reuse the connection.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        min_length: int = MIN_DOCUMENT_LENGTH,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout = timeout
        self.min_length = min_length
        self.session = session or requests.Session()
        headers: Dict[str, str] = {
            "User-Agent": USER_AGENT,
            "Accept": "text/plain, text/markdown;q=0.9, */*;q=0.5",
        }
        self.session.headers.update(headers)

    def fetch(self, url: str) -> FetchResult:
        """
        Fetch one document.

        Args:
            url: Fully resolved document location

        Returns:
            FetchResult carrying either the text or the failure kind. Responses
            shorter than ``min_length`` characters are treated as failures, they
            are usually error or placeholder pages.
        """
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.debug("Transport error for %s: %s", url, e)
            return FetchResult(url, failure=FetchFailure.TRANSPORT_ERROR, detail=str(e))

        if response.status_code != 200:
            return FetchResult(
                url,
                failure=FetchFailure.NON_SUCCESS_STATUS,
                detail=f"HTTP {response.status_code}",
            )

        text = response.text
        if len(text) < self.min_length:
            return FetchResult(
                url,
                failure=FetchFailure.UNDERSIZED_RESPONSE,
                detail=f"{len(text)} characters",
            )

        return FetchResult(url, text=text)

    def close(self) -> None:
        self.session.close()
