"""Upstream probe gateway.

The only module that talks HTTP. Every failure (network error, non-success
status, malformed JSON) is turned into None/False here so callers deal with
one shape of "did not work". Components receive a gateway instance, tests
hand them a fake one.

requests does not guarantee a Session is thread-safe, so unless a session
is injected each calling thread gets its own.
"""

import threading
from typing import Any, Iterator

import requests
import urllib3

import config
from logging_config import get_logger
from utils import sanitize_for_log

logger = get_logger(__name__)


class ProbeGateway:
    """HTTP access to identity, geolocation and bandwidth endpoints."""

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float = config.TIMEOUT_SECONDS,
    ) -> None:
        """Create gateway.

        Args:
            session: Session shared by all threads (default: one new
                session per calling thread, with our User-Agent)
            timeout: Per-request timeout in seconds
        """
        self.timeout = timeout
        self._shared = session
        self._local = threading.local()
        self._owned: list[requests.Session] = []
        self._lock = threading.Lock()

    @property
    def session(self) -> requests.Session:
        """Session for the calling thread."""
        if self._shared is not None:
            return self._shared

        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers["User-Agent"] = config.USER_AGENT
            self._local.session = session
            with self._lock:
                self._owned.append(session)
        return session

    def get_json(self, url: str) -> dict[str, Any] | None:
        """GET url and decode a JSON object.

        Single attempt, no retry.

        Args:
            url: URL to request

        Returns:
            Decoded JSON object, or None on transport error, non-success
            status, invalid JSON or a payload that is not an object.
        """
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            logger.debug("GET %s failed: %s", url, sanitize_for_log(e))
            return None
        except ValueError:
            logger.debug("Invalid JSON from %s", url)
            return None

        if not isinstance(data, dict):
            logger.debug("Unexpected JSON shape from %s: %s", url, type(data).__name__)
            return None

        return data

    def head(self, url: str) -> bool:
        """Issue a HEAD request.

        Args:
            url: URL to request

        Returns:
            True if the server answered with a success status.
        """
        try:
            response = self.session.head(
                url,
                timeout=self.timeout,
                headers={"Cache-Control": "no-cache"},
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.debug("HEAD %s failed: %s", url, sanitize_for_log(e))
            return False
        return True

    def open_stream(
        self,
        url: str,
        read_timeout: float | None = None,
    ) -> requests.Response | None:
        """Open a streamed GET response.

        The caller owns the response and must close() it, which also
        cancels any remaining transfer.

        Args:
            url: URL to request
            read_timeout: Longest wait for body bytes (default: per-request timeout)

        Returns:
            Response with unread body, or None if the request failed.
        """
        try:
            response = self.session.get(
                url,
                stream=True,
                timeout=(self.timeout, read_timeout or self.timeout),
                headers={"Cache-Control": "no-cache"},
            )
        except requests.RequestException as e:
            logger.debug("Stream %s failed: %s", url, sanitize_for_log(e))
            return None

        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            response.close()
            logger.debug("Stream %s failed: %s", url, sanitize_for_log(e))
            return None

        return response

    def iter_available(
        self,
        response: requests.Response,
        chunk_size: int,
    ) -> Iterator[bytes]:
        """Yield body bytes of a streamed response as they arrive.

        Each read returns whatever is buffered, up to chunk_size, instead
        of waiting for a full chunk. urllib3 errors are raised as
        requests.ConnectionError.

        Args:
            response: Response from open_stream
            chunk_size: Upper bound per read

        Yields:
            Non-empty byte strings until the body ends.
        """
        while True:
            try:
                chunk = response.raw.read1(chunk_size, decode_content=True)
            except urllib3.exceptions.HTTPError as e:
                raise requests.ConnectionError(e) from e
            if not chunk:
                return
            yield chunk

    def post(self, url: str, data: bytes, timeout: float | None = None) -> bool:
        """POST a raw body and wait for the full response.

        Args:
            url: URL to post to
            data: Request body
            timeout: Override for the per-request timeout

        Returns:
            True if the server acknowledged with a success status.
        """
        try:
            response = self.session.post(
                url,
                data=data,
                timeout=timeout or self.timeout,
                headers={
                    "Cache-Control": "no-cache",
                    "Content-Type": "application/octet-stream",
                },
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.debug("POST %s failed: %s", url, sanitize_for_log(e))
            return False
        return True

    def close(self) -> None:
        """Release pooled connections of every session in use."""
        if self._shared is not None:
            self._shared.close()

        with self._lock:
            owned, self._owned = self._owned, []
        for session in owned:
            session.close()
