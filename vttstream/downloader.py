"""
HTTP source for vttstream.

Streams a WebVTT track from an HTTP/HTTPS URL straight into a parser, chunk
by chunk, so cues are emitted while the body is still downloading.
"""

import logging
from typing import Dict, Iterator, Optional

import requests

from .models import FetchConfig
from .parser import WebVttParser

logger = logging.getLogger(__name__)


def iter_url_chunks(
    url: str,
    chunk_size: int = 8192,
    timeout: int = 30,
    verify_ssl: bool = True,
    headers: Optional[Dict[str, str]] = None,
    session: Optional[requests.Session] = None,
) -> Iterator[bytes]:
    """
    Yield the raw body of a URL in chunks.

    Args:
        url: URL of the WebVTT resource
        chunk_size: Maximum size of each yielded chunk in bytes
        timeout: Request timeout in seconds (default: 30)
        verify_ssl: Whether to verify SSL certificates
        headers: Extra request headers
        session: Session to issue the request on (default: module-level requests)

    Raises:
        requests.HTTPError: If the server answers with an error status
    """
    http = session if session is not None else requests
    logger.info(f"Streaming WebVTT from: {url[:100]}")

    with http.get(url, stream=True, timeout=timeout, verify=verify_ssl, headers=headers) as response:
        response.raise_for_status()
        for chunk in response.iter_content(chunk_size=chunk_size):
            # Keep-alive chunks are empty
            if chunk:
                yield chunk


class VTTDownloader:
    """
    Feeds WebVTT tracks from HTTP URLs into a WebVttParser.

    Owns an optional requests.Session; close it with close() or use the
    downloader as a context manager.
    """

    def __init__(self, session: Optional[requests.Session] = None):
        """
        Initialize downloader.

        Args:
            session: Session to reuse. When omitted one is created on first use
                and closed by close().
        """
        self._session = session
        self._owns_session = session is None

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def close(self) -> None:
        """Release the session if this downloader created it."""
        if self._owns_session and self._session is not None:
            self._session.close()
            self._session = None

    def __enter__(self) -> "VTTDownloader":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def stream(
        self,
        url: str,
        parser: WebVttParser,
        chunk_size: int = 8192,
        timeout: int = 30,
        verify_ssl: bool = True,
        headers: Optional[Dict[str, str]] = None,
    ) -> bool:
        """
        Download a WebVTT track and feed it to an initialized parser.

        Feeding stops at the first chunk the parser rejects; otherwise the
        parser is finished once the body is exhausted.

        Returns:
            True if the whole track parsed successfully, False otherwise

        Raises:
            requests.RequestException: If the download itself fails
        """
        chunks = iter_url_chunks(
            url,
            chunk_size=chunk_size,
            timeout=timeout,
            verify_ssl=verify_ssl,
            headers=headers,
            session=self.session,
        )

        total_bytes = 0
        for chunk in chunks:
            total_bytes += len(chunk)
            if not parser.feed(chunk):
                logger.error(f"Parsing failed after {total_bytes} bytes from {url[:100]}")
                chunks.close()
                return False

        ok = parser.finish()
        if ok:
            logger.info(f"Streamed {total_bytes} bytes of WebVTT from {url[:100]}")
        else:
            logger.error(f"Parsing failed at end of stream from {url[:100]}")
        return ok

    def stream_from_config(self, config: FetchConfig, parser: WebVttParser) -> bool:
        """Stream a track using a FetchConfig object."""
        return self.stream(
            url=config.url,
            parser=parser,
            chunk_size=config.chunk_size,
            timeout=config.timeout,
            verify_ssl=config.verify_ssl,
            headers=config.headers or None,
        )
