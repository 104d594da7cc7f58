"""
High-level sample extraction.

Wraps WebVttParser for the common case of wanting every sample of a whole
track at once: from an in-memory document, a local file or a URL, with an
optional JSON dump of the result.
"""

import json
import logging
from typing import Iterable, Optional, Union

from .downloader import VTTDownloader
from .errors import WebVttParseError
from .models import ExtractConfig, ExtractionResult, FetchConfig, TextSample, TextStreamInfo
from .parser import WebVttParser

logger = logging.getLogger(__name__)


class SampleExtractor:
    """
    Collects the output of a complete parse into an ExtractionResult.

    Example:
        >>> extractor = SampleExtractor()
        >>> result = extractor.extract_content(
        ...     "WEBVTT\\n\\n00:00:01.000 --> 00:00:02.000\\nHello\\n"
        ... )
        >>> [sample.payload for sample in result.samples]
        ['Hello']
    """

    def __init__(self, downloader: Optional[VTTDownloader] = None):
        """
        Initialize extractor.

        Args:
            downloader: Downloader used by extract_url. It is not closed by the
                extractor; without one each call uses its own.
        """
        self._downloader = downloader

    def _new_parser(self, result: ExtractionResult) -> WebVttParser:
        def on_stream_info(stream_info: TextStreamInfo) -> None:
            result.stream_info = stream_info

        def on_sample(stream_index: int, sample: TextSample) -> bool:
            result.samples.append(sample)
            return True

        parser = WebVttParser()
        parser.initialize(on_stream_info, on_sample)
        return parser

    def _extract_chunks(self, chunks: Iterable[bytes], source: str) -> ExtractionResult:
        result = ExtractionResult()
        parser = self._new_parser(result)

        for chunk in chunks:
            if not parser.feed(chunk):
                raise WebVttParseError(f"Failed to parse WebVTT from {source}")
        if not parser.finish():
            raise WebVttParseError(f"Failed to parse WebVTT from {source}")

        logger.info(f"Extracted {len(result.samples)} samples from {source}")
        return result

    def extract_content(
        self,
        content: Union[bytes, str],
        chunk_size: Optional[int] = None
    ) -> ExtractionResult:
        """
        Parse an in-memory WebVTT document.

        Args:
            content: Document as bytes, or as text (encoded to UTF-8)
            chunk_size: Feed the parser in chunks of this size (default: all at once)

        Raises:
            WebVttParseError: If the document is not valid WebVTT
        """
        if isinstance(content, str):
            content = content.encode('utf-8')

        if chunk_size:
            chunks = [content[i:i + chunk_size] for i in range(0, len(content), chunk_size)]
        else:
            chunks = [content]
        return self._extract_chunks(chunks, "content")

    def extract_file(self, vtt_file: str, chunk_size: int = 65536) -> ExtractionResult:
        """
        Parse a WebVTT file, reading it in chunks.

        Raises:
            WebVttParseError: If the file is not valid WebVTT
            OSError: If the file cannot be read
        """
        logger.info(f"Parsing WebVTT file: {vtt_file}")
        with open(vtt_file, 'rb') as f:
            chunks = iter(lambda: f.read(chunk_size), b'')
            return self._extract_chunks(chunks, vtt_file)

    def extract_url(self, url: str, **fetch_kwargs) -> ExtractionResult:
        """
        Stream and parse a WebVTT track from a URL.

        Keyword arguments are passed to VTTDownloader.stream. Without an
        injected downloader a short-lived one is used and its session is
        closed before returning.

        Raises:
            WebVttParseError: If the track is not valid WebVTT
            requests.RequestException: If the download fails
        """
        if self._downloader is None:
            with VTTDownloader() as downloader:
                return self._extract_url_with(downloader, url, fetch_kwargs)
        return self._extract_url_with(self._downloader, url, fetch_kwargs)

    def _extract_url_with(self, downloader: VTTDownloader, url: str, fetch_kwargs: dict) -> ExtractionResult:
        result = ExtractionResult()
        parser = self._new_parser(result)
        if not downloader.stream(url, parser, **fetch_kwargs):
            raise WebVttParseError(f"Failed to parse WebVTT from {url}")

        logger.info(f"Extracted {len(result.samples)} samples from {url}")
        return result

    def extract_url_from_config(self, config: FetchConfig) -> ExtractionResult:
        """Stream and parse a track using a FetchConfig object."""
        return self.extract_url(
            config.url,
            chunk_size=config.chunk_size,
            timeout=config.timeout,
            verify_ssl=config.verify_ssl,
            headers=config.headers or None,
        )

    def extract_to_json(
        self,
        vtt_file: str,
        output_file: str = "samples.json",
        chunk_size: int = 65536
    ) -> dict:
        """
        Parse a WebVTT file and write its stream info and samples as JSON.

        Returns:
            Dictionary containing:
                - samples_path: Path to the written JSON file
                - samples_count: Number of samples extracted

        Example:
            >>> extractor = SampleExtractor()
            >>> result = extractor.extract_to_json("track.vtt", "samples.json")
            >>> print(f"Extracted {result['samples_count']} samples")
        """
        result = self.extract_file(vtt_file, chunk_size=chunk_size)

        with open(output_file, 'w', encoding='utf-8') as f:
            json.dump(result.to_dict(), f, indent=2, ensure_ascii=False)

        logger.info(f"Wrote {len(result.samples)} samples to {output_file}")
        return {
            "samples_path": output_file,
            "samples_count": len(result.samples),
        }

    def extract_to_json_from_config(self, vtt_file: str, config: ExtractConfig) -> dict:
        """Write samples JSON using an ExtractConfig object."""
        return self.extract_to_json(
            vtt_file,
            output_file=config.output_file,
            chunk_size=config.chunk_size,
        )
