"""
vttstream - Streaming WebVTT parser for media packaging

Turns a WebVTT subtitle track, delivered in chunks of any size, into a
single text stream description plus a sequence of timed text samples.

Features:
- Incremental block reader, independent of how input is chunked
- Cue parser with NOTE/STYLE/REGION handling and cue ids/settings
- Tolerant handling of zero-duration cues, strict handling of garbage
- Streaming straight from HTTP URLs
- JSON output of extracted samples

Example usage:
    >>> from vttstream import WebVttParser
    >>>
    >>> samples = []
    >>> parser = WebVttParser()
    >>> parser.initialize(
    ...     init_cb=lambda stream_info: print(stream_info.codec),
    ...     new_sample_cb=lambda index, sample: samples.append(sample) or True,
    ... )
    >>> for chunk in chunks:
    ...     if not parser.feed(chunk):
    ...         break
    >>> parser.finish()
"""

import logging

__version__ = "0.1.0"
__author__ = "vttstream Contributors"
__license__ = "MIT"

# Add NullHandler to prevent "No handler found" warnings
# Users should configure logging in their application if they want to see logs
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Core utility functions
from .utils import timestamp_to_ms, ms_to_timestamp, block_to_string

# Main classes
from .reader import BlockReader
from .parser import WebVttParser, STREAM_INDEX
from .downloader import VTTDownloader, iter_url_chunks
from .extractor import SampleExtractor

# Errors
from .errors import VTTStreamError, WebVttConfigurationError, WebVttParseError

# Data models
from .models import (
    CODEC_WEBVTT,
    TextSample,
    TextStreamInfo,
    ExtractionResult,
    FetchConfig,
    ExtractConfig,
)

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__license__",

    # Utility functions
    "timestamp_to_ms",
    "ms_to_timestamp",
    "block_to_string",

    # Main classes
    "BlockReader",
    "WebVttParser",
    "STREAM_INDEX",
    "VTTDownloader",
    "iter_url_chunks",
    "SampleExtractor",

    # Errors
    "VTTStreamError",
    "WebVttConfigurationError",
    "WebVttParseError",

    # Models
    "CODEC_WEBVTT",
    "TextSample",
    "TextStreamInfo",
    "ExtractionResult",
    "FetchConfig",
    "ExtractConfig",
]
