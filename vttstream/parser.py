"""
Streaming WebVTT parser.

Turns WebVTT bytes into one TextStreamInfo and a sequence of TextSample
values. Blocks are classified in this order, first match wins:

1. NOTE comment      - dropped
2. STYLE block       - appended to the stream config until the first cue
3. REGION block      - same as STYLE
4. cue with an id    - id line, timing line, payload
5. cue without an id - timing line, payload
6. anything else     - fatal

Cues whose end time is not after their start time are logged and dropped.
Any fatal problem leaves the parser permanently failed.
"""

import logging
import re
from typing import Any, Callable, List, Optional

from .errors import WebVttConfigurationError
from .models import TextSample, TextStreamInfo
from .reader import BlockReader
from .utils import block_to_string, timestamp_to_ms

logger = logging.getLogger(__name__)

STREAM_INDEX = 0

HEADER = "WEBVTT"
BOM = "\ufeff"
CUE_TIMING_ARROW = "-->"

# ASCII whitespace only; U+00A0 and friends are ordinary characters here.
ASCII_WHITESPACE = " \t\n\v\f\r"
_ASCII_WHITESPACE_RUN = re.compile(r"[ \t\n\v\f\r]+")

InitCallback = Callable[[TextStreamInfo], None]
NewSampleCallback = Callable[[int, TextSample], bool]


def is_likely_note(line: str) -> bool:
    """A comment block starts with NOTE followed by a space, a tab or nothing."""
    return line == "NOTE" or line.startswith("NOTE ") or line.startswith("NOTE\t")


def is_likely_cue_timing(line: str) -> bool:
    """Only a cue timing line may contain the arrow."""
    return CUE_TIMING_ARROW in line


def maybe_cue_id(line: str) -> bool:
    """A cue identifier never contains the arrow."""
    return CUE_TIMING_ARROW not in line


def is_likely_style(line: str) -> bool:
    return line.rstrip(ASCII_WHITESPACE) == "STYLE"


def is_likely_region(line: str) -> bool:
    return line.rstrip(ASCII_WHITESPACE) == "REGION"


class WebVttParser:
    """
    Incremental WebVTT parser driven by feed()/finish().

    Example:
        >>> samples = []
        >>> parser = WebVttParser()
        >>> parser.initialize(lambda info: None,
        ...                   lambda index, sample: samples.append(sample) or True)
        >>> parser.feed(b"WEBVTT\\n\\n00:00:01.000 --> 00:00:02.000\\nHello\\n")
        True
        >>> parser.finish()
        True
        >>> samples[0].payload
        'Hello'
    """

    def __init__(self):
        """Initialize parser state."""
        self._reader = BlockReader()
        self._init_cb: Optional[InitCallback] = None
        self._new_sample_cb: Optional[NewSampleCallback] = None

        self._initialized = False
        self._stream_info_dispatched = False
        self._saw_cue = False
        self._style_region_config = ""
        self._failed = False

    @property
    def failed(self) -> bool:
        """Whether a fatal error has ended this parse."""
        return self._failed

    def initialize(
        self,
        init_cb: InitCallback,
        new_sample_cb: NewSampleCallback,
        decryption_key_source: Optional[Any] = None,
    ) -> None:
        """
        Register the output callbacks.

        Args:
            init_cb: Called once with the TextStreamInfo
            new_sample_cb: Called with (stream_index, sample) for every cue;
                must return True to accept the sample
            decryption_key_source: Must be None, encrypted WebVTT is not supported

        Raises:
            WebVttConfigurationError: If called twice or given a key source
        """
        if self._init_cb is not None:
            raise WebVttConfigurationError("Parser is already initialized")
        if init_cb is None or new_sample_cb is None:
            raise WebVttConfigurationError("Both init_cb and new_sample_cb are required")
        if decryption_key_source is not None:
            raise WebVttConfigurationError("Encrypted WebVTT is not supported")

        self._init_cb = init_cb
        self._new_sample_cb = new_sample_cb

    def feed(self, data: bytes) -> bool:
        """
        Push bytes and process every block that is now complete.

        Returns:
            False once parsing has failed, True otherwise (including when no
            complete block is available yet)
        """
        self._check_initialized()
        if self._failed:
            return False
        self._reader.push_data(data)
        return self._parse()

    def finish(self) -> bool:
        """Signal end of input and process the final block."""
        self._check_initialized()
        if self._failed:
            return False
        self._reader.flush()
        return self._parse()

    def _check_initialized(self) -> None:
        if self._new_sample_cb is None:
            raise WebVttConfigurationError("initialize() must be called before feeding data")

    def _parse(self) -> bool:
        if not self._initialized:
            block = self._reader.next_block()
            if block is None:
                return True
            if not self._parse_header(block):
                return self._fail()
            self._initialized = True

        for block in self._reader:
            if not self._parse_block(block):
                return self._fail()
        return True

    def _fail(self) -> bool:
        self._failed = True
        return False

    def _parse_header(self, block: List[str]) -> bool:
        # A BOM may come before the header text.
        if len(block) != 1:
            logger.error(
                f"Failed to read WEBVTT header - block size should be 1 but was {len(block)}."
            )
            return False
        if block[0] != HEADER and block[0] != BOM + HEADER:
            logger.error(f"Failed to read WEBVTT header - should be WEBVTT but was {block[0]}")
            return False
        return True

    def _parse_block(self, block: List[str]) -> bool:
        logger.debug(f"Parsing block:\n{block_to_string(block)}")

        if is_likely_note(block[0]):
            return True

        if is_likely_style(block[0]):
            if self._saw_cue:
                logger.warning("Found style block after seeing cue. Ignoring style block")
            else:
                self._update_config(block)
            return True

        if is_likely_region(block[0]):
            if self._saw_cue:
                logger.warning("Found region block after seeing cue. Ignoring region block")
            else:
                self._update_config(block)
            return True

        parsed = None
        if len(block) >= 2 and maybe_cue_id(block[0]) and is_likely_cue_timing(block[1]):
            parsed = self._parse_cue(block[0], block[1:])
        if parsed is None and is_likely_cue_timing(block[0]):
            parsed = self._parse_cue("", block)

        if parsed is None:
            logger.error(f"Failed to determine block classification:\n{block_to_string(block)}")
            return False

        self._saw_cue = True
        return parsed

    def _update_config(self, block: List[str]) -> None:
        if self._style_region_config:
            self._style_region_config += "\n\n"
        self._style_region_config += "\n".join(block)

    def _parse_cue(self, cue_id: str, lines: List[str]) -> Optional[bool]:
        """
        Parse a cue from its timing line and payload lines.

        Returns:
            None if the timing line is malformed, otherwise whether the
            sample callback accepted the cue (True for dropped cues)
        """
        time_and_style = [token for token in _ASCII_WHITESPACE_RUN.split(lines[0]) if token]

        start_time = end_time = None
        if len(time_and_style) >= 3 and time_and_style[1] == CUE_TIMING_ARROW:
            start_time = timestamp_to_ms(time_and_style[0])
            end_time = timestamp_to_ms(time_and_style[2])

        if start_time is None or end_time is None:
            logger.error(f"Could not parse start time, -->, and end time from {lines[0]}")
            return None

        if not self._stream_info_dispatched:
            self._dispatch_stream_info()

        if end_time <= start_time:
            logger.warning(
                f"WebVTT input is not compliant. Start time ({start_time}) should be "
                f"less than end time ({end_time}). Skipping webvtt cue:\n{block_to_string(lines)}"
            )
            return True

        sample = TextSample(
            id=cue_id,
            start_time=start_time,
            end_time=end_time,
            settings=" ".join(time_and_style[3:]),
            payload="\n".join(lines[1:]),
        )

        if not self._new_sample_cb(STREAM_INDEX, sample):
            logger.error(f"Sample at {sample.start_time}ms was rejected by the sample callback")
            return False
        return True

    def _dispatch_stream_info(self) -> None:
        self._stream_info_dispatched = True
        # Language is left empty; the demuxer fills it in later.
        stream_info = TextStreamInfo(codec_config=self._style_region_config)
        logger.debug(f"Dispatching text stream info (config: {len(stream_info.codec_config)} chars)")
        self._init_cb(stream_info)
