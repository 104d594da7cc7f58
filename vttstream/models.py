"""
Data models for vttstream.

Defines the core data structures used throughout the package.
"""

from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any, Optional

from .utils import ms_to_timestamp

# Codec identifier used for WebVTT text streams.
CODEC_WEBVTT = "wvtt"


@dataclass
class TextSample:
    """A single timed text cue produced by the parser."""
    id: str
    start_time: int  # milliseconds
    end_time: int    # milliseconds
    settings: str = ""
    payload: str = ""

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "start_time": ms_to_timestamp(self.start_time),
            "end_time": ms_to_timestamp(self.end_time),
            "start_ms": self.start_time,
            "end_ms": self.end_time,
            "settings": self.settings,
            "payload": self.payload,
        }


@dataclass
class TextStreamInfo:
    """Stream description dispatched once, before the first sample."""
    track_id: int = 0
    time_scale: int = 1000
    duration: int = 0
    codec: str = CODEC_WEBVTT
    codec_string: str = CODEC_WEBVTT
    codec_config: str = ""  # STYLE/REGION blocks, passed through opaque
    width: int = 0
    height: int = 0
    language: str = ""  # filled in by the demuxer
    is_encrypted: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ExtractionResult:
    """Everything a complete parse emitted."""
    stream_info: Optional[TextStreamInfo] = None
    samples: List[TextSample] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stream": self.stream_info.to_dict() if self.stream_info else None,
            "samples": [sample.to_dict() for sample in self.samples],
        }


@dataclass
class FetchConfig:
    """Configuration for streaming a WebVTT track over HTTP."""
    url: str
    chunk_size: int = 8192
    timeout: int = 30
    verify_ssl: bool = True
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass
class ExtractConfig:
    """Configuration for high-level sample extraction."""
    chunk_size: int = 65536
    output_file: str = "samples.json"
