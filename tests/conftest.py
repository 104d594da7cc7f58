"""Shared fixtures for the vttstream test suite."""

from typing import List

import pytest

from vttstream import STREAM_INDEX, TextSample, TextStreamInfo, WebVttParser


class Recorder:
    """Records everything a parser emits."""

    def __init__(self, accept: bool = True):
        self.accept = accept
        self.streams: List[TextStreamInfo] = []
        self.samples: List[TextSample] = []

    def init_cb(self, stream_info: TextStreamInfo) -> None:
        self.streams.append(stream_info)

    def new_sample_cb(self, stream_index: int, sample: TextSample) -> bool:
        assert stream_index == STREAM_INDEX
        self.samples.append(sample)
        return self.accept


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def parser(recorder):
    vtt_parser = WebVttParser()
    vtt_parser.initialize(recorder.init_cb, recorder.new_sample_cb)
    return vtt_parser
