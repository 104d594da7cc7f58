"""
Streaming example.

Feeds a remote WebVTT track into the parser while it downloads and prints
each cue as soon as its block is complete.
"""

import logging
import sys

from vttstream import FetchConfig, VTTDownloader, WebVttParser, ms_to_timestamp


def on_stream_info(stream_info):
    print(f"Stream: codec={stream_info.codec} timescale={stream_info.time_scale}")
    if stream_info.codec_config:
        print(stream_info.codec_config)


def on_sample(stream_index, sample):
    print(f"[{ms_to_timestamp(sample.start_time)} --> {ms_to_timestamp(sample.end_time)}] {sample.payload}")
    return True


def main():
    logging.basicConfig(level=logging.INFO)

    url = sys.argv[1] if len(sys.argv) > 1 else "https://example.com/subtitles.vtt"
    config = FetchConfig(url=url, chunk_size=1024)

    parser = WebVttParser()
    parser.initialize(on_stream_info, on_sample)

    with VTTDownloader() as downloader:
        if not downloader.stream_from_config(config, parser):
            print("Failed to parse WebVTT track")
            sys.exit(1)

if __name__ == "__main__":
    main()
