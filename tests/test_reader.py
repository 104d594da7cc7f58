from unittest import mock

from vttstream.reader import BlockReader


def _read_all(chunks, flush=True):
    reader = BlockReader()
    blocks = []
    for chunk in chunks:
        reader.push_data(chunk)
        blocks.extend(reader)
    if flush:
        reader.flush()
        blocks.extend(reader)
    return blocks


def test_blocks_split_on_blank_lines():
    blocks = _read_all([b"WEBVTT\n\nline one\nline two\n\nlast\n"])
    assert blocks == [["WEBVTT"], ["line one", "line two"], ["last"]]


def test_incomplete_block_waits_for_more_data():
    reader = BlockReader()
    reader.push_data(b"WEBVTT\n\n00:00.000 --> 00:01.000\nhello\n")
    assert reader.next_block() == ["WEBVTT"]
    assert reader.next_block() is None
    reader.push_data(b"\n")
    assert reader.next_block() == ["00:00.000 --> 00:01.000", "hello"]
    assert reader.next_block() is None


def test_flush_releases_unterminated_block():
    reader = BlockReader()
    reader.push_data(b"WEBVTT\n\nno newline")
    assert reader.next_block() == ["WEBVTT"]
    assert reader.next_block() is None
    reader.flush()
    assert reader.next_block() == ["no newline"]
    assert reader.next_block() is None


def test_consecutive_blank_lines_collapse():
    blocks = _read_all([b"\n\nA\n\n\n\n\nB\n\n\n"])
    assert blocks == [["A"], ["B"]]


def test_crlf_and_cr_line_endings():
    blocks = _read_all([b"A\r\nB\r\n\r\nC\rD\r\rE"])
    assert blocks == [["A", "B"], ["C", "D"], ["E"]]


def test_trailing_cr_waits_for_next_byte():
    reader = BlockReader()
    reader.push_data(b"A\r\n\r")
    assert reader.next_block() is None
    reader.push_data(b"\nB")
    assert reader.next_block() == ["A"]


def test_bom_is_preserved():
    blocks = _read_all([b"\xef\xbb\xbfWEBVTT\n\n"])
    assert blocks == [["\ufeffWEBVTT"]]


def test_whitespace_only_line_is_not_a_separator():
    blocks = _read_all([b"A\n \nB\n"])
    assert blocks == [["A", " ", "B"]]


def test_empty_input():
    assert _read_all([b""]) == []
    assert _read_all([b"\n\n\n"]) == []


def test_byte_at_a_time_matches_single_chunk():
    document = (
        b"\xef\xbb\xbfWEBVTT\r\n\r\n"
        b"NOTE a comment\r\n\r\n"
        b"id\r\n00:01.000 --> 00:02.000 align:start\r\n"
        b"multi\rline\n\n\n"
        b"00:02.000 --> 00:03.000\npayload"
    )
    whole = _read_all([document])
    single_bytes = _read_all([document[i:i + 1] for i in range(len(document))])
    assert whole == single_bytes
    assert len(whole) == 4


def test_chunk_sizes_do_not_matter():
    document = b"WEBVTT\n\nA\nB\n\nC\r\n\r\nD\rE\r\r"
    expected = _read_all([document])
    for size in range(1, len(document) + 1):
        chunks = [document[i:i + size] for i in range(0, len(document), size)]
        assert _read_all(chunks) == expected


def test_no_blocks_after_flush_exhausted():
    reader = BlockReader()
    reader.push_data(b"A")
    reader.flush()
    assert list(reader) == [["A"]]
    assert list(reader) == []


def _count_line_reads(document):
    read_line = BlockReader._read_line
    with mock.patch.object(BlockReader, "_read_line", autospec=True, side_effect=read_line) as spy:
        blocks = _read_all([document[i:i + 1] for i in range(len(document))])
    return spy.call_count, blocks


def test_byte_at_a_time_reads_each_line_once():
    small = b"WEBVTT\n\n" + b"".join(b"line %03d\n" % i for i in range(100))
    large = b"WEBVTT\n\n" + b"".join(b"line %03d\n" % i for i in range(400))

    small_reads, small_blocks = _count_line_reads(small)
    large_reads, large_blocks = _count_line_reads(large)

    assert len(small_blocks[1]) == 100
    assert len(large_blocks[1]) == 400
    # At most one unproductive read per pushed byte plus one per line
    assert small_reads <= 2 * len(small) + 2
    assert large_reads <= 2 * len(large) + 2


def test_partial_line_survives_between_calls():
    reader = BlockReader()
    for byte in b"abc\r":
        reader.push_data(bytes([byte]))
        assert reader.next_block() is None
    reader.push_data(b"\ndef\n\n")
    assert reader.next_block() == ["abc", "def"]
