from vttstream.utils import block_to_string, ms_to_timestamp, timestamp_to_ms


def test_timestamp_with_hours():
    assert timestamp_to_ms("01:02:03.004") == 3723004


def test_timestamp_without_hours():
    assert timestamp_to_ms("02:03.004") == 123004


def test_timestamp_hours_unbounded():
    assert timestamp_to_ms("1000:00:00.000") == 1000 * 3600 * 1000
    # Larger than 32 bits of milliseconds
    assert timestamp_to_ms("2000:00:00.001") == 7200000001


def test_timestamp_rejects_bad_shapes():
    for bad in [
        "",
        "1:00.000",
        "0:00:00.000",
        "00:00:00,000",
        "00:00:00.00",
        "00:00:00.0000",
        "00:60:00.000",
        "00:00:60.000",
        "00:00:00.000x",
        " 00:00:00.000",
        "-->",
        "aa:bb.ccc",
        "00:01.000\n",
        "00:00:01.000\n",
    ]:
        assert timestamp_to_ms(bad) is None, bad


def test_timestamp_edge_values():
    assert timestamp_to_ms("00:00.000") == 0
    assert timestamp_to_ms("59:59.999") == 3599999


def test_ms_to_timestamp():
    assert ms_to_timestamp(0) == "00:00:00.000"
    assert ms_to_timestamp(3723004) == "01:02:03.004"
    assert ms_to_timestamp(360000000) == "100:00:00.000"


def test_block_to_string():
    text = block_to_string(["a", "b"])
    assert text.startswith(" --- BLOCK START ---\n")
    assert "    a\n    b\n" in text
    assert text.endswith(" --- BLOCK END ---")
