import io

import pytest

from waysim.trace import Access, Kind, TraceError, readTrace


def test_read_trace():
    fp = io.StringIO("r 0x7fff0010\nw7fff0014\n\n  r 10  \nw 0xFFFFFFFFFFFFFFFF\n")
    assert readTrace(fp) == (
        Access(Kind.READ, 0x7fff0010),
        Access(Kind.WRITE, 0x7fff0014),
        Access(Kind.READ, 0x10),
        Access(Kind.WRITE, (1 << 64) - 1),
    )


def test_read_trace_logs_counts(caplog):
    with caplog.at_level("INFO", logger="waysim.trace"):
        readTrace(io.StringIO("r 1\nw 2\nw 3\n"))
    assert "Read 3 entries: 1 reads, 2 writes" in caplog.text


def test_skip_and_limit():
    fp = io.StringIO("".join("r %x\n" % i for i in range(10)))
    accesses = readTrace(fp, nLines=3, skip=2)
    assert [a.addr for a in accesses] == [2, 3, 4]


@pytest.mark.parametrize("text, lineno", [
    ("r 1\nx 10\n", 2),
    ("r zz\n", 1),
    ("w\n", 1),
    ("r 1\n\nr 1ffffffffffffffff\n", 3),
    ("r -1\n", 1),
])
def test_malformed_lines(text, lineno):
    with pytest.raises(TraceError) as info:
        readTrace(io.StringIO(text))
    assert info.value.lineno == lineno
    assert isinstance(info.value, ValueError)
