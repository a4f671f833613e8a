#!filepath: tests/splitter/test_line_source.py
import gzip
import io
import random
from pathlib import Path

import pytest

from fqsplit.splitter.line_source import LineSource, strip_newline
from fqsplit.utils.errors import InputOpenError, ReadError


def test_strip_newline():
    assert strip_newline("abc\n") == "abc"
    assert strip_newline("abc\r\n") == "abc"
    assert strip_newline("abc") == "abc"
    assert strip_newline("a\rb\n") == "a\rb"
    assert strip_newline("\n") == ""


def test_plain_file(tmp_path: Path):
    p = tmp_path / "in.fastq"
    p.write_bytes(b"@h:1\nACGT\n+\nIIII\n")

    with LineSource.open(p) as source:
        assert list(source) == ["@h:1", "ACGT", "+", "IIII"]
        assert source.lines_read == 4
        assert source.name == str(p)


def test_crlf_and_missing_final_newline(tmp_path: Path):
    p = tmp_path / "in.fastq"
    p.write_bytes(b"@h:1\r\nACGT\r\n+\nIIII")

    with LineSource.open(p) as source:
        assert list(source) == ["@h:1", "ACGT", "+", "IIII"]


def test_blank_lines_are_kept(tmp_path: Path):
    p = tmp_path / "in.fastq"
    p.write_bytes(b"@h\n\nA\n")

    with LineSource.open(p) as source:
        assert list(source) == ["@h", "", "A"]


def test_long_line_has_no_limit(tmp_path: Path):
    long_seq = "A" * 200_000
    p = tmp_path / "in.fastq"
    p.write_text(f"@h\n{long_seq}\n")

    with LineSource.open(p) as source:
        assert list(source) == ["@h", long_seq]


def test_non_utf8_bytes_round_trip(tmp_path: Path):
    p = tmp_path / "in.fastq"
    p.write_bytes(b"@h\xff\n")

    with LineSource.open(p) as source:
        (line,) = list(source)

    assert line.encode("utf-8", "surrogateescape") == b"@h\xff"


def test_gzip_file(tmp_path: Path):
    p = tmp_path / "in.fastq.gz"
    with gzip.open(p, "wb") as f:
        f.write(b"@h:1\nACGT\n+\nIIII\n")

    with LineSource.open(p) as source:
        assert list(source) == ["@h:1", "ACGT", "+", "IIII"]


def test_gz_suffix_but_not_gzip(tmp_path: Path):
    p = tmp_path / "in.fastq.gz"
    p.write_bytes(b"@h:1\nACGT\n")

    with pytest.raises(InputOpenError) as exc:
        with LineSource.open(p):
            pass

    assert exc.value.kind == "input-open"


def test_truncated_gzip_is_read_error(tmp_path: Path):
    p = tmp_path / "in.fastq.gz"
    rng = random.Random(0)
    body = "".join(
        f"@h:{i}\n{''.join(rng.choice('ACGT') for _ in range(100))}\n+\nIIII\n"
        for i in range(2000)
    )
    data = gzip.compress(body.encode())
    p.write_bytes(data[: len(data) // 2])

    with pytest.raises(ReadError):
        with LineSource.open(p) as source:
            for _ in source:
                pass


def test_missing_file(tmp_path: Path):
    with pytest.raises(InputOpenError) as exc:
        with LineSource.open(tmp_path / "nope.fastq"):
            pass

    assert str(tmp_path / "nope.fastq") in str(exc.value)


def test_stdin_stream():
    raw = io.BytesIO(b"@h:1\nACGT\n")

    with LineSource.open(None, stdin=raw) as source:
        assert source.name == "<stdin>"
        assert list(source) == ["@h:1", "ACGT"]

    # stdin 本身不会被关闭
    assert not raw.closed


def test_dash_means_stdin():
    raw = io.BytesIO(b"@x\n")

    with LineSource.open("-", stdin=raw) as source:
        assert list(source) == ["@x"]


def test_file_closed_on_error(tmp_path: Path):
    p = tmp_path / "in.fastq"
    p.write_text("@h\nA\n")

    with pytest.raises(RuntimeError):
        with LineSource.open(p) as source:
            next(iter(source))
            raise RuntimeError("stop")

    assert source._handle.closed
