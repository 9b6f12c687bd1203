import io

import pytest

from kcore.seqio import SeqReader, SeqRecord, TruncatedQualityError, read_records


def _records(data):
    return list(read_records(io.BytesIO(data)))


def test_fasta_multiline_with_comments():
    recs = _records(b">a first one\nAC\n\nGT\n>b\n\nTT")
    assert [r.name for r in recs] == ["a", "b"]
    assert recs[0].comment == "first one"
    assert recs[0].seq == "ACGT"
    assert recs[1].comment == ""
    assert recs[1].seq == "TT"
    assert all(r.qual is None for r in recs)


def test_fastq_records():
    recs = _records(b"@r1\nACGT\n+\nIIII\n@r2 x\nGG\n+r2\n!!\n")
    assert recs == [
        SeqRecord("r1", "", "ACGT", "IIII"),
        SeqRecord("r2", "x", "GG", "!!"),
    ]


def test_fastq_quality_starting_with_at():
    recs = _records(b"@r1\nAC\n+\n@I\n@r2\nG\n+\nI\n")
    assert [r.qual for r in recs] == ["@I", "I"]
    assert [r.name for r in recs] == ["r1", "r2"]


def test_multiline_quality():
    recs = _records(b"@r\nACGT\nAC\n+\nIII\nIII\n")
    assert recs[0].seq == "ACGTAC"
    assert recs[0].qual == "IIIIII"


def test_crlf_is_stripped():
    recs = _records(b">r1 desc\r\nAC\r\nGT\r\n")
    assert recs[0].name == "r1"
    assert recs[0].comment == "desc"
    assert recs[0].seq == "ACGT"


def test_leading_junk_is_skipped():
    recs = _records(b"junk line\n>a\nAC\n")
    assert [(r.name, r.seq) for r in recs] == [("a", "AC")]


def test_empty_sequence_record():
    recs = _records(b">a\n>b\nAC\n")
    assert [(r.name, r.seq) for r in recs] == [("a", ""), ("b", "AC")]


def test_empty_input():
    assert _records(b"") == []
    assert SeqReader(io.BytesIO(b"no header here\n")).read() is None


def test_text_stream():
    recs = list(read_records(io.StringIO(">x y\nACGT\n")))
    assert recs == [SeqRecord("x", "y", "ACGT", None)]


def test_long_sequence_across_buffers():
    line = b"ACGT" * 25 + b"\n"
    data = b">long\n" + line * 500 + b">short\nA\n"
    recs = _records(data)
    assert len(recs[0]) == len(line.strip()) * 500
    assert set(recs[0].seq) == set("ACGT")
    assert recs[1].seq == "A"


def test_short_quality_raises():
    with pytest.raises(TruncatedQualityError):
        _records(b"@r\nACGT\n+\nII\n")


def test_missing_quality_line_raises():
    with pytest.raises(TruncatedQualityError):
        _records(b"@r\nACGT\n+")


def test_reader_returns_none_after_end():
    reader = SeqReader(io.BytesIO(b">a\nAC\n"))
    assert reader.read().seq == "AC"
    assert reader.read() is None
    assert reader.read() is None