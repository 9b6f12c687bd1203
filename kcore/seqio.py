"""Streaming reader for FASTA and FASTQ records.

Records may span several sequence lines. Blank lines inside a sequence are
skipped, and a trailing carriage return on a line is dropped. A FASTQ
quality string is read over as many lines as it takes to match the length
of the sequence.
"""

import re
from dataclasses import dataclass
from typing import IO, Iterator, List, Optional, Tuple

_BUFSIZE = 16384
_SPACE = re.compile(rb"[ \t\n\v\f\r]")
_NL = ord("\n")
_CR = ord("\r")
_GT = ord(">")
_AT = ord("@")
_PLUS = ord("+")


@dataclass
class SeqRecord:
    """One record; ``qual`` is None for FASTA."""

    name: str
    comment: str = ""
    seq: str = ""
    qual: Optional[str] = None

    def __len__(self) -> int:
        return len(self.seq)


class TruncatedQualityError(ValueError):
    """A FASTQ quality string is missing or differs in length from the sequence."""


def _decode(data: bytes) -> str:
    return data.decode("utf-8", "surrogateescape")


def _strip_cr(data: bytearray) -> None:
    if len(data) > 1 and data[-1] == _CR:
        del data[-1]


class _Stream:
    """Buffered byte reader over a binary or text file object."""

    def __init__(self, f: IO):
        self._f = f
        self._buf = b""
        self._begin = 0
        self._eof = False

    def _fill(self) -> bool:
        data = self._f.read(_BUFSIZE)
        if isinstance(data, str):
            data = data.encode("utf-8", "surrogateescape")
        self._buf = data or b""
        self._begin = 0
        if not data:
            self._eof = True
        return bool(data)

    def getc(self) -> int:
        """Return the next byte, or -1 at end of input."""
        if self._begin >= len(self._buf):
            if self._eof or not self._fill():
                return -1
        c = self._buf[self._begin]
        self._begin += 1
        return c

    def getuntil(self, line: bool) -> Tuple[Optional[bytes], int]:
        """Read up to a newline (``line``) or any whitespace.

        Returns the bytes read, without the delimiter, and the delimiter
        (0 at end of input). The bytes are None if input was already exhausted.
        """
        parts: List[bytes] = []
        got = False
        delim = 0
        while True:
            if self._begin >= len(self._buf):
                if self._eof or not self._fill():
                    break
            buf, b = self._buf, self._begin
            if line:
                i = buf.find(b"\n", b)
                if i < 0:
                    i = len(buf)
            else:
                m = _SPACE.search(buf, b)
                i = m.start() if m else len(buf)
            got = True
            parts.append(buf[b:i])
            self._begin = i + 1
            if i < len(buf):
                delim = buf[i]
                break
        if not got:
            return None, 0
        return b"".join(parts), delim


class SeqReader:
    """Reads FASTA/FASTQ records one at a time from a file object."""

    def __init__(self, stream: IO):
        self._stream = _Stream(stream)
        self._last_char = 0

    def read(self) -> Optional[SeqRecord]:
        """Return the next record, or None at end of input.

        Raises TruncatedQualityError for a malformed FASTQ quality string.
        """
        s = self._stream
        if self._last_char == 0:
            c = s.getc()
            while c >= 0 and c != _GT and c != _AT:
                c = s.getc()
            if c < 0:
                return None
            self._last_char = c
        name, c = s.getuntil(line=False)
        if name is None:
            return None
        comment = bytearray()
        if c != _NL:
            chunk, _ = s.getuntil(line=True)
            if chunk is not None:
                comment += chunk
                _strip_cr(comment)
        seq = bytearray()
        c = s.getc()
        while c >= 0 and c not in (_GT, _PLUS, _AT):
            if c != _NL:
                seq.append(c)
                chunk, _ = s.getuntil(line=True)
                if chunk is not None:
                    seq += chunk
                    _strip_cr(seq)
            c = s.getc()
        if c in (_GT, _AT):
            self._last_char = c
        record = SeqRecord(_decode(name), _decode(bytes(comment)), _decode(bytes(seq)))
        if c != _PLUS:
            return record
        c = s.getc()
        while c >= 0 and c != _NL:
            c = s.getc()
        if c < 0:
            raise TruncatedQualityError(f"no quality string for record {record.name!r}")
        qual = bytearray()
        while True:
            chunk, _ = s.getuntil(line=True)
            if chunk is None:
                break
            qual += chunk
            _strip_cr(qual)
            if len(qual) >= len(seq):
                break
        self._last_char = 0
        if len(qual) != len(seq):
            raise TruncatedQualityError(
                f"quality length {len(qual)} differs from sequence length {len(seq)} "
                f"for record {record.name!r}"
            )
        record.qual = _decode(bytes(qual))
        return record

    def __iter__(self) -> Iterator[SeqRecord]:
        while True:
            record = self.read()
            if record is None:
                return
            yield record


def read_records(stream: IO) -> Iterator[SeqRecord]:
    """Yield every FASTA/FASTQ record in ``stream``."""
    yield from SeqReader(stream)