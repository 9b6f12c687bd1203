# kcore

A small, dependency-free collection of data structures and algorithms for
Python 3.10 and later.

## What is inside

| Module | Contents |
| --- | --- |
| `kcore.bits` | `popcount64`, `dna_count64` (count one 2-bit symbol in a packed 64-bit word), `roundup32` |
| `kcore.rng` | `splitmix64` and `Rng`, a xoroshiro128+ generator with `seed`, `next_u64`, `random` and `jump` |
| `kcore.ringdeque` | `RingDeque`, a power-of-two ring buffer with `push`, `pop`, `unshift`, `shift`, `first`, `last`, `resize` and `capacity` |
| `kcore.options` | `OptionScanner` and `parse_options`, a getopt_long-style parser with optional permutation; `LongOption`, `ArgKind`, `ParsedOption` |
| `kcore.graph` | `Graph` and `Vertex`, a bidirected graph keyed by unsigned integer vertex ids, each arc recorded at both ends |
| `kcore.avl` | `AvlTree`, an ordered set with rank counts, `iter_from` and `erase_first` |
| `kcore.khashl` | `HashSetL`, `HashMapL` and `HashEnsemble`, linear-probing hash tables with backward-shift deletion, plus `hash_uint32`, `hash_uint64`, `hash_str`, `hash_bytes`, `hash_to_bucket` |
| `kcore.seqio` | `SeqReader`, `SeqRecord`, `read_records` and `TruncatedQualityError` for FASTA/FASTQ |
| `kcore.align` | `QueryProfile`, `align`, `align_u8`, `align_i16` and `AlignResult` for striped Smith-Waterman local alignment |

## Installing

    pip install .

For running the tests:

    pip install ".[test]"
    pytest

## Examples

An ordered set with ranks:

    from kcore.avl import AvlTree

    tree = AvlTree()
    for ch in "MNOLKQOPHIA":
        tree.insert(ch)
    print("".join(tree))        # AHIKLMNOPQ
    print(len(tree))            # 10
    print(tree.find("K"))       # ('K', 4): the item and how many items are <= it

A hash map:

    from kcore.khashl import HashMapL, hash_uint32

    table = HashMapL(hash_uint32)
    table[43] = 1
    table[53] = 2
    del table[43]
    print(dict(table.items()))  # {53: 2}

Reading sequences (a malformed FASTQ quality string raises
`TruncatedQualityError`):

    from kcore.seqio import read_records

    with open("reads.fq", "rb") as fh:
        for record in read_records(fh):
            print(record.name, len(record.seq), record.qual is not None)

Reproducible random numbers:

    from kcore.rng import Rng

    rng = Rng(11)
    print(rng.next_u64(), rng.random())

Option parsing; `parse_options` returns the parsed options and the remaining
operands, and raises `ValueError` for an unknown option or a missing argument:

    from kcore.options import parse_options

    options, operands = parse_options(["prog", "-a", "1", "file"], "a:b")
    print(options)   # [ParsedOption(opt='a', arg='1', longidx=-1)]
    print(operands)  # ['file']

Local alignment of residue codes with a 4-letter scoring matrix:

    from kcore.align import XSTART, align

    mat = [1 if i == j else -1 for i in range(4) for j in range(4)]
    r = align([0, 1, 2, 3], [3, 0, 1, 2, 3, 1], 4, mat, gapo=5, gape=2, xtra=XSTART)
    print(r.score, r.qb, r.qe, r.tb, r.te)

## What it does not do

- There is no command-line program; everything is used as a library.
- Alignment is local only: there is no global alignment, no banded
  extension and no CIGAR output.
- There are no helpers for running loops or pipelines on several threads,
  and no B-tree; `AvlTree` is the ordered container.
- `SeqReader` reads plain (uncompressed) input from any file object; it does
  not open or decompress files itself.