"""Compact data structures and algorithms: AVL tree, hash tables, ring deque, graph, option parsing, FASTA/FASTQ reading and local alignment."""

__version__ = "0.1.0"