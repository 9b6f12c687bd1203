[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kcore"
version = "0.1.0"
description = "Compact data structures and algorithms: AVL trees, open-addressing hash tables, ring deques, a bidirected graph, option parsing, FASTA/FASTQ reading and Smith-Waterman local alignment."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "avl",
    "hash table",
    "deque",
    "graph",
    "fasta",
    "fastq",
    "smith-waterman",
    "alignment",
    "getopt",
    "random",
    "popcount",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["kcore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
