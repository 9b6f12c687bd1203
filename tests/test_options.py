import pytest

from kcore.options import ArgKind, LongOption, OptionScanner, ParsedOption, parse_options

LONGOPTS = [
    LongOption("foo", ArgKind.NO, 301),
    LongOption("bar", ArgKind.REQUIRED, 302),
    LongOption("baz", ArgKind.OPTIONAL, 303),
    LongOption("bazooka", ArgKind.NO, 304),
]


def test_short_options_with_permutation():
    opts, rest = parse_options(["prog", "-a", "x", "-b", "val", "y"], "ab:")
    assert [(o.opt, o.arg) for o in opts] == [("a", None), ("b", "val")]
    assert rest == ["x", "y"]


def test_clustered_short_options_and_attached_argument():
    opts, rest = parse_options(["prog", "-acbval", "file"], "ab:c")
    assert [(o.opt, o.arg) for o in opts] == [("a", None), ("c", None), ("b", "val")]
    assert rest == ["file"]


def test_without_permutation_stops_at_first_operand():
    opts, rest = parse_options(["prog", "-a", "x", "-b", "v"], "ab:", permute=False)
    assert [o.opt for o in opts] == ["a"]
    assert rest == ["x", "-b", "v"]


def test_double_dash_ends_options():
    opts, rest = parse_options(["prog", "in", "-a", "--", "-b", "out"], "ab")
    assert [o.opt for o in opts] == ["a"]
    assert rest == ["in", "-b", "out"]


def test_single_dash_is_an_operand():
    opts, rest = parse_options(["prog", "-", "-a"], "a")
    assert [o.opt for o in opts] == ["a"]
    assert rest == ["-"]


def test_long_options_exact_equals_and_separate_argument():
    opts, rest = parse_options(
        ["prog", "--foo", "--bar=1", "--bar", "2", "--baz", "z"], "", LONGOPTS
    )
    assert [(o.opt, o.arg, o.longidx) for o in opts] == [
        (301, None, 0),
        (302, "1", 1),
        (302, "2", 1),
        (303, None, 2),
    ]
    assert rest == ["z"]


def test_long_option_unique_prefix_and_exact_beats_prefix():
    opts, _ = parse_options(["prog", "--fo", "--baz=q"], "", LONGOPTS)
    assert [(o.opt, o.arg) for o in opts] == [(301, None), (303, "q")]


def test_long_option_code_defaults_to_name():
    opts, _ = parse_options(["prog", "--verbose"], "", [LongOption("verbose")])
    assert opts == [ParsedOption("verbose", None, 0)]


def test_scanner_reports_unknown_and_missing():
    scanner = OptionScanner(["prog", "-x", "--ba", "-b"], "b:", LONGOPTS)
    results = [p.opt for p in scanner]
    assert results == ["?", "?", ":"]
    assert scanner.ind == len(scanner.argv)


def test_parse_options_raises_on_unknown():
    with pytest.raises(ValueError):
        parse_options(["prog", "-z"], "a")


def test_parse_options_raises_on_missing_argument():
    with pytest.raises(ValueError):
        parse_options(["prog", "--bar"], "", LONGOPTS)


def test_input_list_is_not_modified():
    argv = ["prog", "x", "-a"]
    parse_options(argv, "a")
    assert argv == ["prog", "x", "-a"]