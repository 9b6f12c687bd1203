"""Command-line option scanning in the style of getopt_long, with permutation."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Iterator, List, Optional, Sequence, Tuple


class ArgKind(IntEnum):
    """Whether a long option takes an argument."""

    NO = 0
    REQUIRED = 1
    OPTIONAL = 2


@dataclass(frozen=True)
class LongOption:
    """A long option; ``val`` is reported as its code (the name if not given)."""

    name: str
    has_arg: ArgKind = ArgKind.NO
    val: Any = None

    @property
    def code(self) -> Any:
        return self.name if self.val is None else self.val


@dataclass(frozen=True)
class ParsedOption:
    """One parsed option.

    ``opt`` is the option character, a long option's code, ``'?'`` for an
    unknown or ambiguous option, or ``':'`` when a required argument is missing.
    ``longidx`` is the index of the matched long option, or -1.
    """

    opt: Any
    arg: Optional[str] = None
    longidx: int = -1


def _is_option(arg: str) -> bool:
    return arg.startswith("-") and arg != "-"


class OptionScanner:
    """Iterates over the options in ``argv`` (``argv[0]`` is skipped).

    With ``permute`` set, non-option arguments are moved behind the options in
    ``self.argv``; after iteration ``self.argv[self.ind:]`` are the operands.
    """

    def __init__(
        self,
        argv: Sequence[str],
        ostr: str,
        longopts: Optional[Sequence[LongOption]] = None,
        permute: bool = True,
    ):
        self.argv: List[str] = list(argv)
        self.ostr = ostr
        self.longopts = list(longopts or [])
        self.permute = permute
        self._ind = 1
        self._i = 1
        self._pos = 0
        self._n_args = 0
        self.opt: Any = 0

    @property
    def ind(self) -> int:
        """Index in ``self.argv`` of the first operand."""
        return self._ind

    def __iter__(self) -> Iterator[ParsedOption]:
        return self

    def _permute(self, j: int, n: int) -> None:
        self.argv.insert(j - n, self.argv.pop(j))

    def __next__(self) -> ParsedOption:
        result = self._scan()
        if result is None:
            raise StopIteration
        return result

    def _scan(self) -> Optional[ParsedOption]:
        argv = self.argv
        argc = len(argv)
        if self.permute:
            while self._i < argc and not _is_option(argv[self._i]):
                self._i += 1
                self._n_args += 1
        arg: Optional[str] = None
        longidx = -1
        i0 = self._i
        if self._i >= argc or not _is_option(argv[self._i]):
            self._ind = self._i - self._n_args
            return None
        current = argv[self._i]
        if current.startswith("--"):
            if current == "--":
                self._permute(self._i, self._n_args)
                self._i += 1
                self._ind = self._i - self._n_args
                return None
            opt: Any = "?"
            self.opt = 0
            self._pos = -1
            if self.longopts:
                eq = current.find("=", 2)
                j = len(current) if eq < 0 else eq
                name = current[2:j]
                exact = [k for k, o in enumerate(self.longopts) if o.name == name]
                partial = [
                    k for k, o in enumerate(self.longopts)
                    if o.name != name and o.name.startswith(name)
                ]
                chosen: Optional[int] = None
                if len(exact) == 1:
                    chosen = exact[0]
                elif not exact and len(partial) == 1:
                    chosen = partial[0]
                if chosen is not None:
                    o = self.longopts[chosen]
                    opt = self.opt = o.code
                    longidx = chosen
                    if j < len(current):
                        arg = current[j + 1:]
                    elif o.has_arg == ArgKind.REQUIRED:
                        if self._i < argc - 1:
                            self._i += 1
                            arg = argv[self._i]
                        else:
                            opt = ":"
        else:
            if self._pos == 0:
                self._pos = 1
            ch = current[self._pos]
            self._pos += 1
            opt = self.opt = ch
            p = self.ostr.find(ch)
            if p < 0:
                opt = "?"
            elif self.ostr[p + 1:p + 2] == ":":
                if self._pos >= len(current):
                    if self._i < argc - 1:
                        self._i += 1
                        arg = argv[self._i]
                    else:
                        opt = ":"
                else:
                    arg = current[self._pos:]
                self._pos = -1
        if self._pos < 0 or self._pos >= len(argv[self._i]):
            self._i += 1
            self._pos = 0
            if self._n_args > 0:
                for j in range(i0, self._i):
                    self._permute(j, self._n_args)
        self._ind = self._i - self._n_args
        return ParsedOption(opt, arg, longidx)


def parse_options(
    argv: Sequence[str],
    ostr: str,
    longopts: Optional[Sequence[LongOption]] = None,
    permute: bool = True,
) -> Tuple[List[ParsedOption], List[str]]:
    """Parse all options; return them with the remaining operands.

    Raises ValueError for an unknown or ambiguous option or a missing argument.
    """
    scanner = OptionScanner(argv, ostr, longopts, permute)
    options = []
    for parsed in scanner:
        if parsed.opt == "?":
            raise ValueError(f"unknown or ambiguous option: {scanner.opt!r}")
        if parsed.opt == ":":
            raise ValueError(f"missing argument for option: {scanner.opt!r}")
        options.append(parsed)
    return options, scanner.argv[scanner.ind:]