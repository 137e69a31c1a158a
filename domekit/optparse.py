"""A reentrant, getopt-style command line option parser with long options."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Sequence, Union

_MSG_INVALID = "invalid option"
_MSG_MISSING = "option requires an argument"
_MSG_TOOMANY = "option takes no arguments"
_ERRMSG_CAPACITY = 64


class ArgType(IntEnum):
    """How an option takes its argument."""

    NONE = 0
    REQUIRED = 1
    OPTIONAL = 2


@dataclass(frozen=True)
class LongOption:
    """A long option, optionally tied to a single-character short form.

    ``shortname`` may be a one-character string, an integer code for
    options that have no short form, or ``None``.
    """

    longname: Optional[str]
    shortname: Union[str, int, None] = None
    argtype: ArgType = ArgType.NONE


class OptionError(ValueError):
    """Raised when the command line holds an option that cannot be parsed."""

    def __init__(self, message: str, option: Union[str, int, None] = None):
        super().__init__(message)
        self.message = message
        self.option = option


def _error_message(msg: str, data: str) -> str:
    prefix = f"{msg} -- '"
    room = max(0, _ERRMSG_CAPACITY - 2 - len(prefix))
    return f"{prefix}{data[:room]}'"


def _is_dashdash(arg: Optional[str]) -> bool:
    return arg == "--"


def _is_shortopt(arg: Optional[str]) -> bool:
    return arg is not None and len(arg) >= 2 and arg[0] == "-" and arg[1] != "-"


def _is_longopt(arg: Optional[str]) -> bool:
    return arg is not None and len(arg) >= 3 and arg.startswith("--")


def _argtype(optstring: str, c: str) -> Optional[ArgType]:
    if c == ":":
        return None
    index = optstring.find(c)
    if index < 0:
        return None
    rest = optstring[index + 1:]
    if rest.startswith("::"):
        return ArgType.OPTIONAL
    if rest.startswith(":"):
        return ArgType.REQUIRED
    return ArgType.NONE


def _longopt_matches(longname: Optional[str], option: str) -> bool:
    if longname is None:
        return False
    return option.partition("=")[0] == longname


def _longopt_arg(option: str) -> Optional[str]:
    name, sep, value = option.partition("=")
    return value if sep else None


def _optstring_from_long(longopts: Sequence[LongOption]) -> str:
    parts = []
    for opt in longopts:
        if isinstance(opt.shortname, str) and len(opt.shortname) == 1:
            parts.append(opt.shortname + ":" * int(opt.argtype))
    return "".join(parts)


class Parser:
    """Parser state over one argument vector.

    ``argv[0]`` is the program (or command) name and is never parsed.
    When ``permute`` is true, non-option arguments are moved to the end
    of ``argv`` as parsing proceeds.
    """

    def __init__(self, argv: Sequence[str], permute: bool = True):
        self.argv = list(argv)
        self.permute = permute
        self.optind = 1
        self.optopt: Union[str, int, None] = None
        self.optarg: Optional[str] = None
        self.errmsg = ""
        self._subopt = 0

    def _at(self, index: int) -> Optional[str]:
        if 0 <= index < len(self.argv):
            return self.argv[index]
        return None

    def _fail(self, msg: str, data: str) -> OptionError:
        self.errmsg = _error_message(msg, data)
        return OptionError(self.errmsg, self.optopt)

    def _move_nonoption(self, index: int) -> None:
        nonoption = self.argv.pop(index)
        self.argv.insert(self.optind - 1, nonoption)

    def _permuted(self, step):
        index = self.optind
        self.optind += 1
        try:
            return step()
        finally:
            self._move_nonoption(index)
            self.optind -= 1

    def parse(self, optstring: str) -> Optional[str]:
        """Return the next short option character, or None when done.

        Raises OptionError for an unknown option or a missing argument.
        """
        option = self._at(self.optind)
        self.errmsg = ""
        self.optopt = None
        self.optarg = None
        if option is None:
            return None
        if _is_dashdash(option):
            self.optind += 1
            return None
        if not _is_shortopt(option):
            if self.permute:
                return self._permuted(lambda: self.parse(optstring))
            return None

        option = option[self._subopt + 1:]
        c = option[0]
        self.optopt = c
        kind = _argtype(optstring, c)
        following = self._at(self.optind + 1)

        if kind is None:
            self.optind += 1
            raise self._fail(_MSG_INVALID, c)
        if kind is ArgType.NONE:
            if len(option) > 1:
                self._subopt += 1
            else:
                self._subopt = 0
                self.optind += 1
            return c
        if kind is ArgType.REQUIRED:
            self._subopt = 0
            self.optind += 1
            if len(option) > 1:
                self.optarg = option[1:]
            elif following is not None:
                self.optarg = following
                self.optind += 1
            else:
                self.optarg = None
                raise self._fail(_MSG_MISSING, c)
            return c
        self._subopt = 0
        self.optind += 1
        self.optarg = option[1:] if len(option) > 1 else None
        return c

    def _parse_long_fallback(self, longopts: Sequence[LongOption]) -> Optional[LongOption]:
        result = self.parse(_optstring_from_long(longopts))
        if result is None:
            return None
        matched = None
        for opt in longopts:
            if opt.shortname == self.optopt:
                matched = opt
        return matched

    def parse_long(self, longopts: Sequence[LongOption]) -> Optional[LongOption]:
        """Return the next matching LongOption, or None when done.

        Short options are accepted through the options' short names.
        Raises OptionError for an unknown option or a bad argument.
        """
        option = self._at(self.optind)
        if option is None:
            return None
        if _is_dashdash(option):
            self.optind += 1
            return None
        if _is_shortopt(option):
            return self._parse_long_fallback(longopts)
        if not _is_longopt(option):
            if self.permute:
                return self._permuted(lambda: self.parse_long(longopts))
            return None

        self.errmsg = ""
        self.optopt = None
        self.optarg = None
        body = option[2:]
        self.optind += 1
        for opt in longopts:
            if not _longopt_matches(opt.longname, body):
                continue
            name = opt.longname or ""
            self.optopt = opt.shortname
            value = _longopt_arg(body)
            if opt.argtype is ArgType.NONE and value is not None:
                raise self._fail(_MSG_TOOMANY, name)
            if value is not None:
                self.optarg = value
            elif opt.argtype is ArgType.REQUIRED:
                self.optarg = self._at(self.optind)
                if self.optarg is None:
                    raise self._fail(_MSG_MISSING, name)
                self.optind += 1
            return opt
        raise self._fail(_MSG_INVALID, body)

    def arg(self) -> Optional[str]:
        """Step over and return the next argument, or None if there are none."""
        option = self._at(self.optind)
        self._subopt = 0
        if option is not None:
            self.optind += 1
        return option