"""
Argsmith faults: error codes, suspects, recorded parse errors and rendering.

Scope
- ErrorCode: stable numeric identifiers for everything a parse can record.
- Suspects: which definition an error is about, as an explicit sum type
  (NoSuspect | FlagSuspect(index) | ArgSuspect(index)); indices address the
  registry's flag and positional arenas, never raw objects.
- ParseError and subclasses: one per code; carry a message, a suspect, and
  rendering options; know how to render themselves with rich.
- ParseFailure: exception group raised on demand (Registry.raise_for_errors)
  for callers that prefer exceptions to inspecting Registry.errors.

Integration
- The registry records faults while parsing and never raises them itself; an
  ordinary parse failure is a False result plus entries in Registry.errors.
- Rendering goes to a stderr rich console; styles can be overridden through a
  __styles__ mapping in __main__, code labels through __codes__.
"""
import copy
from collections import defaultdict
from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import final

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

console = Console(stderr=True)


class ErrorCode(IntEnum):
    """
    canonical error codes recorded by the parser.

    notes
    - REQUIRED_FLAG_VALUE_MISSING and INVALID_CHOICE are only recorded in strict mode;
      the default parse leaves a missing flag value or an off-list text unreported.
    - ARGC_BIGGER_THAN_ELEMENTS_OF_ARGV is reserved for a count/vector mismatch guard
      and is never recorded by the parse loop.
    """
    NO_ERROR                          = 0
    REQUIRED_FLAG_VALUE_MISSING       = 1
    REQUIRED_ARGUMENT_MISSING         = 2
    ARGV_IS_EMPTY                     = 3
    ARGC_BIGGER_THAN_ELEMENTS_OF_ARGV = 4
    INVALID_CHOICE                    = 5

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__ to
        override labels; otherwise the lowercase, hyphenated member name is used.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.name.lower().replace("_", "-")))


# --- suspects ---

@final
@dataclass(frozen=True, slots=True)
class NoSuspect:
    """the error is about the invocation as a whole."""


@final
@dataclass(frozen=True, slots=True)
class FlagSuspect:
    """the error is about the flag stored at 'index' in the registry."""
    index: int


@final
@dataclass(frozen=True, slots=True)
class ArgSuspect:
    """the error is about the positional stored at 'index' in the registry."""
    index: int


NO_SUSPECT = NoSuspect()

type Suspect = NoSuspect | FlagSuspect | ArgSuspect


def _palette(defaults):
    return defaultdict(str, defaults | getattr(__import__("__main__"), "__styles__", {}))


def _text(fragment, style, colorful):
    if not fragment:
        return Text("")
    if not colorful:
        return Text(str(fragment))
    if isinstance(fragment, Text):
        return fragment
    return Text(str(fragment), style)


class ParseError(Exception):
    """
    a recorded parse error.

    attributes
    - code: ErrorCode of the concrete subclass.
    - message: human-readable, lowercase message.
    - suspect: NoSuspect | FlagSuspect | ArgSuspect.
    - options: read-only rendering options (program, colorful, fancy, ratio).
    """
    code = ErrorCode.NO_ERROR

    def __init__(self, message, /, suspect=NO_SUSPECT, **options):
        if not isinstance(message, str):
            raise TypeError(f"{type(self).__name__} message must be a string")
        if not isinstance(suspect, NoSuspect | FlagSuspect | ArgSuspect):
            raise TypeError(f"{type(self).__name__} suspect must be a suspect")
        super().__init__(message)
        self.message = message
        self.suspect = suspect
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    def __rich__(self):
        colorful = self.options.get("colorful", True)
        styles = _palette({
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan error code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
        })

        def styler(style):
            return styles[style] if colorful else ""

        header = Text.assemble(
            "[ ",
            _text(self.options.get("program") or "error", styler("prog-name"), colorful),
            " | ",
            _text(self.code.normalize(), styler("code"), colorful),
            " ]"
        )
        message = _text(self.message, styler("error-message"), colorful)

        if self.options.get("fancy", False):
            width = self.options.get("ratio")
            width = int(console.width * width) if width else None
            return Panel(message, title=header, title_align="left", width=width)

        return Group(header, message)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, self.suspect, **{**self.options, **overrides})


class RequiredFlagValueMissingError(ParseError):
    code = ErrorCode.REQUIRED_FLAG_VALUE_MISSING


class RequiredArgumentMissingError(ParseError):
    code = ErrorCode.REQUIRED_ARGUMENT_MISSING


class ArgvIsEmptyError(ParseError):
    code = ErrorCode.ARGV_IS_EMPTY


class ArgcMismatchError(ParseError):
    code = ErrorCode.ARGC_BIGGER_THAN_ELEMENTS_OF_ARGV


class InvalidChoiceError(ParseError):
    code = ErrorCode.INVALID_CHOICE


class ParseFailure(ExceptionGroup[ParseError]):
    """
    all errors of a failed parse, raised together.

    options carry the same rendering keys as ParseError (program, colorful, fancy).
    """

    def __new__(cls, exceptions, **options):
        return super().__new__(cls, "parse failed", exceptions)

    def __init__(self, exceptions, **options):
        super().__init__("parse failed", tuple(exceptions))
        self.options = MappingProxyType(options)

    def __rich__(self):
        colorful = self.options.get("colorful", True)
        styles = _palette({
            "prog-name": "bold #E6E6F0",  # near-white program name
            "title": "bold #FF4DA6",  # friendly pinky group title
        })

        def styler(style):
            return styles[style] if colorful else ""

        header = Text.assemble(
            "[ ",
            _text(self.options.get("program") or "error", styler("prog-name"), colorful),
            " | ",
            _text(self.message.title(), styler("title"), colorful),
            " ]"
        )
        renders = [copy.replace(exception, ratio=2 / 3, colorful=colorful) for exception in self.exceptions]

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")
        return Group(header, *renders)

    def derive(self, exceptions):
        return type(self)(exceptions, **self.options)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.exceptions, **{**self.options, **overrides})


def report(fault, /, **options):
    """
    print a ParseError or ParseFailure on the stderr console.

    options are merged into the fault's own options before rendering.
    """
    if not isinstance(fault, ParseError | ParseFailure):
        raise TypeError("report() argument must be a parse error or failure")
    console.print(copy.replace(fault, **options))


__all__ = (
    "ErrorCode",
    "NoSuspect",
    "FlagSuspect",
    "ArgSuspect",
    "NO_SUSPECT",
    "Suspect",
    "ParseError",
    "RequiredFlagValueMissingError",
    "RequiredArgumentMissingError",
    "ArgvIsEmptyError",
    "ArgcMismatchError",
    "InvalidChoiceError",
    "ParseFailure",
    "report",
)
