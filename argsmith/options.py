"""
Argsmith registry options.

Options is an immutable value built once, before any parsing, and handed to the
Registry. It can be written out directly or read from the compact option-string
micro-format:

    Options.parse("program.name=my tool,tab=  ,mode.strict=1,help.add=0")
    Options.parse(["program.name=my tool", "tab=\\t", "help.show=2"])

Keys
- program.name   program name used by help/usage (empty: taken from argv[0])
- tab            indentation string used by the help renderer
- mode.strict    strict parsing (see Registry.parse)
- help.add       auto-register a '--help'/'-h' flag
- help.compact   no blank lines between help sections
- help.show      0 = only entries with a description,
                 1 = only declared entries,
                 2 = everything, synthesized entries included

Limitations
- The string form is split on ',' and each pair on its first '='; there is no
  escaping, so values cannot contain ','. The list form lifts the ',' limitation.
"""
import logging
from collections.abc import Iterable
from typing import NamedTuple

from .convert import ConversionError, to_bool, to_int

logger = logging.getLogger(__name__)

SHOW_WITH_DESCRIPTION = 0
SHOW_DEFINED = 1
SHOW_ALL = 2

_KEYS = {
    # option-string key -> (field, converter)
    "program.name": ("program_name", str),
    "tab": ("tab", str),
    "mode.strict": ("strict", to_bool),
    "help.add": ("help_add", to_bool),
    "help.compact": ("help_compact", to_bool),
    "help.show": ("help_show", to_int),
}


class Options(NamedTuple):
    """immutable registry-wide settings."""
    program_name: str = ""
    tab: str = "    "
    strict: bool = False
    help_add: bool = True
    help_compact: bool = True
    help_show: int = SHOW_DEFINED

    @classmethod
    def parse(cls, source="", /):
        """
        build Options from an option string or an iterable of 'key=value' strings.

        errors
        - TypeError: source is neither a string nor an iterable of strings.
        - ValueError: a pair has no '=', names an unknown key, or carries a value
          that does not convert (booleans/integers), or help.show is out of range.
        """
        if isinstance(source, str):
            pairs = [pair for pair in source.split(",") if pair] if source else []
        elif isinstance(source, Iterable):
            pairs = list(source)
        else:
            raise TypeError("Options.parse() argument must be a string or an iterable of strings")

        fields = {}
        for pair in pairs:
            if not isinstance(pair, str):
                raise TypeError("Options.parse() pairs must be strings")
            key, separator, value = pair.partition("=")
            if not separator:
                raise ValueError("option %r must have the form key=value" % pair)
            try:
                field, convert = _KEYS[key.strip()]
            except KeyError:
                raise ValueError("unknown option %r" % key) from None
            try:
                fields[field] = convert(value)
            except ConversionError as error:
                raise ValueError("option %r has a bad value %r" % (key, value)) from error

        if fields.get("help_show", SHOW_DEFINED) not in (SHOW_WITH_DESCRIPTION, SHOW_DEFINED, SHOW_ALL):
            raise ValueError("option 'help.show' must be 0, 1 or 2")

        logger.debug("options parsed from %d pair(s): %r", len(pairs), fields)
        return cls(**fields)


def resolve(options, /):
    """
    coerce whatever a Registry was given into an Options value.

    accepts Options itself, None (defaults), an option string, or an iterable of pairs.
    """
    if isinstance(options, Options):
        return options
    if options is None:
        return Options()
    return Options.parse(options)


__all__ = (
    "Options",
    "SHOW_WITH_DESCRIPTION",
    "SHOW_DEFINED",
    "SHOW_ALL",
)
