"""
Argsmith registry: definitions, lookups, and the parse loop.

What this module provides
- Registry: owns every positional (Arg) and flag (Flag) definition, resolves
  aliases, parses an argument vector against the definitions, and accumulates
  structured errors.

Storage
- Flags and positionals live in two arenas (plain lists); an entry keeps its slot
  for the registry's whole lifetime. Three tables map names to flag slots:
  the uniqueness key (short + long), the long alias and the short alias. An
  alias therefore resolves through an index, never through a held reference, and
  a lookup by either alias returns the very same stored Flag.
- Nothing is ever removed. Unknown flags met while parsing, or asked for through
  registry["--name"], are synthesized and stored as undeclared entries.

Parsing (Registry.parse)
- argv[0] is the program name; it is kept when Options.program_name is empty.
- Flags lose is_set and positionals lose is_defined at the start of every parse;
  positional slots are the declared ones, earlier surplus entries are reused as
  surplus.
- Every other token is classified (see argsmith.tokens) and consumed left to right:
  • positional: fills the next positional slot in declaration order, or becomes a
    new unnamed positional when all slots are taken.
  • '-x': marks the short flag as set (no value is consumed).
  • '-xyz': recognized but not expanded into single flags (logged, otherwise ignored).
  • '--name=value': marks the flag as set; the inline value is stored when the
    flag carries a value; an empty inline value leaves an optional value at its
    default. Never consumes another token.
  • '--name': marks the flag as set; a value-carrying flag takes the next token as
    its value unless that token is missing/empty or, for a required value, is
    itself a known flag.
- After the loop, callbacks of the flags set by this parse run once each, in the
  order the flags were first seen.
- Required positionals left unbound record one RequiredArgumentMissingError each
  and make parse() return False.
- A required flag value left unsupplied is not an error unless Options.strict is
  on; strict mode also rejects texts outside a declared choice list.

Example
    >>> registry = Registry("program.name=copy,help.add=0")
    >>> source = registry.define(Arg("source", "file to read", Required))
    >>> output = registry.define(Flag("--out", "-o", "write here", Value(required=Required, name="file")))
    >>> registry.parse(["copy", "a.txt", "--out", "b.txt"])
    True
    >>> source.text, registry["-o"].value.text
    ('a.txt', 'b.txt')
"""
import logging
from collections.abc import Sequence
from typing import NamedTuple

from .convert import converter
from .faults import *
from .faults import console
from .help import HelpRenderer
from .options import resolve as _resolve_options
from .tokens import TokenKind, classify, split_long
from .utils import *
from .values import Arg, Flag

logger = logging.getLogger(__name__)


class Tally(NamedTuple):
    defined: int = 0
    undefined: int = 0


class Counts(NamedTuple):
    """
    defined/undefined tallies of the last parse.

    - flags.defined: flag tokens that matched a declared flag.
    - flags.undefined: flag tokens that synthesized or hit an undeclared flag.
    - args.defined: positional tokens bound to an existing slot.
    - args.undefined: surplus positional tokens, held by unnamed slots.
    """
    flags: Tally = Tally()
    args: Tally = Tally()


class Registry:
    """
    Registry of positional and flag definitions plus the parser that binds input to them.

    Parameters
    - options: Options | str | Iterable[str] | None
      registry-wide settings, fixed for the registry's lifetime (see argsmith.options).

    Read-only views
    - flags: tuple of stored flags, in slot order.
    - args: tuple of stored positionals, in slot order.
    - errors: tuple of recorded ParseError instances (accumulated across parses).
    - counts: Counts of the last parse.
    - program: program name (configured, or argv[0] of the first parse).
    - options: the Options value.
    """
    flags = mirror("flags")
    args = mirror("args")
    errors = mirror("errors")

    def __init__(self, options=None, /):
        self._options = _resolve_options(options)
        self._program = self._options.program_name
        self._flags = []
        self._args = []
        self._declared = []
        self._keys = {}
        self._longs = {}
        self._shorts = {}
        self._errors = []
        self._counts = Counts()

        if self._options.help_add:
            self.define_flag(Flag("--help", "-h", "Show this help."))

    @property
    def options(self):
        return self._options

    @property
    def program(self):
        return self._program

    @property
    def counts(self):
        return self._counts

    def __repr__(self):
        return "registry(program=%r, flags=%d, args=%d, errors=%d)" % (
            self._program, len(self._flags), len(self._args), len(self._errors)
        )

    def __rich_repr__(self):
        yield "program", self._program
        yield "flags", self.flags
        yield "args", self.args
        yield "errors", self.errors

    # --- definitions ---

    def define(self, definition, /, callback=None):
        """
        declare a flag or a positional.

        returns the stored definition; see define_flag() and define_positional().
        """
        match definition:
            case Flag():
                return self.define_flag(definition, callback)
            case Arg():
                if callback is not None:
                    raise TypeError("define() callbacks are only supported for flags")
                return self.define_positional(definition)
            case _:
                raise TypeError("define() argument must be a flag or a positional")

    def define_flag(self, flag, /, callback=None):
        """
        declare a flag.

        behavior
        - both aliases empty (or, in strict mode, malformed aliases): nothing is stored
          and an inert sentinel flag is returned.
        - otherwise the flag replaces any stored flag with the same key (keeping that
          slot), both alias tables are pointed at the slot, and the stored flag is returned.
        - callback, when given, replaces the flag's callback.
        """
        if not isinstance(flag, Flag):
            raise TypeError("define_flag() argument must be a flag")
        if not flag.long and not flag.short:
            logger.debug("flag without aliases rejected")
            return Flag.sentinel()
        if self._options.strict and not flag.is_valid():
            logger.debug("malformed flag %r rejected in strict mode", flag.key)
            return Flag.sentinel()
        if callback is not None:
            if not callable(callback):
                raise TypeError("define_flag() callback must be callable")
            flag.callback = callback
        return self._flags[self._store(flag, defined=True)]

    def define_positional(self, arg, /):
        """declare a positional; it takes the next slot and is returned as stored."""
        if not isinstance(arg, Arg):
            raise TypeError("define_positional() argument must be a positional")
        self._declared.append(len(self._args))
        self._args.append(arg)
        return arg

    def _store(self, flag, *, defined):
        flag.is_defined = defined
        if (index := self._keys.get(flag.key)) is None:
            index = self._keys[flag.key] = len(self._flags)
            self._flags.append(flag)
        else:
            self._flags[index] = flag
        if flag.long:
            self._longs[flag.long] = index
        if flag.short:
            self._shorts[flag.short] = index
        return index

    # --- lookups ---

    def _alias(self, name):
        """
        map a flag-shaped name to (table, alias, fields) or None.

        '-xyz' is looked up as '-x'; '--name=value' as '--name'.
        """
        if not isinstance(name, str) or not name:
            return None
        match classify(name):
            case TokenKind.SHORT_FLAG | TokenKind.COMBINED_SHORT_FLAGS:
                return self._shorts, name[:2], {"short": name[:2]}
            case TokenKind.LONG_FLAG_WITH_VALUE | TokenKind.LONG_FLAG_WITHOUT_VALUE:
                name, _ = split_long(name)
                return self._longs, name, {"long": name}
            case _:
                return None

    def _find(self, name):
        if (alias := self._alias(name)) is None:
            return None
        table, key, _ = alias
        return table.get(key)

    def _resolve(self, name):
        """find or synthesize the flag named by name; returns its slot index or None."""
        if (alias := self._alias(name)) is None:
            return None
        table, key, fields = alias
        if (index := table.get(key)) is None:
            logger.debug("synthesizing undeclared flag %r", key)
            index = self._store(Flag(**fields), defined=False)
        return index

    def __getitem__(self, key, /):
        """
        registry[name] -> Flag, registry[index] -> Arg.

        - a flag-shaped name resolves by alias; unknown names are synthesized and
          registered (undeclared, unset) before being returned.
        - a name that is not flag-shaped returns an inert sentinel flag.
        - an index outside the positional arena returns an inert sentinel positional.
        """
        match key:
            case bool():
                raise TypeError("registry indices must be integers or strings")
            case int():
                return self._args[key] if 0 <= key < len(self._args) else Arg.sentinel()
            case str():
                index = self._resolve(key)
                return Flag.sentinel() if index is None else self._flags[index]
            case _:
                raise TypeError("registry indices must be integers or strings")

    def __contains__(self, name, /):
        return self._find(name) is not None

    def check(self, name, /):
        """True when the named flag is known and was set. Never registers anything."""
        return (index := self._find(name)) is not None and self._flags[index].is_set

    def check_and_read(self, name, /, kind=str, default=None):
        """
        read a set flag's value converted to kind.

        returns
        - the converted text when the flag is known, set, carries a value, and that
          value has text (supplied from input or declared as default).
        - default otherwise.

        errors
        - ConversionError when the text does not convert; no fallback is applied.
        """
        convert = converter(kind)
        if (index := self._find(name)) is None:
            return default
        flag = self._flags[index]
        if not flag.is_set or not flag.has_value:
            return default
        if not flag.value.is_set and flag.value.empty:
            return default
        return convert(flag.value.text)

    def resolve(self, suspect, /):
        """map a suspect back to its definition (None for NoSuspect)."""
        match suspect:
            case FlagSuspect(index=index):
                return self._flags[index]
            case ArgSuspect(index=index):
                return self._args[index]
            case NoSuspect():
                return None
            case _:
                raise TypeError("resolve() argument must be a suspect")

    # --- parsing ---

    def _record(self, error):
        error = type(error)(error.message, error.suspect, program=self._program)
        logger.debug("recorded %s: %s", error.code.name, error.message)
        self._errors.append(error)

    def _takes(self, flag, token):
        """whether token may be consumed as the spaced value of flag."""
        if not token:
            return False
        if flag.value.required and classify(token).flagged and self._find(token) is not None:
            return False
        return True

    def _bind(self, value, text, suspect):
        """bind text into value; strict mode checks the choice list. returns False on a strict fault."""
        value.bind(text)
        if self._options.strict and not value.accepts(text):
            self._record(InvalidChoiceError(
                "%r is not one of %s" % (text, value.choices_text()),
                suspect
            ))
            return False
        return True

    def parse(self, argv, /):
        """
        parse an argument vector (argv[0] being the program name).

        returns True on success. on failure, inspect errors; nothing is raised for
        ordinary parse failures.

        errors
        - an absent/empty argv or an absent argv[0]: ArgvIsEmptyError, False.
        - TypeError if argv is not a sequence of strings, ValueError for an empty token
          (both raised before any definition is touched).
        """
        if not argv or argv[0] is None:
            self._record(ArgvIsEmptyError("wrong argument count: 0"))
            return False
        if not isinstance(argv, Sequence) or isinstance(argv, str):
            raise TypeError("parse() argument must be a sequence of strings")

        tokens = list(argv)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must be a sequence of strings")
        kinds = [None, *map(classify, tokens[1:])]

        if not self._program:
            self._program = tokens[0]

        for arg in self._args:
            arg.is_defined = False
        for flag in self._flags:
            flag.is_set = False

        declared = self._declared
        slots = set(declared)
        surplus = [index for index in range(len(self._args)) if index not in slots]
        required = sum(1 for index in declared if self._args[index].required)
        strict = self._options.strict
        failed = False
        seen = []
        slot = extra = 0
        defined_flags = undefined_flags = defined_args = undefined_args = 0

        def mark(index):
            nonlocal defined_flags, undefined_flags
            flag = self._flags[index]
            flag.is_set = True
            if flag.is_defined:
                defined_flags += 1
            else:
                undefined_flags += 1
            if index not in seen:
                seen.append(index)
            return flag

        cursor = 1
        while cursor < len(tokens):
            token = tokens[cursor]

            match kinds[cursor]:
                case TokenKind.POSITIONAL:
                    if slot < len(declared):
                        arg = self._args[index := declared[slot]]
                        if arg.required:
                            required -= 1
                        failed |= not self._bind(arg, token, ArgSuspect(index))
                        defined_args += 1
                        slot += 1
                    else:
                        if extra < len(surplus):
                            # synthesized by an earlier parse
                            arg = self._args[surplus[extra]]
                        else:
                            arg = Arg()
                            self._args.append(arg)
                        arg.bind(token)
                        extra += 1
                        undefined_args += 1
                        logger.debug("undefined positional %r at position %d", token, cursor)

                case TokenKind.SHORT_FLAG:
                    mark(self._resolve(token))

                case TokenKind.COMBINED_SHORT_FLAGS:
                    logger.debug("combined short flags %r are not expanded", token)

                case TokenKind.LONG_FLAG_WITH_VALUE:
                    name, value = split_long(token)
                    flag = mark(index := self._resolve(token))
                    if flag.has_value:
                        if not value and not flag.value.required:
                            logger.debug("flag %r has an empty optional value, default kept", name)
                        elif strict and not value:
                            failed = True
                            self._record(RequiredFlagValueMissingError(
                                "flag %r requires a value" % name,
                                FlagSuspect(index)
                            ))
                        else:
                            failed |= not self._bind(flag.value, value, FlagSuspect(index))

                case TokenKind.LONG_FLAG_WITHOUT_VALUE:
                    flag = mark(index := self._resolve(token))
                    if flag.has_value:
                        following = tokens[cursor + 1] if cursor + 1 < len(tokens) else ""
                        if self._takes(flag, following):
                            failed |= not self._bind(flag.value, following, FlagSuspect(index))
                            logger.debug("flag %r took spaced value %r", token, following)
                            cursor += 1
                        elif flag.value.required:
                            logger.debug("flag %r is missing its required value", token)
                            if strict:
                                failed = True
                                self._record(RequiredFlagValueMissingError(
                                    "flag %r requires a value" % token,
                                    FlagSuspect(index)
                                ))

            cursor += 1

        self._counts = Counts(Tally(defined_flags, undefined_flags), Tally(defined_args, undefined_args))

        for index in seen:
            if (callback := self._flags[index].callback) is not None:
                callback()

        if required:
            for index in declared[slot:]:
                if (arg := self._args[index]).required:
                    self._record(RequiredArgumentMissingError(
                        "required argument %s missing" % ("<%s>" % arg.name if arg.name else "at slot %d" % index),
                        ArgSuspect(index)
                    ))
            return False

        return not failed

    # --- output ---

    def help(self):
        """plain-text usage/help built from the current definitions."""
        return HelpRenderer(self).render()

    def print_help(self, *, colorful=True):
        """print the styled help on the console."""
        console.print(HelpRenderer(self, colorful=colorful))

    def error(self):
        """plain-text rendering of the recorded errors, one 'error: ...' line each."""
        return "".join("error: %s\n" % error.message for error in self._errors)

    def report(self, **options):
        """print the recorded errors (if any) on the stderr console."""
        if self._errors:
            report(ParseFailure(self._errors, program=self._program), **options)

    def raise_for_errors(self):
        """raise a ParseFailure carrying every recorded error, if there is any."""
        if self._errors:
            raise ParseFailure(self._errors, program=self._program)


__all__ = (
    "Registry",
    "Counts",
    "Tally",
)
