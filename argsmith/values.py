r"""
Argsmith data model: values, positional arguments, and flags.

Overview
- Value: textual payload with an optional choice list and a required marker.
- Arg: positional slot (is-a Value); knows whether the current parse bound it.
- Flag: named switch with a long and/or short alias, optionally carrying a Value.

All three are plain mutable records: the registry owns them, the parse loop
mutates them, and the help renderer only reads them. Instances returned from the
registry are the stored objects themselves, so a lookup by any alias observes
every later mutation.

Representation
- DefinitionType derives a hyphenated __typename__ from the class name and wires
  __repr__/__rich_repr__ from the names listed in __displayable__, the same way
  the command and argument specs of the package describe themselves.

Example
    >>> output = Flag("--out", "-o", "write result to a file", Value(required=Required, name="file"))
    >>> output.key
    '-o--out'
    >>> output.has_value, output.is_set
    (True, False)
"""
import functools
import operator
import re
from collections.abc import Iterable

from .utils import *

Required = True
"""readable spelling for the 'required' argument of Value/Arg (Value(required=Required))."""


class DefinitionType(type):
    """
    Metaclass giving definitions a stable, readable representation.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens).
    - __displayable__ lists the attributes shown by __repr__/__rich_repr__; subclasses
      that do not declare their own inherit the parent's list.
    """
    __displayable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__displayable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_string(cls, name, object):
    if not isinstance(object, str):
        raise TypeError(f"{cls.__typename__} {name!r} must be a string")
    return object


def _sanitize_choices(cls, choices):
    """
    Validate a choice list: an iterable of non-empty, distinct strings.

    Returns the choices as a tuple in their declared order.
    """
    if isinstance(choices, str) or not isinstance(choices, Iterable):
        raise TypeError(f"{cls.__typename__} 'choices' must be an iterable of strings")
    sanitized = []
    for choice in choices:
        if not isinstance(choice, str):
            raise TypeError(f"{cls.__typename__} 'choices' must be an iterable of strings")
        elif not choice:
            raise ValueError(f"{cls.__typename__} 'choices' cannot contain empty strings")
        elif choice in sanitized:
            raise ValueError(f"{cls.__typename__} 'choices' cannot contain duplicates")
        sanitized.append(choice)
    return tuple(sanitized)


class Value(metaclass=DefinitionType):
    """
    Textual value holder shared by positional arguments and flags.

    Fields
    - text: current text; starts as the declared default.
    - required: the value must be supplied for the owner to be complete.
    - is_set: True only once text was bound from input (a default does not count).
    - name: placeholder label used by help output (e.g. 'file' -> <file>).
    - description: help text.
    - choices: accepted texts; an empty tuple means unconstrained.

    Notes
    - Membership of text in choices is not checked on bind(); accepts() exposes the
      check so strict parsing (or the caller) can apply it.
    """
    __displayable__ = ("text", "required", "is_set", "name", "description", "choices")

    def __init__(self, default="", required=False, name="", description="", choices=()):
        cls = type(self)
        self.text = _sanitize_string(cls, "default", default)
        self.required = bool(required)
        self.is_set = False
        self.name = _sanitize_string(cls, "name", name)
        self.description = _sanitize_string(cls, "description", description)
        self.choices = _sanitize_choices(cls, choices)

    @property
    def empty(self):
        return not self.text

    def accepts(self, text, /):
        """True when text satisfies the choice list (always True without choices)."""
        return not self.choices or text in self.choices

    def bind(self, text, /):
        """store text received from input and mark the value as set."""
        self.text = _sanitize_string(type(self), "text", text)
        self.is_set = True

    def choices_text(self, full=True):
        """
        pipe-joined choice list, e.g. 'fast|slow'.

        with full=False the list is marked as abbreviated: 'fast|slow|...'.
        returns an empty string when there are no choices.
        """
        if not self.choices:
            return ""
        return "|".join(self.choices) + ("" if full else "|...")


class Arg(Value):
    """
    Positional argument slot.

    Declared slots keep their declaration order inside the registry; tokens that
    find no free slot are appended as unnamed, optional, synthesized slots.
    is_defined turns True when the current parse binds the slot.
    """
    __displayable__ = ("name", "text", "required", "is_set", "is_defined", "description", "choices")

    def __init__(self, name="", description="", required=False, default="", choices=()):
        super().__init__(default, required, name, description, choices)
        self.is_defined = False

    @classmethod
    def sentinel(cls):
        """inert placeholder returned by out-of-range positional lookups."""
        return cls()

    def bind(self, text, /):
        super().bind(text)
        self.is_defined = True


class Flag(metaclass=DefinitionType):
    """
    Named flag (option) with long and/or short aliases.

    Fields
    - long: long alias ('--out'), may be empty.
    - short: short alias ('-o'), may be empty.
    - description: help text.
    - value: carried Value (an empty Value when the flag takes none).
    - has_value: True when a Value was given at construction.
    - is_set: the flag appeared in the parsed input.
    - is_defined: the flag was declared by the host (False for flags the registry
      synthesized from unknown input or lookups).
    - callback: optional zero-argument callable run after the flag is bound.

    A flag with both aliases empty is the invalid sentinel; the registry never
    stores it.
    """
    __displayable__ = ("long", "short", "description", "is_set", "is_defined", "has_value", "value")

    def __init__(self, long="", short="", description="", value=Unset, callback=None):
        cls = type(self)
        self.long = _sanitize_string(cls, "long", long)
        self.short = _sanitize_string(cls, "short", short)
        self.description = _sanitize_string(cls, "description", description)

        if not isinstance(value, Value | Unset):
            raise TypeError(f"{cls.__typename__} 'value' must be a value")
        self.has_value = value is not Unset
        self.value = coalesce(value, Value())

        if callback is not None and not callable(callback):
            raise TypeError(f"{cls.__typename__} 'callback' must be callable")
        self.callback = callback

        self.is_set = False
        self.is_defined = False

    @classmethod
    def sentinel(cls):
        """inert placeholder returned when a flag cannot be stored or resolved."""
        return cls()

    @property
    def key(self):
        """uniqueness key inside a registry: short alias followed by long alias."""
        return self.short + self.long

    def is_valid(self):
        """
        validate the aliases.

        rules
        - both aliases empty: invalid.
        - long alias, when present: longer than 2 characters and starts with '--'.
        - short alias, when present: exactly 2 characters, starts with '-' and is not '--'.
        """
        if not self.long and not self.short:
            return False
        if self.long and not (len(self.long) > 2 and self.long.startswith("--")):
            return False
        if self.short and not (len(self.short) == 2 and self.short.startswith("-") and self.short != "--"):
            return False
        return True


__all__ = (
    "Required",
    "Value",
    "Arg",
    "Flag",
)
