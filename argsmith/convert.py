"""
Argsmith scalar converters.

One converter per supported kind turns a flag or argument text into a typed
value. A converter either returns the parsed value or raises ConversionError;
there is no built-in fallback, callers pick their default where they call:

    try:
        jobs = to_int(registry["--jobs"].value.text)
    except ConversionError:
        jobs = 1

Kinds
- int:   to_int   (base 10, surrounding whitespace ignored; '0x'/'0o'/'0b' prefixes accepted)
- float: to_float
- bool:  to_bool  (1/0, true/false, yes/no, on/off, case-insensitive)
- str:   to_str   (identity)
"""
from .utils import rename

_TRUTHY = frozenset(("1", "true", "yes", "on"))
_FALSY = frozenset(("0", "false", "no", "off"))


class ConversionError(ValueError):
    """
    text could not be converted to the requested kind.

    attributes
    - kind: name of the requested kind ('int', 'float', ...).
    - text: the offending text.
    """

    def __init__(self, kind, text, /):
        super().__init__("cannot convert %r to %s" % (text, kind))
        self.kind = kind
        self.text = text


def to_int(text, /):
    try:
        return int(text, 0) if text.strip()[:2].lower() in ("0x", "0o", "0b") else int(text, 10)
    except (TypeError, ValueError, AttributeError):
        raise ConversionError("int", text) from None


def to_float(text, /):
    try:
        return float(text)
    except (TypeError, ValueError):
        raise ConversionError("float", text) from None


def to_bool(text, /):
    if isinstance(text, str):
        if (lowered := text.strip().lower()) in _TRUTHY:
            return True
        if lowered in _FALSY:
            return False
    raise ConversionError("bool", text)


def to_str(text, /):
    if not isinstance(text, str):
        raise ConversionError("str", text)
    return text


_CONVERTERS = {
    int: to_int,
    float: to_float,
    bool: to_bool,
    str: to_str,
}


def converter(kind, /):
    """
    return the converter for a kind.

    - int, float, bool and str map to the dedicated converters above.
    - any other callable is wrapped so its ValueError/TypeError surfaces as
      ConversionError (e.g. converter(pathlib.Path) or converter(Decimal)).
    """
    if kind in _CONVERTERS:
        return _CONVERTERS[kind]
    if not callable(kind):
        raise TypeError("converter() argument must be a callable")

    name = getattr(kind, "__name__", repr(kind))

    @rename("to_" + name.lower() if name.isidentifier() else "to_custom")
    def convert(text, /):
        try:
            return kind(text)
        except (TypeError, ValueError):
            raise ConversionError(name, text) from None

    return convert


__all__ = (
    "ConversionError",
    "to_int",
    "to_float",
    "to_bool",
    "to_str",
    "converter",
)
