r"""
cmdtable value types, destinations and conversion.

Overview
- ValueType: the closed set of types a parameter or switch may declare
  (NONE for flags, STRING, DECIMAL, HEXADECIMAL, INTEGER, ENUM).
- Destinations: typed cells the engine writes on success, one per spec
  • Boolean  ← flags without a fixed value
  • Number   ← DECIMAL / HEXADECIMAL / INTEGER, and flags with a fixed value
  • String   ← STRING
  • Code     ← ENUM
  Each keeps the caller's initial value until a parse assigns it.
- EnumMapping: ordered (value, name) pairs looked up case-insensitively.
- convert(raw, type, ...): pure, type-directed conversion raising ConversionError.

Token grammar (spaces and tabs only count as leading whitespace)
- decimal      [ \t]*[0-9]+
- hexadecimal  [ \t]*(0+[xX])?[0-9A-Fa-f]+   (the 'x' needs at least one '0' before it)
- integer      decimal, else a hex-prefixed hexadecimal; a bare numeral is never hex
"""
import enum
import re
from collections.abc import Sequence

from .faults import ConversionError, InvalidTypeError
from .utils import *


class ValueType(enum.IntEnum):
    NONE        = 0
    STRING      = 1
    DECIMAL     = 2
    HEXADECIMAL = 3
    INTEGER     = 4
    ENUM        = 5


_DECIMAL = re.compile(r"[ \t]*(?P<digits>[0-9]+)")
_HEXADECIMAL = re.compile(r"[ \t]*(?:0+[xX])?(?P<digits>[0-9A-Fa-f]+)")
_HEXPREFIX = re.compile(r"[ \t]*0+[xX]")


def isdecimal(raw, /):
    """leading blanks then one or more ASCII digits, nothing else."""
    return isinstance(raw, str) and _DECIMAL.fullmatch(raw) is not None


def ishex(raw, /):
    """leading blanks, an optional 0x/0X prefix, then one or more hex digits, nothing else."""
    return isinstance(raw, str) and _HEXADECIMAL.fullmatch(raw) is not None


def hashexprefix(raw, /):
    """leading blanks, at least one '0', then 'x' or 'X' (the digits are not checked)."""
    return isinstance(raw, str) and _HEXPREFIX.match(raw) is not None


class Destination:
    """
    Base of the typed write targets.

    A destination is owned by the caller: the engine only ever assigns `value`,
    at most once per parse, and never keeps a reference past the call.
    """
    __typename__ = "destination"
    __initial__ = None

    def __init__(self, value=Unset, /):
        self.value = coalesce(value, self.__initial__)

    def assign(self, value, /):
        self.value = value

    def __repr__(self):
        return f"{self.__typename__}({self.value!r})"

    def __rich_repr__(self):
        yield self.value


class Boolean(Destination):
    __typename__ = "boolean"
    __initial__ = False


class Number(Destination):
    __typename__ = "number"
    __initial__ = 0


class String(Destination):
    __typename__ = "string"
    __initial__ = ""


class Code(Destination):
    __typename__ = "code"
    __initial__ = 0


def destination(type, /, flagvalue=Unset):
    """
    Return the destination class a value type writes to.

    Flags (ValueType.NONE) write a boolean, unless a fixed flag value is
    configured, in which case that number is written instead.
    """
    match type:
        case ValueType.NONE:
            return Boolean if flagvalue is Unset else Number
        case ValueType.STRING:
            return String
        case ValueType.DECIMAL | ValueType.HEXADECIMAL | ValueType.INTEGER:
            return Number
        case ValueType.ENUM:
            return Code
        case _:
            raise InvalidTypeError("unknown value type %r" % (type,))


class EnumMapping(Sequence):
    """
    Ordered (value, name) pairs bound to an enum parameter or switch.

    Names are kept as declared and matched against the whole token, ignoring
    case (a plain lower-casing, no Unicode folding); when two
    entries share a name the first one wins. The order is the order shown in
    help output.
    """

    def __init__(self, pairs=(), /):
        entries = []
        for pair in pairs:
            try:
                value, name = pair
            except (TypeError, ValueError):
                raise TypeError("enum mapping entries must be (value, name) pairs") from None
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError("enum mapping values must be integers")
            if not isinstance(name, str):
                raise TypeError("enum mapping names must be strings")
            if not name.strip():
                raise ValueError("enum mapping names cannot be empty")
            entries.append((value, name))
        self._entries = tuple(entries)

    @classmethod
    def fromenum(cls, enumeration, /):
        """
        Build a mapping from an IntEnum class, naming entries after the lower-cased members.
        """
        if not (isinstance(enumeration, type) and issubclass(enumeration, enum.IntEnum)):
            raise TypeError("fromenum() argument must be an IntEnum class")
        return cls((int(member), member.name.lower()) for member in enumeration)

    def __getitem__(self, index, /):
        return self._entries[index]

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return f"enum-mapping({', '.join(name for _, name in self._entries)})"

    @property
    def names(self):
        return tuple(name for _, name in self._entries)

    def lookup(self, name, /):
        """
        Return the value bound to `name`, or raise KeyError.
        """
        lowered = name.lower()
        for value, candidate in self._entries:
            if candidate.lower() == lowered:
                return value
        raise KeyError(name)


def convert(raw, type, /, size=Unset, mapping=Unset):
    """
    Convert a raw token according to its declared type.

    Parameters
    - raw: str, the token as typed by the user.
    - type: ValueType (NONE is not convertible).
    - size: capacity of a STRING destination, terminator included; at most
      size - 1 characters are kept and truncation is silent. Unset means unbounded.
    - mapping: EnumMapping of an ENUM.

    Returns the converted value; nothing is written anywhere.

    Raises
    - ConversionError: malformed token for the type.
    - InvalidTypeError: the type cannot be converted (NONE or unknown).
    """
    try:
        type = ValueType(type)
    except ValueError:
        raise InvalidTypeError("unknown value type %r" % (type,)) from None

    if not isinstance(raw, str):
        raise ConversionError(raw, type)

    match type:
        case ValueType.STRING:
            if size is Unset:
                return raw
            return raw[:max(size - 1, 0)]
        case ValueType.DECIMAL:
            if not (match := _DECIMAL.fullmatch(raw)):
                raise ConversionError(raw, type)
            return int(match["digits"], 10)
        case ValueType.HEXADECIMAL:
            if not (match := _HEXADECIMAL.fullmatch(raw)):
                raise ConversionError(raw, type)
            return int(match["digits"], 16)
        case ValueType.INTEGER:
            if match := _DECIMAL.fullmatch(raw):
                return int(match["digits"], 10)
            if hashexprefix(raw) and (match := _HEXADECIMAL.fullmatch(raw)):
                return int(match["digits"], 16)
            raise ConversionError(raw, type)
        case ValueType.ENUM:
            if not isinstance(mapping, EnumMapping):
                raise InvalidTypeError("enum conversion requires an enum mapping")
            try:
                return mapping.lookup(raw)
            except KeyError:
                raise ConversionError(raw, type) from None
        case _:
            raise InvalidTypeError("value type %r cannot be converted" % (type,))


__all__ = (
    "ValueType",
    "Destination",
    "Boolean",
    "Number",
    "String",
    "Code",
    "EnumMapping",
    "destination",
    "convert",
    "isdecimal",
    "ishex",
    "hashexprefix",
)
