r"""
cmdtable schema: parameter and switch specifications, and the registration table builder.

Overview
- Specs
  • Parameter: positional, value-bearing entry; the order of a parameter
    sequence is the positional order.
  • Switch: named entry with a short and/or long spelling (synonyms of one
    logical switch), either a flag (ValueType.NONE) or value-bearing.

- Declarative constructors
  • Parameter.string/decimal/hexadecimal/integer/enum(...)
  • Switch.flag/constant/string/decimal/hexadecimal/integer/enum(...)
  They cover the usual table shapes; the plain constructors take everything.

- Registration
  • expand(switches): one Entry per declared spelling plus the built-in
    -b/-break (paging) and -h/-help (help) pairs, in that order.
  • MAX_SWITCHES bounds the number of declared switches.

Metadata (sanitized on construction)
- type: ValueType; parameters cannot be NONE.
- destination: Unset or the destination class paired with the type
  (see values.destination); Unset is accepted here and reported by the
  engine when the entry is actually used.
- help: str, may start with a "[name]" segment naming the argument in help.
- size: STRING only, int >= 1 (capacity including the terminator).
- mapping: ENUM only, EnumMapping (or iterable of (value, name) pairs).
- Switch only
  • short/long: spellings matching r"-[^\s=]+", at least one, distinct.
  • mandatory: bool, the switch must appear on the command line.
  • requirement: Requirement of the value; flags are NONE, value switches
    default to MANDATORY.
  • flagvalue: flags only, int written instead of True when the flag is present.

Quick example:
    >>> from cmdtable.schema import Parameter, Switch
    >>> from cmdtable.values import Number, Boolean
    >>> count, force = Number(), Boolean()
    >>> parameters = [Parameter.decimal(count, "[count]number of runs")]
    >>> switches = [Switch.flag("-f", "-force", force, "ignore errors")]
"""
import enum
import functools
import operator
from collections import namedtuple
from collections.abc import Iterable

from .faults import CapacityExceededError, InvalidTypeError, ResourceExhaustedError
from .utils import *
from .values import EnumMapping, ValueType, destination as _paired


MAX_SWITCHES = 30


class Necessity(enum.IntEnum):
    OPTIONAL  = 1
    MANDATORY = 2


class Requirement(enum.IntEnum):
    NONE      = 0
    OPTIONAL  = 1
    MANDATORY = 2


class Kind(enum.Enum):
    FLAG  = "flag"
    VALUE = "value"


Entry = namedtuple("Entry", ("name", "kind"))
Entry.__doc__ = """
One token-registration entry: a switch spelling and whether it expects a value.
"""


class SpecType(type):
    """
    Metaclass giving specs read-only fields and stable representations.

    - every name in __introspectable__ becomes a property over "_<name>".
    - __typename__ is derived from the class name ("parameter", "switch").
    - __repr__/__rich_repr__ list the introspectable fields.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": name.lower(),
            } | {
                field: mirror(field) for field in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for field in type(self).__introspectable__:
                yield field, getattr(self, field)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate type, help, size, mapping and destination pairing.

    Shared by Parameter and Switch; mutates metadata in place.

    Raises
    - InvalidTypeError: unknown value type, or a destination of the wrong kind.
    - TypeError: wrongly typed help/size/mapping, or size/mapping on a type
      that does not use them.
    - ValueError: size below 1.
    """
    try:
        metadata["type"] = type = ValueType(metadata["type"])
    except ValueError:
        raise InvalidTypeError(f"{cls.__typename__} has an unknown value type {metadata['type']!r}") from None

    if not isinstance(help := metadata["help"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'help' must be a string")
    metadata["help"] = coalesce(help, "")

    size = metadata["size"]
    if type is ValueType.STRING:
        if not isinstance(size, int | Unset) or isinstance(size, bool):
            raise TypeError(f"{cls.__typename__} 'size' must be an integer")
        if isinstance(size, int) and size < 1:
            raise ValueError(f"{cls.__typename__} 'size' must be a positive integer")
    elif size is not Unset:
        raise TypeError(f"only string {cls.__typename__}s can specify a 'size'")

    mapping = metadata["mapping"]
    if type is ValueType.ENUM:
        if mapping is Unset:
            raise TypeError(f"enum {cls.__typename__} must specify a 'mapping'")
        if not isinstance(mapping, EnumMapping):
            if not isinstance(mapping, Iterable):
                raise TypeError(f"{cls.__typename__} 'mapping' must be an enum mapping")
            mapping = EnumMapping(mapping)
        metadata["mapping"] = mapping
    elif mapping is not Unset:
        raise TypeError(f"only enum {cls.__typename__}s can specify a 'mapping'")

    if (target := metadata["destination"]) is None:
        metadata["destination"] = target = Unset
    if target is not Unset:
        expected = _paired(type, metadata.get("flagvalue", Unset))
        if not isinstance(target, expected):
            raise InvalidTypeError(
                f"{cls.__typename__} of type {type.name.lower()} must write to a {expected.__typename__} destination"
            )


def _sanitize_named_metadata(cls, metadata, /):
    """
    Internal: validate spellings, necessity, value requirement and flag value of a Switch.
    """
    spellings = []
    for key in ("short", "long"):
        if (name := metadata[key]) is None:
            metadata[key] = name = Unset
        if name is Unset:
            continue
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} spellings must be strings")
        if not SWITCH.fullmatch(name := name.strip()):
            raise ValueError(f"{cls.__typename__} spelling {name!r} must look like '-name'")
        if name in spellings:
            raise ValueError(f"{cls.__typename__} short and long spellings cannot be the same")
        metadata[key] = name
        spellings.append(name)

    if not spellings:
        raise TypeError(f"{cls.__typename__} must specify at least one spelling")

    metadata["necessity"] = Necessity.MANDATORY if metadata.pop("mandatory") else Necessity.OPTIONAL

    flag = metadata["type"] is ValueType.NONE
    requirement = coalesce(metadata["requirement"], Requirement.NONE if flag else Requirement.MANDATORY)
    try:
        requirement = Requirement(requirement)
    except ValueError:
        raise TypeError(f"{cls.__typename__} 'requirement' must be a Requirement") from None
    if flag and requirement is not Requirement.NONE:
        raise TypeError(f"flag {cls.__typename__} cannot require a value")
    if not flag and requirement is Requirement.NONE:
        raise TypeError(f"{cls.__typename__} of type {metadata['type'].name.lower()} must take a value")
    metadata["requirement"] = requirement

    if (flagvalue := metadata["flagvalue"]) is not Unset:
        if not flag:
            raise TypeError(f"only flag {cls.__typename__}s can specify a 'flagvalue'")
        if not isinstance(flagvalue, int) or isinstance(flagvalue, bool):
            raise TypeError(f"{cls.__typename__} 'flagvalue' must be an integer")


class Parameter(metaclass=SpecType):
    """
    Positional, value-bearing entry of a parameter table.

    The position of a Parameter in its sequence is its position on the command
    line (1-based in messages, after the program name). Whether it is mandatory
    is decided by the table, not the entry: the first `mandatory` entries are.
    """

    __introspectable__ = (
        "type",
        "destination",
        "help",
        "size",
        "mapping",
    )

    def __new__(cls, type, /, destination=Unset, help=Unset, *, size=Unset, mapping=Unset):
        metadata = {
            "type": type,
            "destination": destination,
            "help": help,
            "size": size,
            "mapping": mapping,
        }
        _sanitize_metadata(cls, metadata)
        if metadata["type"] is ValueType.NONE:
            raise InvalidTypeError(f"{cls.__typename__} must carry a value (type none is reserved for flags)")

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @classmethod
    def string(cls, destination, size=Unset, help=Unset):
        return cls(ValueType.STRING, destination, help, size=size)

    @classmethod
    def decimal(cls, destination, help=Unset):
        return cls(ValueType.DECIMAL, destination, help)

    @classmethod
    def hexadecimal(cls, destination, help=Unset):
        return cls(ValueType.HEXADECIMAL, destination, help)

    @classmethod
    def integer(cls, destination, help=Unset):
        return cls(ValueType.INTEGER, destination, help)

    @classmethod
    def enum(cls, destination, mapping, help=Unset):
        return cls(ValueType.ENUM, destination, help, mapping=mapping)


class Switch(metaclass=SpecType):
    """
    Named entry of a switch table.

    Highlights
    - One logical switch, one or two spellings ("-c" and "-colour"); supplying
      both on one command line is a duplicate.
    - Flags (type NONE) write True to a Boolean destination, or their
      `flagvalue` to a Number destination when one is configured.
    - Value switches convert the token following the spelling.
    """

    __introspectable__ = (
        "short",
        "long",
        "necessity",
        "type",
        "requirement",
        "destination",
        "help",
        "size",
        "mapping",
        "flagvalue",
    )

    def __new__(
            cls,
            short=Unset,
            long=Unset,
            /,
            type=ValueType.NONE,
            destination=Unset,
            help=Unset,
            *,
            mandatory=False,
            requirement=Unset,
            size=Unset,
            mapping=Unset,
            flagvalue=Unset
    ):
        metadata = {
            "short": short,
            "long": long,
            "mandatory": bool(mandatory),
            "type": type,
            "requirement": requirement,
            "destination": destination,
            "help": help,
            "size": size,
            "mapping": mapping,
            "flagvalue": flagvalue,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_named_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @property
    def names(self):
        """declared spellings, short first."""
        return tuple(name for name in (self._short, self._long) if name is not Unset)

    @property
    def primary(self):
        """spelling used to name the switch in messages: the short one when there is one."""
        return self.names[0]

    @property
    def mandatory(self):
        return self._necessity is Necessity.MANDATORY

    @classmethod
    def flag(cls, short, long, destination, help=Unset):
        return cls(short, long, ValueType.NONE, destination, help)

    @classmethod
    def constant(cls, short, long, destination, value, help=Unset):
        return cls(short, long, ValueType.NONE, destination, help, flagvalue=value)

    @classmethod
    def string(cls, short, long, destination, size=Unset, help=Unset, *, mandatory=False):
        return cls(short, long, ValueType.STRING, destination, help, mandatory=mandatory, size=size)

    @classmethod
    def decimal(cls, short, long, destination, help=Unset, *, mandatory=False):
        return cls(short, long, ValueType.DECIMAL, destination, help, mandatory=mandatory)

    @classmethod
    def hexadecimal(cls, short, long, destination, help=Unset, *, mandatory=False):
        return cls(short, long, ValueType.HEXADECIMAL, destination, help, mandatory=mandatory)

    @classmethod
    def integer(cls, short, long, destination, help=Unset, *, mandatory=False):
        return cls(short, long, ValueType.INTEGER, destination, help, mandatory=mandatory)

    @classmethod
    def enum(cls, short, long, destination, mapping, help=Unset, *, mandatory=False):
        return cls(short, long, ValueType.ENUM, destination, help, mandatory=mandatory, mapping=mapping)


BREAK = Switch("-b", "-break", help="enable page break mode")
HELP = Switch("-h", "-help", help="display this help and exit")


def builtins(*, help=True):
    """
    The synthetic switches every table carries: paging, then help (unless disabled).
    """
    return (BREAK, HELP) if help else (BREAK,)


def expand(switches, /, *, capacity=MAX_SWITCHES, help=True):
    """
    Build the token-registration table of a switch set.

    Each spelling of each switch becomes its own Entry (synonyms are
    registered independently), typed FLAG or VALUE after the switch type;
    the built-in entries follow. Order carries no meaning to the tokenizer.

    Raises
    - TypeError: an item is not a Switch.
    - CapacityExceededError: more than `capacity` switches were declared;
      nothing is tokenized in that case.
    - ResourceExhaustedError: the table could not be allocated.
    """
    switches = tuple(switches)
    for switch in switches:
        if not isinstance(switch, Switch):
            raise TypeError("expand() argument must be an iterable of switches")

    if len(switches) > capacity:
        raise CapacityExceededError(
            "TBLERR(%d): Exceeded maximum switch count" % capacity,
            title="too many switches",
            hint="declare at most %d switches" % capacity,
        )

    try:
        entries = []
        for switch in switches + builtins(help=help):
            kind = Kind.FLAG if switch.type is ValueType.NONE else Kind.VALUE
            entries.extend(Entry(name, kind) for name in switch.names)
    except MemoryError:
        raise ResourceExhaustedError(
            "Out of resources while building the switch table",
            title="out of resources",
        ) from None

    return tuple(entries)


__all__ = (
    "MAX_SWITCHES",
    "Necessity",
    "Requirement",
    "Kind",
    "Entry",
    "Parameter",
    "Switch",
    "BREAK",
    "HELP",
    "builtins",
    "expand",
)

# Internal metaclass, not part of the public API.
del SpecType
