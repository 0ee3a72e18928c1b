"""
cmdtable utilities (internal helpers shared by the specs, the engine and the renderer)

Overview
- UnsetType / Unset
  • Sentinel for "not configured" where None (or 0) is a meaningful value,
    e.g. a flag switch whose fixed flag value is 0, or a spec built without a
    destination yet.

- coalesce(value, default=None)
  • Materialize Unset into a default; every other value passes through.

- rename(callable, name) / @rename("name")
  • Give generated callables readable names in tracebacks and reprs.

- mirror("attr")
  • Read-only property over a private backing field (self._attr).

- isswitch(token) / SWITCH
  • Shape of a switch spelling as the shell tokenizer understands it.
"""
import builtins
import functools
import re
from typing import final


SWITCH = re.compile(r"-[^\s=]+")
"""
Shape of a registrable switch spelling: a single '-' marker followed by one or
more non-blank characters ("-f", "-flag", "-colour", "-2nd").
"""


@final
class UnsetType:
    """
    Sentinel type for values that were not provided.

    - falsy, but distinct from None/0/"" (those are legitimate values here:
      a flag value of 0, an empty help string...).
    - a single instance per process, exposed as Unset.
    - cannot be subclassed.
    """

    def __or__(self, other, /):
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Return `default` when `object` is Unset, otherwise `object` unchanged.

    Only the sentinel is replaced: coalesce(0, 5) is 0 and coalesce(None, 5) is None.
    """
    return default if object is Unset else object


def rename(*parameters):
    """
    Set __name__/__qualname__ on a callable.

    Forms
    - rename(callable, name) -> callable (renamed in place)
    - rename(name)           -> decorator applying that name
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            callable.__qualname__ = callable.__name__ = name
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")
            return rename(lambda callable: rename(callable, name), "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def mirror(name, /):
    """
    Build a read-only property returning self._<name>.

    Sequences are handed out as tuples so callers cannot grow a spec's
    internal lists through the public attribute.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        value = getattr(self, "_" + name)
        if isinstance(value, list):
            return tuple(value)
        return value

    return property(getter)


def isswitch(token, /):
    """
    Tell whether a raw command-line token looks like a switch.

    A lone "-" is not a switch (shells use it for stdin), anything else that
    starts with "-" is, including "-5": numbers are never taken for granted
    as positionals once they carry the switch marker.
    """
    return isinstance(token, str) and len(token) > 1 and token.startswith("-")


Unset = UnsetType()


__all__ = (
    "coalesce",
    "rename",
    "mirror",
    "isswitch",
    "UnsetType",
    "Unset",
    "SWITCH",
)
