"""
Small helpers shared by the records, the value model and the parser.

- Unset: "not provided" marker for optional fault fields, distinct from None.
- coalesce(value, default): swap Unset for a default, keep every other value.
- rename("name"): decorator fixing __name__/__qualname__ of generated methods.
- freeze(container) / mirror("attr"): read-only views over private fields.
- ordinal(n): "first", "second", ..., "11th" for fault messages.
"""
import functools
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Type of the Unset marker. There is one instance; it is falsy and usable in
    isinstance unions (`str | Unset`).
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")

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

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"


Unset = UnsetType()


def coalesce(object, default=None, /):
    return default if object is Unset else object


def rename(name, /):
    """
    Decorator setting both __name__ and __qualname__ of a function to `name`.
    """
    if not isinstance(name, str):
        raise TypeError("rename() argument must be a string")

    def decorator(function):
        if not callable(function):
            raise TypeError("rename() must decorate a callable")
        function.__name__ = function.__qualname__ = name
        return function

    return decorator


def freeze(object, /):
    """
    Shallow read-only view of a container; anything else is returned unchanged.

    Tuples and mapping proxies are already read-only and come back as they are.
    """
    match object:
        case tuple() | MappingProxyType() | frozenset() | str() | bytes():
            return object
        case Sequence():
            return tuple(object)
        case Mapping():
            return MappingProxyType(dict(object))
        case Set():
            return frozenset(object)
    return object


def mirror(name, /):
    """
    Read-only property serving freeze(self._<name>).
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return freeze(getattr(self, "_" + name))

    return property(getter)


_WORDS = ("first", "second", "third", "fourth", "fifth", "sixth", "seventh", "eighth", "ninth", "tenth")


@functools.cache
def ordinal(number, /):
    if 1 <= number <= len(_WORDS):
        return _WORDS[number - 1]
    suffix = "th" if number % 100 in (11, 12, 13) else {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "rename",
    "freeze",
    "mirror",
    "ordinal",
)
