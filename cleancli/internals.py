"""
Internal record metaclass shared by the command tree and the per-call context.

RecordType turns a plain class into a frozen, introspectable record:
- __typename__ is derived from the class name ("ContextUnit" → "context-unit")
  and used in build-time error messages.
- every name listed in __introspectable__ becomes a read-only property that
  mirrors the private "_{name}" backing field (see utils.mirror).
- __repr__ and __rich_repr__ are generated from __displayable__ (or
  __introspectable__ when unset), so records pretty-print with rich.
- instances refuse attribute assignment once __sealed__ is set by the owner.
"""
import functools
import operator
import re

from .utils import *


class RecordType(type):
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
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
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        @rename("__setattr__")
        def __setattr__(self, name, value):
            if getattr(self, "__sealed__", False):
                raise AttributeError(f"{type(self).__typename__} is read-only")
            object.__setattr__(self, name, value)
        self.__setattr__ = __setattr__

        return self


def seal(record, /):
    """
    Freeze a fully-initialized record; further attribute writes raise AttributeError.
    """
    object.__setattr__(record, "__sealed__", True)
    return record


__all__ = (
    "RecordType",
    "seal",
)
