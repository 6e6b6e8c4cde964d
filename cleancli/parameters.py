"""
cleancli parameters: named, typed options attached to a command.

- ParameterBuilder assembles a parameter (name, value type, aliases, description).
- Parameter is the frozen record a command keeps once the builder is registered;
  the canonical name and every alias map to the very same Parameter object.

Aliases
- A single-character key is used as "-a" and may be combined in clusters ("-abc").
- A longer key is used as "--alias".
- The canonical name follows the same rule, so a one-letter name works as "-n".
"""
import logging
import re

from .internals import RecordType, seal
from .values import ArgType

logger = logging.getLogger(__name__)


def validate_key(cls, key, /, what="name"):
    """
    Validate a lookup key (name or alias) for a command or parameter.

    Keys must be non-empty strings without whitespace and must not start with '-'
    (the dashes belong to the command line, not to the key).
    """
    if not isinstance(key, str):
        raise TypeError(f"{cls.__typename__} {what} must be a string")
    elif not key:
        raise ValueError(f"{cls.__typename__} {what} cannot be empty")
    elif key.startswith("-"):
        raise ValueError(f"{cls.__typename__} {what} {key!r} cannot start with '-'")
    elif re.search(r"\s", key):
        raise ValueError(f"{cls.__typename__} {what} {key!r} cannot contain whitespace")
    return key


class Parameter(metaclass=RecordType):
    """
    Frozen parameter record.

    Properties
    - name: canonical name; bound values are stored under it.
    - value_type: ArgType deciding coercion and whether a value token is consumed.
    - description: help text ("" when not provided).
    - aliases: alternate keys resolving to this record.
    """

    __introspectable__ = (
        "name",
        "value_type",
        "description",
        "aliases",
    )

    def __init__(self, name, value_type, description, aliases):
        self._name = name
        self._value_type = value_type
        self._description = description
        self._aliases = tuple(aliases)
        seal(self)

    @property
    def keys(self):
        """
        Canonical name followed by every alias.
        """
        return (self.name, *self.aliases)

    @staticmethod
    def with_name(name, /):
        return ParameterBuilder.with_name(name)


class ParameterBuilder(metaclass=RecordType):
    """
    Fluent builder for a Parameter.

    Example
        ParameterBuilder.with_name("int").value_type(ArgType.INT).alias("i").alias("ii")
    """

    __displayable__ = ()

    def __init__(self, name):
        self._name = validate_key(Parameter, name)
        self._value_type = ArgType.BOOL
        self._aliases = []
        self._description = None

    @classmethod
    def with_name(cls, name, /):
        return cls(name)

    def value_type(self, type, /):
        self._value_type = ArgType(type)
        return self

    def alias(self, alias, /):
        self._aliases.append(validate_key(Parameter, alias, "alias"))
        return self

    def description(self, text, /):
        if not isinstance(text, str):
            raise TypeError(f"{Parameter.__typename__} description must be a string")
        self._description = text
        return self

    def build(self):
        return Parameter(self._name, self._value_type, self._description or "", self._aliases)


def add_parameter(parameters, builder, /):
    """
    Freeze a ParameterBuilder into `parameters`, keyed by name and by every alias.

    Raises ValueError if any key is already taken within this command
    (including a parameter repeating one of its own keys).
    """
    if not isinstance(builder, ParameterBuilder):
        raise TypeError(f"{Parameter.__typename__} must be registered through a parameter builder")

    parameter = builder.build()
    for index, key in enumerate(keys := parameter.keys):
        if key in keys[:index]:
            raise ValueError(f"{Parameter.__typename__} key {key!r} of {parameter.name!r} is repeated")
        if key in parameters:
            raise ValueError(
                f"{Parameter.__typename__} key {key!r} of {parameter.name!r} "
                f"is already in use by {parameters[key].name!r}"
            )
    for key in keys:
        parameters[key] = parameter
    logger.debug("registered parameter %r <%s> under keys %r", parameter.name, parameter.value_type, parameter.keys)
    return parameter


__all__ = (
    "Parameter",
    "ParameterBuilder",
)
