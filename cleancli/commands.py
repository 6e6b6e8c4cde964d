"""
cleancli command tree: builders and frozen command nodes.

What this module provides
- CommandBuilder: fluent, accretive description of a command (name, aliases,
  subcommands, parameters, optional positional value type, handler, description).
- Command: the frozen node the resolution engine walks. A command and each of its
  aliases are keys mapping to the same Command object in the parent's
  `subcommands` mapping, so alias and canonical lookups are indistinguishable.

Build-time validation (programmer errors, raised immediately)
- ValueError: two subcommands (or a subcommand and an alias) share a key under one
  parent; two parameters (or a parameter and an alias) share a key under one command;
  malformed names.
- TypeError: a command with no value type, no handler and no subcommands; a handler
  that is not callable; registering something that is not a builder.

Build order
- Children are frozen before their parent: the parent's Command embeds references
  to already-built subcommands and parameters, and nothing is mutated afterwards.
"""
import logging
from types import MappingProxyType

from .internals import RecordType, seal
from .parameters import add_parameter, validate_key
from .values import ArgType

logger = logging.getLogger(__name__)


class Command(metaclass=RecordType):
    """
    Frozen command node.

    Properties
    - name: canonical name (the key the command was registered with).
    - aliases: alternate keys registered next to the name.
    - subcommands: read-only mapping of name-or-alias → Command.
    - value: ArgType of the trailing positional value, or None.
    - description: help text, or None.
    - parameters: read-only mapping of name-or-alias → Parameter.
    - handler: callable receiving the Context, or None for pure containers.
    """

    __introspectable__ = (
        "name",
        "aliases",
        "subcommands",
        "value",
        "description",
        "parameters",
        "handler",
    )

    __displayable__ = (
        "name",
        "aliases",
        "value",
        "description",
        "subcommands",
    )

    def __init__(self, name, aliases=(), subcommands=None, value=None, description=None, parameters=None, handler=None):
        self._name = name
        self._aliases = tuple(aliases)
        self._subcommands = MappingProxyType(dict(subcommands or {}))
        self._value = value
        self._description = description
        self._parameters = MappingProxyType(dict(parameters or {}))
        self._handler = handler
        seal(self)

    @property
    def keys(self):
        return (self.name, *self.aliases)


class CommandBuilder(metaclass=RecordType):
    """
    Fluent builder for a Command.

    Example
        CommandBuilder.with_name("cmd")
            .alias("c")
            .parameter(ParameterBuilder.with_name("flag").alias("f"))
            .subcommand(CommandBuilder.with_name("sub").handler(on_sub))
            .handler(on_cmd)
    """

    __displayable__ = ()

    def __init__(self, name):
        self._name = validate_key(Command, name)
        self._aliases = []
        self._subcommands = []
        self._value = None
        self._description = None
        self._parameters = {}
        self._handler = None

    @classmethod
    def with_name(cls, name, /):
        return cls(name)

    def alias(self, alias, /):
        self._aliases.append(validate_key(Command, alias, "alias"))
        return self

    def subcommand(self, builder, /):
        if not isinstance(builder, CommandBuilder):
            raise TypeError(f"{Command.__typename__} subcommand must be a command builder")
        self._subcommands.append(builder)
        return self

    def parameter(self, builder, /):
        add_parameter(self._parameters, builder)
        return self

    def handler(self, handler, /):
        if not callable(handler):
            raise TypeError(f"{Command.__typename__} handler must be callable")
        self._handler = handler
        return self

    def use_value(self, type, /):
        self._value = ArgType(type)
        return self

    def description(self, text, /):
        if not isinstance(text, str):
            raise TypeError(f"{Command.__typename__} description must be a string")
        self._description = text
        return self

    def build(self, helper=None):
        """
        Freeze this builder (and its subcommands, depth-first) into a Command.

        `helper`, when given, is a zero-argument factory returning the builder of the
        "help" pseudo-command; it is mounted under every command that has subcommands.
        """
        if self._value is None and self._handler is None and not self._subcommands:
            raise TypeError(
                f"{Command.__typename__} {self._name!r} has no value, no handler and no subcommands"
            )

        return Command(
            self._name,
            self._aliases,
            build_commands(self._subcommands, helper if self._subcommands else None),
            self._value,
            self._description,
            self._parameters,
            self._handler,
        )


def add_command(commands, builder, /, helper=None):
    """
    Freeze `builder` and register it in `commands` under its name and every alias.

    Raises ValueError if any key is already taken under this parent (including a
    command repeating one of its own keys).
    """
    if not isinstance(builder, CommandBuilder):
        raise TypeError(f"{Command.__typename__} must be registered through a command builder")

    keys = [builder._name, *builder._aliases]
    for index, key in enumerate(keys):
        if key in commands or key in keys[:index]:
            raise ValueError(f"{Command.__typename__} key {key!r} of {builder._name!r} is already in use")

    command = builder.build(helper)
    for key in keys:
        commands[key] = command
    logger.debug("registered command %r under keys %r", command.name, command.keys)
    return command


def build_commands(builders, /, helper=None):
    """
    Freeze a sequence of sibling builders into a key → Command mapping.

    When `helper` is given, the "help" pseudo-command is registered after the
    siblings, so a user command named "help" collides with it.
    """
    commands = {}
    for builder in builders:
        add_command(commands, builder, helper)
    if helper is not None:
        add_command(commands, helper(), helper)
    return commands


__all__ = (
    "Command",
    "CommandBuilder",
)
