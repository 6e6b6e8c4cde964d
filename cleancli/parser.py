"""
cleancli resolution engine: turn one input line into a handler call.

What this module provides
- ParserBuilder: collects top-level command builders and output toggles, then
  freezes everything into a Parser.
- Parser[_R]: holds the frozen command tree; parse(line) tokenizes the line,
  resolves it against the tree, coerces values, fills a Context and invokes the
  matched command's handler, returning whatever the handler returns.

Resolution (one token at a time, no lookahead)
- read-first: the first token must name a top-level command (or alias). A token
  starting with '-' raises CommandExpectedError; an unknown name NotCommandError.
- read-next, in priority order, against the current (deepest) command:
  1. "--name": parameter lookup. Bool parameters are bound to True right away;
     any other type is queued and the next token becomes its value.
  2. "-xyz": every character is a short parameter key, left to right. Bools are
     bound right away, the rest are queued in order; the first unknown character
     raises NotParameterError.
  3. a subcommand key: a new context unit is pushed and becomes current.
  4. a value, when the current command declares a value type.
  5. anything else raises NotCommandError.
- parameters-pending: the token is coerced for the first queued parameter and bound
  under its canonical name; once the queue is empty, reading goes back to read-next.
- end of line: a single queued parameter without a value raises
  ParameterValueMissedError; several queued ones (an unfilled "-if" cluster) raise
  ParserFaultError. The deepest command must have a handler, otherwise NoHandlerError.

Output
- With print_error enabled, a fault is sent to the printer before being raised.
- With print_help enabled, the help of the deepest matched command (or of the
  root) is printed on error too, and a "help" pseudo-command is mounted at the top
  level and under every command with subcommands.
- The fault is raised to the caller in every case.

Quick start
    parser = (
        Parser.builder()
        .command(
            CommandBuilder.with_name("cmd")
            .parameter(ParameterBuilder.with_name("flag").alias("f"))
            .handler(lambda context: context.last["flag"])
        )
        .build()
    )
    parser.parse("cmd -f")  # True
"""
import copy
import difflib
import logging
from collections import deque
from enum import Enum

from .commands import Command, CommandBuilder, build_commands
from .context import Context
from .faults import *
from .formatting import ConsolePrinter, TextHelpFormatter, spell
from .internals import RecordType, seal
from .tokens import Span, split
from .utils import ordinal
from .values import ArgType, ArgValue, coerce

logger = logging.getLogger(__name__)

HELP = "help"


class State(Enum):
    READ_FIRST = "read-first"
    READ_NEXT = "read-next"
    PARAMETERS_PENDING = "parameters-pending"


def _suggest(token, candidates, /):
    try:
        return "did you mean %r?" % difflib.get_close_matches(token, candidates, 1)[0]
    except IndexError:
        return None


class Parser[_R](metaclass=RecordType):
    """
    Frozen command tree plus output settings; see the module docstring for the rules.

    Properties
    - root: implicit top-level Command whose subcommands are the registered commands.
    - commands: shortcut for root.subcommands.
    - printer / formatter: output collaborators (see cleancli.formatting).
    - default: value returned by the built-in help handler.
    - print_error / print_help: output toggles.
    - colorful / fancy / prog: fault rendering options.
    """

    __introspectable__ = (
        "root",
        "printer",
        "formatter",
        "print_error",
        "print_help",
        "colorful",
        "fancy",
        "prog",
    )

    __displayable__ = (
        "commands",
        "print_error",
        "print_help",
    )

    def __init__(
            self,
            commands=(),
            /,
            printer=None,
            formatter=None,
            default=None,
            print_error=False,
            print_help=False,
            *,
            colorful=False,
            fancy=False,
            prog="cli",
    ):
        self._printer = printer if printer is not None else ConsolePrinter()
        self._formatter = formatter if formatter is not None else TextHelpFormatter()
        self._default = default
        self._print_error = bool(print_error)
        self._print_help = bool(print_help)
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)
        self._prog = prog
        self._root = Command("root", subcommands=build_commands(
            commands, self._help_builder if self._print_help else None
        ))
        seal(self)

    @staticmethod
    def builder():
        return ParserBuilder()

    @property
    def commands(self):
        return self.root.subcommands

    @property
    def default(self):
        # Served as given: the help handler must return the caller's own object.
        return self._default

    def parse(self, line, /):
        """
        Parse `line` and return the result of the matched command's handler.

        Raises a ParseError subclass when the line cannot be resolved.
        """
        if not isinstance(line, str):
            raise TypeError("parse() argument must be a string")

        logger.debug("parsing %r", line)
        context = Context(self.root, self.printer)
        try:
            handler = self._resolve(line, context)
        except ParseError as fault:
            self._report(fault, context)
            raise

        logger.debug("invoking handler of %r", context.last.name)
        return handler(context)

    def _resolve(self, line, context):
        state = State.READ_FIRST
        pending = deque()
        unit = None

        for index, (token, span) in enumerate(split(line), start=1):
            match state:
                case State.READ_FIRST:
                    unit = self._read_first(context, token, span, index)
                    state = State.READ_NEXT

                case State.READ_NEXT:
                    unit = self._read_next(context, unit, pending, token, span, index)
                    if pending:
                        state = State.PARAMETERS_PENDING

                case State.PARAMETERS_PENDING:
                    parameter = pending.popleft()
                    unit.bind(parameter, coerce(parameter.value_type, token, span, index))
                    logger.debug("bound %r to %r", parameter.name, token)
                    if not pending:
                        state = State.READ_NEXT

        if state is State.READ_FIRST:
            raise CommandExpectedError(
                "a command is expected but the line is empty",
                title="command expected",
                code=FaultCode.COMMAND_EXPECTED,
                span=Span(line, len(line), len(line)),
                index=1,
                hint=self._hint(context, "type one of the available commands"),
            )

        if len(pending) > 1:
            raise ParserFaultError(
                "parameters %s are still waiting for values at the end of the line" % ", ".join(
                    map(repr, (parameter.name for parameter in pending))
                ),
                title="parser fault",
                code=FaultCode.PARSER_FAULT,
                missing=tuple(parameter.name for parameter in pending),
                hint="give every parameter of a cluster its own value, in order",
            )

        if pending:
            parameter, = pending
            raise ParameterValueMissedError(
                "parameter %r expects a value of type %s but the line ended" % (parameter.name, parameter.value_type),
                title="missing parameter value",
                code=FaultCode.PARAMETER_VALUE_MISSED,
                parameter=parameter,
                hint="add a value after %s (for example: %s <%s>)" % (
                    spell(parameter.name), spell(parameter.name), parameter.value_type
                ),
            )

        if unit.command.handler is None:
            raise NoHandlerError(
                "no handler for command %r" % unit.name,
                title="no handler",
                code=FaultCode.NO_HANDLER,
                name=unit.name,
                hint=self._hint(context, "choose one of its subcommands"),
            )

        return unit.command.handler

    def _read_first(self, context, token, span, index):
        if token.startswith("-"):
            raise CommandExpectedError(
                "a command is expected at %s position, got %r" % (ordinal(index), token),
                title="command expected",
                code=FaultCode.COMMAND_EXPECTED,
                token=token,
                span=span,
                index=index,
                hint=self._hint(context, "start the line with a command name, flags come after it"),
            )

        if (command := self.commands.get(token)) is None:
            raise NotCommandError(
                "unknown command %r at %s position" % (token, ordinal(index)),
                title="unknown command",
                code=FaultCode.NOT_COMMAND,
                token=token,
                span=span,
                index=index,
                hint=_suggest(token, self.commands.keys()) or self._hint(context, "check the command name"),
            )

        logger.debug("matched command %r", token)
        return context.push(token, command)

    def _read_next(self, context, unit, pending, token, span, index):
        command = unit.command

        if token.startswith("--"):
            key = token[2:]
            if (parameter := command.parameters.get(key)) is None:
                raise self._not_parameter(context, command, token, span, index)
            if parameter.value_type is ArgType.BOOL:
                unit.bind(parameter, ArgValue(ArgType.BOOL, True))
            else:
                pending.append(parameter)
            return unit

        if token.startswith("-") and len(token) > 1:
            for offset, key in enumerate(token[1:], start=1):
                if (parameter := command.parameters.get(key)) is None:
                    begin = span.begin + offset
                    raise self._not_parameter(context, command, "-" + key, Span(span.source, begin, begin + 1), index)
                if parameter.value_type is ArgType.BOOL:
                    unit.bind(parameter, ArgValue(ArgType.BOOL, True))
                else:
                    pending.append(parameter)
            return unit

        if (subcommand := command.subcommands.get(token)) is not None:
            logger.debug("matched subcommand %r of %r", token, unit.name)
            return context.push(token, subcommand)

        if command.value is not None:
            unit.assign(coerce(command.value, token, span, index))
            logger.debug("assigned %r to %r", token, unit.name)
            return unit

        raise NotCommandError(
            "unknown subcommand %r of %r at %s position" % (token, unit.name, ordinal(index)),
            title="unknown subcommand",
            code=FaultCode.NOT_COMMAND,
            token=token,
            span=span,
            index=index,
            hint=_suggest(token, command.subcommands.keys()) or self._hint(context, "check the subcommand name"),
        )

    def _not_parameter(self, context, command, token, span, index):
        return NotParameterError(
            "unknown parameter %r at %s position" % (token, ordinal(index)),
            title="unknown parameter",
            code=FaultCode.NOT_PARAMETER,
            token=token,
            span=span,
            index=index,
            hint=_suggest(token, list(map(spell, command.parameters.keys()))) or self._hint(context, "check the parameter name"),
        )

    def _hint(self, context, fallback):
        if not self.print_help:
            return fallback
        route = " ".join(unit.name for unit in context if unit.command.subcommands)
        return "run '%s' to see what is available" % " ".join(filter(None, (route, HELP)))

    def _report(self, fault, context):
        logger.debug("parse failed: %s", fault)
        if self.print_error:
            self.printer.print(copy.replace(fault, prog=self.prog, colorful=self.colorful, fancy=self.fancy))
        if self.print_help:
            self.printer.print(self.formatter.format(context.last.command if context.last else self.root))

    def _help_builder(self):
        return CommandBuilder.with_name(HELP).handler(self._helper).description("This help")

    def _helper(self, context):
        """
        Built-in "help" handler: print the help of the command "help" was typed under.
        """
        command = context[-2].command if len(context) > 1 else context.root
        self.printer.print(self.formatter.format(command))
        return self.default


class ParserBuilder(metaclass=RecordType):
    """
    Fluent builder for a Parser.

    Example
        Parser.builder().command(CommandBuilder.with_name("cmd").handler(run)).print_error(True).build()
    """

    __displayable__ = ()

    def __init__(self):
        self._commands = []
        self._options = {}

    def command(self, builder, /):
        if not isinstance(builder, CommandBuilder):
            raise TypeError("command() argument must be a command builder")
        self._commands.append(builder)
        return self

    def print_error(self, enable=True, /):
        self._options["print_error"] = bool(enable)
        return self

    def print_help(self, enable=True, /):
        self._options["print_help"] = bool(enable)
        return self

    def printer(self, printer, /):
        if not callable(getattr(printer, "print", None)):
            raise TypeError("printer() argument must have a print method")
        self._options["printer"] = printer
        return self

    def formatter(self, formatter, /):
        if not callable(getattr(formatter, "format", None)):
            raise TypeError("formatter() argument must have a format method")
        self._options["formatter"] = formatter
        return self

    def default(self, default, /):
        self._options["default"] = default
        return self

    def colorful(self, enable=True, /):
        self._options["colorful"] = bool(enable)
        return self

    def fancy(self, enable=True, /):
        self._options["fancy"] = bool(enable)
        return self

    def prog(self, name, /):
        if not isinstance(name, str) or not name.strip():
            raise ValueError("prog() argument must be a non-empty string")
        self._options["prog"] = name.strip()
        return self

    def build(self):
        return Parser(self._commands, **self._options)


__all__ = (
    "Parser",
    "ParserBuilder",
)
