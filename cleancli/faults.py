"""
cleancli faults (parse errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every failure the
  tokenizer, the resolution engine or value coercion can report.
- ParseError: base type carrying a message plus read-only options, able to
  render itself through rich in a friendly, lowercased and actionable way.
- One subclass per failure mode, so callers can catch precisely.

UX goals
- Position-first messages: every message names the ordinal position of the
  offending token (“at third position”).
- Soft but technical language: short titles, one-sentence bodies, a single hint.
- When the offending span is known, the rendered fault repeats the input line
  and underlines the span.

Integration
- Parser.parse raises these; nothing is retried internally.
- When error printing is enabled, the parser hands the fault to its printer
  before raising; rendering options (colorful, fancy, prog) are attached with
  copy.replace(fault, ...).
- Hosts may remap codes with a __codes__ mapping and restyle with a __styles__
  mapping defined in __main__.
"""
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset


# Default styles; a host may override any role through __main__.__styles__.
PALETTE = MappingProxyType({
    "prog-name": "bold #E6E6F0",
    "code": "bold #00E5FF",
    "error-title": "bold #FF4DA6",
    "error-message": "#C8C8D0",
    "source": "#9CA3AF",
    "marker": "bold #FF4DA6",
    "hint-arrow": "dim #9CE19C",
    "hint": "italic #9CE19C",
})


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping (by high-level domain)
    - routing (1110x)
      • COMMAND_EXPECTED, NOT_COMMAND, NO_HANDLER
    - parameters (1111x)
      • NOT_PARAMETER, PARAMETER_VALUE_MISSED
    - values (1112x)
      • NOT_VALUE, PARSE_BOOL, PARSE_INT, PARSE_FLOAT
    - internal (1119x)
      • PARSER_FAULT
    """
    # --- routing errors ---
    COMMAND_EXPECTED       = 11101
    NOT_COMMAND            = 11102
    NO_HANDLER             = 11103

    # --- parameter errors ---
    NOT_PARAMETER          = 11111
    PARAMETER_VALUE_MISSED = 11112

    # --- value errors ---
    NOT_VALUE              = 11121
    PARSE_BOOL             = 11122
    PARSE_INT              = 11123
    PARSE_FLOAT            = 11124

    # --- internal errors ---
    PARSER_FAULT           = 11191

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ParseError(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def span(self):
        return self.options.get("span")

    @property
    def index(self):
        return self.options.get("index")

    def __str__(self):
        return str(self.message)

    def __rich__(self):
        palette = PALETTE | getattr(__import__("__main__"), "__styles__", {})
        colorful = self.options.get("colorful", False)

        def paint(fragment, role):
            return Text(str(fragment) if fragment else "", palette.get(role, "") if colorful else "")

        code = self.code.normalize() if isinstance(self.code, FaultCode) else "?"
        title = self.options.get("title", "parse error").title()
        header = Text.assemble(
            "[ ", paint(self.options.get("prog", "cli"), "prog-name"),
            " — ", paint(code, "code"),
            " | ", paint(title, "error-title"), " ]",
        )

        body = [paint(self.message, "error-message")]
        if (span := self.span) is not None and span.source:
            body.append(paint(span.source, "source"))
            body.append(Text.assemble(" " * span.begin, paint("^" * max(span.end - span.begin, 1), "marker")))
        if hint := self.options.get("hint"):
            body.append(Text.assemble(paint(" → ", "hint-arrow"), paint(hint, "hint")))

        if self.options.get("fancy", False):
            return Panel(Group(*body), title=header, title_align="left")
        return Group(header, *body)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class CommandExpectedError(ParseError): ...
class NotCommandError(ParseError): ...
class NotParameterError(ParseError): ...
class NotValueError(ParseError): ...
class ParseBoolError(ParseError): ...
class ParseIntError(ParseError): ...
class ParseFloatError(ParseError): ...
class ParameterValueMissedError(ParseError): ...
class NoHandlerError(ParseError): ...
class ParserFaultError(ParseError): ...


__all__ = (
    "FaultCode",
    "ParseError",
    "CommandExpectedError",
    "NotCommandError",
    "NotParameterError",
    "NotValueError",
    "ParseBoolError",
    "ParseIntError",
    "ParseFloatError",
    "ParameterValueMissedError",
    "NoHandlerError",
    "ParserFaultError",
)
