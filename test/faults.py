"""
Fault rendering tests.

Scope
- Plain and fancy rich rendering of a ParseError.
- copy.replace attaches rendering options without touching the original.
- Host overrides through __main__.__codes__.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import sys
import unittest
from unittest import TestCase, mock

from rich.console import Console

from cleancli import Span
from cleancli.faults import FaultCode, NotCommandError, ParseError, ParserFaultError


def render(renderable, **options):
    # Capture console output with color disabled unless a test asks for it.
    console = Console(**{"width": 100, "color_system": None, "force_terminal": False} | options)
    with console.capture() as capture:
        console.print(renderable)
    return capture.get()


def fault(**options):
    line = "cmd nope"
    return NotCommandError(
        "unknown subcommand 'nope' of 'cmd' at second position",
        title="unknown subcommand",
        code=FaultCode.NOT_COMMAND,
        token="nope",
        span=Span(line, 4, 8),
        index=2,
        hint="check the subcommand name",
        **options,
    )


class TestParseError(TestCase):
    """Behavioral tests for ParseError."""

    def testStrIsTheMessage(self):
        self.assertEqual(str(fault()), "unknown subcommand 'nope' of 'cmd' at second position")

    def testAccessors(self):
        error = fault()
        self.assertEqual(error.code, FaultCode.NOT_COMMAND)
        self.assertEqual(error.span, Span("cmd nope", 4, 8))
        self.assertEqual(error.index, 2)

    def testOptionsAreReadOnly(self):
        with self.assertRaises(TypeError):
            fault().options["code"] = None

    def testPlainRendering(self):
        lines = render(fault()).splitlines()
        self.assertEqual(lines[0], "[ cli — 11102 | Unknown Subcommand ]")
        self.assertEqual(lines[1], "unknown subcommand 'nope' of 'cmd' at second position")
        self.assertEqual(lines[2], "cmd nope")
        self.assertEqual(lines[3], "    ^^^^")
        self.assertEqual(lines[4], " → check the subcommand name")

    def testRenderingWithoutSpan(self):
        output = render(ParserFaultError("internal parser error", code=FaultCode.PARSER_FAULT))
        self.assertEqual(output.splitlines(), ["[ cli — 11191 | Parse Error ]", "internal parser error"])

    def testEmptySpanGetsOneMarker(self):
        output = render(ParseError("a command is expected", span=Span("", 0, 0)))
        self.assertNotIn("^", output)
        output = render(ParseError("a command is expected", span=Span("cmd ", 4, 4)))
        self.assertIn("    ^", output.splitlines())

    def testFancyRendering(self):
        output = render(fault(fancy=True, prog="tool"))
        self.assertNotEqual(output, render(fault(prog="tool")))
        self.assertIn("tool — 11102", output)

    def testColorfulRendering(self):
        self.assertIn("\x1b[", render(fault(colorful=True), force_terminal=True, color_system="truecolor"))

    def testReplaceKeepsTypeAndOriginal(self):
        original = fault()
        replaced = copy.replace(original, prog="tool", colorful=True)
        self.assertIsInstance(replaced, NotCommandError)
        self.assertEqual(replaced.message, original.message)
        self.assertEqual(replaced.options["prog"], "tool")
        self.assertEqual(replaced.options["token"], "nope")
        self.assertNotIn("prog", original.options)

    def testHostCodeLabels(self):
        main = sys.modules["__main__"]
        with mock.patch.object(main, "__codes__", {FaultCode.NOT_COMMAND: "E-ROUTE"}, create=True):
            self.assertEqual(FaultCode.NOT_COMMAND.normalize(), "E-ROUTE")
            self.assertEqual(FaultCode.NOT_VALUE.normalize(), "11121")
            self.assertIn("[ cli — E-ROUTE | Unknown Subcommand ]", render(fault()))


if __name__ == "__main__":
    unittest.main()
