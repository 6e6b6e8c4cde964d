"""
Value model behavioral tests (ArgType, ArgValue, coerce).

Scope
- Bool literal totality and case sensitivity.
- Int range limits and malformed digits.
- Float grammar and saturation to infinity.
- Flag-looking tokens refused for bool and string values.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import math
import sys
import unittest
from unittest import TestCase

from cleancli import ArgType, ArgValue, Span, coerce
from cleancli.faults import (
    FaultCode,
    NotValueError,
    ParseBoolError,
    ParseIntError,
    ParseFloatError,
)
from cleancli.values import INT_MIN, INT_MAX


class TestArgType(TestCase):
    """Behavioral tests for ArgType."""

    def testLabels(self):
        self.assertEqual([str(type) for type in ArgType], ["bool", "int", "float", "string"])

    def testLookupByLabel(self):
        self.assertIs(ArgType("int"), ArgType.INT)

    def testNumeric(self):
        self.assertTrue(ArgType.INT.numeric)
        self.assertTrue(ArgType.FLOAT.numeric)
        self.assertFalse(ArgType.BOOL.numeric)
        self.assertFalse(ArgType.STRING.numeric)


class TestBoolCoercion(TestCase):
    """Behavioral tests for bool literals."""

    def testTruthyLiterals(self):
        for token in ("true", "yes", "1", "on"):
            self.assertEqual(coerce(ArgType.BOOL, token), ArgValue(ArgType.BOOL, True))

    def testFalsyLiterals(self):
        for token in ("false", "no", "0", "off"):
            self.assertEqual(coerce(ArgType.BOOL, token), ArgValue(ArgType.BOOL, False))

    def testOtherTextFails(self):
        for token in ("True", "Y", "2", "", "enabled"):
            with self.assertRaises(ParseBoolError):
                coerce(ArgType.BOOL, token)

    def testFaultCarriesPosition(self):
        line = "cmd --flag maybe"
        with self.assertRaises(ParseBoolError) as context:
            coerce(ArgType.BOOL, "maybe", Span(line, 11, 16), 3)
        fault = context.exception
        self.assertIn("at third position", str(fault))
        self.assertEqual(fault.code, FaultCode.PARSE_BOOL)
        self.assertEqual(fault.span, Span(line, 11, 16))
        self.assertEqual(fault.index, 3)


class TestIntCoercion(TestCase):
    """Behavioral tests for int coercion."""

    def testRoundTripOnLimits(self):
        for number in (INT_MIN, -1, 0, 1, 42, INT_MAX):
            self.assertEqual(coerce(ArgType.INT, str(number)).value, number)

    def testExplicitPlusSign(self):
        self.assertEqual(coerce(ArgType.INT, "+7").value, 7)

    def testNegativeNumbersAccepted(self):
        self.assertEqual(coerce(ArgType.INT, "-5"), ArgValue(ArgType.INT, -5))

    def testOverflowFails(self):
        with self.assertRaises(ParseIntError) as context:
            coerce(ArgType.INT, str(INT_MAX + 1))
        self.assertEqual(context.exception.options["reason"], "number too large to fit in target type")

    def testUnderflowFails(self):
        with self.assertRaises(ParseIntError) as context:
            coerce(ArgType.INT, str(INT_MIN - 1))
        self.assertEqual(context.exception.options["reason"], "number too small to fit in target type")

    def testVeryLongNumbersFailAsOutOfRange(self):
        for token, reason in (("9" * 5000, "large"), ("-" + "9" * 5000, "small"), ("+" + "1" * 20, "large")):
            with self.assertRaises(ParseIntError) as context:
                coerce(ArgType.INT, token)
            self.assertEqual(context.exception.options["reason"], "number too %s to fit in target type" % reason)
            self.assertEqual(context.exception.options["token"], token)

    def testLeadingZerosDoNotCountAsDigits(self):
        self.assertEqual(coerce(ArgType.INT, "0" * 5000 + "42").value, 42)
        self.assertEqual(coerce(ArgType.INT, "-000" + str(INT_MAX)).value, -INT_MAX)

    def testInvalidDigitFails(self):
        for token in ("12a", "4.2", "1_000", " 1", "", "+"):
            with self.assertRaises(ParseIntError) as context:
                coerce(ArgType.INT, token)
            self.assertEqual(context.exception.options["reason"], "invalid digit found in string")


class TestFloatCoercion(TestCase):
    """Behavioral tests for float coercion."""

    def testDecimalAndScientific(self):
        for token, number in (("4.2", 4.2), ("1", 1.0), ("1.", 1.0), (".5", 0.5), ("2.5E-3", 0.0025), ("-0.5", -0.5)):
            self.assertEqual(coerce(ArgType.FLOAT, token).value, number)

    def testSpecialValues(self):
        self.assertEqual(coerce(ArgType.FLOAT, "inf").value, math.inf)
        self.assertEqual(coerce(ArgType.FLOAT, "-Infinity").value, -math.inf)
        self.assertTrue(math.isnan(coerce(ArgType.FLOAT, "NaN").value))

    def testSaturatesToInfinity(self):
        digits = "%.0f" % sys.float_info.max
        self.assertEqual(coerce(ArgType.FLOAT, digits + "999").value, math.inf)
        self.assertEqual(coerce(ArgType.FLOAT, "-" + digits + "999").value, -math.inf)

    def testInvalidLiteralFails(self):
        for token in ("abc", "1e", "4,2", "0x10", ""):
            with self.assertRaises(ParseFloatError) as context:
                coerce(ArgType.FLOAT, token)
            self.assertEqual(context.exception.options["reason"], "invalid float literal")


class TestStringCoercion(TestCase):
    """Behavioral tests for string coercion and flag-looking tokens."""

    def testVerbatim(self):
        self.assertEqual(coerce(ArgType.STRING, "bla bla"), ArgValue(ArgType.STRING, "bla bla"))

    def testAcceptsLabel(self):
        self.assertEqual(coerce("string", "x").type, ArgType.STRING)

    def testFlagLookingStringRefused(self):
        with self.assertRaises(NotValueError) as context:
            coerce(ArgType.STRING, "--name", index=2)
        self.assertIn("at second position", str(context.exception))
        self.assertEqual(context.exception.code, FaultCode.NOT_VALUE)

    def testFlagLookingBoolRefused(self):
        with self.assertRaises(NotValueError):
            coerce(ArgType.BOOL, "-1")

    def testUnknownTypeRejected(self):
        with self.assertRaises(ValueError):
            coerce("complex", "1j")

    def testNonStringTokenRejected(self):
        with self.assertRaises(TypeError):
            coerce(ArgType.INT, 42)


if __name__ == "__main__":
    unittest.main()
