"""
Tests for the internal helpers (Unset sentinel, freeze, ordinal, RecordType).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from types import MappingProxyType
from unittest import TestCase

from cleancli.internals import RecordType, seal
from cleancli.utils import Unset, UnsetType, coalesce, freeze, ordinal, rename


class Sample(metaclass=RecordType):
    __introspectable__ = (
        "name",
        "items",
    )

    def __init__(self, name, items):
        self._name = name
        self._items = items
        seal(self)


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsyAndPrintable(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            type("Subclass", (UnsetType,), {})

    def testUnionInIsinstance(self):
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertTrue(isinstance("x", str | Unset))

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)


class TestHelpers(TestCase):
    """Behavioral tests for freeze, rename and ordinal."""

    def testFreeze(self):
        self.assertEqual(freeze([1, 2]), (1, 2))
        self.assertIsInstance(freeze({"a": 1}), MappingProxyType)
        self.assertEqual(freeze({1, 2}), frozenset({1, 2}))
        self.assertEqual(freeze("text"), "text")

    def testRename(self):
        @rename("renamed")
        def original():
            pass

        self.assertEqual(original.__name__, "renamed")
        with self.assertRaises(TypeError):
            rename(1)

    def testOrdinalWords(self):
        self.assertEqual([ordinal(number) for number in (1, 2, 3, 10)], ["first", "second", "third", "tenth"])

    def testOrdinalSuffixes(self):
        self.assertEqual(
            [ordinal(number) for number in (11, 12, 13, 21, 22, 23, 24, 101, 111, 112)],
            ["11th", "12th", "13th", "21st", "22nd", "23rd", "24th", "101st", "111th", "112th"],
        )


class TestRecordType(TestCase):
    """Behavioral tests for RecordType records."""

    def testTypename(self):
        self.assertEqual(Sample.__typename__, "sample")
        self.assertEqual(RecordType("ContextUnit", (), {}).__typename__, "context-unit")

    def testMirroredAttributesAreFrozen(self):
        sample = Sample("x", [1, 2])
        self.assertEqual(sample.name, "x")
        self.assertEqual(sample.items, (1, 2))

    def testSealed(self):
        sample = Sample("x", [])
        with self.assertRaises(AttributeError):
            sample.other = 1

    def testRepr(self):
        self.assertEqual(repr(Sample("x", [1])), "sample(name='x', items=(1,))")

    def testRichRepr(self):
        self.assertEqual(list(Sample("x", []).__rich_repr__()), [("name", "x"), ("items", ())])


if __name__ == "__main__":
    unittest.main()
