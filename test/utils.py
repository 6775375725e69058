# python
"""
Internal helper tests (sentinel, coalesce, rename, mirror, ordinal).
"""

from __future__ import annotations

import unittest
from unittest import TestCase
from types import MappingProxyType

from optline.utils import Unset, UnsetType, coalesce, rename, mirror, ordinal


class TestUnset(TestCase):

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testSealed(self):
        with self.assertRaises(TypeError):
            type("Derived", (UnsetType,), {})

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)
        self.assertEqual(coalesce("", "x"), "")


class TestRename(TestCase):

    def testDirectForm(self):
        def original():
            pass
        self.assertIs(rename(original, "renamed"), original)
        self.assertEqual(original.__name__, "renamed")
        self.assertEqual(original.__qualname__, "renamed")

    def testDecoratorForm(self):
        @rename("decorated")
        def original():
            pass
        self.assertEqual(original.__name__, "decorated")

    def testRejectsBuiltins(self):
        with self.assertRaises(TypeError):
            rename(len, "size")

    def testArity(self):
        with self.assertRaises(TypeError):
            rename()
        with self.assertRaises(TypeError):
            rename(1, 2, 3)


class TestMirror(TestCase):

    class Record:
        items = mirror("items")
        table = mirror("table")
        tags = mirror("tags")
        name = mirror("name")

        def __init__(self):
            self._items = [1, 2]
            self._table = {"a": 1}
            self._tags = {"x"}
            self._name = "record"

    def testImmutableViews(self):
        record = self.Record()
        self.assertEqual(record.items, (1, 2))
        self.assertIsInstance(record.table, MappingProxyType)
        self.assertEqual(record.tags, frozenset({"x"}))
        self.assertEqual(record.name, "record")

    def testReadOnly(self):
        with self.assertRaises(AttributeError):
            self.Record().name = "other"

    def testRejectsNonString(self):
        with self.assertRaises(TypeError):
            mirror(1)


class TestOrdinal(TestCase):

    def testWords(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(3), "third")
        self.assertEqual(ordinal(10), "tenth")

    def testSuffixes(self):
        cases = {11: "11th", 12: "12th", 13: "13th", 21: "21st", 22: "22nd", 23: "23rd", 101: "101st", 111: "111th"}
        for number, expected in cases.items():
            with self.subTest(number=number):
                self.assertEqual(ordinal(number), expected)

    def testRejectsNonIntegers(self):
        with self.assertRaises(TypeError):
            ordinal("1")


if __name__ == "__main__":
    unittest.main()
