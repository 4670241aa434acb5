"""
Tests for the internal helpers used in fault messages and introspection.
"""
import unittest
from types import MappingProxyType
from unittest import TestCase

from pennant.utils import *


class UnsetTest(TestCase):

    def testSingleton(self) -> None:
        self.assertIs(Unset, UnsetType())

    def testFalsyAndRepr(self) -> None:
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testUnionInIsinstance(self) -> None:
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertTrue(isinstance("x", str | Unset))
        self.assertFalse(isinstance(1, str | Unset))

    def testCoalesce(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce((), "fallback"), ())

    def testCannotBeSubclassed(self) -> None:
        with self.assertRaises(TypeError):
            class Other(UnsetType):
                pass


class MirrorTest(TestCase):

    def testContainersAreFrozen(self) -> None:
        class Holder:
            items = mirror("items")
            table = mirror("table")
            names = mirror("names")

            def __init__(self):
                self._items = [1, 2]
                self._table = {"a": 1}
                self._names = {"x"}

        holder = Holder()
        self.assertEqual(holder.items, (1, 2))
        self.assertIsInstance(holder.table, MappingProxyType)
        self.assertEqual(holder.names, frozenset({"x"}))
        with self.assertRaises(AttributeError):
            holder.items = ()


class WordingTest(TestCase):

    def testPluralize(self) -> None:
        self.assertEqual(pluralize("value"), "values")
        self.assertEqual(pluralize("value", 1), "value")
        self.assertEqual(pluralize("entry"), "entries")
        self.assertEqual(pluralize("switch"), "switches")

    def testOrdinalWords(self) -> None:
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(3), "third")
        self.assertEqual(ordinal(20), "twentieth")

    def testOrdinalSuffixes(self) -> None:
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(23), "23rd")
        self.assertEqual(ordinal(111), "111th")
        self.assertEqual(ordinal(112), "112th")

    def testOrdinalRejectsNonPositive(self) -> None:
        with self.assertRaises(ValueError):
            ordinal(0)
        with self.assertRaises(TypeError):
            ordinal(True)

    def testRename(self) -> None:
        @rename("renamed")
        def original():
            pass

        self.assertEqual(original.__name__, "renamed")
        self.assertEqual(original.__qualname__, "renamed")


if __name__ == "__main__":
    unittest.main()
