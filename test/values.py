"""
Tests for the resolved flag value variants.

This module verifies:
- Absent/Present are per-process singletons (identity, copy, pickle).
- Single/Many compare by payload and support structural pattern matching.
- FlagValue.resolve() picks the variant dictated by the arity.
- The variant set is closed (no subclassing).
"""
import copy
import pickle
import unittest
from unittest import TestCase

from rich.console import Console
from rich.text import Text

from pennant.values import *


class SingletonVariantTest(TestCase):
    """Absent and Present carry no payload and are singletons."""

    def testAbsentSingleton(self) -> None:
        self.assertIs(Absent(), Absent())

    def testPresentSingleton(self) -> None:
        self.assertIs(Present(), Present())

    def testAbsentIsFalsy(self) -> None:
        self.assertFalse(Absent())
        self.assertTrue(Present())

    def testAbsentNotEqualToPresent(self) -> None:
        self.assertNotEqual(Absent(), Present())
        self.assertNotEqual(Absent(), None)

    def testCopyAndPicklePreserveIdentity(self) -> None:
        for value in (Absent(), Present()):
            self.assertIs(copy.copy(value), value)
            self.assertIs(copy.deepcopy(value), value)
            self.assertIs(pickle.loads(pickle.dumps(value)), value)

    def testRepr(self) -> None:
        self.assertEqual(repr(Absent()), "Absent()")
        self.assertEqual(repr(Present()), "Present()")

    def testRich(self) -> None:
        self.assertEqual(Absent().__rich__(), Text("Absent()", style="dim"))

    def testRichConsolePrint(self) -> None:
        console = Console(color_system=None, force_terminal=False)
        with console.capture() as capture:
            console.print(Present())
        self.assertEqual(capture.get().strip(), "Present()")


class PayloadVariantTest(TestCase):
    """Single and Many compare and hash by payload."""

    def testSingleEquality(self) -> None:
        self.assertEqual(Single("foo.txt"), Single("foo.txt"))
        self.assertNotEqual(Single("foo.txt"), Single("bar.txt"))
        self.assertEqual(hash(Single("a")), hash(Single("a")))

    def testSingleRejectsNonString(self) -> None:
        with self.assertRaises(TypeError):
            Single(3)

    def testManyNormalizesToTuple(self) -> None:
        many = Many(["pkgname", "pkgpath"])
        self.assertEqual(many.values, ("pkgname", "pkgpath"))
        self.assertEqual(len(many), 2)
        self.assertEqual(many, Many(("pkgname", "pkgpath")))

    def testManyRejectsBareString(self) -> None:
        with self.assertRaises(TypeError):
            Many("ab")

    def testManyRejectsNonStringMembers(self) -> None:
        with self.assertRaises(TypeError):
            Many(["a", 1])

    def testSingleNotEqualToMany(self) -> None:
        self.assertNotEqual(Single("a"), Many(["a"]))

    def testPatternMatching(self) -> None:
        match Many(["name", "path"]):
            case Single(value):
                self.fail("matched the wrong variant: %r" % value)
            case Many((name, path)):
                self.assertEqual((name, path), ("name", "path"))
            case _:
                self.fail("no variant matched")

        match Single("b.cfg"):
            case Single(value):
                self.assertEqual(value, "b.cfg")
            case _:
                self.fail("no variant matched")

    def testRepr(self) -> None:
        self.assertEqual(repr(Single("x")), "Single('x')")
        self.assertEqual(repr(Many(["x", "y"])), "Many(('x', 'y'))")


class ResolveTest(TestCase):
    """FlagValue.resolve() ties the variant to the arity."""

    def testZeroArityIsPresent(self) -> None:
        self.assertIs(FlagValue.resolve(0), Present())

    def testOneArityIsSingle(self) -> None:
        self.assertEqual(FlagValue.resolve(1, ["v"]), Single("v"))

    def testLargerArityIsMany(self) -> None:
        self.assertEqual(FlagValue.resolve(3, ["a", "b", "c"]), Many(["a", "b", "c"]))

    def testLengthMismatchRejected(self) -> None:
        with self.assertRaises(ValueError):
            FlagValue.resolve(2, ["a"])

    def testNegativeArityRejected(self) -> None:
        with self.assertRaises(ValueError):
            FlagValue.resolve(-1)

    def testBoolArityRejected(self) -> None:
        with self.assertRaises(TypeError):
            FlagValue.resolve(True, ["a"])


class SealedTest(TestCase):
    """The variant set is closed."""

    def testBaseCannotBeSubclassed(self) -> None:
        with self.assertRaises(TypeError):
            class Extra(FlagValue):
                pass

    def testVariantCannotBeSubclassed(self) -> None:
        with self.assertRaises(TypeError):
            class Extra(Single):
                pass


if __name__ == "__main__":
    unittest.main()
